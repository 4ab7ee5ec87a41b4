"""JSON export for dependency graphs."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import networkx as nx

from nugetgraph.config.schema import ExportConfig
from nugetgraph.graph.analyzer import find_version_conflicts, summarize
from nugetgraph.graph.models import DependencyGraph

logger = logging.getLogger("nugetgraph.export.json")


def graph_to_payload(
    graph: DependencyGraph, config: Optional[ExportConfig] = None
) -> Dict[str, Any]:
    """JSON-serializable view of a graph, optionally with a summary block."""
    cfg = config or ExportConfig()
    payload = graph.to_dict()
    if cfg.include_summary:
        payload["summary"] = summarize(graph).to_dict()
        payload["version_conflicts"] = find_version_conflicts(graph)
    return payload


def export_json(
    graph: DependencyGraph,
    output_path: Path,
    config: Optional[ExportConfig] = None,
) -> None:
    """Export graph to JSON format.

    Args:
        graph: Graph to export.
        output_path: Output file path.
        config: Optional export configuration.
    """
    cfg = config or ExportConfig()
    logger.info("Exporting graph to JSON: %s", output_path)

    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(graph_to_payload(graph, cfg), f, indent=cfg.indent, ensure_ascii=False)

    logger.info(
        "JSON export completed: %d packages, %d dependencies",
        graph.package_count,
        graph.dependency_count,
    )


def export_node_link(
    graph: DependencyGraph,
    output_path: Path,
    config: Optional[ExportConfig] = None,
) -> None:
    """Export graph in networkx node-link JSON format.

    Args:
        graph: Graph to export.
        output_path: Output file path.
        config: Optional export configuration.
    """
    cfg = config or ExportConfig()
    logger.info("Exporting graph to node-link JSON: %s", output_path)

    output_path.parent.mkdir(parents=True, exist_ok=True)

    data = nx.readwrite.json_graph.node_link_data(graph.to_networkx(), edges="edges")

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=cfg.indent, ensure_ascii=False)

    logger.info(
        "Node-link export completed: %d packages, %d dependencies",
        graph.package_count,
        graph.dependency_count,
    )
