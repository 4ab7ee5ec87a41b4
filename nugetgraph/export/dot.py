"""DOT export for dependency graphs."""

import logging
from pathlib import Path

import networkx as nx
from networkx.drawing.nx_pydot import write_dot

from nugetgraph.graph.models import DependencyGraph

logger = logging.getLogger("nugetgraph.export.dot")


def to_dot_graph(graph: DependencyGraph) -> nx.DiGraph:
    """networkx graph carrying DOT label/style attributes.

    Node ids contain "/" and "." so every attribute is quoted; direct
    dependencies are drawn as boxes.
    """
    dot = nx.DiGraph(name=f'"{graph.project_name or "dependencies"}"')
    for package_id, package in graph.packages.items():
        dot.add_node(
            f'"{package_id}"',
            label=f'"{package.name}\\n{package.version}"',
            shape="box" if package.is_direct_dependency else "ellipse",
        )
    for dep in graph.dependencies:
        dot.add_edge(f'"{dep.from_package_id}"', f'"{dep.to_package_id}"')
    return dot


def export_dot(graph: DependencyGraph, output_path: Path) -> None:
    """Export graph to DOT format.

    Args:
        graph: Graph to export.
        output_path: Output file path.
    """
    logger.info("Exporting graph to DOT: %s", output_path)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    write_dot(to_dot_graph(graph), str(output_path))

    logger.info(
        "DOT export completed: %d packages, %d dependencies",
        graph.package_count,
        graph.dependency_count,
    )
