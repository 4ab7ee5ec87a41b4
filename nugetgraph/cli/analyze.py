"""Analyze, conflicts and deps command implementations."""

import logging
from pathlib import Path
from typing import Optional, Tuple

from rich.console import Console

from nugetgraph.config.schema import GraphBuildConfig
from nugetgraph.export.dot import export_dot
from nugetgraph.export.json import export_json, export_node_link
from nugetgraph.graph.analyzer import (
    find_version_conflicts,
    get_direct_dependencies,
    get_transitive_dependencies,
)
from nugetgraph.graph.models import DependencyGraph
from nugetgraph.parsers.base import RecoverableError
from nugetgraph.runtime.api import analyze_paths
from nugetgraph.runtime.config_loader import load_graph_build_config
from nugetgraph.runtime.display import GraphDisplay

logger = logging.getLogger("nugetgraph.cli.analyze")

# Errors surfaced at the CLI boundary as a log line and exit code 1.
RECOVERABLE_CLI_ERRORS = (
    OSError,
    RecoverableError,
    ValueError,
)

EXPORT_FORMATS = ("json", "node-link", "dot")


def load_config(args) -> GraphBuildConfig:
    """Configuration from ``--config`` or built-in defaults."""
    return load_graph_build_config(getattr(args, "config", None))


def load_graph(args, config: GraphBuildConfig) -> Optional[DependencyGraph]:
    """Build the graph described by the command's source arguments."""
    sources = getattr(args, "sources", None) or [args.source]
    graph = analyze_paths(
        sources,
        target_framework=getattr(args, "framework", None),
        project_name=getattr(args, "name", None) or "",
        config=config,
    )
    if graph is None:
        logger.error("No analyzable project.assets.json found in: %s", ", ".join(sources))
    return graph


def write_output(
    graph: DependencyGraph,
    output: Optional[str],
    fmt: str,
    config: GraphBuildConfig,
) -> None:
    """Export ``graph`` when an output path was requested."""
    if not output:
        return
    output_path = Path(output).expanduser()
    if fmt == "dot":
        export_dot(graph, output_path)
    elif fmt == "node-link":
        export_node_link(graph, output_path, config.export)
    else:
        export_json(graph, output_path, config.export)


def _prepare(args) -> Tuple[GraphBuildConfig, Optional[DependencyGraph]]:
    config = load_config(args)
    return config, load_graph(args, config)


def analyze_command(args, console: Optional[Console] = None) -> int:
    """Execute analyze command.

    Args:
        args: Parsed command-line arguments.
        console: Optional Rich console for output.

    Returns:
        int: Exit code.
    """
    try:
        config, graph = _prepare(args)
        if graph is None:
            return 1

        GraphDisplay(console).show_summary(graph)
        write_output(graph, getattr(args, "output", None), getattr(args, "format", "json"), config)
        return 0
    except RECOVERABLE_CLI_ERRORS as exc:
        logger.error("Analysis failed: %s", exc)
        return 1


def conflicts_command(args, console: Optional[Console] = None) -> int:
    """Execute conflicts command.

    Args:
        args: Parsed command-line arguments.
        console: Optional Rich console for output.

    Returns:
        int: Exit code.
    """
    try:
        _, graph = _prepare(args)
        if graph is None:
            return 1

        GraphDisplay(console).show_conflicts(find_version_conflicts(graph))
        return 0
    except RECOVERABLE_CLI_ERRORS as exc:
        logger.error("Conflict detection failed: %s", exc)
        return 1


def deps_command(args, console: Optional[Console] = None) -> int:
    """Execute deps command (direct by default, transitive on request).

    Args:
        args: Parsed command-line arguments.
        console: Optional Rich console for output.

    Returns:
        int: Exit code.
    """
    try:
        _, graph = _prepare(args)
        if graph is None:
            return 1

        display = GraphDisplay(console)
        if getattr(args, "transitive", False):
            display.show_packages("Transitive dependencies", get_transitive_dependencies(graph))
        else:
            display.show_packages("Direct dependencies", get_direct_dependencies(graph))
        return 0
    except RECOVERABLE_CLI_ERRORS as exc:
        logger.error("Listing dependencies failed: %s", exc)
        return 1
