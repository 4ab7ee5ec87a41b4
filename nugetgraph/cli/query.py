"""Path and filter command implementations."""

import logging
from typing import Optional

from rich.console import Console

from nugetgraph.cli.analyze import (
    RECOVERABLE_CLI_ERRORS,
    load_config,
    load_graph,
    write_output,
)
from nugetgraph.graph.analyzer import filter_by_package, find_dependency_path
from nugetgraph.runtime.display import GraphDisplay

logger = logging.getLogger("nugetgraph.cli.query")


def path_command(args, console: Optional[Console] = None) -> int:
    """Execute path command.

    A missing path is a valid answer, not a failure: the command prints a
    notice and exits with 0.

    Args:
        args: Parsed command-line arguments.
        console: Optional Rich console for output.

    Returns:
        int: Exit code.
    """
    try:
        config = load_config(args)
        graph = load_graph(args, config)
        if graph is None:
            return 1

        path = find_dependency_path(graph, args.from_package, args.to_package)
        GraphDisplay(console).show_path(args.from_package, args.to_package, path)
        return 0
    except RECOVERABLE_CLI_ERRORS as exc:
        logger.error("Path search failed: %s", exc)
        return 1


def filter_command(args, console: Optional[Console] = None) -> int:
    """Execute filter command.

    Args:
        args: Parsed command-line arguments.
        console: Optional Rich console for output.

    Returns:
        int: Exit code.
    """
    try:
        config = load_config(args)
        graph = load_graph(args, config)
        if graph is None:
            return 1

        filtered = filter_by_package(graph, args.package)
        if not filtered.packages:
            logger.warning("Package %s not found in %s", args.package, graph.project_name or "graph")

        GraphDisplay(console).show_summary(filtered)
        write_output(filtered, getattr(args, "output", None), getattr(args, "format", "json"), config)
        return 0
    except RECOVERABLE_CLI_ERRORS as exc:
        logger.error("Filtering failed: %s", exc)
        return 1
