"""Main CLI entry point for nugetgraph.

Provides commands: analyze, conflicts, deps, path, filter
"""

import argparse
import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from nugetgraph.cli.analyze import (
    EXPORT_FORMATS,
    analyze_command,
    conflicts_command,
    deps_command,
)
from nugetgraph.cli.query import filter_command, path_command

logger = logging.getLogger("nugetgraph.cli")


def setup_logging(
    verbose: bool = False,
    console: Optional[Console] = None,
    log_file: Optional[str] = None,
) -> None:
    """Setup logging configuration with Rich integration.

    Args:
        verbose: Enable verbose logging.
        console: Rich Console instance for coordinated output (optional).
        log_file: Optional file receiving a plain-text copy of the log.
    """
    if verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        log_time_format="[%H:%M:%S]",
    )
    handlers: list = [handler]

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s [%(name)s] [%(levelname)s] %(message)s")
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=level,
        format="[%(name)s] [%(levelname)s] %(message)s",
        handlers=handlers,
        force=True,
    )


def _add_framework_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-f",
        "--framework",
        help=(
            "Target framework to analyze (case-insensitive substring, e.g. net8.0). "
            "Defaults to the first framework in the lock-file."
        ),
    )


def _add_output_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-o",
        "--output",
        help="Write the resulting graph to this file",
    )
    parser.add_argument(
        "--format",
        choices=EXPORT_FORMATS,
        default="json",
        help="Output format (default: json)",
    )


def build_parser() -> argparse.ArgumentParser:
    """Argument parser for the nugetgraph CLI."""
    parser = argparse.ArgumentParser(
        prog="nugetgraph",
        description="Nugetgraph - NuGet project.assets.json dependency analysis",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "-c",
        "--config",
        help=(
            "Optional configuration. Can be a path to a TOML/JSON file "
            "(e.g. nugetgraph.toml) or an inline TOML/JSON string. When omitted, "
            "built-in defaults are used."
        ),
    )
    parser.add_argument(
        "--log-file",
        help="Output log to file (optional), in addition to the console.",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Analyze command
    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Build the dependency graph of one or more projects",
    )
    analyze_parser.add_argument(
        "sources",
        nargs="+",
        help=(
            "project.assets.json files or directories to search. Several "
            "projects are merged into one solution graph."
        ),
    )
    analyze_parser.add_argument(
        "-n",
        "--name",
        help="Project name recorded on the graph (single project only)",
    )
    _add_framework_argument(analyze_parser)
    _add_output_arguments(analyze_parser)

    # Conflicts command
    conflicts_parser = subparsers.add_parser(
        "conflicts",
        help="List packages resolved to more than one version",
    )
    conflicts_parser.add_argument(
        "sources",
        nargs="+",
        help="project.assets.json files or directories to search",
    )
    _add_framework_argument(conflicts_parser)

    # Deps command
    deps_parser = subparsers.add_parser(
        "deps",
        help="List direct (default) or transitive dependencies",
    )
    deps_parser.add_argument("source", help="project.assets.json file or directory")
    deps_parser.add_argument(
        "--transitive",
        action="store_true",
        help="List transitive dependencies instead of direct ones",
    )
    _add_framework_argument(deps_parser)

    # Path command
    path_parser = subparsers.add_parser(
        "path",
        help="Explain how one package depends on another",
    )
    path_parser.add_argument("source", help="project.assets.json file or directory")
    path_parser.add_argument("from_package", help="Depending package name")
    path_parser.add_argument("to_package", help="Package name depended upon")
    _add_framework_argument(path_parser)

    # Filter command
    filter_parser = subparsers.add_parser(
        "filter",
        help="Keep only the packages on paths through one package",
    )
    filter_parser.add_argument("source", help="project.assets.json file or directory")
    filter_parser.add_argument("package", help="Package name to center on")
    _add_framework_argument(filter_parser)
    _add_output_arguments(filter_parser)

    return parser


def main() -> int:
    """Main CLI entry point.

    Returns:
        int: Exit code.
    """
    parser = build_parser()
    args = parser.parse_args()

    setup_logging(args.verbose, log_file=args.log_file)

    if args.command == "analyze":
        return analyze_command(args)
    elif args.command == "conflicts":
        return conflicts_command(args)
    elif args.command == "deps":
        return deps_command(args)
    elif args.command == "path":
        return path_command(args)
    elif args.command == "filter":
        return filter_command(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
