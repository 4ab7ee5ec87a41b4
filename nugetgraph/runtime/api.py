"""Library-facing helpers tying the parser, builder and analyzer together.

The core operations are re-exported here under one roof; the ``analyze_*``
helpers cover the usual end-to-end flows (one lock-file, several lock-files
merged into a solution view, or every lock-file under a directory).
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from nugetgraph.config.schema import GraphBuildConfig
from nugetgraph.graph.analyzer import (
    filter_by_package,
    find_dependency_path,
    find_version_conflicts,
    get_direct_dependencies,
    get_transitive_dependencies,
)
from nugetgraph.graph.builder import build_dependency_graph, merge_dependency_graphs
from nugetgraph.graph.models import DependencyGraph, PackageReference
from nugetgraph.parsers.assets.config_model import ProjectAssets
from nugetgraph.parsers.assets.config_parser import ProjectAssetsParser
from nugetgraph.parsers.assets.detector import LockFileDetector, project_name_from_path
from nugetgraph.parsers.base import FileReader, PathLike

logger = logging.getLogger("nugetgraph.runtime.api")


@dataclass
class AnalyzeRequest:
    """One lock-file to analyze as part of a multi-project request."""

    content: str
    project_name: str = ""
    target_framework: Optional[str] = None


def _parser(
    config: Optional[GraphBuildConfig], file_reader: Optional[FileReader] = None
) -> ProjectAssetsParser:
    cfg = config or GraphBuildConfig.default()
    return ProjectAssetsParser(file_reader=file_reader, config=cfg.parser)


def parse_from_text(
    content: str, config: Optional[GraphBuildConfig] = None
) -> Optional[ProjectAssets]:
    """Decode lock-file content; None when empty or malformed."""
    return _parser(config).parse_from_text(content)


def extract_packages(
    assets: ProjectAssets,
    target_framework: Optional[str] = None,
    config: Optional[GraphBuildConfig] = None,
) -> List[PackageReference]:
    """Expand the direct dependencies of one framework into trees.

    ``target_framework`` defaults to the configured parser framework.
    """
    cfg = config or GraphBuildConfig.default()
    return _parser(cfg).extract_packages(assets, target_framework or cfg.parser.framework)


def build_from_assets(
    assets: ProjectAssets,
    project_name: str = "",
    target_framework: Optional[str] = None,
    config: Optional[GraphBuildConfig] = None,
) -> DependencyGraph:
    """Extract trees from decoded assets and flatten them into a graph.

    The graph records the framework moniker that was actually analyzed and,
    when ``project_name`` is empty, the project name stored in the
    lock-file's restore section.
    """
    cfg = config or GraphBuildConfig.default()
    parser = _parser(cfg)
    framework_filter = target_framework or cfg.parser.framework

    roots = parser.extract_packages(assets, framework_filter)
    resolved = parser.resolve_framework(assets, framework_filter)
    return build_dependency_graph(
        roots,
        project_name=project_name or assets.project_name or "",
        target_framework=resolved or framework_filter or "",
    )


def analyze_text(
    content: str,
    project_name: str = "",
    target_framework: Optional[str] = None,
    config: Optional[GraphBuildConfig] = None,
) -> Optional[DependencyGraph]:
    """Parse lock-file content and build its graph.

    Returns:
        The graph, or None when the content cannot be decoded (the reason is
        logged as a warning).
    """
    result = _parser(config).try_parse_from_text(content)
    if result.assets is None:
        logger.warning("Invalid project.assets.json content: %s", result.error)
        return None
    return build_from_assets(result.assets, project_name, target_framework, config)


def analyze_file(
    path: PathLike,
    project_name: str = "",
    target_framework: Optional[str] = None,
    config: Optional[GraphBuildConfig] = None,
    file_reader: Optional[FileReader] = None,
) -> Optional[DependencyGraph]:
    """Parse one lock-file and build its graph.

    Returns:
        The graph, or None when the file is missing, unreadable or malformed.
    """
    assets = _parser(config, file_reader).parse(path)
    if assets is None:
        logger.warning("Could not parse lock-file %s", path)
        return None
    name = project_name or assets.project_name or project_name_from_path(Path(path))
    return build_from_assets(assets, name, target_framework, config)


def analyze_many(
    requests: Iterable[AnalyzeRequest],
    config: Optional[GraphBuildConfig] = None,
) -> DependencyGraph:
    """Build one graph per request and merge them.

    Requests whose content cannot be decoded are skipped.
    """
    graphs: List[DependencyGraph] = []
    for request in requests:
        graph = analyze_text(
            request.content,
            project_name=request.project_name,
            target_framework=request.target_framework,
            config=config,
        )
        if graph is not None:
            graphs.append(graph)
    return merge_dependency_graphs(graphs)


def discover_lock_files(
    root: PathLike, config: Optional[GraphBuildConfig] = None
) -> List[Path]:
    """Lock-files under ``root``, skipping build output folders."""
    cfg = config or GraphBuildConfig.default()
    return LockFileDetector(root, config=cfg.detector).detect()


def analyze_paths(
    sources: Sequence[PathLike],
    target_framework: Optional[str] = None,
    project_name: str = "",
    config: Optional[GraphBuildConfig] = None,
) -> Optional[DependencyGraph]:
    """Analyze lock-files and/or directories containing lock-files.

    Directories are expanded with the lock-file detector. A single
    resulting graph is returned as-is; several graphs are merged.

    Returns:
        The graph, or None when no lock-file could be analyzed.
    """
    files: List[Path] = []
    for source in sources:
        path = Path(source)
        if path.is_dir():
            files.extend(discover_lock_files(path, config))
        else:
            files.append(path)

    graphs: List[DependencyGraph] = []
    for lock_file in files:
        # A caller-supplied name only makes sense for a single project
        name = project_name if len(files) == 1 else ""
        graph = analyze_file(lock_file, name, target_framework, config)
        if graph is not None:
            graphs.append(graph)

    if not graphs:
        return None
    if len(graphs) == 1:
        return graphs[0]
    return merge_dependency_graphs(graphs)


async def analyze_file_async(
    path: PathLike,
    project_name: str = "",
    target_framework: Optional[str] = None,
    config: Optional[GraphBuildConfig] = None,
) -> Optional[DependencyGraph]:
    """``analyze_file`` run in a worker thread; no internal concurrency."""
    return await asyncio.to_thread(
        analyze_file, path, project_name, target_framework, config
    )


async def analyze_paths_async(
    sources: Sequence[PathLike],
    target_framework: Optional[str] = None,
    project_name: str = "",
    config: Optional[GraphBuildConfig] = None,
) -> Optional[DependencyGraph]:
    """``analyze_paths`` run in a worker thread; no internal concurrency."""
    return await asyncio.to_thread(
        analyze_paths, sources, target_framework, project_name, config
    )


__all__ = [
    "AnalyzeRequest",
    "analyze_file",
    "analyze_file_async",
    "analyze_many",
    "analyze_paths",
    "analyze_paths_async",
    "analyze_text",
    "build_dependency_graph",
    "build_from_assets",
    "discover_lock_files",
    "extract_packages",
    "filter_by_package",
    "find_dependency_path",
    "find_version_conflicts",
    "get_direct_dependencies",
    "get_transitive_dependencies",
    "merge_dependency_graphs",
    "parse_from_text",
]
