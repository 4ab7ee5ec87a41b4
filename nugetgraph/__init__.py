"""nugetgraph - dependency graph analysis for NuGet lock-files.

Usage:
    # CLI
    nugetgraph analyze ./src
    nugetgraph path MyApp/obj/project.assets.json AutoMapper Microsoft.CSharp

    # Python API
    from nugetgraph import ProjectAssetsParser, build_dependency_graph, find_version_conflicts

    parser = ProjectAssetsParser()
    assets = parser.parse("obj/project.assets.json")
    graph = build_dependency_graph(parser.extract_packages(assets, "net8.0"), "MyApp")
    print(find_version_conflicts(graph))
"""

__version__ = "0.1.0"

from nugetgraph.graph import (
    Dependency,
    DependencyGraph,
    GraphSummary,
    Package,
    PackageReference,
    build_dependency_graph,
    filter_by_package,
    find_dependency_path,
    find_version_conflicts,
    get_direct_dependencies,
    get_transitive_dependencies,
    merge_dependency_graphs,
    resolve_package,
    summarize,
)
from nugetgraph.parsers.assets import (
    LockFileDetector,
    ParseResult,
    ProjectAssets,
    ProjectAssetsParser,
)
from nugetgraph.parsers.base import ConfigurationError, DetectionError, RecoverableError

__all__ = [
    "__version__",
    # Model
    "Dependency",
    "DependencyGraph",
    "GraphSummary",
    "Package",
    "PackageReference",
    "ParseResult",
    "ProjectAssets",
    # Parsing
    "LockFileDetector",
    "ProjectAssetsParser",
    # Building / analysis
    "build_dependency_graph",
    "filter_by_package",
    "find_dependency_path",
    "find_version_conflicts",
    "get_direct_dependencies",
    "get_transitive_dependencies",
    "merge_dependency_graphs",
    "resolve_package",
    "summarize",
    # Errors
    "ConfigurationError",
    "DetectionError",
    "RecoverableError",
]
