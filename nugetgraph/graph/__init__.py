"""Public graph API surface."""

from nugetgraph.graph.analyzer import (
    GraphSummary,
    filter_by_package,
    find_dependency_path,
    find_version_conflicts,
    get_direct_dependencies,
    get_transitive_dependencies,
    resolve_package,
    summarize,
)
from nugetgraph.graph.builder import (
    MERGED_PROJECT_NAME,
    MERGED_TARGET_FRAMEWORK,
    build_dependency_graph,
    merge_dependency_graphs,
)
from nugetgraph.graph.models import (
    DEPENDENCY_EDGE_TYPE,
    Dependency,
    DependencyGraph,
    Package,
    PackageReference,
    make_package_id,
)

__all__ = [
    "DEPENDENCY_EDGE_TYPE",
    "Dependency",
    "DependencyGraph",
    "GraphSummary",
    "MERGED_PROJECT_NAME",
    "MERGED_TARGET_FRAMEWORK",
    "Package",
    "PackageReference",
    "build_dependency_graph",
    "filter_by_package",
    "find_dependency_path",
    "find_version_conflicts",
    "get_direct_dependencies",
    "get_transitive_dependencies",
    "make_package_id",
    "merge_dependency_graphs",
    "resolve_package",
    "summarize",
]
