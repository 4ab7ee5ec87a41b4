"""Read-only analyses over a DependencyGraph.

Every function here is pure: the input graph is never modified and derived
graphs are new instances.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import networkx as nx

from .models import DependencyGraph, Package, PackageReference

logger = logging.getLogger("nugetgraph.graph.analyzer")


def resolve_package(graph: DependencyGraph, name: str) -> Optional[Package]:
    """Resolve a bare package name to one node of the graph.

    Matching is exact and case-insensitive. When several versions of the
    package coexist, the first match in graph insertion order wins.

    Returns:
        The chosen Package, or None when no package has that name.
    """
    candidates = graph.find_by_name(name)
    if not candidates:
        return None
    if len(candidates) > 1:
        logger.debug(
            "Name %r is ambiguous (%s); choosing the first inserted",
            name,
            ", ".join(p.version for p in candidates),
        )
    return candidates[0]


def find_dependency_path(
    graph: DependencyGraph,
    from_name: str,
    to_name: str,
) -> List[str]:
    """Find a dependency chain between two packages.

    Depth-first search along outgoing edges (in edge insertion order) with a
    visited set, so it terminates on cyclic graphs. The first path found is
    returned; it is not necessarily the shortest.

    Args:
        graph: Graph to search.
        from_name: Name of the depending package.
        to_name: Name of the package depended upon.

    Returns:
        Package ids from source to target inclusive; empty when either name
        is unknown or no path exists.
    """
    source = resolve_package(graph, from_name)
    target = resolve_package(graph, to_name)
    if source is None or target is None:
        return []

    if source.id == target.id:
        return [source.id]

    nx_graph = graph.to_networkx()
    visited = {source.id}
    path = [source.id]
    stack = [iter(nx_graph.successors(source.id))]

    while stack:
        nxt = next(stack[-1], None)
        if nxt is None:
            stack.pop()
            path.pop()
            continue
        if nxt == target.id:
            return path + [nxt]
        if nxt in visited:
            continue
        visited.add(nxt)
        path.append(nxt)
        stack.append(iter(nx_graph.successors(nxt)))

    return []


def find_version_conflicts(graph: DependencyGraph) -> Dict[str, List[str]]:
    """Packages present in more than one version.

    Versions are sorted by plain string order, not semantic-version order:
    "10.0.0" sorts before "9.0.0".

    Returns:
        Mapping of package name to its distinct versions.
    """
    versions_by_name: Dict[str, List[str]] = {}
    for package in graph.packages.values():
        versions = versions_by_name.setdefault(package.name, [])
        if package.version not in versions:
            versions.append(package.version)

    return {
        name: sorted(versions)
        for name, versions in versions_by_name.items()
        if len(versions) > 1
    }


def get_direct_dependencies(graph: DependencyGraph) -> List[PackageReference]:
    """Packages declared directly by the project."""
    return [p.to_reference() for p in graph.packages.values() if p.is_direct_dependency]


def get_transitive_dependencies(graph: DependencyGraph) -> List[PackageReference]:
    """Packages pulled in through other packages."""
    return [
        p.to_reference() for p in graph.packages.values() if not p.is_direct_dependency
    ]


def filter_by_package(graph: DependencyGraph, package_name: str) -> DependencyGraph:
    """Subgraph of every path running through one package.

    Ancestors are collected breadth-first over incoming edges and
    descendants breadth-first over outgoing edges. The result keeps the
    target, its ancestors and its descendants, plus every edge of the input
    graph whose endpoints are both kept.

    Args:
        graph: Graph to filter.
        package_name: Name of the package to center on.

    Returns:
        A new graph; empty (but carrying the project name and framework)
        when the package is unknown.
    """
    target = resolve_package(graph, package_name)
    if target is None:
        return DependencyGraph(
            project_name=graph.project_name,
            target_framework=graph.target_framework,
        )

    nx_graph = graph.to_networkx()
    ancestors = set(nx.bfs_tree(nx_graph, target.id, reverse=True).nodes)
    descendants = set(nx.bfs_tree(nx_graph, target.id).nodes)
    relevant = {target.id} | ancestors | descendants

    logger.debug(
        "Filter on %s: %d ancestor(s), %d descendant(s)",
        target.id,
        len(ancestors - {target.id}),
        len(descendants - {target.id}),
    )

    return DependencyGraph(
        project_name=graph.project_name,
        target_framework=graph.target_framework,
        packages={pid: p for pid, p in graph.packages.items() if pid in relevant},
        dependencies=[
            d
            for d in graph.dependencies
            if d.from_package_id in relevant and d.to_package_id in relevant
        ],
    )


@dataclass
class GraphSummary:
    """Headline numbers for a graph."""

    total_packages: int = 0
    total_dependencies: int = 0
    direct_count: int = 0
    transitive_count: int = 0
    conflict_count: int = 0
    max_level: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_packages": self.total_packages,
            "total_dependencies": self.total_dependencies,
            "direct_count": self.direct_count,
            "transitive_count": self.transitive_count,
            "conflict_count": self.conflict_count,
            "max_level": self.max_level,
        }


def summarize(graph: DependencyGraph) -> GraphSummary:
    """Compute a GraphSummary."""
    direct = sum(1 for p in graph.packages.values() if p.is_direct_dependency)
    return GraphSummary(
        total_packages=graph.package_count,
        total_dependencies=graph.dependency_count,
        direct_count=direct,
        transitive_count=graph.package_count - direct,
        conflict_count=len(find_version_conflicts(graph)),
        max_level=max((p.level for p in graph.packages.values()), default=0),
    )


__all__ = [
    "GraphSummary",
    "filter_by_package",
    "find_dependency_path",
    "find_version_conflicts",
    "get_direct_dependencies",
    "get_transitive_dependencies",
    "resolve_package",
    "summarize",
]
