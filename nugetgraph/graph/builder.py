"""Flatten PackageReference trees into a DependencyGraph.

Trees coming out of the parser may repeat the same package many times (the
parser's cycle guard is per branch). The builder keeps its own build-scoped
visited set, independent from the parser's guard: every unique id is
inserted once and its children are expanded only on first visit, while
later encounters still contribute an edge to the existing node.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, List, Set, Tuple

from .models import (
    DEPENDENCY_EDGE_TYPE,
    Dependency,
    DependencyGraph,
    Package,
    PackageReference,
)

logger = logging.getLogger("nugetgraph.graph.builder")

MERGED_PROJECT_NAME = "Merged Solution"
MERGED_TARGET_FRAMEWORK = "Multiple"


class _GraphAccumulator:
    """Ordered node map plus idempotent edge list."""

    def __init__(self) -> None:
        self.packages: Dict[str, Package] = {}
        self.dependencies: List[Dependency] = []
        self._edge_keys: Set[Tuple[str, str]] = set()

    def add_package(self, package: Package) -> None:
        # First insertion wins; level and directness are never overwritten.
        if package.id not in self.packages:
            self.packages[package.id] = package

    def add_dependency(self, dependency: Dependency) -> None:
        if dependency.key in self._edge_keys:
            return
        self._edge_keys.add(dependency.key)
        self.dependencies.append(dependency)

    def to_graph(self, project_name: str, target_framework: str) -> DependencyGraph:
        return DependencyGraph(
            project_name=project_name,
            target_framework=target_framework,
            packages=self.packages,
            dependencies=self.dependencies,
        )


def _package_from_reference(ref: PackageReference, level: int, is_direct: bool) -> Package:
    return Package(
        name=ref.name,
        version=ref.version,
        type=ref.type,
        level=level,
        is_direct_dependency=is_direct,
    )


def build_dependency_graph(
    roots: Iterable[PackageReference],
    project_name: str = "",
    target_framework: str = "",
) -> DependencyGraph:
    """Build a graph from package-reference trees.

    Traversal is depth-first pre-order from each root. Roots enter at level
    0 as direct dependencies; a child enters at its parent's level + 1 as a
    transitive dependency, at the moment it is first seen as a child. A
    package's level therefore reflects first discovery, not the shortest
    path.

    Args:
        roots: Root package references, in declaration order.
        project_name: Name recorded on the graph.
        target_framework: Framework moniker recorded on the graph.

    Returns:
        A new DependencyGraph.
    """
    acc = _GraphAccumulator()
    visited: Set[str] = set()

    for root in roots:
        if root.id in visited:
            continue
        visited.add(root.id)
        acc.add_package(_package_from_reference(root, 0, True))

        # Explicit stack of (node, level, remaining children) frames; it
        # reproduces the ordering of a recursive pre-order walk.
        stack: List[Tuple[PackageReference, int, Iterator[PackageReference]]] = [
            (root, 0, iter(root.dependencies))
        ]
        while stack:
            parent, level, children = stack[-1]
            child = next(children, None)
            if child is None:
                stack.pop()
                continue

            acc.add_package(_package_from_reference(child, level + 1, False))
            acc.add_dependency(
                Dependency(
                    from_package_id=parent.id,
                    to_package_id=child.id,
                    type=DEPENDENCY_EDGE_TYPE,
                )
            )

            if child.id not in visited:
                visited.add(child.id)
                stack.append((child, level + 1, iter(child.dependencies)))

    graph = acc.to_graph(project_name, target_framework)
    logger.debug(
        "Built graph %r (%s): %d packages, %d dependencies",
        project_name,
        target_framework,
        graph.package_count,
        graph.dependency_count,
    )
    return graph


def merge_dependency_graphs(graphs: Iterable[DependencyGraph]) -> DependencyGraph:
    """Merge several graphs into one solution-wide graph.

    Packages are unioned by id with the first-seen copy winning. Different
    versions of one package stay distinct nodes so that version conflicts
    remain visible. Edges are unioned with duplicate (from, to) pairs
    suppressed.

    Args:
        graphs: Graphs to merge, in priority order.

    Returns:
        A new DependencyGraph named "Merged Solution" / "Multiple".
    """
    acc = _GraphAccumulator()
    count = 0

    for graph in graphs:
        count += 1
        for package in graph.packages.values():
            acc.add_package(package)
        for dependency in graph.dependencies:
            acc.add_dependency(dependency)

    merged = acc.to_graph(MERGED_PROJECT_NAME, MERGED_TARGET_FRAMEWORK)
    logger.debug(
        "Merged %d graph(s): %d packages, %d dependencies",
        count,
        merged.package_count,
        merged.dependency_count,
    )
    return merged


__all__ = [
    "MERGED_PROJECT_NAME",
    "MERGED_TARGET_FRAMEWORK",
    "build_dependency_graph",
    "merge_dependency_graphs",
]
