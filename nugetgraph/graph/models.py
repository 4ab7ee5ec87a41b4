"""Package graph data model.

Trees of PackageReference are the parser's output; Package / Dependency /
DependencyGraph are the flattened, de-duplicated graph built from them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

import networkx as nx

DEPENDENCY_EDGE_TYPE = "dependency"


def make_package_id(name: str, version: str) -> str:
    """Canonical package id, "Name/Version"."""
    return f"{name}/{version}"


@dataclass
class PackageReference:
    """Node of a dependency tree produced by lock-file expansion.

    Children are the package's declared dependencies, in lock-file order.
    """

    name: str
    version: str
    type: str = "package"
    dependencies: List["PackageReference"] = field(default_factory=list)

    @property
    def id(self) -> str:
        return make_package_id(self.name, self.version)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "version": self.version,
            "type": self.type,
            "dependencies": [d.to_dict() for d in self.dependencies],
        }


@dataclass(frozen=True)
class Package:
    """Graph node, one per unique package id."""

    name: str
    version: str
    type: str = "package"
    level: int = 0
    is_direct_dependency: bool = False

    @property
    def id(self) -> str:
        return make_package_id(self.name, self.version)

    def to_reference(self) -> PackageReference:
        """Project to a childless PackageReference (name, version, type)."""
        return PackageReference(name=self.name, version=self.version, type=self.type)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "version": self.version,
            "type": self.type,
            "level": self.level,
            "is_direct_dependency": self.is_direct_dependency,
        }


@dataclass(frozen=True)
class Dependency:
    """Directed edge: from_package_id depends on to_package_id."""

    from_package_id: str
    to_package_id: str
    type: str = DEPENDENCY_EDGE_TYPE

    @property
    def key(self) -> tuple:
        return (self.from_package_id, self.to_package_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "from": self.from_package_id,
            "to": self.to_package_id,
            "type": self.type,
        }


@dataclass
class DependencyGraph:
    """Package graph for one project (or a merged solution).

    Invariants:
        - ``packages`` is keyed by ``Package.id`` and preserves insertion order.
        - every Dependency references existing package keys.
        - no two dependencies share the same (from, to) pair.

    Graphs are treated as immutable once built; analyzer operations return
    new instances.
    """

    project_name: str = ""
    target_framework: str = ""
    packages: Dict[str, Package] = field(default_factory=dict)
    dependencies: List[Dependency] = field(default_factory=list)

    @property
    def package_count(self) -> int:
        return len(self.packages)

    @property
    def dependency_count(self) -> int:
        return len(self.dependencies)

    def edge_keys(self) -> List[tuple]:
        return [d.key for d in self.dependencies]

    def find_by_name(self, name: str) -> List[Package]:
        """All packages whose name equals ``name`` (case-insensitive)."""
        wanted = name.casefold()
        return [p for p in self.packages.values() if p.name.casefold() == wanted]

    def to_networkx(self) -> nx.DiGraph:
        """Project the graph onto a networkx DiGraph.

        Nodes and edges are added in insertion order, so successor and
        predecessor iteration follows the order of ``dependencies``.
        """
        graph = nx.DiGraph(
            project_name=self.project_name,
            target_framework=self.target_framework,
        )
        for package_id, package in self.packages.items():
            graph.add_node(
                package_id,
                name=package.name,
                version=package.version,
                type=package.type,
                level=package.level,
                is_direct_dependency=package.is_direct_dependency,
            )
        for dep in self.dependencies:
            graph.add_edge(dep.from_package_id, dep.to_package_id, type=dep.type)
        return graph

    def to_dict(self) -> Dict[str, Any]:
        return {
            "project_name": self.project_name,
            "target_framework": self.target_framework,
            "packages": {pid: p.to_dict() for pid, p in self.packages.items()},
            "dependencies": [d.to_dict() for d in self.dependencies],
        }


__all__ = [
    "DEPENDENCY_EDGE_TYPE",
    "Dependency",
    "DependencyGraph",
    "Package",
    "PackageReference",
    "make_package_id",
]
