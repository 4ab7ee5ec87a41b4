"""Intermediate model of a decoded project.assets.json file.

The lock-file is decoded in a single step into these dataclasses. Package
maps are plain ordered dicts keyed by package id ("Name/Version"), so the
order of the source document is preserved for every later lookup.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from nugetgraph.parsers.base import ConfigurationError


def split_package_id(package_id: str) -> Tuple[str, str]:
    """Split "Name/Version" into its two halves.

    A key without a slash is returned as (key, "").
    """
    name, sep, version = package_id.partition("/")
    if not sep:
        return package_id, ""
    return name, version


@dataclass
class PackageTarget:
    """Resolved package entry under ``targets[<framework>]``."""

    type: str = "package"
    # dependency name -> version range, in document order
    dependencies: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> "PackageTarget":
        if not isinstance(data, dict):
            return cls()
        deps = data.get("dependencies") or {}
        if not isinstance(deps, dict):
            deps = {}
        return cls(
            type=str(data.get("type") or "package"),
            dependencies={str(k): str(v) for k, v in deps.items()},
        )


@dataclass
class Library:
    """Entry under ``libraries``; provenance only."""

    type: str = ""
    sha512: str = ""
    path: str = ""
    files: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "Library":
        if not isinstance(data, dict):
            return cls()
        files = data.get("files") or []
        if not isinstance(files, list):
            files = []
        return cls(
            type=str(data.get("type") or ""),
            sha512=str(data.get("sha512") or ""),
            path=str(data.get("path") or ""),
            files=[str(f) for f in files if f],
        )


@dataclass
class ProjectInfo:
    """Subset of the ``project`` section used for naming graphs."""

    version: str = ""
    project_name: Optional[str] = None
    project_unique_name: Optional[str] = None
    project_path: Optional[str] = None
    frameworks: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> Optional["ProjectInfo"]:
        if not isinstance(data, dict):
            return None
        restore = data.get("restore") or {}
        if not isinstance(restore, dict):
            restore = {}
        frameworks = data.get("frameworks") or {}
        return cls(
            version=str(data.get("version") or ""),
            project_name=restore.get("projectName"),
            project_unique_name=restore.get("projectUniqueName"),
            project_path=restore.get("projectPath"),
            frameworks=list(frameworks) if isinstance(frameworks, dict) else [],
        )


@dataclass
class ProjectAssets:
    """Decoded lock-file.

    Attributes:
        version: Lock-file format version (required integer).
        targets: framework moniker -> package id -> PackageTarget.
        libraries: package id -> Library.
        project: Optional project section.
        project_file_dependency_groups: framework moniker -> list of
            direct dependency strings ("Name >= Version").
    """

    version: int
    targets: Dict[str, Dict[str, PackageTarget]] = field(default_factory=dict)
    libraries: Dict[str, Library] = field(default_factory=dict)
    project: Optional[ProjectInfo] = None
    project_file_dependency_groups: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def frameworks(self) -> List[str]:
        """Framework monikers in document order."""
        return list(self.targets)

    @property
    def project_name(self) -> Optional[str]:
        return self.project.project_name if self.project else None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProjectAssets":
        """Build ProjectAssets from an already-decoded JSON mapping.

        Raises:
            ConfigurationError: If the required integer "version" is missing.
        """
        version = data.get("version")
        # bool is an int subclass; a JSON true is not a version
        if isinstance(version, bool) or not isinstance(version, int):
            raise ConfigurationError(
                f"Required integer field 'version' is missing or invalid: {version!r}"
            )

        targets: Dict[str, Dict[str, PackageTarget]] = {}
        raw_targets = data.get("targets")
        if isinstance(raw_targets, dict):
            for framework, packages in raw_targets.items():
                if not isinstance(packages, dict):
                    packages = {}
                targets[str(framework)] = {
                    str(pkg_id): PackageTarget.from_dict(entry)
                    for pkg_id, entry in packages.items()
                }

        libraries: Dict[str, Library] = {}
        raw_libraries = data.get("libraries")
        if isinstance(raw_libraries, dict):
            libraries = {
                str(pkg_id): Library.from_dict(entry)
                for pkg_id, entry in raw_libraries.items()
            }

        groups: Dict[str, List[str]] = {}
        raw_groups = data.get("projectFileDependencyGroups")
        if isinstance(raw_groups, dict):
            for framework, entries in raw_groups.items():
                if isinstance(entries, list):
                    groups[str(framework)] = [str(e) for e in entries if isinstance(e, str)]

        return cls(
            version=version,
            targets=targets,
            libraries=libraries,
            project=ProjectInfo.from_dict(data.get("project")),
            project_file_dependency_groups=groups,
        )


@dataclass
class ParseResult:
    """Outcome of decoding lock-file content.

    Exactly one of ``assets`` and ``error`` is set.
    """

    assets: Optional[ProjectAssets] = None
    error: Optional[ConfigurationError] = None

    @property
    def ok(self) -> bool:
        return self.assets is not None


__all__ = [
    "Library",
    "PackageTarget",
    "ParseResult",
    "ProjectAssets",
    "ProjectInfo",
    "split_package_id",
]
