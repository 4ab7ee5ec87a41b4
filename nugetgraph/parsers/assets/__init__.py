"""NuGet project.assets.json parser package.

This package provides:
- Detection of project.assets.json files under a directory tree
- Decoding of lock-file content into an intermediate model
- Expansion of a target framework's direct dependencies into trees
"""

from nugetgraph.parsers.assets.config_model import (
    Library,
    PackageTarget,
    ParseResult,
    ProjectAssets,
    ProjectInfo,
)
from nugetgraph.parsers.assets.config_parser import ProjectAssetsParser
from nugetgraph.parsers.assets.detector import LockFileDetector, project_name_from_path

__all__ = [
    "Library",
    "LockFileDetector",
    "PackageTarget",
    "ParseResult",
    "ProjectAssets",
    "ProjectAssetsParser",
    "ProjectInfo",
    "project_name_from_path",
]
