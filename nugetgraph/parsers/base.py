"""Base detector and file-access interfaces shared by lock-file parsers.

Parsers in this package never raise for expected conditions (missing file,
malformed content). The exception classes below describe *why* an input was
rejected and travel back to the caller inside result objects; callers decide
whether to log, skip, or abort.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, List, Optional, Protocol, Union

logger = logging.getLogger("nugetgraph.parsers.base")

PathLike = Union[str, Path]


# =============================================================================
# Custom Exception Hierarchy
# =============================================================================

class RecoverableError(Exception):
    """Base class for recoverable business errors.

    These errors indicate expected failure conditions that can be handled
    gracefully by skipping the current item and continuing processing.
    """
    pass


class ConfigurationError(RecoverableError):
    """Lock-file error - can skip current target and continue.

    Raised (or returned) when a project.assets.json file is malformed or
    lacks required data.
    """
    pass


class DetectionError(RecoverableError):
    """Target detection error - can skip current directory and continue.

    Raised when lock-file discovery fails for a specific location.
    """
    pass


# =============================================================================
# File access collaborator
# =============================================================================

class FileReader(Protocol):
    """Read-only filesystem capability consumed by parsers."""

    def exists(self, path: PathLike) -> bool:
        ...

    def read_text(self, path: PathLike) -> str:
        ...


class LocalFileReader:
    """FileReader backed by the local filesystem (UTF-8)."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def exists(self, path: PathLike) -> bool:
        return Path(path).is_file()

    def read_text(self, path: PathLike) -> str:
        # utf-8-sig drops the BOM that Visual Studio tooling sometimes writes
        encoding = "utf-8-sig" if self.encoding.lower() == "utf-8" else self.encoding
        return Path(path).read_text(encoding=encoding)


# =============================================================================
# Detector base
# =============================================================================

class BaseDetector(ABC):
    """Base class for target detectors.

    Detectors perform lightweight scanning to identify parsing targets
    (e.g., project.assets.json) without reading their content.
    """

    NAME: str = "base"
    ECOSYSTEM: str = "base"

    def __init__(
        self,
        workspace_root: PathLike,
        config: Optional[Any] = None,
    ) -> None:
        """Initialize detector.

        Args:
            workspace_root: Workspace root path.
            config: Optional detector configuration slice.
        """
        self.workspace_root = Path(workspace_root)
        self.config = config
        logger.debug("Detector %s (%s) initialized", self.NAME, self.ECOSYSTEM)

    @abstractmethod
    def detect(self) -> List[Path]:
        """Detect parsing targets in workspace.

        Returns:
            List[Path]: List of detected target paths.
        """
        raise NotImplementedError

    def scan_workspace(
        self,
        patterns: List[str],
        ignore_patterns: Optional[List[str]] = None,
        recursive: bool = True,
        respect_gitignore: bool = True,
    ) -> List[Path]:
        """Scan workspace for files matching patterns.

        Args:
            patterns: List of glob patterns to match.
            ignore_patterns: Optional list of extra ignore patterns.
            recursive: Whether to scan recursively.
            respect_gitignore: Merge the root .gitignore into the ignores.

        Returns:
            List[Path]: List of matching file paths.
        """
        from nugetgraph.utils.scanner import load_gitignore_patterns, scan_files

        root_ignores: List[str] = []
        if respect_gitignore:
            root_ignores.extend(load_gitignore_patterns(self.workspace_root))
        if ignore_patterns:
            root_ignores.extend(ignore_patterns)

        return list(
            scan_files(
                self.workspace_root,
                patterns,
                ignore_patterns=root_ignores,
                recursive=recursive,
            )
        )


__all__ = [
    "BaseDetector",
    "ConfigurationError",
    "DetectionError",
    "FileReader",
    "LocalFileReader",
    "PathLike",
    "RecoverableError",
]
