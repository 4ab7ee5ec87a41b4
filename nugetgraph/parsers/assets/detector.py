"""Detector scanning a directory tree for project.assets.json files."""

import logging
from pathlib import Path
from typing import List, Optional

from nugetgraph.config.schema import DetectorConfig
from nugetgraph.parsers.base import BaseDetector, DetectionError, PathLike

logger = logging.getLogger("nugetgraph.parsers.assets.detector")


class LockFileDetector(BaseDetector):
    """Detector for NuGet lock-files.

    Restore writes project.assets.json under each project's ``obj`` folder;
    build output folders (``bin``) and IDE folders are skipped.
    """

    NAME = "nuget_lock_file"
    ECOSYSTEM = "nuget"

    def __init__(
        self,
        workspace_root: PathLike,
        config: Optional[DetectorConfig] = None,
    ) -> None:
        super().__init__(workspace_root, config=config or DetectorConfig())

    def detect(self) -> List[Path]:
        """Detect lock-files under the workspace.

        Returns:
            Sorted list of lock-file paths.

        Raises:
            DetectionError: If the workspace root is not a directory.
        """
        if not self.workspace_root.is_dir():
            raise DetectionError(f"Not a directory: {self.workspace_root}")

        cfg: DetectorConfig = self.config
        ignore_patterns = [f"{d}/" for d in cfg.ignore_dirs]
        ignore_patterns.extend(cfg.extra_ignore_patterns)

        detected = self.scan_workspace(
            patterns=[cfg.lock_file_name],
            ignore_patterns=ignore_patterns,
            recursive=True,
            respect_gitignore=cfg.respect_gitignore,
        )

        for path in detected:
            logger.debug("Detected lock-file: %s", path)

        logger.info(
            "LockFileDetector found %d %s file(s) under %s",
            len(detected),
            cfg.lock_file_name,
            self.workspace_root,
        )
        return detected


def project_name_from_path(lock_file: Path) -> str:
    """Best-effort project name for a lock-file path.

    ``<Project>/obj/project.assets.json`` -> ``<Project>``; otherwise the
    name of the containing directory.
    """
    parent = lock_file.parent
    if parent.name.casefold() == "obj" and parent.parent.name:
        return parent.parent.name
    return parent.name or lock_file.stem


__all__ = ["LockFileDetector", "project_name_from_path"]
