"""File scanner using scandir and generator pattern."""

import fnmatch
import logging
import os
from pathlib import Path
from typing import Generator, List, Optional

logger = logging.getLogger("nugetgraph.utils.scanner")

ALWAYS_IGNORED = [".git", ".svn", ".hg", "__pycache__"]


def load_gitignore_patterns(root_path: Path) -> List[str]:
    """Load patterns from .gitignore in the root path."""
    gitignore = root_path / ".gitignore"
    patterns = []
    if gitignore.exists():
        try:
            with open(gitignore, "r", encoding="utf-8") as f:
                for line in f:
                    line = line.strip()
                    if line and not line.startswith("#") and not line.startswith("!"):
                        patterns.append(line)
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("Failed to read .gitignore at %s: %s", gitignore, exc)
    return patterns


def _is_ignored(path: Path, root_path: Path, ignore_patterns: List[str], is_dir: bool) -> bool:
    """Check if path matches any ignore pattern.

    This is a simplified implementation of gitignore logic.
    It checks the relative path against glob patterns.
    """
    str_path = str(path.relative_to(root_path)).replace(os.sep, "/")

    for pattern in ignore_patterns:
        # Directory-only patterns (ending with /)
        if pattern.endswith("/"):
            if not is_dir:
                continue
            pattern = pattern.rstrip("/")

        pattern = pattern.lstrip("/")
        if fnmatch.fnmatch(str_path, pattern) or fnmatch.fnmatch(
            str_path, f"**/{pattern}"
        ):
            return True

    return False


def scan_files(
    root_path: Path,
    patterns: List[str],
    ignore_patterns: Optional[List[str]] = None,
    recursive: bool = True,
) -> Generator[Path, None, None]:
    """Scan files matching patterns, respecting ignores.

    Args:
        root_path: Root directory to scan.
        patterns: Glob patterns to include (e.g. ['project.assets.json']).
        ignore_patterns: Glob patterns to ignore.
        recursive: Whether to scan recursively.

    Yields:
        Path objects for matching files, in deterministic (sorted) order.
    """
    root_path = root_path.resolve()
    ignores = (ignore_patterns or []) + ALWAYS_IGNORED

    stack = [root_path]

    while stack:
        current_dir = stack.pop()

        try:
            # Sort for deterministic order
            entries = sorted(os.scandir(current_dir), key=lambda e: e.name)
        except (PermissionError, FileNotFoundError, NotADirectoryError):
            logger.debug("Cannot list %s, skipping", current_dir)
            continue

        dirs = []
        files = []

        for entry in entries:
            path = Path(entry.path)
            is_dir = entry.is_dir()

            if _is_ignored(path, root_path, ignores, is_dir):
                continue

            if is_dir:
                if recursive:
                    dirs.append(path)
            else:
                files.append(path)

        # Reversed so that popping keeps alphabetical order
        stack.extend(reversed(dirs))

        for file_path in files:
            str_path = str(file_path.relative_to(root_path)).replace(os.sep, "/")

            for pattern in patterns:
                if fnmatch.fnmatch(file_path.name, pattern) or fnmatch.fnmatch(
                    str_path, pattern
                ):
                    yield file_path
                    break
