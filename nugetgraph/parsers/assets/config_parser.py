"""NuGet project.assets.json parser.

Decodes lock-file content into ProjectAssets and expands the direct
dependencies of one target framework into PackageReference trees.
"""

import json
import logging
from typing import Dict, List, Optional, Set

import json5

from nugetgraph.config.schema import ParserConfig
from nugetgraph.graph.models import PackageReference
from nugetgraph.parsers.assets.config_model import (
    PackageTarget,
    ParseResult,
    ProjectAssets,
    split_package_id,
)
from nugetgraph.parsers.base import (
    ConfigurationError,
    FileReader,
    LocalFileReader,
    PathLike,
)

logger = logging.getLogger("nugetgraph.parsers.assets.config_parser")


class ProjectAssetsParser:
    """Parser for NuGet project.assets.json lock-files.

    Lock-files are routinely missing before a restore, so every entry point
    fails softly: ``parse`` and ``parse_from_text`` return None instead of
    raising, and ``try_parse_from_text`` reports the reason as a value.
    """

    NAME = "project_assets_parser"
    ECOSYSTEM = "nuget"

    def __init__(
        self,
        file_reader: Optional[FileReader] = None,
        config: Optional[ParserConfig] = None,
    ) -> None:
        self.file_reader: FileReader = file_reader or LocalFileReader()
        self.config = config or ParserConfig()

    @property
    def max_depth(self) -> int:
        return self.config.max_depth

    # ------------------------------------------------------------------
    # Decoding
    # ------------------------------------------------------------------

    def parse(self, path: PathLike) -> Optional[ProjectAssets]:
        """Parse a project.assets.json file.

        Args:
            path: Path to the lock-file.

        Returns:
            Decoded assets, or None when the file is missing, unreadable or
            malformed.
        """
        try:
            if not self.file_reader.exists(path):
                logger.debug("Lock-file not found: %s", path)
                return None
            content = self.file_reader.read_text(path)
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("Cannot read %s: %s", path, exc)
            return None

        return self.parse_from_text(content)

    def parse_from_text(self, content: Optional[str]) -> Optional[ProjectAssets]:
        """Decode lock-file content, returning None on any malformed input."""
        return self.try_parse_from_text(content).assets

    def try_parse_from_text(self, content: Optional[str]) -> ParseResult:
        """Decode lock-file content.

        Strict JSON is tried first; content with comments or trailing
        commas is decoded with json5.

        Args:
            content: Raw lock-file text.

        Returns:
            ParseResult carrying either the assets or a ConfigurationError.
        """
        if content is None or not content.strip():
            return ParseResult(error=ConfigurationError("Lock-file content is empty"))

        try:
            data = json.loads(content)
        except RecursionError:
            return ParseResult(error=ConfigurationError("Invalid JSON: nesting too deep"))
        except json.JSONDecodeError:
            try:
                data = json5.loads(content)
            except RecursionError:
                return ParseResult(error=ConfigurationError("Invalid JSON: nesting too deep"))
            except ValueError as exc:
                return ParseResult(error=ConfigurationError(f"Invalid JSON: {exc}"))

        if not isinstance(data, dict):
            return ParseResult(
                error=ConfigurationError(
                    f"Top-level lock-file value must be an object, got {type(data).__name__}"
                )
            )

        try:
            assets = ProjectAssets.from_dict(data)
        except ConfigurationError as exc:
            return ParseResult(error=exc)

        logger.debug(
            "Decoded lock-file v%d: %d target(s), %d librar(y/ies)",
            assets.version,
            len(assets.targets),
            len(assets.libraries),
        )
        return ParseResult(assets=assets)

    # ------------------------------------------------------------------
    # Extraction
    # ------------------------------------------------------------------

    def list_frameworks(self, assets: ProjectAssets) -> List[str]:
        """Framework monikers present under ``targets``, in document order."""
        return assets.frameworks

    def resolve_framework(
        self, assets: ProjectAssets, framework_filter: Optional[str] = None
    ) -> Optional[str]:
        """Pick the target framework to analyze.

        The first framework containing ``framework_filter`` (case-insensitive)
        wins; otherwise the first framework present. None when the lock-file
        has no targets.
        """
        if framework_filter:
            wanted = framework_filter.casefold()
            for framework in assets.targets:
                if wanted in framework.casefold():
                    return framework
            logger.debug(
                "No target framework matches %r, falling back to the first one",
                framework_filter,
            )

        return next(iter(assets.targets), None)

    def extract_packages(
        self,
        assets: ProjectAssets,
        framework_filter: Optional[str] = None,
    ) -> List[PackageReference]:
        """Expand the project's direct dependencies into trees.

        Args:
            assets: Decoded lock-file.
            framework_filter: Optional framework moniker (substring match).

        Returns:
            One root PackageReference per resolvable direct dependency, in
            the order of the project's dependency group. Empty when there is
            no target or no dependency group.
        """
        framework = self.resolve_framework(assets, framework_filter)
        if framework is None:
            logger.debug("Lock-file has no targets")
            return []

        direct = self._direct_dependency_names(assets, framework)
        if not direct:
            logger.debug("No direct dependency group for %s", framework)
            return []

        target = assets.targets[framework]
        index = _index_by_name(target)

        roots: List[PackageReference] = []
        for name in direct:
            package_id = index.get(name.casefold())
            if package_id is None:
                logger.debug("Direct dependency %s not resolved under %s", name, framework)
                continue
            roots.append(self._expand(package_id, target, index, set(), 0))

        logger.debug(
            "Extracted %d root package(s) for %s", len(roots), framework
        )
        return roots

    def _direct_dependency_names(
        self, assets: ProjectAssets, framework: str
    ) -> List[str]:
        """Bare names of the direct dependencies declared for ``framework``."""
        groups = assets.project_file_dependency_groups
        entries = groups.get(framework)

        if entries is None:
            # Runtime-specific targets ("net8.0/win-x64") share the group of
            # their base framework.
            folded = framework.casefold()
            for key, value in groups.items():
                key_folded = key.casefold()
                if key_folded in folded or folded in key_folded:
                    entries = value
                    break

        names: List[str] = []
        for entry in entries or []:
            tokens = entry.split()
            if tokens:
                names.append(tokens[0])
        return names

    def _expand(
        self,
        package_id: str,
        target: Dict[str, PackageTarget],
        index: Dict[str, str],
        on_path: Set[str],
        depth: int,
    ) -> PackageReference:
        """Depth-first expansion of one package.

        ``on_path`` holds the ids of the current recursion branch only; an id
        is released once its subtree is finished, so a package can be
        expanded again under a sibling.
        """
        name, version = split_package_id(package_id)
        entry = target.get(package_id)
        node = PackageReference(
            name=name,
            version=version,
            type=entry.type if entry else "package",
        )

        if depth >= self.max_depth or package_id in on_path or entry is None:
            return node

        on_path.add(package_id)
        try:
            for dep_name, version_range in entry.dependencies.items():
                child_id = index.get(dep_name.casefold())
                if child_id is None:
                    # Not restored under this target; keep the declared range.
                    node.dependencies.append(
                        PackageReference(name=dep_name, version=version_range)
                    )
                    continue
                node.dependencies.append(
                    self._expand(child_id, target, index, on_path, depth + 1)
                )
        finally:
            on_path.discard(package_id)

        return node


def _index_by_name(target: Dict[str, PackageTarget]) -> Dict[str, str]:
    """Map case-folded package name to the first "Name/Version" key."""
    index: Dict[str, str] = {}
    for package_id in target:
        if "/" not in package_id:
            continue
        name, _ = split_package_id(package_id)
        index.setdefault(name.casefold(), package_id)
    return index


__all__ = ["ProjectAssetsParser"]
