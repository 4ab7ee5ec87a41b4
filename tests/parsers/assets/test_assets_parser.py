"""Tests for project.assets.json decoding and tree extraction."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

import pytest

from nugetgraph.config.schema import ParserConfig
from nugetgraph.graph.models import PackageReference
from nugetgraph.parsers.assets.config_parser import ProjectAssetsParser
from nugetgraph.parsers.base import ConfigurationError

DATA_DIR = Path(__file__).resolve().parents[2] / "data"
SIMPLE_PROJECT = DATA_DIR / "simple-project.assets.json"


def _assets_json(
    packages: Dict[str, Dict[str, str]],
    direct: List[str],
    framework: str = "net8.0",
) -> str:
    """Build lock-file text from {package_id: {dep_name: range}}."""
    target = {
        package_id: {"type": "package", "dependencies": deps}
        for package_id, deps in packages.items()
    }
    data: Dict[str, Any] = {
        "version": 3,
        "targets": {framework: target},
        "libraries": {},
        "projectFileDependencyGroups": {framework: direct},
    }
    return json.dumps(data)


def _ids(ref: PackageReference) -> List[str]:
    """Pre-order ids of a tree."""
    out = [ref.id]
    for child in ref.dependencies:
        out.extend(_ids(child))
    return out


def test_parse_reads_all_sections() -> None:
    """A complete lock-file decodes targets, libraries, groups and project."""
    assets = ProjectAssetsParser().parse(SIMPLE_PROJECT)

    assert assets is not None
    assert assets.version == 3
    assert list(assets.targets) == ["net8.0"]

    target = assets.targets["net8.0"]
    assert list(target) == ["AutoMapper/12.0.0", "Microsoft.CSharp/4.7.0"]
    assert target["AutoMapper/12.0.0"].type == "package"
    assert target["AutoMapper/12.0.0"].dependencies == {"Microsoft.CSharp": "4.7.0"}
    assert target["Microsoft.CSharp/4.7.0"].dependencies == {}

    library = assets.libraries["AutoMapper/12.0.0"]
    assert library.path == "automapper/12.0.0"
    assert library.sha512.startswith("0Rmg0zI5AFu1O")
    assert "lib/netstandard2.1/AutoMapper.dll" in library.files

    assert assets.project_file_dependency_groups == {"net8.0": ["AutoMapper >= 12.0.0"]}
    assert assets.project is not None
    assert assets.project.version == "1.0.0"
    assert assets.project_name == "SimpleProject"
    assert assets.project.frameworks == ["net8.0"]


def test_parse_missing_file_returns_none(tmp_path: Path) -> None:
    """Lock-files are often absent before restore; that is not an error."""
    assert ProjectAssetsParser().parse(tmp_path / "project.assets.json") is None


def test_parse_directory_path_returns_none(tmp_path: Path) -> None:
    """A directory is not a readable lock-file."""
    assert ProjectAssetsParser().parse(tmp_path) is None


def test_parse_unreadable_file_returns_none() -> None:
    """I/O failures while reading are swallowed into None."""

    class _BrokenReader:
        def exists(self, path) -> bool:
            return True

        def read_text(self, path) -> str:
            raise PermissionError("denied")

    parser = ProjectAssetsParser(file_reader=_BrokenReader())
    assert parser.parse("obj/project.assets.json") is None


def test_parse_uses_file_reader_collaborator() -> None:
    """Content comes from the injected reader, not the real filesystem."""

    class _MemoryReader:
        def __init__(self, files: Dict[str, str]) -> None:
            self.files = files

        def exists(self, path) -> bool:
            return str(path) in self.files

        def read_text(self, path) -> str:
            return self.files[str(path)]

    reader = _MemoryReader({"a/project.assets.json": SIMPLE_PROJECT.read_text(encoding="utf-8")})
    parser = ProjectAssetsParser(file_reader=reader)

    assert parser.parse("a/project.assets.json") is not None
    assert parser.parse("b/project.assets.json") is None


def test_parse_accepts_utf8_bom(tmp_path: Path) -> None:
    """Files written with a BOM still decode."""
    lock_file = tmp_path / "project.assets.json"
    lock_file.write_bytes(b"\xef\xbb\xbf" + SIMPLE_PROJECT.read_bytes())

    assert ProjectAssetsParser().parse(lock_file) is not None


@pytest.mark.parametrize("content", ["", "   ", "\n\t  \n", None])
def test_parse_from_text_empty_returns_none(content) -> None:
    """Empty or whitespace-only content yields None, not an exception."""
    assert ProjectAssetsParser().parse_from_text(content) is None


@pytest.mark.parametrize(
    "content",
    [
        "{ invalid json content",
        '{"targets": {}}',
        '{"version": "3"}',
        '{"version": true}',
        "[1, 2, 3]",
        "42",
    ],
)
def test_parse_from_text_rejects_malformed_input(content: str) -> None:
    """Invalid JSON, non-object roots and a missing integer version are rejected."""
    assert ProjectAssetsParser().parse_from_text(content) is None


@pytest.mark.parametrize("content", ["[" * 200000, '{"a":' * 200000])
def test_parse_from_text_rejects_deeply_nested_input(content: str) -> None:
    """Pathologically nested content is rejected instead of overflowing the stack."""
    parser = ProjectAssetsParser()

    assert parser.parse_from_text(content) is None
    result = parser.try_parse_from_text(content)
    assert isinstance(result.error, ConfigurationError)
    assert "nesting too deep" in str(result.error)


def test_try_parse_reports_reason() -> None:
    """The reason for rejection is returned, not logged or raised."""
    result = ProjectAssetsParser().try_parse_from_text('{"targets": {}}')

    assert not result.ok
    assert result.assets is None
    assert isinstance(result.error, ConfigurationError)
    assert "version" in str(result.error)


def test_parse_from_text_tolerates_comments_and_trailing_commas() -> None:
    """Lenient JSON is accepted."""
    content = """
    {
        // written by a hand-edited tool
        "version": 3,
        "targets": {
            "net8.0": {
                "A/1.0.0": {"type": "package",},
            },
        },
        "projectFileDependencyGroups": {"net8.0": ["A >= 1.0.0",]},
    }
    """
    assets = ProjectAssetsParser().parse_from_text(content)

    assert assets is not None
    assert list(assets.targets["net8.0"]) == ["A/1.0.0"]


def test_parse_from_text_missing_sections_are_empty() -> None:
    """Only "version" is required; everything else defaults to empty."""
    assets = ProjectAssetsParser().parse_from_text('{"version": 3, "unknownField": {"x": 1}}')

    assert assets is not None
    assert assets.targets == {}
    assert assets.libraries == {}
    assert assets.project is None
    assert assets.project_file_dependency_groups == {}


def test_extract_packages_automapper_scenario() -> None:
    """The direct dependency string resolves to its target entry and children."""
    parser = ProjectAssetsParser()
    assets = parser.parse(SIMPLE_PROJECT)
    assert assets is not None

    roots = parser.extract_packages(assets, "net8.0")

    assert len(roots) == 1
    root = roots[0]
    assert (root.name, root.version, root.type) == ("AutoMapper", "12.0.0", "package")
    assert [(d.name, d.version) for d in root.dependencies] == [("Microsoft.CSharp", "4.7.0")]
    assert root.dependencies[0].dependencies == []


def test_extract_packages_framework_filter_is_case_insensitive_substring() -> None:
    """The filter picks the first framework containing it."""
    data = {
        "version": 3,
        "targets": {
            "net6.0": {"Old/1.0.0": {"type": "package"}},
            "net8.0": {"New/2.0.0": {"type": "package"}},
        },
        "projectFileDependencyGroups": {
            "net6.0": ["Old >= 1.0.0"],
            "net8.0": ["New >= 2.0.0"],
        },
    }
    parser = ProjectAssetsParser()
    assets = parser.parse_from_text(json.dumps(data))
    assert assets is not None

    assert [r.id for r in parser.extract_packages(assets, "NET8")] == ["New/2.0.0"]
    # Unknown filter and no filter both fall back to the first framework
    assert [r.id for r in parser.extract_packages(assets, "net48")] == ["Old/1.0.0"]
    assert [r.id for r in parser.extract_packages(assets)] == ["Old/1.0.0"]


def test_extract_packages_without_targets_or_groups_is_empty() -> None:
    """Missing sections produce an empty list rather than an error."""
    parser = ProjectAssetsParser()

    no_targets = parser.parse_from_text('{"version": 3, "projectFileDependencyGroups": {"net8.0": ["A >= 1"]}}')
    assert no_targets is not None
    assert parser.extract_packages(no_targets) == []

    no_groups = parser.parse_from_text('{"version": 3, "targets": {"net8.0": {"A/1.0.0": {}}}}')
    assert no_groups is not None
    assert parser.extract_packages(no_groups) == []


def test_extract_packages_runtime_target_uses_base_framework_group() -> None:
    """RID-specific targets share the dependency group of their framework."""
    data = {
        "version": 3,
        "targets": {"net8.0/win-x64": {"A/1.0.0": {"type": "package"}}},
        "projectFileDependencyGroups": {"net8.0": ["A >= 1.0.0"]},
    }
    parser = ProjectAssetsParser()
    assets = parser.parse_from_text(json.dumps(data))
    assert assets is not None

    assert [r.id for r in parser.extract_packages(assets)] == ["A/1.0.0"]


def test_extract_packages_name_lookup_is_case_insensitive() -> None:
    """Both direct names and dependency names match keys case-insensitively."""
    content = _assets_json(
        {"Newtonsoft.Json/13.0.3": {"system.memory": "4.5.5"}, "System.Memory/4.5.5": {}},
        ["newtonsoft.json >= 13.0.3"],
    )
    parser = ProjectAssetsParser()
    assets = parser.parse_from_text(content)
    assert assets is not None

    roots = parser.extract_packages(assets)

    assert [r.id for r in roots] == ["Newtonsoft.Json/13.0.3"]
    assert [d.id for d in roots[0].dependencies] == ["System.Memory/4.5.5"]


def test_extract_packages_skips_unresolvable_direct_dependency() -> None:
    """Direct names without a target entry are skipped."""
    content = _assets_json({"A/1.0.0": {}}, ["Missing >= 1.0.0", "A >= 1.0.0", ""])
    parser = ProjectAssetsParser()
    assets = parser.parse_from_text(content)
    assert assets is not None

    assert [r.id for r in parser.extract_packages(assets)] == ["A/1.0.0"]


def test_extract_packages_unrestored_child_keeps_declared_range() -> None:
    """A child missing from the target map keeps its version range verbatim."""
    content = _assets_json({"A/1.0.0": {"Ghost": "[2.0.0, )"}}, ["A >= 1.0.0"])
    parser = ProjectAssetsParser()
    assets = parser.parse_from_text(content)
    assert assets is not None

    child = parser.extract_packages(assets)[0].dependencies[0]

    assert (child.name, child.version, child.type) == ("Ghost", "[2.0.0, )", "package")
    assert child.dependencies == []


def test_extract_packages_cycle_guard_emits_childless_terminal() -> None:
    """A package already on the recursion path is emitted without children."""
    content = _assets_json(
        {"A/1.0.0": {"B": "1.0.0"}, "B/1.0.0": {"A": "1.0.0"}},
        ["A >= 1.0.0"],
    )
    parser = ProjectAssetsParser()
    assets = parser.parse_from_text(content)
    assert assets is not None

    root = parser.extract_packages(assets)[0]

    assert _ids(root) == ["A/1.0.0", "B/1.0.0", "A/1.0.0"]
    terminal = root.dependencies[0].dependencies[0]
    assert terminal.dependencies == []


def test_extract_packages_guard_is_released_between_siblings() -> None:
    """A shared package is expanded again under each sibling branch."""
    content = _assets_json(
        {
            "App/1.0.0": {"Left": "1.0.0", "Right": "1.0.0"},
            "Left/1.0.0": {"Shared": "1.0.0"},
            "Right/1.0.0": {"Shared": "1.0.0"},
            "Shared/1.0.0": {"Leaf": "1.0.0"},
            "Leaf/1.0.0": {},
        },
        ["App >= 1.0.0"],
    )
    parser = ProjectAssetsParser()
    assets = parser.parse_from_text(content)
    assert assets is not None

    root = parser.extract_packages(assets)[0]
    left, right = root.dependencies

    assert _ids(left) == ["Left/1.0.0", "Shared/1.0.0", "Leaf/1.0.0"]
    assert _ids(right) == ["Right/1.0.0", "Shared/1.0.0", "Leaf/1.0.0"]


def test_extract_packages_stops_at_max_depth() -> None:
    """Expansion stops at the configured depth; the last node has no children."""
    chain = {f"P{i}/1.0.0": {f"P{i + 1}": "1.0.0"} for i in range(15)}
    chain["P15/1.0.0"] = {}
    content = _assets_json(chain, ["P0 >= 1.0.0"])

    parser = ProjectAssetsParser()
    assets = parser.parse_from_text(content)
    assert assets is not None

    node = parser.extract_packages(assets)[0]
    depth = 0
    while node.dependencies:
        node = node.dependencies[0]
        depth += 1

    assert depth == 10
    assert node.id == "P10/1.0.0"

    shallow = ProjectAssetsParser(config=ParserConfig(max_depth=2))
    node = shallow.extract_packages(assets)[0]
    assert _ids(node) == ["P0/1.0.0", "P1/1.0.0", "P2/1.0.0"]


def test_list_frameworks_preserves_document_order() -> None:
    """Framework monikers come back in lock-file order."""
    content = json.dumps(
        {"version": 3, "targets": {"net8.0": {}, "net472": {}, "netstandard2.0": {}}}
    )
    parser = ProjectAssetsParser()
    assets = parser.parse_from_text(content)
    assert assets is not None

    assert parser.list_frameworks(assets) == ["net8.0", "net472", "netstandard2.0"]
