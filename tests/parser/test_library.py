# Copyright 2026 slmodel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for library lookup and library block linking."""

import zipfile
from pathlib import Path

import pytest

from slmodel.model.entities import Block, System
from slmodel.parser.diagnostics import DiagnosticKind, DiagnosticLog
from slmodel.parser.library import LibraryResolver, parse_library_file, resolve_library_references
from slmodel.parser.source import ContentNotFoundError
from slmodel.workspace.config import ParserConfig

# ###############
# Test Helpers
# ###############

REGLER_ROOT = """<System>
  <Block BlockType="SubSystem" Name="Joint_Interpolator" SID="1">
    <System Ref="system_1"/>
  </Block>
  <Block BlockType="SubSystem" Name="Filters" SID="2">
    <System>
      <Block BlockType="SubSystem" Name="Lowpass" SID="1">
        <System>
          <Block BlockType="DiscreteFilter" Name="Core" SID="1"/>
        </System>
      </Block>
    </System>
  </Block>
  <Block BlockType="SubSystem" Name="Recursive" SID="3">
    <System>
      <Block BlockType="Reference" Name="Self" SID="1">
        <P Name="SourceBlock">Regler/Recursive</P>
      </Block>
    </System>
  </Block>
</System>
"""

REGLER_INTERPOLATOR = """<System>
  <Block BlockType="Inport" Name="q_target" SID="1"/>
  <Block BlockType="Outport" Name="q_cmd" SID="2"/>
</System>
"""


def _write_library(directory: Path, name: str, files: dict[str, str]) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{name}.slx"
    with zipfile.ZipFile(path, "w") as archive:
        for entry, text in files.items():
            archive.writestr(entry, text)
    return path


def _regler(directory: Path) -> Path:
    return _write_library(
        directory,
        "Regler",
        {
            "simulink/systems/system_root.xml": REGLER_ROOT,
            "simulink/systems/system_1.xml": REGLER_INTERPOLATOR,
        },
    )


def _model(*source_blocks: str) -> System:
    blocks = [
        Block(block_type="Reference", name=f"Use{i}", sid=i, properties={"SourceBlock": source})
        for i, source in enumerate(source_blocks, start=1)
    ]
    return System(blocks=blocks)


# ###############
# Resolver
# ###############


class TestLibraryResolver:
    def test_first_search_path_wins(self, tmp_path: Path) -> None:
        first = _write_library(tmp_path / "first", "Regler", {})
        _write_library(tmp_path / "second", "Regler", {})
        resolver = LibraryResolver([tmp_path / "first", tmp_path / "second"])
        assert resolver.find("Regler") == first

    def test_locate_reports_found_and_missing(self, tmp_path: Path) -> None:
        path = _write_library(tmp_path, "Regler", {})
        result = LibraryResolver([tmp_path]).locate(["Regler", "Sensors", " ", "Regler"])
        assert result.found == [("Regler", path)]
        assert result.not_found == ["Sensors"]

    def test_directories_are_not_libraries(self, tmp_path: Path) -> None:
        (tmp_path / "Regler.slx").mkdir()
        assert LibraryResolver([tmp_path]).find("Regler") is None

    def test_search_paths_property(self, tmp_path: Path) -> None:
        assert LibraryResolver([str(tmp_path)]).search_paths == [tmp_path]


# ###############
# Library Files
# ###############


class TestParseLibraryFile:
    def test_root_system_with_references(self, tmp_path: Path) -> None:
        library = parse_library_file(_regler(tmp_path))
        assert [b.name for b in library.blocks] == ["Joint_Interpolator", "Filters", "Recursive"]
        interpolator = library.blocks[0].subsystem
        assert interpolator is not None
        assert [b.name for b in interpolator.blocks] == ["q_target", "q_cmd"]

    def test_archive_without_root_system(self, tmp_path: Path) -> None:
        path = _write_library(tmp_path, "Empty", {"simulink/other.xml": "<x/>"})
        with pytest.raises(ContentNotFoundError):
            parse_library_file(path)


# ###############
# Linking
# ###############


class TestResolveLibraryReferences:
    def test_links_top_level_library_block(self, tmp_path: Path) -> None:
        _regler(tmp_path)
        model = _model("Regler/Joint_Interpolator")
        assert resolve_library_references(model, [tmp_path]) == 1

        block = model.blocks[0]
        assert block.library_source == "Regler"
        assert block.library_block_path == "Regler/Joint_Interpolator"
        assert block.subsystem is not None
        assert [b.name for b in block.subsystem.blocks] == ["q_target", "q_cmd"]

    def test_links_nested_library_block(self, tmp_path: Path) -> None:
        _regler(tmp_path)
        model = _model("Regler/Filters/Lowpass")
        assert resolve_library_references(model, [tmp_path]) == 1
        assert model.blocks[0].subsystem is not None
        assert model.blocks[0].subsystem.blocks[0].name == "Core"

    def test_linked_systems_are_independent_copies(self, tmp_path: Path) -> None:
        _regler(tmp_path)
        model = _model("Regler/Joint_Interpolator", "Regler/Joint_Interpolator")
        assert resolve_library_references(model, [tmp_path]) == 2
        first, second = model.blocks[0].subsystem, model.blocks[1].subsystem
        assert first is not None and second is not None
        first.blocks[0].name = "renamed"
        assert second.blocks[0].name == "q_target"

    def test_missing_library_is_recorded_per_block(self, tmp_path: Path) -> None:
        model = _model("Sensors/Encoder", "Sensors/Resolver")
        log = DiagnosticLog()
        assert resolve_library_references(model, [tmp_path], log=log) == 0
        unresolved = log.of_kind(DiagnosticKind.UNRESOLVED_REFERENCE)
        assert [d.subject for d in unresolved] == ["Use1", "Use2"]
        assert model.blocks[0].subsystem is None
        assert model.blocks[0].library_source is None

    def test_missing_block_in_library(self, tmp_path: Path) -> None:
        _regler(tmp_path)
        model = _model("Regler/Nope")
        log = DiagnosticLog()
        assert resolve_library_references(model, [tmp_path], log=log) == 0
        assert "Nope" in log.entries[0].message

    def test_self_containing_library_block_stops(self, tmp_path: Path) -> None:
        _regler(tmp_path)
        model = _model("Regler/Recursive")
        log = DiagnosticLog()
        assert resolve_library_references(model, [tmp_path], log=log) == 1
        assert len(log) == 1
        assert "contains itself" in log.entries[0].message
        inner = model.blocks[0].subsystem
        assert inner is not None
        assert inner.blocks[0].subsystem is None

    def test_blocks_without_source_are_untouched(self, tmp_path: Path) -> None:
        model = System(blocks=[Block(block_type="Gain", name="G", sid=1, properties={"SourceBlock": "simulink"})])
        assert resolve_library_references(model, [tmp_path]) == 0
        assert model.blocks[0].library_source is None

    def test_search_paths_from_config(self, tmp_path: Path) -> None:
        _regler(tmp_path / "libs")
        config = ParserConfig(library_search_paths=[str(tmp_path / "libs")])
        model = _model("Regler/Joint_Interpolator")
        assert resolve_library_references(model, config=config) == 1

    def test_links_inside_nested_systems(self, tmp_path: Path) -> None:
        _regler(tmp_path)
        inner = _model("Regler/Joint_Interpolator")
        model = System(blocks=[Block(block_type="SubSystem", name="Outer", sid=1, subsystem=inner)])
        assert resolve_library_references(model, [tmp_path]) == 1
        assert inner.blocks[0].library_source == "Regler"
