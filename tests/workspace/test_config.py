# Copyright 2026 slmodel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the parser configuration module."""

from pathlib import Path

import pytest

from slmodel.workspace import (
    CONFIG_FILE_NAME,
    ParserConfig,
    ParserConfigError,
    load_parser_config,
    parse_parser_config,
    save_parser_config,
)

# ###############
# Helpers
# ###############


def _write_config(tmp_path: Path, content: str) -> Path:
    """Write a parser config file and return its path."""
    config_file = tmp_path / CONFIG_FILE_NAME
    config_file.write_text(content, encoding="utf-8")
    return config_file


# ###############
# Normal Cases
# ###############


def test_defaults() -> None:
    """A default config matches the standard model layout."""
    config = ParserConfig()
    assert config.systems_directory == "systems"
    assert config.stateflow_directory == "stateflow"
    assert config.subsystem_block_types == ["SubSystem", "Reference"]
    assert config.library_search_paths == []
    assert config.evaluate_masks is True


def test_full_config(tmp_path: Path) -> None:
    """Every hyphenated key maps to its field."""
    content = """\
systems-directory: sys
stateflow-directory: charts
subsystem-block-types:
  - SubSystem
  - ModelReference
library-search-paths:
  - ./libs
  - /opt/libraries
evaluate-masks: false
"""
    config = load_parser_config(_write_config(tmp_path, content))

    assert config.systems_directory == "sys"
    assert config.stateflow_directory == "charts"
    assert config.subsystem_block_types == ["SubSystem", "ModelReference"]
    assert config.library_search_paths == ["./libs", "/opt/libraries"]
    assert config.evaluate_masks is False


def test_partial_config_keeps_defaults(tmp_path: Path) -> None:
    """Keys that are not given keep their defaults."""
    config = load_parser_config(_write_config(tmp_path, "library-search-paths: [libs]\n"))
    assert config.library_search_paths == ["libs"]
    assert config.systems_directory == "systems"


def test_empty_file_gives_defaults(tmp_path: Path) -> None:
    """An empty file is the default configuration."""
    assert load_parser_config(_write_config(tmp_path, "")) == ParserConfig()


def test_field_names_are_accepted() -> None:
    """Python field names work as well as the hyphenated keys."""
    config = ParserConfig(systems_directory="s", evaluate_masks=False)
    assert config.systems_directory == "s"
    assert config.evaluate_masks is False


def test_save_and_load(tmp_path: Path) -> None:
    """A saved config is written with hyphenated keys and loads back unchanged."""
    config = ParserConfig(library_search_paths=["libs"], evaluate_masks=False)
    path = tmp_path / CONFIG_FILE_NAME
    save_parser_config(config, path)

    text = path.read_text(encoding="utf-8")
    assert "library-search-paths:" in text
    assert "evaluate-masks: false" in text
    assert load_parser_config(path) == config


# ###############
# Error Cases
# ###############


def test_missing_file(tmp_path: Path) -> None:
    """A missing file raises ParserConfigError."""
    with pytest.raises(ParserConfigError, match="not found"):
        load_parser_config(tmp_path / "absent.yaml")


def test_invalid_yaml(tmp_path: Path) -> None:
    """Malformed YAML raises ParserConfigError."""
    with pytest.raises(ParserConfigError, match="Invalid YAML"):
        load_parser_config(_write_config(tmp_path, "systems-directory: [unclosed\n"))


def test_not_a_mapping(tmp_path: Path) -> None:
    """A top-level list is rejected."""
    with pytest.raises(ParserConfigError, match="mapping"):
        load_parser_config(_write_config(tmp_path, "- a\n- b\n"))


def test_unknown_key() -> None:
    """Unknown keys are rejected."""
    with pytest.raises(ParserConfigError, match="Invalid parser config"):
        parse_parser_config("systems-dir: sys\n")


def test_wrong_type() -> None:
    """A value of the wrong type is rejected."""
    with pytest.raises(ParserConfigError):
        parse_parser_config("evaluate-masks: maybe\n")


def test_save_to_missing_directory(tmp_path: Path) -> None:
    """Writing into a directory that does not exist raises ParserConfigError."""
    with pytest.raises(ParserConfigError, match="Cannot write"):
        save_parser_config(ParserConfig(), tmp_path / "missing" / CONFIG_FILE_NAME)
