# Copyright 2026 slmodel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML loader for the parser configuration file."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from slmodel.model.types import SUBSYSTEM_BLOCK_TYPES

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".slmodel.yaml"


class ParserConfigError(Exception):
    """Raised when a parser configuration file is invalid or cannot be loaded."""


class ParserConfig(BaseModel):
    """Settings that control how a model file tree is parsed.

    Attributes:
        systems_directory: Directory, relative to the parser root, holding
            ``system_<N>.xml`` files.
        stateflow_directory: Directory, relative to the parser root, holding
            ``chart_<N>.xml`` files.
        subsystem_block_types: Block types that own a nested system.
        library_search_paths: Directories searched for ``<library>.slx`` files.
        evaluate_masks: Whether mask display text is computed while parsing.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    systems_directory: str = Field(alias="systems-directory", default="systems")
    stateflow_directory: str = Field(alias="stateflow-directory", default="stateflow")
    subsystem_block_types: list[str] = Field(
        alias="subsystem-block-types", default_factory=lambda: list(SUBSYSTEM_BLOCK_TYPES)
    )
    library_search_paths: list[str] = Field(alias="library-search-paths", default_factory=list)
    evaluate_masks: bool = Field(alias="evaluate-masks", default=True)


def load_parser_config(path: Path) -> ParserConfig:
    """Load and validate a parser configuration file.

    An empty file yields the default configuration.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        A validated ParserConfig instance.

    Raises:
        ParserConfigError: If the file cannot be read, contains invalid YAML,
            or does not conform to the expected schema.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ParserConfigError(f"Parser config file not found: {path}") from None
    except OSError as exc:
        raise ParserConfigError(f"Cannot read parser config file '{path}': {exc}") from exc

    return parse_parser_config(text, source_label=str(path))


def parse_parser_config(text: str, source_label: str = "<string>") -> ParserConfig:
    """Parse configuration YAML text into a ParserConfig.

    Raises:
        ParserConfigError: If the YAML is invalid or does not match the schema.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ParserConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ParserConfigError(f"{source_label}: parser config must be a YAML mapping")

    try:
        return ParserConfig.model_validate(data)
    except ValidationError as exc:
        raise ParserConfigError(f"Invalid parser config {source_label}: {exc}") from exc


def save_parser_config(config: ParserConfig, path: Path) -> None:
    """Write *config* as YAML using the file's hyphenated keys.

    Raises:
        ParserConfigError: If the file cannot be written.
    """
    data = config.model_dump(by_alias=True)
    try:
        path.write_text(yaml.dump(data, default_flow_style=False, sort_keys=True), encoding="utf-8")
    except OSError as exc:
        raise ParserConfigError(f"Cannot write parser config '{path}': {exc}") from exc
