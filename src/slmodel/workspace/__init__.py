# Copyright 2026 slmodel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Parser configuration for slmodel."""

from slmodel.workspace.config import (
    CONFIG_FILE_NAME,
    ParserConfig,
    ParserConfigError,
    load_parser_config,
    parse_parser_config,
    save_parser_config,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "ParserConfig",
    "ParserConfigError",
    "load_parser_config",
    "parse_parser_config",
    "save_parser_config",
]
