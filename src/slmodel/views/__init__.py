# Copyright 2026 slmodel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Read-only views over a parsed model: navigation and port geometry."""

from slmodel.views.geometry import (
    PortSide,
    block_rect,
    endpoint_pos,
    parse_rect_str,
    port_anchor_pos,
    port_count_for,
    port_side_for,
)
from slmodel.views.navigation import (
    collect_subsystem_paths,
    find_blocks_by_type,
    format_path,
    resolve_subsystem_by_path,
    resolve_subsystem_by_vec,
    walk_blocks,
)

__all__ = [
    "PortSide",
    "block_rect",
    "collect_subsystem_paths",
    "endpoint_pos",
    "find_blocks_by_type",
    "format_path",
    "parse_rect_str",
    "port_anchor_pos",
    "port_count_for",
    "port_side_for",
    "resolve_subsystem_by_path",
    "resolve_subsystem_by_vec",
    "walk_blocks",
]
