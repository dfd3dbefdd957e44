# Copyright 2026 slmodel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Port anchor geometry derived from block rectangles.

Ports are spread evenly along the left (inputs) or right (outputs) edge of a
block. With ``n`` ports the edge is cut into ``2n + 1`` segments and port
``i`` (1-based) sits at ``2i - 0.5`` segments from the top. A mirrored block
swaps the two edges.
"""

from __future__ import annotations

import enum

from slmodel.model.entities import Block, EndpointRef
from slmodel.model.types import Rect
from slmodel.parser.helpers import parse_rect

# ###############
# Public Interface
# ###############


class PortSide(enum.Enum):
    """Edge of a block on which a port is drawn."""

    IN = "in"
    OUT = "out"


def parse_rect_str(text: str) -> Rect | None:
    """Parse ``"[l, t, r, b]"`` into a Rect, or return None."""
    try:
        return parse_rect(text)
    except ValueError:
        return None


def block_rect(block: Block) -> Rect | None:
    """Return the block's rectangle, re-reading the raw ``Position`` property when needed."""
    if block.position is not None:
        return block.position
    raw = block.properties.get("Position")
    return parse_rect_str(raw) if raw is not None else None


def port_anchor_pos(rect: Rect, side: PortSide, port_index: int, num_ports: int | None = None) -> tuple[float, float]:
    """Return the ``(x, y)`` anchor of a port on *rect*.

    Args:
        rect: The block rectangle.
        side: Which edge the port is on.
        port_index: 1-based port index; 0 is treated as 1.
        num_ports: Number of ports on that edge. Defaults to *port_index*
            and is never taken as smaller than it.
    """
    index = max(port_index, 1)
    count = max(num_ports if num_ports is not None else index, index)
    segment = rect.height / (2 * count + 1)
    y = rect.top + (2 * index - 0.5) * segment
    x = rect.right if side == PortSide.OUT else rect.left
    return float(x), y


def port_side_for(port_type: str, mirrored: bool = False) -> PortSide:
    """Return the edge for an endpoint port type, honoring block mirroring.

    Port types other than ``"in"`` and ``"out"`` are drawn on the input edge.
    """
    if port_type == "out":
        return PortSide.IN if mirrored else PortSide.OUT
    if port_type == "in" and mirrored:
        return PortSide.OUT
    return PortSide.IN


def endpoint_pos(
    rect: Rect,
    endpoint: EndpointRef,
    num_ports: int | None = None,
    mirrored: bool = False,
    target_y: float | None = None,
) -> tuple[float, float]:
    """Return the anchor of a line endpoint on its block.

    When *target_y* is given, the anchor's y is moved to it, clamped to the
    block's vertical extent, so that the last line segment stays horizontal.
    """
    x, y = port_anchor_pos(rect, port_side_for(endpoint.port_type, mirrored), endpoint.port_index, num_ports)
    if target_y is not None:
        y = min(max(target_y, rect.top), rect.bottom)
    return x, y


def port_count_for(block: Block, port_type: str) -> int | None:
    """Return the declared number of ``"in"`` or ``"out"`` ports of *block*, if known."""
    if block.port_counts is None:
        return None
    if port_type == "out":
        return block.port_counts.outs
    if port_type == "in":
        return block.port_counts.ins
    return None
