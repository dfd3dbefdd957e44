# Copyright 2026 slmodel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Conversions from the textual values found in system files to typed values."""

from __future__ import annotations

import re
from pathlib import PurePosixPath

from slmodel.model.entities import EndpointRef
from slmodel.model.types import NameLocation, Point, Rect

# ###############
# Public Interface
# ###############


def parse_int(text: str | None) -> int | None:
    """Parse a well-formed integer, or return None.

    Surrounding whitespace is allowed; anything else (fractions, units,
    empty text) is not.
    """
    if text is None:
        return None
    stripped = text.strip()
    if not _INTEGER.fullmatch(stripped):
        return None
    return int(stripped)


def parse_rect(text: str) -> Rect:
    """Parse ``"[left, top, right, bottom]"`` into a :class:`Rect`.

    Raises:
        ValueError: If the text does not hold exactly four integers.
    """
    inner = _strip_brackets(text)
    parts = [part.strip() for part in inner.replace(";", ",").split(",")]
    values = [parse_int(part) for part in parts]
    if len(values) != 4 or any(v is None for v in values):
        raise ValueError(f"Expected four integer coordinates, got {text!r}")
    left, top, right, bottom = values
    return Rect(left=left, top=top, right=right, bottom=bottom)


def parse_points(text: str) -> list[Point]:
    """Parse a waypoint list such as ``"[x, y]"`` or ``"[x1, y1; x2, y2]"``.

    Pairs that are incomplete or not integral are skipped.
    """
    points: list[Point] = []
    for pair in _strip_brackets(text).split(";"):
        coords = [c.strip() for c in pair.split(",") if c.strip()]
        if len(coords) < 2:
            continue
        x, y = parse_int(coords[0]), parse_int(coords[1])
        if x is not None and y is not None:
            points.append(Point(x=x, y=y))
    return points


def parse_endpoint(text: str) -> EndpointRef:
    """Parse a line endpoint such as ``"18#out:1"``.

    Raises:
        ValueError: If the text is not ``<sid>#<type>:<index>``.
    """
    sid, sep, rest = text.partition("#")
    if not sep:
        raise ValueError(f"Invalid endpoint format: {text!r}")
    port_type, sep, index_text = rest.partition(":")
    if not sep:
        raise ValueError(f"Invalid endpoint port format: {text!r}")
    index = parse_int(index_text)
    if index is None or index < 0:
        raise ValueError(f"Invalid endpoint port index: {text!r}")
    return EndpointRef(sid=sid.strip(), port_type=port_type.strip(), port_index=index)


def parse_flag(text: str | None) -> bool:
    """Return True for the usual truthy spellings ``on``, ``1`` and ``true``."""
    return (text or "").strip().lower() in ("on", "1", "true")


def parse_name_location(text: str | None) -> NameLocation:
    """Map a ``NameLocation`` value to its enum member, BOTTOM when unrecognized."""
    try:
        return NameLocation((text or "").strip().lower())
    except ValueError:
        return NameLocation.BOTTOM


def parse_color(text: str) -> str | None:
    """Normalise a ``BackgroundColor`` value.

    ``"[r, g, b]"`` triples become ``"rgb(r,g,b)"`` with three decimals,
    well-known color names become hex codes, and any other name is returned
    unchanged. A bracketed value without three components yields None.
    """
    value = text.strip()
    if value.startswith("[") and value.endswith("]"):
        parts = [part.strip() for part in value[1:-1].split(",")]
        if len(parts) != 3:
            return None
        r, g, b = (_parse_float(part) for part in parts)
        return f"rgb({r:.3f},{g:.3f},{b:.3f})"
    return _NAMED_COLORS.get(value.lower(), value)


def resolve_system_reference(reference: str, systems_dir: PurePosixPath) -> PurePosixPath:
    """Resolve a ``<System Ref="system_22"/>`` reference to a file path.

    A missing ``.xml`` extension is added. Absolute references are kept,
    relative ones resolve against *systems_dir*.
    """
    candidate = PurePosixPath(reference.strip())
    if candidate.suffix != ".xml":
        candidate = candidate.with_name(candidate.name + ".xml")
    if candidate.is_absolute():
        return candidate
    return systems_dir / candidate


# ################
# Implementation
# ################

_INTEGER = re.compile(r"[+-]?[0-9]+")

_NAMED_COLORS: dict[str, str] = {
    "white": "#ffffff",
    "black": "#000000",
    "red": "#ff0000",
    "green": "#00ff00",
    "blue": "#0000ff",
    "yellow": "#ffff00",
    "orange": "#ffa500",
    "cyan": "#00ffff",
    "magenta": "#ff00ff",
    "lightblue": "#add8e6",
    "darkgreen": "#006400",
    "gray": "#808080",
    "grey": "#808080",
    "lightgray": "#d3d3d3",
    "lightgrey": "#d3d3d3",
    "darkgray": "#a9a9a9",
    "darkgrey": "#a9a9a9",
    "brown": "#a52a2a",
    "purple": "#800080",
    "pink": "#ffc0cb",
    "lime": "#00ff00",
    "navy": "#000080",
    "teal": "#008080",
    "olive": "#808000",
    "maroon": "#800000",
    "silver": "#c0c0c0",
}


def _strip_brackets(text: str) -> str:
    stripped = text.strip()
    if stripped.startswith("[") and stripped.endswith("]"):
        return stripped[1:-1]
    return stripped


def _parse_float(text: str) -> float:
    try:
        return float(text)
    except ValueError:
        return 0.0
