# Copyright 2026 slmodel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Navigation through a parsed System tree by block names."""

from __future__ import annotations

from collections.abc import Collection, Iterator, Sequence

from slmodel.model.entities import Block, System
from slmodel.model.types import SUBSYSTEM_BLOCK_TYPES

# ###############
# Public Interface
# ###############


def resolve_subsystem_by_path(
    root: System, path: str, block_types: Collection[str] = SUBSYSTEM_BLOCK_TYPES
) -> System | None:
    """Resolve a ``/``-separated path such as ``"/Top/Sub"`` to a nested System.

    The leading slash is optional and empty segments are ignored, so ``"/"``
    and ``""`` both return *root*. Returns None when a segment does not name a
    subsystem-bearing block.
    """
    segments = [segment for segment in path.strip().split("/") if segment]
    return resolve_subsystem_by_vec(root, segments, block_types)


def resolve_subsystem_by_vec(
    root: System, names: Sequence[str], block_types: Collection[str] = SUBSYSTEM_BLOCK_TYPES
) -> System | None:
    """Resolve a sequence of block names, starting at *root*, to a nested System."""
    current = root
    for name in names:
        child = _find_subsystem(current, name, block_types)
        if child is None:
            return None
        current = child
    return current


def collect_subsystem_paths(root: System, block_types: Collection[str] = SUBSYSTEM_BLOCK_TYPES) -> list[list[str]]:
    """Return the name path of every nested System that is not a chart, depth first."""
    paths: list[list[str]] = []

    def visit(system: System, prefix: list[str]) -> None:
        for block in system.blocks:
            if block.block_type not in block_types or block.subsystem is None:
                continue
            if block.subsystem.chart is not None:
                continue
            path = [*prefix, block.name]
            paths.append(path)
            visit(block.subsystem, path)

    visit(root, [])
    return paths


def walk_blocks(root: System) -> Iterator[tuple[list[str], Block]]:
    """Yield ``(path, block)`` for every block in the tree, depth first in document order.

    *path* holds the names of the enclosing subsystem blocks.
    """

    def visit(system: System, prefix: list[str]) -> Iterator[tuple[list[str], Block]]:
        for block in system.blocks:
            yield prefix, block
            if block.subsystem is not None:
                yield from visit(block.subsystem, [*prefix, block.name])

    return visit(root, [])


def find_blocks_by_type(root: System, block_type: str) -> list[tuple[list[str], Block]]:
    """Return every block of *block_type* in the tree with its enclosing path."""
    return [(path, block) for path, block in walk_blocks(root) if block.block_type == block_type]


def format_path(names: Sequence[str]) -> str:
    """Render a name path as ``"/A/B"``; the root is ``"/"``."""
    return "/" + "/".join(names)


# ################
# Implementation
# ################


def _find_subsystem(system: System, name: str, block_types: Collection[str]) -> System | None:
    for block in system.blocks:
        if block.block_type in block_types and block.name == name and block.subsystem is not None:
            return block.subsystem
    return None
