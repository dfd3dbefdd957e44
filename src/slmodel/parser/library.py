# Copyright 2026 slmodel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Library lookup and linking of library blocks.

Blocks instantiated from a library carry a ``SourceBlock`` property such as
``"Regler/Joint_Interpolator"``. The first segment names a library file
(``Regler.slx``) found on a list of search directories; the rest addresses a
block inside that library's root system.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from slmodel.model.entities import Block, System
from slmodel.parser.diagnostics import DiagnosticKind, DiagnosticLog
from slmodel.parser.errors import StructuralParseError
from slmodel.parser.simulink import SimulinkParser
from slmodel.parser.source import ContentSourceError, ZipSource
from slmodel.workspace.config import ParserConfig

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

LIBRARY_SUFFIX = ".slx"
LIBRARY_MODEL_ROOT = "simulink"
SOURCE_BLOCK_PROPERTY = "SourceBlock"


@dataclass
class LibraryLookupResult:
    """Libraries that were found (with their file) and the ones that were not."""

    found: list[tuple[str, Path]] = field(default_factory=list)
    not_found: list[str] = field(default_factory=list)


class LibraryResolver:
    """Searches ``<name>.slx`` in an ordered list of directories; the first match wins."""

    def __init__(self, search_paths: Iterable[str | Path]) -> None:
        self._search_paths = [Path(p) for p in search_paths]

    @property
    def search_paths(self) -> list[Path]:
        return list(self._search_paths)

    def locate(self, names: Iterable[str]) -> LibraryLookupResult:
        """Locate each distinct library name; blank names are ignored."""
        result = LibraryLookupResult()
        seen: set[str] = set()
        for raw in names:
            name = raw.strip()
            if not name or name in seen:
                continue
            seen.add(name)
            match = self.find(name)
            if match is None:
                result.not_found.append(name)
            else:
                result.found.append((name, match))
        return result

    def find(self, name: str) -> Path | None:
        """Return the file of library *name*, or None."""
        for directory in self._search_paths:
            candidate = directory / f"{name}{LIBRARY_SUFFIX}"
            if candidate.is_file():
                return candidate
        return None


def parse_library_file(path: str | Path, config: ParserConfig | None = None) -> System:
    """Parse the root system of a library archive.

    Raises:
        ContentSourceError: If the archive cannot be opened or lacks the root system file.
        StructuralParseError: If the root system file is malformed.
    """
    with ZipSource(path) as source:
        return SimulinkParser(LIBRARY_MODEL_ROOT, source, config).parse_root_system()


def resolve_library_references(
    system: System,
    search_paths: Iterable[str | Path] | None = None,
    *,
    config: ParserConfig | None = None,
    log: DiagnosticLog | None = None,
) -> int:
    """Link every block with a ``SourceBlock`` property to its library block.

    A linked block receives a copy of the library block's nested system and
    has ``library_source`` and ``library_block_path`` set. Libraries or blocks
    that cannot be found are logged and recorded; the block is left as parsed.

    Args:
        system: The parsed model; updated in place, recursively.
        search_paths: Directories to search; defaults to the configured
            ``library-search-paths``.
        config: Parser configuration used for the library files themselves.
        log: Receives an UNRESOLVED_REFERENCE entry for each failed link.

    Returns:
        The number of blocks that were linked.
    """
    config = config or ParserConfig()
    paths = list(search_paths) if search_paths is not None else list(config.library_search_paths)
    linker = _Linker(LibraryResolver(paths), config, log)
    linker.link(system, ())
    return linker.linked


# ################
# Implementation
# ################


class _Linker:
    def __init__(self, resolver: LibraryResolver, config: ParserConfig, log: DiagnosticLog | None) -> None:
        self._resolver = resolver
        self._config = config
        self._log = log
        self._cache: dict[str, System | None] = {}
        self.linked = 0

    def link(self, system: System, active: tuple[str, ...]) -> None:
        for block in system.blocks:
            source_block = block.properties.get(SOURCE_BLOCK_PROPERTY, "").strip()
            if "/" in source_block:
                if source_block in active:
                    self._unresolved(block, f"Library block {source_block!r} contains itself")
                    continue
                if self._link_block(block, source_block):
                    active_here = (*active, source_block)
                else:
                    active_here = active
            else:
                active_here = active
            if block.subsystem is not None:
                self.link(block.subsystem, active_here)

    def _link_block(self, block: Block, source_block: str) -> bool:
        library_name, _, block_path = source_block.partition("/")
        library_name = library_name.strip()
        library = self._load(library_name, block)
        if library is None:
            return False
        target = _find_block(library, block_path.strip())
        if target is None:
            self._unresolved(block, f"Block {block_path!r} not found in library {library_name!r}")
            return False
        if target.subsystem is not None:
            block.subsystem = target.subsystem.model_copy(deep=True)
        block.library_source = library_name
        block.library_block_path = source_block
        self.linked += 1
        return True

    def _load(self, name: str, block: Block) -> System | None:
        if name in self._cache:
            library = self._cache[name]
            if library is None:
                self._unresolved(block, f"Library {name!r} is not available")
            return library
        library = None
        path = self._resolver.find(name)
        if path is None:
            self._unresolved(block, f"Library {name!r} not found in search paths")
        else:
            try:
                library = parse_library_file(path, self._config)
            except (ContentSourceError, StructuralParseError) as exc:
                self._unresolved(block, f"Failed to parse library {name!r}: {exc}")
        self._cache[name] = library
        return library

    def _unresolved(self, block: Block, message: str) -> None:
        logger.warning("%s: %s", block.name, message)
        if self._log is not None:
            self._log.record(DiagnosticKind.UNRESOLVED_REFERENCE, "<library>", message, block.name)


def _find_block(system: System, block_path: str) -> Block | None:
    """Find a block by name, or by a ``/``-separated path through nested systems."""
    for block in system.blocks:
        if block.name == block_path:
            return block
    head, sep, rest = block_path.partition("/")
    if not sep:
        return None
    for block in system.blocks:
        if block.name == head and block.subsystem is not None:
            return _find_block(block.subsystem, rest)
    return None
