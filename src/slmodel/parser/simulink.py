# Copyright 2026 slmodel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Structural parser for a model file tree.

A model is laid out under one root directory::

    <root>/systems/system_root.xml
    <root>/systems/system_<N>.xml
    <root>/stateflow/chart_<N>.xml
    <root>/graphicalInterface.json

System files reference each other through ``<System Ref="system_N"/>``.
The parser follows those references recursively, attaches the nested
systems to their blocks, and evaluates block masks.

Failures in the requested file are raised. Failures in referenced files are
contained to the referencing block, which is kept with no nested system, and
are reported through :attr:`SimulinkParser.diagnostics`. A reference cycle is
always raised.
"""

from __future__ import annotations

import logging
from pathlib import PurePath, PurePosixPath

from slmodel.mask.evaluator import evaluate_mask
from slmodel.model.entities import Block, Chart, System
from slmodel.model.manifest import GraphicalInterface
from slmodel.parser.chart import chart_path_for, parse_chart_from_text
from slmodel.parser.diagnostics import Diagnostic, DiagnosticKind, DiagnosticLog
from slmodel.parser.elements import ElementReader, parse_document
from slmodel.parser.errors import StructuralParseError, SubsystemCycleError
from slmodel.parser.graphical_interface import parse_graphical_interface_text
from slmodel.parser.helpers import resolve_system_reference
from slmodel.parser.source import ContentNotFoundError, ContentSource, ContentSourceError
from slmodel.workspace.config import ParserConfig

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

ROOT_SYSTEM_FILE = "system_root.xml"
GRAPHICAL_INTERFACE_FILE = "graphicalInterface.json"


class SimulinkParser:
    """Parses the files of one model through a :class:`ContentSource`.

    Args:
        root: Directory holding the ``systems`` and ``stateflow`` directories,
            as addressed through *source*.
        source: Where file text is read from.
        config: Parser settings; defaults apply when omitted.
    """

    def __init__(self, root: str | PurePath, source: ContentSource, config: ParserConfig | None = None) -> None:
        self._root = PurePosixPath(str(root).replace("\\", "/"))
        self._source = source
        self._config = config or ParserConfig()
        self._log = DiagnosticLog()

    @property
    def root(self) -> PurePosixPath:
        return self._root

    @property
    def config(self) -> ParserConfig:
        return self._config

    @property
    def systems_dir(self) -> PurePosixPath:
        return self._root / self._config.systems_directory

    @property
    def stateflow_dir(self) -> PurePosixPath:
        return self._root / self._config.stateflow_directory

    @property
    def diagnostics(self) -> list[Diagnostic]:
        """Contained problems found by the most recent parse call."""
        return self._log.entries

    def parse_system_file(self, path: str | PurePath) -> System:
        """Parse a system file and every system file it references.

        Raises:
            ContentSourceError: If *path* cannot be read.
            StructuralParseError: If *path* is malformed or has no ``<System>``
                element, or if a subsystem reference cycle is found.
        """
        self._log = DiagnosticLog()
        return self._parse_system(_logical(path), ())

    def parse_root_system(self) -> System:
        """Parse ``<root>/systems/system_root.xml``."""
        return self.parse_system_file(self.systems_dir / ROOT_SYSTEM_FILE)

    def parse_chart_file(self, path: str | PurePath) -> Chart:
        """Parse a state-machine chart file.

        Raises:
            ContentSourceError: If *path* cannot be read.
            StructuralParseError: If the chart XML is malformed.
        """
        self._log = DiagnosticLog()
        logical = _logical(path)
        return parse_chart_from_text(self._source.read(logical), str(logical))

    def parse_graphical_interface_file(self, path: str | PurePath | None = None) -> GraphicalInterface:
        """Parse the graphical-interface manifest, by default ``<root>/graphicalInterface.json``.

        Entries that lack a required field are skipped and reported in
        :attr:`diagnostics`.

        Raises:
            ContentSourceError: If the file cannot be read.
            StructuralParseError: If the file is not JSON or lacks the
                ``GraphicalInterface`` object.
        """
        self._log = DiagnosticLog()
        logical = _logical(path) if path is not None else self._root / GRAPHICAL_INTERFACE_FILE
        return parse_graphical_interface_text(self._source.read(logical), str(logical), self._log)

    def graphical_interface_library_names(self, path: str | PurePath | None = None) -> list[str]:
        """Return the library names referenced by the manifest at *path*."""
        return self.parse_graphical_interface_file(path).library_names()

    # ------------------------------------------------------------------
    # Recursion
    # ------------------------------------------------------------------

    def _parse_system(self, path: PurePosixPath, ancestors: tuple[str, ...]) -> System:
        key = str(path)
        if key in ancestors:
            raise SubsystemCycleError([*ancestors, key])
        chain = (*ancestors, key)

        document = parse_document(self._source.read(path), key)
        node = document if document.tag == "System" else document.find(".//System")
        if node is None:
            raise StructuralParseError("Document has no <System> element", key)

        system = ElementReader(key, self._log).read_system(node)
        self._complete(system, key, chain)
        logger.debug("Parsed %s: %d blocks, %d lines", key, len(system.blocks), len(system.lines))
        return system

    def _complete(self, system: System, path: str, chain: tuple[str, ...]) -> None:
        """Resolve references and evaluate masks for the blocks of *system*, in document order."""
        for block in system.blocks:
            if block.subsystem is not None:
                self._complete(block.subsystem, path, chain)
            elif block.system_ref is not None:
                if block.block_type in self._config.subsystem_block_types:
                    block.subsystem = self._resolve_reference(block, path, chain)
                else:
                    reason = f"Block type {block.block_type!r} does not own a nested system; reference ignored"
                    logger.warning("%s [%s]: %s", path, block.name, reason)
                    self._log.record(DiagnosticKind.UNRESOLVED_REFERENCE, path, reason, block.name)
            if block.mask is not None and self._config.evaluate_masks:
                self._evaluate(block, path)

    def _resolve_reference(self, block: Block, path: str, chain: tuple[str, ...]) -> System | None:
        target = resolve_system_reference(block.system_ref, self.systems_dir)
        try:
            return self._parse_system(target, chain)
        except SubsystemCycleError:
            raise
        except ContentNotFoundError:
            chart = self._find_chart(block.system_ref)
            if chart is not None:
                return System(chart=chart)
            reason = f"Subsystem file not found: {target}"
        except (ContentSourceError, StructuralParseError) as exc:
            reason = f"Cannot parse subsystem file {target}: {exc}"
        logger.warning("%s [%s]: %s", path, block.name, reason)
        self._log.record(DiagnosticKind.UNRESOLVED_REFERENCE, path, reason, block.name)
        return None

    def _find_chart(self, reference: str) -> Chart | None:
        """Return the chart standing in for a missing ``system_<N>`` file, if there is one."""
        name = chart_path_for(reference)
        if name is None:
            return None
        chart_path = self.stateflow_dir / name
        if not self._source.exists(chart_path):
            return None
        try:
            return parse_chart_from_text(self._source.read(chart_path), str(chart_path))
        except (ContentSourceError, StructuralParseError) as exc:
            logger.warning("Cannot parse chart %s: %s", chart_path, exc)
            return None

    def _evaluate(self, block: Block, path: str) -> None:
        evaluation = evaluate_mask(block.mask)
        block.mask_display_text = evaluation.text
        if evaluation.text is None and (block.mask.display or "").strip():
            logger.debug("%s [%s]: no mask display text: %s", path, block.name, evaluation.reason)
            self._log.record(DiagnosticKind.EVALUATION_MISS, path, evaluation.reason or "", block.name)


# ################
# Implementation
# ################


def _logical(path: str | PurePath) -> PurePosixPath:
    return PurePosixPath(str(path).replace("\\", "/"))
