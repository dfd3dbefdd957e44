# Copyright 2026 slmodel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Parsers for model file trees: system files, charts, manifests, and libraries."""

from slmodel.parser.chart import parse_chart_from_text
from slmodel.parser.diagnostics import Diagnostic, DiagnosticKind, DiagnosticLog
from slmodel.parser.errors import StructuralParseError, SubsystemCycleError
from slmodel.parser.graphical_interface import parse_graphical_interface_text
from slmodel.parser.library import (
    LibraryLookupResult,
    LibraryResolver,
    parse_library_file,
    resolve_library_references,
)
from slmodel.parser.simulink import SimulinkParser
from slmodel.parser.source import (
    ContentNotFoundError,
    ContentSource,
    ContentSourceError,
    FsSource,
    MemorySource,
    ZipSource,
)

__all__ = [
    "ContentNotFoundError",
    "ContentSource",
    "ContentSourceError",
    "Diagnostic",
    "DiagnosticKind",
    "DiagnosticLog",
    "FsSource",
    "LibraryLookupResult",
    "LibraryResolver",
    "MemorySource",
    "SimulinkParser",
    "StructuralParseError",
    "SubsystemCycleError",
    "ZipSource",
    "parse_chart_from_text",
    "parse_graphical_interface_text",
    "parse_library_file",
    "resolve_library_references",
]
