# Copyright 2026 slmodel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Non-fatal issues collected while parsing.

Problems that are contained to a single field, block, or manifest entry do
not abort a parse. They leave the affected value absent and are recorded
here for tooling that wants to report them.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

# ###############
# Public Interface
# ###############


class DiagnosticKind(enum.Enum):
    """Category of a contained parse problem."""

    UNRESOLVED_REFERENCE = "unresolved-reference"
    FIELD_COERCION = "field-coercion"
    EVALUATION_MISS = "evaluation-miss"
    SKIPPED_REFERENCE = "skipped-reference"


@dataclass(frozen=True)
class Diagnostic:
    """A single contained problem.

    Attributes:
        kind: The category of the problem.
        path: The file being parsed when the problem was found.
        message: Human-readable description.
        subject: The block name, field, or manifest index the problem belongs to.
    """

    kind: DiagnosticKind
    path: str
    message: str
    subject: str = ""

    def __str__(self) -> str:
        subject = f" [{self.subject}]" if self.subject else ""
        return f"{self.path}{subject}: {self.message}"


class DiagnosticLog:
    """Collects diagnostics for one parse call."""

    def __init__(self) -> None:
        self._entries: list[Diagnostic] = []

    def record(self, kind: DiagnosticKind, path: str, message: str, subject: str = "") -> None:
        self._entries.append(Diagnostic(kind=kind, path=path, message=message, subject=subject))

    @property
    def entries(self) -> list[Diagnostic]:
        return list(self._entries)

    def of_kind(self, kind: DiagnosticKind) -> list[Diagnostic]:
        """Return the recorded diagnostics of one kind, in recording order."""
        return [entry for entry in self._entries if entry.kind == kind]

    def __len__(self) -> int:
        return len(self._entries)
