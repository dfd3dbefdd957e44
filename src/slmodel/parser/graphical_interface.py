# Copyright 2026 slmodel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Parsing of the ``graphicalInterface.json`` manifest.

The manifest is written by an external, evolving tool. Unknown enum tokens
are mapped to sentinels, and an entry that lacks a required field is skipped
and recorded instead of failing the whole manifest.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError

from slmodel.model.manifest import ExternalFileReference, GraphicalInterface, solver_from_token
from slmodel.parser.diagnostics import DiagnosticKind, DiagnosticLog
from slmodel.parser.errors import StructuralParseError

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

ROOT_KEY = "GraphicalInterface"


def parse_graphical_interface_text(text: str, path: str, log: DiagnosticLog | None = None) -> GraphicalInterface:
    """Parse manifest JSON text.

    Args:
        text: The JSON document.
        path: Logical path of the document, used in errors and diagnostics.
        log: Receives a SKIPPED_REFERENCE entry for every skipped reference.

    Raises:
        StructuralParseError: If the text is not JSON or lacks the top-level
            ``GraphicalInterface`` object.
    """
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise StructuralParseError(f"Malformed JSON: {exc.msg}", path, exc.lineno, exc.colno) from exc

    body = document.get(ROOT_KEY) if isinstance(document, dict) else None
    if not isinstance(body, dict):
        raise StructuralParseError(f"Missing top-level '{ROOT_KEY}' object", path)

    entries = body.get("ExternalFileReferences") or []
    if isinstance(entries, dict):
        entries = [entries]
    if not isinstance(entries, list):
        raise StructuralParseError("'ExternalFileReferences' must be a list", path)

    references: list[ExternalFileReference] = []
    for index, entry in enumerate(entries):
        reference = _read_reference(entry, index, path, log)
        if reference is not None:
            references.append(reference)

    solver_token = _optional_str(body.get("SolverName"))
    return GraphicalInterface(
        external_file_references=references,
        solver_name=solver_from_token(solver_token),
        solver_token=solver_token,
        precomp_execution_domain_type=_optional_str(body.get("PreCompExecutionDomainType")),
        simulink_sub_domain_type=_optional_str(body.get("SimulinkSubDomainType")),
    )


# ################
# Implementation
# ################


def _read_reference(entry: Any, index: int, path: str, log: DiagnosticLog | None) -> ExternalFileReference | None:
    subject = f"ExternalFileReferences[{index}]"
    if not isinstance(entry, dict):
        message = f"Expected an object, got {type(entry).__name__}"
    else:
        try:
            return ExternalFileReference.model_validate(entry)
        except ValidationError as exc:
            fields = ", ".join(".".join(str(p) for p in err["loc"]) or "<entry>" for err in exc.errors())
            message = f"Invalid or missing field(s): {fields}"
    logger.warning("Skipping %s in %s: %s", subject, path, message)
    if log is not None:
        log.record(DiagnosticKind.SKIPPED_REFERENCE, path, message, subject)
    return None


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)
