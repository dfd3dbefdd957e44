# Copyright 2026 slmodel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Graphical-interface manifest: external file references and solver settings."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic import Field as _Field

from slmodel.model.types import ExternalFileReferenceType, SolverName

# ###############
# Public Interface
# ###############


class ExternalFileReference(BaseModel):
    """A manifest entry mapping a symbolic model path to externally defined content.

    ``sid`` stays a string: manifest SIDs come from a different producer than
    block SIDs and are not guaranteed to be numeric.
    """

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    path: str = _Field(alias="Path")
    reference: str = _Field(alias="Reference")
    sid: str = _Field(alias="SID")
    type: ExternalFileReferenceType = _Field(alias="Type")
    type_token: str = ""

    @model_validator(mode="before")
    @classmethod
    def _keep_type_token(cls, data: Any) -> Any:
        if isinstance(data, dict) and "type_token" not in data:
            key = "Type" if "Type" in data else "type"
            if key in data:
                raw = data[key]
                token = raw.value if isinstance(raw, ExternalFileReferenceType) else str(raw)
                data = {**data, "type_token": token}
        return data

    @field_validator("type", mode="before")
    @classmethod
    def _map_unknown_type(cls, value: Any) -> ExternalFileReferenceType:
        if isinstance(value, ExternalFileReferenceType):
            return value
        return reference_type_from_token(value if isinstance(value, str) else str(value))


class GraphicalInterface(BaseModel):
    """Parsed ``graphicalInterface.json`` manifest."""

    external_file_references: list[ExternalFileReference] = _Field(default_factory=list)
    solver_name: SolverName = SolverName.UNSET
    solver_token: str | None = None
    precomp_execution_domain_type: str | None = None
    simulink_sub_domain_type: str | None = None

    def library_names(self) -> list[str]:
        """Return the unique library names of library-block references, first seen first.

        The library name is the part of the reference before the first ``/``.
        """
        names: list[str] = []
        for ref in self.external_file_references:
            if ref.type != ExternalFileReferenceType.LIBRARY_BLOCK:
                continue
            lib = ref.reference.split("/", 1)[0].strip()
            if lib and lib not in names:
                names.append(lib)
        return names


def reference_type_from_token(token: str) -> ExternalFileReferenceType:
    """Map a manifest ``Type`` token to its enum member, UNKNOWN when unrecognized."""
    try:
        member = ExternalFileReferenceType(token)
    except ValueError:
        return ExternalFileReferenceType.UNKNOWN
    return member


def solver_from_token(token: str | None) -> SolverName:
    """Map a manifest ``SolverName`` token to its enum member, UNSET when absent or unrecognized."""
    if not token or token == SolverName.UNSET.value:
        return SolverName.UNSET
    try:
        return SolverName(token)
    except ValueError:
        return SolverName.UNSET
