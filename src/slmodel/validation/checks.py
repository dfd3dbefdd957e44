# Copyright 2026 slmodel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Consistency checks for parsed models.

These checks operate on a parsed System tree and report violations of the
model's structural invariants. Parsing itself is lenient; callers that need
a clean model run these checks afterwards and decide what is fatal for them.
"""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass, field

from slmodel.mask.evaluator import evaluate_mask_display
from slmodel.model.entities import System
from slmodel.model.types import SUBSYSTEM_BLOCK_TYPES
from slmodel.views.navigation import format_path

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class ValidationWarning:
    """A non-fatal issue: the model is usable but incomplete.

    Attributes:
        message: Human-readable description of the warning.
    """

    message: str


@dataclass(frozen=True)
class ValidationError:
    """A violated model invariant.

    Attributes:
        message: Human-readable description of the error.
    """

    message: str


@dataclass
class ValidationResult:
    """Result of running the model checks.

    Attributes:
        warnings: Non-fatal issues found during validation.
        errors: Invariant violations.
    """

    warnings: list[ValidationWarning] = field(default_factory=list)
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Return True if any validation errors were found."""
        return len(self.errors) > 0


def validate(root: System, block_types: Collection[str] = SUBSYSTEM_BLOCK_TYPES) -> ValidationResult:
    """Run all checks on every System of the tree rooted at *root*.

    Checks performed per System:

    1. **Duplicate SIDs** (error): two blocks of the same System share a SID.
       SIDs may repeat across different Systems.

    2. **Duplicate names** (error): two blocks of the same System share a name.

    3. **Unresolved subsystems** (warning): a subsystem-type block references
       a system file but has no nested System.

    4. **Dangling line endpoints** (warning): a line source or destination
       names a SID that no block of the System carries. Endpoints into linked
       subsystems (``"2::28"``) are not checked.

    5. **Stale mask display text** (error): a block's ``mask_display_text``
       differs from what evaluating its mask produces now.

    Args:
        root: The parsed root System.
        block_types: Block types that own a nested System.

    Returns:
        A :class:`ValidationResult`; an empty result means no issue was found.
    """
    result = ValidationResult()
    _check_system(root, [], block_types, result)
    return result


# ################
# Implementation
# ################


def _check_system(system: System, path: list[str], block_types: Collection[str], result: ValidationResult) -> None:
    label = format_path(path)
    _check_duplicates(system, label, result)
    _check_unresolved_subsystems(system, label, block_types, result)
    _check_line_endpoints(system, label, result)
    _check_mask_display(system, label, result)
    for block in system.blocks:
        if block.subsystem is not None:
            _check_system(block.subsystem, [*path, block.name], block_types, result)


def _check_duplicates(system: System, label: str, result: ValidationResult) -> None:
    seen_sids: dict[int, str] = {}
    seen_names: set[str] = set()
    for block in system.blocks:
        if block.sid is not None:
            if block.sid in seen_sids:
                result.errors.append(
                    ValidationError(
                        f"{label}: SID {block.sid} is used by both '{seen_sids[block.sid]}' and '{block.name}'"
                    )
                )
            else:
                seen_sids[block.sid] = block.name
        if block.name in seen_names:
            result.errors.append(ValidationError(f"{label}: block name '{block.name}' is not unique"))
        seen_names.add(block.name)


def _check_unresolved_subsystems(
    system: System, label: str, block_types: Collection[str], result: ValidationResult
) -> None:
    for block in system.blocks:
        if block.block_type in block_types and block.system_ref is not None and block.subsystem is None:
            message = f"{label}: block '{block.name}' references '{block.system_ref}' which was not resolved"
            result.warnings.append(ValidationWarning(message))


def _check_line_endpoints(system: System, label: str, result: ValidationResult) -> None:
    known = {str(block.sid) for block in system.blocks if block.sid is not None}
    for line in system.lines:
        endpoints = ([line.src] if line.src is not None else []) + line.destinations()
        for endpoint in endpoints:
            if "::" in endpoint.sid or endpoint.sid in known:
                continue
            name = f"line '{line.name}'" if line.name else "a line"
            result.warnings.append(
                ValidationWarning(f"{label}: {name} connects to unknown block SID '{endpoint.sid}'")
            )


def _check_mask_display(system: System, label: str, result: ValidationResult) -> None:
    for block in system.blocks:
        if block.mask_display_text is None:
            continue
        expected = evaluate_mask_display(block.mask)
        if block.mask_display_text != expected:
            result.errors.append(
                ValidationError(
                    f"{label}: block '{block.name}' shows mask text {block.mask_display_text!r} "
                    f"but its mask evaluates to {expected!r}"
                )
            )
