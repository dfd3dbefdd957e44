# Copyright 2026 slmodel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Mask display evaluation.

Runs a mask's initialization script to collect literal tables, then resolves
the first ``disp(table{index})`` call of its display script against the
current parameter values. A script that falls outside the supported subset
produces no text; it never raises.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from slmodel.mask.script import DisplayCall, TableDeclaration, parse_script
from slmodel.model.entities import Block, Mask, MaskParameter
from slmodel.model.types import MaskParameterType

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class MaskEvaluation:
    """Outcome of evaluating one mask.

    Attributes:
        text: The display text, or None when evaluation produced nothing.
        reason: Why no text was produced; None on success.
    """

    text: str | None
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.text is not None


def evaluate_mask(mask: Mask | None) -> MaskEvaluation:
    """Evaluate *mask* and explain the outcome."""
    if mask is None or not (mask.display or "").strip():
        return MaskEvaluation(None, "mask has no display script")

    init_statements = parse_script(mask.initialization or "")
    display_statements = parse_script(mask.display or "")

    tables: dict[str, tuple[str, ...]] = {}
    for statement in init_statements:
        if isinstance(statement, TableDeclaration):
            tables[statement.name] = statement.values

    call = next((s for s in display_statements if isinstance(s, DisplayCall)), None)
    if call is None:
        return MaskEvaluation(None, "display script has no disp(table{index}) call")

    expr = call.argument
    table = tables.get(expr.table)
    if table is None:
        return MaskEvaluation(None, f"table '{expr.table}' is not declared")

    if isinstance(expr.index, int):
        index: int | None = expr.index
    else:
        parameter = find_parameter(mask, expr.index)
        if parameter is None:
            return MaskEvaluation(None, f"parameter '{expr.index}' is not declared")
        index = parameter_index(parameter)
        if index is None:
            return MaskEvaluation(None, f"parameter '{expr.index}' has no usable index value: {parameter.value!r}")

    if not 1 <= index <= len(table):
        return MaskEvaluation(None, f"index {index} is out of range for table '{expr.table}' of size {len(table)}")
    return MaskEvaluation(table[index - 1])


def evaluate_mask_display(mask: Mask | None) -> str | None:
    """Return the display text for *mask*, or None."""
    return evaluate_mask(mask).text


def refresh_mask_display(block: Block) -> str | None:
    """Recompute and store ``block.mask_display_text`` from the block's mask."""
    block.mask_display_text = evaluate_mask_display(block.mask)
    return block.mask_display_text


def set_mask_parameter_value(block: Block, name: str, value: str | None) -> str | None:
    """Update one mask parameter value and re-evaluate the block's display text.

    Returns:
        The new display text.

    Raises:
        KeyError: If the block has no mask or the mask has no parameter *name*.
    """
    parameter = find_parameter(block.mask, name) if block.mask is not None else None
    if parameter is None:
        raise KeyError(f"Block '{block.name}' has no mask parameter '{name}'")
    parameter.value = value
    return refresh_mask_display(block)


def find_parameter(mask: Mask, name: str) -> MaskParameter | None:
    """Return the parameter called *name* (case-sensitive), or None."""
    for parameter in mask.parameters:
        if parameter.name == name:
            return parameter
    return None


def parameter_index(parameter: MaskParameter) -> int | None:
    """Return the 1-based position encoded in a parameter's current value.

    Choice values read ``"<index>. <label>"`` and yield their leading integer.
    A popup value without one is looked up in the parameter's options.
    """
    value = (parameter.value or "").strip()
    match = _LEADING_INDEX.match(value)
    if match:
        return int(match.group(1))
    if value and parameter.type == MaskParameterType.POPUP:
        options = [option.strip() for option in parameter.type_options]
        if value in options:
            return options.index(value) + 1
    return None


# ################
# Implementation
# ################

_LEADING_INDEX = re.compile(r"(\d+)(?:\.|\s|$)")
