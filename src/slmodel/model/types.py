# Copyright 2026 slmodel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Value types and closed enumerations for the slmodel data model."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

# ###############
# Public Interface
# ###############

SUBSYSTEM_BLOCK_TYPES: tuple[str, ...] = ("SubSystem", "Reference")
"""Block types that own a nested system."""


class NameLocation(Enum):
    """Side of a block on which its name label is drawn."""

    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"


class MaskParameterType(Enum):
    """Declared type of a mask parameter.

    Tokens outside this set map to UNKNOWN; the raw token is kept on the
    parameter itself.
    """

    POPUP = "popup"
    EDIT = "edit"
    CHECKBOX = "checkbox"
    STRING = "string"
    UNKNOWN = "unknown"


class DialogControlType(Enum):
    """Kind of a mask dialog layout entry."""

    GROUP = "group"
    TEXT = "text"
    EDIT = "edit"
    CHECKBOX = "checkbox"
    POPUP = "popup"
    UNKNOWN = "unknown"


class ExternalFileReferenceType(Enum):
    """Reference class of an entry in the graphical-interface manifest."""

    LIBRARY_BLOCK = "LIBRARY_BLOCK"
    MODEL_REFERENCE = "MODEL_REFERENCE"
    SUBSYSTEM_REFERENCE = "SUBSYSTEM_REFERENCE"
    UNKNOWN = "UNKNOWN"


class SolverName(Enum):
    """Solver configured for the model.

    UNSET covers both an absent solver field and a token this library does
    not know about.
    """

    FIXED_STEP_DISCRETE = "FixedStepDiscrete"
    FIXED_STEP_AUTO = "FixedStepAuto"
    VARIABLE_STEP_DISCRETE = "VariableStepDiscrete"
    VARIABLE_STEP_AUTO = "VariableStepAuto"
    ODE1 = "ode1"
    ODE2 = "ode2"
    ODE3 = "ode3"
    ODE4 = "ode4"
    ODE5 = "ode5"
    ODE8 = "ode8"
    ODE14X = "ode14x"
    ODE1BE = "ode1be"
    ODE23 = "ode23"
    ODE45 = "ode45"
    ODE113 = "ode113"
    ODE15S = "ode15s"
    ODE23S = "ode23s"
    ODE23T = "ode23t"
    ODE23TB = "ode23tb"
    DAESSC = "daessc"
    UNSET = "unset"


class Point(BaseModel):
    """An integer diagram coordinate (line waypoint or offset)."""

    x: int
    y: int


class Rect(BaseModel):
    """Axis-aligned block rectangle in diagram coordinates ``[left, top, right, bottom]``."""

    left: int
    top: int
    right: int
    bottom: int

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    @property
    def center(self) -> tuple[float, float]:
        return ((self.left + self.right) / 2, (self.top + self.bottom) / 2)
