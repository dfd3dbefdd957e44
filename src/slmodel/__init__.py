# Copyright 2026 slmodel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Typed reconstruction of block-diagram model file trees, with mask display evaluation."""

from slmodel.mask import evaluate_mask_display, refresh_mask_display, set_mask_parameter_value
from slmodel.model import Block, GraphicalInterface, Line, Mask, MaskParameter, System
from slmodel.parser import (
    ContentNotFoundError,
    ContentSourceError,
    FsSource,
    MemorySource,
    SimulinkParser,
    StructuralParseError,
    SubsystemCycleError,
    ZipSource,
)
from slmodel.views import resolve_subsystem_by_path, resolve_subsystem_by_vec

__all__ = [
    "Block",
    "ContentNotFoundError",
    "ContentSourceError",
    "FsSource",
    "GraphicalInterface",
    "Line",
    "Mask",
    "MaskParameter",
    "MemorySource",
    "SimulinkParser",
    "StructuralParseError",
    "SubsystemCycleError",
    "System",
    "ZipSource",
    "evaluate_mask_display",
    "refresh_mask_display",
    "resolve_subsystem_by_path",
    "resolve_subsystem_by_vec",
    "set_mask_parameter_value",
]
