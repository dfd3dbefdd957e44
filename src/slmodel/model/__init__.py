# Copyright 2026 slmodel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model for parsed block diagrams (systems, blocks, lines, masks, manifests)."""

from slmodel.model.entities import (
    Annotation,
    Block,
    Branch,
    CFunctionCode,
    Chart,
    ChartPort,
    DialogControl,
    EndpointRef,
    Line,
    Mask,
    MaskParameter,
    Port,
    PortCounts,
    System,
)
from slmodel.model.manifest import ExternalFileReference, GraphicalInterface
from slmodel.model.types import (
    SUBSYSTEM_BLOCK_TYPES,
    DialogControlType,
    ExternalFileReferenceType,
    MaskParameterType,
    NameLocation,
    Point,
    Rect,
    SolverName,
)

__all__ = [
    # Value types
    "SUBSYSTEM_BLOCK_TYPES",
    "NameLocation",
    "MaskParameterType",
    "DialogControlType",
    "ExternalFileReferenceType",
    "SolverName",
    "Point",
    "Rect",
    # Entities
    "PortCounts",
    "Port",
    "EndpointRef",
    "Branch",
    "Line",
    "Annotation",
    "CFunctionCode",
    "MaskParameter",
    "DialogControl",
    "Mask",
    "ChartPort",
    "Chart",
    "Block",
    "System",
    # Manifest
    "ExternalFileReference",
    "GraphicalInterface",
]
