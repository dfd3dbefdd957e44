# Copyright 2026 slmodel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Serialization and deserialization of parsed System trees.

A parsed model is cached as a compact JSON document so that large models do
not need to be re-parsed from their file tree. The format is versioned so
that schema changes are detected instead of silently misread.
"""

from __future__ import annotations

import json
from pathlib import Path

from slmodel.model.entities import System

# ###############
# Public Interface
# ###############

ARTIFACT_FORMAT_VERSION = "1"
ARTIFACT_SUFFIX = ".slmodel.json"


def serialize(system: System) -> str:
    """Serialize a System tree to a compact JSON string."""
    payload = {
        "v": ARTIFACT_FORMAT_VERSION,
        "system": system.model_dump(mode="json", exclude_defaults=True),
    }
    return json.dumps(payload, separators=(",", ":"))


def deserialize(data: str) -> System:
    """Deserialize a System tree from a JSON string.

    Args:
        data: JSON string produced by :func:`serialize`.

    Returns:
        The reconstructed :class:`System`.

    Raises:
        ValueError: If the artifact format version is not recognised.
    """
    obj = json.loads(data)
    version = obj.get("v") if isinstance(obj, dict) else None
    if version != ARTIFACT_FORMAT_VERSION:
        raise ValueError(f"Unsupported artifact format version: {version!r}")
    return System.model_validate(obj.get("system", {}))


def write_artifact(system: System, path: Path) -> None:
    """Write a System artifact to *path*, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize(system), encoding="utf-8")


def read_artifact(path: Path) -> System:
    """Read and deserialize a System artifact from *path*."""
    return deserialize(path.read_text(encoding="utf-8"))
