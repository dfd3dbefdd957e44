# Copyright 2026 slmodel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for System artifact serialization."""

import json
from pathlib import Path

import pytest

from slmodel.model.artifact import ARTIFACT_FORMAT_VERSION, deserialize, read_artifact, serialize, write_artifact
from slmodel.model.entities import Block, EndpointRef, Line, Mask, MaskParameter, System
from slmodel.model.types import MaskParameterType, NameLocation, Rect

# ###############
# Test Helpers
# ###############


def _model() -> System:
    mask = Mask(
        initialization="t = {'On', 'Off'};",
        display="disp(t{state})",
        parameters=[MaskParameter(name="state", type=MaskParameterType.POPUP, value="1. On")],
    )
    inner = System(blocks=[Block(block_type="Gain", name="G", sid=1)])
    return System(
        properties={"Location": "[0, 0, 800, 600]"},
        blocks=[
            Block(
                block_type="SubSystem",
                name="Switch",
                sid=2,
                position=Rect(left=1, top=2, right=3, bottom=4),
                name_location=NameLocation.TOP,
                mask=mask,
                mask_display_text="On",
                subsystem=inner,
            ),
            Block(block_type="Inport", name="In1", sid=3),
        ],
        lines=[
            Line(
                src=EndpointRef(sid="3", port_type="out", port_index=1),
                dst=EndpointRef(sid="2", port_type="in", port_index=1),
            )
        ],
    )


# ###############
# Tests
# ###############


def test_model_survives_serialization() -> None:
    """A parsed model is reconstructed exactly from its artifact."""
    system = _model()
    assert deserialize(serialize(system)) == system


def test_artifact_is_versioned_and_compact() -> None:
    """The artifact carries its format version and omits default values."""
    payload = json.loads(serialize(System(blocks=[Block(block_type="Gain", name="G")])))
    assert payload["v"] == ARTIFACT_FORMAT_VERSION
    block = payload["system"]["blocks"][0]
    assert block["name"] == "G"
    assert "tag_name" not in block
    assert "commented" not in block


def test_unsupported_version() -> None:
    """An artifact of another format version is rejected."""
    with pytest.raises(ValueError, match="Unsupported artifact format version"):
        deserialize('{"v": "0", "system": {}}')


def test_not_an_object() -> None:
    """A JSON value that is not an object is rejected."""
    with pytest.raises(ValueError):
        deserialize("[1, 2]")


def test_write_and_read(tmp_path: Path) -> None:
    """Artifacts are written to disk, creating parent directories."""
    path = tmp_path / "build" / "model.slmodel.json"
    write_artifact(_model(), path)
    assert path.is_file()
    assert read_artifact(path) == _model()
