# Copyright 2026 slmodel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Core diagram entities: systems, blocks, lines, ports, masks, and charts."""

from __future__ import annotations

from pydantic import BaseModel
from pydantic import Field as _Field

from slmodel.model.types import DialogControlType, MaskParameterType, NameLocation, Point, Rect

# ###############
# Public Interface
# ###############


class PortCounts(BaseModel):
    """Declared number of input and output ports (``<PortCounts in=".." out=".."/>``)."""

    ins: int | None = None
    outs: int | None = None


class Port(BaseModel):
    """A port descriptor from ``<PortProperties>``."""

    port_type: str
    index: int | None = None
    properties: dict[str, str] = _Field(default_factory=dict)


class EndpointRef(BaseModel):
    """One end of a signal line, e.g. ``52#out:1``.

    The SID is kept as the raw block reference text, since endpoints may
    address blocks inside linked subsystems (``2::28``).
    """

    sid: str
    port_type: str
    port_index: int


class Branch(BaseModel):
    """A branch of a signal line; branches nest to form a tree of destinations."""

    name: str | None = None
    zorder: int | None = None
    dst: EndpointRef | None = None
    points: list[Point] = _Field(default_factory=list)
    labels: str | None = None
    branches: list[Branch] = _Field(default_factory=list)
    properties: dict[str, str] = _Field(default_factory=dict)


class Line(BaseModel):
    """A signal connection from one source port to one or more destination ports."""

    name: str | None = None
    zorder: int | None = None
    src: EndpointRef | None = None
    dst: EndpointRef | None = None
    points: list[Point] = _Field(default_factory=list)
    labels: str | None = None
    branches: list[Branch] = _Field(default_factory=list)
    properties: dict[str, str] = _Field(default_factory=dict)

    def destinations(self) -> list[EndpointRef]:
        """Return every destination reached by this line, in document order."""
        found: list[EndpointRef] = []
        if self.dst is not None:
            found.append(self.dst)
        pending = list(self.branches)
        while pending:
            branch = pending.pop(0)
            if branch.dst is not None:
                found.append(branch.dst)
            pending[0:0] = branch.branches
        return found


class Annotation(BaseModel):
    """Free text attached to a system or a block."""

    sid: int | None = None
    text: str | None = None
    position: Rect | None = None
    zorder: int | None = None
    interpreter: str | None = None
    properties: dict[str, str] = _Field(default_factory=dict)


class CFunctionCode(BaseModel):
    """Inline code bodies carried by a C-function block."""

    output_code: str | None = None
    start_code: str | None = None
    terminate_code: str | None = None
    codegen_output_code: str | None = None
    codegen_start_code: str | None = None
    codegen_terminate_code: str | None = None


class MaskParameter(BaseModel):
    """A user-configurable mask parameter.

    ``value`` is always stored as text, whatever the declared type. Popup
    values conventionally read ``"<index>. <label>"``.
    """

    name: str
    type: MaskParameterType = MaskParameterType.UNKNOWN
    type_token: str = ""
    prompt: str | None = None
    value: str | None = None
    callback: str | None = None
    tunable: bool | None = None
    visible: bool | None = None
    type_options: list[str] = _Field(default_factory=list)


class DialogControl(BaseModel):
    """One entry of a mask's dialog layout. Not used by evaluation."""

    type: DialogControlType = DialogControlType.UNKNOWN
    name: str | None = None
    prompt: str | None = None
    prompt_location: str | None = None
    children: list[DialogControl] = _Field(default_factory=list)


class Mask(BaseModel):
    """Per-block configuration metadata: parameters plus initialization and display scripts."""

    display: str | None = None
    display_attributes: dict[str, str] = _Field(default_factory=dict)
    description: str | None = None
    initialization: str | None = None
    help: str | None = None
    parameters: list[MaskParameter] = _Field(default_factory=list)
    dialog: list[DialogControl] = _Field(default_factory=list)


class ChartPort(BaseModel):
    """An input or output data item of a state-machine chart."""

    name: str
    size: str | None = None
    method: str | None = None
    primitive: str | None = None
    is_signed: bool | None = None
    word_length: int | None = None
    complexity: str | None = None
    frame: str | None = None
    data_type: str | None = None
    unit: str | None = None


class Chart(BaseModel):
    """Minimal representation of an embedded state-machine chart."""

    id: int | None = None
    name: str | None = None
    eml_name: str | None = None
    script: str | None = None
    inputs: list[ChartPort] = _Field(default_factory=list)
    outputs: list[ChartPort] = _Field(default_factory=list)
    properties: dict[str, str] = _Field(default_factory=dict)


class Block(BaseModel):
    """One diagram node.

    ``properties`` holds every ``<P>`` pair of the source element in document
    order, including the ones that are also exposed as typed fields.

    ``mask_display_text`` is derived: it is written only by the mask
    evaluation engine (see :func:`slmodel.mask.refresh_mask_display`).
    """

    block_type: str
    name: str
    sid: int | None = None
    tag_name: str = "Block"
    position: Rect | None = None
    zorder: int | None = None
    commented: bool = False
    is_matlab_function: bool = False
    name_location: NameLocation = NameLocation.BOTTOM
    properties: dict[str, str] = _Field(default_factory=dict)
    port_counts: PortCounts | None = None
    ports: list[Port] = _Field(default_factory=list)
    subsystem: System | None = None
    system_ref: str | None = None
    c_function: CFunctionCode | None = None
    instance_data: dict[str, str] | None = None
    mask: Mask | None = None
    annotations: list[Annotation] = _Field(default_factory=list)
    background_color: str | None = None
    show_name: bool | None = None
    font_size: int | None = None
    font_weight: str | None = None
    block_mirror: bool | None = None
    value: str | None = None
    current_setting: str | None = None
    library_source: str | None = None
    library_block_path: str | None = None
    mask_display_text: str | None = None


class System(BaseModel):
    """One diagram level (root or subsystem) owning its blocks and lines."""

    properties: dict[str, str] = _Field(default_factory=dict)
    blocks: list[Block] = _Field(default_factory=list)
    lines: list[Line] = _Field(default_factory=list)
    annotations: list[Annotation] = _Field(default_factory=list)
    chart: Chart | None = None


# Resolve forward references in self-referential models.
Branch.model_rebuild()
DialogControl.model_rebuild()
Block.model_rebuild()
System.model_rebuild()
