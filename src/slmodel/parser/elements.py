# Copyright 2026 slmodel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Mapping of system-file XML elements onto model entities.

Everything here works on a single document and never follows references
into other files; :mod:`slmodel.parser.simulink` does that.
"""

from __future__ import annotations

import enum
import logging
import xml.etree.ElementTree as ET
from typing import TypeVar

from slmodel.model.entities import (
    Annotation,
    Block,
    Branch,
    CFunctionCode,
    DialogControl,
    EndpointRef,
    Line,
    Mask,
    MaskParameter,
    Port,
    PortCounts,
    System,
)
from slmodel.model.types import DialogControlType, MaskParameterType, Rect
from slmodel.parser.diagnostics import DiagnosticKind, DiagnosticLog
from slmodel.parser.errors import StructuralParseError
from slmodel.parser.helpers import (
    parse_color,
    parse_endpoint,
    parse_flag,
    parse_int,
    parse_name_location,
    parse_points,
    parse_rect,
)

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

BLOCK_TAGS = ("Block", "Reference")

C_FUNCTION_BLOCK_TYPE = "CFunction"
CONSTANT_BLOCK_TYPE = "Constant"
CONSTANT_DEFAULT_VALUE = "1"


def parse_document(text: str, path: str) -> ET.Element:
    """Parse XML *text* and return its root element.

    Raises:
        StructuralParseError: If the text is not well-formed XML.
    """
    try:
        return ET.fromstring(text)
    except ET.ParseError as exc:
        line, column = exc.position
        raise StructuralParseError(f"Malformed XML: {exc}", path, line, column + 1) from exc


class ElementReader:
    """Builds model entities from the elements of one document.

    Values that cannot be coerced to their typed form are left absent and
    recorded in *log* against *path*.
    """

    def __init__(self, path: str, log: DiagnosticLog) -> None:
        self._path = path
        self._log = log

    # ------------------------------------------------------------------
    # System
    # ------------------------------------------------------------------

    def read_system(self, node: ET.Element) -> System:
        """Read a ``<System>`` element, including inline nested systems."""
        system = System()
        for child in node:
            if child.tag == "P":
                name = child.get("Name")
                if name is not None:
                    system.properties[name] = child.text or ""
            elif child.tag in BLOCK_TAGS:
                system.blocks.append(self.read_block(child))
            elif child.tag == "Line":
                system.lines.append(self.read_line(child))
            elif child.tag == "Annotation":
                system.annotations.append(self.read_annotation(child))
        return system

    # ------------------------------------------------------------------
    # Block
    # ------------------------------------------------------------------

    def read_block(self, node: ET.Element) -> Block:
        """Read a ``<Block>`` or ``<Reference>`` element."""
        block_type = node.get("BlockType", "")
        if not block_type and node.tag == "Reference":
            block_type = "Reference"
        name = node.get("Name", "")
        block = Block(block_type=block_type, name=name, tag_name=node.tag)

        sid_text = node.get("SID")
        if sid_text is not None:
            block.sid = self._coerce_int(sid_text, "SID", name, minimum=0)

        code = CFunctionCode()
        for child in node:
            if child.tag == "P":
                self._apply_property(block, code, child)
            elif child.tag == "PortCounts":
                block.port_counts = PortCounts(
                    ins=self._coerce_int(child.get("in"), "PortCounts.in", name),
                    outs=self._coerce_int(child.get("out"), "PortCounts.out", name),
                )
            elif child.tag == "PortProperties":
                block.ports.extend(self._read_port(port, name) for port in child.iter("Port"))
            elif child.tag == "System":
                ref = child.get("Ref")
                if ref is not None:
                    block.system_ref = ref
                else:
                    block.subsystem = self.read_system(child)
            elif child.tag == "Mask":
                block.mask = self.read_mask(child)
            elif child.tag == "InstanceData":
                block.instance_data = _read_properties(child)
            elif child.tag == "Annotation":
                block.annotations.append(self.read_annotation(child))

        if block.block_type == C_FUNCTION_BLOCK_TYPE:
            block.c_function = code
        # The Value property is omitted when a Constant block holds its default.
        if block.block_type == CONSTANT_BLOCK_TYPE and block.value is None:
            block.value = CONSTANT_DEFAULT_VALUE
        return block

    def _apply_property(self, block: Block, code: CFunctionCode, node: ET.Element) -> None:
        key = node.get("Name")
        if key is None:
            return
        value = node.get("Ref", node.text or "")
        block.properties[key] = value

        if key == "Position":
            block.position = self._coerce_rect(value, block.name)
        elif key == "ZOrder":
            block.zorder = self._coerce_int(value, "ZOrder", block.name)
        elif key == "Commented":
            block.commented = value.strip().lower() == "on"
        elif key == "SFBlockType":
            block.is_matlab_function = value == "MATLAB Function"
        elif key in _C_FUNCTION_FIELDS:
            setattr(code, _C_FUNCTION_FIELDS[key], value)
        elif key == "BackgroundColor":
            block.background_color = parse_color(value)
        elif key == "ShowName":
            block.show_name = value.strip().lower() != "off"
        elif key == "BlockMirror":
            block.block_mirror = parse_flag(value)
        elif key == "FontSize":
            block.font_size = self._coerce_int(value, "FontSize", block.name)
        elif key == "FontWeight":
            block.font_weight = value
        elif key == "NameLocation":
            block.name_location = parse_name_location(value)
        elif key == "Value":
            block.value = value
        elif key == "CurrentSetting":
            block.current_setting = value

    def _read_port(self, node: ET.Element, block_name: str) -> Port:
        index_text = node.get("Index")
        index = self._coerce_int(index_text, "Port.Index", block_name) if index_text is not None else None
        return Port(port_type=node.get("Type", ""), index=index, properties=_read_properties(node))

    # ------------------------------------------------------------------
    # Lines
    # ------------------------------------------------------------------

    def read_line(self, node: ET.Element) -> Line:
        """Read a ``<Line>`` element and its nested branches."""
        line = Line()
        for child in node:
            if child.tag == "P":
                self._apply_line_property(line, child, allow_src=True)
            elif child.tag == "Branch":
                line.branches.append(self.read_branch(child))
        return line

    def read_branch(self, node: ET.Element) -> Branch:
        """Read a ``<Branch>`` element; branches may nest."""
        branch = Branch()
        for child in node:
            if child.tag == "P":
                self._apply_line_property(branch, child, allow_src=False)
            elif child.tag == "Branch":
                branch.branches.append(self.read_branch(child))
        return branch

    def _apply_line_property(self, target: Line | Branch, node: ET.Element, *, allow_src: bool) -> None:
        key = node.get("Name")
        if key is None:
            return
        value = node.text or ""
        target.properties[key] = value
        subject = f"line {target.name}" if target.name else "line"

        if key == "Name":
            target.name = value
        elif key == "ZOrder":
            target.zorder = self._coerce_int(value, "ZOrder", subject)
        elif key == "Src" and allow_src:
            target.src = self._coerce_endpoint(value, "Src", subject)
        elif key == "Dst":
            target.dst = self._coerce_endpoint(value, "Dst", subject)
        elif key == "Labels":
            target.labels = value
        elif key == "Points":
            target.points.extend(parse_points(value))

    # ------------------------------------------------------------------
    # Annotations
    # ------------------------------------------------------------------

    def read_annotation(self, node: ET.Element) -> Annotation:
        """Read an ``<Annotation>`` element; its ``Name`` property is the text."""
        annotation = Annotation()
        sid_text = node.get("SID")
        if sid_text is not None:
            annotation.sid = self._coerce_int(sid_text, "SID", "annotation", minimum=0)
        for child in node:
            key = child.get("Name") if child.tag == "P" else None
            if key is None:
                continue
            value = child.text or ""
            annotation.properties[key] = value
            if key == "Name":
                annotation.text = value
            elif key == "Position":
                annotation.position = self._coerce_rect(value, "annotation")
            elif key == "ZOrder":
                annotation.zorder = self._coerce_int(value, "ZOrder", "annotation")
            elif key == "Interpreter":
                annotation.interpreter = value
        return annotation

    # ------------------------------------------------------------------
    # Masks
    # ------------------------------------------------------------------

    def read_mask(self, node: ET.Element) -> Mask:
        """Read a ``<Mask>`` element."""
        mask = Mask()
        for child in node:
            if child.tag == "Display":
                mask.display = child.text
                mask.display_attributes = dict(child.attrib)
            elif child.tag == "Description":
                mask.description = child.text
            elif child.tag == "Initialization":
                mask.initialization = child.text
            elif child.tag == "Help":
                mask.help = child.text
            elif child.tag == "MaskParameter":
                mask.parameters.append(read_mask_parameter(child))
            elif child.tag == "DialogControl":
                mask.dialog.append(read_dialog_control(child))
        return mask

    # ------------------------------------------------------------------
    # Coercion
    # ------------------------------------------------------------------

    def _coerce_int(self, text: str | None, field: str, subject: str, minimum: int | None = None) -> int | None:
        if text is None:
            return None
        value = parse_int(text)
        if value is None or (minimum is not None and value < minimum):
            self._coercion_failed(f"{field} is not a valid integer: {text!r}", subject)
            return None
        return value

    def _coerce_rect(self, text: str, subject: str) -> Rect | None:
        try:
            return parse_rect(text)
        except ValueError as exc:
            self._coercion_failed(f"Position: {exc}", subject)
            return None

    def _coerce_endpoint(self, text: str, field: str, subject: str) -> EndpointRef | None:
        try:
            return parse_endpoint(text)
        except ValueError as exc:
            self._coercion_failed(f"{field}: {exc}", subject)
            return None

    def _coercion_failed(self, message: str, subject: str) -> None:
        logger.debug("%s [%s]: %s", self._path, subject, message)
        self._log.record(DiagnosticKind.FIELD_COERCION, self._path, message, subject)


def read_mask_parameter(node: ET.Element) -> MaskParameter:
    """Read a ``<MaskParameter>`` element."""
    type_token = node.get("Type", "")
    parameter = MaskParameter(
        name=node.get("Name", ""),
        type=_enum_token(MaskParameterType, type_token, MaskParameterType.UNKNOWN),
        type_token=type_token,
    )
    if node.get("Tunable") is not None:
        parameter.tunable = _is_on(node.get("Tunable"))
    if node.get("Visible") is not None:
        parameter.visible = _is_on(node.get("Visible"))
    for child in node:
        if child.tag == "Prompt":
            parameter.prompt = child.text
        elif child.tag == "Value":
            parameter.value = child.text
        elif child.tag == "Callback":
            parameter.callback = child.text
        elif child.tag == "TypeOptions":
            parameter.type_options.extend(option.text for option in child.iter("Option") if option.text is not None)
    return parameter


def read_dialog_control(node: ET.Element) -> DialogControl:
    """Read a ``<DialogControl>`` element and its nested controls."""
    control = DialogControl(
        type=_enum_token(DialogControlType, node.get("Type", ""), DialogControlType.UNKNOWN),
        name=node.get("Name"),
    )
    for child in node:
        if child.tag == "Prompt":
            control.prompt = child.text
        elif child.tag == "ControlOptions":
            control.prompt_location = child.get("PromptLocation")
        elif child.tag == "DialogControl":
            control.children.append(read_dialog_control(child))
    return control


# ################
# Implementation
# ################

_C_FUNCTION_FIELDS: dict[str, str] = {
    "OutputCode": "output_code",
    "StartCode": "start_code",
    "TerminateCode": "terminate_code",
    "CodegenOutputCode": "codegen_output_code",
    "CodegenStartCode": "codegen_start_code",
    "CodegenTerminateCode": "codegen_terminate_code",
}


_E = TypeVar("_E", bound=enum.Enum)


def _read_properties(node: ET.Element) -> dict[str, str]:
    """Collect the direct ``<P Name="...">`` children of *node*."""
    properties: dict[str, str] = {}
    for child in node:
        if child.tag == "P" and child.get("Name") is not None:
            properties[child.get("Name")] = child.text or ""
    return properties


def _is_on(text: str | None) -> bool:
    value = (text or "").strip()
    return value.lower() == "on" or value == "1"


def _enum_token(enum_type: type[_E], token: str, default: _E) -> _E:
    """Case-insensitive lookup of *token* among the lowercase values of *enum_type*."""
    try:
        return enum_type(token.strip().lower())
    except ValueError:
        return default
