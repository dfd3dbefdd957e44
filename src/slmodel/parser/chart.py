# Copyright 2026 slmodel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Parsing of state-machine chart files (``stateflow/chart_<id>.xml``).

Only the parts needed to present a MATLAB-function chart are extracted: its
name, the function name, the first embedded script, and the input and output
data items.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET

from slmodel.model.entities import Chart, ChartPort
from slmodel.parser.errors import StructuralParseError
from slmodel.parser.elements import parse_document
from slmodel.parser.helpers import parse_int

# ###############
# Public Interface
# ###############

INPUT_SCOPE = "INPUT_DATA"
OUTPUT_SCOPE = "OUTPUT_DATA"


def parse_chart_from_text(text: str, path: str = "<chart>") -> Chart:
    """Parse chart XML text.

    Raises:
        StructuralParseError: If the text is malformed or has no ``<chart>`` element.
    """
    root = parse_document(text, path)
    node = root if root.tag == "chart" else root.find(".//chart")
    if node is None:
        raise StructuralParseError("Document has no <chart> element", path)

    properties = _named_properties(node)
    chart = Chart(
        id=parse_int(node.get("id")),
        name=properties.get("name"),
        properties=properties,
    )

    eml = node.find("eml")
    if eml is not None:
        chart.eml_name = _named_properties(eml).get("name")

    for state in node.iter("state"):
        state_eml = state.find("eml")
        if state_eml is not None and "script" in _named_properties(state_eml):
            chart.script = _named_properties(state_eml)["script"]
            break

    for data in node.iter("data"):
        port = _read_data(data)
        if port is None:
            continue
        scope, item = port
        if scope == INPUT_SCOPE:
            chart.inputs.append(item)
        elif scope == OUTPUT_SCOPE:
            chart.outputs.append(item)
    return chart


def chart_path_for(reference: str) -> str | None:
    """Return the chart file name that stands in for a system reference.

    ``"system_18"`` maps to ``"chart_18.xml"``; references without a numeric
    suffix have no chart.
    """
    stem = reference.strip().removesuffix(".xml").rsplit("/", 1)[-1]
    prefix, _, number = stem.rpartition("_")
    if prefix != "system" or parse_int(number) is None:
        return None
    return f"chart_{number}.xml"


# ################
# Implementation
# ################


def _named_properties(node: ET.Element) -> dict[str, str]:
    return {child.get("Name"): child.text or "" for child in node.findall("P") if child.get("Name") is not None}


def _read_data(node: ET.Element) -> tuple[str | None, ChartPort] | None:
    name = node.get("name", "")
    if not name:
        return None
    own = _named_properties(node)
    port = ChartPort(name=name, data_type=own.get("dataType"))

    props = node.find("props")
    if props is not None:
        array = props.find("array")
        if array is not None:
            port.size = _named_properties(array).get("size")
        type_node = props.find("type")
        if type_node is not None:
            type_props = _named_properties(type_node)
            port.method = type_props.get("method")
            port.primitive = type_props.get("primitive")
            signed = parse_int(type_props.get("isSigned"))
            port.is_signed = None if signed is None else signed != 0
            port.word_length = parse_int(type_props.get("wordLength"))
        unit = props.find("unit")
        if unit is not None:
            port.unit = _named_properties(unit).get("name")
        direct = _named_properties(props)
        port.complexity = direct.get("complexity")
        port.frame = direct.get("frame")
    return own.get("scope"), port
