# Copyright 2026 slmodel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Unit tests for the model consistency checks."""

from slmodel.model.entities import Block, Branch, EndpointRef, Line, Mask, MaskParameter, System
from slmodel.model.types import MaskParameterType
from slmodel.validation.checks import ValidationError, ValidationResult, ValidationWarning, validate

# ###############
# Test Helpers
# ###############


def _block(name: str, sid: int | None, block_type: str = "Gain", **kwargs: object) -> Block:
    """Create a Block with the given name and SID."""
    return Block(block_type=block_type, name=name, sid=sid, **kwargs)


def _ep(sid: str, port_type: str = "in", index: int = 1) -> EndpointRef:
    """Create a line endpoint."""
    return EndpointRef(sid=sid, port_type=port_type, port_index=index)


def _masked(value: str, display_text: str | None) -> Block:
    """Create a masked block with an explicitly set display text."""
    mask = Mask(
        initialization="t = {'Fast', 'Slow'};",
        display="disp(t{mode})",
        parameters=[MaskParameter(name="mode", type=MaskParameterType.POPUP, value=value)],
    )
    return _block("Masked", 9, "SubSystem", mask=mask, mask_display_text=display_text)


# ###############
# Clean Models
# ###############


def test_empty_system_is_valid() -> None:
    """An empty System produces no warnings and no errors."""
    result = validate(System())
    assert result == ValidationResult()
    assert not result.has_errors


def test_connected_system_is_valid() -> None:
    """Lines between existing blocks, with nested branches, are valid."""
    line = Line(
        src=_ep("1", "out"),
        branches=[Branch(dst=_ep("2")), Branch(branches=[Branch(dst=_ep("3"))])],
    )
    system = System(blocks=[_block("A", 1), _block("B", 2), _block("C", 3)], lines=[line])
    result = validate(system)
    assert result.errors == []
    assert result.warnings == []


def test_sids_may_repeat_across_systems() -> None:
    """A nested System may reuse SIDs of its parent."""
    inner = System(blocks=[_block("X", 1)])
    system = System(blocks=[_block("A", 1), _block("Sub", 2, "SubSystem", subsystem=inner)])
    assert not validate(system).has_errors


# ###############
# Duplicates
# ###############


def test_duplicate_sid() -> None:
    """Two blocks of one System with the same SID are an error."""
    result = validate(System(blocks=[_block("A", 5), _block("B", 5)]))
    assert result.has_errors
    assert result.errors == [ValidationError("/: SID 5 is used by both 'A' and 'B'")]


def test_duplicate_name() -> None:
    """Two blocks of one System with the same name are an error."""
    result = validate(System(blocks=[_block("A", 1), _block("A", 2)]))
    assert result.errors == [ValidationError("/: block name 'A' is not unique")]


def test_missing_sids_are_not_duplicates() -> None:
    """Blocks without a SID do not collide with each other."""
    assert not validate(System(blocks=[_block("A", None), _block("B", None)])).has_errors


def test_nested_errors_carry_the_path() -> None:
    """Errors inside nested Systems name the System by block path."""
    inner = System(blocks=[_block("X", 1), _block("Y", 1)])
    system = System(blocks=[_block("Sub", 1, "SubSystem", subsystem=inner)])
    result = validate(system)
    assert len(result.errors) == 1
    assert result.errors[0].message.startswith("/Sub: ")


# ###############
# References
# ###############


def test_unresolved_subsystem_is_a_warning() -> None:
    """A subsystem block whose reference was not resolved is reported."""
    system = System(blocks=[_block("Sub", 1, "SubSystem", system_ref="system_7")])
    result = validate(system)
    assert not result.has_errors
    assert result.warnings == [ValidationWarning("/: block 'Sub' references 'system_7' which was not resolved")]


def test_reference_on_other_block_type_is_not_checked() -> None:
    """Only subsystem block types are expected to resolve references."""
    system = System(blocks=[_block("G", 1, "Gain", system_ref="system_7")])
    assert validate(system).warnings == []


def test_dangling_line_endpoint() -> None:
    """An endpoint naming an unknown SID is a warning."""
    line = Line(name="speed", src=_ep("1", "out"), dst=_ep("42"))
    result = validate(System(blocks=[_block("A", 1)], lines=[line]))
    assert result.warnings == [ValidationWarning("/: line 'speed' connects to unknown block SID '42'")]


def test_endpoints_into_linked_blocks_are_skipped() -> None:
    """Endpoints such as ``2::28`` address blocks of a linked subsystem."""
    line = Line(src=_ep("1", "out"), dst=_ep("2::28"))
    assert validate(System(blocks=[_block("A", 1)], lines=[line])).warnings == []


# ###############
# Mask Display
# ###############


def test_current_mask_display_text() -> None:
    """A display text equal to the evaluated mask is valid."""
    assert not validate(System(blocks=[_masked("2. Slow", "Slow")])).has_errors


def test_stale_mask_display_text() -> None:
    """A display text that differs from the evaluated mask is an error."""
    result = validate(System(blocks=[_masked("2. Slow", "Fast")]))
    assert len(result.errors) == 1
    assert "'Masked'" in result.errors[0].message
    assert "'Slow'" in result.errors[0].message


def test_absent_display_text_is_not_checked() -> None:
    """Blocks whose display text was never computed are not reported."""
    assert not validate(System(blocks=[_masked("2. Slow", None)])).has_errors
