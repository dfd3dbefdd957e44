# Copyright 2026 slmodel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the mask script statement parser."""

import pytest

from slmodel.mask.script import (
    DisplayCall,
    IndexExpression,
    TableDeclaration,
    Unrecognized,
    parse_script,
)

# ###############
# Table Declarations
# ###############


class TestTableDeclaration:
    def test_string_table(self) -> None:
        statements = parse_script("mytab={'Position','Zero Torque','OFF'};")
        assert statements == [TableDeclaration(name="mytab", values=("Position", "Zero Torque", "OFF"))]

    def test_numbers_keep_their_literal_text(self) -> None:
        statements = parse_script("gains = {1, 2.50, -3}")
        assert statements == [TableDeclaration(name="gains", values=("1", "2.50", "-3"))]

    def test_whitespace_separated_elements(self) -> None:
        statements = parse_script("t = {'a' 'b' 'c'}")
        assert statements == [TableDeclaration(name="t", values=("a", "b", "c"))]

    def test_elements_may_span_lines(self) -> None:
        statements = parse_script("t = {'a'\n'b';\n'c'};")
        assert statements == [TableDeclaration(name="t", values=("a", "b", "c"))]

    def test_empty_table(self) -> None:
        assert parse_script("t = {}") == [TableDeclaration(name="t", values=())]

    def test_non_literal_element_is_unrecognized(self) -> None:
        statements = parse_script("t = {'a', x}")
        assert len(statements) == 1
        assert isinstance(statements[0], Unrecognized)

    def test_bracket_array_is_unrecognized(self) -> None:
        statements = parse_script("t = [1 2 3];")
        assert isinstance(statements[0], Unrecognized)


# ###############
# Display Calls
# ###############


class TestDisplayCall:
    def test_index_by_parameter(self) -> None:
        statements = parse_script("disp(mytab{control})")
        assert statements == [DisplayCall(argument=IndexExpression(table="mytab", index="control"))]

    def test_index_by_integer_literal(self) -> None:
        statements = parse_script("disp(mytab{2});")
        assert statements == [DisplayCall(argument=IndexExpression(table="mytab", index=2))]

    @pytest.mark.parametrize(
        "source",
        [
            "disp('plain text')",
            "disp(mytab(control))",
            "disp(mytab{control + 1})",
            "fprintf(mytab{control})",
            "disp(mytab{control}, 2)",
        ],
    )
    def test_other_shapes_are_unrecognized(self, source: str) -> None:
        statements = parse_script(source)
        assert all(isinstance(s, Unrecognized) for s in statements)


# ###############
# Statement Splitting
# ###############


class TestStatementSplitting:
    def test_multiple_statements_in_order(self) -> None:
        statements = parse_script("a = {'x'}; b = 3\ndisp(a{1})")
        assert isinstance(statements[0], TableDeclaration)
        assert isinstance(statements[1], Unrecognized)
        assert isinstance(statements[2], DisplayCall)

    def test_commas_inside_braces_do_not_split(self) -> None:
        statements = parse_script("t = {'a', 'b'}, disp(t{1})")
        assert len(statements) == 2

    def test_empty_statements_are_dropped(self) -> None:
        assert parse_script(";;\n\n;") == []

    def test_comments_are_ignored(self) -> None:
        statements = parse_script("% build the table\nt = {'a'}; % trailing")
        assert statements == [TableDeclaration(name="t", values=("a",))]

    def test_unrecognized_keeps_statement_text(self) -> None:
        statements = parse_script("if x > 1")
        assert statements == [Unrecognized(text="if x > 1")]

    def test_unterminated_string_leaves_other_statements(self) -> None:
        statements = parse_script("t = {'a'};\nlabel = \"oops;")
        assert statements == [TableDeclaration(name="t", values=("a",)), Unrecognized(text="label = \"oops;")]

    @pytest.mark.parametrize("index", ["1.5", "1e3"])
    def test_non_integer_index_is_unrecognized(self, index: str) -> None:
        statements = parse_script(f"disp(t{{{index}}})")
        assert isinstance(statements[0], Unrecognized)
