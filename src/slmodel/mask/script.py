# Copyright 2026 slmodel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Statement parser for the mask script subset.

Only two statement shapes carry meaning:

* a table declaration ``name = {'a', 'b', 3};``
* a display call ``disp(name{index})`` whose argument is an index expression

Every other statement is kept as an :class:`Unrecognized` node and is inert
during evaluation.
"""

from __future__ import annotations

from dataclasses import dataclass

from slmodel.mask.scanner import Token, TokenType, tokenize

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class TableDeclaration:
    """Assignment of a literal cell array to an identifier.

    ``values`` holds the unquoted string contents and, for numbers, their
    literal text.
    """

    name: str
    values: tuple[str, ...]


@dataclass(frozen=True)
class IndexExpression:
    """``table{index}`` where the index is a parameter name or an integer literal."""

    table: str
    index: str | int


@dataclass(frozen=True)
class DisplayCall:
    """``disp(table{index})``."""

    argument: IndexExpression


@dataclass(frozen=True)
class Unrecognized:
    """Any statement outside the supported subset."""

    text: str


Statement = TableDeclaration | DisplayCall | Unrecognized

DISPLAY_FUNCTION = "disp"


def parse_script(source: str) -> list[Statement]:
    """Parse script text into a list of statements.

    Statements end at ``;``, ``,`` or a line break outside brackets. Empty
    statements are dropped.
    """
    statements: list[Statement] = []
    for tokens in _split_statements(tokenize(source)):
        statements.append(_StatementParser(tokens).parse())
    return statements


# ################
# Implementation
# ################

_OPENERS = frozenset({TokenType.LBRACE, TokenType.LPAREN, TokenType.LBRACKET})
_CLOSERS = frozenset({TokenType.RBRACE, TokenType.RPAREN, TokenType.RBRACKET})
_SEPARATORS = frozenset({TokenType.SEMICOLON, TokenType.COMMA, TokenType.NEWLINE})


class _NoMatch(Exception):
    """Signals that a statement does not have a supported shape."""


def _split_statements(tokens: list[Token]) -> list[list[Token]]:
    statements: list[list[Token]] = []
    current: list[Token] = []
    depth = 0
    for tok in tokens:
        if tok.type == TokenType.EOF:
            break
        if tok.type in _OPENERS:
            depth += 1
        elif tok.type in _CLOSERS:
            depth = max(depth - 1, 0)
        elif tok.type in _SEPARATORS and depth == 0:
            if current:
                statements.append(current)
            current = []
            continue
        current.append(tok)
    if current:
        statements.append(current)
    return statements


def _render(tokens: list[Token]) -> str:
    parts: list[str] = []
    for tok in tokens:
        if tok.type == TokenType.STRING:
            parts.append("'" + tok.value.replace("'", "''") + "'")
        elif tok.type != TokenType.NEWLINE:
            parts.append(tok.value)
    return " ".join(parts)


class _StatementParser:
    """Matches the tokens of one statement against the supported shapes."""

    def __init__(self, tokens: list[Token]) -> None:
        self._tokens = tokens
        self._pos = 0

    def parse(self) -> Statement:
        for shape in (self._parse_table_declaration, self._parse_display_call):
            self._pos = 0
            try:
                node = shape()
                if not self._at_end():
                    raise _NoMatch
            except _NoMatch:
                continue
            return node
        return Unrecognized(text=_render(self._tokens))

    # ------------------------------------------------------------------
    # Shapes
    # ------------------------------------------------------------------

    def _parse_table_declaration(self) -> TableDeclaration:
        name = self._expect(TokenType.IDENTIFIER).value
        self._expect(TokenType.EQUALS)
        self._expect(TokenType.LBRACE)
        values: list[str] = []
        while not self._check(TokenType.RBRACE):
            if self._check(TokenType.COMMA, TokenType.SEMICOLON, TokenType.NEWLINE):
                self._advance()
                continue
            values.append(self._parse_literal())
        self._expect(TokenType.RBRACE)
        return TableDeclaration(name=name, values=tuple(values))

    def _parse_display_call(self) -> DisplayCall:
        func = self._expect(TokenType.IDENTIFIER)
        if func.value != DISPLAY_FUNCTION:
            raise _NoMatch
        self._expect(TokenType.LPAREN)
        argument = self._parse_index_expression()
        self._expect(TokenType.RPAREN)
        return DisplayCall(argument=argument)

    def _parse_index_expression(self) -> IndexExpression:
        table = self._expect(TokenType.IDENTIFIER).value
        self._expect(TokenType.LBRACE)
        index: str | int
        if self._check(TokenType.IDENTIFIER):
            index = self._advance().value
        elif self._check(TokenType.NUMBER):
            try:
                index = int(self._advance().value)
            except ValueError:
                raise _NoMatch from None
        else:
            raise _NoMatch
        self._expect(TokenType.RBRACE)
        return IndexExpression(table=table, index=index)

    def _parse_literal(self) -> str:
        if self._check(TokenType.STRING):
            return self._advance().value
        if self._check(TokenType.MINUS):
            self._advance()
            return "-" + self._expect(TokenType.NUMBER).value
        return self._expect(TokenType.NUMBER).value

    # ------------------------------------------------------------------
    # Token helpers
    # ------------------------------------------------------------------

    def _current(self) -> Token:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        last = self._tokens[-1]
        return Token(TokenType.EOF, "", last.line, last.column)

    def _at_end(self) -> bool:
        return self._pos >= len(self._tokens)

    def _advance(self) -> Token:
        tok = self._current()
        if not self._at_end():
            self._pos += 1
        return tok

    def _check(self, *types: TokenType) -> bool:
        return self._current().type in types

    def _expect(self, token_type: TokenType) -> Token:
        if not self._check(token_type):
            raise _NoMatch
        return self._advance()
