# Copyright 2026 slmodel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexical scanner for mask initialization and display scripts.

Converts script text into tokens for the statement parser. The scanner is
lenient: characters outside the supported subset become OTHER tokens so that
the statements containing them are simply not recognized later.
"""

import enum
from dataclasses import dataclass

# ###############
# Public Interface
# ###############


class TokenType(enum.Enum):
    """All token types produced by the mask script scanner."""

    # Symbols
    LBRACE = "{"
    RBRACE = "}"
    LPAREN = "("
    RPAREN = ")"
    LBRACKET = "["
    RBRACKET = "]"
    COMMA = ","
    SEMICOLON = ";"
    EQUALS = "="
    MINUS = "-"

    # Literals
    STRING = "STRING"
    NUMBER = "NUMBER"

    # Identifiers
    IDENTIFIER = "IDENTIFIER"

    # Statement break
    NEWLINE = "NEWLINE"

    # Anything outside the supported subset (operators, transpose, ...)
    OTHER = "OTHER"

    # End of input
    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    """A lexical token with its source location.

    Attributes:
        type: The kind of token.
        value: The raw text of the token (decoded content for STRING tokens).
        line: 1-based line number where the token starts.
        column: 1-based column number where the token starts.
    """

    type: TokenType
    value: str
    line: int
    column: int


def tokenize(source: str) -> list[Token]:
    """Tokenize mask script text.

    Comments (``% ...``) and line continuations (``...``) are dropped. Line
    breaks are kept as NEWLINE tokens since they end statements.

    Args:
        source: The full text of an initialization or display script.

    Returns:
        A list of Token objects ending with a single EOF token.
    """
    return _Scanner(source).tokenize()


# ################
# Implementation
# ################

_SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
    "-": TokenType.MINUS,
}

# A quote directly after one of these is the transpose operator, not a string.
_TRANSPOSABLE: frozenset[TokenType] = frozenset(
    {
        TokenType.IDENTIFIER,
        TokenType.NUMBER,
        TokenType.RPAREN,
        TokenType.RBRACKET,
        TokenType.RBRACE,
    }
)


class _Scanner:
    """Internal scanner state machine."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0
        self._line = 1
        self._column = 1
        self._tokens: list[Token] = []
        self._adjacent = False

    def tokenize(self) -> list[Token]:
        """Run the scanner and return all tokens including the terminal EOF."""
        while self._pos < len(self._source):
            skipped = self._skip_blanks_and_comments()
            if self._pos >= len(self._source):
                break
            self._adjacent = not skipped
            self._scan_token()
        self._tokens.append(Token(TokenType.EOF, "", self._line, self._column))
        return self._tokens

    # ------------------------------------------------------------------
    # Low-level character access helpers
    # ------------------------------------------------------------------

    def _current(self) -> str:
        """Return the character at the current position, or '' at end of input."""
        if self._pos < len(self._source):
            return self._source[self._pos]
        return ""

    def _peek(self, offset: int = 1) -> str:
        """Return the character *offset* positions ahead, or '' past the end."""
        if self._pos + offset < len(self._source):
            return self._source[self._pos + offset]
        return ""

    def _advance(self) -> str:
        """Consume the current character, update position tracking, and return it."""
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1
        return ch

    # ------------------------------------------------------------------
    # Whitespace and comment skipping
    # ------------------------------------------------------------------

    def _skip_blanks_and_comments(self) -> bool:
        """Skip spaces, comments, and continuations. Return True if anything was skipped."""
        start = self._pos
        while self._pos < len(self._source):
            ch = self._current()
            if ch in " \t\r":
                self._advance()
            elif ch == "%":
                self._skip_to_end_of_line()
            elif ch == "." and self._peek() == "." and self._peek(2) == ".":
                self._skip_to_end_of_line()
                if self._current() == "\n":
                    self._advance()
            else:
                break
        return self._pos != start

    def _skip_to_end_of_line(self) -> None:
        """Consume up to, but not including, the next newline."""
        while self._pos < len(self._source) and self._current() != "\n":
            self._advance()

    # ------------------------------------------------------------------
    # Token scanning dispatcher
    # ------------------------------------------------------------------

    def _scan_token(self) -> None:
        """Dispatch to the appropriate handler based on the current character."""
        ch = self._current()
        line = self._line
        col = self._column

        if ch == "\n":
            self._advance()
            self._emit(TokenType.NEWLINE, "\n", line, col)
        elif ch in _SINGLE_CHAR_TOKENS:
            self._advance()
            self._emit(_SINGLE_CHAR_TOKENS[ch], ch, line, col)
        elif ch == "=":
            self._advance()
            if self._current() == "=":
                self._advance()
                self._emit(TokenType.OTHER, "==", line, col)
            else:
                self._emit(TokenType.EQUALS, "=", line, col)
        elif ch == "'":
            if self._adjacent and self._tokens and self._tokens[-1].type in _TRANSPOSABLE:
                self._advance()
                self._emit(TokenType.OTHER, "'", line, col)
            else:
                self._scan_string("'", line, col)
        elif ch == '"':
            self._scan_string('"', line, col)
        elif _is_digit(ch) or (ch == "." and _is_digit(self._peek())):
            self._scan_number(line, col)
        elif ch.isalpha() or ch == "_":
            self._scan_identifier(line, col)
        else:
            self._advance()
            self._emit(TokenType.OTHER, ch, line, col)

    def _emit(self, token_type: TokenType, value: str, line: int, col: int) -> None:
        self._tokens.append(Token(token_type, value, line, col))

    # ------------------------------------------------------------------
    # Literal scanners
    # ------------------------------------------------------------------

    def _scan_string(self, quote: str, line: int, col: int) -> None:
        """Scan a quoted string; a doubled quote inside the literal stands for one quote.

        A literal left open at the end of its line becomes a single OTHER token
        holding the rest of that line, so only its own statement goes unrecognized.
        """
        start = self._pos
        self._advance()  # opening quote
        chars: list[str] = []
        while self._pos < len(self._source):
            ch = self._current()
            if ch == quote:
                if self._peek() == quote:
                    self._advance()
                    self._advance()
                    chars.append(quote)
                    continue
                self._advance()  # closing quote
                self._emit(TokenType.STRING, "".join(chars), line, col)
                return
            if ch == "\n":
                break
            chars.append(self._advance())
        self._emit(TokenType.OTHER, self._source[start : self._pos], line, col)

    def _scan_number(self, line: int, col: int) -> None:
        """Scan an integer or decimal literal with an optional exponent."""
        start = self._pos
        while _is_digit(self._current()):
            self._advance()
        if self._current() == "." and _is_digit(self._peek()):
            self._advance()
            while _is_digit(self._current()):
                self._advance()
        if self._current() in ("e", "E") and (
            _is_digit(self._peek()) or (self._peek() in ("+", "-") and _is_digit(self._peek(2)))
        ):
            self._advance()
            if self._current() in ("+", "-"):
                self._advance()
            while _is_digit(self._current()):
                self._advance()
        self._emit(TokenType.NUMBER, self._source[start : self._pos], line, col)

    def _scan_identifier(self, line: int, col: int) -> None:
        """Scan an identifier."""
        start = self._pos
        while self._pos < len(self._source) and (self._current().isalnum() or self._current() == "_"):
            self._advance()
        self._emit(TokenType.IDENTIFIER, self._source[start : self._pos], line, col)


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"
