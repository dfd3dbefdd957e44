# Copyright 2026 slmodel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Errors raised by the structural parsers."""

# ###############
# Public Interface
# ###############


class StructuralParseError(Exception):
    """Raised when a requested file is malformed or lacks a required element.

    Attributes:
        path: The file that failed to parse.
        line: 1-based line number of the problem, when known.
        column: 1-based column number of the problem, when known.
    """

    def __init__(self, message: str, path: str, line: int | None = None, column: int | None = None) -> None:
        location = path
        if line is not None:
            location += f", line {line}"
            if column is not None:
                location += f", column {column}"
        super().__init__(f"{location}: {message}")
        self.path = path
        self.line = line
        self.column = column


class SubsystemCycleError(StructuralParseError):
    """Raised when a subsystem file (directly or indirectly) references itself.

    Attributes:
        chain: The file paths from the requested file to the repeated one.
    """

    def __init__(self, chain: list[str]) -> None:
        super().__init__(f"Subsystem reference cycle: {' -> '.join(chain)}", chain[-1])
        self.chain = chain
