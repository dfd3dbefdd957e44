# Copyright 2026 slmodel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Mask script scanner, statement parser, and display evaluator."""

from slmodel.mask.evaluator import (
    MaskEvaluation,
    evaluate_mask,
    evaluate_mask_display,
    find_parameter,
    parameter_index,
    refresh_mask_display,
    set_mask_parameter_value,
)
from slmodel.mask.scanner import Token, TokenType, tokenize
from slmodel.mask.script import (
    DisplayCall,
    IndexExpression,
    Statement,
    TableDeclaration,
    Unrecognized,
    parse_script,
)

__all__ = [
    "MaskEvaluation",
    "evaluate_mask",
    "evaluate_mask_display",
    "find_parameter",
    "parameter_index",
    "refresh_mask_display",
    "set_mask_parameter_value",
    "Token",
    "TokenType",
    "tokenize",
    "DisplayCall",
    "IndexExpression",
    "Statement",
    "TableDeclaration",
    "Unrecognized",
    "parse_script",
]
