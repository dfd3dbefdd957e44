# Copyright 2026 slmodel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Consistency checks for parsed models (duplicate SIDs, dangling endpoints, etc.)."""

from slmodel.validation.checks import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    validate,
)

__all__ = [
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "validate",
]
