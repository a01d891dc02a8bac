# Copyright 2026 openapi-reflect Contributors
# SPDX-License-Identifier: Apache-2.0

"""Consistency checks for assembled documents (dangling refs, required properties, etc.)."""

from openapi_reflect.validation.checks import (
    ValidationError,
    ValidationResult,
    check_document,
    validate,
)

__all__ = [
    "ValidationError",
    "ValidationResult",
    "check_document",
    "validate",
]
