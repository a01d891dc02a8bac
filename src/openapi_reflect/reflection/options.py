# Copyright 2026 openapi-reflect Contributors
# SPDX-License-Identifier: Apache-2.0

"""Call-site options that adjust a generated schema before it is registered."""

from __future__ import annotations

import enum
from collections.abc import Callable
from typing import Any

from openapi_reflect.model.schema import TYPE_INTEGER, TYPE_STRING, Schema
from openapi_reflect.reflection.descriptor import Kind, enum_base_kind

# ###############
# Public Interface
# ###############

ModelOption = Callable[[Schema], None]


def with_nullable() -> ModelOption:
    """Mark the schema as accepting null."""

    def _apply(schema: Schema) -> None:
        schema.nullable = True

    return _apply


def with_description(description: str) -> ModelOption:
    """Set the schema description."""

    def _apply(schema: Schema) -> None:
        schema.description = description

    return _apply


def with_enum_values(*values: Any) -> ModelOption:
    """Restrict the schema to the given literal values.

    The schema type is forced to ``string`` or ``integer`` to match the
    values. Enum members are replaced by their values. Without values the
    option does nothing.

    Raises:
        ValueError: If the values are neither all strings nor all integers.
    """
    literals = [v.value if isinstance(v, enum.Enum) else v for v in values]
    base = _base_type(literals)

    def _apply(schema: Schema) -> None:
        if not literals:
            return
        schema.type = base
        schema.enum.extend(literals)

    return _apply


def with_enum_constants(enum_type: type[enum.Enum]) -> ModelOption:
    """Restrict the schema to the values of every member of *enum_type*.

    Raises:
        ValueError: If the member values are neither all strings nor all integers.
    """
    literals = [member.value for member in enum_type]
    base = _base_type(literals)

    def _apply(schema: Schema) -> None:
        schema.type = base
        schema.enum = list(literals)

    return _apply


# ################
# Implementation
# ################


def _base_type(literals: list[Any]) -> str:
    if not literals:
        return TYPE_STRING
    kind = enum_base_kind(literals)
    if kind is None:
        raise ValueError(f"enum values must be all strings or all integers, got {literals!r}")
    return TYPE_STRING if kind is Kind.STRING else TYPE_INTEGER
