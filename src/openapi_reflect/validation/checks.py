# Copyright 2026 openapi-reflect Contributors
# SPDX-License-Identifier: Apache-2.0

"""Structural validation of assembled documents.

Two layers run in order: the consistency checks of :func:`validate`, which
report errors against the in-memory model with precise locations, followed
by a full OpenAPI 3.0 validation of the encoded document with
``openapi-spec-validator``.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass, field

from jsonschema.exceptions import ValidationError as SchemaValidationError
from openapi_spec_validator import validate as validate_spec
from openapi_spec_validator.exceptions import OpenAPISpecValidatorError

from openapi_reflect.errors import StructuralValidationError
from openapi_reflect.model.document import Document
from openapi_reflect.model.schema import TYPE_ARRAY, TYPE_INTEGER, TYPE_STRING, Schema, SchemaRef

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class ValidationError:
    """A violated consistency rule.

    Attributes:
        message: Human-readable description naming the offending construct.
    """

    message: str


@dataclass
class ValidationResult:
    """Result of running the consistency checks.

    Attributes:
        errors: Every violated rule, in document order.
    """

    errors: list[ValidationError] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Return True if any rule was violated."""
        return len(self.errors) > 0


def validate(document: Document) -> ValidationResult:
    """Run the consistency checks on an assembled document.

    Checks performed:

    1. **References**: every ``$ref`` points at an entry of
       ``components.schemas``, and every slot holds exactly one of a reference
       and a value.
    2. **Required properties**: a closed object schema only requires
       properties it declares.
    3. **Array items**: every array schema declares its items.
    4. **Enum literals**: enum values match the schema's string or integer type.
    5. **Path parameters**: path parameters and ``{name}`` segments of the
       pattern correspond one to one.
    6. **Operation ids**: non-empty operation ids are unique.

    Args:
        document: The document to check.

    Returns:
        A :class:`ValidationResult`; an empty result means the document is
        consistent.
    """
    errors: list[ValidationError] = []
    errors.extend(_check_schemas(document))
    errors.extend(_check_path_parameters(document))
    errors.extend(_check_operation_ids(document))
    return ValidationResult(errors=errors)


def check_document(document: Document) -> None:
    """Validate *document*, raising on the first failing layer.

    Raises:
        StructuralValidationError: If a consistency check fails or the
            encoded document is not a valid OpenAPI 3.0 document.
    """
    result = validate(document)
    if result.has_errors:
        lines = "\n".join(f"  {e.message}" for e in result.errors)
        raise StructuralValidationError(f"failed validation:\n{lines}")
    try:
        validate_spec(document.to_dict())
    except SchemaValidationError as exc:
        raise StructuralValidationError(f"failed validation: {exc.message}") from exc
    except OpenAPISpecValidatorError as exc:
        raise StructuralValidationError(f"failed validation: {exc}") from exc


# ################
# Implementation
# ################

_PATH_SEGMENT = re.compile(r"\{([^}]+)\}")


def _iter_schema_refs(document: Document) -> Iterator[tuple[str, SchemaRef]]:
    """Yield every schema slot of the document with a label locating it."""
    for name, schema in document.components.schemas.items():
        yield from _walk_schema(f"components.schemas.{name}", schema)

    for pattern, item in document.paths.items():
        for method, op in item.operations.items():
            where = f"{method.upper()} {pattern}"
            for param in op.parameters:
                if param.schema_ref is not None:
                    yield from _walk_ref(f"{where} parameter '{param.name}'", param.schema_ref)
            if op.request_body is not None:
                for media, content in op.request_body.content.items():
                    yield from _walk_ref(f"{where} request body ({media})", content.schema_ref)
            for status, response in op.responses.items():
                for media, content in response.content.items():
                    yield from _walk_ref(f"{where} response {status} ({media})", content.schema_ref)
                for header_name, header in response.headers.items():
                    if header.schema_ref is not None:
                        yield from _walk_ref(f"{where} response {status} header '{header_name}'", header.schema_ref)


def _walk_ref(label: str, ref: SchemaRef) -> Iterator[tuple[str, SchemaRef]]:
    yield label, ref
    if ref.value is not None:
        yield from _walk_schema(label, ref.value)


def _walk_schema(label: str, schema: Schema) -> Iterator[tuple[str, SchemaRef]]:
    yield label, SchemaRef.inline(schema)
    if schema.items is not None:
        yield from _walk_ref(f"{label}.items", schema.items)
    for prop, ref in schema.properties.items():
        yield from _walk_ref(f"{label}.properties.{prop}", ref)
    if isinstance(schema.additional_properties, SchemaRef):
        yield from _walk_ref(f"{label}.additionalProperties", schema.additional_properties)


def _check_schemas(document: Document) -> list[ValidationError]:
    errors: list[ValidationError] = []
    known = document.components.schemas
    seen: set[int] = set()
    for label, ref in _iter_schema_refs(document):
        if ref.ref is not None and ref.value is not None:
            errors.append(ValidationError(f"{label}: holds both a reference and an inline schema"))
        if ref.ref is not None:
            name = ref.component_name
            if name is None:
                errors.append(ValidationError(f"{label}: external reference '{ref.ref}' cannot be resolved"))
            elif name not in known:
                errors.append(ValidationError(f"{label}: dangling reference to '{name}'"))
            continue

        schema = ref.value
        if schema is None:
            errors.append(ValidationError(f"{label}: holds neither a reference nor an inline schema"))
            continue
        if id(schema) in seen:
            continue
        seen.add(id(schema))

        if schema.type == TYPE_ARRAY and schema.items is None:
            errors.append(ValidationError(f"{label}: array schema has no items"))
        if schema.is_object() and not schema.has_open_additional_properties():
            for required in schema.required:
                if required not in schema.properties:
                    errors.append(ValidationError(f"{label}: required property '{required}' is not declared"))
        errors.extend(_check_enum(label, schema))
    return errors


def _check_enum(label: str, schema: Schema) -> list[ValidationError]:
    errors: list[ValidationError] = []
    for value in schema.enum:
        if schema.type == TYPE_STRING and not isinstance(value, str):
            errors.append(ValidationError(f"{label}: enum value {value!r} is not a string"))
        elif schema.type == TYPE_INTEGER and (not isinstance(value, int) or isinstance(value, bool)):
            errors.append(ValidationError(f"{label}: enum value {value!r} is not an integer"))
    return errors


def _check_path_parameters(document: Document) -> list[ValidationError]:
    errors: list[ValidationError] = []
    for pattern, item in document.paths.items():
        segments = set(_PATH_SEGMENT.findall(pattern))
        for method, op in item.operations.items():
            where = f"{method.upper()} {pattern}"
            declared = {p.name for p in op.parameters if p.location == "path"}
            for name in sorted(declared - segments):
                errors.append(ValidationError(f"{where}: path parameter '{name}' does not appear in the pattern"))
            for name in sorted(segments - declared):
                errors.append(ValidationError(f"{where}: path segment '{{{name}}}' has no path parameter"))
            for param in op.parameters:
                if param.location == "path" and not param.required:
                    errors.append(ValidationError(f"{where}: path parameter '{param.name}' must be required"))
    return errors


def _check_operation_ids(document: Document) -> list[ValidationError]:
    errors: list[ValidationError] = []
    seen: dict[str, str] = {}
    for pattern, item in document.paths.items():
        for method, op in item.operations.items():
            if not op.operation_id:
                continue
            where = f"{method.upper()} {pattern}"
            if op.operation_id in seen:
                errors.append(
                    ValidationError(f"{where}: operation id '{op.operation_id}' is already used by {seen[op.operation_id]}")
                )
            else:
                seen[op.operation_id] = where
    return errors
