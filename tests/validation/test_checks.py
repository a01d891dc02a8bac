# Copyright 2026 openapi-reflect Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for structural validation of assembled documents."""

import pytest

from openapi_reflect.errors import StructuralValidationError
from openapi_reflect.model.document import (
    JSON_MEDIA_TYPE,
    Document,
    Info,
    MediaType,
    Operation,
    Parameter,
    PathItem,
    Response,
)
from openapi_reflect.model.schema import Schema, SchemaRef
from openapi_reflect.validation.checks import ValidationResult, check_document, validate

# ###############
# Helpers
# ###############


def _document(pattern: str = "/items", operation: Operation | None = None, method: str = "get") -> Document:
    doc = Document(info=Info(title="t", version="1"))
    item = PathItem()
    item.set_operation(method, operation or Operation(responses={"default": Response()}))
    doc.paths[pattern] = item
    return doc


def _returning(schema_ref: SchemaRef) -> Operation:
    return Operation(
        responses={
            "200": Response(content={JSON_MEDIA_TYPE: MediaType(schema_ref=schema_ref)}),
            "default": Response(),
        }
    )


def _messages(doc: Document) -> list[str]:
    return [e.message for e in validate(doc).errors]


# ###############
# Consistency checks
# ###############


def test_valid_document_has_no_errors():
    doc = _document(operation=_returning(SchemaRef.to("Item")))
    doc.components.schemas["Item"] = Schema.object()
    result = validate(doc)
    assert isinstance(result, ValidationResult)
    assert not result.has_errors


class TestReferences:
    def test_dangling_reference(self):
        messages = _messages(_document(operation=_returning(SchemaRef.to("Missing"))))
        assert messages == ["GET /items response 200 (application/json): dangling reference to 'Missing'"]

    def test_external_reference(self):
        messages = _messages(_document(operation=_returning(SchemaRef(ref="other.yaml#/Item"))))
        assert len(messages) == 1
        assert "external reference" in messages[0]

    def test_reference_and_value_in_one_slot(self):
        ref = SchemaRef.to("Item")
        ref.value = Schema.string()
        doc = _document(operation=_returning(ref))
        doc.components.schemas["Item"] = Schema.object()
        assert _messages(doc) == [
            "GET /items response 200 (application/json): holds both a reference and an inline schema"
        ]

    def test_emptied_reference(self):
        ref = SchemaRef.to("Item")
        ref.ref = None
        assert _messages(_document(operation=_returning(ref))) == [
            "GET /items response 200 (application/json): holds neither a reference nor an inline schema"
        ]

    def test_nested_dangling_reference(self):
        doc = _document()
        holder = Schema.object()
        holder.properties["items"] = SchemaRef.inline(Schema.array(SchemaRef.to("Gone")))
        doc.components.schemas["Holder"] = holder
        assert _messages(doc) == ["components.schemas.Holder.properties.items.items: dangling reference to 'Gone'"]


class TestSchemas:
    def test_required_property_must_be_declared(self):
        doc = _document()
        schema = Schema.object()
        schema.required = ["name"]
        doc.components.schemas["Item"] = schema
        assert _messages(doc) == ["components.schemas.Item: required property 'name' is not declared"]

    def test_open_objects_may_require_anything(self):
        schema = Schema.object()
        schema.required = ["name"]
        schema.additional_properties = True
        assert _messages(_document(operation=_returning(SchemaRef.inline(schema)))) == []

    def test_array_needs_items(self):
        messages = _messages(_document(operation=_returning(SchemaRef.inline(Schema.array()))))
        assert messages == ["GET /items response 200 (application/json): array schema has no items"]

    @pytest.mark.parametrize(
        "schema_type, values",
        [("string", ["a", 1]), ("integer", [1, "2"]), ("integer", [True])],
    )
    def test_enum_literal_types(self, schema_type, values):
        schema = Schema(type=schema_type, enum=values)
        doc = _document()
        doc.components.schemas["E"] = schema
        assert len(_messages(doc)) == 1


class TestPathParameters:
    def test_parameter_missing_from_pattern(self):
        op = Operation(parameters=[Parameter(name="id", location="path", required=True)])
        assert _messages(_document("/items", op)) == [
            "GET /items: path parameter 'id' does not appear in the pattern"
        ]

    def test_segment_without_parameter(self):
        assert _messages(_document("/items/{id}")) == ["GET /items/{id}: path segment '{id}' has no path parameter"]

    def test_path_parameter_must_be_required(self):
        op = Operation(parameters=[Parameter(name="id", location="path")])
        assert _messages(_document("/items/{id}", op)) == [
            "GET /items/{id}: path parameter 'id' must be required"
        ]

    def test_query_parameters_are_ignored(self):
        op = Operation(parameters=[Parameter(name="id", location="query")])
        assert _messages(_document("/items", op)) == []


def test_duplicate_operation_ids():
    doc = _document(operation=Operation(operation_id="list"))
    other = PathItem()
    other.set_operation("post", Operation(operation_id="list"))
    doc.paths["/other"] = other
    assert _messages(doc) == ["POST /other: operation id 'list' is already used by GET /items"]


# ###############
# check_document
# ###############


class TestCheckDocument:
    def test_valid_document(self):
        doc = _document(operation=_returning(SchemaRef.to("Item")))
        doc.components.schemas["Item"] = Schema.object()
        check_document(doc)

    def test_consistency_errors_are_listed(self):
        with pytest.raises(StructuralValidationError) as exc_info:
            check_document(_document("/items/{id}", _returning(SchemaRef.to("Missing"))))
        message = str(exc_info.value)
        assert "dangling reference to 'Missing'" in message
        assert "path segment '{id}' has no path parameter" in message

    def test_openapi_rules_are_enforced(self):
        """Documents passing the consistency checks are still validated against OpenAPI 3.0."""
        doc = _document()
        doc.components.schemas["Amount"] = Schema(type="float")
        with pytest.raises(StructuralValidationError, match="failed validation"):
            check_document(doc)
