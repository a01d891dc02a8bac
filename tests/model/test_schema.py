# Copyright 2026 openapi-reflect Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for schema nodes and schema references."""

import pytest
from pydantic import ValidationError

from openapi_reflect.model.schema import COMPONENTS_PREFIX, Schema, SchemaRef

# ###############
# Schema
# ###############


class TestSchemaConstructors:
    @pytest.mark.parametrize(
        "factory, expected",
        [
            (Schema.string, "string"),
            (Schema.integer, "integer"),
            (Schema.number, "number"),
            (Schema.boolean, "boolean"),
            (Schema.object, "object"),
            (Schema.array, "array"),
        ],
    )
    def test_type(self, factory, expected):
        """Each constructor sets the matching schema type."""
        assert factory().type == expected

    def test_date_time(self):
        """date_time is a string with the date-time format."""
        schema = Schema.date_time()
        assert schema.type == "string"
        assert schema.format == "date-time"

    def test_constructors_return_fresh_instances(self):
        """Mutating one schema never affects another."""
        first = Schema.object()
        first.required.append("x")
        assert Schema.object().required == []


class TestAdditionalProperties:
    def test_unset_is_closed(self):
        assert not Schema.object().has_open_additional_properties()

    def test_false_is_closed(self):
        schema = Schema.object()
        schema.additional_properties = False
        assert not schema.has_open_additional_properties()

    def test_true_is_open(self):
        schema = Schema.object()
        schema.additional_properties = True
        assert schema.has_open_additional_properties()

    def test_schema_is_open(self):
        schema = Schema.object()
        schema.additional_properties = SchemaRef.inline(Schema.string())
        assert schema.has_open_additional_properties()


class TestSchemaToDict:
    def test_empty_values_are_omitted(self):
        """Unset and empty attributes do not appear in the encoding."""
        assert Schema.string().to_dict() == {"type": "string"}

    def test_full_object(self):
        """Properties, required and additionalProperties use OpenAPI key names."""
        schema = Schema.object()
        schema.description = "A thing."
        schema.nullable = True
        schema.properties["name"] = SchemaRef.inline(Schema.string())
        schema.properties["owner"] = SchemaRef.to("Owner")
        schema.required = ["name"]
        schema.additional_properties = SchemaRef.inline(Schema.integer())

        assert schema.to_dict() == {
            "type": "object",
            "description": "A thing.",
            "nullable": True,
            "properties": {
                "name": {"type": "string"},
                "owner": {"$ref": "#/components/schemas/Owner"},
            },
            "required": ["name"],
            "additionalProperties": {"type": "integer"},
        }

    def test_boolean_additional_properties(self):
        schema = Schema.object()
        schema.additional_properties = True
        assert schema.to_dict()["additionalProperties"] is True

    def test_array_items_and_enum(self):
        schema = Schema.array(SchemaRef.inline(Schema.string()))
        assert schema.to_dict() == {"type": "array", "items": {"type": "string"}}
        enum_schema = Schema.string()
        enum_schema.enum = ["a", "b"]
        enum_schema.deprecated = True
        assert enum_schema.to_dict() == {"type": "string", "enum": ["a", "b"], "deprecated": True}


# ###############
# SchemaRef
# ###############


class TestSchemaRef:
    def test_reference(self):
        ref = SchemaRef.to("Topic")
        assert ref.ref == COMPONENTS_PREFIX + "Topic"
        assert ref.component_name == "Topic"
        assert ref.to_dict() == {"$ref": "#/components/schemas/Topic"}

    def test_inline_keeps_the_schema_instance(self):
        """Inline references share the schema object so later edits are visible."""
        schema = Schema.string()
        ref = SchemaRef.inline(schema)
        schema.description = "later"
        assert ref.value is schema
        assert ref.to_dict() == {"type": "string", "description": "later"}
        assert ref.component_name is None

    def test_foreign_reference_has_no_component_name(self):
        assert SchemaRef(ref="other.yaml#/Thing").component_name is None

    def test_both_set_is_rejected(self):
        with pytest.raises(ValidationError):
            SchemaRef(ref="#/components/schemas/A", value=Schema.string())

    def test_neither_set_is_rejected(self):
        with pytest.raises(ValidationError):
            SchemaRef()

    def test_emptied_reference_cannot_be_encoded(self):
        ref = SchemaRef.to("Topic")
        ref.ref = None
        with pytest.raises(ValueError, match="exactly one of 'ref' or 'value'"):
            ref.to_dict()
