# Copyright 2026 openapi-reflect Contributors
# SPDX-License-Identifier: Apache-2.0

"""In-memory schema nodes produced by the reflection engine."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, model_validator
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############

COMPONENTS_PREFIX = "#/components/schemas/"

TYPE_STRING = "string"
TYPE_INTEGER = "integer"
TYPE_NUMBER = "number"
TYPE_BOOLEAN = "boolean"
TYPE_ARRAY = "array"
TYPE_OBJECT = "object"


class Schema(BaseModel):
    """A JSON-Schema-like shape, mutable until the document is assembled.

    Customisation hooks receive instances of this class and may change any
    attribute in place.
    """

    type: str | None = None
    format: str | None = None
    title: str | None = None
    description: str = ""
    deprecated: bool = False
    nullable: bool = False
    pattern: str = ""
    enum: list[Any] = _Field(default_factory=list)
    default: Any = None
    example: Any = None
    items: SchemaRef | None = None
    properties: dict[str, SchemaRef] = _Field(default_factory=dict)
    required: list[str] = _Field(default_factory=list)
    additional_properties: SchemaRef | bool | None = None

    @classmethod
    def string(cls) -> Schema:
        return cls(type=TYPE_STRING)

    @classmethod
    def integer(cls) -> Schema:
        return cls(type=TYPE_INTEGER)

    @classmethod
    def number(cls) -> Schema:
        return cls(type=TYPE_NUMBER)

    @classmethod
    def boolean(cls) -> Schema:
        return cls(type=TYPE_BOOLEAN)

    @classmethod
    def object(cls) -> Schema:
        return cls(type=TYPE_OBJECT)

    @classmethod
    def array(cls, items: SchemaRef | None = None) -> Schema:
        return cls(type=TYPE_ARRAY, items=items)

    @classmethod
    def date_time(cls) -> Schema:
        return cls(type=TYPE_STRING, format="date-time")

    def is_object(self) -> bool:
        return self.type == TYPE_OBJECT

    def has_open_additional_properties(self) -> bool:
        """Return True if the object accepts keys beyond its declared properties."""
        return self.additional_properties is not None and self.additional_properties is not False

    def to_dict(self) -> dict[str, Any]:
        """Encode the schema using the OpenAPI 3.0 key names."""
        d: dict[str, Any] = {}
        if self.type is not None:
            d["type"] = self.type
        if self.format is not None:
            d["format"] = self.format
        if self.title is not None:
            d["title"] = self.title
        if self.description:
            d["description"] = self.description
        if self.enum:
            d["enum"] = list(self.enum)
        if self.default is not None:
            d["default"] = self.default
        if self.example is not None:
            d["example"] = self.example
        if self.nullable:
            d["nullable"] = True
        if self.deprecated:
            d["deprecated"] = True
        if self.pattern:
            d["pattern"] = self.pattern
        if self.items is not None:
            d["items"] = self.items.to_dict()
        if self.properties:
            d["properties"] = {name: ref.to_dict() for name, ref in self.properties.items()}
        if self.required:
            d["required"] = list(self.required)
        if isinstance(self.additional_properties, SchemaRef):
            d["additionalProperties"] = self.additional_properties.to_dict()
        elif self.additional_properties is not None:
            d["additionalProperties"] = self.additional_properties
        return d


class SchemaRef(BaseModel):
    """Either an inline :class:`Schema` or a pointer to a named component, never both."""

    ref: str | None = None
    value: Schema | None = None

    @model_validator(mode="after")
    def _exactly_one(self) -> SchemaRef:
        if (self.ref is None) == (self.value is None):
            raise ValueError("a schema reference needs exactly one of 'ref' or 'value'")
        return self

    @classmethod
    def to(cls, name: str) -> SchemaRef:
        """Return a reference to the component registered as *name*."""
        return cls(ref=COMPONENTS_PREFIX + name)

    @classmethod
    def inline(cls, schema: Schema) -> SchemaRef:
        return cls(value=schema)

    @property
    def component_name(self) -> str | None:
        """Name of the referenced component, or None for inline schemas and foreign refs."""
        if self.ref is None or not self.ref.startswith(COMPONENTS_PREFIX):
            return None
        return self.ref[len(COMPONENTS_PREFIX) :]

    def to_dict(self) -> dict[str, Any]:
        if self.ref is not None:
            return {"$ref": self.ref}
        if self.value is None:
            raise ValueError("a schema reference needs exactly one of 'ref' or 'value'")
        return self.value.to_dict()


# Resolve forward references in the mutually recursive models.
Schema.model_rebuild()
SchemaRef.model_rebuild()
