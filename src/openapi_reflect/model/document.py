# Copyright 2026 openapi-reflect Contributors
# SPDX-License-Identifier: Apache-2.0

"""OpenAPI 3.0 document objects and their JSON/YAML encodings.

The encodings are thin: every object knows how to turn itself into plain
dicts and lists, and :class:`Document` hands the result to ``json`` or
PyYAML without further processing.
"""

from __future__ import annotations

import json
from typing import Any

import yaml
from pydantic import BaseModel
from pydantic import Field as _Field

from openapi_reflect.model.schema import Schema, SchemaRef

# ###############
# Public Interface
# ###############

OPENAPI_VERSION = "3.0.0"
DEFAULT_API_VERSION = "0.0.0"
JSON_MEDIA_TYPE = "application/json"


class Contact(BaseModel):
    """Contact information for the exposed API."""

    name: str | None = None
    url: str | None = None
    email: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class License(BaseModel):
    """License information for the exposed API."""

    name: str
    url: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class Info(BaseModel):
    """Metadata about the API."""

    title: str = ""
    version: str = ""
    description: str | None = None
    terms_of_service: str | None = None
    contact: Contact | None = None
    license: License | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"title": self.title, "version": self.version}
        if self.description is not None:
            d["description"] = self.description
        if self.terms_of_service is not None:
            d["termsOfService"] = self.terms_of_service
        if self.contact is not None:
            d["contact"] = self.contact.to_dict()
        if self.license is not None:
            d["license"] = self.license.to_dict()
        return d


class Server(BaseModel):
    """A server hosting the API."""

    url: str
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class Parameter(BaseModel):
    """A path, query or header parameter of an operation."""

    name: str
    location: str
    description: str = ""
    required: bool = False
    allow_empty_value: bool = False
    deprecated: bool = False
    schema_ref: SchemaRef | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"name": self.name, "in": self.location}
        if self.description:
            d["description"] = self.description
        if self.required:
            d["required"] = True
        if self.allow_empty_value:
            d["allowEmptyValue"] = True
        if self.deprecated:
            d["deprecated"] = True
        if self.schema_ref is not None:
            d["schema"] = self.schema_ref.to_dict()
        return d


class Header(BaseModel):
    """A response header."""

    description: str = ""
    required: bool = False
    schema_ref: SchemaRef | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {}
        if self.description:
            d["description"] = self.description
        if self.required:
            d["required"] = True
        if self.schema_ref is not None:
            d["schema"] = self.schema_ref.to_dict()
        return d


class MediaType(BaseModel):
    """The schema of a request or response body for one content type."""

    schema_ref: SchemaRef

    def to_dict(self) -> dict[str, Any]:
        return {"schema": self.schema_ref.to_dict()}


class RequestBody(BaseModel):
    """The body accepted by an operation."""

    description: str = ""
    required: bool = False
    content: dict[str, MediaType] = _Field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"content": {k: v.to_dict() for k, v in self.content.items()}}
        if self.description:
            d["description"] = self.description
        if self.required:
            d["required"] = True
        return d


class Response(BaseModel):
    """A single response of an operation."""

    description: str = ""
    headers: dict[str, Header] = _Field(default_factory=dict)
    content: dict[str, MediaType] = _Field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"description": self.description}
        if self.headers:
            d["headers"] = {k: v.to_dict() for k, v in self.headers.items()}
        if self.content:
            d["content"] = {k: v.to_dict() for k, v in self.content.items()}
        return d


class Operation(BaseModel):
    """One HTTP method on one path."""

    tags: list[str] = _Field(default_factory=list)
    summary: str = ""
    description: str = ""
    operation_id: str = ""
    parameters: list[Parameter] = _Field(default_factory=list)
    request_body: RequestBody | None = None
    responses: dict[str, Response] = _Field(default_factory=dict)
    deprecated: bool = False

    def parameter(self, name: str, location: str | None = None) -> Parameter | None:
        """Return the parameter called *name*, optionally restricted to *location*."""
        for param in self.parameters:
            if param.name == name and (location is None or param.location == location):
                return param
        return None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {}
        if self.tags:
            d["tags"] = list(self.tags)
        if self.summary:
            d["summary"] = self.summary
        if self.description:
            d["description"] = self.description
        if self.operation_id:
            d["operationId"] = self.operation_id
        if self.parameters:
            d["parameters"] = [p.to_dict() for p in self.parameters]
        if self.request_body is not None:
            d["requestBody"] = self.request_body.to_dict()
        d["responses"] = {status: r.to_dict() for status, r in self.responses.items()}
        if self.deprecated:
            d["deprecated"] = True
        return d


class PathItem(BaseModel):
    """The operations available on a single path, keyed by lower-case method."""

    operations: dict[str, Operation] = _Field(default_factory=dict)

    def get_operation(self, method: str) -> Operation | None:
        return self.operations.get(method.lower())

    def set_operation(self, method: str, operation: Operation) -> None:
        self.operations[method.lower()] = operation

    def to_dict(self) -> dict[str, Any]:
        return {method: op.to_dict() for method, op in self.operations.items()}


class Components(BaseModel):
    """Reusable named objects of a document."""

    schemas: dict[str, Schema] = _Field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"schemas": {name: schema.to_dict() for name, schema in self.schemas.items()}}


class Document(BaseModel):
    """A complete OpenAPI 3.0 document."""

    openapi: str = OPENAPI_VERSION
    info: Info = _Field(default_factory=Info)
    servers: list[Server] = _Field(default_factory=list)
    paths: dict[str, PathItem] = _Field(default_factory=dict)
    components: Components = _Field(default_factory=Components)

    def find_path(self, pattern: str) -> PathItem | None:
        return self.paths.get(pattern)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"openapi": self.openapi, "info": self.info.to_dict()}
        if self.servers:
            d["servers"] = [s.to_dict() for s in self.servers]
        d["paths"] = {pattern: item.to_dict() for pattern, item in self.paths.items()}
        d["components"] = self.components.to_dict()
        return d

    def to_json(self, *, indent: int | None = None) -> str:
        """Serialize the document to a JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    def to_yaml(self) -> str:
        """Serialize the document to a YAML string."""
        return yaml.safe_dump(self.to_dict(), default_flow_style=False, sort_keys=False, allow_unicode=True)
