# Copyright 2026 openapi-reflect Contributors
# SPDX-License-Identifier: Apache-2.0

"""Route declarations: parameters, models and operation metadata."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from openapi_reflect.model.document import Parameter
from openapi_reflect.reflection.engine import Model

# ###############
# Public Interface
# ###############

ParameterCustomizer = Callable[[Parameter], None]


class PrimitiveType(Enum):
    """Schema type of a path, query or header parameter."""

    STRING = "string"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    NUMBER = "number"


@dataclass
class PathParam:
    """A parameter in the URL path, e.g. ``id`` in ``/users/{id}``.

    Attributes:
        description: Human-readable description.
        regexp: Validation pattern; empty means no validation.
        type: Schema type of the parameter.
        apply_custom_schema: Called with the finished parameter object.
    """

    description: str = ""
    regexp: str = ""
    type: PrimitiveType = PrimitiveType.STRING
    apply_custom_schema: ParameterCustomizer | None = None


@dataclass
class QueryParam:
    """A parameter in the query string, e.g. ``sort`` in ``/users?sort=asc``.

    Attributes:
        description: Human-readable description.
        regexp: Validation pattern; empty means no validation.
        required: The parameter must be present.
        allow_empty: The parameter may be sent without a value.
        type: Schema type of the parameter.
        apply_custom_schema: Called with the finished parameter object.
    """

    description: str = ""
    regexp: str = ""
    required: bool = False
    allow_empty: bool = False
    type: PrimitiveType = PrimitiveType.STRING
    apply_custom_schema: ParameterCustomizer | None = None


@dataclass
class HeaderParam:
    """A request or response header."""

    description: str = ""
    required: bool = False
    type: PrimitiveType = PrimitiveType.STRING
    apply_custom_schema: ParameterCustomizer | None = None


@dataclass
class Params:
    """Parameters of a route, each keyed by parameter name."""

    path: dict[str, PathParam] = field(default_factory=dict)
    query: dict[str, QueryParam] = field(default_factory=dict)
    header: dict[str, HeaderParam] = field(default_factory=dict)


@dataclass
class Models:
    """Request and response models of a route."""

    request: Model | None = None
    responses: dict[int, Model] = field(default_factory=dict)
    response_headers: dict[int, dict[str, HeaderParam]] = field(default_factory=dict)


@dataclass
class Route:
    """A single method on a single path pattern.

    The ``has_*`` methods mutate the route and return it, so declarations
    can be chained::

        api.get("/users/{id}").has_path_parameter("id", PathParam(regexp=r"\\d+"))
    """

    method: str
    pattern: str
    params: Params = field(default_factory=Params)
    models: Models = field(default_factory=Models)
    tags: list[str] = field(default_factory=list)
    operation_id: str = ""
    description: str = ""
    summary: str = ""
    deprecated: bool = False

    def has_response_model(self, status: int, response: Model) -> Route:
        self.models.responses[status] = response
        return self

    def has_request_model(self, request: Model) -> Route:
        self.models.request = request
        return self

    def has_path_parameter(self, name: str, param: PathParam) -> Route:
        self.params.path[name] = param
        return self

    def has_query_parameter(self, name: str, param: QueryParam) -> Route:
        self.params.query[name] = param
        return self

    def has_header_parameter(self, name: str, param: HeaderParam) -> Route:
        self.params.header[name] = param
        return self

    def has_response_header(self, status: int, name: str, header: HeaderParam) -> Route:
        """Declare a header sent with the response for *status*."""
        self.models.response_headers.setdefault(status, {})[name] = header
        return self

    def has_tags(self, tags: list[str]) -> Route:
        self.tags.extend(tags)
        return self

    def has_operation_id(self, operation_id: str) -> Route:
        self.operation_id = operation_id
        return self

    def has_description(self, description: str) -> Route:
        self.description = description
        return self

    def has_summary(self, summary: str) -> Route:
        self.summary = summary
        return self

    def has_deprecated(self, deprecated: bool = True) -> Route:
        self.deprecated = deprecated
        return self
