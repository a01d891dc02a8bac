# Copyright 2026 openapi-reflect Contributors
# SPDX-License-Identifier: Apache-2.0

"""Document assembly: turns the route table into an OpenAPI document.

Patterns, methods, parameter names and response statuses are all visited in
sorted order, so two equal route tables always produce identical output.
The finished document is validated before it is returned; a document that
fails validation is never handed to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from openapi_reflect.api.routes import HeaderParam, PathParam, PrimitiveType, QueryParam, Route
from openapi_reflect.model.document import (
    DEFAULT_API_VERSION,
    JSON_MEDIA_TYPE,
    Components,
    Document,
    Header,
    Info,
    MediaType,
    Operation,
    Parameter,
    PathItem,
    RequestBody,
    Response,
    Server,
)
from openapi_reflect.model.schema import Schema, SchemaRef
from openapi_reflect.reflection.engine import ReflectionEngine, reference_or_value
from openapi_reflect.validation.checks import check_document

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

DEFAULT_RESPONSE = "default"

# Order in which operations appear within a path item.
METHOD_ORDER = ("GET", "PUT", "POST", "DELETE", "OPTIONS", "HEAD", "PATCH", "TRACE", "CONNECT")


def new_document(name: str, info: Info | None = None, servers: list[Server] | None = None) -> Document:
    """Create an empty document with its header filled in.

    The title defaults to *name* and the version to ``0.0.0``.
    """
    info = info.model_copy(deep=True) if info is not None else Info()
    if not info.title:
        info.title = name
    if not info.version:
        info.version = DEFAULT_API_VERSION
    return Document(info=info, servers=[s.model_copy() for s in servers or []], components=Components())


def assemble(
    routes: Mapping[str, Mapping[str, Route]],
    engine: ReflectionEngine,
    document: Document,
) -> Document:
    """Add every route of *routes* to *document* and validate the result.

    Args:
        routes: Route table keyed by pattern, then by upper-case method.
        engine: Reflection engine used to resolve request and response models.
        document: Document created by :func:`new_document`.

    Returns:
        The completed *document*.

    Raises:
        OpenAPIReflectError: If a model cannot be resolved or the document
            fails structural validation.
    """
    for pattern in sorted(routes):
        path_item = PathItem()
        method_to_route = routes[pattern]
        for method in sorted(method_to_route, key=_method_sort_key):
            route = method_to_route[method]
            try:
                operation = _build_operation(route, engine)
            except Exception as exc:
                exc.add_note(f"while building operation {method} {pattern}")
                raise
            path_item.set_operation(method, operation)
        document.paths[pattern] = path_item

    for name, schema in sorted(engine.registry.items()):
        document.components.schemas[name] = schema

    logger.debug(
        "Assembled %d path(s) with %d component schema(s)",
        len(document.paths),
        len(document.components.schemas),
    )
    check_document(document)
    return document


def primitive_schema(param_type: PrimitiveType | str | None) -> Schema:
    """Return the schema of a simple parameter type; unset means string."""
    if param_type is None or param_type == "":
        return Schema.string()
    value = param_type.value if isinstance(param_type, PrimitiveType) else param_type
    return Schema(type=value)


# ################
# Implementation
# ################


def _method_sort_key(method: str) -> tuple[int, str]:
    upper = method.upper()
    index = METHOD_ORDER.index(upper) if upper in METHOD_ORDER else len(METHOD_ORDER)
    return index, upper


def _build_operation(route: Route, engine: ReflectionEngine) -> Operation:
    operation = Operation()

    for name in sorted(route.params.query):
        operation.parameters.append(_query_parameter(name, route.params.query[name]))
    for name in sorted(route.params.path):
        operation.parameters.append(_path_parameter(name, route.params.path[name]))
    for name in sorted(route.params.header):
        operation.parameters.append(_header_parameter(name, route.params.header[name]))

    if route.models.request is not None:
        name, schema = engine.resolve(route.models.request)
        operation.request_body = RequestBody(content={JSON_MEDIA_TYPE: MediaType(schema_ref=reference_or_value(name, schema))})

    for status in sorted(route.models.responses):
        name, schema = engine.resolve(route.models.responses[status])
        response = Response(content={JSON_MEDIA_TYPE: MediaType(schema_ref=reference_or_value(name, schema))})
        headers = route.models.response_headers.get(status, {})
        for header_name in sorted(headers):
            response.headers[header_name] = _response_header(headers[header_name])
        operation.responses[str(status)] = response
    if not operation.responses:
        # An operation needs at least one response.
        operation.responses[DEFAULT_RESPONSE] = Response()

    operation.tags = list(route.tags)
    operation.operation_id = route.operation_id
    operation.description = route.description
    operation.summary = route.summary
    operation.deprecated = route.deprecated
    return operation


def _query_parameter(name: str, param: QueryParam) -> Parameter:
    schema = primitive_schema(param.type)
    schema.pattern = param.regexp
    parameter = Parameter(
        name=name,
        location="query",
        description=param.description,
        required=param.required,
        allow_empty_value=param.allow_empty,
        schema_ref=SchemaRef.inline(schema),
    )
    if param.apply_custom_schema is not None:
        param.apply_custom_schema(parameter)
    return parameter


def _path_parameter(name: str, param: PathParam) -> Parameter:
    schema = primitive_schema(param.type)
    schema.pattern = param.regexp
    # Path parameters are always required.
    parameter = Parameter(
        name=name,
        location="path",
        description=param.description,
        required=True,
        schema_ref=SchemaRef.inline(schema),
    )
    if param.apply_custom_schema is not None:
        param.apply_custom_schema(parameter)
    return parameter


def _header_parameter(name: str, param: HeaderParam) -> Parameter:
    parameter = Parameter(
        name=name,
        location="header",
        description=param.description,
        required=param.required,
        schema_ref=SchemaRef.inline(primitive_schema(param.type)),
    )
    if param.apply_custom_schema is not None:
        param.apply_custom_schema(parameter)
    return parameter


def _response_header(param: HeaderParam) -> Header:
    return Header(
        description=param.description,
        required=param.required,
        schema_ref=SchemaRef.inline(primitive_schema(param.type)),
    )
