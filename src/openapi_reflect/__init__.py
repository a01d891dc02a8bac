# Copyright 2026 openapi-reflect Contributors
# SPDX-License-Identifier: Apache-2.0

"""Generate OpenAPI 3.0 documents from Python types and route declarations."""

from openapi_reflect.api import API, HeaderParam, Models, Params, PathParam, PrimitiveType, QueryParam, Route
from openapi_reflect.errors import (
    ApiConfigError,
    CommentLookupError,
    NameCollisionError,
    OpenAPIReflectError,
    StructuralValidationError,
    UnsupportedMapKeyError,
    UnsupportedTypeError,
)
from openapi_reflect.model import Contact, Document, Info, License, Parameter, Schema, SchemaRef, Server
from openapi_reflect.reflection import (
    Model,
    Tag,
    model_of,
    struct,
    with_description,
    with_enum_constants,
    with_enum_values,
    with_nullable,
)

__all__ = [
    "API",
    "HeaderParam",
    "Models",
    "Params",
    "PathParam",
    "PrimitiveType",
    "QueryParam",
    "Route",
    "ApiConfigError",
    "CommentLookupError",
    "NameCollisionError",
    "OpenAPIReflectError",
    "StructuralValidationError",
    "UnsupportedMapKeyError",
    "UnsupportedTypeError",
    "Contact",
    "Document",
    "Info",
    "License",
    "Parameter",
    "Schema",
    "SchemaRef",
    "Server",
    "Model",
    "Tag",
    "model_of",
    "struct",
    "with_description",
    "with_enum_constants",
    "with_enum_values",
    "with_nullable",
]
