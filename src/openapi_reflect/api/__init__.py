# Copyright 2026 openapi-reflect Contributors
# SPDX-License-Identifier: Apache-2.0

"""Route builder and document assembly."""

from openapi_reflect.api.api import API
from openapi_reflect.api.assembler import assemble, new_document, primitive_schema
from openapi_reflect.api.routes import (
    HeaderParam,
    Models,
    Params,
    PathParam,
    PrimitiveType,
    QueryParam,
    Route,
)

__all__ = [
    "API",
    "assemble",
    "new_document",
    "primitive_schema",
    "HeaderParam",
    "Models",
    "Params",
    "PathParam",
    "PrimitiveType",
    "QueryParam",
    "Route",
]
