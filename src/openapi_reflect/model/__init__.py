# Copyright 2026 openapi-reflect Contributors
# SPDX-License-Identifier: Apache-2.0

"""Schema nodes and OpenAPI document objects."""

from openapi_reflect.model.document import (
    DEFAULT_API_VERSION,
    JSON_MEDIA_TYPE,
    OPENAPI_VERSION,
    Components,
    Contact,
    Document,
    Header,
    Info,
    License,
    MediaType,
    Operation,
    Parameter,
    PathItem,
    RequestBody,
    Response,
    Server,
)
from openapi_reflect.model.schema import COMPONENTS_PREFIX, Schema, SchemaRef

__all__ = [
    # Schema nodes
    "COMPONENTS_PREFIX",
    "Schema",
    "SchemaRef",
    # Document
    "OPENAPI_VERSION",
    "DEFAULT_API_VERSION",
    "JSON_MEDIA_TYPE",
    "Contact",
    "License",
    "Info",
    "Server",
    "Parameter",
    "Header",
    "MediaType",
    "RequestBody",
    "Response",
    "Operation",
    "PathItem",
    "Components",
    "Document",
]
