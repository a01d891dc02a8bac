# Copyright 2026 openapi-reflect Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type reflection: descriptors, naming, comments and the schema engine."""

from openapi_reflect.reflection.comments import (
    CommentStore,
    is_deprecated,
    load_module_comments,
    parse_comments,
)
from openapi_reflect.reflection.descriptor import (
    FieldDescriptor,
    Kind,
    Tag,
    TypeDescriptor,
    describe,
    display_name,
    struct,
)
from openapi_reflect.reflection.engine import (
    Model,
    ReflectionEngine,
    SchemaRegistry,
    default_known_types,
    model_of,
    reference_or_value,
    should_be_referenced,
)
from openapi_reflect.reflection.naming import ANONYMOUS_TYPE_NAME, NamingEngine
from openapi_reflect.reflection.options import (
    ModelOption,
    with_description,
    with_enum_constants,
    with_enum_values,
    with_nullable,
)

__all__ = [
    # Descriptors
    "Kind",
    "Tag",
    "FieldDescriptor",
    "TypeDescriptor",
    "describe",
    "display_name",
    "struct",
    # Naming
    "ANONYMOUS_TYPE_NAME",
    "NamingEngine",
    # Comments
    "CommentStore",
    "is_deprecated",
    "load_module_comments",
    "parse_comments",
    # Engine
    "Model",
    "ReflectionEngine",
    "SchemaRegistry",
    "default_known_types",
    "model_of",
    "reference_or_value",
    "should_be_referenced",
    # Options
    "ModelOption",
    "with_description",
    "with_enum_constants",
    "with_enum_values",
    "with_nullable",
]
