# Copyright 2026 openapi-reflect Contributors
# SPDX-License-Identifier: Apache-2.0

"""Exception hierarchy shared by the reflection engine and document assembler."""

# ###############
# Public Interface
# ###############


class OpenAPIReflectError(Exception):
    """Base class for every error raised while producing an OpenAPI document."""


class UnsupportedTypeError(OpenAPIReflectError):
    """Raised when a type has no applicable schema rule (e.g. a callable)."""

    def __init__(self, package_path: str, type_name: str) -> None:
        super().__init__(f"unsupported type: {package_path}/{type_name}")
        self.package_path = package_path
        self.type_name = type_name


class UnsupportedMapKeyError(OpenAPIReflectError):
    """Raised when a mapping type has a key that is not string-like."""

    def __init__(self, key_type: str) -> None:
        super().__init__(f"maps must have a string key, but this map is of type {key_type!r}")
        self.key_type = key_type


class CommentLookupError(OpenAPIReflectError):
    """Raised when the documentation source of a package cannot be read."""


class NameCollisionError(OpenAPIReflectError):
    """Raised when two distinct schemas would share one component name."""


class StructuralValidationError(OpenAPIReflectError):
    """Raised when the finished document fails its consistency checks."""


class ApiConfigError(OpenAPIReflectError):
    """Raised when an API configuration file is invalid or cannot be loaded."""
