# Copyright 2026 openapi-reflect Contributors
# SPDX-License-Identifier: Apache-2.0

"""Component naming: stable, collision-resistant schema names.

A component name is derived from the defining module and the declared type
name. Characters that are not legal in ``components.schemas`` keys are
rewritten or removed. Names of anonymous structs, and of generics
instantiated with an anonymous struct, carry a unique token instead and are
therefore not reproducible across runs.
"""

from __future__ import annotations

import re
import time
from collections.abc import Iterable
from typing import Any

from openapi_reflect.reflection.descriptor import Kind, TypeDescriptor

# ###############
# Public Interface
# ###############

ANONYMOUS_TYPE_NAME = "AnonymousType"
ANONYMOUS_STRUCT_PREFIX = "Struct_"
POINTER_SUFFIX = "Ptr"


class NamingEngine:
    """Computes component names, hiding configured package prefixes.

    Attributes:
        strip_pkg_paths: Package path prefixes omitted from generated names.
            Stripping increases the risk of two types in different packages
            sharing a name.
    """

    def __init__(self, strip_pkg_paths: Iterable[str] = ()) -> None:
        self.strip_pkg_paths = list(strip_pkg_paths)
        # Anonymous types keep their token for the lifetime of the engine.
        self._anonymous: dict[Any, str] = {}

    def name(self, package_path: str, declared_name: str) -> str:
        """Return the sanitized component name for a package path and type name."""
        omit_package = package_path == "" or any(package_path.startswith(p) for p in self.strip_pkg_paths)

        if _GENERIC_ANONYMOUS_STRUCT.search(declared_name):
            declared_name = _GENERIC_ANONYMOUS_STRUCT.sub(rf"\1[struct_{unique_token()}]", declared_name)

        raw = declared_name if omit_package else f"{package_path}/{declared_name}"
        name = _ILLEGAL.sub("", raw.translate(_SUBSTITUTIONS))
        name = name.removesuffix("_")
        name = name.removesuffix(".")
        return name

    def model_name(self, descriptor: TypeDescriptor) -> str:
        """Return the registry key of a described type.

        Pointers are named after their pointee with a ``Ptr`` suffix, maps
        as ``map[K]V``; anonymous structs get a unique synthetic name and
        every other unnamed type shares the ``AnonymousType`` placeholder.
        A given anonymous type keeps its name for the lifetime of the engine.
        """
        if descriptor.is_anonymous or _GENERIC_ANONYMOUS_STRUCT.search(descriptor.name):
            if descriptor.hint not in self._anonymous:
                self._anonymous[descriptor.hint] = self._model_name(descriptor)
            return self._anonymous[descriptor.hint]
        return self._model_name(descriptor)

    def _model_name(self, descriptor: TypeDescriptor) -> str:
        package_path, type_name = descriptor.package_path, descriptor.name
        if descriptor.kind is Kind.POINTER:
            pointee = descriptor.element()
            package_path, type_name = pointee.package_path, pointee.name + POINTER_SUFFIX
        elif descriptor.kind is Kind.MAP:
            type_name = f"map[{descriptor.key().name}]{descriptor.element().name}"
        elif descriptor.is_anonymous:
            type_name = ANONYMOUS_STRUCT_PREFIX + str(unique_token())

        if type_name == "":
            return ANONYMOUS_TYPE_NAME
        return self.name(package_path, type_name)


def unique_token() -> int:
    """Return a microsecond timestamp, strictly increasing within the process."""
    global _last_token
    token = time.time_ns() // 1000
    if token <= _last_token:
        token = _last_token + 1
    _last_token = token
    return token


# ################
# Implementation
# ################

_last_token = 0

_SUBSTITUTIONS = str.maketrans(
    {
        "/": "_",
        ".": "_",
        "[": "_",
        "]": "_",
        "·": ".",
        " ": None,
        "{": None,
        "}": None,
        "(": None,
        ")": None,
        "-": "_",
        "*": None,
        ",": "_",
        ";": "_",
        ":": None,
        "|": None,
    }
)

# Anything still outside the component key alphabet after substitution.
_ILLEGAL = re.compile(r"[^A-Za-z0-9._-]")

_GENERIC_ANONYMOUS_STRUCT = re.compile(r"(\w+)\[struct\s*\{.*\}\]")
