# Copyright 2026 openapi-reflect Contributors
# SPDX-License-Identifier: Apache-2.0

"""The :class:`API` builder: declare routes, then produce the document.

Example::

    api = API("messages", info=Info(version="1.0.0"))
    api.get("/topic/{id}") \\
        .has_path_parameter("id", PathParam(regexp=r"\\d+")) \\
        .has_response_model(200, model_of(Body[Topic]))
    print(api.yaml())

An :class:`API` owns the schema registry and comment cache of its
generations. It is not safe to share one instance between threads while a
document is being generated.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from openapi_reflect.api.assembler import assemble, new_document
from openapi_reflect.api.routes import Route
from openapi_reflect.model.document import Document, Info, Server
from openapi_reflect.model.schema import Schema
from openapi_reflect.reflection.comments import CommentLoader, CommentStore
from openapi_reflect.reflection.engine import (
    Model,
    ReflectionEngine,
    SchemaRegistry,
    TypeCustomizer,
    default_known_types,
)
from openapi_reflect.reflection.naming import NamingEngine
from openapi_reflect.reflection.options import ModelOption

# ###############
# Public Interface
# ###############


class API:
    """A model of a REST API's routes and their request and response types.

    Args:
        name: Name of the API, used as the document title unless *info*
            sets one.
        info: Document info; an ``info.title`` also replaces *name*.
        servers: Servers hosting the API.
        strip_pkg_paths: Module prefixes left out of component names, to
            avoid leaking internal package layout. Stripping increases the
            risk of two types sharing a name.
        known_types: Types mapped straight to a schema. Defaults to
            :func:`~openapi_reflect.reflection.engine.default_known_types`.
        apply_custom_schema_to_type: Hook called with ``(type, schema)`` for
            every resolved type.
        comment_loader: Replacement source of type and field documentation.
    """

    def __init__(
        self,
        name: str,
        *,
        info: Info | None = None,
        servers: Iterable[Server] = (),
        strip_pkg_paths: Iterable[str] = (),
        known_types: dict[Any, Schema] | None = None,
        apply_custom_schema_to_type: TypeCustomizer | None = None,
        comment_loader: CommentLoader | None = None,
    ) -> None:
        self.name = info.title if info is not None and info.title else name
        self.info = info if info is not None else Info()
        self.servers = list(servers)
        # Pattern, then upper-case method, to route.
        self.routes: dict[str, dict[str, Route]] = {}
        self._naming = NamingEngine(strip_pkg_paths)
        self._engine = ReflectionEngine(
            registry=SchemaRegistry(),
            comments=CommentStore(comment_loader),
            naming=self._naming,
            known_types=known_types if known_types is not None else default_known_types(),
            apply_custom_schema_to_type=apply_custom_schema_to_type,
        )

    @property
    def strip_pkg_paths(self) -> list[str]:
        return self._naming.strip_pkg_paths

    @strip_pkg_paths.setter
    def strip_pkg_paths(self, paths: Iterable[str]) -> None:
        self._naming.strip_pkg_paths = list(paths)

    @property
    def known_types(self) -> dict[Any, Schema]:
        return self._engine.known_types

    @property
    def apply_custom_schema_to_type(self) -> TypeCustomizer | None:
        return self._engine.apply_custom_schema_to_type

    @apply_custom_schema_to_type.setter
    def apply_custom_schema_to_type(self, hook: TypeCustomizer | None) -> None:
        self._engine.apply_custom_schema_to_type = hook

    @property
    def models(self) -> SchemaRegistry:
        """Schemas registered so far; they may be edited before :meth:`spec` runs."""
        return self._engine.registry

    def route(self, method: str, pattern: str) -> Route:
        """Return the route for *method* and *pattern*, creating it on first use."""
        method = method.upper()
        method_to_route = self.routes.setdefault(pattern, {})
        if method not in method_to_route:
            method_to_route[method] = Route(method=method, pattern=pattern)
        return method_to_route[method]

    def get(self, pattern: str) -> Route:
        return self.route("GET", pattern)

    def head(self, pattern: str) -> Route:
        return self.route("HEAD", pattern)

    def post(self, pattern: str) -> Route:
        return self.route("POST", pattern)

    def put(self, pattern: str) -> Route:
        return self.route("PUT", pattern)

    def patch(self, pattern: str) -> Route:
        return self.route("PATCH", pattern)

    def delete(self, pattern: str) -> Route:
        return self.route("DELETE", pattern)

    def connect(self, pattern: str) -> Route:
        return self.route("CONNECT", pattern)

    def options(self, pattern: str) -> Route:
        return self.route("OPTIONS", pattern)

    def trace(self, pattern: str) -> Route:
        return self.route("TRACE", pattern)

    def merge(self, route: Route) -> Route:
        """Merge *route* into the existing declaration of the same method and pattern.

        Parameters, responses and the request model are only added where
        the existing route does not declare them yet. This lets router
        adapters contribute what the router already knows.
        """
        target = self.route(route.method, route.pattern)
        _merge_missing(target.params.path, route.params.path)
        _merge_missing(target.params.query, route.params.query)
        _merge_missing(target.params.header, route.params.header)
        if target.models.request is None:
            target.models.request = route.models.request
        _merge_missing(target.models.responses, route.models.responses)
        return target

    def register_model(self, model: Model, *opts: ModelOption) -> tuple[str, Schema]:
        """Resolve *model* ahead of generation so its schema can be adjusted.

        Returns:
            The component name and the schema, which may be modified.
        """
        return self._engine.resolve(model, *opts)

    def spec(self) -> Document:
        """Create the OpenAPI 3.0 document for the declared routes.

        Raises:
            OpenAPIReflectError: If a model cannot be reflected or the
                document fails validation. No partial document is returned.
        """
        document = new_document(self.name, self.info, self.servers)
        return assemble(self.routes, self._engine, document)

    def json(self, *, indent: int | None = None) -> str:
        """Create the document and encode it as JSON."""
        return self.spec().to_json(indent=indent)

    def yaml(self) -> str:
        """Create the document and encode it as YAML."""
        return self.spec().to_yaml()


# ################
# Implementation
# ################


def _merge_missing(into: dict[Any, Any], source: dict[Any, Any]) -> None:
    for key, value in source.items():
        into.setdefault(key, value)
