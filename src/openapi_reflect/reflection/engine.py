# Copyright 2026 openapi-reflect Contributors
# SPDX-License-Identifier: Apache-2.0

"""Reflection engine: converts type hints into schema trees.

:meth:`ReflectionEngine.resolve` walks a type through its
:class:`~openapi_reflect.reflection.descriptor.TypeDescriptor` and returns
the component name and :class:`~openapi_reflect.model.schema.Schema` for
it. Object schemas with a closed property set and enum schemas are
registered in a :class:`SchemaRegistry` and referenced from their use sites;
every other shape is inlined.

Customisation is applied in a fixed order once the structural schema is
built: the engine-wide type hook, the model's own hook, then the call-site
options. The registration decision is made afterwards.

Struct schemas are registered before their fields are resolved, so a type
graph containing a cycle terminates on the second visit of the same name.
"""

from __future__ import annotations

import datetime
import inspect
import logging
import typing
import uuid
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any

from openapi_reflect.errors import NameCollisionError, UnsupportedMapKeyError, UnsupportedTypeError
from openapi_reflect.model.schema import Schema, SchemaRef
from openapi_reflect.reflection.comments import CommentStore
from openapi_reflect.reflection.descriptor import Kind, TypeDescriptor, describe, display_name
from openapi_reflect.reflection.naming import NamingEngine
from openapi_reflect.reflection.options import ModelOption, with_nullable

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

SchemaCustomizer = Callable[[Schema], None]
TypeCustomizer = Callable[[Any, Schema], None]

INTERFACE_DESCRIPTION = "Any type (accepts any value)"


@dataclass(frozen=True)
class Model:
    """A type used in one or more routes, with an optional schema hook.

    Attributes:
        type: The type hint to reflect.
        apply_custom_schema: Called with the generated schema so the model
            can adjust it.
    """

    type: Any
    apply_custom_schema: SchemaCustomizer | None = None

    def customize(self, schema: Schema) -> None:
        if self.apply_custom_schema is not None:
            self.apply_custom_schema(schema)


def model_of(tp: Any) -> Model:
    """Create a :class:`Model` for *tp*.

    If the type defines ``apply_custom_schema`` as a classmethod or
    staticmethod, it becomes the model's hook.
    """
    return Model(type=tp, apply_custom_schema=_custom_schema_hook(tp))


def default_known_types() -> dict[Any, Schema]:
    """Return the built-in type-to-schema mappings that bypass reflection."""
    return {
        datetime.datetime: Schema.date_time(),
        datetime.date: Schema(type="string", format="date"),
        uuid.UUID: Schema(type="string", format="uuid"),
    }


def should_be_referenced(schema: Schema) -> bool:
    """Objects with a closed property set, and enums, become named components."""
    if schema.is_object() and not schema.has_open_additional_properties():
        return True
    return len(schema.enum) > 0


def reference_or_value(name: str, schema: Schema) -> SchemaRef:
    """Return a reference to *name* if *schema* is registered, else the inline schema."""
    if should_be_referenced(schema):
        return SchemaRef.to(name)
    return SchemaRef.inline(schema)


class SchemaRegistry:
    """Component name to schema mapping for one generation run.

    Each name remembers the type it was registered for; looking a name up
    on behalf of a different type is a collision.
    """

    def __init__(self) -> None:
        self._schemas: dict[str, Schema] = {}
        self._owners: dict[str, Any] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)

    def __iter__(self) -> Iterator[str]:
        return iter(self._schemas)

    def get(self, name: str, owner: Any = None) -> Schema | None:
        """Return the schema registered as *name*.

        Raises:
            NameCollisionError: If *owner* is given and differs from the type
                the name was registered for.
        """
        schema = self._schemas.get(name)
        if schema is not None and owner is not None:
            self._check_owner(name, owner)
        return schema

    def register(self, name: str, schema: Schema, owner: Any = None) -> None:
        """Register *schema* as *name*; re-registering the same schema is a no-op.

        Raises:
            NameCollisionError: If a different schema or type already holds the name.
        """
        existing = self._schemas.get(name)
        if existing is not None:
            if existing is not schema:
                raise NameCollisionError(f"component name {name!r} is already registered for another schema")
            if owner is not None:
                self._check_owner(name, owner)
            return
        logger.debug("Registering schema %r", name)
        self._schemas[name] = schema
        if owner is not None:
            self._owners[name] = owner

    def retract(self, name: str) -> None:
        """Remove *name*; used when an embedded type is flattened into its parent."""
        if self._schemas.pop(name, None) is not None:
            logger.debug("Retracting schema %r", name)
        self._owners.pop(name, None)

    def items(self) -> list[tuple[str, Schema]]:
        return list(self._schemas.items())

    def _check_owner(self, name: str, owner: Any) -> None:
        registered = self._owners.get(name)
        if registered is not None and registered != owner:
            raise NameCollisionError(
                f"component name {name!r} is shared by {display_name(registered)} and {display_name(owner)}"
            )


class ReflectionEngine:
    """Resolves models into schemas, filling a :class:`SchemaRegistry`.

    Args:
        registry: Destination for named components.
        comments: Source of field and type descriptions.
        naming: Component name generator.
        known_types: Types mapped straight to a schema, bypassing reflection.
        apply_custom_schema_to_type: Hook called with ``(type, schema)`` for
            every resolved type.
    """

    def __init__(
        self,
        *,
        registry: SchemaRegistry | None = None,
        comments: CommentStore | None = None,
        naming: NamingEngine | None = None,
        known_types: dict[Any, Schema] | None = None,
        apply_custom_schema_to_type: TypeCustomizer | None = None,
    ) -> None:
        self.registry = registry if registry is not None else SchemaRegistry()
        self.comments = comments if comments is not None else CommentStore()
        self.naming = naming if naming is not None else NamingEngine()
        self.known_types = known_types if known_types is not None else default_known_types()
        self.apply_custom_schema_to_type = apply_custom_schema_to_type
        self._depth = 0

    def resolve(self, model: Model, *opts: ModelOption) -> tuple[str, Schema]:
        """Return the component name and schema of *model*.

        Raises:
            UnsupportedTypeError: If a type has no schema rule.
            UnsupportedMapKeyError: If a mapping key is not string-like.
            CommentLookupError: If a struct's documentation cannot be read.
            NameCollisionError: If two distinct types produce the same name.
        """
        top_level = self._depth == 0
        registered_before = set(self.registry) if top_level else set()
        self._depth += 1
        try:
            return self._resolve(model, *opts)
        except BaseException:
            if top_level:
                # A failed resolution leaves no partially built components behind.
                for name in [n for n in self.registry if n not in registered_before]:
                    self.registry.retract(name)
            raise
        finally:
            self._depth -= 1

    def _resolve(self, model: Model, *opts: ModelOption) -> tuple[str, Schema]:
        descriptor = describe(model.type)
        name = self.naming.model_name(descriptor)
        owner = descriptor.hint

        cached = self.registry.get(name, owner)
        if cached is not None:
            return name, cached

        known = self._known_schema(descriptor.hint)
        if known is not None:
            schema = known.model_copy(deep=True)
            for opt in opts:
                opt(schema)
            if should_be_referenced(schema):
                self.registry.register(name, schema, owner)
            return name, schema

        provisional = False
        kind = descriptor.kind
        if kind is Kind.POINTER:
            pointee = descriptor.element()
            name, schema = self.resolve(model_of(pointee.hint), with_nullable())
            owner = pointee.hint
        elif kind is Kind.STRING:
            schema = Schema.string()
        elif kind is Kind.INTEGER:
            schema = Schema.integer()
        elif kind is Kind.NUMBER:
            schema = Schema.number()
        elif kind is Kind.BOOLEAN:
            schema = Schema.boolean()
        elif kind is Kind.SLICE:
            schema = self._slice_schema(descriptor)
        elif kind is Kind.MAP:
            schema = self._map_schema(descriptor)
        elif kind is Kind.INTERFACE:
            schema = Schema.object()
            schema.description = INTERFACE_DESCRIPTION
            schema.additional_properties = True
        elif kind is Kind.ENUM:
            schema = self._enum_schema(descriptor)
        elif kind is Kind.STRUCT:
            schema = Schema.object()
            self.registry.register(name, schema, owner)
            provisional = True
            self._fill_struct(descriptor, name, schema)
        else:
            raise UnsupportedTypeError(descriptor.package_path, descriptor.name or display_name(descriptor.hint))

        if self.apply_custom_schema_to_type is not None:
            self.apply_custom_schema_to_type(descriptor.hint, schema)
        model.customize(schema)
        for opt in opts:
            opt(schema)

        if should_be_referenced(schema):
            self.registry.register(name, schema, owner)
        elif provisional:
            self.registry.retract(name)
        return name, schema

    def _registry_name(self, descriptor: TypeDescriptor) -> str:
        # Pointers are registered under their pointee's name.
        if descriptor.kind is Kind.POINTER:
            descriptor = descriptor.element()
        return self.naming.model_name(descriptor)

    def _known_schema(self, hint: Any) -> Schema | None:
        try:
            return self.known_types.get(hint)
        except TypeError:
            # Unhashable hints cannot be known types.
            return None

    def _slice_schema(self, descriptor: TypeDescriptor) -> Schema:
        element = descriptor.element()
        try:
            element_name, element_schema = self.resolve(model_of(element.hint))
        except Exception as exc:
            exc.add_note(f"while resolving the element of {display_name(descriptor.hint)}")
            raise
        schema = Schema.array(reference_or_value(element_name, element_schema))
        # Sequences are always nullable.
        schema.nullable = True
        return schema

    def _map_schema(self, descriptor: TypeDescriptor) -> Schema:
        key = descriptor.key()
        if not (key.kind is Kind.STRING or (key.kind is Kind.ENUM and key.enum_base() is Kind.STRING)):
            raise UnsupportedMapKeyError(display_name(key.hint))
        value = descriptor.element()
        try:
            value_name, value_schema = self.resolve(model_of(value.hint))
        except Exception as exc:
            exc.add_note(f"while resolving the values of {display_name(descriptor.hint)}")
            raise
        schema = Schema.object()
        schema.nullable = True
        schema.additional_properties = reference_or_value(value_name, value_schema)
        return schema

    def _enum_schema(self, descriptor: TypeDescriptor) -> Schema:
        base = descriptor.enum_base()
        if base is None:
            raise UnsupportedTypeError(descriptor.package_path, descriptor.name)
        schema = Schema.string() if base is Kind.STRING else Schema.integer()
        schema.enum = descriptor.enum_values()
        schema.description, schema.deprecated = self.comments.lookup(
            descriptor.package_path, descriptor.comment_name
        )
        return schema

    def _fill_struct(self, descriptor: TypeDescriptor, name: str, schema: Schema) -> None:
        package_path, type_name = descriptor.package_path, descriptor.comment_name
        schema.description, schema.deprecated = self.comments.lookup(package_path, type_name)

        for field in descriptor.fields():
            already_registered = self._registry_name(field.type) in self.registry
            try:
                field_name, field_schema = self.resolve(model_of(field.type.hint))
            except Exception as exc:
                exc.add_note(f"while resolving field {field.serialized_name!r} of {name!r}")
                raise

            if field.embedded:
                # Embedding copies the fields; the embedded type needs no component of its own.
                if not already_registered:
                    self.registry.retract(field_name)
                schema.properties.update(field_schema.properties)
                schema.required.extend(r for r in field_schema.required if r not in schema.required)
                continue

            ref = reference_or_value(field_name, field_schema)
            if ref.value is not None:
                text, deprecated = self.comments.lookup(package_path, type_name, field.attribute)
                if text:
                    ref.value.description = text
                if deprecated:
                    ref.value.deprecated = True
            schema.properties[field.serialized_name] = ref
            if field.required and field.serialized_name not in schema.required:
                schema.required.append(field.serialized_name)


# ################
# Implementation
# ################


def _custom_schema_hook(tp: Any) -> SchemaCustomizer | None:
    while typing.get_origin(tp) is typing.Annotated:
        tp = tp.__origin__
    cls = typing.get_origin(tp) or tp
    if not isinstance(cls, type):
        return None
    attribute = inspect.getattr_static(cls, "apply_custom_schema", None)
    if isinstance(attribute, (classmethod, staticmethod)):
        return getattr(cls, "apply_custom_schema")
    return None
