# Copyright 2026 openapi-reflect Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type descriptors: a uniform view over Python type hints.

The reflection engine never inspects type hints directly. It asks
:func:`describe` for a :class:`TypeDescriptor`, which classifies the hint
into a :class:`Kind` and exposes element, key and field information on
demand. Field and element descriptors are computed lazily, so describing a
self-referencing dataclass does not recurse.

Supported hints:

* ``str``, ``bytes``, ``int``, ``float``, ``decimal.Decimal``, ``bool``
* ``Optional[T]`` / ``T | None`` (pointer kind)
* ``list[T]``, ``tuple[T, ...]``, ``set[T]``, ``frozenset[T]``, ``Sequence[T]``
* ``dict[K, V]``, ``Mapping[K, V]``
* dataclasses and pydantic models, including parametrised generics
* ``enum.Enum`` subclasses with string or integer values
* ``typing.Any`` and ``object``

Fields are tuned with ``Annotated[T, Tag(...)]``.
"""

from __future__ import annotations

import collections.abc
import dataclasses
import decimal
import enum
import types
import typing
from dataclasses import dataclass
from typing import Annotated, Any, TypeVar

from pydantic import BaseModel

# ###############
# Public Interface
# ###############

ANONYMOUS_STRUCT_NAME = "struct"
_ANONYMOUS_MARKER = "__openapi_anonymous__"


class Kind(enum.Enum):
    """Shape classification of a type hint."""

    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    SLICE = "slice"
    MAP = "map"
    STRUCT = "struct"
    POINTER = "pointer"
    INTERFACE = "interface"
    ENUM = "enum"
    UNSUPPORTED = "unsupported"


PRIMITIVE_KINDS = frozenset({Kind.STRING, Kind.INTEGER, Kind.NUMBER, Kind.BOOLEAN})


@dataclass(frozen=True)
class Tag:
    """Serialization options attached to a field through ``Annotated``.

    Attributes:
        name: Serialized property name. Defaults to the pydantic alias or the
            attribute name.
        omitempty: The field may be left out, so it is never ``required``.
        embedded: The field's properties are flattened into the parent.
    """

    name: str | None = None
    omitempty: bool = False
    embedded: bool = False


@dataclass(frozen=True)
class FieldDescriptor:
    """A visible field of a struct type, in declaration order."""

    attribute: str
    serialized_name: str
    type: TypeDescriptor
    embedded: bool = False
    omitempty: bool = False

    @property
    def is_pointer(self) -> bool:
        return self.type.kind is Kind.POINTER

    @property
    def required(self) -> bool:
        """A field is required unless it is a pointer or explicitly optional."""
        return not (self.is_pointer or self.omitempty)


class TypeDescriptor:
    """Immutable description of a single type hint."""

    def __init__(self, hint: Any, kind: Kind, package_path: str, name: str) -> None:
        self._hint = hint
        self._kind = kind
        self._package_path = package_path
        self._name = name
        self._fields: list[FieldDescriptor] | None = None

    def __repr__(self) -> str:
        return f"TypeDescriptor({self._kind.value}, {self._package_path!r}, {self._name!r})"

    @property
    def hint(self) -> Any:
        """The described type hint with any ``Annotated`` wrapper removed."""
        return self._hint

    @property
    def kind(self) -> Kind:
        return self._kind

    @property
    def package_path(self) -> str:
        """Module defining the type; empty for builtins and anonymous types."""
        return self._package_path

    @property
    def name(self) -> str:
        """Declared name, including generic arguments; empty when there is none."""
        return self._name

    @property
    def is_anonymous(self) -> bool:
        return self._kind is Kind.STRUCT and self._name == ""

    @property
    def comment_name(self) -> str:
        """Name under which the type's documentation is recorded in its module."""
        origin = _struct_origin(self._hint)
        return getattr(origin, "__qualname__", self._name)

    def element(self) -> TypeDescriptor:
        """Element of a slice, value of a map, or pointee of a pointer."""
        if self._kind is Kind.POINTER:
            return describe(_pointee(self._hint))
        if self._kind is Kind.SLICE:
            args = typing.get_args(self._hint)
            return describe(args[0] if args else Any)
        if self._kind is Kind.MAP:
            args = typing.get_args(self._hint)
            return describe(args[1] if args else Any)
        raise TypeError(f"{self!r} has no element type")

    def key(self) -> TypeDescriptor:
        """Key type of a map."""
        if self._kind is not Kind.MAP:
            raise TypeError(f"{self!r} has no key type")
        args = typing.get_args(self._hint)
        return describe(args[0] if args else str)

    def fields(self) -> list[FieldDescriptor]:
        """Visible fields of a struct, in declaration order."""
        if self._kind is not Kind.STRUCT:
            raise TypeError(f"{self!r} has no fields")
        if self._fields is None:
            self._fields = _struct_fields(self._hint)
        return list(self._fields)

    def enum_values(self) -> list[Any]:
        """Literal values of an enum type."""
        if self._kind is not Kind.ENUM:
            raise TypeError(f"{self!r} is not an enum")
        return [member.value for member in self._hint]

    def enum_base(self) -> Kind | None:
        """Return STRING or INTEGER when every enum value has that literal type."""
        return enum_base_kind(self.enum_values())


def describe(hint: Any) -> TypeDescriptor:
    """Classify *hint* and return its :class:`TypeDescriptor`."""
    hint = _strip_annotated(hint)
    origin = typing.get_origin(hint)
    args = typing.get_args(hint)

    if hint is Any or hint is object:
        return TypeDescriptor(hint, Kind.INTERFACE, "", "")

    if origin is typing.Union or origin is types.UnionType:
        non_none = [a for a in args if a is not type(None)]
        if len(non_none) == 1 and len(non_none) < len(args):
            return TypeDescriptor(hint, Kind.POINTER, "", "")
        return TypeDescriptor(hint, Kind.UNSUPPORTED, "typing", display_name(hint))

    if origin is not None:
        if origin is tuple:
            if len(args) == 2 and args[1] is Ellipsis:
                return TypeDescriptor(hint, Kind.SLICE, "", "")
            return TypeDescriptor(hint, Kind.UNSUPPORTED, "", display_name(hint))
        if origin in _SLICE_ORIGINS:
            return TypeDescriptor(hint, Kind.SLICE, "", "")
        if origin in _MAP_ORIGINS:
            return TypeDescriptor(hint, Kind.MAP, "", "")
        if dataclasses.is_dataclass(origin):
            return TypeDescriptor(hint, Kind.STRUCT, _package_of(origin), display_name(hint, qualified=False))
        return TypeDescriptor(hint, Kind.UNSUPPORTED, _package_of(origin), display_name(hint, qualified=False))

    if not isinstance(hint, type):
        return TypeDescriptor(hint, Kind.UNSUPPORTED, "", display_name(hint))

    if getattr(hint, _ANONYMOUS_MARKER, False):
        return TypeDescriptor(hint, Kind.STRUCT, "", "")
    if issubclass(hint, enum.Enum):
        return TypeDescriptor(hint, Kind.ENUM, _package_of(hint), hint.__qualname__)
    for base, kind in _PRIMITIVES.items():
        if issubclass(hint, base):
            return TypeDescriptor(hint, kind, _package_of(hint), hint.__qualname__)
    if hint in _SLICE_ORIGINS:
        return TypeDescriptor(hint, Kind.SLICE, "", "")
    if hint in _MAP_ORIGINS:
        return TypeDescriptor(hint, Kind.MAP, "", "")
    if dataclasses.is_dataclass(hint) or issubclass(hint, BaseModel):
        return TypeDescriptor(hint, Kind.STRUCT, _package_of(hint), display_name(hint, qualified=False))
    return TypeDescriptor(hint, Kind.UNSUPPORTED, _package_of(hint), hint.__qualname__)


def struct(**fields: Any) -> type:
    """Create an anonymous struct type with the given field annotations.

    The resulting class is a dataclass without a declared name; schemas
    generated for it receive a unique, non-reproducible component name.

    Example::

        Payload = struct(name=str, age=Annotated[int, Tag(omitempty=True)])
    """
    cls = dataclasses.make_dataclass(ANONYMOUS_STRUCT_NAME, list(fields.items()))
    cls.__module__ = ""
    setattr(cls, _ANONYMOUS_MARKER, True)
    return cls


def display_name(hint: Any, *, qualified: bool = True) -> str:
    """Render *hint* the way it appears inside generic type names.

    Classes outside ``builtins`` are rendered with their module when
    *qualified* is set; the outermost generic origin is rendered without it
    so that the module is only carried by the package path.
    """
    hint = _strip_annotated(hint)
    if hint is Any:
        return "Any"
    if hint is type(None) or hint is None:
        return "None"
    if isinstance(hint, type) and getattr(hint, _ANONYMOUS_MARKER, False):
        parts = [f"{f.name} {display_name(f.type)}" for f in dataclasses.fields(hint)]
        return ANONYMOUS_STRUCT_NAME + "{" + "; ".join(parts) + "}"

    origin = typing.get_origin(hint)
    args = typing.get_args(hint)
    if origin is typing.Union or origin is types.UnionType:
        non_none = [a for a in args if a is not type(None)]
        if len(non_none) == 1 and len(non_none) < len(args):
            return f"Optional[{display_name(non_none[0])}]"
        return "Union[" + ", ".join(display_name(a) for a in args) + "]"
    if origin is not None:
        rendered = [("..." if a is Ellipsis else display_name(a)) for a in args]
        return f"{_class_name(origin, qualified)}[{', '.join(rendered)}]"

    if isinstance(hint, type):
        metadata = getattr(hint, "__pydantic_generic_metadata__", None)
        if metadata and metadata.get("origin") is not None:
            rendered = [display_name(a) for a in metadata["args"]]
            return f"{_class_name(metadata['origin'], qualified)}[{', '.join(rendered)}]"
        return _class_name(hint, qualified)
    if isinstance(hint, TypeVar):
        return hint.__name__
    return str(hint)


def enum_base_kind(values: list[Any]) -> Kind | None:
    """Return STRING or INTEGER when every value has that literal type, else None."""
    if not values:
        return None
    if all(isinstance(v, str) for v in values):
        return Kind.STRING
    if all(isinstance(v, int) and not isinstance(v, bool) for v in values):
        return Kind.INTEGER
    return None


# ################
# Implementation
# ################

_PRIMITIVES: dict[type, Kind] = {
    str: Kind.STRING,
    bytes: Kind.STRING,
    bool: Kind.BOOLEAN,
    int: Kind.INTEGER,
    float: Kind.NUMBER,
    decimal.Decimal: Kind.NUMBER,
}

_SLICE_ORIGINS = (
    list,
    set,
    frozenset,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.MutableSet,
)

_MAP_ORIGINS = (
    dict,
    collections.abc.Mapping,
    collections.abc.MutableMapping,
)


def _strip_annotated(hint: Any) -> Any:
    while typing.get_origin(hint) is Annotated:
        hint = hint.__origin__
    return hint


def _pointee(hint: Any) -> Any:
    return next(a for a in typing.get_args(hint) if a is not type(None))


def _package_of(cls: Any) -> str:
    module = getattr(cls, "__module__", "") or ""
    return "" if module == "builtins" else module


def _class_name(cls: Any, qualified: bool) -> str:
    name = getattr(cls, "__qualname__", None) or getattr(cls, "__name__", str(cls))
    module = _package_of(cls)
    if qualified and module:
        return f"{module}.{name}"
    return name


def _struct_origin(hint: Any) -> Any:
    """Return the generic class behind a parametrised dataclass or pydantic model."""
    origin = typing.get_origin(hint)
    if origin is not None:
        return origin
    metadata = getattr(hint, "__pydantic_generic_metadata__", None)
    if metadata and metadata.get("origin") is not None:
        return metadata["origin"]
    return hint


def _tag_of(metadata: typing.Iterable[Any]) -> Tag:
    for item in metadata:
        if isinstance(item, Tag):
            return item
    return Tag()


def _field_metadata(hint: Any) -> list[Any]:
    if typing.get_origin(hint) is Annotated:
        return list(hint.__metadata__)
    return []


def _substitute(hint: Any, mapping: dict[Any, Any]) -> Any:
    """Replace type variables in *hint* according to *mapping*."""
    if not mapping:
        return hint
    if isinstance(hint, TypeVar):
        return mapping.get(hint, hint)
    parameters = getattr(hint, "__parameters__", ())
    if parameters and not isinstance(hint, type):
        return hint[tuple(mapping.get(p, p) for p in parameters)]
    return hint


def _struct_fields(hint: Any) -> list[FieldDescriptor]:
    if isinstance(hint, type) and issubclass(hint, BaseModel):
        return _pydantic_fields(hint)
    return _dataclass_fields(hint)


def _dataclass_fields(hint: Any) -> list[FieldDescriptor]:
    origin = typing.get_origin(hint) or hint
    mapping: dict[Any, Any] = {}
    if origin is not hint:
        mapping = dict(zip(getattr(origin, "__parameters__", ()), typing.get_args(hint)))

    hints = typing.get_type_hints(origin, include_extras=True)
    result: list[FieldDescriptor] = []
    for f in dataclasses.fields(origin):
        if f.name.startswith("_"):
            continue
        field_hint = _substitute(hints.get(f.name, f.type), mapping)
        tag = _tag_of(_field_metadata(field_hint))
        result.append(
            FieldDescriptor(
                attribute=f.name,
                serialized_name=tag.name or f.name,
                type=describe(field_hint),
                embedded=tag.embedded,
                omitempty=tag.omitempty,
            )
        )
    return result


def _pydantic_fields(model: type[BaseModel]) -> list[FieldDescriptor]:
    result: list[FieldDescriptor] = []
    for name, info in model.model_fields.items():
        tag = _tag_of(info.metadata)
        alias = info.serialization_alias or info.alias
        result.append(
            FieldDescriptor(
                attribute=name,
                serialized_name=tag.name or alias or name,
                type=describe(info.annotation),
                embedded=tag.embedded,
                omitempty=tag.omitempty,
            )
        )
    return result
