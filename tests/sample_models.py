# Copyright 2026 openapi-reflect Contributors
# SPDX-License-Identifier: Apache-2.0

"""Types reflected by the test suite.

The documentation in this module is part of the fixtures: tests assert on
the descriptions derived from it.
"""

import datetime
import enum
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from typing import Annotated, Generic, TypeVar

from pydantic import BaseModel, Field

from openapi_reflect import Schema, Tag, struct

T = TypeVar("T")


@dataclass
class Body(Generic[T]):
    """Envelope of every response."""

    message: str
    data: T
    code: int  # Application status code.


@dataclass
class Topic:
    """A named channel that messages are published to."""

    namespace: str
    # Deprecated: topics are addressed by id.
    topic: str
    private: bool


class Colour(enum.Enum):
    """Colours a record can be tagged with."""

    RED = "red"
    GREEN = "green"


class Priority(enum.IntEnum):
    LOW = 1
    HIGH = 2


@dataclass
class Audit:
    """Bookkeeping shared by stored records."""

    created_by: str
    revision: int


@dataclass
class Record:
    """A stored record."""

    audit: Annotated[Audit, Tag(embedded=True)]
    title: str
    """Title shown in listings."""
    note: Annotated[str, Tag(omitempty=True)]
    parent_id: int | None
    labels: list[str]
    attributes: dict[str, str]
    colour: Colour


@dataclass
class TreeNode:
    """A node of a tree of arbitrary depth."""

    name: str
    children: list["TreeNode"]
    parent: "TreeNode | None"


@dataclass
class Renamed:
    user_id: Annotated[str, Tag(name="userId")]
    _cache: str = ""


class Account(BaseModel):
    """A user account."""

    account_id: str = Field(alias="accountId")
    email: str
    """Primary e-mail address."""
    nickname: Annotated[str | None, Tag(omitempty=True)] = None


@dataclass
class Customised:
    value: str

    @classmethod
    def apply_custom_schema(cls, schema: Schema) -> None:
        schema.description = "customised by the type"


@dataclass
class Event:
    at: datetime.datetime
    event_id: uuid.UUID
    day: datetime.date


@dataclass
class BadMap:
    scores: dict[int, str]


@dataclass
class HasCallback:
    callback: Callable[[], None]


Person = struct(name=str, age=int)
