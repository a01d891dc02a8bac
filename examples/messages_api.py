# Copyright 2026 openapi-reflect Contributors
# SPDX-License-Identifier: Apache-2.0

"""A small messaging API, used to exercise the full generation pipeline.

Run ``openapi-reflect generate examples.messages_api:api --format yaml``
from the repository root to print its document.
"""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from openapi_reflect import (
    API,
    HeaderParam,
    Info,
    PathParam,
    QueryParam,
    Server,
    model_of,
    struct,
)

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
    topic: str
    private: bool


Person = struct(name=str, age=int)
NewMessage = struct(message=str)

api = API(
    "messages",
    info=Info(version="1.0.0", description="Publish and read messages."),
    servers=[Server(url="http://localhost:8080", description="Local development")],
    strip_pkg_paths=["examples"],
)

(
    api.get("/topic/{id}")
    .has_path_parameter("id", PathParam(description="Id of the topic.", regexp=r"\d+"))
    .has_query_parameter("limit", QueryParam(description="Maximum number of messages.", required=True))
    .has_header_parameter("Authorization", HeaderParam(description="Bearer token.", required=True))
    .has_request_model(model_of(NewMessage))
    .has_response_model(200, model_of(Body[Topic | None]))
    .has_response_header(200, "Token", HeaderParam(description="Refreshed token."))
    .has_response_model(202, model_of(Body[Any]))
    .has_response_model(301, model_of(Any))
    .has_response_model(400, model_of(Body[Person]))
    .has_response_model(500, model_of(Body[dict[str, str]]))
    .has_tags(["Topic"])
    .has_summary("getOneTopic")
    .has_operation_id("getOneTopic")
    .has_deprecated()
)
