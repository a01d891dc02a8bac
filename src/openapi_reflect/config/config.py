# Copyright 2026 openapi-reflect Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML loader for the ``.openapi-reflect.yaml`` file."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from openapi_reflect.errors import ApiConfigError
from openapi_reflect.model.document import Server

if TYPE_CHECKING:
    from openapi_reflect.api.api import API

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".openapi-reflect.yaml"


class OutputFormat(Enum):
    """Encoding of a generated document."""

    JSON = "json"
    YAML = "yaml"


class ServerConfig(BaseModel):
    """A server entry of the configuration file."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    url: str
    description: str | None = None


class ApiConfig(BaseModel):
    """Settings applied to an :class:`~openapi_reflect.api.api.API` before generation.

    Unset fields leave the API untouched.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    title: str | None = None
    version: str | None = None
    description: str | None = None
    servers: list[ServerConfig] = Field(default_factory=list)
    strip_package_paths: list[str] = Field(alias="strip-package-paths", default_factory=list)
    output_format: OutputFormat = Field(alias="output-format", default=OutputFormat.JSON)

    def apply(self, api: API) -> None:
        """Copy the configured settings onto *api*.

        Servers and stripped package paths are appended to those the API
        already declares.
        """
        if self.title is not None:
            api.name = self.title
            api.info.title = self.title
        if self.version is not None:
            api.info.version = self.version
        if self.description is not None:
            api.info.description = self.description
        api.servers.extend(Server(url=s.url, description=s.description) for s in self.servers)
        api.strip_pkg_paths = [*api.strip_pkg_paths, *self.strip_package_paths]


def load_api_config(path: Path) -> ApiConfig:
    """Load and validate an API configuration file.

    An empty file yields the default configuration.

    Args:
        path: Path to the ``.openapi-reflect.yaml`` file.

    Returns:
        A validated ApiConfig instance.

    Raises:
        ApiConfigError: If the file cannot be read, contains invalid YAML,
            or does not conform to the expected schema.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ApiConfigError(f"Config file not found: {path}") from None
    except OSError as exc:
        raise ApiConfigError(f"Cannot read config file: {exc}") from exc

    return _parse_api_config(text, source_label=str(path))


# ################
# Implementation
# ################


def _parse_api_config(text: str, source_label: str = "<string>") -> ApiConfig:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ApiConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ApiConfigError(f"{source_label}: config must be a YAML mapping")

    try:
        return ApiConfig.model_validate(data)
    except ValidationError as exc:
        raise ApiConfigError(f"Invalid config '{source_label}': {exc}") from exc
