# Copyright 2026 openapi-reflect Contributors
# SPDX-License-Identifier: Apache-2.0

"""Configuration file support."""

from openapi_reflect.config.config import (
    CONFIG_FILE_NAME,
    ApiConfig,
    OutputFormat,
    ServerConfig,
    load_api_config,
)

__all__ = ["CONFIG_FILE_NAME", "ApiConfig", "OutputFormat", "ServerConfig", "load_api_config"]
