"""Configuration for the Avatica client.

Precedence order (highest to lowest):
1. Explicit keyword overrides passed to resolve_config()
2. Environment variables (AVATICA_URL, AVATICA_USER, ...)
3. Built-in defaults
"""

from __future__ import annotations

import os
from typing import Any
from urllib.parse import urlparse

from pydantic import BaseModel, ValidationError, field_validator

from avatica_client.core.exceptions import ConfigError

DEFAULT_MAX_FRAME_SIZE = 100
DEFAULT_MAX_ROW_COUNT = 9999999
DEFAULT_CLIENT_HOST = "py-client"

_ENV_VARS: dict[str, str] = {
    "AVATICA_URL": "url",
    "AVATICA_USER": "user",
    "AVATICA_PASSWORD": "password",  # pragma: allowlist secret
    "AVATICA_MAX_FRAME_SIZE": "max_frame_size",
    "AVATICA_MAX_ROW_COUNT": "max_row_count",
    "AVATICA_TIMEOUT": "default_timeout",
}

_NUMERIC_FIELDS: dict[str, type] = {
    "max_frame_size": int,
    "max_row_count": int,
    "default_timeout": float,
}


class ClientConfig(BaseModel):
    url: str
    user: str | None = None
    password: str | None = None
    max_frame_size: int = DEFAULT_MAX_FRAME_SIZE
    max_row_count: int = DEFAULT_MAX_ROW_COUNT
    default_timeout: float | None = None
    client_host: str = DEFAULT_CLIENT_HOST

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            msg = f"Invalid Avatica URL: '{v}'. Expected http:// or https://"
            raise ValueError(msg)
        return v

    @field_validator("max_frame_size")
    @classmethod
    def validate_max_frame_size(cls, v: int) -> int:
        if v < 1:
            msg = f"Invalid max_frame_size: {v}. Must be >= 1"
            raise ValueError(msg)
        return v

    @field_validator("max_row_count")
    @classmethod
    def validate_max_row_count(cls, v: int) -> int:
        if v < 1 and v != -1:
            msg = f"Invalid max_row_count: {v}. Must be >= 1, or -1 for no limit"
            raise ValueError(msg)
        return v

    @field_validator("default_timeout")
    @classmethod
    def validate_default_timeout(cls, v: float | None) -> float | None:
        if v is not None and v <= 0:
            msg = f"Invalid default_timeout: {v}. Must be > 0"
            raise ValueError(msg)
        return v


def resolve_config(**overrides: Any) -> ClientConfig:
    """Resolve configuration from environment and explicit overrides.

    Overrides set to None are ignored. Raises ConfigError when the result
    is invalid or no URL is available.
    """
    resolved: dict[str, Any] = {}

    for env_var, field_name in _ENV_VARS.items():
        value = os.environ.get(env_var)
        if value is None:
            continue
        convert = _NUMERIC_FIELDS.get(field_name)
        if convert is not None:
            try:
                resolved[field_name] = convert(value)
            except ValueError:
                msg = f"Invalid {env_var} value: '{value}'. Must be a number"
                raise ConfigError(msg) from None
        else:
            resolved[field_name] = value

    for key, value in overrides.items():
        if key not in ClientConfig.model_fields:
            msg = f"Unknown configuration option: '{key}'"
            raise ConfigError(msg)
        if value is not None:
            resolved[key] = value

    if "url" not in resolved:
        msg = "No Avatica URL configured. Pass url= or set AVATICA_URL"
        raise ConfigError(msg)

    try:
        return ClientConfig(**resolved)
    except ValidationError as e:
        msg = f"Invalid configuration: {e}"
        raise ConfigError(msg) from e
