"""Configuration schema and validation using Pydantic.

This module defines the settings schema that validates and coerces configuration
values from the environment, an optional .env file and programmatic overrides
into the correct types with proper defaults.
"""

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://public-api.wordpress.com/"


class RemoteSettings(BaseSettings):
    """Pydantic settings schema for the REST client.

    Environment variables use the WPCOM_ prefix, e.g. ``WPCOM_BASE_URL``.
    """

    model_config = SettingsConfigDict(
        env_prefix="WPCOM_",
        env_file=None,  # Only used when explicitly requested
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Root URL of the REST API",
        min_length=1,
    )

    timeout_seconds: float = Field(
        default=30.0,
        description="Per-request timeout handed to the HTTP client",
        gt=0,
    )

    user_agent: str = Field(
        default="wpcom-remote",
        description="User-Agent header sent with every request",
        min_length=1,
    )

    auth_token: str | None = Field(
        default=None,
        description="OAuth2 bearer token; requests are anonymous when unset",
    )

    default_limit: int = Field(
        default=10,
        description="Default `max` for time-bucketed stats (0 means no limit)",
        ge=0,
    )

    @field_validator("base_url")
    @classmethod
    def normalize_base_url(cls, v: str) -> str:
        """Require an http(s) URL and a trailing slash for relative joins."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Invalid base_url: {v}. Must start with http:// or https://")
        return v if v.endswith("/") else f"{v}/"

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary suitable for origin annotation."""
        return {
            "base_url": self.base_url,
            "timeout_seconds": self.timeout_seconds,
            "user_agent": self.user_agent,
            "auth_token": self.auth_token,
            "default_limit": self.default_limit,
        }
