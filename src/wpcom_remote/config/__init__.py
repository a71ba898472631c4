"""Configuration management for the REST client.

Key components:
- RemoteSettings: pydantic-settings schema (WPCOM_* environment variables)
- ResolvedConfig: post-resolution configuration with origin metadata
- FrozenConfig: immutable configuration handed to the HTTP client
"""

from .resolver import ConfigResolver, resolve_config
from .schema import DEFAULT_BASE_URL, RemoteSettings
from .types import ConfigOrigin, FrozenConfig, ResolvedConfig, SourceMap

__all__ = [
    "DEFAULT_BASE_URL",
    "ConfigOrigin",
    "ConfigResolver",
    "FrozenConfig",
    "RemoteSettings",
    "ResolvedConfig",
    "SourceMap",
    "resolve_config",
]
