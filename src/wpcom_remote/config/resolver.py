"""Configuration resolution with precedence handling.

Sources are merged in the order Programmatic > Environment (.env file values
count as environment) > Defaults, then validated once by `RemoteSettings`.
"""

import os
from pathlib import Path
from typing import Any

from dotenv import dotenv_values
from pydantic import ValidationError

from wpcom_remote.core.exceptions import ConfigurationError

from .schema import RemoteSettings
from .types import FIELD_ORDER, ConfigOrigin, ResolvedConfig

ENV_PREFIX = "WPCOM_"


class ConfigResolver:
    """Resolves configuration from multiple sources with proper precedence."""

    def resolve(
        self,
        programmatic: dict[str, Any] | None = None,
        *,
        env_file: str | Path | None = None,
    ) -> ResolvedConfig:
        """Resolve configuration from all sources.

        Args:
            programmatic: Overrides with the highest precedence. Unknown keys
                are ignored.
            env_file: Optional .env file whose WPCOM_* entries are layered
                under the real process environment.

        Returns:
            ResolvedConfig with merged values and origin tracking.

        Raises:
            ConfigurationError: If the env file is missing or validation fails.
        """
        merged: dict[str, Any] = {}
        origin: dict[str, ConfigOrigin] = {}

        # Step 1: schema defaults; constructed without reading the environment
        defaults = RemoteSettings.model_construct().to_dict()
        for field in FIELD_ORDER:
            merged[field] = defaults[field]
            origin[field] = "default"

        # Step 2: environment, with the optional .env file underneath
        for field, value in self._load_env(env_file).items():
            merged[field] = value
            origin[field] = "env"

        # Step 3: programmatic overrides
        for field, value in (programmatic or {}).items():
            if field in merged:
                merged[field] = value
                origin[field] = "programmatic"

        try:
            settings = RemoteSettings.model_validate(merged)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed: {e}") from e

        values = settings.to_dict()
        return ResolvedConfig(**values, origin=origin)

    def _load_env(self, env_file: str | Path | None) -> dict[str, str]:
        raw: dict[str, str | None] = {}
        if env_file is not None:
            path = Path(env_file)
            if not path.exists():
                raise ConfigurationError(f"Environment file not found: {path}")
            raw.update(dotenv_values(path))
        raw.update(os.environ)

        found: dict[str, str] = {}
        for field in FIELD_ORDER:
            value = raw.get(f"{ENV_PREFIX}{field.upper()}")
            if value is not None:
                found[field] = value
        return found


_resolver = ConfigResolver()


def resolve_config(
    programmatic: dict[str, Any] | None = None,
    *,
    env_file: str | Path | None = None,
) -> ResolvedConfig:
    """Resolve configuration from all sources with proper precedence.

    Example:
        config = resolve_config({"timeout_seconds": 5}).to_frozen()
    """
    return _resolver.resolve(programmatic, env_file=env_file)
