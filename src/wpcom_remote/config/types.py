"""Core configuration data types.

Configuration follows a resolve-once, freeze-then-flow pattern: values are
merged and validated into a `ResolvedConfig`, then frozen into the
`FrozenConfig` handed to the HTTP client.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal, NamedTuple

ConfigOrigin = Literal["programmatic", "env", "default"]
SourceMap = Mapping[str, ConfigOrigin]

FIELD_ORDER = (
    "base_url",
    "timeout_seconds",
    "user_agent",
    "auth_token",
    "default_limit",
)


class ResolvedConfig(NamedTuple):
    """Configuration after resolution from all sources, before freezing.

    Includes audit metadata recording where each value came from.
    """

    base_url: str
    timeout_seconds: float
    user_agent: str
    auth_token: str | None
    default_limit: int

    origin: SourceMap

    def __str__(self) -> str:
        """String representation with redacted token for safe logging."""
        token_display = "[REDACTED]" if self.auth_token else None
        return (
            f"ResolvedConfig(base_url={self.base_url!r}, "
            f"timeout_seconds={self.timeout_seconds!r}, "
            f"user_agent={self.user_agent!r}, auth_token={token_display!r}, "
            f"default_limit={self.default_limit!r}, origin={dict(self.origin)!r})"
        )

    def __repr__(self) -> str:
        """Repr with redacted token for safe debugging."""
        return self.__str__()

    def to_frozen(self) -> "FrozenConfig":
        """Convert to the immutable configuration, dropping audit metadata."""
        return FrozenConfig(
            base_url=self.base_url,
            timeout_seconds=self.timeout_seconds,
            user_agent=self.user_agent,
            auth_token=self.auth_token,
            default_limit=self.default_limit,
        )

    def audit(self) -> str:
        """Report the origin of each field without revealing the token."""
        lines = []
        for field in FIELD_ORDER:
            if field not in self.origin:
                continue
            origin = self.origin[field]
            value = getattr(self, field)
            if field == "auth_token":
                value_display = f"{origin}:None" if value is None else f"{origin}:<redacted>"
            elif origin == "env":
                value_display = f"env:WPCOM_{field.upper()}={value}"
            else:
                value_display = f"{origin}:{value}"
            lines.append(f"{field}: {value_display}")
        return "\n".join(lines)


@dataclass(frozen=True)
class FrozenConfig:
    """Immutable configuration used to build the HTTP client."""

    base_url: str
    timeout_seconds: float
    user_agent: str
    auth_token: str | None
    default_limit: int

    def __str__(self) -> str:
        """String representation with redacted token for safe logging."""
        token_display = "[REDACTED]" if self.auth_token else None
        return (
            f"FrozenConfig(base_url={self.base_url!r}, "
            f"timeout_seconds={self.timeout_seconds!r}, "
            f"user_agent={self.user_agent!r}, auth_token={token_display!r}, "
            f"default_limit={self.default_limit!r})"
        )

    def __repr__(self) -> str:
        """Representation with redacted token for safe debugging."""
        return self.__str__()
