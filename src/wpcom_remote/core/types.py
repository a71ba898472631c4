"""Core data types shared by the fetching machinery.

The fetcher and the chain runner never raise for an expected failure: every
outcome travels back to the caller as a `Result`, either a `Success` holding
the decoded value or a `Failure` holding a `FetchError`.
"""

from __future__ import annotations

from collections.abc import Mapping
import dataclasses
from types import MappingProxyType
import typing

T = typing.TypeVar("T")

# JSON as handed over by the HttpClient after wire parsing.
type JSONValue = (
    dict[str, JSONValue] | list[JSONValue] | str | int | float | bool | None
)
type JSONObject = Mapping[str, typing.Any]


def _freeze_mapping(
    m: dict[str, T] | Mapping[str, T] | None,
) -> Mapping[str, T]:
    """Return an immutable mapping view.

    Accepts dict or Mapping; wraps in MappingProxyType unless already frozen.
    """
    if m is None:
        return MappingProxyType({})
    if isinstance(m, MappingProxyType):
        return m
    return MappingProxyType(dict(m))


def _require(
    *,
    condition: bool,
    message: str,
    exc: type[Exception] = ValueError,
    field_name: str | None = None,
) -> None:
    """Centralized validation with optional field context for clearer errors."""
    if not condition:
        if field_name:
            raise exc(f"{field_name}: {message}")
        raise exc(message)


# --- Result Monad ---
# Failures are part of the data flow instead of exceptions escaping a call.

TSuccess = typing.TypeVar("TSuccess")
TFailure = typing.TypeVar("TFailure", bound=Exception)


@dataclasses.dataclass(frozen=True, slots=True)
class Success[TSuccess]:
    """A successful fetch."""

    value: TSuccess


@dataclasses.dataclass(frozen=True, slots=True)
class Failure[TFailure]:
    """A failed fetch, containing the error."""

    error: TFailure


Result = Success[TSuccess] | Failure[TFailure]


@dataclasses.dataclass(frozen=True, slots=True)
class ResourceRequest:
    """A fully resolved GET request: versioned path plus query parameters."""

    path: str
    parameters: Mapping[str, str] = dataclasses.field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self) -> None:
        """Validate the path and freeze the parameters."""
        _require(
            condition=isinstance(self.path, str) and self.path.strip() != "",
            message="must be a non-empty str",
            field_name="path",
            exc=TypeError,
        )
        _require(
            condition=all(
                isinstance(k, str) and isinstance(v, str)
                for k, v in self.parameters.items()
            ),
            message="keys and values must be str",
            field_name="parameters",
            exc=TypeError,
        )
        object.__setattr__(self, "parameters", _freeze_mapping(self.parameters))
