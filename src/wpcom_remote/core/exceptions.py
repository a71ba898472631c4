"""Exceptions for the wpcom_remote SDK.

Fetch errors are not raised out of the public fetch calls; they are carried
inside `Failure` values. Callers only ever need to tell two kinds apart,
``"transport"`` and ``"decoding"``, exposed as `FetchError.kind`.
"""

from __future__ import annotations

from typing import Literal

type FetchErrorKind = Literal["transport", "decoding"]


class WpcomRemoteError(Exception):
    """Base exception for the SDK"""  # noqa: D415


class ConfigurationError(WpcomRemoteError):
    """Raised when configuration values are missing or invalid"""  # noqa: D415


class FetchError(WpcomRemoteError):
    """Base for everything a fetch can deliver as a failure"""  # noqa: D415

    kind: FetchErrorKind


class TransportError(FetchError):
    """The HTTP layer failed: network error or a non-2xx response.

    Produced by the `HttpClient` collaborator and passed through unchanged.
    """

    kind: FetchErrorKind = "transport"

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class DecodingFailure(FetchError):
    """The response body did not match the shape expected for the result type.

    Deliberately carries no detail about the wire format; the mismatch is only
    reported through debug logging.
    """

    kind: FetchErrorKind = "decoding"

    def __init__(self) -> None:
        super().__init__("response did not match the expected shape")

    def __eq__(self, other: object) -> bool:
        return isinstance(other, DecodingFailure) and type(other) is type(self)

    def __hash__(self) -> int:
        return hash(type(self))


class ChainLegError(FetchError):
    """A leg of a chained fetch failed.

    Wraps the leg's own `TransportError` or `DecodingFailure` and records which
    leg (1-based) broke so callers can tell the halves of a composite apart.
    """

    def __init__(self, leg: int, tag: str, cause: FetchError) -> None:
        super().__init__(f"leg {leg} ({tag}) failed: {cause}")
        self.leg = leg
        self.tag = tag
        self.cause = cause

    @property
    def kind(self) -> FetchErrorKind:  # type: ignore[override]
        """The kind of the underlying failure."""
        return self.cause.kind

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChainLegError):
            return NotImplemented
        return (self.leg, self.tag, self.cause) == (other.leg, other.tag, other.cause)

    def __hash__(self) -> int:
        return hash((self.leg, self.tag, self.cause))
