"""The HTTP collaborator the fetching core calls but does not implement."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Protocol, runtime_checkable

from wpcom_remote.core.types import JSONValue


class ApiVersion(str, Enum):
    """REST API namespaces served by the remote."""

    V1_1 = "rest/v1.1"
    V1_2 = "rest/v1.2"
    V1_3 = "rest/v1.3"
    V2 = "wpcom/v2"


def versioned_path(endpoint: str, version: ApiVersion) -> str:
    """Join an endpoint onto its API namespace.

    >>> versioned_path("sites/1/stats/", ApiVersion.V1_1)
    'rest/v1.1/sites/1/stats/'
    """
    return f"{version.value}/{endpoint.lstrip('/')}"


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for the transport used by the fetcher.

    Implementations query-encode ``parameters``, parse the JSON body and raise
    `TransportError` for network failures and for any non-2xx response. A
    non-2xx response is never returned as a JSON value.
    """

    async def get(self, path: str, parameters: Mapping[str, str]) -> JSONValue:
        """Issue a GET request and return the parsed JSON body.

        Args:
            path: API path relative to the client's base URL.
            parameters: Query parameters, already stringified.

        Returns:
            The decoded JSON value.

        Raises:
            TransportError: On any transport or HTTP-status failure.
        """
        ...
