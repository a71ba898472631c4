"""Default `HttpClient` backed by ``httpx.AsyncClient``."""

from __future__ import annotations

from collections.abc import Mapping
import json
import logging
from types import TracebackType
from typing import Self

import httpx

from wpcom_remote.config.types import FrozenConfig
from wpcom_remote.core.exceptions import TransportError
from wpcom_remote.core.types import JSONValue

logger = logging.getLogger(__name__)


class HttpxClient:
    """Issues GET requests against the REST API and parses JSON bodies.

    Every failure, including non-2xx responses and bodies that are not JSON,
    is reported as a `TransportError`.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        user_agent: str = "wpcom-remote",
        auth_token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Create the underlying ``httpx.AsyncClient``.

        ``transport`` exists for tests (``httpx.MockTransport``).
        """
        headers = {"User-Agent": user_agent, "Accept": "application/json"}
        if auth_token:
            headers["Authorization"] = f"Bearer {auth_token}"
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers=headers,
            transport=transport,
        )

    @classmethod
    def from_config(
        cls,
        config: FrozenConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> HttpxClient:
        """Build a client from resolved configuration."""
        return cls(
            config.base_url,
            timeout=config.timeout_seconds,
            user_agent=config.user_agent,
            auth_token=config.auth_token,
            transport=transport,
        )

    async def get(self, path: str, parameters: Mapping[str, str]) -> JSONValue:
        try:
            response = await self._client.get(path, params=dict(parameters))
        except httpx.HTTPError as e:
            logger.debug("GET %s failed: %s", path, e)
            raise TransportError(f"request to {path} failed: {e}") from e

        if not response.is_success:
            logger.debug("GET %s returned HTTP %d", path, response.status_code)
            raise TransportError(f"HTTP {response.status_code} for {path}")

        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.debug("GET %s returned a non-JSON body: %s", path, e)
            raise TransportError(f"invalid JSON body from {path}") from e

    async def aclose(self) -> None:
        """Close the pooled connections."""
        await self._client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()
