"""The primary user-facing entry point.

`WpcomRemote` owns one HTTP client and hands out per-area remotes that share
it. Configuration is resolved once, in `create_remote`, and frozen.

    async with create_remote({"auth_token": token}) as remote:
        result = await remote.stats(site_id).get_last_post_insight()
        match result:
            case Success(value=insight): ...
            case Failure(error=error): ...
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import TYPE_CHECKING, Any, Self

from wpcom_remote.config import FrozenConfig, resolve_config
from wpcom_remote.fetch.fetcher import TypedFetcher
from wpcom_remote.services.feature_flags import FeatureFlagRemote
from wpcom_remote.services.plans import PlanRemote
from wpcom_remote.services.scan import ScanRemote
from wpcom_remote.services.stats import StatsRemote
from wpcom_remote.transport.httpx_client import HttpxClient

if TYPE_CHECKING:
    from wpcom_remote.resources.registry import DescriptorRegistry
    from wpcom_remote.telemetry import TelemetryContextProtocol
    from wpcom_remote.transport.base import HttpClient

logger = logging.getLogger(__name__)


class WpcomRemote:
    """Bundles a transport, a fetcher and the per-area remotes."""

    def __init__(
        self,
        config: FrozenConfig,
        http: HttpClient | None = None,
        *,
        registry: DescriptorRegistry | None = None,
        telemetry: TelemetryContextProtocol | None = None,
    ) -> None:
        """Initialize the remote.

        Args:
            config: Frozen configuration.
            http: Transport to use; an `HttpxClient` built from ``config`` when
                omitted. A supplied transport is not closed by `aclose`.
            registry: Descriptor registry; the default registry when omitted.
            telemetry: Optional telemetry context.
        """
        self.config = config
        self._owns_http = http is None
        self._http: HttpClient = http or HttpxClient.from_config(config)
        self.fetcher = TypedFetcher(self._http, registry=registry, telemetry=telemetry)
        logger.debug("Created remote with %s", config)

    def stats(self, site_id: int) -> StatsRemote:
        return StatsRemote(self.fetcher, site_id, default_limit=self.config.default_limit)

    def scan(self, site_id: int) -> ScanRemote:
        return ScanRemote(self.fetcher, site_id)

    def plans(self, site_id: int) -> PlanRemote:
        return PlanRemote(self.fetcher, site_id)

    def feature_flags(self) -> FeatureFlagRemote:
        return FeatureFlagRemote(self.fetcher)

    async def aclose(self) -> None:
        """Close the transport if this remote created it."""
        if self._owns_http and isinstance(self._http, HttpxClient):
            await self._http.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()


def create_remote(
    config: FrozenConfig | dict[str, Any] | None = None,
    *,
    http: HttpClient | None = None,
    telemetry: TelemetryContextProtocol | None = None,
) -> WpcomRemote:
    """Create a remote with optional configuration.

    Args:
        config: A FrozenConfig, a dict of programmatic overrides, or None to
            resolve from the environment.
        http: Optional transport replacing the default httpx client.
        telemetry: Optional telemetry context for fetches and chains.

    Returns:
        An instance of WpcomRemote.
    """
    # The only place ambient configuration is resolved.
    if isinstance(config, FrozenConfig):
        final_config = config
    else:
        final_config = resolve_config(config).to_frozen()
    return WpcomRemote(final_config, http, telemetry=telemetry)
