"""Typed fetching: one entry point serving every registered resource shape.

The fetcher looks up the descriptor bound to the requested result type,
resolves the request, awaits the `HttpClient` and decodes the body. Each call
resolves to exactly one of:

- ``Success(value)``
- ``Failure(TransportError)``, passed through from the HttpClient unchanged
- ``Failure(DecodingFailure())`` when the body does not match the shape

Misuse (an unregistered result type, a missing path identifier) is a
programming error and raises instead.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Mapping
from datetime import date, datetime
import logging
import re
from typing import TYPE_CHECKING, Any

from wpcom_remote.core.enums import StatsPeriodUnit
from wpcom_remote.core.exceptions import DecodingFailure, FetchError, TransportError
from wpcom_remote.core.types import (
    Failure,
    JSONValue,
    ResourceRequest,
    Result,
    Success,
)
from wpcom_remote.resources.descriptor import ResourceDescriptor, TimeStatsDescriptor
from wpcom_remote.resources.registry import DEFAULT_REGISTRY, DescriptorRegistry
from wpcom_remote.telemetry import TelemetryContext

if TYPE_CHECKING:
    from wpcom_remote.telemetry import TelemetryContextProtocol
    from wpcom_remote.transport.base import HttpClient

logger = logging.getLogger(__name__)

_QUERY_DATE = re.compile(r"(\d{4})-(\d{2})-(\d{2})", re.ASCII)


def format_query_date(value: date) -> str:
    """Format a date as ``YYYY-MM-DD``, independent of locale.

    A datetime contributes its own calendar date; no timezone conversion is
    applied.
    """
    if isinstance(value, datetime):
        value = value.date()
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def parse_query_date(value: object) -> date | None:
    """Parse a strict ``YYYY-MM-DD`` string, or return None."""
    if not isinstance(value, str):
        return None
    match = _QUERY_DATE.fullmatch(value)
    if match is None:
        return None
    try:
        return date(*(int(part) for part in match.groups()))
    except ValueError:
        return None


class TypedFetcher:
    """Fetches registered resources through an `HttpClient`.

    The fetcher keeps no per-call state; concurrent calls are independent.
    """

    def __init__(
        self,
        http: HttpClient,
        *,
        registry: DescriptorRegistry | None = None,
        telemetry: TelemetryContextProtocol | None = None,
    ) -> None:
        self._http = http
        self._registry = registry or DEFAULT_REGISTRY
        self._telemetry: TelemetryContextProtocol = telemetry or TelemetryContext()

    @property
    def telemetry(self) -> TelemetryContextProtocol:
        """The telemetry context shared with chains built on this fetcher."""
        return self._telemetry

    @property
    def http(self) -> HttpClient:
        """The transport this fetcher calls."""
        return self._http

    def descriptor_for(
        self, result_type: type
    ) -> ResourceDescriptor[Any] | TimeStatsDescriptor[Any]:
        """Return the descriptor bound to ``result_type``.

        Raises:
            LookupError: If the type was never registered.
        """
        descriptor = self._registry.get(result_type)
        if descriptor is None:
            raise LookupError(f"No resource descriptor for {result_type.__name__}")
        return descriptor

    async def execute[T](
        self,
        request: ResourceRequest,
        decode: Callable[[JSONValue], T | None],
        *,
        label: str = "resource",
    ) -> Result[T, FetchError]:
        """Issue one request and decode its body.

        Shared by single fetches and by every leg of a chained fetch.
        """
        try:
            with self._telemetry.timed("fetch.get", path=request.path, resource=label):
                body = await self._http.get(request.path, request.parameters)
        except TransportError as e:
            self._telemetry.count("fetch.transport_error", path=request.path, resource=label)
            logger.debug("Transport failure fetching %s: %s", label, e)
            return Failure(e)

        value = decode(body)
        if value is None:
            self._telemetry.count("fetch.decoding_failure", path=request.path, resource=label)
            logger.debug("Response for %s from %s did not decode", label, request.path)
            return Failure(DecodingFailure())
        return Success(value)

    async def fetch[T](
        self,
        result_type: type[T],
        site_id: int | None = None,
        *,
        path_args: Mapping[str, object] | None = None,
        **caller_args: object,
    ) -> Result[T, FetchError]:
        """Fetch and decode the resource bound to ``result_type``.

        Args:
            result_type: A type registered with the descriptor registry.
            site_id: Site identifier substituted into the path, when needed.
            path_args: Extra identifiers for the path template.
            **caller_args: Query parameters layered over the defaults.

        Returns:
            Success with the decoded value, or Failure with a FetchError.
        """
        descriptor = self.descriptor_for(result_type)
        if not isinstance(descriptor, ResourceDescriptor):
            raise TypeError(
                f"{result_type.__name__} is time-bucketed; use fetch_time_stats()"
            )
        request = descriptor.request_for(
            site_id, path_args=path_args, caller_args=caller_args
        )
        return await self.execute(request, descriptor.decode, label=result_type.__name__)

    async def fetch_time_stats[T](
        self,
        result_type: type[T],
        site_id: int,
        period: StatsPeriodUnit,
        ending_on: date,
        *,
        limit: int = 10,
    ) -> Result[T, FetchError]:
        """Fetch data for the ``period`` that ends on ``ending_on``.

        For data spanning 11-17 Feb 2019 pass ``StatsPeriodUnit.WEEK`` and
        ``date(2019, 2, 17)``. ``limit`` caps the returned items; ``0`` means
        no limit.

        The result's period metadata comes from the ``date`` and ``period``
        the server echoes back, which may differ from the request.
        """
        descriptor = self.descriptor_for(result_type)
        if not isinstance(descriptor, TimeStatsDescriptor):
            raise TypeError(f"{result_type.__name__} is not a time-bucketed resource")
        if limit < 0:
            raise ValueError("limit must be >= 0")

        request = descriptor.request_for(
            site_id,
            caller_args={
                "period": StatsPeriodUnit(period).value,
                "date": format_query_date(ending_on),
                "max": limit,
            },
        )

        def decode(body: JSONValue) -> T | None:
            if not isinstance(body, Mapping):
                return None
            period_end_date = parse_query_date(body.get("date"))
            echoed_period = StatsPeriodUnit.from_wire(body.get("period"))
            if period_end_date is None or echoed_period is None:
                logger.debug(
                    "Unusable period echo for %s: date=%r period=%r",
                    result_type.__name__,
                    body.get("date"),
                    body.get("period"),
                )
                return None
            return descriptor.decode(body, period_end_date, echoed_period)

        return await self.execute(request, decode, label=result_type.__name__)


def deliver[T](
    awaitable: Awaitable[Result[T, FetchError]],
    callback: Callable[[Result[T, FetchError]], None],
) -> asyncio.Task[None]:
    """Run a fetch in the background and hand its result to ``callback`` once.

    Must be called from a running event loop. Fetch outcomes always reach
    ``callback``; an exception raised by misuse (an unregistered type, a
    missing path identifier) does not. It is logged and left on the returned
    task, so awaiting the task re-raises it.
    """

    async def _run() -> None:
        try:
            result = await awaitable
        except Exception:
            logger.exception("Background fetch raised instead of returning a result")
            raise
        callback(result)

    return asyncio.ensure_future(_run())
