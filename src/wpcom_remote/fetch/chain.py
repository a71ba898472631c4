"""Chained fetches for composites the API has no single endpoint for.

A chain runs its legs strictly in order. Each leg's request is built from the
decoded results of the legs before it, so leg N+1 is only dispatched after
leg N succeeded. The first failing leg ends the chain with a `ChainLegError`
naming that leg; nothing partial ever reaches the caller.

States: NOT_STARTED -> LEG_IN_FLIGHT -> LEG_DONE -> ... -> SUCCEEDED | FAILED
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
import dataclasses
from enum import Enum
import logging
from typing import TYPE_CHECKING, Any

from wpcom_remote.core.exceptions import ChainLegError, DecodingFailure, FetchError
from wpcom_remote.core.types import (
    Failure,
    JSONValue,
    ResourceRequest,
    Result,
    Success,
)
if TYPE_CHECKING:
    from wpcom_remote.fetch.fetcher import TypedFetcher
    from wpcom_remote.telemetry import TelemetryContextProtocol

logger = logging.getLogger(__name__)


class ChainState(str, Enum):
    """Lifecycle of a single chained fetch."""

    NOT_STARTED = "not_started"
    LEG_IN_FLIGHT = "leg_in_flight"
    LEG_DONE = "leg_done"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclasses.dataclass(frozen=True, slots=True)
class ChainStep:
    """One request/response leg of a chain.

    Attributes:
        tag: Name reported when this leg fails.
        build_request: Pure function of the previous legs' decoded results.
        decode: Turns this leg's response body into a value, or None.
    """

    tag: str
    build_request: Callable[[tuple[Any, ...]], ResourceRequest]
    decode: Callable[[JSONValue], Any | None]


class ChainedFetch[T]:
    """Runs a sequence of dependent legs and combines their results.

    Instances are single-use: create one per composite fetch.
    """

    def __init__(
        self,
        fetcher: TypedFetcher,
        steps: Iterable[ChainStep],
        combine: Callable[..., T | None],
        *,
        telemetry: TelemetryContextProtocol | None = None,
    ) -> None:
        """Prepare a chain.

        Args:
            fetcher: Issues and decodes each leg's request.
            steps: Legs in execution order.
            combine: Receives every leg's result positionally and builds the
                composite; returning None or raising ValueError counts as a
                decoding failure.
            telemetry: Telemetry context; defaults to the fetcher's.
        """
        self._fetcher = fetcher
        self._steps: tuple[ChainStep, ...] = tuple(steps)
        if not self._steps:
            raise ValueError("Chain may not be empty; provide at least one step.")
        self._combine = combine
        self._telemetry: TelemetryContextProtocol = (
            fetcher.telemetry if telemetry is None else telemetry
        )
        self._state = ChainState.NOT_STARTED
        self._current_leg = 0

    @property
    def state(self) -> ChainState:
        """Where the chain currently is in its lifecycle."""
        return self._state

    @property
    def current_leg(self) -> int:
        """1-based index of the leg last dispatched; 0 before the first."""
        return self._current_leg

    @property
    def tags(self) -> tuple[str, ...]:
        """Leg tags in execution order."""
        return tuple(step.tag for step in self._steps)

    async def run(self) -> Result[T, FetchError]:
        """Execute every leg in order and return the single terminal result."""
        if self._state is not ChainState.NOT_STARTED:
            raise RuntimeError("A ChainedFetch can only be run once.")

        results: list[Any] = []
        for index, step in enumerate(self._steps, start=1):
            self._current_leg = index
            request = step.build_request(tuple(results))
            self._state = ChainState.LEG_IN_FLIGHT
            with self._telemetry.timed("chain.leg", leg=index, tag=step.tag):
                result = await self._fetcher.execute(request, step.decode, label=step.tag)

            if isinstance(result, Failure):
                return self._fail(ChainLegError(index, step.tag, result.error))
            results.append(result.value)
            self._state = ChainState.LEG_DONE

        try:
            composite = self._combine(*results)
        except ValueError as e:
            logger.debug("Combining %s failed: %s", "/".join(self.tags), e)
            composite = None
        if composite is None:
            return self._fail(DecodingFailure())

        self._state = ChainState.SUCCEEDED
        return Success(composite)

    def _fail(self, error: FetchError) -> Failure[FetchError]:
        self._state = ChainState.FAILED
        tag = self._steps[self._current_leg - 1].tag if self._current_leg else None
        self._telemetry.count("chain.failed", leg=self._current_leg, tag=tag)
        logger.debug("Chain %s failed: %s", "/".join(self.tags), error)
        return Failure(error)


async def fetch_composite[T](
    fetcher: TypedFetcher,
    steps: Iterable[ChainStep],
    combine: Callable[..., T | None],
    *,
    telemetry: TelemetryContextProtocol | None = None,
) -> Result[T, FetchError]:
    """Run a fresh `ChainedFetch` and return its result."""
    return await ChainedFetch(fetcher, steps, combine, telemetry=telemetry).run()
