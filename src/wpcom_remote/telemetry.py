"""Request timings and failure counters.

The fetcher times every HTTP round trip under ``fetch.get`` and counts
``fetch.transport_error`` / ``fetch.decoding_failure``; a chained fetch times
each leg under ``chain.leg`` and counts ``chain.failed``. A leg's request is
therefore reported as ``chain.leg.fetch.get``.

Nothing is recorded unless ``WPCOM_TELEMETRY=1`` (or ``DEBUG=1``) is set at
import time and at least one reporter is supplied:

    reporter = InMemoryReporter()
    remote = WpcomRemote(config, telemetry=TelemetryContext(reporter))
"""

from collections import Counter, defaultdict
from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager, nullcontext
from contextvars import ContextVar
from dataclasses import dataclass
import logging
import os
import time
from typing import Any, Protocol, runtime_checkable

log = logging.getLogger(__name__)

# Open scopes of the current task; concurrent fetches do not see each other's.
_open_scopes: ContextVar[tuple[str, ...]] = ContextVar("open_scopes", default=())

_TELEMETRY_ENABLED = os.getenv("WPCOM_TELEMETRY") == "1" or os.getenv("DEBUG") == "1"


@runtime_checkable
class TelemetryReporter(Protocol):
    """Receives timings and counts; labels carry path, leg and tag."""

    def record_timing(self, scope: str, seconds: float, **labels: Any) -> None: ...  # noqa: D102
    def record_count(self, name: str, increment: int, **labels: Any) -> None: ...  # noqa: D102


@dataclass(frozen=True, slots=True)
class _DisabledTelemetry:
    def timed(self, scope: str, **labels: Any) -> AbstractContextManager[None]:  # noqa: ARG002
        return nullcontext()

    def count(self, name: str, increment: int = 1, **labels: Any) -> None:
        pass


class _ReportingTelemetry:
    __slots__ = ("_reporters",)

    def __init__(self, reporters: tuple[TelemetryReporter, ...]) -> None:
        self._reporters = reporters

    @contextmanager
    def timed(self, scope: str, **labels: Any) -> Iterator[None]:
        """Time the block; the reported scope is nested under any open one."""
        outer = _open_scopes.get()
        token = _open_scopes.set((*outer, scope))
        started = time.perf_counter()
        try:
            yield
        finally:
            seconds = time.perf_counter() - started
            _open_scopes.reset(token)
            self._emit("record_timing", ".".join((*outer, scope)), seconds, labels)

    def count(self, name: str, increment: int = 1, **labels: Any) -> None:
        self._emit("record_count", name, increment, labels)

    def _emit(self, method: str, name: str, value: float, labels: dict[str, Any]) -> None:
        # A broken reporter must never turn into a failed fetch.
        for reporter in self._reporters:
            try:
                getattr(reporter, method)(name, value, **labels)
            except Exception:
                log.exception("Telemetry reporter %s failed", type(reporter).__name__)


_DISABLED = _DisabledTelemetry()

type TelemetryContextProtocol = _ReportingTelemetry | _DisabledTelemetry


def TelemetryContext(*reporters: TelemetryReporter) -> TelemetryContextProtocol:  # noqa: N802
    """Return a reporting context, or the shared disabled one."""
    if _TELEMETRY_ENABLED and reporters:
        return _ReportingTelemetry(reporters)
    return _DISABLED


class InMemoryReporter:
    """Keeps every timing and count in memory."""

    def __init__(self) -> None:
        self.timings: defaultdict[str, list[tuple[float, dict[str, Any]]]] = defaultdict(list)
        self.counts: Counter[str] = Counter()
        self.count_labels: defaultdict[str, list[dict[str, Any]]] = defaultdict(list)

    def record_timing(self, scope: str, seconds: float, **labels: Any) -> None:
        self.timings[scope].append((seconds, labels))

    def record_count(self, name: str, increment: int, **labels: Any) -> None:
        self.counts[name] += increment
        self.count_labels[name].append(labels)
