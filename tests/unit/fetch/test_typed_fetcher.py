import asyncio

import pytest

from wpcom_remote.core.exceptions import DecodingFailure, TransportError
from wpcom_remote.core.types import Failure, Success
from wpcom_remote.fetch.fetcher import TypedFetcher, deliver
from wpcom_remote.resources.registry import DEFAULT_REGISTRY
from wpcom_remote.services.stats import (
    StatsAllTimesInsight,
    StatsCommentsInsight,
    StatsTopPostsTimeIntervalData,
)
from wpcom_remote.telemetry import InMemoryReporter

ALL_TIME_PATH = "rest/v1.1/sites/123/stats/"
ALL_TIME_BODY = {
    "stats": {
        "posts": 12,
        "views": 3400,
        "visitors": 900,
        "views_best_day": "2019-02-11",
        "views_best_day_total": 210,
    }
}


@pytest.mark.unit
@pytest.mark.asyncio
async def test_fetch_returns_exactly_the_pure_decode(fetcher, stub_http):
    stub_http.respond(ALL_TIME_PATH, ALL_TIME_BODY)

    result = await fetcher.fetch(StatsAllTimesInsight, 123)

    expected = DEFAULT_REGISTRY.get(StatsAllTimesInsight).decode(ALL_TIME_BODY)
    assert result == Success(expected)
    assert result.value.views_count == 3400
    assert stub_http.calls == [(ALL_TIME_PATH, {})]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_missing_required_field_is_a_decoding_failure(fetcher, stub_http):
    body = {"stats": {k: v for k, v in ALL_TIME_BODY["stats"].items() if k != "views"}}
    stub_http.respond(ALL_TIME_PATH, body)

    result = await fetcher.fetch(StatsAllTimesInsight, 123)

    assert isinstance(result, Failure)
    assert isinstance(result.error, DecodingFailure)
    assert result.error.kind == "decoding"


@pytest.mark.unit
@pytest.mark.asyncio
@pytest.mark.parametrize("body", [[ALL_TIME_BODY], "ok", 1, None])
async def test_non_object_bodies_are_decoding_failures(fetcher, stub_http, body):
    stub_http.respond(ALL_TIME_PATH, body)
    result = await fetcher.fetch(StatsAllTimesInsight, 123)
    assert result == Failure(DecodingFailure())


@pytest.mark.unit
@pytest.mark.asyncio
async def test_transport_error_passes_through_unchanged(fetcher, stub_http):
    error = TransportError("HTTP 500 for rest/v1.1/sites/123/stats/")
    stub_http.respond(ALL_TIME_PATH, error)

    result = await fetcher.fetch(StatsAllTimesInsight, 123)

    assert isinstance(result, Failure)
    assert result.error is error
    assert result.error.kind == "transport"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_caller_arguments_become_query_parameters(fetcher, stub_http):
    stub_http.respond("rest/v1.1/sites/5/stats/comments/", {"authors": [], "posts": []})

    result = await fetcher.fetch(StatsCommentsInsight, 5, max=10)

    assert isinstance(result, Success)
    assert stub_http.calls == [("rest/v1.1/sites/5/stats/comments/", {"max": "10"})]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_fetch_is_idempotent(fetcher, stub_http):
    stub_http.respond(ALL_TIME_PATH, ALL_TIME_BODY)

    first = await fetcher.fetch(StatsAllTimesInsight, 123)
    second = await fetcher.fetch(StatsAllTimesInsight, 123)

    assert first == second
    assert stub_http.calls[0] == stub_http.calls[1]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_concurrent_fetches_are_independent(fetcher, stub_http):
    stub_http.respond(ALL_TIME_PATH, ALL_TIME_BODY)
    stub_http.respond("rest/v1.1/sites/5/stats/comments/", {"authors": [], "posts": []})

    totals, comments = await asyncio.gather(
        fetcher.fetch(StatsAllTimesInsight, 123),
        fetcher.fetch(StatsCommentsInsight, 5),
    )

    assert isinstance(totals.value, StatsAllTimesInsight)
    assert isinstance(comments.value, StatsCommentsInsight)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_unregistered_type_raises(fetcher):
    class NotAResource:
        pass

    with pytest.raises(LookupError):
        await fetcher.fetch(NotAResource, 1)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_time_stats_type_needs_time_stats_entry_point(fetcher):
    with pytest.raises(TypeError, match="fetch_time_stats"):
        await fetcher.fetch(StatsTopPostsTimeIntervalData, 1)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_deliver_invokes_callback_once(fetcher, stub_http):
    stub_http.respond(ALL_TIME_PATH, ALL_TIME_BODY)
    received = []

    task = deliver(fetcher.fetch(StatsAllTimesInsight, 123), received.append)
    await task

    assert len(received) == 1
    assert isinstance(received[0], Success)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_failures_are_counted_when_telemetry_enabled(stub_http, monkeypatch):
    monkeypatch.setattr("wpcom_remote.telemetry._TELEMETRY_ENABLED", True)
    from wpcom_remote.telemetry import TelemetryContext

    reporter = InMemoryReporter()
    fetcher = TypedFetcher(stub_http, telemetry=TelemetryContext(reporter))
    stub_http.respond(ALL_TIME_PATH, {"stats": {}})

    await fetcher.fetch(StatsAllTimesInsight, 123)
    await fetcher.fetch(StatsAllTimesInsight, 999)

    assert len(reporter.timings["fetch.get"]) == 2
    assert reporter.counts["fetch.decoding_failure"] == 1
    assert reporter.counts["fetch.transport_error"] == 1
    assert reporter.count_labels["fetch.transport_error"] == [
        {"path": "rest/v1.1/sites/999/stats/", "resource": "StatsAllTimesInsight"}
    ]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_wrong_typed_value_is_a_decoding_failure(fetcher, stub_http):
    stub_http.respond(
        "rest/v1.1/sites/5/stats/comments/",
        {"authors": [{"name": "ana", "comments": "4"}], "posts": []},
    )

    assert await fetcher.fetch(StatsCommentsInsight, 5) == Failure(DecodingFailure())


@pytest.mark.unit
@pytest.mark.asyncio
async def test_deliver_leaves_misuse_on_the_task(fetcher):
    received = []

    task = deliver(fetcher.fetch(int, 1), received.append)

    with pytest.raises(LookupError):
        await task
    assert received == []
