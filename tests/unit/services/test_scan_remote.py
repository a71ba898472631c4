from datetime import datetime, timezone

import pytest

from wpcom_remote.services.scan import (
    JetpackScanState,
    JetpackScanThreatStatus,
    ScanRemote,
)

PATH = "wpcom/v2/sites/9/scan"

IDLE_SCAN = {
    "state": "idle",
    "threats": [
        {
            "id": 1001,
            "signature": "Core.File.Modification",
            "description": "A core file was changed",
            "status": "current",
            "first_detected": "2021-03-01T12:00:00+00:00",
        },
        {"id": 1002, "signature": "Vulnerable.Plugin", "status": "snoozed"},
    ],
    "most_recent": {
        "is_initial": False,
        "timestamp": "2021-03-02T08:30:00+00:00",
        "duration": 42,
        "progress": 100,
        "error": False,
    },
    "credentials": [{"type": "managed", "role": "main", "still_valid": True}],
    "has_cloud": True,
}


@pytest.fixture
def scan(fetcher):
    return ScanRemote(fetcher, 9)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_scan_reads_aliases_and_nested_status(scan, stub_http):
    stub_http.respond(PATH, IDLE_SCAN)

    result = await scan.get_scan()

    value = result.value
    assert value.state is JetpackScanState.IDLE
    assert value.is_enabled
    assert value.current is None
    assert value.most_recent.start_date == datetime(2021, 3, 2, 8, 30, tzinfo=timezone.utc)
    assert value.most_recent.did_fail is False
    assert [t.threat_id for t in value.threats] == [1001, 1002]
    assert value.threats[0].status is JetpackScanThreatStatus.CURRENT
    assert value.threats[1].status is JetpackScanThreatStatus.UNKNOWN
    assert value.credentials[0].credential_type == "managed"
    assert stub_http.calls == [(PATH, {})]


@pytest.mark.unit
@pytest.mark.asyncio
@pytest.mark.parametrize(
    "wire, state",
    [
        ("unavailable", JetpackScanState.UNAVAILABLE),
        ("paused-for-maintenance", JetpackScanState.UNKNOWN),
    ],
)
async def test_unavailable_and_unknown_states_are_not_enabled(scan, stub_http, wire, state):
    stub_http.respond(PATH, {"state": wire})

    result = await scan.get_scan()

    assert result.value.state is state
    assert not result.value.is_enabled


@pytest.mark.unit
@pytest.mark.asyncio
async def test_scanning_reports_current_progress(scan, stub_http):
    stub_http.respond(
        PATH, {"state": "scanning", "current": {"is_initial": True, "progress": 30}}
    )

    result = await scan.get_scan()

    assert result.value.current.progress == 30
    assert result.value.current.start_date is None
    assert result.value.most_recent is None


@pytest.mark.unit
@pytest.mark.asyncio
async def test_missing_state_is_a_decoding_failure(scan, stub_http):
    stub_http.respond(PATH, {"threats": []})

    result = await scan.get_scan()

    assert result.error.kind == "decoding"


@pytest.mark.unit
@pytest.mark.asyncio
@pytest.mark.parametrize(
    "current",
    [
        {"is_initial": True, "progress": "30"},
        {"is_initial": "true", "progress": 30},
        {"is_initial": True, "progress": 30, "timestamp": 1614673800},
    ],
)
async def test_wrong_typed_status_fields_are_a_decoding_failure(scan, stub_http, current):
    stub_http.respond(PATH, {"state": "scanning", "current": current})

    result = await scan.get_scan()

    assert result.error.kind == "decoding"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_integer_duration_is_accepted(scan, stub_http):
    stub_http.respond(
        PATH, {"state": "idle", "most_recent": {"is_initial": False, "progress": 100, "duration": 42}}
    )

    result = await scan.get_scan()

    assert result.value.most_recent.duration == 42
