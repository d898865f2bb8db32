"""Tests for the Google Maps diagnostic probe."""

from unittest.mock import AsyncMock, patch

import httpx
import pytest
from structlog.testing import capture_logs

from vendor_client.maps import probe
from vendor_client.maps.probe import check_api_key, mask_key, run_probe

KEY = "AIzaSyTestKey0000000000000000000abcd"

MUMBAI_RESULT = {
    "formatted_address": "Mumbai, Maharashtra, India",
    "geometry": {"location": {"lat": 19.076, "lng": 72.8777}},
    "address_components": [
        {"long_name": "Mumbai", "types": ["locality", "political"]},
        {"long_name": "Maharashtra", "types": ["administrative_area_level_1", "political"]},
        {"long_name": "India", "types": ["country", "political"]},
    ],
}


def maps_transport(overrides: dict | None = None, seen: list | None = None) -> httpx.MockTransport:
    """Fake Maps API. ``overrides`` maps a step name to a JSON body or an exception."""
    overrides = overrides or {}

    def handler(request: httpx.Request) -> httpx.Response:
        params = request.url.params
        if seen is not None:
            seen.append(request)
        path = request.url.path
        if path.endswith("/place/autocomplete/json"):
            step = "autocomplete"
            body = {
                "status": "OK",
                "predictions": [
                    {"description": "Mumbai, Maharashtra, India", "place_id": "place-1"},
                    {"description": "Mumbai Central, Mumbai", "place_id": "place-2"},
                ],
            }
        elif path.endswith("/place/details/json"):
            step = "place_details"
            body = {"status": "OK", "result": MUMBAI_RESULT}
        elif "latlng" in params:
            step = "reverse_geocode"
            body = {"status": "OK", "results": [MUMBAI_RESULT]}
        elif params.get("address") == "test":
            step = "key_validation"
            body = {"status": "ZERO_RESULTS", "results": []}
        else:
            step = "geocode"
            body = {"status": "OK", "results": [MUMBAI_RESULT]}
        override = overrides.get(step)
        if isinstance(override, type) and issubclass(override, Exception):
            raise override("simulated failure", request=request)
        return httpx.Response(200, json=override if override is not None else body)

    return httpx.MockTransport(handler)


def events(logs: list[dict]) -> list[str]:
    return [entry["event"] for entry in logs]


def test_mask_key():
    assert mask_key(KEY) == "AIzaSyTe...abcd"
    assert mask_key("short") == "*****"


@pytest.mark.parametrize(
    "key, ok",
    [
        (None, False),
        ("", False),
        ("YOUR_GOOGLE_MAPS_API_KEY", False),
        ("your_api_key_here", False),
        ("AIza_YOUR_KEY", False),
        (KEY, True),
    ],
)
def test_check_api_key(key, ok):
    assert (check_api_key(key) is None) is ok


@pytest.mark.asyncio
async def test_full_run_succeeds():
    seen: list[httpx.Request] = []
    with capture_logs() as logs:
        report = await run_probe(KEY, transport=maps_transport(seen=seen))

    assert report.key_valid and report.completed
    assert [s.name for s in report.steps] == [
        "key_validation",
        "autocomplete",
        "place_details",
        "geocode",
        "reverse_geocode",
    ]
    assert all(step.ok for step in report.steps)
    assert report.step("place_details").data == {
        "location": (19.076, 72.8777),
        "formatted_address": "Mumbai, Maharashtra, India",
    }
    assert report.step("geocode").data["city"] == "Mumbai"
    assert report.step("reverse_geocode").data["state"] == "Maharashtra"

    candidates = [e for e in logs if e["event"] == "place_candidate"]
    assert [c["place_id"] for c in candidates] == ["place-1", "place-2"]
    assert events(logs)[-1] == "done"

    assert all(r.url.params["key"] == KEY for r in seen)
    assert seen[2].url.params["place_id"] == "place-1"
    assert seen[3].url.params["address"] == "Mumbai, Maharashtra, India"
    assert seen[4].url.params["latlng"] == "19.076,72.8777"


@pytest.mark.asyncio
async def test_non_ok_status_is_reported_without_raising():
    denied = {"status": "REQUEST_DENIED", "error_message": "This API project is not authorized"}
    with capture_logs() as logs:
        report = await run_probe(KEY, transport=maps_transport({"geocode": denied}))

    geocode = report.step("geocode")
    assert geocode.ok is False
    assert geocode.status == "REQUEST_DENIED"
    statuses = [e for e in logs if e["event"] == "provider_status" and e["step"] == "geocode"]
    assert statuses[0]["status"] == "REQUEST_DENIED"
    errors = [e for e in logs if e["event"] == "provider_error" and e["step"] == "geocode"]
    assert errors[0]["error_message"] == "This API project is not authorized"
    assert report.step("reverse_geocode").ok is True
    assert report.completed


@pytest.mark.asyncio
async def test_request_denied_key_validation_prints_hints():
    denied = {"status": "REQUEST_DENIED", "error_message": "The provided API key is invalid."}
    with capture_logs() as logs:
        report = await run_probe(KEY, transport=maps_transport({"key_validation": denied}))

    assert report.step("key_validation").ok is False
    assert events(logs).count("request_denied_hint") == len(probe.REQUEST_DENIED_HINTS)
    assert report.step("autocomplete").ok is True


@pytest.mark.asyncio
async def test_step_failure_does_not_stop_later_steps():
    with capture_logs() as logs:
        report = await run_probe(
            KEY,
            transport=maps_transport({"autocomplete": httpx.ConnectError, "geocode": httpx.ReadTimeout}),
        )

    assert report.step("autocomplete").ok is False
    assert report.step("autocomplete").error == "simulated failure"
    assert report.step("place_details") is None
    assert report.step("geocode").ok is False
    assert report.step("reverse_geocode").ok is True
    failed = [e["step"] for e in logs if e["event"] == "step_failed"]
    assert failed == ["autocomplete", "geocode"]
    assert events(logs)[-1] == "done"


@pytest.mark.asyncio
async def test_empty_predictions_skip_place_details():
    with capture_logs() as logs:
        report = await run_probe(
            KEY, transport=maps_transport({"autocomplete": {"status": "ZERO_RESULTS", "predictions": []}})
        )
    assert report.step("autocomplete").ok is False
    assert report.step("place_details") is None
    assert "done" in events(logs)


@pytest.mark.asyncio
async def test_invalid_key_aborts_without_requests():
    seen: list[httpx.Request] = []
    with capture_logs() as logs:
        report = await run_probe("YOUR_GOOGLE_MAPS_API_KEY", transport=maps_transport(seen=seen))
    assert report.key_valid is False
    assert report.steps == []
    assert seen == []
    assert events(logs) == ["api_key_invalid"]


@pytest.mark.asyncio
async def test_service_check_classifies_each_service():
    overrides = {
        "geocode": {"status": "ZERO_RESULTS", "results": []},
        "autocomplete": {"status": "REQUEST_DENIED", "error_message": "Places API not enabled"},
        "place_details": {"status": "OVER_QUERY_LIMIT"},
    }
    report = await run_probe(KEY, services=True, transport=maps_transport(overrides))
    assert report.services == {
        "geocoding": "working",
        "places_autocomplete": "denied",
        "place_details": "degraded",
    }


@pytest.mark.asyncio
async def test_service_check_records_transport_errors():
    report = await run_probe(
        KEY, services=True, transport=maps_transport({"place_details": httpx.ConnectError})
    )
    assert report.services["place_details"] == "error"
    assert report.services["geocoding"] == "working"


def test_main_exit_codes(monkeypatch):
    monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "")
    with patch.object(probe, "configure_logging"):
        assert probe.main(["--api-key", "YOUR_GOOGLE_MAPS_API_KEY"]) == probe.EXIT_BAD_KEY

        fake = AsyncMock(return_value=probe.ProbeReport(key_valid=True, completed=True))
        with patch.object(probe, "run_probe", fake):
            assert probe.main(["--api-key", KEY, "--services"]) == probe.EXIT_OK
        fake.assert_awaited_once_with(KEY, services=True)


@pytest.mark.asyncio
async def test_missing_key_aborts_without_requests():
    seen: list[httpx.Request] = []
    with capture_logs() as logs:
        report = await run_probe(None, transport=maps_transport(seen=seen))
    assert report.key_valid is False
    assert seen == []
    assert logs[0]["reason"] == "GOOGLE_MAPS_API_KEY is not set"


def test_main_reports_invalid_settings_without_traceback(monkeypatch):
    monkeypatch.setenv("VENDOR_REQUEST_TIMEOUT", "abc")
    fake = AsyncMock()
    with patch.object(probe, "configure_logging"), patch.object(probe, "run_probe", fake):
        with capture_logs() as logs:
            assert probe.main(["--api-key", KEY]) == probe.EXIT_BAD_KEY
    fake.assert_not_called()
    invalid = [e for e in logs if e["event"] == "settings_invalid"]
    assert "timeout" in invalid[0]["errors"][0]["field"]
