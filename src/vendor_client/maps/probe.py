"""Google Maps API key diagnostic probe.

Runs a fixed sequence of Geocoding/Places calls and logs what comes back, so a
human can tell whether a key works and which services it is allowed to use.
Every step is isolated: a failure is logged and the next step still runs. The
run always ends with a ``done`` log line.

Usage:
    vendor-maps-probe
    python -m vendor_client.maps.probe --api-key AIza... --services
"""

from __future__ import annotations

import argparse
import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

import httpx
import structlog
from pydantic import ValidationError

from vendor_client.config import get_settings
from vendor_client.logging import configure_logging
from vendor_client.maps.client import MapsClient
from vendor_client.maps.components import extract_address_components, location_of

log = structlog.get_logger(__name__)

PLACEHOLDER_KEY = "YOUR_GOOGLE_MAPS_API_KEY"

VALIDATION_ADDRESS = "test"
AUTOCOMPLETE_QUERY = "mumbai"
GEOCODE_ADDRESS = "Mumbai, Maharashtra, India"
REVERSE_LAT, REVERSE_LNG = 19.0760, 72.8777

# Used by the service check only.
SERVICE_GEOCODE_ADDRESS = "Mumbai, India"
SERVICE_AUTOCOMPLETE_QUERY = "Mumbai"
SERVICE_DETAILS_PLACE_ID = "ChIJwe1EZjDG5zsRaYxkjY_tpF0"

REQUEST_DENIED_HINTS = (
    "Enable Geocoding API and Places API in the Google Cloud Console (APIs & Services > Library)",
    "Check the key's restrictions (IP addresses, HTTP referrers, API restrictions)",
    "Make sure billing is enabled on the Google Cloud project",
    "Check that the project has not exceeded its quota",
)

EXIT_OK = 0
EXIT_BAD_KEY = 2


@dataclass
class StepResult:
    name: str
    ok: bool
    status: str | None = None
    error: str | None = None
    data: dict[str, Any] = field(default_factory=dict)


@dataclass
class ProbeReport:
    """Per-step outcome of one probe run."""

    key_valid: bool = False
    steps: list[StepResult] = field(default_factory=list)
    services: dict[str, str] = field(default_factory=dict)
    completed: bool = False

    def step(self, name: str) -> StepResult | None:
        for result in self.steps:
            if result.name == name:
                return result
        return None


def mask_key(api_key: str) -> str:
    """Show only the first 8 and last 4 characters of a key."""
    if len(api_key) <= 12:
        return "*" * len(api_key)
    return f"{api_key[:8]}...{api_key[-4:]}"


def check_api_key(api_key: str | None) -> str | None:
    """Return why the key is unusable, or None when it looks real."""
    if not api_key:
        return "GOOGLE_MAPS_API_KEY is not set"
    if api_key == PLACEHOLDER_KEY or "your_" in api_key or "YOUR_" in api_key:
        return "GOOGLE_MAPS_API_KEY is still a placeholder value"
    return None


def report_status(step: str, data: dict[str, Any]) -> bool:
    """Log the provider status (and error message, if any). True when ``OK``."""
    status = data.get("status")
    log.info("provider_status", step=step, status=status)
    if data.get("error_message"):
        log.error("provider_error", step=step, status=status, error_message=data["error_message"])
    return status == "OK"


class MapsProbe:
    """Sequential, failure-isolated walk through the Maps endpoints."""

    def __init__(self, client: MapsClient) -> None:
        self._client = client
        self.report = ProbeReport(key_valid=True)

    async def _guarded(self, name: str, step: Callable[[], Awaitable[StepResult]]) -> StepResult:
        log.info("step_started", step=name)
        try:
            result = await step()
        except Exception as exc:
            error = str(exc) or type(exc).__name__
            log.error("step_failed", step=name, error=error)
            result = StepResult(name=name, ok=False, error=error)
        self.report.steps.append(result)
        return result

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    async def validate_key(self) -> StepResult:
        data = await self._client.geocode(VALIDATION_ADDRESS)
        status = data.get("status")
        report_status("key_validation", data)
        if status == "REQUEST_DENIED":
            for hint in REQUEST_DENIED_HINTS:
                log.warning("request_denied_hint", hint=hint)
            return StepResult("key_validation", ok=False, status=status, error=data.get("error_message"))
        if status == "INVALID_REQUEST":
            log.warning("key_accepted_invalid_request")
        else:
            log.info("key_valid")
        return StepResult("key_validation", ok=True, status=status)

    async def autocomplete(self) -> StepResult:
        data = await self._client.autocomplete(AUTOCOMPLETE_QUERY)
        ok = report_status("autocomplete", data)
        predictions = data.get("predictions") or []
        if not ok or not predictions:
            if ok:
                log.warning("no_places_found", query=AUTOCOMPLETE_QUERY)
            return StepResult(
                "autocomplete", ok=False, status=data.get("status"), error=data.get("error_message")
            )
        log.info("places_found", count=len(predictions))
        for index, place in enumerate(predictions, start=1):
            log.info(
                "place_candidate",
                index=index,
                description=place.get("description"),
                place_id=place.get("place_id"),
            )
        first = predictions[0]
        return StepResult(
            "autocomplete",
            ok=True,
            status="OK",
            data={"place_id": first.get("place_id"), "description": first.get("description")},
        )

    async def place_details(self, place_id: str, description: str | None = None) -> StepResult:
        log.info("place_details_lookup", place_id=place_id, description=description)
        data = await self._client.place_details(place_id)
        ok = report_status("place_details", data)
        result = data.get("result")
        if not ok or not result:
            if ok:
                log.warning("no_place_details", place_id=place_id)
            return StepResult(
                "place_details", ok=False, status=data.get("status"), error=data.get("error_message")
            )
        location = location_of(result)
        address = result.get("formatted_address")
        log.info("place_resolved", location=location, formatted_address=address)
        return StepResult(
            "place_details",
            ok=True,
            status="OK",
            data={"location": location, "formatted_address": address},
        )

    async def _geocode_step(self, name: str, data: dict[str, Any]) -> StepResult:
        ok = report_status(name, data)
        results = data.get("results") or []
        if not ok or not results:
            if ok:
                log.warning("no_geocoding_results", step=name)
            return StepResult(name, ok=False, status=data.get("status"), error=data.get("error_message"))
        first = results[0]
        location = location_of(first)
        address = first.get("formatted_address")
        summary = extract_address_components(first.get("address_components"))
        log.info(
            "address_resolved",
            step=name,
            location=location,
            formatted_address=address,
            city=summary.city,
            state=summary.state,
            country=summary.country,
        )
        return StepResult(
            name,
            ok=True,
            status="OK",
            data={
                "location": location,
                "formatted_address": address,
                "city": summary.city,
                "state": summary.state,
                "country": summary.country,
            },
        )

    async def geocode(self) -> StepResult:
        return await self._geocode_step("geocode", await self._client.geocode(GEOCODE_ADDRESS))

    async def reverse_geocode(self) -> StepResult:
        data = await self._client.reverse_geocode(REVERSE_LAT, REVERSE_LNG)
        return await self._geocode_step("reverse_geocode", data)

    async def check_services(self) -> dict[str, str]:
        """Classify each Maps service as working, denied, degraded or error."""
        checks: dict[str, Callable[[], Awaitable[dict[str, Any]]]] = {
            "geocoding": lambda: self._client.geocode(SERVICE_GEOCODE_ADDRESS),
            "places_autocomplete": lambda: self._client.autocomplete(SERVICE_AUTOCOMPLETE_QUERY),
            "place_details": lambda: self._client.place_details(SERVICE_DETAILS_PLACE_ID),
        }
        for service, call in checks.items():
            try:
                data = await call()
            except Exception as exc:
                log.error("service_check_failed", service=service, error=str(exc) or type(exc).__name__)
                self.report.services[service] = "error"
                continue
            status = data.get("status")
            if status == "REQUEST_DENIED":
                verdict = "denied"
                log.error(
                    "service_denied",
                    service=service,
                    error_message=data.get("error_message") or "No error message provided",
                )
            elif status in ("OK", "ZERO_RESULTS"):
                verdict = "working"
                log.info("service_working", service=service)
            else:
                verdict = "degraded"
                log.warning("service_degraded", service=service, status=status)
            self.report.services[service] = verdict
        return self.report.services

    async def run(self, services: bool = False) -> ProbeReport:
        await self._guarded("key_validation", self.validate_key)
        found = await self._guarded("autocomplete", self.autocomplete)
        if found.ok and found.data.get("place_id"):
            await self._guarded(
                "place_details",
                lambda: self.place_details(found.data["place_id"], found.data.get("description")),
            )
        await self._guarded("geocode", self.geocode)
        await self._guarded("reverse_geocode", self.reverse_geocode)
        if services:
            await self.check_services()
        self.report.completed = True
        log.info("done")
        return self.report


async def run_probe(
    api_key: str | None,
    services: bool = False,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ProbeReport:
    """Check the key, then run every probe step. Never raises."""
    problem = check_api_key(api_key)
    if problem is not None or api_key is None:
        log.error("api_key_invalid", reason=problem, hint="Set GOOGLE_MAPS_API_KEY in your .env file")
        return ProbeReport(key_valid=False)
    log.info("api_key_found", key=mask_key(api_key))
    async with MapsClient(api_key, transport=transport) as client:
        return await MapsProbe(client).run(services=services)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vendor-maps-probe",
        description="Check a Google Maps API key against the Geocoding and Places services.",
    )
    parser.add_argument("--api-key", help="Key to test (default: GOOGLE_MAPS_API_KEY)")
    parser.add_argument(
        "--services", action="store_true", help="Also classify each Maps service as working/denied"
    )
    parser.add_argument("--log-level", default=None, help="Log level (default: LOG_LEVEL or INFO)")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = get_settings()
    except ValidationError as exc:
        configure_logging(args.log_level or "INFO")
        log.error(
            "settings_invalid",
            errors=[
                {"field": ".".join(str(part) for part in err["loc"]), "message": err["msg"]}
                for err in exc.errors()
            ],
        )
        return EXIT_BAD_KEY
    configure_logging(args.log_level or settings.log_level, settings.log_format)
    report = asyncio.run(run_probe(args.api_key or settings.google_maps_api_key, services=args.services))
    return EXIT_OK if report.key_valid else EXIT_BAD_KEY


if __name__ == "__main__":
    raise SystemExit(main())
