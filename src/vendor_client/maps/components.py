"""Helpers for reading Geocoding/Places results."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

NOT_AVAILABLE = "N/A"

# field -> Google address component type tag
_COMPONENT_TAGS = {
    "city": "locality",
    "state": "administrative_area_level_1",
    "country": "country",
}


@dataclass(frozen=True)
class AddressSummary:
    city: str = NOT_AVAILABLE
    state: str = NOT_AVAILABLE
    country: str = NOT_AVAILABLE


def extract_address_components(
    components: Iterable[Mapping[str, Any]] | None,
) -> AddressSummary:
    """Derive city/state/country from tagged address components.

    The first component carrying a tag wins; later ones with the same tag are
    ignored. Tags that never appear stay ``"N/A"``.
    """
    found: dict[str, str] = {}
    for component in components or ():
        types = component.get("types") or ()
        for field, tag in _COMPONENT_TAGS.items():
            if field not in found and tag in types:
                found[field] = component.get("long_name") or NOT_AVAILABLE
    return AddressSummary(**found)


def location_of(result: Mapping[str, Any]) -> tuple[float, float] | None:
    """Return ``(lat, lng)`` from a result's geometry, if it has one."""
    location = (result.get("geometry") or {}).get("location") or {}
    if "lat" not in location or "lng" not in location:
        return None
    return float(location["lat"]), float(location["lng"])
