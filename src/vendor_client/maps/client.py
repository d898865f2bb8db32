"""Thin async client for the Google Maps Geocoding and Places web services."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

log = structlog.get_logger(__name__)

MAPS_API_URL = "https://maps.googleapis.com/maps/api"


class MapsClient:
    """Issue raw GETs and return the provider's JSON untouched.

    Provider-level failures (``status`` other than ``OK``) are returned, not
    raised; only transport errors and non-2xx HTTP statuses raise.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = MAPS_API_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._client = httpx.AsyncClient(base_url=base_url.rstrip("/"), transport=transport)

    async def _get(self, path: str, **params: Any) -> dict[str, Any]:
        resp = await self._client.get(path, params={**params, "key": self._api_key})
        resp.raise_for_status()
        data: dict[str, Any] = resp.json()
        log.debug("maps_response", path=path, status=data.get("status"))
        return data

    async def geocode(self, address: str) -> dict[str, Any]:
        return await self._get("/geocode/json", address=address)

    async def reverse_geocode(self, lat: float, lng: float) -> dict[str, Any]:
        return await self._get("/geocode/json", latlng=f"{lat},{lng}")

    async def autocomplete(self, text: str) -> dict[str, Any]:
        return await self._get("/place/autocomplete/json", input=text)

    async def place_details(self, place_id: str) -> dict[str, Any]:
        return await self._get("/place/details/json", place_id=place_id)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> MapsClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
