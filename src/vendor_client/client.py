"""VendorClient: one configured transport shared by the auth/products/orders groups."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

import httpx
import structlog

from vendor_client.api.auth import AuthAPI
from vendor_client.api.orders import OrdersAPI
from vendor_client.api.products import ProductsAPI
from vendor_client.config import Settings, get_settings
from vendor_client.storage.base import TokenStore
from vendor_client.storage.sqlite import SQLiteTokenStore
from vendor_client.transport import DEFAULT_TIMEOUT, ApiTransport

log = structlog.get_logger(__name__)

_CONNECTION_CHECK_TIMEOUT = 5.0


@dataclass
class ConnectionStatus:
    """Outcome of a reachability check against one base URL."""

    reachable: bool
    url: str
    status_code: int | None = None
    error: str | None = None


class VendorClient:
    """Facade over the vendor backend.

    Usage::

        async with VendorClient.from_settings() as client:
            await client.auth.login("me@example.com", "secret")
            products = await client.products.get_all()
    """

    def __init__(
        self,
        base_url: str,
        token_store: TokenStore,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._http_transport = transport
        self.transport = ApiTransport(base_url, token_store, timeout=timeout, transport=transport)
        self.auth = AuthAPI(self.transport)
        self.products = ProductsAPI(self.transport)
        self.orders = OrdersAPI(self.transport)

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        token_store: TokenStore | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> VendorClient:
        settings = settings or get_settings()
        store = token_store or SQLiteTokenStore(settings.storage_path)
        log.debug("vendor_client_configured", api_url=settings.api_url)
        return cls(
            settings.api_url, store, timeout=settings.request_timeout, transport=transport
        )

    async def __aenter__(self) -> VendorClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.transport.aclose()

    async def check_connection(self) -> ConnectionStatus:
        """Check whether the configured backend answers at all."""
        return await probe_base_url(self.transport.base_url, transport=self._http_transport)

    async def find_reachable_url(self, candidates: Iterable[str]) -> str | None:
        """Return the first candidate base URL whose backend answers."""
        for url in candidates:
            status = await probe_base_url(url, transport=self._http_transport)
            if status.reachable:
                return status.url
        log.warning("no_reachable_api_url")
        return None


def health_url(base_url: str) -> str:
    """Map ``http://host:5000/api`` to ``http://host:5000/health``."""
    root = base_url.rstrip("/")
    if root.endswith("/api"):
        root = root[: -len("/api")]
    return f"{root}/health"


async def probe_base_url(
    base_url: str, transport: httpx.AsyncBaseTransport | None = None
) -> ConnectionStatus:
    """Try the health endpoint, then the base URL itself.

    Any HTTP response counts as reachable, even a 404: the server is up.
    Only transport failures on both attempts count as unreachable.
    """
    base_url = base_url.rstrip("/")
    last_error: str | None = None
    async with httpx.AsyncClient(timeout=_CONNECTION_CHECK_TIMEOUT, transport=transport) as client:
        for url in (health_url(base_url), base_url):
            try:
                resp = await client.get(url)
            except httpx.TransportError as exc:
                log.debug("connection_check_failed", url=url, error=str(exc))
                last_error = str(exc) or type(exc).__name__
                continue
            log.info("connection_check_ok", url=url, status_code=resp.status_code)
            return ConnectionStatus(reachable=True, url=base_url, status_code=resp.status_code)
    log.warning("connection_check_unreachable", url=base_url, error=last_error)
    return ConnectionStatus(reachable=False, url=base_url, error=last_error)
