"""Shared HTTP transport for the vendor backend.

One ``httpx.AsyncClient`` is built per transport and reused by every resource
group. Two event hooks act as interceptors:

- request: await the stored bearer token and attach it as ``Authorization``
- response: log the server-provided payload of any non-2xx response

Failures are then raised as :mod:`vendor_client.errors` types. No retry and no
backoff happen here; the caller decides what to do.
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from vendor_client.errors import NetworkError, decode_payload, error_for_response
from vendor_client.storage.base import TOKEN_KEY, TokenStore

log = structlog.get_logger(__name__)

DEFAULT_TIMEOUT = 10.0


class ApiTransport:
    """Authenticated JSON transport bound to one base URL."""

    def __init__(
        self,
        base_url: str,
        token_store: TokenStore,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._token_store = token_store
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=timeout,
            headers={"Accept": "application/json"},
            event_hooks={
                "request": [self._attach_token],
                "response": [self._log_error_response],
            },
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def token_store(self) -> TokenStore:
        return self._token_store

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    # ------------------------------------------------------------------
    # Interceptors
    # ------------------------------------------------------------------

    async def _attach_token(self, request: httpx.Request) -> None:
        try:
            token = await self._token_store.get(TOKEN_KEY)
        except Exception as exc:
            log.error("token_read_failed", error=str(exc))
            return
        if token:
            request.headers["Authorization"] = f"Bearer {token}"

    async def _log_error_response(self, response: httpx.Response) -> None:
        if response.is_success:
            return
        await response.aread()
        log.error(
            "api_error",
            method=response.request.method,
            url=str(response.request.url),
            status_code=response.status_code,
            payload=decode_payload(response),
        )

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    async def request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Send one request; raise NetworkError/HTTPError/AuthError on failure."""
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.TransportError as exc:
            message = str(exc) or type(exc).__name__
            log.error("api_network_error", method=method, path=path, error=message)
            raise NetworkError(message, request=_request_of(exc)) from exc
        if not response.is_success:
            raise error_for_response(response)
        return response

    async def request_json(self, method: str, path: str, **kwargs: Any) -> Any:
        """Send one request and return the decoded body (``None`` when empty).

        Non-JSON bodies come back as text.
        """
        response = await self.request(method, path, **kwargs)
        if not response.content:
            return None
        return decode_payload(response)

    async def aclose(self) -> None:
        await self._client.aclose()


def _request_of(exc: httpx.TransportError) -> httpx.Request | None:
    try:
        return exc.request
    except RuntimeError:
        return None
