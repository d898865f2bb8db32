"""Error taxonomy raised by the vendor API facade."""

from __future__ import annotations

from typing import Any

import httpx


class VendorClientError(Exception):
    """Base class for every error raised by vendor_client."""


class NetworkError(VendorClientError):
    """The request never produced a response (connect failure, timeout, ...)."""

    def __init__(self, message: str, request: httpx.Request | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.request = request


class HTTPError(VendorClientError):
    """The backend answered with a non-2xx status.

    ``payload`` is the decoded JSON body when the backend sent one, otherwise
    the raw text. ``response`` is the untouched ``httpx.Response``.
    """

    def __init__(self, response: httpx.Response, payload: Any = None) -> None:
        self.response = response
        self.status_code = response.status_code
        self.payload = payload
        super().__init__(f"HTTP {self.status_code}: {self.server_message}")

    @property
    def server_message(self) -> str:
        if isinstance(self.payload, dict):
            message = self.payload.get("message") or self.payload.get("error")
            if message:
                return str(message)
        if isinstance(self.payload, str) and self.payload:
            return self.payload
        return self.response.reason_phrase or "request failed"


class AuthError(HTTPError):
    """HTTP 401: the stored token is missing, invalid, or expired."""


def decode_payload(response: httpx.Response) -> Any:
    """Return the response body as JSON when possible, else as text."""
    try:
        return response.json()
    except ValueError:
        return response.text


def error_for_response(response: httpx.Response) -> HTTPError:
    """Map a non-2xx response onto the error taxonomy."""
    payload = decode_payload(response)
    if response.status_code == 401:
        return AuthError(response, payload)
    return HTTPError(response, payload)
