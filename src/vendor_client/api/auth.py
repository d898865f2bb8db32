"""Vendor authentication and profile calls."""

from __future__ import annotations

from typing import Any

import structlog

from vendor_client.api.schemas import AuthResponse, RegisterRequest, User
from vendor_client.storage.base import TOKEN_KEY
from vendor_client.transport import ApiTransport

log = structlog.get_logger(__name__)


class AuthAPI:
    """Login, registration, profile and password-reset calls.

    Login and register overwrite the stored bearer token, so every later
    request on the same transport is authenticated with it.
    """

    def __init__(self, transport: ApiTransport) -> None:
        self._transport = transport

    async def login(self, email: str, password: str) -> AuthResponse:
        data = await self._transport.request_json(
            "POST", "/vendors/login", json={"email": email, "password": password}
        )
        auth = AuthResponse.model_validate(data)
        await self._store_token(auth.token)
        log.info("vendor_logged_in", vendor_id=auth.id)
        return auth

    async def register(self, request: RegisterRequest | dict[str, Any]) -> AuthResponse:
        if isinstance(request, dict):
            request = RegisterRequest.model_validate(request)
        data = await self._transport.request_json(
            "POST", "/vendors/register", json=request.to_wire()
        )
        auth = AuthResponse.model_validate(data)
        await self._store_token(auth.token)
        log.info("vendor_registered", vendor_id=auth.id)
        return auth

    async def get_profile(self) -> User:
        data = await self._transport.request_json("GET", "/vendors/profile")
        return User.model_validate(data)

    async def update_profile(self, fields: dict[str, Any]) -> User:
        """Update the profile, keep the re-issued token, then re-read the full user.

        The update response only carries the auth subset plus a fresh token,
        so the complete record comes from a follow-up ``get_profile``.
        """
        data = await self._transport.request_json("PUT", "/vendors/profile", json=fields)
        if isinstance(data, dict) and data.get("token"):
            await self._store_token(data["token"])
        return await self.get_profile()

    async def forgot_password(self, email: str) -> None:
        await self._transport.request("POST", "/vendors/forgot-password", json={"email": email})

    async def reset_password(self, token: str, password: str) -> None:
        await self._transport.request(
            "POST", "/vendors/reset-password", json={"token": token, "password": password}
        )

    async def logout(self) -> None:
        """Forget the stored token. No request is sent."""
        await self._transport.token_store.delete(TOKEN_KEY)
        log.info("vendor_logged_out")

    async def _store_token(self, token: str) -> None:
        await self._transport.token_store.set(TOKEN_KEY, token)
