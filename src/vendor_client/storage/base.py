"""Protocol for pluggable local key/value storage backends."""

from __future__ import annotations

from typing import Protocol

TOKEN_KEY = "token"


class TokenStore(Protocol):
    """Durable string storage keyed by name, used for the bearer token."""

    async def get(self, key: str) -> str | None: ...
    async def set(self, key: str, value: str) -> None: ...
    async def delete(self, key: str) -> None: ...
