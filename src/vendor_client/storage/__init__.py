"""Local storage backends for the bearer token."""

from vendor_client.storage.base import TOKEN_KEY, TokenStore
from vendor_client.storage.memory import InMemoryTokenStore
from vendor_client.storage.sqlite import SQLiteTokenStore

__all__ = ["TOKEN_KEY", "InMemoryTokenStore", "SQLiteTokenStore", "TokenStore"]
