"""Shared test fixtures."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
import pytest_asyncio

# Make _helpers importable from test files
sys.path.insert(0, str(Path(__file__).parent))

from _helpers import FakeBackend  # noqa: E402

from vendor_client.client import VendorClient  # noqa: E402
from vendor_client.storage.memory import InMemoryTokenStore  # noqa: E402

BASE_URL = "http://testserver/api"


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def token_store() -> InMemoryTokenStore:
    return InMemoryTokenStore()


@pytest_asyncio.fixture
async def client(backend: FakeBackend, token_store: InMemoryTokenStore):
    async with VendorClient(BASE_URL, token_store, transport=backend.transport) as vendor_client:
        yield vendor_client
