"""Order calls for the logged-in vendor."""

from __future__ import annotations

from typing import Any

from vendor_client.transport import ApiTransport


class OrdersAPI:
    def __init__(self, transport: ApiTransport) -> None:
        self._transport = transport

    async def get_all(self) -> Any:
        return await self._transport.request_json("GET", "/orders")

    async def get_by_id(self, order_id: str) -> Any:
        return await self._transport.request_json("GET", f"/orders/{order_id}")

    async def update_status(self, order_id: str, status: str) -> Any:
        return await self._transport.request_json(
            "PUT", f"/orders/{order_id}/status", json={"status": status}
        )
