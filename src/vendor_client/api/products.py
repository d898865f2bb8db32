"""Product catalogue calls. Create and update are sent as multipart forms."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from vendor_client.transport import ApiTransport

FileSpec = tuple[str, Any] | tuple[str, Any, str]
FilesArg = Mapping[str, FileSpec] | Sequence[tuple[str, FileSpec]]


def build_multipart(
    fields: Mapping[str, Any] | None = None, files: FilesArg | None = None
) -> list[tuple[str, Any]]:
    """Flatten form fields and file uploads into one multipart part list.

    Plain fields become filename-less parts, so the body is always
    ``multipart/form-data`` even when no file is attached. List values repeat
    the field name once per item.
    """
    parts: list[tuple[str, Any]] = []
    for name, value in (fields or {}).items():
        values = value if isinstance(value, (list, tuple)) else [value]
        for item in values:
            parts.append((name, (None, _form_value(item))))
    if files:
        items = files.items() if isinstance(files, Mapping) else files
        parts.extend((name, spec) for name, spec in items)
    return parts


def _form_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class ProductsAPI:
    """CRUD calls against ``/products``; bodies are passed through unchanged."""

    def __init__(self, transport: ApiTransport) -> None:
        self._transport = transport

    async def get_all(self) -> Any:
        return await self._transport.request_json("GET", "/products")

    async def get_by_id(self, product_id: str) -> Any:
        return await self._transport.request_json("GET", f"/products/{product_id}")

    async def create(
        self, fields: Mapping[str, Any] | None = None, files: FilesArg | None = None
    ) -> Any:
        return await self._transport.request_json(
            "POST", "/products", files=build_multipart(fields, files)
        )

    async def update(
        self,
        product_id: str,
        fields: Mapping[str, Any] | None = None,
        files: FilesArg | None = None,
    ) -> Any:
        return await self._transport.request_json(
            "PUT", f"/products/{product_id}", files=build_multipart(fields, files)
        )

    async def delete(self, product_id: str) -> None:
        await self._transport.request("DELETE", f"/products/{product_id}")
