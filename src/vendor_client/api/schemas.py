"""Typed shapes for the auth endpoints. Products and orders stay untyped."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """Vendor account as returned by the backend."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str = Field(alias="_id")
    store_name: str = Field(default="", alias="storeName")
    name: str = ""
    email: str = ""
    phone: str = ""
    store_address: str = Field(default="", alias="storeAddress")
    role: str = ""
    is_verified: bool | None = Field(default=None, alias="isVerified")
    created_at: str | None = Field(default=None, alias="createdAt")
    updated_at: str | None = Field(default=None, alias="updatedAt")


class AuthResponse(BaseModel):
    """Login/register result: bearer token plus a subset of the user."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    token: str
    id: str = Field(alias="_id")
    name: str = ""
    email: str = ""
    role: str = ""
    store_name: str = Field(default="", alias="storeName")
    user: User | None = None


class RegisterRequest(BaseModel):
    """Profile fields accepted at registration."""

    store_name: str
    name: str
    email: str
    password: str
    phone: str
    address: str

    def to_wire(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "email": self.email,
            "password": self.password,
            "storeName": self.store_name,
            "storeAddress": self.address,
            "phone": self.phone,
        }
