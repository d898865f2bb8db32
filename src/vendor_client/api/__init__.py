"""Resource-oriented call groups for the vendor backend."""

from vendor_client.api.auth import AuthAPI
from vendor_client.api.orders import OrdersAPI
from vendor_client.api.products import ProductsAPI
from vendor_client.api.schemas import AuthResponse, RegisterRequest, User

__all__ = ["AuthAPI", "AuthResponse", "OrdersAPI", "ProductsAPI", "RegisterRequest", "User"]
