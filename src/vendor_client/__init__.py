"""Vendor Client - async API facade for the vendor backend plus a Maps key probe."""

__all__ = ["Settings", "VendorClient"]
__version__ = "0.1.0"


def __getattr__(name: str):
    """Lazy imports - keep `python -m vendor_client.maps.probe` startup light."""
    if name == "Settings":
        from vendor_client.config import Settings

        return Settings
    if name == "VendorClient":
        from vendor_client.client import VendorClient

        return VendorClient
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
