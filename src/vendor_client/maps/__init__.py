"""Google Maps key diagnostics."""

from vendor_client.maps.client import MapsClient
from vendor_client.maps.components import AddressSummary, extract_address_components

__all__ = ["AddressSummary", "MapsClient", "extract_address_components"]
