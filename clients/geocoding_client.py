"""
Google Maps geocoding and Street View image URLs.

Geocoding is best-effort: any failure returns None and the report is sent
without a street view image and with the address as the user typed it.
"""

import logging
from dataclasses import dataclass
from urllib.parse import urlencode

import requests

logger = logging.getLogger(__name__)

GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"
STREET_VIEW_URL = "https://maps.googleapis.com/maps/api/streetview"


@dataclass(frozen=True)
class GeocodeResult:
    lat: float
    lng: float
    formatted_address: str


class GeocodingClient:
    """Resolve street addresses to coordinates."""

    def __init__(self, api_key: str, timeout: float = 5):
        if not api_key:
            raise ValueError("api_key is required")
        self.api_key = api_key
        self.timeout = timeout

    def geocode(self, address: str) -> GeocodeResult | None:
        """
        Look up an address.

        Args:
            address: Free-text street address

        Returns:
            First match, or None if nothing matched or the lookup failed
        """
        try:
            response = requests.get(
                GEOCODE_URL,
                params={"address": address, "key": self.api_key},
                timeout=self.timeout,
            )
            data = response.json()
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.warning(f"Geocoding request failed: {e}")
            return None

        if not isinstance(data, dict):
            logger.warning(f"Unexpected geocoding response type: {type(data).__name__}")
            return None

        status = data.get("status")
        results = data.get("results") or []
        if status != "OK" or not results:
            logger.info(f"Geocoding returned no match (status={status})")
            return None

        first = results[0]
        try:
            location = first["geometry"]["location"]
            return GeocodeResult(
                lat=float(location["lat"]),
                lng=float(location["lng"]),
                formatted_address=first.get("formatted_address") or address,
            )
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Unexpected geocoding response shape: {e}")
            return None

    def street_view_url(self, lat: float, lng: float, size: str = "600x400") -> str:
        """Static Street View image URL for the given coordinates."""
        query = urlencode({
            "size": size,
            "location": f"{lat},{lng}",
            "key": self.api_key,
            "return_error_code": "true",
        })
        return f"{STREET_VIEW_URL}?{query}"
