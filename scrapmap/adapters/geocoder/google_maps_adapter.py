"""Google Maps geocoder adapter — implements GeocoderPort."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from scrapmap.application.ports.geocoder_port import GeocoderPort, PlaceResult
from scrapmap.config import settings
from scrapmap.domain.errors import GeocodingError
from scrapmap.domain.value_objects.geo_point import GeoPoint

logger = logging.getLogger(__name__)

GOOGLE_GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"


class GoogleMapsAdapter(GeocoderPort):
    """Google Maps implementation of GeocoderPort."""

    def __init__(
        self,
        api_key: str | None = None,
        region: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._api_key = api_key or settings.google_maps_api_key
        self._region = region or settings.geocoder_region
        self._transport = transport
        self._search_cache: dict[str, PlaceResult | None] = {}
        self._reverse_cache: dict[tuple[float, float], str | None] = {}

    async def place_search(self, query: str) -> PlaceResult | None:
        if not self._api_key:
            logger.warning("Google Maps API key is not set. Skipping place search.")
            return None

        cache_key = query.strip().lower()
        if cache_key in self._search_cache:
            return self._search_cache[cache_key]

        results = await self._geocode({"address": query.strip(), "region": self._region})
        place = None
        if results:
            try:
                loc = results[0]["geometry"]["location"]
                point = GeoPoint(latitude=loc["lat"], longitude=loc["lng"])
            except (KeyError, TypeError, ValueError) as e:
                raise GeocodingError(f"Malformed Google Maps result for '{query}'") from e
            place = PlaceResult(point=point, address=results[0].get("formatted_address"))
            logger.info("Google Maps resolved '%s' → (%f, %f)", query, point.latitude, point.longitude)

        self._search_cache[cache_key] = place
        return place

    async def reverse_geocode(self, point: GeoPoint) -> str | None:
        if not self._api_key:
            logger.warning("Google Maps API key is not set. Skipping reverse geocoding.")
            return None

        cache_key = (round(point.latitude, 5), round(point.longitude, 5))
        if cache_key in self._reverse_cache:
            return self._reverse_cache[cache_key]

        results = await self._geocode({"latlng": f"{point.latitude},{point.longitude}"})
        address = results[0].get("formatted_address") if results else None
        self._reverse_cache[cache_key] = address
        return address

    async def _geocode(self, params: dict[str, Any]) -> list[dict]:
        """Call the Geocoding API; ZERO_RESULTS is an empty list, other non-OK statuses raise."""
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.get(
                    GOOGLE_GEOCODE_URL,
                    params={**params, "key": self._api_key},
                    timeout=10.0,
                )
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.exception("Google Maps API error for %s", params)
            raise GeocodingError(f"Google Maps request failed: {e}") from e

        if not isinstance(data, dict):
            raise GeocodingError("Unexpected Google Maps response")
        status = data.get("status")
        if status == "OK":
            return data["results"]
        if status == "ZERO_RESULTS":
            logger.info("Google Maps found nothing for %s", params)
            return []
        logger.warning("Google Maps returned %s: %s", status, data.get("error_message"))
        raise GeocodingError(f"Google Maps status {status}")
