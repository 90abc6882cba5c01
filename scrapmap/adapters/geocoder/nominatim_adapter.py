"""Nominatim geocoder adapter — implements GeocoderPort."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from scrapmap.application.ports.geocoder_port import GeocoderPort, PlaceResult
from scrapmap.config import settings
from scrapmap.domain.errors import GeocodingError
from scrapmap.domain.value_objects.geo_point import GeoPoint

logger = logging.getLogger(__name__)

NOMINATIM_SEARCH_URL = "https://nominatim.openstreetmap.org/search"
NOMINATIM_REVERSE_URL = "https://nominatim.openstreetmap.org/reverse"


class NominatimAdapter(GeocoderPort):
    """OpenStreetMap Nominatim with in-memory caching."""

    def __init__(
        self,
        user_agent: str | None = None,
        timeout: float | None = None,
        country_codes: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._user_agent = user_agent or settings.geocoder_user_agent
        self._timeout = timeout or settings.geocoder_timeout_s
        self._country_codes = country_codes if country_codes is not None else settings.geocoder_region
        self._transport = transport
        self._search_cache: dict[str, PlaceResult | None] = {}
        self._reverse_cache: dict[tuple[float, float], str | None] = {}

    async def place_search(self, query: str) -> PlaceResult | None:
        cache_key = query.strip().lower()
        if cache_key in self._search_cache:
            logger.debug("Cache hit for '%s'", query)
            return self._search_cache[cache_key]

        params: dict[str, Any] = {"q": query.strip(), "format": "jsonv2", "limit": 1}
        if self._country_codes:
            params["countrycodes"] = self._country_codes
        results = await self._get(NOMINATIM_SEARCH_URL, params)
        if not isinstance(results, list):
            # rate limiting and bad requests come back as a 200 with an error object
            logger.warning("Nominatim returned an error payload for '%s': %s", query, results)
            raise GeocodingError(f"Unexpected Nominatim response for '{query}'")

        place = None
        if results:
            try:
                hit = results[0]
                point = GeoPoint(latitude=float(hit["lat"]), longitude=float(hit["lon"]))
            except (KeyError, TypeError, ValueError) as e:
                raise GeocodingError(f"Malformed Nominatim result for '{query}'") from e
            place = PlaceResult(point=point, address=hit.get("display_name"))
            logger.info("Nominatim resolved '%s' → (%f, %f)", query, point.latitude, point.longitude)
        else:
            logger.info("Nominatim returned no results for '%s'", query)

        self._search_cache[cache_key] = place
        return place

    async def reverse_geocode(self, point: GeoPoint) -> str | None:
        # ~1 m precision is plenty for an address lookup
        cache_key = (round(point.latitude, 5), round(point.longitude, 5))
        if cache_key in self._reverse_cache:
            return self._reverse_cache[cache_key]

        data = await self._get(
            NOMINATIM_REVERSE_URL,
            {"lat": point.latitude, "lon": point.longitude, "format": "jsonv2", "zoom": 18},
        )
        address = data.get("display_name") if isinstance(data, dict) else None
        if address is None:
            logger.info("Nominatim has no address for (%f, %f)", point.latitude, point.longitude)

        self._reverse_cache[cache_key] = address
        return address

    async def _get(self, url: str, params: dict[str, Any]) -> Any:
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.get(
                    url,
                    params=params,
                    headers={"User-Agent": self._user_agent},
                    timeout=self._timeout,
                )
                response.raise_for_status()
                return response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.exception("Nominatim API error for %s", url)
            raise GeocodingError(f"Nominatim request failed: {e}") from e
