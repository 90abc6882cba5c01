"""Port interface for forward and reverse geocoding."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from scrapmap.domain.value_objects.geo_point import GeoPoint


@dataclass(frozen=True)
class PlaceResult:
    point: GeoPoint
    address: str | None


class GeocoderPort(ABC):
    @abstractmethod
    async def reverse_geocode(self, point: GeoPoint) -> str | None:
        """Return a formatted address for the point, or None if unknown.

        Raises GeocodingError if the provider cannot be reached.
        """
        ...

    @abstractmethod
    async def place_search(self, query: str) -> PlaceResult | None:
        """Return the best match for a free-text place query, or None.

        Raises GeocodingError if the provider cannot be reached.
        """
        ...
