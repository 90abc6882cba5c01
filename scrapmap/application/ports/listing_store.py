"""Port interface for the hosted listing store."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ListingRow:
    """A listing as returned by the backend; ``geo_raw`` is undecoded."""

    id: str
    title: str
    listed_price: float | None
    quantity: float | None
    unit: str | None
    material_category: str | None
    geo_raw: Any
    address: str | None = None


class ListingStore(ABC):
    @abstractmethod
    async def fetch_listings_with_coordinates(self) -> list[ListingRow]:
        """Return every listing that has a geolocation value stored."""
        ...

    @abstractmethod
    async def fetch_listing_by_id(self, listing_id: str) -> ListingRow | None:
        ...

    @abstractmethod
    async def update_listing_geolocation(
        self, listing_id: str, geolocation: dict, address: str | None = None
    ) -> int:
        """Write the geolocation and return the number of affected rows.

        Zero is a legitimate answer: the backend does not raise when the
        update matches no row (unknown id, or a listing the caller does not own).
        Raises ListingStoreError when the backend call itself fails.
        """
        ...
