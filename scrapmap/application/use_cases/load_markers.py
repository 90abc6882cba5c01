"""ListingMarkerRepository — listing rows → decodable map markers."""

from __future__ import annotations

import logging

from scrapmap.application.ports.listing_store import ListingRow, ListingStore
from scrapmap.domain.codecs import coordinate_codec
from scrapmap.domain.entities.listing_marker import DEFAULT_CATEGORY, ListingMarker
from scrapmap.domain.errors import DecodeError

logger = logging.getLogger(__name__)


class ListingMarkerRepository:
    """Reads markers through the coordinate codec.

    Listings whose stored point cannot be decoded are left out of the
    result. Sparse location data is normal, so this is logged rather than
    reported to the user.
    """

    def __init__(self, store: ListingStore):
        self._store = store

    async def load_all(self) -> tuple[ListingMarker, ...]:
        """Return a snapshot of every mappable listing. Call again to refresh."""
        rows = await self._store.fetch_listings_with_coordinates()
        markers = tuple(m for m in (row_to_marker(r) for r in rows) if m is not None)
        logger.info("Loaded %d markers from %d listing rows", len(markers), len(rows))
        return markers

    async def load_one(self, listing_id: str) -> ListingMarker | None:
        """Return the listing's marker, or None if missing or not mappable."""
        row = await self._store.fetch_listing_by_id(listing_id)
        if row is None:
            logger.info("Listing %s not found", listing_id)
            return None
        return row_to_marker(row)


def row_to_marker(row: ListingRow) -> ListingMarker | None:
    if row.geo_raw is None:
        logger.debug("Listing %s has no geolocation", row.id)
        return None
    try:
        point = coordinate_codec.decode(row.geo_raw)
    except DecodeError as e:
        logger.warning("Dropping listing %s from map: %s", row.id, e)
        return None

    return ListingMarker(
        listing_id=row.id,
        point=point,
        title=row.title,
        category=row.material_category or DEFAULT_CATEGORY,
        price=row.listed_price,
        quantity=row.quantity,
        unit=row.unit,
    )
