"""PickupLocationPersistence — write a resolved pickup point back."""

from __future__ import annotations

import logging

from scrapmap.application.ports.listing_store import ListingStore
from scrapmap.domain.codecs import coordinate_codec
from scrapmap.domain.errors import ListingStoreError, NotPersistedError, SaveTransportError
from scrapmap.domain.value_objects.geo_point import GeoPoint

logger = logging.getLogger(__name__)


class PickupLocationPersistence:
    """Encodes a point as GeoJSON and verifies the write landed.

    The backend answers a no-op update (unknown id, or a row the caller may
    not modify) with success and zero affected rows; that case raises
    NotPersistedError instead of passing silently. Nothing is retried.
    """

    def __init__(self, store: ListingStore):
        self._store = store

    async def save(self, listing_id: str, point: GeoPoint, address: str | None = None) -> None:
        value = coordinate_codec.encode(point)
        try:
            affected = await self._store.update_listing_geolocation(listing_id, value, address)
        except ListingStoreError as e:
            logger.error("Saving location for listing %s failed: %s", listing_id, e)
            raise SaveTransportError(listing_id, f"Backend write failed: {e}") from e

        if affected == 0:
            logger.warning("Location update for listing %s affected no rows", listing_id)
            raise NotPersistedError(listing_id, f"Listing {listing_id} was not updated")
        if affected > 1:
            logger.warning("Location update for listing %s affected %d rows", listing_id, affected)

        logger.info(
            "Saved pickup location for listing %s: %s", listing_id, value["coordinates"]
        )
