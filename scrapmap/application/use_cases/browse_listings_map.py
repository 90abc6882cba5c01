"""ListingsMapSession — the "all pickup locations" map."""

from __future__ import annotations

import asyncio
import logging

from scrapmap.application.ports.notifier_port import Notice, NotifierPort
from scrapmap.application.use_cases.load_markers import ListingMarkerRepository
from scrapmap.application.use_cases.sync_map_view import MapViewSynchronizer
from scrapmap.domain.entities.listing_marker import ListingMarker
from scrapmap.domain.errors import ListingStoreError
from scrapmap.domain.value_objects.enums import NoticeLevel

logger = logging.getLogger(__name__)


class ListingsMapSession:
    def __init__(
        self,
        markers: ListingMarkerRepository,
        synchronizer: MapViewSynchronizer,
        notifier: NotifierPort,
    ):
        self._markers = markers
        self._synchronizer = synchronizer
        self._notifier = notifier
        self._generation = 0
        self._fetch: asyncio.Future | None = None

    async def refresh(self) -> tuple[ListingMarker, ...]:
        """Reload all markers and fit the map to them.

        Starting a refresh cancels one still in flight, so an older fetch can
        never overwrite a newer marker set. On failure the previous markers
        stay on the map.
        """
        self._generation += 1
        gen = self._generation
        if self._fetch is not None and not self._fetch.done():
            self._fetch.cancel()

        fetch = asyncio.ensure_future(self._markers.load_all())
        self._fetch = fetch
        try:
            markers = await fetch
        except asyncio.CancelledError:
            if gen == self._generation:
                raise
            logger.debug("Marker refresh %d superseded", gen)
            return self._synchronizer.markers
        except ListingStoreError as e:
            logger.error("Failed to load listing locations: %s", e)
            self._notifier.notify(
                Notice(
                    title="Error",
                    description="Failed to load listing locations",
                    level=NoticeLevel.ERROR,
                )
            )
            return self._synchronizer.markers
        finally:
            if self._fetch is fetch:
                self._fetch = None

        self._synchronizer.set_markers(markers)
        self._synchronizer.fit_to_markers(markers)
        return markers

    def select(self, listing_id: str) -> ListingMarker:
        return self._synchronizer.select_marker(listing_id)

    def close_info_panel(self) -> None:
        self._synchronizer.deselect()
