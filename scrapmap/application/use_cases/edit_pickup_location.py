"""PickupLocationSession — one listing's pickup-location editing session.

Ties acquisition, the map view and persistence together:

    acquire → re-center map → confirm → save (GeoJSON) → reload listing

After a successful save the session is closed; the caller starts a new one
to edit again.
"""

from __future__ import annotations

import logging

from scrapmap.application.ports.geocoder_port import PlaceResult
from scrapmap.application.ports.notifier_port import Notice, NotifierPort
from scrapmap.application.use_cases.acquire_location import LocationAcquisitionController
from scrapmap.application.use_cases.load_markers import ListingMarkerRepository
from scrapmap.application.use_cases.save_pickup_location import PickupLocationPersistence
from scrapmap.application.use_cases.sync_map_view import DETAIL_ZOOM, MapViewSynchronizer
from scrapmap.domain.entities.listing_marker import ListingMarker
from scrapmap.domain.errors import (
    ListingStoreError,
    NoLocationSelectedError,
    NotPersistedError,
    SaveTransportError,
)
from scrapmap.domain.value_objects.acquisition_state import AcquisitionState
from scrapmap.domain.value_objects.enums import AcquisitionSource, FailureReason, NoticeLevel

logger = logging.getLogger(__name__)

FAILURE_MESSAGES: dict[FailureReason, str] = {
    FailureReason.PERMISSION_DENIED: (
        "Location permission denied. Please enable location access in your browser."
    ),
    FailureReason.UNAVAILABLE: "Location information is unavailable. Please try again later.",
    FailureReason.TIMEOUT: "Location request timed out. Please try again.",
    FailureReason.INVALID_INPUT: (
        "That location could not be used. Search for an address or click on the map."
    ),
}


class SessionClosedError(RuntimeError):
    pass


class PickupLocationSession:
    def __init__(
        self,
        listing_id: str,
        controller: LocationAcquisitionController,
        synchronizer: MapViewSynchronizer,
        persistence: PickupLocationPersistence,
        markers: ListingMarkerRepository,
        notifier: NotifierPort,
    ):
        self.listing_id = listing_id
        self._controller = controller
        self._synchronizer = synchronizer
        self._persistence = persistence
        self._markers = markers
        self._notifier = notifier
        self._closed = False
        controller.add_listener(self._on_state)

    @property
    def state(self) -> AcquisitionState:
        return self._controller.state

    @property
    def closed(self) -> bool:
        return self._closed

    # ─── Acquisition ─────────────────────────────────────────────────

    async def use_device_location(self) -> AcquisitionState:
        self._ensure_open()
        return await self._controller.use_device_location()

    async def search(self, query: str) -> AcquisitionState:
        self._ensure_open()
        return await self._controller.search(query)

    def choose_place(self, place: PlaceResult) -> AcquisitionState:
        self._ensure_open()
        return self._controller.choose_place(place)

    async def place_manually(self, latitude: float, longitude: float) -> AcquisitionState:
        self._ensure_open()
        return await self._controller.place_manually(latitude, longitude)

    def cancel(self) -> None:
        """Abandon the session without saving."""
        self._controller.cancel()
        self._synchronizer.clear_pickup_point()
        self._closed = True

    # ─── Confirm ─────────────────────────────────────────────────────

    async def confirm(self) -> ListingMarker | None:
        """Save the selected point and return the reloaded listing marker.

        Raises:
            NoLocationSelectedError: nothing resolved yet, or still acquiring.
            NotPersistedError / SaveTransportError: the write did not land.
        """
        self._ensure_open()
        state = self._controller.state
        point = None if state.is_acquiring else state.current_point
        if point is None:
            self._notify("No Location", "Please select a location first.", NoticeLevel.ERROR)
            raise NoLocationSelectedError(f"No location selected for listing {self.listing_id}")

        try:
            await self._persistence.save(self.listing_id, point, state.current_address)
        except NotPersistedError:
            self._notify(
                "Warning",
                "Location may not have been saved. Please check and try again.",
                NoticeLevel.ERROR,
            )
            raise
        except SaveTransportError:
            self._notify(
                "Error", "Failed to store pickup location. Please try again.", NoticeLevel.ERROR
            )
            raise

        self._notify(
            "Pickup Location Set", "Your scrap pickup location has been saved successfully!"
        )
        self._controller.cancel()
        self._closed = True
        return await self._reload()

    # ─── Internals ───────────────────────────────────────────────────

    async def _reload(self) -> ListingMarker | None:
        try:
            marker = await self._markers.load_one(self.listing_id)
        except ListingStoreError as e:
            logger.warning("Saved listing %s but could not reload it: %s", self.listing_id, e)
            return None

        self._synchronizer.clear_pickup_point()
        if marker is not None:
            self._synchronizer.set_markers([marker])
            self._synchronizer.center_on(marker.point, DETAIL_ZOOM)
        return marker

    def _on_state(self, state: AcquisitionState) -> None:
        if state.is_resolved and state.point != self._synchronizer.pickup_point:
            self._synchronizer.show_pickup_point(state.point, state.source)
            if state.source == AcquisitionSource.DEVICE:
                self._notify("Location Found", "Your current location has been set successfully")
        elif state.is_failed:
            self._notify("Location Error", FAILURE_MESSAGES[state.reason], NoticeLevel.ERROR)

    def _ensure_open(self) -> None:
        if self._closed:
            raise SessionClosedError(f"Editing session for listing {self.listing_id} has ended")

    def _notify(self, title: str, description: str, level: NoticeLevel = NoticeLevel.INFO) -> None:
        self._notifier.notify(Notice(title=title, description=description, level=level))
