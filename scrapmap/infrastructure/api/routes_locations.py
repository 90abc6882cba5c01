"""Pickup-location endpoints — set a listing's pickup point."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Header, HTTPException
from pydantic import BaseModel

from scrapmap.adapters.notifier.logging_notifier import LoggingNotifier
from scrapmap.application.ports.geocoder_port import GeocoderPort, PlaceResult
from scrapmap.application.ports.location_provider import DeviceLocationProvider
from scrapmap.application.use_cases.edit_pickup_location import (
    FAILURE_MESSAGES,
    PickupLocationSession,
)
from scrapmap.application.use_cases.load_markers import ListingMarkerRepository
from scrapmap.application.use_cases.save_pickup_location import PickupLocationPersistence
from scrapmap.application.use_cases.sync_map_view import MapViewSynchronizer
from scrapmap.domain.errors import NotPersistedError, SaveTransportError
from scrapmap.domain.value_objects.acquisition_state import AcquisitionState
from scrapmap.domain.value_objects.enums import FailureReason
from scrapmap.domain.value_objects.geo_point import GeoPoint
from scrapmap.infrastructure.api.dependencies import (
    get_geocoder,
    get_location_provider,
    get_marker_repository,
    get_pickup_persistence,
    new_acquisition_controller,
    new_map_synchronizer,
)
from scrapmap.infrastructure.api.serializers import (
    serialize_descriptor,
    serialize_marker,
    serialize_notice,
    serialize_view,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/listings", tags=["pickup-location"])

STATUS_BY_REASON: dict[FailureReason, int] = {
    FailureReason.PERMISSION_DENIED: 403,
    FailureReason.UNAVAILABLE: 503,
    FailureReason.TIMEOUT: 504,
    FailureReason.INVALID_INPUT: 422,
}


class PickupLocationRequest(BaseModel):
    latitude: float
    longitude: float
    address: str | None = None


class _Editing:
    """One request's editing session plus what the response needs from it."""

    def __init__(
        self,
        listing_id: str,
        location_provider: DeviceLocationProvider,
        geocoder: GeocoderPort,
        persistence: PickupLocationPersistence,
        markers: ListingMarkerRepository,
    ):
        self.notifier = LoggingNotifier()
        self.synchronizer: MapViewSynchronizer = new_map_synchronizer(
            focused_listing_id=listing_id
        )
        self.session = PickupLocationSession(
            listing_id=listing_id,
            controller=new_acquisition_controller(location_provider, geocoder, self.notifier),
            synchronizer=self.synchronizer,
            persistence=persistence,
            markers=markers,
            notifier=self.notifier,
        )

    async def confirm(self, state: AcquisitionState, user_id: str) -> dict:
        if state.is_failed:
            raise HTTPException(
                status_code=STATUS_BY_REASON[state.reason],
                detail=FAILURE_MESSAGES[state.reason],
            )

        listing_id = self.session.listing_id
        logger.info("User %s setting pickup location for listing %s", user_id, listing_id)
        try:
            marker = await self.session.confirm()
        except NotPersistedError:
            raise HTTPException(
                status_code=409, detail="Location was not saved: listing not found or not yours"
            )
        except SaveTransportError:
            raise HTTPException(status_code=502, detail="Failed to store pickup location")

        return {
            "listing_id": listing_id,
            "source": state.source.value,
            "address": state.current_address,
            "marker": serialize_marker(marker) if marker else None,
            "view": serialize_view(self.synchronizer.view),
            "descriptors": [
                serialize_descriptor(d) for d in self.synchronizer.marker_descriptors()
            ],
            "notices": [serialize_notice(n) for n in self.notifier.notices],
        }


@router.put("/{listing_id}/pickup-location")
async def set_pickup_location(
    listing_id: str,
    body: PickupLocationRequest,
    x_user_id: str = Header(...),
    location_provider: DeviceLocationProvider = Depends(get_location_provider),
    geocoder: GeocoderPort = Depends(get_geocoder),
    persistence: PickupLocationPersistence = Depends(get_pickup_persistence),
    markers: ListingMarkerRepository = Depends(get_marker_repository),
):
    """Store a pickup point picked on the map (or chosen from a search result).

    Without an address the point is reverse-geocoded on a best-effort basis.
    """
    editing = _Editing(listing_id, location_provider, geocoder, persistence, markers)

    if body.address:
        try:
            point = GeoPoint(latitude=body.latitude, longitude=body.longitude)
        except ValueError as e:
            raise HTTPException(status_code=422, detail=str(e))
        state = editing.session.choose_place(PlaceResult(point=point, address=body.address))
    else:
        state = await editing.session.place_manually(body.latitude, body.longitude)

    return await editing.confirm(state, x_user_id)


@router.post("/{listing_id}/pickup-location/device")
async def set_pickup_location_from_device(
    listing_id: str,
    x_user_id: str = Header(...),
    location_provider: DeviceLocationProvider = Depends(get_location_provider),
    geocoder: GeocoderPort = Depends(get_geocoder),
    persistence: PickupLocationPersistence = Depends(get_pickup_persistence),
    markers: ListingMarkerRepository = Depends(get_marker_repository),
):
    """Use the caller's current location as the pickup point."""
    editing = _Editing(listing_id, location_provider, geocoder, persistence, markers)
    state = await editing.session.use_device_location()
    return await editing.confirm(state, x_user_id)
