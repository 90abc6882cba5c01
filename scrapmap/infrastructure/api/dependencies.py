"""FastAPI dependency injection — wires adapters into use cases."""

from __future__ import annotations

import logging

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from scrapmap.adapters.geocoder.google_maps_adapter import GoogleMapsAdapter
from scrapmap.adapters.geocoder.nominatim_adapter import NominatimAdapter
from scrapmap.adapters.geolocation.ip_geolocation_adapter import IpGeolocationAdapter
from scrapmap.adapters.persistence.database import get_session
from scrapmap.adapters.persistence.repositories import SqlListingStore
from scrapmap.application.ports.geocoder_port import GeocoderPort
from scrapmap.application.ports.location_provider import DeviceLocationProvider
from scrapmap.application.ports.notifier_port import NotifierPort
from scrapmap.application.use_cases.acquire_location import LocationAcquisitionController
from scrapmap.application.use_cases.load_markers import ListingMarkerRepository
from scrapmap.application.use_cases.save_pickup_location import PickupLocationPersistence
from scrapmap.application.use_cases.sync_map_view import MapViewSynchronizer
from scrapmap.config import settings
from scrapmap.domain.value_objects.geo_point import GeoPoint
from scrapmap.domain.value_objects.map_view import MapViewState

logger = logging.getLogger(__name__)

# Singleton adapters (stateless or with internal caching)
if settings.google_maps_api_key:
    _geocoder_adapter: GeocoderPort = GoogleMapsAdapter()
    logger.info("Using Google Maps for geocoding")
else:
    _geocoder_adapter = NominatimAdapter()


def get_geocoder() -> GeocoderPort:
    return _geocoder_adapter


def get_listing_store(
    session: AsyncSession = Depends(get_session),
    x_user_id: str | None = Header(default=None),
) -> SqlListingStore:
    return SqlListingStore(session, owner_id=x_user_id)


def get_marker_repository(
    store: SqlListingStore = Depends(get_listing_store),
) -> ListingMarkerRepository:
    return ListingMarkerRepository(store)


def get_pickup_persistence(
    store: SqlListingStore = Depends(get_listing_store),
) -> PickupLocationPersistence:
    return PickupLocationPersistence(store)


def new_map_synchronizer(focused_listing_id: str | None = None) -> MapViewSynchronizer:
    return MapViewSynchronizer(
        initial_view=MapViewState(
            center=GeoPoint(
                latitude=settings.default_center_lat, longitude=settings.default_center_lng
            ),
            zoom=settings.default_zoom,
        ),
        width_px=settings.map_width_px,
        height_px=settings.map_height_px,
        max_fit_zoom=settings.max_fit_zoom,
        selection_zoom=settings.selection_zoom,
        focused_listing_id=focused_listing_id,
    )


def get_location_provider(request: Request) -> DeviceLocationProvider:
    """Per request: the position is looked up from the caller's address."""
    return IpGeolocationAdapter(client_ip=request.client.host if request.client else None)


def new_acquisition_controller(
    location_provider: DeviceLocationProvider,
    geocoder: GeocoderPort,
    notifier: NotifierPort | None = None,
) -> LocationAcquisitionController:
    return LocationAcquisitionController(
        location_provider=location_provider,
        geocoder=geocoder,
        notifier=notifier,
        soft_timeout_s=settings.geolocation_soft_timeout_s,
        hard_timeout_s=settings.geolocation_hard_timeout_s,
    )
