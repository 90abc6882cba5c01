"""Map endpoints — marker sets and viewports for the map SDK."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from scrapmap.adapters.notifier.logging_notifier import LoggingNotifier
from scrapmap.application.use_cases.browse_listings_map import ListingsMapSession
from scrapmap.application.use_cases.load_markers import ListingMarkerRepository
from scrapmap.application.use_cases.sync_map_view import DETAIL_ZOOM
from scrapmap.infrastructure.api.dependencies import (
    get_marker_repository,
    new_map_synchronizer,
)
from scrapmap.infrastructure.api.serializers import (
    serialize_descriptor,
    serialize_marker,
    serialize_notice,
    serialize_view,
)

router = APIRouter(prefix="/map", tags=["map"])


@router.get("/listings")
async def listings_map(
    selected: str | None = None,
    markers: ListingMarkerRepository = Depends(get_marker_repository),
):
    """All mappable listings with a viewport fitted around them."""
    notifier = LoggingNotifier()
    synchronizer = new_map_synchronizer()
    session = ListingsMapSession(markers, synchronizer, notifier)
    loaded = await session.refresh()

    if selected:
        try:
            session.select(selected)
        except KeyError:
            raise HTTPException(status_code=404, detail="Marker not found")

    return {
        "total": len(loaded),
        "markers": [serialize_marker(m) for m in loaded],
        "view": serialize_view(synchronizer.view),
        "descriptors": [serialize_descriptor(d) for d in synchronizer.marker_descriptors()],
        "notices": [serialize_notice(n) for n in notifier.notices],
    }


@router.get("/listings/{listing_id}")
async def listing_map(
    listing_id: str,
    markers: ListingMarkerRepository = Depends(get_marker_repository),
):
    """One listing's pickup point, centered and drawn large."""
    marker = await markers.load_one(listing_id)
    if marker is None:
        raise HTTPException(status_code=404, detail="Listing has no pickup location")

    synchronizer = new_map_synchronizer(focused_listing_id=listing_id)
    synchronizer.set_markers([marker])
    synchronizer.center_on(marker.point, DETAIL_ZOOM)

    return {
        "marker": serialize_marker(marker),
        "view": serialize_view(synchronizer.view),
        "descriptors": [serialize_descriptor(d) for d in synchronizer.marker_descriptors()],
    }
