"""MapViewSynchronizer — the single owner of the map's view state.

Everything that wants to move the map (acquisition results, marker clicks,
marker refreshes) goes through this class. The rendering SDK only ever sees
the state pushed to it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import replace

from scrapmap.application.ports.map_renderer import MapRendererPort
from scrapmap.domain.entities.listing_marker import ListingMarker
from scrapmap.domain.policies import marker_style
from scrapmap.domain.policies.viewport import (
    DEFAULT_MAX_FIT_ZOOM,
    MAX_ZOOM,
    MIN_ZOOM,
    fit_bounds,
)
from scrapmap.domain.value_objects.enums import AcquisitionSource
from scrapmap.domain.value_objects.geo_point import GeoPoint
from scrapmap.domain.value_objects.map_view import MapViewState, MarkerDescriptor

logger = logging.getLogger(__name__)

DEFAULT_CENTER = GeoPoint(latitude=20.5937, longitude=78.9629)
DEFAULT_ZOOM = 14
DETAIL_ZOOM = 14
DEFAULT_SELECTION_ZOOM = 15
DEFAULT_WIDTH_PX = 640
DEFAULT_HEIGHT_PX = 500

# None keeps the current zoom: a clicked point is already in view
ACQUISITION_ZOOM: dict[AcquisitionSource, int | None] = {
    AcquisitionSource.DEVICE: 14,
    AcquisitionSource.SEARCH: 15,
    AcquisitionSource.MANUAL: None,
}

PICKUP_PIN_ID = "pickup-location"


class MapViewSynchronizer:
    def __init__(
        self,
        initial_view: MapViewState | None = None,
        width_px: int = DEFAULT_WIDTH_PX,
        height_px: int = DEFAULT_HEIGHT_PX,
        max_fit_zoom: int = DEFAULT_MAX_FIT_ZOOM,
        selection_zoom: int = DEFAULT_SELECTION_ZOOM,
        focused_listing_id: str | None = None,
    ):
        self._view = initial_view or MapViewState(center=DEFAULT_CENTER, zoom=DEFAULT_ZOOM)
        self._width_px = width_px
        self._height_px = height_px
        self._max_fit_zoom = max_fit_zoom
        self._selection_zoom = selection_zoom
        self._focused_listing_id = focused_listing_id
        self._markers: tuple[ListingMarker, ...] = ()
        self._by_id: dict[str, ListingMarker] = {}
        self._pickup_point: GeoPoint | None = None
        self._renderer: MapRendererPort | None = None

    # ─── Read side ───────────────────────────────────────────────────

    @property
    def view(self) -> MapViewState:
        return self._view

    @property
    def markers(self) -> tuple[ListingMarker, ...]:
        return self._markers

    @property
    def pickup_point(self) -> GeoPoint | None:
        return self._pickup_point

    @property
    def is_map_ready(self) -> bool:
        return self._renderer is not None

    @property
    def selected_marker(self) -> ListingMarker | None:
        marker_id = self._view.selected_marker_id
        return self._by_id.get(marker_id) if marker_id else None

    def marker_descriptors(self) -> list[MarkerDescriptor]:
        descriptors = [
            MarkerDescriptor(
                marker_id=m.listing_id,
                position=m.point,
                title=m.title,
                icon_url=marker_style.icon_url(marker_style.marker_color(m.category)),
                icon_size=marker_style.marker_size(m.listing_id, self._focused_listing_id),
            )
            for m in self._markers
        ]
        if self._pickup_point is not None:
            descriptors.append(
                MarkerDescriptor(
                    marker_id=PICKUP_PIN_ID,
                    position=self._pickup_point,
                    title="Pickup location",
                    icon_url=marker_style.icon_url(marker_style.PICKUP_PIN_COLOR),
                    icon_size=marker_style.FOCUSED_SIZE_PX,
                    draggable=True,
                )
            )
        return descriptors

    # ─── Map readiness ───────────────────────────────────────────────

    def attach_map(self, renderer: MapRendererPort) -> None:
        """Called once the map SDK has loaded; pushes the current state."""
        self._renderer = renderer
        logger.debug("Map ready, pushing initial view")
        self._publish()

    def detach_map(self) -> None:
        self._renderer = None

    # ─── Viewport ────────────────────────────────────────────────────

    def center_on(self, point: GeoPoint, zoom: int) -> MapViewState:
        zoom = max(MIN_ZOOM, min(int(zoom), MAX_ZOOM))
        return self._update(replace(self._view, center=point, zoom=zoom))

    def fit_to_markers(self, markers: Iterable[ListingMarker]) -> MapViewState:
        """Fit the viewport to every marker, capped at ``max_fit_zoom``.

        An empty set leaves the viewport where it is.
        """
        points = [m.point for m in markers]
        if not points:
            logger.debug("No markers to fit, viewport unchanged")
            return self._view
        center, zoom = fit_bounds(
            points, self._width_px, self._height_px, max_zoom=self._max_fit_zoom
        )
        return self._update(replace(self._view, center=center, zoom=zoom))

    # ─── Markers & selection ─────────────────────────────────────────

    def set_markers(self, markers: Iterable[ListingMarker]) -> None:
        """Replace the marker set. A selection that no longer exists is cleared."""
        self._markers = tuple(markers)
        self._by_id = {m.listing_id: m for m in self._markers}
        view = self._view
        if view.selected_marker_id and view.selected_marker_id not in self._by_id:
            view = replace(view, selected_marker_id=None)
        self._update(view, force=True)

    def select_marker(self, marker_id: str) -> ListingMarker:
        marker = self._by_id.get(marker_id)
        if marker is None:
            raise KeyError(f"Unknown marker: {marker_id}")
        self._update(
            MapViewState(center=marker.point, zoom=self._selection_zoom, selected_marker_id=marker_id)
        )
        return marker

    def deselect(self) -> MapViewState:
        return self._update(replace(self._view, selected_marker_id=None))

    # ─── Pickup pin ──────────────────────────────────────────────────

    def show_pickup_point(self, point: GeoPoint, source: AcquisitionSource) -> MapViewState:
        self._pickup_point = point
        zoom = ACQUISITION_ZOOM.get(source)
        if zoom is None:
            zoom = self._view.zoom
        return self._update(replace(self._view, center=point, zoom=zoom), force=True)

    def clear_pickup_point(self) -> None:
        self._pickup_point = None
        self._publish()

    # ─── Internals ───────────────────────────────────────────────────

    def _update(self, view: MapViewState, force: bool = False) -> MapViewState:
        if view != self._view or force:
            self._view = view
            self._publish()
        return self._view

    def _publish(self) -> None:
        if self._renderer is not None:
            self._renderer.render(self._view, self.marker_descriptors())
