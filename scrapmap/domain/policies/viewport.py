"""Viewport policy: fit a set of points into a fixed-size map.

Zoom follows the Web Mercator tiling used by Google Maps and Leaflet:
the world is ``256 * 2**zoom`` pixels wide at a given zoom level.
"""

from __future__ import annotations

import math

from scrapmap.domain.value_objects.geo_point import GeoPoint
from scrapmap.domain.value_objects.map_view import Bounds

WORLD_TILE_PX = 256
MIN_ZOOM = 0
MAX_ZOOM = 21
DEFAULT_MAX_FIT_ZOOM = 15


def fit_bounds(
    points: list[GeoPoint],
    width_px: int,
    height_px: int,
    max_zoom: int = DEFAULT_MAX_FIT_ZOOM,
    padding_px: int = 0,
) -> tuple[GeoPoint, int]:
    """Return (center, zoom) showing every point, never zooming past ``max_zoom``.

    A single point, or points sharing one location, has no extent and would
    otherwise zoom in without limit, hence the cap.
    """
    bounds = Bounds.around(points)
    zoom = zoom_for_bounds(
        bounds,
        max(width_px - 2 * padding_px, 1),
        max(height_px - 2 * padding_px, 1),
    )
    return bounds.center, min(zoom, max_zoom)


def zoom_for_bounds(bounds: Bounds, width_px: int, height_px: int) -> int:
    """Largest integer zoom at which ``bounds`` fits in the given pixel box."""
    lat_fraction = (_mercator_y(bounds.north) - _mercator_y(bounds.south)) / math.pi
    lng_span = bounds.east - bounds.west
    lng_fraction = (lng_span + 360 if lng_span < 0 else lng_span) / 360

    lat_zoom = _zoom_for_fraction(height_px, lat_fraction)
    lng_zoom = _zoom_for_fraction(width_px, lng_fraction)
    return max(MIN_ZOOM, min(lat_zoom, lng_zoom, MAX_ZOOM))


def _mercator_y(latitude: float) -> float:
    sin = math.sin(math.radians(latitude))
    rad_x2 = math.log((1 + sin) / (1 - sin)) / 2 if abs(sin) < 1 else math.copysign(math.pi * 2, sin)
    return max(min(rad_x2, math.pi), -math.pi) / 2


def _zoom_for_fraction(map_px: int, fraction: float) -> int:
    if fraction <= 0:
        return MAX_ZOOM
    return math.floor(math.log(map_px / WORLD_TILE_PX / fraction) / math.log(2))
