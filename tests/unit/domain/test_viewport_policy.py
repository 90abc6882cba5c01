"""Tests for the viewport fitting policy."""

import pytest

from scrapmap.domain.policies.viewport import MAX_ZOOM, fit_bounds, zoom_for_bounds
from scrapmap.domain.value_objects.geo_point import GeoPoint
from scrapmap.domain.value_objects.map_view import Bounds


def test_single_point_is_capped():
    point = GeoPoint(latitude=28.6139, longitude=77.2090)
    center, zoom = fit_bounds([point], 640, 500, max_zoom=15)
    assert center == point
    assert zoom == 15


def test_coincident_points_are_capped():
    points = [GeoPoint(latitude=28.6139, longitude=77.2090)] * 3
    _, zoom = fit_bounds(points, 640, 500, max_zoom=15)
    assert zoom == 15


def test_one_degree_at_equator():
    # 640px / (256px * 1/360) = 900 → floor(log2(900)) = 9
    bounds = Bounds(south=0, west=0, north=0, east=1)
    assert zoom_for_bounds(bounds, 640, 500) == 9


def test_whole_world_fits_at_zoom_zero():
    bounds = Bounds(south=-85, west=-180, north=85, east=180)
    assert zoom_for_bounds(bounds, 640, 500) == 0


def test_zero_extent_is_max_zoom():
    bounds = Bounds(south=10, west=10, north=10, east=10)
    assert zoom_for_bounds(bounds, 640, 500) == MAX_ZOOM


def test_distant_points_zoom_out_and_center_between():
    delhi = GeoPoint(latitude=28.6139, longitude=77.2090)
    bengaluru = GeoPoint(latitude=12.9716, longitude=77.5946)
    center, zoom = fit_bounds([delhi, bengaluru], 640, 500, max_zoom=15)
    assert zoom < 8
    assert center.latitude == pytest.approx((28.6139 + 12.9716) / 2)
    assert center.longitude == pytest.approx((77.2090 + 77.5946) / 2)


def test_bounds_around_empty_raises():
    with pytest.raises(ValueError):
        Bounds.around([])
