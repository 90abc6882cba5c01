"""Tests for GeoPoint value object."""

import math

import pytest

from scrapmap.domain.value_objects.geo_point import GeoPoint


def test_geo_point_is_frozen():
    """GeoPoint should be immutable."""
    p = GeoPoint(latitude=28.6, longitude=77.2)
    with pytest.raises(AttributeError):
        p.latitude = 50.0


def test_accepts_boundary_values():
    p = GeoPoint(latitude=-90, longitude=180)
    assert p.latitude == -90.0
    assert isinstance(p.latitude, float)


@pytest.mark.parametrize(
    "lat,lng",
    [(90.0001, 0), (-91, 0), (0, 180.5), (0, -181), (math.nan, 0), (0, math.inf)],
)
def test_rejects_out_of_range(lat, lng):
    with pytest.raises(ValueError):
        GeoPoint(latitude=lat, longitude=lng)


def test_rejects_non_numbers():
    with pytest.raises(ValueError):
        GeoPoint(latitude="28.6", longitude=77.2)
    with pytest.raises(ValueError):
        GeoPoint(latitude=True, longitude=77.2)


def test_int_and_float_points_are_equal():
    assert GeoPoint(latitude=10, longitude=20) == GeoPoint(latitude=10.0, longitude=20.0)


def test_is_close_tolerance():
    a = GeoPoint(latitude=28.6139, longitude=77.2090)
    assert a.is_close(GeoPoint(latitude=28.6139 + 5e-10, longitude=77.2090))
    assert not a.is_close(GeoPoint(latitude=28.6140, longitude=77.2090))
