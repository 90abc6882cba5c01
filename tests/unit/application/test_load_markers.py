"""Tests for ListingMarkerRepository."""

import pytest

from scrapmap.application.use_cases.load_markers import ListingMarkerRepository, row_to_marker
from scrapmap.domain.value_objects.geo_point import GeoPoint
from tests.fakes import FakeListingStore, make_row


@pytest.mark.asyncio
async def test_load_all_reads_every_encoding():
    store = FakeListingStore(
        [
            make_row("pair", {"latitude": 28.6, "longitude": 77.2}),
            make_row("geojson", {"type": "Point", "coordinates": [77.59, 12.97]}),
            make_row("wkt", "SRID=4326;POINT(72.8777 19.076)"),
        ]
    )

    markers = await ListingMarkerRepository(store).load_all()

    by_id = {m.listing_id: m.point for m in markers}
    assert by_id == {
        "pair": GeoPoint(latitude=28.6, longitude=77.2),
        "geojson": GeoPoint(latitude=12.97, longitude=77.59),
        "wkt": GeoPoint(latitude=19.076, longitude=72.8777),
    }


@pytest.mark.asyncio
async def test_undecodable_rows_are_dropped():
    store = FakeListingStore(
        [
            make_row("good", {"latitude": 28.6, "longitude": 77.2}),
            make_row("missing", None),
            make_row("range", {"type": "Point", "coordinates": [10, 95]}),
            make_row("garbage", "somewhere near the station"),
        ]
    )

    markers = await ListingMarkerRepository(store).load_all()

    assert [m.listing_id for m in markers] == ["good"]


def test_row_to_marker_defaults_category():
    marker = row_to_marker(make_row("a", "POINT(77.2 28.6)", category=None, quantity=120, unit="kg"))

    assert marker.category == "Other"
    assert marker.quantity_label() == "120 kg"


@pytest.mark.asyncio
async def test_load_one(store):
    store.add(make_row("a", {"type": "Point", "coordinates": [77.2, 28.6]}))
    repo = ListingMarkerRepository(store)

    marker = await repo.load_one("a")

    assert marker.point == GeoPoint(latitude=28.6, longitude=77.2)
    assert await repo.load_one("nope") is None
