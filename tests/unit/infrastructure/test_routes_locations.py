"""Tests for the pickup-location endpoints with in-memory ports."""

import pytest
from fastapi.testclient import TestClient

from scrapmap.application.use_cases.load_markers import ListingMarkerRepository
from scrapmap.application.use_cases.save_pickup_location import PickupLocationPersistence
from scrapmap.domain.value_objects.enums import GeolocationErrorCode
from scrapmap.infrastructure.api import dependencies
from scrapmap.main import create_app
from tests.fakes import FakeGeocoder, FakeListingStore, StaticLocationProvider, make_row

HEADERS = {"X-User-Id": "seller-1"}


@pytest.fixture
def listing_store():
    store = FakeListingStore(owner_id="seller-1")
    store.add(make_row("mine", None), owner="seller-1")
    store.add(make_row("theirs", None), owner="seller-2")
    return store


@pytest.fixture
def app(listing_store):
    app = create_app()
    app.dependency_overrides[dependencies.get_geocoder] = lambda: FakeGeocoder(
        address="Janpath, Connaught Place, New Delhi"
    )
    app.dependency_overrides[dependencies.get_pickup_persistence] = (
        lambda: PickupLocationPersistence(listing_store)
    )
    app.dependency_overrides[dependencies.get_marker_repository] = (
        lambda: ListingMarkerRepository(listing_store)
    )
    return app


def _use_provider(app, provider):
    app.dependency_overrides[dependencies.get_location_provider] = lambda: provider


# ─── Device source ──────────────────────────────────────────────────


def test_device_location_is_saved(app, listing_store, new_delhi):
    _use_provider(app, StaticLocationProvider(new_delhi))

    response = TestClient(app).post("/api/listings/mine/pickup-location/device", headers=HEADERS)

    assert response.status_code == 200
    body = response.json()
    assert body["source"] == "device"
    assert body["marker"]["position"] == {"lat": 28.6139, "lng": 77.209}
    assert [n["title"] for n in body["notices"]] == ["Location Found", "Pickup Location Set"]
    assert listing_store.writes[0][1] == {"type": "Point", "coordinates": [77.209, 28.6139]}


def test_device_permission_denied(app, listing_store):
    _use_provider(app, StaticLocationProvider(error=GeolocationErrorCode.PERMISSION_DENIED))

    response = TestClient(app).post("/api/listings/mine/pickup-location/device", headers=HEADERS)

    assert response.status_code == 403
    assert listing_store.writes == []


def test_device_location_uses_caller_address(app, listing_store):
    # the test client's host is not a public IP, so it cannot be located
    response = TestClient(app).post("/api/listings/mine/pickup-location/device", headers=HEADERS)

    assert response.status_code == 503
    assert listing_store.writes == []


# ─── Manual / search source ─────────────────────────────────────────


def test_manual_point_on_foreign_listing_is_conflict(app, new_delhi):
    _use_provider(app, StaticLocationProvider(new_delhi))

    response = TestClient(app).put(
        "/api/listings/theirs/pickup-location",
        json={"latitude": 28.6139, "longitude": 77.2090},
        headers=HEADERS,
    )

    assert response.status_code == 409


def test_out_of_range_point_is_rejected(app, listing_store, new_delhi):
    _use_provider(app, StaticLocationProvider(new_delhi))

    response = TestClient(app).put(
        "/api/listings/mine/pickup-location",
        json={"latitude": 95, "longitude": 77.2090},
        headers=HEADERS,
    )

    assert response.status_code == 422
    assert listing_store.writes == []


def test_user_header_is_required(app, new_delhi):
    _use_provider(app, StaticLocationProvider(new_delhi))

    response = TestClient(app).put(
        "/api/listings/mine/pickup-location", json={"latitude": 28.6, "longitude": 77.2}
    )

    assert response.status_code == 422
