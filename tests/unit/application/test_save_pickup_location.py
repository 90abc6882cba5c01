"""Tests for PickupLocationPersistence."""

import pytest

from scrapmap.application.use_cases.save_pickup_location import PickupLocationPersistence
from scrapmap.domain.errors import NotPersistedError, SaveError, SaveTransportError
from tests.fakes import FakeListingStore, make_row


@pytest.mark.asyncio
async def test_save_writes_geojson(store, new_delhi):
    store.add(make_row("a", None))

    await PickupLocationPersistence(store).save("a", new_delhi, "Janpath")

    assert store.writes == [
        ("a", {"type": "Point", "coordinates": [77.2090, 28.6139]}, "Janpath")
    ]


@pytest.mark.asyncio
async def test_zero_rows_is_not_persisted(store, new_delhi):
    with pytest.raises(NotPersistedError) as exc:
        await PickupLocationPersistence(store).save("missing", new_delhi)

    assert exc.value.listing_id == "missing"


@pytest.mark.asyncio
async def test_foreign_listing_is_not_persisted(new_delhi):
    store = FakeListingStore(owner_id="seller-2")
    store.add(make_row("a", None), owner="seller-1")

    with pytest.raises(NotPersistedError):
        await PickupLocationPersistence(store).save("a", new_delhi)
    assert store.writes == []


@pytest.mark.asyncio
async def test_backend_failure_is_transport_error(store, new_delhi):
    store.add(make_row("a", None))
    store.fail = True

    with pytest.raises(SaveTransportError) as exc:
        await PickupLocationPersistence(store).save("a", new_delhi)

    assert not isinstance(exc.value, NotPersistedError)
    assert isinstance(exc.value, SaveError)
