"""Pytest configuration and shared fixtures."""

import pytest

from scrapmap.domain.value_objects.geo_point import GeoPoint
from tests.fakes import FakeGeocoder, FakeListingStore, RecordingNotifier


@pytest.fixture
def new_delhi():
    return GeoPoint(latitude=28.6139, longitude=77.2090)


@pytest.fixture
def bengaluru():
    return GeoPoint(latitude=12.9716, longitude=77.5946)


@pytest.fixture
def geocoder():
    return FakeGeocoder(address="Janpath, Connaught Place, New Delhi")


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def store():
    return FakeListingStore()
