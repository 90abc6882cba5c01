"""Tests for the geocoder adapters against a mocked HTTP transport."""

import httpx
import pytest

from scrapmap.adapters.geocoder.google_maps_adapter import GoogleMapsAdapter
from scrapmap.adapters.geocoder.nominatim_adapter import NominatimAdapter
from scrapmap.domain.errors import GeocodingError
from scrapmap.domain.value_objects.geo_point import GeoPoint


def _transport(payload, status=200, calls=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        return httpx.Response(status, json=payload)

    return httpx.MockTransport(handler)


# ─── Nominatim ──────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_nominatim_search_first_hit():
    calls = []
    adapter = NominatimAdapter(
        user_agent="scrapmap-tests",
        country_codes="in",
        transport=_transport(
            [{"lat": "12.9716", "lon": "77.5946", "display_name": "Bengaluru, Karnataka"}],
            calls=calls,
        ),
    )

    place = await adapter.place_search("Bengaluru")

    assert place.point == GeoPoint(latitude=12.9716, longitude=77.5946)
    assert place.address == "Bengaluru, Karnataka"
    assert calls[0].url.params["countrycodes"] == "in"
    assert calls[0].headers["User-Agent"] == "scrapmap-tests"


@pytest.mark.asyncio
async def test_nominatim_search_is_cached():
    calls = []
    adapter = NominatimAdapter(transport=_transport([], calls=calls))

    assert await adapter.place_search("Atlantis") is None
    assert await adapter.place_search("  atlantis ") is None
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_nominatim_reverse(new_delhi):
    adapter = NominatimAdapter(
        transport=_transport({"display_name": "Janpath, Connaught Place, New Delhi"})
    )

    assert await adapter.reverse_geocode(new_delhi) == "Janpath, Connaught Place, New Delhi"


@pytest.mark.asyncio
async def test_nominatim_reverse_without_address(new_delhi):
    adapter = NominatimAdapter(transport=_transport({"error": "Unable to geocode"}))

    assert await adapter.reverse_geocode(new_delhi) is None


@pytest.mark.asyncio
async def test_nominatim_http_error_raises():
    adapter = NominatimAdapter(transport=_transport({}, status=503))

    with pytest.raises(GeocodingError):
        await adapter.place_search("Delhi")


@pytest.mark.asyncio
async def test_nominatim_malformed_hit_raises():
    adapter = NominatimAdapter(transport=_transport([{"lat": "north", "lon": "77.2"}]))

    with pytest.raises(GeocodingError):
        await adapter.place_search("Delhi")


@pytest.mark.asyncio
async def test_nominatim_error_object_raises_geocoding_error():
    adapter = NominatimAdapter(transport=_transport({"error": "rate limited"}))

    with pytest.raises(GeocodingError):
        await adapter.place_search("Delhi")


# ─── Google Maps ────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_google_search():
    calls = []
    payload = {
        "status": "OK",
        "results": [
            {
                "formatted_address": "Connaught Place, New Delhi, Delhi 110001, India",
                "geometry": {"location": {"lat": 28.6315, "lng": 77.2167}},
            }
        ],
    }
    adapter = GoogleMapsAdapter(api_key="test-key", region="in", transport=_transport(payload, calls=calls))

    place = await adapter.place_search("Connaught Place")

    assert place.point == GeoPoint(latitude=28.6315, longitude=77.2167)
    assert calls[0].url.params["region"] == "in"
    assert calls[0].url.params["key"] == "test-key"


@pytest.mark.asyncio
async def test_google_zero_results_is_none(new_delhi):
    adapter = GoogleMapsAdapter(
        api_key="test-key", transport=_transport({"status": "ZERO_RESULTS", "results": []})
    )

    assert await adapter.place_search("Atlantis") is None
    assert await adapter.reverse_geocode(new_delhi) is None


@pytest.mark.asyncio
async def test_google_denied_raises():
    adapter = GoogleMapsAdapter(
        api_key="bad-key",
        transport=_transport({"status": "REQUEST_DENIED", "error_message": "invalid key"}),
    )

    with pytest.raises(GeocodingError):
        await adapter.place_search("Delhi")


@pytest.mark.asyncio
async def test_google_reverse_uses_latlng(new_delhi):
    calls = []
    payload = {"status": "OK", "results": [{"formatted_address": "Janpath, New Delhi"}]}
    adapter = GoogleMapsAdapter(api_key="test-key", transport=_transport(payload, calls=calls))

    assert await adapter.reverse_geocode(new_delhi) == "Janpath, New Delhi"
    assert calls[0].url.params["latlng"] == "28.6139,77.209"


@pytest.mark.asyncio
async def test_google_non_object_payload_raises():
    adapter = GoogleMapsAdapter(api_key="test-key", transport=_transport(["unexpected"]))

    with pytest.raises(GeocodingError):
        await adapter.place_search("Delhi")
