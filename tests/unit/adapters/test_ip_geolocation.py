"""Tests for IpGeolocationAdapter."""

import httpx
import pytest

from scrapmap.adapters.geolocation.ip_geolocation_adapter import IpGeolocationAdapter
from scrapmap.application.ports.location_provider import PositionOptions
from scrapmap.domain.errors import GeolocationError
from scrapmap.domain.value_objects.enums import GeolocationErrorCode
from scrapmap.domain.value_objects.geo_point import GeoPoint

URL_TEMPLATE = "https://ip.example.test/{ip}/json/"
CLIENT_IP = "49.36.128.1"


def _adapter(handler, client_ip=CLIENT_IP, clock=None):
    kwargs = {"clock": clock} if clock else {}
    return IpGeolocationAdapter(
        client_ip=client_ip,
        url_template=URL_TEMPLATE,
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


@pytest.mark.asyncio
async def test_locates_the_calling_client():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={"latitude": 28.6139, "longitude": 77.209})

    point = await _adapter(handler).get_current_position(PositionOptions())

    assert point == GeoPoint(latitude=28.6139, longitude=77.209)
    assert str(calls[0].url) == f"https://ip.example.test/{CLIENT_IP}/json/"


@pytest.mark.asyncio
@pytest.mark.parametrize("client_ip", [None, "127.0.0.1", "192.168.1.20", "::1", "not-an-ip"])
async def test_unlocatable_client_fails_without_request(client_ip):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={"latitude": 1.0, "longitude": 1.0})

    with pytest.raises(GeolocationError) as exc:
        await _adapter(handler, client_ip=client_ip).get_current_position(PositionOptions())

    assert exc.value.code == GeolocationErrorCode.POSITION_UNAVAILABLE
    assert calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response,code",
    [
        (httpx.Response(403), GeolocationErrorCode.PERMISSION_DENIED),
        (httpx.Response(500), GeolocationErrorCode.POSITION_UNAVAILABLE),
        (httpx.Response(200, json={"error": True, "reason": "RateLimited"}),
         GeolocationErrorCode.POSITION_UNAVAILABLE),
        (httpx.Response(200, json={"city": "Delhi"}), GeolocationErrorCode.POSITION_UNAVAILABLE),
    ],
)
async def test_error_codes(response, code):
    adapter = _adapter(lambda r: response)

    with pytest.raises(GeolocationError) as exc:
        await adapter.get_current_position(PositionOptions())

    assert exc.value.code == code


@pytest.mark.asyncio
async def test_timeout_maps_to_timeout_code():
    def handler(request):
        raise httpx.ReadTimeout("too slow", request=request)

    with pytest.raises(GeolocationError) as exc:
        await _adapter(handler).get_current_position(PositionOptions(timeout_ms=100))

    assert exc.value.code == GeolocationErrorCode.TIMEOUT


@pytest.mark.asyncio
async def test_max_age_reuses_recent_fix():
    calls = []
    now = [100.0]

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={"latitude": 12.9716, "longitude": 77.5946})

    adapter = _adapter(handler, clock=lambda: now[0])

    await adapter.get_current_position(PositionOptions())
    await adapter.get_current_position(PositionOptions(max_age_ms=5000))
    assert len(calls) == 1

    now[0] += 10
    await adapter.get_current_position(PositionOptions(max_age_ms=5000))
    assert len(calls) == 2

    # max_age 0 always asks again
    await adapter.get_current_position(PositionOptions(max_age_ms=0))
    assert len(calls) == 3
