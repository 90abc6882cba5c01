"""IP-based location provider — implements DeviceLocationProvider.

A server has no GPS, so the "device" position is approximated from the
public IP of the client that made the request. ``high_accuracy`` cannot be
honoured and is ignored.
"""

from __future__ import annotations

import ipaddress
import logging
import time
from collections.abc import Callable

import httpx

from scrapmap.application.ports.location_provider import (
    DeviceLocationProvider,
    PositionOptions,
)
from scrapmap.config import settings
from scrapmap.domain.errors import GeolocationError
from scrapmap.domain.value_objects.enums import GeolocationErrorCode
from scrapmap.domain.value_objects.geo_point import GeoPoint

logger = logging.getLogger(__name__)


class IpGeolocationAdapter(DeviceLocationProvider):
    """Locates one client by IP.

    ``url_template`` must contain an ``{ip}`` placeholder. Loopback and
    private addresses cannot be located and fail as unavailable without a
    request being made.
    """

    def __init__(
        self,
        client_ip: str | None,
        url_template: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._client_ip = client_ip
        self._url_template = url_template or settings.ip_geolocation_url
        self._transport = transport
        self._clock = clock
        self._last_fix: tuple[float, GeoPoint] | None = None

    async def get_current_position(self, options: PositionOptions) -> GeoPoint:
        cached = self._cached_fix(options.max_age_ms)
        if cached is not None:
            return cached

        ip = self._public_ip()
        url = self._url_template.format(ip=ip)
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.get(url, timeout=options.timeout_ms / 1000)
        except httpx.TimeoutException as e:
            raise GeolocationError(GeolocationErrorCode.TIMEOUT, "Location lookup timed out") from e
        except httpx.HTTPError as e:
            logger.exception("IP geolocation request failed for %s", ip)
            raise GeolocationError(GeolocationErrorCode.POSITION_UNAVAILABLE, str(e)) from e

        if response.status_code == 403:
            raise GeolocationError(GeolocationErrorCode.PERMISSION_DENIED, "Location lookup refused")
        if response.is_error:
            raise GeolocationError(
                GeolocationErrorCode.POSITION_UNAVAILABLE,
                f"Location lookup returned HTTP {response.status_code}",
            )

        try:
            data = response.json()
            if data.get("error"):
                raise ValueError(data.get("reason") or "provider error")
            point = GeoPoint(latitude=float(data["latitude"]), longitude=float(data["longitude"]))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise GeolocationError(GeolocationErrorCode.POSITION_UNAVAILABLE, str(e)) from e

        logger.info("IP geolocation resolved %s to (%f, %f)", ip, point.latitude, point.longitude)
        self._last_fix = (self._clock(), point)
        return point

    def _public_ip(self) -> str:
        if not self._client_ip:
            raise GeolocationError(
                GeolocationErrorCode.POSITION_UNAVAILABLE, "Client address is unknown"
            )
        try:
            address = ipaddress.ip_address(self._client_ip)
        except ValueError as e:
            raise GeolocationError(
                GeolocationErrorCode.POSITION_UNAVAILABLE, f"Invalid client address {self._client_ip}"
            ) from e
        if not address.is_global:
            logger.info("Client address %s is not public, cannot locate it", address)
            raise GeolocationError(
                GeolocationErrorCode.POSITION_UNAVAILABLE, f"Client address {address} is not public"
            )
        return str(address)

    def _cached_fix(self, max_age_ms: int) -> GeoPoint | None:
        if max_age_ms <= 0 or self._last_fix is None:
            return None
        taken_at, point = self._last_fix
        if (self._clock() - taken_at) * 1000 <= max_age_ms:
            return point
        return None
