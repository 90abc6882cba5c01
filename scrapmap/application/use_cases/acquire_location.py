"""LocationAcquisitionController — produce a pickup point from one source.

State machine over AcquisitionState::

    Idle ──start──▶ Acquiring(source) ──▶ Resolved(point, address?)
                                     └──▶ Failed(reason)
    any ──cancel──▶ Idle

Only the most recently started acquisition may change the state. Each start
bumps a generation counter; results carrying an older generation are dropped
on arrival. Network work (place search, reverse geocoding) runs in a task
that is cancelled when superseded. The device request cannot be aborted, so
its late result is simply ignored.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from scrapmap.application.ports.geocoder_port import GeocoderPort, PlaceResult
from scrapmap.application.ports.location_provider import (
    DeviceLocationProvider,
    PositionOptions,
)
from scrapmap.application.ports.notifier_port import Notice, NotifierPort
from scrapmap.domain.errors import GeocodingError, GeolocationError
from scrapmap.domain.value_objects.acquisition_state import AcquisitionState
from scrapmap.domain.value_objects.enums import (
    AcquisitionSource,
    FailureReason,
    GeolocationErrorCode,
    NoticeLevel,
)
from scrapmap.domain.value_objects.geo_point import GeoPoint

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_SOFT_TIMEOUT_S = 10.0
DEFAULT_HARD_TIMEOUT_S = 15.0

REASON_BY_CODE: dict[GeolocationErrorCode, FailureReason] = {
    GeolocationErrorCode.PERMISSION_DENIED: FailureReason.PERMISSION_DENIED,
    GeolocationErrorCode.POSITION_UNAVAILABLE: FailureReason.UNAVAILABLE,
    GeolocationErrorCode.TIMEOUT: FailureReason.TIMEOUT,
}


class LocationAcquisitionController:
    """Owns the AcquisitionState of one editing session."""

    def __init__(
        self,
        location_provider: DeviceLocationProvider,
        geocoder: GeocoderPort,
        notifier: NotifierPort | None = None,
        soft_timeout_s: float = DEFAULT_SOFT_TIMEOUT_S,
        hard_timeout_s: float = DEFAULT_HARD_TIMEOUT_S,
    ):
        self._provider = location_provider
        self._geocoder = geocoder
        self._notifier = notifier
        self._soft_timeout_s = soft_timeout_s
        self._hard_timeout_s = hard_timeout_s
        self._state = AcquisitionState.idle()
        self._generation = 0
        self._network_task: asyncio.Future | None = None
        self._listeners: list[Callable[[AcquisitionState], None]] = []

    @property
    def state(self) -> AcquisitionState:
        return self._state

    def add_listener(self, listener: Callable[[AcquisitionState], None]) -> None:
        self._listeners.append(listener)

    # ─── Sources ─────────────────────────────────────────────────────

    async def use_device_location(self) -> AcquisitionState:
        gen = self._begin(AcquisitionSource.DEVICE)
        options = PositionOptions(
            high_accuracy=True,
            timeout_ms=int(self._hard_timeout_s * 1000),
            max_age_ms=0,
        )
        request = asyncio.ensure_future(self._provider.get_current_position(options))

        try:
            point = await self._await_device(request, gen)
        except GeolocationError as e:
            if self._is_current(gen):
                reason = REASON_BY_CODE.get(e.code, FailureReason.UNAVAILABLE)
                logger.warning("Device location failed: %s → %s", e, reason.value)
                self._fail(reason)
            return self._state
        except Exception:
            logger.exception("Device location provider failed unexpectedly")
            if self._is_current(gen):
                self._fail(FailureReason.UNAVAILABLE)
            return self._state

        if not self._is_current(gen):
            logger.info("Discarding superseded device location (%f, %f)", point.latitude, point.longitude)
            return self._state

        self._resolve(point, AcquisitionSource.DEVICE)
        await self._fill_address(gen, point, AcquisitionSource.DEVICE)
        return self._state

    async def search(self, query: str) -> AcquisitionState:
        """Run a place search and resolve to its first hit."""
        gen = self._begin(AcquisitionSource.SEARCH)
        query = (query or "").strip()
        if not query:
            self._fail(FailureReason.INVALID_INPUT)
            return self._state

        try:
            place = await self._run_network(self._geocoder.place_search(query))
        except GeocodingError:
            if self._is_current(gen):
                self._fail(FailureReason.UNAVAILABLE)
            return self._state
        except asyncio.CancelledError:
            if self._is_current(gen):
                raise
            return self._state
        except Exception:
            logger.exception("Place search for '%s' failed unexpectedly", query)
            if self._is_current(gen):
                self._fail(FailureReason.UNAVAILABLE)
            return self._state

        if not self._is_current(gen):
            return self._state
        if place is None:
            logger.info("Place search found nothing for '%s'", query)
            self._fail(FailureReason.INVALID_INPUT)
        else:
            self._resolve(place.point, AcquisitionSource.SEARCH, place.address)
        return self._state

    def choose_place(self, place: PlaceResult) -> AcquisitionState:
        """Resolve from a search result the caller already holds."""
        self._begin(AcquisitionSource.SEARCH)
        self._resolve(place.point, AcquisitionSource.SEARCH, place.address)
        return self._state

    async def place_manually(self, latitude: float, longitude: float) -> AcquisitionState:
        """Map click or pin drag."""
        gen = self._begin(AcquisitionSource.MANUAL)
        try:
            point = GeoPoint(latitude=latitude, longitude=longitude)
        except ValueError as e:
            logger.warning("Rejected manual location: %s", e)
            self._fail(FailureReason.INVALID_INPUT)
            return self._state

        self._resolve(point, AcquisitionSource.MANUAL)
        await self._fill_address(gen, point, AcquisitionSource.MANUAL)
        return self._state

    def cancel(self) -> AcquisitionState:
        self._generation += 1
        self._abort_network()
        self._set(AcquisitionState.idle())
        return self._state

    # ─── Internals ───────────────────────────────────────────────────

    def _begin(self, source: AcquisitionSource) -> int:
        self._generation += 1
        self._abort_network()
        self._set(AcquisitionState.acquiring(source, previous=self._state.last_resolved))
        return self._generation

    def _is_current(self, gen: int) -> bool:
        return gen == self._generation

    async def _await_device(self, request: asyncio.Future, gen: int) -> GeoPoint:
        done, _ = await asyncio.wait({request}, timeout=self._soft_timeout_s)
        if not done and self._is_current(gen):
            logger.warning("Device location still pending after %.1fs", self._soft_timeout_s)
            self._notify(
                "Location Timeout",
                "Still trying to get your location. You can also search or click on the map.",
                NoticeLevel.WARNING,
            )
        return await request

    async def _run_network(self, awaitable: Awaitable[T]) -> T:
        task = asyncio.ensure_future(awaitable)
        self._network_task = task
        try:
            return await task
        finally:
            if self._network_task is task:
                self._network_task = None

    def _abort_network(self) -> None:
        if self._network_task is not None and not self._network_task.done():
            self._network_task.cancel()
        self._network_task = None

    async def _fill_address(self, gen: int, point: GeoPoint, source: AcquisitionSource) -> None:
        """Best-effort reverse geocoding; failure leaves the point resolved."""
        try:
            address = await self._run_network(self._geocoder.reverse_geocode(point))
        except GeocodingError:
            logger.warning("Reverse geocoding failed for (%f, %f)", point.latitude, point.longitude)
            return
        except asyncio.CancelledError:
            if self._is_current(gen):
                raise
            return
        except Exception:
            logger.exception("Reverse geocoding crashed for (%f, %f)", point.latitude, point.longitude)
            return

        if address and self._is_current(gen):
            self._set(AcquisitionState.resolved(point, source, address))

    def _resolve(self, point: GeoPoint, source: AcquisitionSource, address: str | None = None) -> None:
        logger.info("Location resolved via %s: (%f, %f)", source.value, point.latitude, point.longitude)
        self._set(AcquisitionState.resolved(point, source, address))

    def _fail(self, reason: FailureReason) -> None:
        self._set(AcquisitionState.failed(reason, previous=self._state.last_resolved))

    def _set(self, state: AcquisitionState) -> None:
        self._state = state
        for listener in self._listeners:
            listener(state)

    def _notify(self, title: str, description: str, level: NoticeLevel) -> None:
        if self._notifier is not None:
            self._notifier.notify(Notice(title=title, description=description, level=level))
