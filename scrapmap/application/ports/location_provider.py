"""Port interface for the device location provider."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from scrapmap.domain.value_objects.geo_point import GeoPoint


@dataclass(frozen=True)
class PositionOptions:
    high_accuracy: bool = True
    timeout_ms: int = 15_000
    max_age_ms: int = 0


class DeviceLocationProvider(ABC):
    @abstractmethod
    async def get_current_position(self, options: PositionOptions) -> GeoPoint:
        """Return the current position.

        The provider enforces ``options.timeout_ms`` itself. Failures raise
        GeolocationError carrying a GeolocationErrorCode.
        """
        ...
