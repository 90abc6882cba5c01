"""GeoPoint value object — immutable (lat, lon) pair."""

import math
from dataclasses import dataclass

MAX_LATITUDE = 90.0
MAX_LONGITUDE = 180.0


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        for name in ("latitude", "longitude"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{name} must be a number, got {value!r}")
            if not math.isfinite(value):
                raise ValueError(f"{name} must be finite, got {value!r}")
        if abs(self.latitude) > MAX_LATITUDE:
            raise ValueError(f"latitude {self.latitude} outside [-90, 90]")
        if abs(self.longitude) > MAX_LONGITUDE:
            raise ValueError(f"longitude {self.longitude} outside [-180, 180]")
        # Normalise ints so equality and hashing behave like floats
        object.__setattr__(self, "latitude", float(self.latitude))
        object.__setattr__(self, "longitude", float(self.longitude))

    def is_close(self, other: "GeoPoint", tolerance: float = 1e-9) -> bool:
        """Compare two points component-wise within an absolute tolerance."""
        return (
            abs(self.latitude - other.latitude) <= tolerance
            and abs(self.longitude - other.longitude) <= tolerance
        )
