"""Map view value objects — viewport state and marker descriptors."""

from dataclasses import dataclass

from scrapmap.domain.value_objects.geo_point import GeoPoint


@dataclass(frozen=True)
class MapViewState:
    center: GeoPoint
    zoom: int
    selected_marker_id: str | None = None


@dataclass(frozen=True)
class MarkerDescriptor:
    """What the map rendering SDK needs to draw one marker."""

    marker_id: str
    position: GeoPoint
    title: str
    icon_url: str
    icon_size: int
    draggable: bool = False


@dataclass(frozen=True)
class Bounds:
    south: float
    west: float
    north: float
    east: float

    @classmethod
    def around(cls, points: list[GeoPoint]) -> "Bounds":
        if not points:
            raise ValueError("cannot bound an empty set of points")
        lats = [p.latitude for p in points]
        lngs = [p.longitude for p in points]
        return cls(south=min(lats), west=min(lngs), north=max(lats), east=max(lngs))

    @property
    def center(self) -> GeoPoint:
        return GeoPoint(
            latitude=(self.south + self.north) / 2,
            longitude=(self.west + self.east) / 2,
        )
