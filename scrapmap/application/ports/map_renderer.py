"""Port interface for the map rendering SDK."""

from abc import ABC, abstractmethod

from scrapmap.domain.value_objects.map_view import MapViewState, MarkerDescriptor


class MapRendererPort(ABC):
    @abstractmethod
    def render(self, view: MapViewState, markers: list[MarkerDescriptor]) -> None:
        ...
