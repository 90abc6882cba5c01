"""ListingMarker entity — one listing rendered on the map."""

from dataclasses import dataclass

from scrapmap.domain.value_objects.geo_point import GeoPoint

DEFAULT_CATEGORY = "Other"


@dataclass(frozen=True)
class ListingMarker:
    listing_id: str
    point: GeoPoint
    title: str
    category: str = DEFAULT_CATEGORY
    price: float | None = None
    quantity: float | None = None
    unit: str | None = None

    def quantity_label(self) -> str | None:
        """Info-panel line such as ``"120 kg"``."""
        if self.quantity is None:
            return None
        quantity = f"{self.quantity:g}"
        return f"{quantity} {self.unit}" if self.unit else quantity
