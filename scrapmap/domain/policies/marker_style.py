"""Marker styling — colour by material category, size by focus."""

CATEGORY_COLORS: dict[str, str] = {
    "metal": "red",
    "plastic": "green",
    "paper": "yellow",
    "glass": "purple",
    "electronics": "orange",
    "textile": "pink",
    "organic": "brown",
}

DEFAULT_COLOR = "blue"
PICKUP_PIN_COLOR = "green"

FOCUSED_SIZE_PX = 40
DEFAULT_SIZE_PX = 30

ICON_URL_TEMPLATE = "https://maps.google.com/mapfiles/ms/icons/{color}-dot.png"


def marker_color(category: str | None) -> str:
    if not category:
        return DEFAULT_COLOR
    return CATEGORY_COLORS.get(category.strip().lower(), DEFAULT_COLOR)


def marker_size(listing_id: str, focused_listing_id: str | None) -> int:
    """The listing currently being viewed is drawn larger than the rest."""
    if focused_listing_id is not None and listing_id == focused_listing_id:
        return FOCUSED_SIZE_PX
    return DEFAULT_SIZE_PX


def icon_url(color: str) -> str:
    return ICON_URL_TEMPLATE.format(color=color)
