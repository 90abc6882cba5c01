"""Response shaping for map endpoints."""

from scrapmap.application.ports.notifier_port import Notice
from scrapmap.domain.entities.listing_marker import ListingMarker
from scrapmap.domain.value_objects.geo_point import GeoPoint
from scrapmap.domain.value_objects.map_view import MapViewState, MarkerDescriptor


def serialize_point(p: GeoPoint) -> dict:
    return {"lat": p.latitude, "lng": p.longitude}


def serialize_view(v: MapViewState) -> dict:
    return {
        "center": serialize_point(v.center),
        "zoom": v.zoom,
        "selected_marker_id": v.selected_marker_id,
    }


def serialize_marker(m: ListingMarker) -> dict:
    return {
        "listing_id": m.listing_id,
        "position": serialize_point(m.point),
        "title": m.title,
        "category": m.category,
        "price": m.price,
        "quantity": m.quantity,
        "unit": m.unit,
        "quantity_label": m.quantity_label(),
    }


def serialize_descriptor(d: MarkerDescriptor) -> dict:
    return {
        "id": d.marker_id,
        "position": serialize_point(d.position),
        "title": d.title,
        "icon": {"url": d.icon_url, "size": d.icon_size},
        "draggable": d.draggable,
    }


def serialize_notice(n: Notice) -> dict:
    return {"title": n.title, "description": n.description, "level": n.level.value}
