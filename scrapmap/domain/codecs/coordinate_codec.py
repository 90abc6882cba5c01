"""Coordinate codec — GeoPoint <-> persisted geography values.

The ``geolocation`` column has been written in several shapes over time, so
reads are permissive and detect the shape structurally:

* pair:     ``{"latitude": 28.6, "longitude": 77.2}`` (also ``lat``/``lng``/``lon``)
* GeoJSON:  ``{"type": "Point", "coordinates": [77.2, 28.6]}`` (lng first)
* WKT:      ``"POINT(77.2 28.6)"``, optionally ``"SRID=4326;POINT(...)"``
* WKB:      hex (E)WKB as returned for a PostGIS ``geography`` column

A JSON string holding a pair or GeoJSON object is decoded as that object.
WKT and WKB are parsed with shapely.

Writes always use GeoJSON.
"""

from __future__ import annotations

import json
import math
import re
from typing import Any, TypedDict

import shapely
from shapely import wkb, wkt
from shapely.errors import GEOSException
from shapely.geometry.base import BaseGeometry

from scrapmap.domain.errors import OutOfRangeError, UnrecognizedFormatError
from scrapmap.domain.value_objects.enums import GeoEncoding
from scrapmap.domain.value_objects.geo_point import GeoPoint

WGS84_SRID = 4326
NO_SRID = 0

# GEOS reads plain WKT only, so the EWKT prefix is split off first
_EWKT_POINT = re.compile(
    r"^\s*(?:SRID=(?P<srid>\d+)\s*;\s*)?(?P<body>POINT\b.*?)\s*$",
    re.IGNORECASE | re.DOTALL,
)
_HEX = re.compile(r"^(?:[0-9a-fA-F]{2})+$")

_LAT_KEYS = ("latitude", "lat")
_LNG_KEYS = ("longitude", "lng", "lon")


class GeoJsonPoint(TypedDict):
    type: str
    coordinates: list[float]


def encode(point: GeoPoint) -> GeoJsonPoint:
    """Encode a point for writing. Only GeoJSON is used on write paths."""
    return {"type": "Point", "coordinates": [point.longitude, point.latitude]}


def decode(raw: Any) -> GeoPoint:
    """Decode any supported persisted shape into a GeoPoint.

    Raises:
        UnrecognizedFormatError: ``raw`` matches none of the known shapes.
        OutOfRangeError: the shape matched but the coordinates are invalid.
    """
    encoding = detect_encoding(raw)
    if encoding is None:
        raise UnrecognizedFormatError(f"Unrecognized geography value: {_preview(raw)}")

    if isinstance(raw, GeoPoint):
        return raw
    if isinstance(raw, str) and raw.lstrip().startswith("{"):
        raw = json.loads(raw)

    if encoding == GeoEncoding.PAIR:
        lat, lng = _pair_coordinates(raw)
    elif encoding == GeoEncoding.GEOJSON:
        lng, lat = _geojson_coordinates(raw)
    elif encoding == GeoEncoding.WKT:
        lng, lat = _wkt_coordinates(raw)
    else:
        lng, lat = _wkb_coordinates(raw)

    return _to_point(lat, lng)


def detect_encoding(raw: Any) -> GeoEncoding | None:
    """Report which persisted shape ``raw`` uses, or None if unknown."""
    if isinstance(raw, GeoPoint):
        return GeoEncoding.PAIR
    if isinstance(raw, (bytes, bytearray, memoryview)):
        return GeoEncoding.WKB if _load_wkb(bytes(raw)) is not None else None
    if isinstance(raw, str):
        text = raw.strip()
        if text.startswith("{"):
            try:
                parsed = json.loads(text)
            except json.JSONDecodeError:
                return None
            return detect_encoding(parsed) if isinstance(parsed, dict) else None
        if _EWKT_POINT.match(text):
            return GeoEncoding.WKT
        if _HEX.match(text) and _load_wkb(text) is not None:
            return GeoEncoding.WKB
        return None
    if isinstance(raw, dict):
        if "type" in raw:
            kind = raw.get("type")
            if isinstance(kind, str) and kind.lower() == "point" and "coordinates" in raw:
                return GeoEncoding.GEOJSON
            return None
        if _first_key(raw, _LAT_KEYS) and _first_key(raw, _LNG_KEYS):
            return GeoEncoding.PAIR
    return None


# ─── Shape readers ───────────────────────────────────────────────────


def _pair_coordinates(raw: dict) -> tuple[float, float]:
    lat = raw[_first_key(raw, _LAT_KEYS)]
    lng = raw[_first_key(raw, _LNG_KEYS)]
    if not (_is_number(lat) and _is_number(lng)):
        raise UnrecognizedFormatError(f"Pair value is not numeric: {_preview(raw)}")
    return lat, lng


def _geojson_coordinates(raw: dict) -> tuple[float, float]:
    coords = raw.get("coordinates")
    if (
        not isinstance(coords, (list, tuple))
        or len(coords) < 2
        or not all(_is_number(c) for c in coords[:2])
    ):
        raise UnrecognizedFormatError(f"Malformed GeoJSON coordinates: {_preview(raw)}")
    return coords[0], coords[1]


def _wkt_coordinates(raw: str) -> tuple[float, float]:
    match = _EWKT_POINT.match(raw.strip())
    if match.group("srid") is not None:
        _check_srid(int(match.group("srid")))
    try:
        geom = wkt.loads(match.group("body"))
    except GEOSException as e:
        raise UnrecognizedFormatError(f"Malformed WKT: {_preview(raw)}") from e
    return _point_xy(geom, raw)


def _wkb_coordinates(raw: str | bytes) -> tuple[float, float]:
    geom = _load_wkb(raw.strip() if isinstance(raw, str) else bytes(raw))
    if geom is None:
        raise UnrecognizedFormatError(f"Malformed WKB: {_preview(raw)}")
    _check_srid(shapely.get_srid(geom))
    return _point_xy(geom, raw)


def _load_wkb(data: str | bytes) -> BaseGeometry | None:
    try:
        return wkb.loads(data, hex=isinstance(data, str))
    except (GEOSException, ValueError):
        return None


def _point_xy(geom: BaseGeometry, raw: Any) -> tuple[float, float]:
    if geom.geom_type != "Point":
        raise UnrecognizedFormatError(f"Expected a point, got {geom.geom_type}: {_preview(raw)}")
    if geom.is_empty:
        raise UnrecognizedFormatError(f"Empty point: {_preview(raw)}")
    return geom.x, geom.y


def _check_srid(srid: int) -> None:
    if srid not in (NO_SRID, WGS84_SRID):
        raise UnrecognizedFormatError(f"Unsupported SRID {srid}")


# ─── Helpers ─────────────────────────────────────────────────────────


def _to_point(lat: float, lng: float) -> GeoPoint:
    if not (math.isfinite(lat) and math.isfinite(lng)):
        raise UnrecognizedFormatError(f"Non-finite coordinates ({lat}, {lng})")
    try:
        return GeoPoint(latitude=lat, longitude=lng)
    except ValueError as e:
        raise OutOfRangeError(str(e)) from e


def _first_key(raw: dict, candidates: tuple[str, ...]) -> str | None:
    return next((k for k in candidates if k in raw), None)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _preview(raw: Any, limit: int = 80) -> str:
    text = repr(raw)
    return text if len(text) <= limit else text[: limit - 3] + "..."
