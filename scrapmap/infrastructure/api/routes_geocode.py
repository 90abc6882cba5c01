"""Geocoding endpoints — place search and reverse lookup."""

from fastapi import APIRouter, Depends, HTTPException

from scrapmap.application.ports.geocoder_port import GeocoderPort
from scrapmap.domain.errors import GeocodingError
from scrapmap.domain.value_objects.geo_point import GeoPoint
from scrapmap.infrastructure.api.dependencies import get_geocoder
from scrapmap.infrastructure.api.serializers import serialize_point

router = APIRouter(prefix="/geocode", tags=["geocode"])


@router.get("/search")
async def search_place(q: str, geocoder: GeocoderPort = Depends(get_geocoder)):
    if not q.strip():
        raise HTTPException(status_code=422, detail="Query must not be empty")
    try:
        place = await geocoder.place_search(q)
    except GeocodingError as e:
        raise HTTPException(status_code=502, detail=str(e))
    if place is None:
        raise HTTPException(status_code=404, detail="No place found")
    return {"position": serialize_point(place.point), "address": place.address}


@router.get("/reverse")
async def reverse_geocode(lat: float, lng: float, geocoder: GeocoderPort = Depends(get_geocoder)):
    try:
        point = GeoPoint(latitude=lat, longitude=lng)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    try:
        address = await geocoder.reverse_geocode(point)
    except GeocodingError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return {"position": serialize_point(point), "address": address}
