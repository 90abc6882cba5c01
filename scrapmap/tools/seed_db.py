"""Seed the database with demo listings.

The listings deliberately store their geolocation in every shape the column
has held over time (pair, lat/lng object, GeoJSON, WKT, EWKB hex), plus a few
rows without a usable point, so the map exercises the permissive reader.

Usage:
    python -m scrapmap.tools.seed_db
    python -m scrapmap.tools.seed_db --drop  # drop existing data first
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

import shapely
from shapely.geometry import Point
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from scrapmap.adapters.persistence.database import async_session_factory
from scrapmap.adapters.persistence.models import MaterialTypeModel, ScrapListingModel
from scrapmap.domain.codecs import coordinate_codec
from scrapmap.domain.value_objects.geo_point import GeoPoint

logging.basicConfig(level=logging.INFO, format="%(levelname)s | %(message)s")
logger = logging.getLogger(__name__)

DEMO_SELLER_ID = "00000000-0000-0000-0000-000000000001"

MATERIAL_TYPES: list[tuple[str, str]] = [
    ("Copper wire", "Metal"),
    ("Aluminium cans", "Metal"),
    ("PET bottles", "Plastic"),
    ("Cardboard", "Paper"),
    ("Glass bottles", "Glass"),
    ("E-waste", "Electronics"),
    ("Cotton offcuts", "Textile"),
]


def _ewkb_hex(lat: float, lng: float) -> str:
    """Little-endian EWKB point with SRID 4326, as PostGIS returns it."""
    point = shapely.set_srid(Point(lng, lat), coordinate_codec.WGS84_SRID)
    return shapely.to_wkb(point, hex=True, include_srid=True, byte_order=1)


def _demo_listings() -> list[dict]:
    return [
        {
            "title": "Copper wire offcuts",
            "material": "Copper wire",
            "quantity": 40,
            "unit": "kg",
            "listed_price": 18000,
            "address": "Connaught Place, New Delhi",
            "geolocation": coordinate_codec.encode(GeoPoint(latitude=28.6315, longitude=77.2167)),
        },
        {
            "title": "Crushed aluminium cans",
            "material": "Aluminium cans",
            "quantity": 120,
            "unit": "kg",
            "listed_price": 9600,
            "address": "Karol Bagh, New Delhi",
            "geolocation": {"latitude": 28.6519, "longitude": 77.1909},
        },
        {
            "title": "PET bottles, sorted",
            "material": "PET bottles",
            "quantity": 300,
            "unit": "kg",
            "listed_price": 6000,
            "address": "Saket, New Delhi",
            "geolocation": {"lat": 28.5245, "lng": 77.2066},
        },
        {
            "title": "Flattened cardboard",
            "material": "Cardboard",
            "quantity": 500,
            "unit": "kg",
            "listed_price": 4500,
            "address": "Indiranagar, Bengaluru",
            "geolocation": "POINT(77.6408 12.9784)",
        },
        {
            "title": "Clear glass bottles",
            "material": "Glass bottles",
            "quantity": 250,
            "unit": "kg",
            "listed_price": 1500,
            "address": "Koramangala, Bengaluru",
            "geolocation": _ewkb_hex(12.9352, 77.6245),
        },
        {
            "title": "Old laptops and chargers",
            "material": "E-waste",
            "quantity": 35,
            "unit": "pcs",
            "listed_price": 21000,
            "address": "Andheri East, Mumbai",
            "geolocation": "SRID=4326;POINT(72.8697 19.1136)",
        },
        {
            "title": "Cotton offcuts (no location yet)",
            "material": "Cotton offcuts",
            "quantity": 80,
            "unit": "kg",
            "listed_price": 2400,
            "address": None,
            "geolocation": None,
        },
        {
            "title": "Mixed scrap (corrupt location)",
            "material": None,
            "quantity": 10,
            "unit": "kg",
            "listed_price": 500,
            "address": None,
            "geolocation": {"latitude": 95, "longitude": 10},
        },
    ]


async def seed(drop: bool = False) -> dict[str, int]:
    async with async_session_factory() as session:
        if drop:
            logger.info("Dropping existing listings and material types")
            await session.execute(delete(ScrapListingModel))
            await session.execute(delete(MaterialTypeModel))
            await session.flush()

        materials = await _seed_material_types(session)
        count = 0
        for item in _demo_listings():
            material = materials.get(item["material"]) if item["material"] else None
            session.add(
                ScrapListingModel(
                    title=item["title"],
                    material_type_id=material.id if material else None,
                    quantity=item["quantity"],
                    unit=item["unit"],
                    listed_price=item["listed_price"],
                    seller_id=DEMO_SELLER_ID,
                    address=item["address"],
                    geolocation=item["geolocation"],
                )
            )
            count += 1

        await session.commit()
        logger.info("Seeded %d material types and %d listings", len(materials), count)
        return {"material_types": len(materials), "listings": count}


async def _seed_material_types(session: AsyncSession) -> dict[str, MaterialTypeModel]:
    result = await session.execute(select(MaterialTypeModel))
    existing = {m.name: m for m in result.scalars()}
    for name, category in MATERIAL_TYPES:
        if name not in existing:
            m = MaterialTypeModel(name=name, category=category)
            session.add(m)
            existing[name] = m
    await session.flush()
    return existing


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed demo scrap listings")
    parser.add_argument("--drop", action="store_true", help="Delete existing data first")
    args = parser.parse_args()

    try:
        asyncio.run(seed(drop=args.drop))
    except Exception:
        logger.exception("Seeding failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
