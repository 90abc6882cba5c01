"""SQLAlchemy ORM models — maps to PostgreSQL tables."""

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Float, ForeignKey, Index, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from scrapmap.adapters.persistence.database import Base


def _uuid() -> str:
    return str(uuid.uuid4())


class MaterialTypeModel(Base):
    __tablename__ = "material_types"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False)

    listings: Mapped[list["ScrapListingModel"]] = relationship(back_populates="material_type")


class ScrapListingModel(Base):
    __tablename__ = "scrap_listings"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    material_type_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("material_types.id"), nullable=True
    )
    quantity: Mapped[float | None] = mapped_column(Float, nullable=True)
    unit: Mapped[str | None] = mapped_column(String(20), nullable=True)
    listed_price: Mapped[float | None] = mapped_column(Float, nullable=True)
    status: Mapped[str] = mapped_column(String(30), nullable=False, default="available")
    seller_id: Mapped[str] = mapped_column(String(36), nullable=False)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Any persisted geography shape: pair object, GeoJSON, WKT or WKB hex string
    geolocation: Mapped[Any | None] = mapped_column(JSON(none_as_null=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    material_type: Mapped["MaterialTypeModel | None"] = relationship(back_populates="listings")

    __table_args__ = (Index("idx_scrap_listings_seller", "seller_id"),)
