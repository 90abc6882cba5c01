"""SQLAlchemy repository implementations."""

from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from scrapmap.adapters.persistence.models import ScrapListingModel
from scrapmap.application.ports.listing_store import ListingRow, ListingStore
from scrapmap.domain.errors import ListingStoreError

# ─── Mappers ─────────────────────────────────────────────────────────


def _listing_to_row(m: ScrapListingModel) -> ListingRow:
    return ListingRow(
        id=m.id,
        title=m.title,
        listed_price=m.listed_price,
        quantity=m.quantity,
        unit=m.unit,
        material_category=m.material_type.category if m.material_type else None,
        geo_raw=m.geolocation,
        address=m.address,
    )


# ─── Repositories ────────────────────────────────────────────────────


class SqlListingStore(ListingStore):
    """Listing store over ``scrap_listings``.

    When ``owner_id`` is set, updates only match listings of that seller, the
    same way row-level security scopes writes on the hosted backend.
    """

    def __init__(self, session: AsyncSession, owner_id: str | None = None):
        self._s = session
        self._owner_id = owner_id

    async def fetch_listings_with_coordinates(self) -> list[ListingRow]:
        try:
            result = await self._s.execute(
                select(ScrapListingModel)
                .options(joinedload(ScrapListingModel.material_type))
                .where(ScrapListingModel.geolocation.is_not(None))
                .order_by(ScrapListingModel.created_at, ScrapListingModel.id)
            )
        except SQLAlchemyError as e:
            raise ListingStoreError(f"Fetching listings failed: {e}") from e
        return [_listing_to_row(m) for m in result.scalars()]

    async def fetch_listing_by_id(self, listing_id: str) -> ListingRow | None:
        try:
            result = await self._s.execute(
                select(ScrapListingModel)
                .options(joinedload(ScrapListingModel.material_type))
                .where(ScrapListingModel.id == listing_id)
            )
        except SQLAlchemyError as e:
            raise ListingStoreError(f"Fetching listing {listing_id} failed: {e}") from e
        m = result.scalar_one_or_none()
        return _listing_to_row(m) if m else None

    async def update_listing_geolocation(
        self, listing_id: str, geolocation: dict, address: str | None = None
    ) -> int:
        values: dict = {"geolocation": geolocation}
        if address is not None:
            values["address"] = address

        stmt = update(ScrapListingModel).where(ScrapListingModel.id == listing_id)
        if self._owner_id is not None:
            stmt = stmt.where(ScrapListingModel.seller_id == self._owner_id)

        try:
            result = await self._s.execute(stmt.values(**values))
            await self._s.flush()
        except SQLAlchemyError as e:
            raise ListingStoreError(f"Updating listing {listing_id} failed: {e}") from e
        return result.rowcount
