"""Initial schema — material types and scrap listings.

Revision ID: 001
Revises: None
Create Date: 2026-10-19
"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Material types
    op.create_table(
        "material_types",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(100), unique=True, nullable=False),
        sa.Column("category", sa.String(50), nullable=False),
    )

    # Scrap listings
    op.create_table(
        "scrap_listings",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column(
            "material_type_id",
            sa.String(36),
            sa.ForeignKey("material_types.id"),
            nullable=True,
        ),
        sa.Column("quantity", sa.Float, nullable=True),
        sa.Column("unit", sa.String(20), nullable=True),
        sa.Column("listed_price", sa.Float, nullable=True),
        sa.Column("status", sa.String(30), nullable=False, server_default="available"),
        sa.Column("seller_id", sa.String(36), nullable=False),
        sa.Column("address", sa.Text, nullable=True),
        sa.Column("geolocation", sa.JSON, nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
    )
    op.create_index("idx_scrap_listings_seller", "scrap_listings", ["seller_id"])


def downgrade() -> None:
    op.drop_index("idx_scrap_listings_seller", table_name="scrap_listings")
    op.drop_table("scrap_listings")
    op.drop_table("material_types")
