"""initial

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Create the enum only if it doesn't exist (idempotent across retries)
    op.execute(
        """
        DO $$
        BEGIN
            IF NOT EXISTS (SELECT 1 FROM pg_type WHERE typname = 'subscriptionplan') THEN
                CREATE TYPE subscriptionplan AS ENUM ('basic', 'premium', 'enterprise');
            END IF;
        END$$;
        """
    )

    op.create_table(
        "restaurants",
        sa.Column("id", sa.String(length=100), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("logo", sa.String(), nullable=True),
        sa.Column("address", sa.String(), nullable=True),
        sa.Column("phone", sa.String(), nullable=True),
        sa.Column("website", sa.String(), nullable=True),
        sa.Column("owner_id", sa.String(length=100), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=True),
        sa.Column(
            "subscription_plan",
            postgresql.ENUM("basic", "premium", "enterprise", name="subscriptionplan", create_type=False),
            nullable=True,
        ),
        sa.Column("qr_code_secret", sa.String(), nullable=True),
        sa.Column("custom_domain", sa.String(), nullable=True),
        sa.Column("theme", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint("qr_code_secret"),
        sa.UniqueConstraint("custom_domain"),
    )
    op.create_index("ix_restaurants_owner_id", "restaurants", ["owner_id"])

    op.create_table(
        "menu_categories",
        sa.Column("restaurant_id", sa.String(length=100), sa.ForeignKey("restaurants.id"), primary_key=True),
        sa.Column("id", sa.String(length=200), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("icon", sa.String(), nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=True),
        sa.Column("insert_seq", sa.Integer(), nullable=False, server_default="0"),
    )

    op.create_table(
        "menu_items",
        sa.Column("restaurant_id", sa.String(length=100), sa.ForeignKey("restaurants.id"), primary_key=True),
        sa.Column("id", sa.String(length=200), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("price", sa.Float(), nullable=False),
        sa.Column("image", sa.String(), nullable=True),
        sa.Column("category", sa.String(length=200), nullable=False),
        sa.Column("model_3d", sa.String(), nullable=True),
        sa.Column("allergens", sa.JSON(), nullable=True),
        sa.Column("is_vegetarian", sa.Boolean(), nullable=True),
        sa.Column("is_vegan", sa.Boolean(), nullable=True),
        sa.Column("spicy_level", sa.Integer(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_menu_items_category", "menu_items", ["category"])
    op.create_index("ix_menu_items_is_active", "menu_items", ["is_active"])


def downgrade() -> None:
    op.drop_index("ix_menu_items_is_active", table_name="menu_items")
    op.drop_index("ix_menu_items_category", table_name="menu_items")
    op.drop_table("menu_items")
    op.drop_table("menu_categories")
    op.drop_index("ix_restaurants_owner_id", table_name="restaurants")
    op.drop_table("restaurants")

    bind = op.get_bind()
    postgresql.ENUM(name="subscriptionplan").drop(bind, checkfirst=True)
