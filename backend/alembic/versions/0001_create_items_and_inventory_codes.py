"""create items and inventory_codes tables

Revision ID: 0001_create_items_and_codes
Revises:
Create Date: 2026-10-18
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001_create_items_and_codes"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "items",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("information", sa.Text(), nullable=True),
        sa.Column("location", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_items_location", "items", ["location"])

    op.create_table(
        "inventory_codes",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column(
            "item_id",
            sa.String(),
            sa.ForeignKey("items.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("kode_inventaris", sa.Text(), nullable=False, server_default=""),
        sa.Column("spesifikasi", sa.Text(), nullable=False, server_default=""),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="good"),
        sa.Column("date_added", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_inventory_codes_item_id", "inventory_codes", ["item_id"])


def downgrade() -> None:
    op.drop_index("ix_inventory_codes_item_id", table_name="inventory_codes")
    op.drop_table("inventory_codes")
    op.drop_index("ix_items_location", table_name="items")
    op.drop_table("items")
