"""add plants, vendors and badge status"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa

revision = "0004_add_plants_vendors_badges"
down_revision = "0003_add_inventory_and_shopping"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "plants",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("household_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("location", sa.String(length=200), nullable=False, server_default=""),
        sa.Column("watering_frequency", sa.Integer(), nullable=False),
        sa.Column("last_watered", sa.DateTime(), nullable=True),
        sa.Column("next_watering", sa.DateTime(), nullable=True),
        sa.Column("light_notes", sa.Text(), nullable=True),
        sa.Column("fertilizer_notes", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column("created_by", sa.String(length=128), nullable=False),
    )
    op.create_index("ix_plants_household_id", "plants", ["household_id"])

    op.create_table(
        "vendors",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("household_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("type", sa.String(length=20), nullable=False, server_default="other"),
        sa.Column("phone", sa.String(length=64), nullable=True),
        sa.Column("email", sa.String(length=200), nullable=True),
        sa.Column("website", sa.String(length=200), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column("created_by", sa.String(length=128), nullable=False),
    )
    op.create_index("ix_vendors_household_id", "vendors", ["household_id"])

    for table in ("vendor_contracts", "maintenance_items"):
        columns = [
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column(
                "vendor_id",
                sa.Integer(),
                sa.ForeignKey("vendors.id", ondelete="CASCADE"),
                nullable=False,
            ),
        ]
        if table == "vendor_contracts":
            columns += [
                sa.Column("start_date", sa.Date(), nullable=False),
                sa.Column("end_date", sa.Date(), nullable=True),
                sa.Column("monthly_cost", sa.Numeric(12, 2), nullable=True),
            ]
        else:
            columns += [
                sa.Column("type", sa.String(length=200), nullable=False),
                sa.Column("frequency", sa.Integer(), nullable=False),
                sa.Column("last_service", sa.Date(), nullable=True),
                sa.Column("next_service", sa.Date(), nullable=True),
            ]
        columns.append(sa.Column("notes", sa.Text(), nullable=True))
        op.create_table(table, *columns)
        op.create_index(f"ix_{table}_vendor_id", table, ["vendor_id"])

    op.create_table(
        "badge_status",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(length=128), nullable=False),
        sa.Column("badge_id", sa.String(length=64), nullable=False),
        sa.Column("shown_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint("user_id", "badge_id"),
    )
    op.create_index("ix_badge_status_user_id", "badge_status", ["user_id"])


def downgrade() -> None:
    op.drop_index("ix_badge_status_user_id", table_name="badge_status")
    op.drop_table("badge_status")
    for table in ("maintenance_items", "vendor_contracts"):
        op.drop_index(f"ix_{table}_vendor_id", table_name=table)
        op.drop_table(table)
    op.drop_index("ix_vendors_household_id", table_name="vendors")
    op.drop_table("vendors")
    op.drop_index("ix_plants_household_id", table_name="plants")
    op.drop_table("plants")
