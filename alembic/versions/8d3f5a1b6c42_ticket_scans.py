"""ticket scans

Revision ID: 8d3f5a1b6c42
Revises: 4a1e7c2d9b30
Create Date: 2026-09-04 16:30:00.000000
"""
from alembic import op
import sqlalchemy as sa


revision = "8d3f5a1b6c42"
down_revision = "4a1e7c2d9b30"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "ticket_scans",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("ticket_id", sa.Integer(), sa.ForeignKey("tickets.id"), nullable=True),
        sa.Column("scanned_by", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("scanned_at", sa.DateTime(), nullable=False),
        sa.Column("scanned_code", sa.String(length=64), nullable=False),
        sa.Column("scan_location", sa.String(length=255), nullable=True),
        sa.Column("device_info", sa.String(length=500), nullable=True),
        sa.Column("scan_result", sa.String(length=12), nullable=False),
    )
    op.create_index("ix_ticket_scans_ticket_id", "ticket_scans", ["ticket_id"])
    op.create_index("ix_ticket_scans_scanned_by", "ticket_scans", ["scanned_by"])
    op.create_index("ix_ticket_scans_scanned_at", "ticket_scans", ["scanned_at"])


def downgrade() -> None:
    op.drop_index("ix_ticket_scans_scanned_at", table_name="ticket_scans")
    op.drop_index("ix_ticket_scans_scanned_by", table_name="ticket_scans")
    op.drop_index("ix_ticket_scans_ticket_id", table_name="ticket_scans")
    op.drop_table("ticket_scans")
