"""scan context as text

Revision ID: e2a9c4d7f158
Revises: c6b2e8f4a917
Create Date: 2026-10-17 11:40:00.000000
"""
from alembic import op
import sqlalchemy as sa


revision = "e2a9c4d7f158"
down_revision = "c6b2e8f4a917"
branch_labels = None
depends_on = None


def upgrade() -> None:
    with op.batch_alter_table("ticket_scans") as batch_op:
        batch_op.alter_column(
            "scan_location",
            existing_type=sa.String(length=255),
            type_=sa.Text(),
            existing_nullable=True,
        )
        batch_op.alter_column(
            "device_info",
            existing_type=sa.String(length=500),
            type_=sa.Text(),
            existing_nullable=True,
        )


def downgrade() -> None:
    with op.batch_alter_table("ticket_scans") as batch_op:
        batch_op.alter_column(
            "device_info",
            existing_type=sa.Text(),
            type_=sa.String(length=500),
            existing_nullable=True,
        )
        batch_op.alter_column(
            "scan_location",
            existing_type=sa.Text(),
            type_=sa.String(length=255),
            existing_nullable=True,
        )
