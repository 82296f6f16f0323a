"""staff members

Revision ID: c6b2e8f4a917
Revises: 8d3f5a1b6c42
Create Date: 2026-09-05 09:15:00.000000
"""
from alembic import op
import sqlalchemy as sa


revision = "c6b2e8f4a917"
down_revision = "8d3f5a1b6c42"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "staff_members",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("event_id", sa.Integer(), sa.ForeignKey("events.id"), nullable=False),
        sa.Column("permissions", sa.JSON(), nullable=False),
        sa.Column("assigned_by", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.UniqueConstraint(
            "user_id", "event_id", name="uq_staff_members_user_event"
        ),
    )


def downgrade() -> None:
    op.drop_table("staff_members")
