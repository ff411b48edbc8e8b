"""add display data to teaching sessions

Revision ID: 20261008_0002
Revises: 20261001_0001
Create Date: 2026-10-08 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

revision = "20261008_0002"
down_revision = "20261001_0001"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.add_column(
        "teaching_sessions",
        sa.Column("data", sa.JSON(), nullable=False, server_default=sa.text("'{}'")),
    )


def downgrade() -> None:
    op.drop_column("teaching_sessions", "data")
