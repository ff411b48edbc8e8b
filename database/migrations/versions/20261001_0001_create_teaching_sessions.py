"""create teaching sessions

Revision ID: 20261001_0001
Revises: None
Create Date: 2026-10-01 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

revision = "20261001_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "teaching_sessions",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("lesson_id", sa.Integer(), nullable=True),
        sa.Column("class_id", sa.String(length=36), nullable=True),
        sa.Column("subject_type", sa.String(length=50), nullable=False),
        sa.Column("teacher_id", sa.String(length=36), nullable=False),
        sa.Column("teaching_assistant_id", sa.String(length=36), nullable=True),
        sa.Column("location_id", sa.String(length=36), nullable=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.DateTime(timezone=False), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=False), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_teaching_sessions_date", "teaching_sessions", ["date"])
    op.create_index("ix_teaching_sessions_class_id", "teaching_sessions", ["class_id"])
    op.create_index("ix_teaching_sessions_teacher_id", "teaching_sessions", ["teacher_id"])


def downgrade() -> None:
    op.drop_index("ix_teaching_sessions_teacher_id", table_name="teaching_sessions")
    op.drop_index("ix_teaching_sessions_class_id", table_name="teaching_sessions")
    op.drop_index("ix_teaching_sessions_date", table_name="teaching_sessions")
    op.drop_table("teaching_sessions")
