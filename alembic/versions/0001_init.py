"""Create habits and progress_logs tables.

Revision ID: 0001_init
Revises:
Create Date: 2026-10-18
"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa

revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "habits",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("category", sa.String(length=32), nullable=False),
        sa.Column("frequency", sa.Integer(), nullable=False),
        sa.Column("frequency_unit", sa.String(length=16), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("tags", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_habits_category", "habits", ["category"], unique=False)

    op.create_table(
        "progress_logs",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("habit_id", sa.Uuid(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("is_completed", sa.Boolean(), nullable=False),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["habit_id"], ["habits.id"], name="fk_progress_logs_habit_id_habits", ondelete="CASCADE"
        ),
        sa.UniqueConstraint("habit_id", "date", name="uq_progress_logs_habit_id_date"),
    )
    op.create_index("ix_progress_logs_habit_id", "progress_logs", ["habit_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_progress_logs_habit_id", table_name="progress_logs")
    op.drop_table("progress_logs")
    op.drop_index("ix_habits_category", table_name="habits")
    op.drop_table("habits")
