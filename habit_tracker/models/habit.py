from __future__ import annotations

import datetime as dt
import uuid

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from habit_tracker.db.base import Base
from habit_tracker.db.types import StringList


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class HabitModel(Base):
    __tablename__ = "habits"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    category: Mapped[str] = mapped_column(String(32), nullable=False, default="Other", index=True)
    frequency: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    frequency_unit: Mapped[str] = mapped_column(String(16), nullable=False, default="Daily")
    start_date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    tags: Mapped[list[str]] = mapped_column(StringList, nullable=False, default=list)

    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)

    progress_logs: Mapped[list["ProgressLogModel"]] = relationship(
        "ProgressLogModel",
        back_populates="habit",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ProgressLogModel.position",
    )

    def __repr__(self) -> str:
        return f"HabitModel(id={self.id}, name={self.name}, category={self.category})"


class ProgressLogModel(Base):
    __tablename__ = "progress_logs"
    __table_args__ = (UniqueConstraint("habit_id", "date", name="uq_progress_logs_habit_id_date"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    habit_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("habits.id", ondelete="CASCADE"), nullable=False, index=True
    )

    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    is_completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    note: Mapped[str | None] = mapped_column(Text, nullable=True)
    # insertion order within the habit
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)

    habit: Mapped["HabitModel"] = relationship("HabitModel", back_populates="progress_logs")

    def __repr__(self) -> str:
        return f"ProgressLogModel(id={self.id}, habit_id={self.habit_id}, date={self.date})"
