from __future__ import annotations

# Import all models so Alembic sees them via Base.metadata
from habit_tracker.models.habit import HabitModel, ProgressLogModel  # noqa: F401
