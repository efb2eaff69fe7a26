from __future__ import annotations

import os
from datetime import date

import pytest

# IMPORTANT:
# Set env BEFORE importing habit_tracker (settings are read at import time)
os.environ.setdefault("APP_ENV", "local")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("STATS_WINDOW_DAYS", "30")

from sqlalchemy.pool import StaticPool  # noqa: E402

from habit_tracker.application.services.habit_service import HabitService  # noqa: E402
from habit_tracker.db.init_db import init_db  # noqa: E402
from habit_tracker.db.session import create_engine, create_session_factory  # noqa: E402
from habit_tracker.domain.entities.base import utctoday  # noqa: E402
from habit_tracker.infrastructure.persistence.repositories.habit_repository import (  # noqa: E402
    SqlAlchemyHabitRepository,
)


@pytest.fixture()
def today() -> date:
    return utctoday()


@pytest.fixture()
async def engine():
    eng = create_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    await init_db(eng)
    yield eng
    await eng.dispose()


@pytest.fixture()
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture()
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture()
def habit_repository(db_session) -> SqlAlchemyHabitRepository:
    return SqlAlchemyHabitRepository(db_session)


@pytest.fixture()
def habit_service(habit_repository) -> HabitService:
    return HabitService(habit_repository, stats_window_days=30)
