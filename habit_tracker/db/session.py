from __future__ import annotations

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from habit_tracker.core.config import settings


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine(url: str | None = None, **kwargs) -> AsyncEngine:
    url = url or settings.DATABASE_URL
    engine_args = {"echo": settings.DATABASE_ECHO}
    # Only use connect_args if we are using SQLite
    if url.startswith("sqlite"):
        engine_args["connect_args"] = {"check_same_thread": False}
    engine_args.update(kwargs)

    async_engine = create_async_engine(url, **engine_args)
    if url.startswith("sqlite"):
        event.listen(async_engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return async_engine


def create_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=bind, expire_on_commit=False, autoflush=False)
