from __future__ import annotations

import asyncio

import click
from sqlalchemy.ext.asyncio import AsyncEngine

from habit_tracker.console.application import Application
from habit_tracker.core.config import settings
from habit_tracker.core.logging import configure_logging, log
from habit_tracker.db.init_db import init_db
from habit_tracker.db.schema_check import ensure_schema_up_to_date
from habit_tracker.db.seed import seed_demo_data
from habit_tracker.db.session import create_engine, create_session_factory


async def prepare_database(engine: AsyncEngine, app_env: str | None = None) -> None:
    env = (app_env or settings.APP_ENV).lower()

    if env in ("local", "dev"):
        # dev convenience: create tables automatically
        await init_db(engine)
        log.info("db_initialized", env=env)
        return

    if env in ("stage", "prod"):
        # strict: alembic must be applied; schema must match head
        await ensure_schema_up_to_date(engine, alembic_ini_path=settings.ALEMBIC_INI_PATH)
        return

    # unknown env -> fail closed
    raise RuntimeError(f"Unknown APP_ENV={env}. Expected local/dev/stage/prod.")


async def _run_console() -> None:
    engine = create_engine()
    try:
        await prepare_database(engine)
        await Application(create_session_factory(engine)).run()
    finally:
        await engine.dispose()


async def _init_db() -> None:
    engine = create_engine()
    try:
        await init_db(engine)
    finally:
        await engine.dispose()


async def _seed() -> int:
    engine = create_engine()
    try:
        await prepare_database(engine)
        async with create_session_factory(engine)() as session:
            return await seed_demo_data(session)
    finally:
        await engine.dispose()


@click.group(invoke_without_command=True)
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Habit Tracker. Runs the interactive menu when no command is given."""
    configure_logging()
    if ctx.invoked_subcommand is None:
        asyncio.run(_run_console())


@cli.command("init-db")
def init_db_command() -> None:
    """Create the database tables."""
    asyncio.run(_init_db())
    click.echo("Database initialized.")


@cli.command("seed")
def seed_command() -> None:
    """Insert the demo habits into an empty database."""
    inserted = asyncio.run(_seed())
    click.echo(f"Seeded {inserted} habits.")


if __name__ == "__main__":
    cli()
