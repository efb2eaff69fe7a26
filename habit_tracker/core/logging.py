from __future__ import annotations

import logging
import sys

import structlog

from habit_tracker.core.config import settings

log = structlog.get_logger("habit_tracker")


def configure_logging(level: str | None = None, *, json: bool | None = None) -> None:
    level_name = (level or settings.LOG_LEVEL).upper()
    render_json = settings.LOG_JSON if json is None else json

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level_name)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]
    if render_json:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level_name)),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )
