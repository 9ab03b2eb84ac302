"""
structlog setup.

Development gets coloured console lines; staging and production get one JSON
object per line. Request middleware binds ``request_id`` and ``path`` into
the context so stock movements logged deep in the engine can be traced back
to the HTTP call that caused them.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from repairshop.config.settings import get_settings

# Chatty libraries that only matter when debugging them
_QUIET_LOGGERS = ("uvicorn.access", "aiosqlite", "fontTools", "PIL")


def add_app_context(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    settings = get_settings()
    event_dict.setdefault("app", settings.app_name)
    event_dict.setdefault("version", settings.app_version)
    event_dict.setdefault("environment", settings.environment)
    return event_dict


def _processors(environment: str) -> list[Processor]:
    chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        add_app_context,
    ]
    if environment == "development":
        chain.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))
    else:
        chain += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return chain


def configure_logging() -> None:
    """Configure structlog and route stdlib logging through stdout."""
    settings = get_settings()

    structlog.configure(
        processors=_processors(settings.environment),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=settings.log_level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def bind_request_context(**values: Any) -> None:
    structlog.contextvars.bind_contextvars(**values)


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
