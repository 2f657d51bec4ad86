# File: app/core/logging.py
import logging
import sys
from pythonjsonlogger import jsonlogger
from app.core.config import Settings

SERVICE = "city-fix-api"

# loggers that follow the app level instead of their library defaults
FOLLOWERS = ("uvicorn.error", "uvicorn.access", "app")


def _json_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        jsonlogger.JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s",
            rename_fields={"asctime": "ts", "levelname": "level", "name": "logger"},
            static_fields={"service": SERVICE},
        )
    )
    return handler


def configure_logging(settings: Settings) -> None:
    """Route every record through a single JSON handler on stdout.

    Service code logs business events with ``extra={...}``; those keys end up
    as top-level fields of the JSON line. SQL statements are logged at INFO
    only when ``LOG_SQL`` is on.
    """
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(_json_handler())
    root.setLevel(level)

    for name in FOLLOWERS:
        logging.getLogger(name).setLevel(level)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if settings.log_sql else logging.WARNING)
