"""
Logging Configuration

Stdout logging for containerized deployments (Docker/K8s log drivers).
"""

import sys
from logging.config import dictConfig

from notes_service.core.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Logger name -> fixed level; None follows LOG_LEVEL
_LOGGERS: dict[str, str | None] = {
    "notes_service": None,
    "uvicorn": "INFO",
    "uvicorn.error": "INFO",
    "uvicorn.access": "INFO",
    "sqlalchemy.engine": "WARNING",  # SQL echo only when explicitly lowered
}


def setup_logging(level: str | None = None) -> None:
    """
    Apply the logging configuration.

    Args:
        level: Overrides LOG_LEVEL for the root and package loggers.

    Note:
        uvicorn is started with ``log_config=None`` so it keeps these
        handlers instead of installing its own.
    """
    log_level = (level or settings.LOG_LEVEL).upper()

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,  # Preserve third-party loggers
            "formatters": {
                "default": {"format": LOG_FORMAT, "datefmt": DATE_FORMAT},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "stream": sys.stdout,
                    "formatter": "default",
                },
            },
            "root": {"level": log_level, "handlers": ["console"]},
            "loggers": {
                name: {
                    "level": fixed or log_level,
                    "handlers": ["console"],
                    "propagate": False,  # Prevent duplicate logs to root
                }
                for name, fixed in _LOGGERS.items()
            },
        }
    )
