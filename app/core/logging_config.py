"""
Logging setup for the event registration API.
"""
import logging.config
import sys

from app.core.config import LOG_LEVEL


def setup_logging(log_level: str = LOG_LEVEL) -> None:
    """Configure console logging for the application and its libraries."""
    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": log_level,
                "formatter": "standard",
                "stream": sys.stdout,
            },
        },
        "loggers": {
            "app": {"level": log_level, "handlers": ["console"], "propagate": False},
            "uvicorn": {"level": "INFO", "handlers": ["console"], "propagate": False},
            "sqlalchemy.engine": {"level": "WARNING", "handlers": ["console"], "propagate": False},
            "sqlalchemy.pool": {"level": "WARNING", "handlers": ["console"], "propagate": False},
            "redis": {"level": "WARNING", "handlers": ["console"], "propagate": False},
        },
        "root": {"level": log_level, "handlers": ["console"]},
    }
    logging.config.dictConfig(config)
