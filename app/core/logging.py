import logging
from logging.config import dictConfig

from app.core.config import settings


def setup_logging(level: str = None) -> None:
    """Настройка логирования приложения"""
    level = (level or settings.log_level).upper()

    dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
            },
        },
        "loggers": {
            "app": {"handlers": ["console"], "level": level, "propagate": False},
            "sqlalchemy.engine": {"level": "INFO" if settings.sql_echo else "WARNING"},
        },
        "root": {"handlers": ["console"], "level": "WARNING"},
    })

    logging.getLogger(__name__).debug("Logging configured with level %s", level)
