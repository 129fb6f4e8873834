"""
Logging setup.

Modules log through logging.getLogger(__name__). This module
only decides where the records go and at what level, and is
called once by the application factory.
"""

import logging
import logging.config

from double_entry_bank.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(settings: Settings) -> None:
    """Route all log records to stderr at the configured level."""
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": LOG_FORMAT},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stderr",
            },
        },
        "root": {
            "level": settings.LOG_LEVEL,
            "handlers": ["console"],
        },
    })
    # SQL echo is noisy; only surface it when debugging
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.DEBUG else logging.WARNING
    )
    logging.getLogger(__name__).info(
        "Logger initialized level=%s environment=%s",
        settings.LOG_LEVEL, settings.ENVIRONMENT,
    )
