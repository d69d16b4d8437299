from __future__ import annotations

import logging
import logging.config
from typing import Optional

from contact_relay.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure root + uvicorn loggers once, before the server starts.

    Uvicorn is launched with log_config=None so these handlers stay in charge.
    """
    resolved = (level or get_settings().log_level or "INFO").upper()

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {"format": LOG_FORMAT},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "stream": "ext://sys.stdout",
                },
            },
            "root": {"handlers": ["console"], "level": resolved},
            "loggers": {
                "contact_relay": {"level": resolved, "propagate": True},
                "uvicorn": {"level": resolved, "propagate": True},
                "uvicorn.access": {"level": resolved, "propagate": True},
                "uvicorn.error": {"level": resolved, "propagate": True},
            },
        }
    )

    logging.getLogger("contact_relay.logging").debug(
        "Logging configured at level %s", resolved
    )
