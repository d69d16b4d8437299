from __future__ import annotations

import logging

from fastapi import Depends

from contact_relay.config import Settings, get_settings
from contact_relay.email import EmailDispatcher, build_dispatcher

CONTACT_LOGGER_NAME = "contact_relay.contact"


def get_app_settings() -> Settings:
    return get_settings()


def get_dispatcher(settings: Settings = Depends(get_app_settings)) -> EmailDispatcher:
    """Per-request dispatcher; tests override this to inject fakes."""
    return build_dispatcher(settings)


def get_contact_logger() -> logging.Logger:
    return logging.getLogger(CONTACT_LOGGER_NAME)
