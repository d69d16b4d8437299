from __future__ import annotations

import logging
from typing import Dict, Type

from contact_relay.config import Settings
from contact_relay.email.backend_forward import BackendForwardDispatcher
from contact_relay.email.base import EmailDispatcher
from contact_relay.email.mailgun import MailgunDispatcher
from contact_relay.email.resend import ResendDispatcher
from contact_relay.email.sendgrid_client import SendGridDispatcher

logger = logging.getLogger("contact_relay.email.factory")

DISPATCHERS: Dict[str, Type[EmailDispatcher]] = {
    "resend": ResendDispatcher,
    "sendgrid": SendGridDispatcher,
    "mailgun": MailgunDispatcher,
    "backend": BackendForwardDispatcher,
}


def build_dispatcher(settings: Settings) -> EmailDispatcher:
    """Return the single dispatcher selected by EMAIL_PROVIDER."""
    provider = (settings.email_provider or "").strip().lower()
    try:
        dispatcher_cls = DISPATCHERS[provider]
    except KeyError:
        raise ValueError(f"Unknown email provider: {settings.email_provider!r}") from None

    logger.debug("Using %s for contact dispatch", dispatcher_cls.__name__)
    return dispatcher_cls(settings)
