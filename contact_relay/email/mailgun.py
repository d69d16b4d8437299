from __future__ import annotations

import logging

from contact_relay.email.base import HttpEmailDispatcher
from contact_relay.email.render import (
    build_subject,
    render_notification_html,
    render_notification_text,
)
from contact_relay.schemas.contact import ContactSubmission

logger = logging.getLogger("contact_relay.email.mailgun")

MAILGUN_API_BASE = "https://api.mailgun.net/v3"


class MailgunDispatcher(HttpEmailDispatcher):
    """Sends the notification through Mailgun's messages endpoint (basic auth)."""

    provider_name = "Mailgun"

    def send(self, submission: ContactSubmission) -> str:
        api_key = self._require(self._settings.mailgun_api_key, "MAILGUN_API_KEY")
        domain = self._require(self._settings.mailgun_domain, "MAILGUN_DOMAIN")
        tz_name = self._settings.display_timezone

        data = {
            "from": self._settings.from_header,
            "to": self._settings.contact_recipients,
            "subject": build_subject(submission),
            "text": render_notification_text(submission, tz_name),
            "html": render_notification_html(submission, tz_name),
            "h:Reply-To": submission.email,
        }

        response = self._post(
            f"{MAILGUN_API_BASE}/{domain}/messages",
            auth=("api", api_key),
            data=data,
        )

        message_id = str(self._json(response).get("id") or "")
        logger.info(
            "Contact email queued via Mailgun: id=%s domain=%s",
            message_id,
            domain,
        )
        return message_id
