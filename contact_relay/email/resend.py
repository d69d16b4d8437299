from __future__ import annotations

import logging

from contact_relay.email.base import HttpEmailDispatcher
from contact_relay.email.render import (
    build_subject,
    render_notification_html,
    render_notification_text,
)
from contact_relay.schemas.contact import ContactSubmission

logger = logging.getLogger("contact_relay.email.resend")

RESEND_API_URL = "https://api.resend.com/emails"


class ResendDispatcher(HttpEmailDispatcher):
    """Sends the notification through Resend's REST API (bearer auth)."""

    provider_name = "Resend"

    def send(self, submission: ContactSubmission) -> str:
        api_key = self._require(self._settings.resend_api_key, "RESEND_API_KEY")
        tz_name = self._settings.display_timezone

        payload = {
            "from": self._settings.from_header,
            "to": self._settings.contact_recipients,
            "reply_to": submission.email,
            "subject": build_subject(submission),
            "html": render_notification_html(submission, tz_name),
            "text": render_notification_text(submission, tz_name),
        }

        response = self._post(
            RESEND_API_URL,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            json=payload,
        )

        message_id = str(self._json(response).get("id") or "")
        logger.info(
            "Contact email sent via Resend: id=%s reply_to=%s",
            message_id,
            submission.email,
        )
        return message_id
