from __future__ import annotations

import logging

from contact_relay.email.base import HttpEmailDispatcher
from contact_relay.schemas.contact import ContactSubmission

logger = logging.getLogger("contact_relay.email.backend_forward")

CONTACT_PATH = "/api/contact/"


class BackendForwardDispatcher(HttpEmailDispatcher):
    """
    Hands the sanitized submission to an application backend instead of an
    email API; the backend owns delivery from there.
    """

    provider_name = "Backend"

    def send(self, submission: ContactSubmission) -> str:
        base_url = self._require(self._settings.backend_api_url, "BACKEND_API_URL")
        api_key = self._require(self._settings.backend_api_key, "BACKEND_API_KEY")

        payload = {
            "name": submission.name,
            "email": submission.email,
            "phone": submission.phone,
            "subject": submission.subject,
            "message": submission.message,
            "submittedAt": submission.submitted_at,
            "userAgent": submission.user_agent,
        }

        response = self._post(
            f"{base_url.rstrip('/')}{CONTACT_PATH}",
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            json=payload,
        )

        message_id = str(self._json(response).get("id") or "")
        logger.info("Contact submission forwarded to backend: id=%s", message_id)
        return message_id
