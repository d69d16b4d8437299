from __future__ import annotations

import logging

from python_http_client.exceptions import HTTPError
from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Content, Email, Mail, ReplyTo, To

from contact_relay.email.base import EmailDispatcher
from contact_relay.email.render import (
    build_subject,
    render_notification_html,
    render_notification_text,
)
from contact_relay.errors import DispatchError
from contact_relay.schemas.contact import ContactSubmission

logger = logging.getLogger("contact_relay.email.sendgrid")


def _decode(body) -> str:
    if isinstance(body, bytes):
        return body.decode("utf-8", errors="replace")
    return "" if body is None else str(body)


class SendGridDispatcher(EmailDispatcher):
    """Thin wrapper around the SendGrid v3 client with logging and error mapping."""

    provider_name = "SendGrid"

    def _build_message(self, submission: ContactSubmission) -> Mail:
        tz_name = self._settings.display_timezone
        message = Mail(
            from_email=Email(
                email=self._settings.email_from_address,
                name=self._settings.email_from_name,
            ),
            to_emails=[To(address) for address in self._settings.contact_recipients],
            subject=build_subject(submission),
        )
        message.add_content(
            Content("text/plain", render_notification_text(submission, tz_name))
        )
        message.add_content(
            Content("text/html", render_notification_html(submission, tz_name))
        )
        message.reply_to = ReplyTo(submission.email, submission.name or None)
        return message

    def send(self, submission: ContactSubmission) -> str:
        api_key = self._require(self._settings.sendgrid_api_key, "SENDGRID_API_KEY")
        message = self._build_message(submission)

        try:
            response = SendGridAPIClient(api_key).send(message)
        except HTTPError as exc:
            body = _decode(exc.body)
            logger.error(
                "SendGrid responded with error: status=%s body=%s",
                exc.status_code,
                body[:1000],
            )
            raise DispatchError(
                f"SendGrid API error: {exc.status_code} {body}",
                status_code=exc.status_code,
                body=body,
            ) from exc
        except Exception as exc:  # network / client errors
            logger.error("Failed to send email via SendGrid: %s", exc, exc_info=True)
            raise DispatchError(f"SendGrid API request failed: {exc}") from exc

        if response.status_code >= 400:
            body = _decode(getattr(response, "body", b""))
            raise DispatchError(
                f"SendGrid API error: {response.status_code} {body}",
                status_code=response.status_code,
                body=body,
            )

        headers = getattr(response, "headers", None) or {}
        message_id = str(headers.get("X-Message-Id") or "")
        logger.info(
            "Contact email sent via SendGrid: id=%s status=%s",
            message_id,
            response.status_code,
        )
        return message_id
