from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from contact_relay.email.base import EmailDispatcher
from contact_relay.errors import DispatchError, SpamRejected, ValidationFailed
from contact_relay.rules import SERVER, collect_errors
from contact_relay.sanitize import sanitize_input
from contact_relay.schemas.contact import (
    UNKNOWN_USER_AGENT,
    ContactEcho,
    ContactResponse,
    ContactSubmission,
)

FIELDS = ("name", "email", "phone", "subject", "message")
HONEYPOT_FIELD = "website"

SPAM_MESSAGE = "Invalid submission detected."
VALIDATION_MESSAGE = "Validation failed"
SUCCESS_MESSAGE = "Thank you for your message! We'll get back to you within 24 hours."
FAILURE_MESSAGE = (
    "An error occurred while processing your request. Please try again later."
)
METHOD_NOT_ALLOWED_MESSAGE = "Method not allowed. Please use POST."


@dataclass
class ContactOutcome:
    """HTTP status + JSON envelope produced for one submission."""

    status_code: int
    body: Dict[str, Any]
    message_id: Optional[str] = field(default=None)


def _envelope(response: ContactResponse) -> Dict[str, Any]:
    return response.model_dump(exclude_none=True)


def failure_outcome(
    status_code: int,
    message: str,
    error: Optional[str] = None,
) -> ContactOutcome:
    return ContactOutcome(
        status_code=status_code,
        body=_envelope(ContactResponse(success=False, message=message, error=error)),
    )


def extract_fields(form: Mapping[str, Any]) -> Dict[str, str]:
    """Pull the known fields off the form; missing or non-text values become ""."""
    extracted: Dict[str, str] = {}
    for name in FIELDS + (HONEYPOT_FIELD,):
        value = form.get(name)
        extracted[name] = value.strip() if isinstance(value, str) else ""
    return extracted


def screen_honeypot(fields: Mapping[str, str]) -> None:
    if fields.get(HONEYPOT_FIELD):
        raise SpamRejected(SPAM_MESSAGE)


def validate_fields(fields: Mapping[str, str]) -> None:
    errors = collect_errors(
        fields.get("name", ""),
        fields.get("email", ""),
        fields.get("message", ""),
        audience=SERVER,
    )
    if errors:
        raise ValidationFailed(errors)


def build_submission(
    fields: Mapping[str, str],
    user_agent: Optional[str],
    now: Optional[datetime] = None,
) -> ContactSubmission:
    moment = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return ContactSubmission(
        **{name: sanitize_input(fields.get(name, "")) for name in FIELDS},
        submitted_at=moment.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        user_agent=user_agent or UNKNOWN_USER_AGENT,
    )


def handle_submission(
    form: Mapping[str, Any],
    user_agent: Optional[str],
    dispatcher: EmailDispatcher,
    logger: logging.Logger,
) -> ContactOutcome:
    """
    Authoritative contact pipeline: honeypot, validation, sanitization,
    one dispatch attempt. Each step short-circuits into a JSON outcome.

    Exceptions other than the typed contact errors propagate to the caller's
    outer boundary.
    """
    fields = extract_fields(form)

    try:
        screen_honeypot(fields)
    except SpamRejected:
        logger.info("Honeypot triggered - likely spam")
        return failure_outcome(400, SPAM_MESSAGE)

    try:
        validate_fields(fields)
    except ValidationFailed as exc:
        logger.info("Contact submission rejected: %s", "; ".join(exc.errors))
        return ContactOutcome(
            status_code=400,
            body=_envelope(
                ContactResponse(
                    success=False,
                    message=VALIDATION_MESSAGE,
                    errors=exc.errors,
                )
            ),
        )

    submission = build_submission(fields, user_agent)
    logger.info(
        "Contact form submission received: name=%s email=%s subject=%s timestamp=%s",
        submission.name,
        submission.email,
        submission.subject,
        submission.submitted_at,
    )

    try:
        message_id = dispatcher.send(submission)
    except DispatchError as exc:
        logger.error(
            "Contact dispatch failed (provider_status=%s): %s",
            exc.status_code,
            exc,
        )
        return failure_outcome(500, FAILURE_MESSAGE, error=str(exc))

    logger.info("Contact email dispatched: message_id=%s", message_id)

    return ContactOutcome(
        status_code=200,
        body=_envelope(
            ContactResponse(
                success=True,
                message=SUCCESS_MESSAGE,
                data=ContactEcho(
                    name=submission.name,
                    email=submission.email,
                    timestamp=submission.submitted_at,
                ),
            )
        ),
        message_id=message_id,
    )
