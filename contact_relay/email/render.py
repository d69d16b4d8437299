from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup, escape

from contact_relay.schemas.contact import ContactSubmission

logger = logging.getLogger("contact_relay.email.render")

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

NOTIFICATION_TEMPLATE = "contact_notification.html"
NOT_PROVIDED = "Not provided"
SUBJECT_PREFIX = "New Contact Form: "
DISPLAY_FORMAT = "%B %d, %Y at %I:%M %p %Z"


def _nl2br(value: Any) -> Markup:
    """Escape, then turn newlines into <br> tags."""
    escaped = escape("" if value is None else str(value))
    return Markup("<br>\n".join(escaped.splitlines()))


class EmailTemplateRenderer:
    """Renders Jinja2-based email templates from the local templates directory."""

    def __init__(self, templates_dir: Path = TEMPLATES_DIR) -> None:
        self._env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=select_autoescape(["html", "xml"]),
        )
        self._env.filters["nl2br"] = _nl2br

    def render(self, template_name: str, context: Dict[str, Any]) -> str:
        try:
            template = self._env.get_template(template_name)
        except Exception as exc:
            logger.error("Email template '%s' not found: %s", template_name, exc)
            raise

        try:
            return template.render(**context)
        except Exception as exc:
            logger.error("Failed to render template '%s': %s", template_name, exc)
            raise


def format_submitted_at(submitted_at: str, display_timezone: str) -> str:
    """
    Render an ISO-8601 UTC timestamp in the configured display timezone.

    Falls back to the raw string when the timestamp can't be parsed.
    """
    try:
        moment = datetime.fromisoformat(submitted_at.replace("Z", "+00:00"))
    except ValueError:
        logger.warning("Unparseable submission timestamp %r", submitted_at)
        return submitted_at

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)

    try:
        zone = ZoneInfo(display_timezone)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown display timezone %r; using UTC", display_timezone)
        zone = ZoneInfo("UTC")

    return moment.astimezone(zone).strftime(DISPLAY_FORMAT)


def build_subject(submission: ContactSubmission) -> str:
    return f"{SUBJECT_PREFIX}{submission.subject}"


def build_context(
    submission: ContactSubmission,
    display_timezone: str,
) -> Dict[str, Any]:
    return {
        "name": submission.name,
        "email": submission.email,
        "phone": submission.phone or NOT_PROVIDED,
        "subject": submission.subject,
        "message": submission.message,
        "submitted_at": format_submitted_at(submission.submitted_at, display_timezone),
    }


_renderer = EmailTemplateRenderer()


def render_notification_html(
    submission: ContactSubmission,
    display_timezone: str,
) -> str:
    return _renderer.render(
        NOTIFICATION_TEMPLATE,
        build_context(submission, display_timezone),
    )


def render_notification_text(
    submission: ContactSubmission,
    display_timezone: str,
) -> str:
    context = build_context(submission, display_timezone)
    return (
        f"Name: {context['name']}\n"
        f"Email: {context['email']}\n"
        f"Phone: {context['phone']}\n"
        f"Subject: {context['subject']}\n"
        "\n"
        "Message:\n"
        f"{context['message']}\n"
        "\n"
        f"Submitted at: {context['submitted_at']}\n"
    )
