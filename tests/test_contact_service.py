from __future__ import annotations

import logging
from datetime import datetime, timezone

from contact_relay.errors import DispatchError
from contact_relay.services.contact_service import (
    FAILURE_MESSAGE,
    SPAM_MESSAGE,
    SUCCESS_MESSAGE,
    build_submission,
    extract_fields,
    handle_submission,
)
from tests.conftest import FakeDispatcher

logger = logging.getLogger("tests.contact_service")

VALID_FORM = {
    "name": "  Jo  ",
    "email": "jo@example.com",
    "phone": "",
    "subject": "Training",
    "message": "Hello there friend",
    "website": "",
}


def test_extract_defaults_missing_fields_to_empty():
    fields = extract_fields({"name": " Jo "})
    assert fields == {
        "name": "Jo",
        "email": "",
        "phone": "",
        "subject": "",
        "message": "",
        "website": "",
    }


def test_honeypot_short_circuits_before_validation(dispatcher):
    outcome = handle_submission(
        {"name": "J", "email": "bad", "message": "short", "website": "bot"},
        "pytest",
        dispatcher,
        logger,
    )
    assert outcome.status_code == 400
    assert outcome.body == {"success": False, "message": SPAM_MESSAGE}
    assert dispatcher.sent == []


def test_validation_errors_are_exhaustive(dispatcher):
    outcome = handle_submission(
        {"name": "A", "email": "bad", "message": "short"},
        "pytest",
        dispatcher,
        logger,
    )
    assert outcome.status_code == 400
    assert outcome.body["success"] is False
    assert outcome.body["errors"] == [
        "Name must be at least 2 characters long",
        "Please provide a valid email address",
        "Message must be at least 10 characters long",
    ]
    assert dispatcher.sent == []


def test_success_echoes_sanitized_fields(dispatcher):
    form = dict(VALID_FORM, name="<Jo>", subject="Hi <there>")
    outcome = handle_submission(form, "pytest", dispatcher, logger)

    assert outcome.status_code == 200
    assert outcome.message_id == "msg_123"
    assert outcome.body["success"] is True
    assert outcome.body["message"] == SUCCESS_MESSAGE
    assert outcome.body["data"]["name"] == "Jo"
    assert outcome.body["data"]["email"] == "jo@example.com"
    assert "message" not in outcome.body["data"]

    sent = dispatcher.sent[0]
    assert sent.subject == "Hi there"
    assert sent.user_agent == "pytest"
    assert sent.submitted_at == outcome.body["data"]["timestamp"]


def test_missing_user_agent_defaults_to_unknown(dispatcher):
    handle_submission(VALID_FORM, None, dispatcher, logger)
    assert dispatcher.sent[0].user_agent == "Unknown"


def test_dispatch_error_becomes_500_with_detail(settings):
    failing = FakeDispatcher(
        settings,
        error=DispatchError(
            'Resend API error: 422 {"message":"bad from"}',
            status_code=422,
            body='{"message":"bad from"}',
        ),
    )
    outcome = handle_submission(VALID_FORM, "pytest", failing, logger)

    assert outcome.status_code == 500
    assert outcome.body["success"] is False
    assert outcome.body["message"] == FAILURE_MESSAGE
    assert "422" in outcome.body["error"]
    assert '{"message":"bad from"}' in outcome.body["error"]


def test_build_submission_stamps_utc_iso_timestamp():
    now = datetime(2026, 3, 1, 9, 15, 30, 250000, tzinfo=timezone.utc)
    submission = build_submission(
        {"name": "Jo", "email": "jo@example.com", "message": "Hello there friend"},
        "",
        now=now,
    )
    assert submission.submitted_at == "2026-03-01T09:15:30.250Z"
    assert submission.user_agent == "Unknown"
    assert submission.phone == ""
