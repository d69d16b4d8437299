from __future__ import annotations

import pytest
import requests

from contact_relay.precheck import (
    BANNER_DISMISS_SECONDS,
    NETWORK_ERROR_BANNER,
    ContactFormClient,
    precheck_form,
)


class FakeResponse:
    def __init__(self, status_code, payload):
        self.status_code = status_code
        self._payload = payload

    def json(self):
        return self._payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []
        self.busy_during_call = None
        self.client = None

    def post(self, url, data=None, timeout=None):
        self.calls.append({"url": url, "data": data, "timeout": timeout})
        if self.client is not None:
            self.busy_during_call = self.client.busy
        if self.error is not None:
            raise self.error
        return self.response


def test_precheck_collects_client_messages():
    result = precheck_form("A", "bad", "short")
    assert not result.ok
    assert result.errors == [
        "Please enter a valid name",
        "Please enter a valid email address",
        "Please enter a message (at least 10 characters)",
    ]
    assert result.banner == "<br>".join(result.errors)


def test_precheck_passes_valid_fields():
    result = precheck_form("Jo", "jo@example.com", "Hello there friend")
    assert result.ok
    assert result.errors == []
    assert result.banner == ""


def test_failed_precheck_makes_no_network_call():
    session = FakeSession()
    client = ContactFormClient("https://example.com/contact", session=session)

    result = client.submit({"name": "J", "email": "bad", "message": "short"})

    assert result.sent is False
    assert session.calls == []
    assert "Please enter a valid name" in result.banner
    assert result.dismiss_after_seconds == BANNER_DISMISS_SECONDS


def test_successful_submit_posts_form_and_clears_busy():
    session = FakeSession(
        response=FakeResponse(
            200,
            {
                "success": True,
                "message": "Thank you for your message! We'll get back to you within 24 hours.",
                "data": {"name": "Jo", "email": "jo@example.com", "timestamp": "t"},
            },
        )
    )
    client = ContactFormClient("https://example.com/contact", session=session)
    session.client = client

    fields = {
        "name": "Jo",
        "email": "jo@example.com",
        "message": "Hello there friend",
        "website": "",
    }
    result = client.submit(fields)

    assert result.sent is True
    assert result.status_code == 200
    assert result.banner.startswith("Thank you")
    assert session.calls[0]["url"] == "https://example.com/contact"
    assert session.calls[0]["data"] == fields
    assert session.busy_during_call is True
    assert client.busy is False


def test_server_validation_errors_become_banner():
    session = FakeSession(
        response=FakeResponse(
            400,
            {
                "success": False,
                "message": "Validation failed",
                "errors": ["Please provide a valid email address"],
            },
        )
    )
    client = ContactFormClient("https://example.com/contact", session=session)

    result = client.submit(
        {"name": "Jo", "email": "jo@example.com", "message": "Hello there friend"}
    )

    assert result.status_code == 400
    assert result.banner == "Please provide a valid email address"


@pytest.mark.parametrize("payload", [None, ["unexpected"]])
def test_non_envelope_response_falls_back_to_generic_banner(payload):
    session = FakeSession(response=FakeResponse(502, payload))
    client = ContactFormClient("https://example.com/contact", session=session)

    result = client.submit(
        {"name": "Jo", "email": "jo@example.com", "message": "Hello there friend"}
    )

    assert result.sent is True
    assert result.banner == NETWORK_ERROR_BANNER


def test_network_error_clears_busy():
    session = FakeSession(error=requests.exceptions.ConnectionError("down"))
    client = ContactFormClient("https://example.com/contact", session=session)

    result = client.submit(
        {"name": "Jo", "email": "jo@example.com", "message": "Hello there friend"}
    )

    assert result.sent is False
    assert result.banner == NETWORK_ERROR_BANNER
    assert client.busy is False
