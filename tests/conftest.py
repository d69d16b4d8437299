from __future__ import annotations

from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

from contact_relay.config import Settings
from contact_relay.dependencies import get_app_settings, get_dispatcher
from contact_relay.email.base import EmailDispatcher
from contact_relay.main import create_app
from contact_relay.schemas.contact import ContactSubmission


class FakeDispatcher(EmailDispatcher):
    """Records submissions; returns a fixed id or raises the configured error."""

    provider_name = "Fake"

    def __init__(
        self,
        settings: Settings,
        message_id: str = "msg_123",
        error: Optional[Exception] = None,
    ) -> None:
        super().__init__(settings)
        self.message_id = message_id
        self.error = error
        self.sent: List[ContactSubmission] = []

    def send(self, submission: ContactSubmission) -> str:
        self.sent.append(submission)
        if self.error is not None:
            raise self.error
        return self.message_id


def make_settings(**overrides) -> Settings:
    values = {
        "EMAIL_PROVIDER": "resend",
        "RESEND_API_KEY": "re_test_key",
        "EMAIL_FROM": "noreply@example.com",
        "EMAIL_FROM_NAME": "Example Fitness",
        "CONTACT_RECIPIENTS": "info@example.com",
        "DISPLAY_TIMEZONE": "America/New_York",
        "CORS_ALLOW_ORIGIN": "*",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def dispatcher(settings) -> FakeDispatcher:
    return FakeDispatcher(settings)


@pytest.fixture
def submission() -> ContactSubmission:
    return ContactSubmission(
        name="Jo Smith",
        email="jo@example.com",
        phone="",
        subject="Personal training",
        message="Hello there friend\nCan we talk?",
        submitted_at="2026-01-15T17:30:00.000Z",
        user_agent="pytest",
    )


@pytest.fixture
def app(settings, dispatcher):
    application = create_app()
    application.dependency_overrides[get_app_settings] = lambda: settings
    application.dependency_overrides[get_dispatcher] = lambda: dispatcher
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def failing_dispatch(settings, app):
    def _install(error: Exception) -> FakeDispatcher:
        fake = FakeDispatcher(settings, error=error)
        app.dependency_overrides[get_dispatcher] = lambda: fake
        return fake

    return _install


