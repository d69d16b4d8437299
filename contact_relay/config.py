from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("contact_relay.config")

SUPPORTED_PROVIDERS = ("resend", "sendgrid", "mailgun", "backend")


class Settings(BaseSettings):
    """
    Central configuration for the contact relay.

    - Reads from .env (local) and the process environment (edge host, CI).
    - Provider credentials are optional here; a dispatcher with a missing
      credential fails at send time with a DispatchError, not at startup.
    - Ignores extra env vars so adding new ones doesn't break startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # -------------------------------------------------------------------------
    # Core app
    # -------------------------------------------------------------------------
    app_name: str = Field(default="Contact Relay", alias="APP_NAME")
    debug: bool = Field(default=False, alias="DEBUG")
    environment: str = Field(default="local", alias="ENVIRONMENT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # -------------------------------------------------------------------------
    # CORS
    # -------------------------------------------------------------------------
    # Wildcard is for local development only; set this to the site's real
    # origin before going to production.
    cors_allow_origin: str = Field(default="*", alias="CORS_ALLOW_ORIGIN")

    # -------------------------------------------------------------------------
    # Email provider selection + credentials
    # -------------------------------------------------------------------------
    email_provider: str = Field(default="resend", alias="EMAIL_PROVIDER")

    resend_api_key: Optional[str] = Field(default=None, alias="RESEND_API_KEY")
    sendgrid_api_key: Optional[str] = Field(default=None, alias="SENDGRID_API_KEY")
    mailgun_api_key: Optional[str] = Field(default=None, alias="MAILGUN_API_KEY")
    mailgun_domain: str = Field(default="yourdomain.com", alias="MAILGUN_DOMAIN")

    # Forward-to-backend option
    backend_api_url: Optional[str] = Field(default=None, alias="BACKEND_API_URL")
    backend_api_key: Optional[str] = Field(default=None, alias="BACKEND_API_KEY")

    # None means no client-side timeout; the hosting platform's limit applies.
    provider_timeout_seconds: Optional[float] = Field(
        default=None,
        alias="PROVIDER_TIMEOUT_SECONDS",
    )

    # -------------------------------------------------------------------------
    # Message envelope
    # -------------------------------------------------------------------------
    email_from_address: str = Field(
        default="noreply@yourdomain.com",
        alias="EMAIL_FROM",
    )
    email_from_name: str = Field(default="Philip Fitness", alias="EMAIL_FROM_NAME")

    # CONTACT_RECIPIENTS=info@example.com,owner@example.com
    contact_recipients_raw: str = Field(
        default="info@philipfitness.com",
        alias="CONTACT_RECIPIENTS",
    )

    display_timezone: str = Field(
        default="America/New_York",
        alias="DISPLAY_TIMEZONE",
    )

    @field_validator("email_provider", mode="before")
    @classmethod
    def normalize_provider(cls, v):
        value = str(v or "resend").strip().lower()
        if value not in SUPPORTED_PROVIDERS:
            raise ValueError(
                f"EMAIL_PROVIDER must be one of {', '.join(SUPPORTED_PROVIDERS)}"
            )
        return value

    @property
    def from_header(self) -> str:
        """RFC 5322 style `Name <address>` used by the HTTP providers."""
        if self.email_from_name:
            return f"{self.email_from_name} <{self.email_from_address}>"
        return self.email_from_address

    @property
    def contact_recipients(self) -> list[str]:
        """
        Returns the recipient list from the comma-separated env string.
        Safe if env is missing or empty.
        """
        if not self.contact_recipients_raw:
            return []
        return [
            address.strip()
            for address in self.contact_recipients_raw.split(",")
            if address.strip()
        ]


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader so config is evaluated once per process.
    """
    settings = Settings()
    logger.info(
        "Settings loaded (env=%s, provider=%s, debug=%s)",
        settings.environment,
        settings.email_provider,
        settings.debug,
    )
    if settings.cors_allow_origin == "*":
        logger.warning(
            "CORS_ALLOW_ORIGIN is '*'; restrict it to the site origin in production."
        )
    return settings
