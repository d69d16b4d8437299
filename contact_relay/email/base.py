from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import requests

from contact_relay.config import Settings
from contact_relay.errors import DispatchError
from contact_relay.schemas.contact import ContactSubmission

logger = logging.getLogger("contact_relay.email.base")

# Provider bodies can be large HTML error pages; log only the head.
_LOG_BODY_LIMIT = 1000


class EmailDispatcher(ABC):
    """
    One outbound email integration.

    `send()` takes an already validated + sanitized submission, performs a
    single provider call and returns the provider's message identifier.
    Any failure surfaces as DispatchError; nothing is retried here.
    """

    provider_name: str = "email"

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    @abstractmethod
    def send(self, submission: ContactSubmission) -> str:
        raise NotImplementedError

    def _require(self, value: Optional[str], env_name: str) -> str:
        if not value or not str(value).strip():
            logger.error(
                "%s dispatch aborted: %s is not configured",
                self.provider_name,
                env_name,
            )
            raise DispatchError(f"{env_name} is not configured")
        return str(value).strip()


class HttpEmailDispatcher(EmailDispatcher):
    """Base for providers reached with a plain HTTPS POST via requests."""

    def _post(self, url: str, **kwargs: Any) -> requests.Response:
        try:
            response = requests.post(
                url,
                timeout=self._settings.provider_timeout_seconds,
                **kwargs,
            )
        except requests.exceptions.RequestException as exc:
            logger.error("%s API request failed: %s", self.provider_name, exc)
            raise DispatchError(f"{self.provider_name} API request failed: {exc}") from exc

        if not response.ok:
            body = response.text
            logger.error(
                "%s responded with error: status=%s body=%s",
                self.provider_name,
                response.status_code,
                body[:_LOG_BODY_LIMIT],
            )
            raise DispatchError(
                f"{self.provider_name} API error: {response.status_code} {body}",
                status_code=response.status_code,
                body=body,
            )

        return response

    @staticmethod
    def _json(response: requests.Response) -> Dict[str, Any]:
        try:
            payload = response.json()
        except ValueError:
            return {}
        return payload if isinstance(payload, dict) else {}
