"""Advisory form gate used before a submission leaves the browser side.

Mirrors what the static site does before posting: cheap local checks, an
inline banner on failure, and a busy flag while the request is in flight.
The edge handler re-validates everything; nothing here is authoritative.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

import requests

from contact_relay.rules import CLIENT, collect_errors

logger = logging.getLogger("contact_relay.precheck")

BANNER_DISMISS_SECONDS = 5
BANNER_SEPARATOR = "<br>"
SUCCESS_BANNER = "Thank you for your message! We'll get back to you within 24 hours."
NETWORK_ERROR_BANNER = "An error occurred. Please try again."


@dataclass
class PrecheckResult:
    ok: bool
    errors: List[str] = field(default_factory=list)

    @property
    def banner(self) -> str:
        return BANNER_SEPARATOR.join(self.errors)


def precheck_form(name: str, email: str, message: str) -> PrecheckResult:
    errors = collect_errors(name or "", email or "", message or "", audience=CLIENT)
    return PrecheckResult(ok=not errors, errors=errors)


@dataclass
class SubmitResult:
    """What the form shows after a submit attempt."""

    sent: bool
    banner: str
    precheck: PrecheckResult
    status_code: Optional[int] = None
    response: Optional[Dict[str, Any]] = None
    dismiss_after_seconds: int = BANNER_DISMISS_SECONDS


class ContactFormClient:
    """Posts contact fields to the edge endpoint after the local precheck."""

    def __init__(
        self,
        endpoint: str,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.endpoint = endpoint
        self._session = session or requests.Session()
        self._timeout = timeout
        self.busy = False

    def submit(self, fields: Mapping[str, str]) -> SubmitResult:
        result = precheck_form(
            fields.get("name", ""),
            fields.get("email", ""),
            fields.get("message", ""),
        )
        if not result.ok:
            logger.debug("Precheck blocked submission: %s", result.errors)
            return SubmitResult(sent=False, banner=result.banner, precheck=result)

        self.busy = True
        try:
            response = self._session.post(
                self.endpoint,
                data=dict(fields),
                timeout=self._timeout,
            )
        except requests.exceptions.RequestException as exc:
            logger.warning("Contact submission failed to send: %s", exc)
            return SubmitResult(sent=False, banner=NETWORK_ERROR_BANNER, precheck=result)
        finally:
            self.busy = False

        try:
            payload = response.json()
        except ValueError:
            payload = {}
        if not isinstance(payload, dict):
            payload = {}

        if payload.get("success"):
            banner = payload.get("message") or SUCCESS_BANNER
        else:
            banner = BANNER_SEPARATOR.join(payload.get("errors") or []) or payload.get(
                "message", NETWORK_ERROR_BANNER
            )

        return SubmitResult(
            sent=True,
            banner=banner,
            precheck=result,
            status_code=response.status_code,
            response=payload,
        )
