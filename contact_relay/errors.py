from __future__ import annotations

from typing import List, Optional


class ContactError(Exception):
    """Base exception for contact pipeline failures."""


class SpamRejected(ContactError):
    """Raised when the honeypot field was filled in."""


class ValidationFailed(ContactError):
    """Raised when one or more field rules are violated."""

    def __init__(self, errors: List[str]) -> None:
        super().__init__("Validation failed")
        self.errors = list(errors)


class DispatchError(ContactError):
    """
    Raised by an email dispatcher when the provider call cannot complete.

    `status_code` and `body` are the provider's response verbatim, when the
    provider answered at all.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body
