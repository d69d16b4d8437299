from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

UNKNOWN_USER_AGENT = "Unknown"


class ContactSubmission(BaseModel):
    """
    A sanitized contact-form submission, ready for dispatch.

    Instances are only built after validation + sanitization have passed, so
    dispatchers treat every field as already clean.
    """

    name: str
    email: str
    phone: str = ""
    subject: str = ""
    message: str
    submitted_at: str = Field(
        ...,
        description="ISO-8601 UTC timestamp stamped when the request arrived.",
    )
    user_agent: str = UNKNOWN_USER_AGENT


class ContactEcho(BaseModel):
    """Fields echoed back to the browser on success (never the message body)."""

    name: str
    email: str
    timestamp: str


class ContactResponse(BaseModel):
    """JSON envelope returned by the /contact endpoint."""

    success: bool
    message: str
    data: Optional[ContactEcho] = None
    errors: Optional[List[str]] = None
    error: Optional[str] = None
