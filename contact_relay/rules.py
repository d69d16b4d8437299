"""Validation rules for contact submissions.

The advisory browser-side gate and the authoritative server handler both
evaluate this one rule set; only the wording shown to the user differs.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, List, Tuple

NAME_MIN_LENGTH = 2
MESSAGE_MIN_LENGTH = 10

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

SERVER = "server"
CLIENT = "client"


def is_valid_email(email: str) -> bool:
    return bool(email) and EMAIL_PATTERN.match(email) is not None


@dataclass(frozen=True)
class FieldRule:
    field: str
    check: Callable[[str], bool]
    server_message: str
    client_message: str

    def message_for(self, audience: str) -> str:
        return self.client_message if audience == CLIENT else self.server_message


RULES: Tuple[FieldRule, ...] = (
    FieldRule(
        field="name",
        check=lambda value: len(value.strip()) >= NAME_MIN_LENGTH,
        server_message="Name must be at least 2 characters long",
        client_message="Please enter a valid name",
    ),
    FieldRule(
        field="email",
        check=is_valid_email,
        server_message="Please provide a valid email address",
        client_message="Please enter a valid email address",
    ),
    FieldRule(
        field="message",
        check=lambda value: len(value.strip()) >= MESSAGE_MIN_LENGTH,
        server_message="Message must be at least 10 characters long",
        client_message="Please enter a message (at least 10 characters)",
    ),
)


def collect_errors(
    name: str,
    email: str,
    message: str,
    audience: str = SERVER,
) -> List[str]:
    """Evaluate every rule and return the messages of the ones that failed."""
    values = {"name": name or "", "email": email or "", "message": message or ""}
    return [
        rule.message_for(audience)
        for rule in RULES
        if not rule.check(values[rule.field])
    ]
