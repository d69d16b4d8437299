from __future__ import annotations

import re
from typing import Any

MAX_FIELD_LENGTH = 5000

_ANGLE_BRACKETS = re.compile(r"[<>]")
_JAVASCRIPT_SCHEME = re.compile(r"javascript:", re.IGNORECASE)
_EVENT_HANDLER = re.compile(r"on\w+=", re.IGNORECASE | re.ASCII)


def _strip_once(text: str) -> str:
    text = _ANGLE_BRACKETS.sub("", text)
    text = _JAVASCRIPT_SCHEME.sub("", text)
    return _EVENT_HANDLER.sub("", text)


def sanitize_input(value: Any) -> str:
    """
    Best-effort denylist cleanup for user supplied text.

    Truncates to MAX_FIELD_LENGTH, then strips `<`, `>`, `javascript:` and
    `on<word>=` until nothing more matches. This is not an HTML sanitizer;
    anything rendered as raw HTML downstream still needs escaping.
    """
    if not isinstance(value, str):
        return ""

    # Removing one pattern can splice together another ("javajavascript:script:").
    previous = None
    text = value[:MAX_FIELD_LENGTH]
    while text != previous:
        previous = text
        text = _strip_once(text)

    return text
