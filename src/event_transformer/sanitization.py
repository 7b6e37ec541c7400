"""Event data cleanup: JSON parsing of raw input and secret redaction for logs."""

from __future__ import annotations

import json
import re
from typing import Any

from .exceptions import InvalidEventDataError

REDACTED = "***"

# C0 control characters up to U+0019, including raw newlines and tabs that
# action inputs carry inside string values.
_CONTROL_CHARS = re.compile(r"[\u0000-\u0019]+")

# Keys such as ``token``, ``github_token``, ``webhook_secret``, ``Authorization``
# or ``x-api-key``, matched anywhere in the key, ignoring case.
_SENSITIVE_KEY = re.compile(
    r"token|secret|passw(or)?d|authorization|cookie|api[_-]?key|private[_-]?key|credential",
    re.IGNORECASE,
)

# Values that are credentials whatever key they sit under: auth header values
# and GitHub token formats.
_SENSITIVE_VALUE = re.compile(
    r"^(bearer|basic|token)\s+\S+$|^(gh[pousr]_|github_pat_)[A-Za-z0-9_]+$",
    re.IGNORECASE,
)


def parse_event_data(raw: str) -> Any:
    """Strip control characters from ``raw`` and parse it as JSON."""
    cleaned = _CONTROL_CHARS.sub("", raw)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise InvalidEventDataError(f"Event data is not valid JSON: {e}") from e


def redact_secrets(data: Any) -> Any:
    """
    Return a copy of event data that is safe to write to logs.

    Values under credential-like keys are replaced with ``***`` at any depth,
    as are strings shaped like an auth header or a GitHub token. Rendering
    always uses the unredacted data.
    """
    if isinstance(data, dict):
        return {
            str(key): REDACTED if _SENSITIVE_KEY.search(str(key)) else redact_secrets(value)
            for key, value in data.items()
        }
    if isinstance(data, list):
        return [redact_secrets(item) for item in data]
    if isinstance(data, str) and _SENSITIVE_VALUE.match(data.strip()):
        return REDACTED
    return data


__all__ = ["REDACTED", "parse_event_data", "redact_secrets"]
