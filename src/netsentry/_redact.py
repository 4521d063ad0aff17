"""Helpers for safe debug logging.

Requests to the generative backend carry the API key, and its answers can
be long.  This module redacts sensitive fields and truncates long strings
before anything is emitted at DEBUG level.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

_SENSITIVE_VALUE_KEYS: frozenset[str] = frozenset(
    {
        "key",
        "apikey",
        "api_key",
        "x-goog-api-key",
        "authorization",
        "cookie",
        "password",
        "token",
    }
)


def redact_for_log(value: Any, *, max_string: int = 512) -> Any:
    """Copy a decoded JSON value (or a header mapping) with secrets masked.

    Strings longer than *max_string* are cut; scalars pass through.
    """
    if isinstance(value, Mapping):
        redacted: dict[str, Any] = {}
        for name, item in value.items():
            key = str(name)
            secret = key.lower() in _SENSITIVE_VALUE_KEYS
            redacted[key] = "<redacted>" if secret else redact_for_log(item, max_string=max_string)
        return redacted
    if isinstance(value, list):
        return [redact_for_log(item, max_string=max_string) for item in value]
    if isinstance(value, str) and len(value) > max_string:
        return f"{value[:max_string]}…<truncated>"
    return value


def redact_url(url: str) -> str:
    """Mask secret query parameters (``?key=...``) in *url*."""
    base, sep, query = url.partition("?")
    if not sep:
        return url
    parts: list[str] = []
    for pair in query.split("&"):
        name, eq, _value = pair.partition("=")
        if eq and name.lower() in _SENSITIVE_VALUE_KEYS:
            parts.append(f"{name}=<redacted>")
        else:
            parts.append(pair)
    return f"{base}?{'&'.join(parts)}"
