"""Helpers for safe debug logging.

Request bodies carry the operator's auth token and personal details
(phone number, street address). :func:`redact_for_log` masks those
before anything reaches a DEBUG log.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel

# Compared after lower-casing and dropping underscores, so both the
# camelCase wire names and the snake_case model names match.
_SENSITIVE_KEYS: frozenset[str] = frozenset(
    {
        "authtoken",
        "token",
        "authorization",
        "cookie",
        "barkid",
        "deviceid",
        "trackinfo",
        "mobile",
        "detailaddress",
    }
)


def _is_sensitive(key: object) -> bool:
    return str(key).lower().replace("_", "") in _SENSITIVE_KEYS


def redact_for_log(value: Any, *, max_string: int = 512, _depth: int = 0) -> Any:
    """Return a redacted copy of *value* suitable for debug logs."""
    if _depth > 20:
        return "<max-depth>"

    if value is None or isinstance(value, (int, float, bool)):
        return value

    if isinstance(value, str):
        return f"{value[:max_string]}…<truncated>" if len(value) > max_string else value

    if isinstance(value, BaseModel):
        dumped = value.model_dump(by_alias=True, exclude={"raw"})
        return redact_for_log(dumped, max_string=max_string, _depth=_depth + 1)

    if isinstance(value, Mapping):
        return {
            str(key): "<redacted>" if _is_sensitive(key) else redact_for_log(item, max_string=max_string, _depth=_depth + 1)
            for key, item in value.items()
        }

    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        return [redact_for_log(item, max_string=max_string, _depth=_depth + 1) for item in value]

    return repr(value)
