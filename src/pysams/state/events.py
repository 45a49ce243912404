"""Inbound channel messages.

Both the push channel and the snapshot fetcher turn raw JSON objects
into these messages. Messages are tagged by field presence, not by an
explicit discriminator, and one payload may carry both a log line and a
status fragment.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, TypeAlias

from pydantic import ValidationError

from pysams.models._base import is_absent
from pysams.models.status import LogFragment, StatusFragment

_logger = logging.getLogger(__name__)

_LOG_KEYS: tuple[str, ...] = ("time", "level", "message")
_STATUS_KEYS: frozenset[str] = frozenset(
    {
        "step",
        "status",
        "address",
        "stores",
        "goodsList",
        "timeSlots",
        "deliveryFee",
        "order",
        "error",
    }
)


@dataclass(frozen=True)
class Ping:
    """Server heartbeat. Never forwarded anywhere."""


PING = Ping()

InboundMessage: TypeAlias = Ping | LogFragment | StatusFragment


def decode_frame(text: str | bytes) -> dict[str, Any] | None:
    """Decode one text frame into a JSON object, or ``None`` if it is not one."""
    try:
        payload = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError):
        _logger.debug("Dropping undecodable frame: %.128r", text)
        return None
    if not isinstance(payload, dict):
        _logger.debug("Dropping non-object frame: %.128r", text)
        return None
    return payload


def parse_message(payload: Mapping[str, Any]) -> list[InboundMessage]:
    """Split *payload* into the messages it carries, log line first."""
    if payload.get("type") == "ping":
        return [PING]

    messages: list[InboundMessage] = []
    if all(not is_absent(payload.get(key)) for key in _LOG_KEYS):
        try:
            messages.append(LogFragment.model_validate(dict(payload)))
        except ValidationError:
            _logger.debug("Dropping malformed log fragment", exc_info=True)

    if any(payload.get(key) is not None for key in _STATUS_KEYS):
        try:
            messages.append(StatusFragment.model_validate(dict(payload)))
        except ValidationError:
            fragment = _salvage_status(payload)
            if fragment is not None:
                messages.append(fragment)

    return messages


def _salvage_status(payload: Mapping[str, Any]) -> StatusFragment | None:
    """Keep the status fields that validate on their own.

    A field that fails validation counts as absent, so one bad value
    never costs the rest of the fragment (a remote ``error`` included).
    """
    kept: dict[str, Any] = {}
    for key in sorted(_STATUS_KEYS):
        value = payload.get(key)
        if value is None:
            continue
        try:
            StatusFragment.model_validate({key: value})
        except ValidationError:
            _logger.debug("Dropping malformed status field %s", key, exc_info=True)
            continue
        kept[key] = value
    if not kept:
        return None
    return StatusFragment.model_validate(kept)
