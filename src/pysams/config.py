"""Client configuration for pysams."""

from __future__ import annotations

import dataclasses
import os
from typing import Any
from urllib.parse import urlsplit

from pysams._constants import (
    DEFAULT_ORIGIN,
    RECONNECT_DELAY_SECONDS,
    REQUEST_TIMEOUT_SECONDS,
    WS_PATH,
)
from pysams.exceptions import SamsConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _split_origin(origin: str) -> tuple[str, str]:
    parts = urlsplit(origin.strip())
    scheme = parts.scheme.lower()
    if scheme not in {"http", "https"}:
        raise SamsConfigError(f"origin must use http or https, got {origin!r}")
    if not parts.netloc:
        raise SamsConfigError(f"origin is missing a host: {origin!r}")
    return scheme, parts.netloc


def endpoint_url(origin: str) -> str:
    """Return the status channel URL for a page origin.

    The websocket scheme mirrors the page's own transport security:
    ``https`` pages get ``wss``, everything else ``ws``.
    """
    scheme, netloc = _split_origin(origin)
    ws_scheme = "wss" if scheme == "https" else "ws"
    return f"{ws_scheme}://{netloc}{WS_PATH}"


@dataclasses.dataclass(frozen=True)
class SamsConfig:
    """Client configuration.

    Parameters
    ----------
    origin : str
        Origin of the control server (``scheme://host[:port]``). Every
        endpoint, including the status channel, is derived from it.
    reconnect_delay : float
        Seconds between a channel close and the next connection attempt.
    request_timeout : float
        Total timeout in seconds for one HTTP request.
    log_capacity : int or None
        Maximum number of retained log entries. ``None`` keeps the log
        unbounded until the operator clears it.
    ws_heartbeat : float or None
        Optional aiohttp websocket heartbeat interval in seconds.
    push_enabled : bool
        Open the push channel on start. When disabled the client relies
        on snapshot fetches only.
    """

    origin: str = DEFAULT_ORIGIN
    reconnect_delay: float = RECONNECT_DELAY_SECONDS
    request_timeout: float = REQUEST_TIMEOUT_SECONDS
    log_capacity: int | None = None
    ws_heartbeat: float | None = None
    push_enabled: bool = True

    def __post_init__(self) -> None:
        _split_origin(self.origin)
        if self.reconnect_delay < 0:
            raise SamsConfigError("reconnect_delay must be >= 0")
        if self.request_timeout <= 0:
            raise SamsConfigError("request_timeout must be > 0")
        if self.log_capacity is not None and self.log_capacity <= 0:
            raise SamsConfigError("log_capacity must be positive or None")

    @property
    def ws_url(self) -> str:
        return endpoint_url(self.origin)

    def api_url(self, endpoint: str) -> str:
        scheme, netloc = _split_origin(self.origin)
        return f"{scheme}://{netloc}{endpoint}"

    @classmethod
    def from_env(cls, **overrides: Any) -> SamsConfig:
        """Create configuration from environment variables.

        Reads ``SAMS_ORIGIN``, ``SAMS_RECONNECT_DELAY``,
        ``SAMS_REQUEST_TIMEOUT``, ``SAMS_LOG_CAPACITY``,
        ``SAMS_WS_HEARTBEAT`` and ``SAMS_PUSH_ENABLED``. Explicit keyword
        arguments override environment values.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        origin = env.get("SAMS_ORIGIN")
        if origin is not None:
            config_kwargs["origin"] = origin

        delay_env = env.get("SAMS_RECONNECT_DELAY")
        if delay_env is not None and "reconnect_delay" not in overrides:
            config_kwargs["reconnect_delay"] = float(delay_env)

        timeout_env = env.get("SAMS_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            config_kwargs["request_timeout"] = float(timeout_env)

        capacity_env = env.get("SAMS_LOG_CAPACITY")
        if capacity_env is not None and "log_capacity" not in overrides:
            # Empty or zero means "unbounded".
            capacity = int(capacity_env) if capacity_env.strip() else 0
            config_kwargs["log_capacity"] = capacity if capacity > 0 else None

        heartbeat_env = env.get("SAMS_WS_HEARTBEAT")
        if heartbeat_env is not None and "ws_heartbeat" not in overrides:
            config_kwargs["ws_heartbeat"] = float(heartbeat_env)

        if "push_enabled" not in overrides:
            config_kwargs["push_enabled"] = _env_bool(env.get("SAMS_PUSH_ENABLED"), True)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
