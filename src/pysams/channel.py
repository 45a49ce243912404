"""Persistent status channel to the control server.

Owns one websocket connection at a time. Every close, graceful or not,
schedules exactly one reconnect after a fixed delay, forever. Transport
problems only ever surface as log entries.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from enum import StrEnum

import aiohttp

from pysams._constants import RECONNECT_DELAY_SECONDS
from pysams._scheduler import ReconnectTimer
from pysams.logsink import LogLevel, LogSink
from pysams.state.events import decode_frame
from pysams.state.store import StateReconciler

_logger = logging.getLogger(__name__)


class ConnectionState(StrEnum):
    CONNECTING = "connecting"
    OPEN = "open"
    CLOSED = "closed"


class StatusChannel:
    """Websocket reader that feeds the reconciler."""

    def __init__(
        self,
        *,
        url: str,
        http_session: aiohttp.ClientSession,
        reconciler: StateReconciler,
        log_sink: LogSink,
        reconnect_delay: float = RECONNECT_DELAY_SECONDS,
        heartbeat: float | None = None,
    ) -> None:
        self._url = url
        self._http = http_session
        self._reconciler = reconciler
        self._log_sink = log_sink
        self._heartbeat = heartbeat
        self._timer = ReconnectTimer(reconnect_delay, self._reconnect)
        self._task: asyncio.Task[None] | None = None
        self._state = ConnectionState.CLOSED
        self._closing = False

    @property
    def url(self) -> str:
        return self._url

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def reconnect_pending(self) -> bool:
        return self._timer.pending

    def open(self) -> None:
        """Start a connection attempt.

        Cancels a stale pending reconnect first. A no-op while a
        connection task is still alive.
        """
        self._timer.cancel()
        if self._task is not None and not self._task.done():
            return
        self._closing = False
        self._state = ConnectionState.CONNECTING
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def close(self) -> None:
        """Shut the channel down for good (no reconnect)."""
        self._closing = True
        self._timer.cancel()
        task = self._task
        self._task = None
        if task is not None:
            if not task.done():
                task.cancel()
            try:
                with contextlib.suppress(asyncio.CancelledError):
                    await task
            except Exception:
                _logger.debug("Status channel task failed", exc_info=True)
        self._state = ConnectionState.CLOSED

    async def _run(self) -> None:
        try:
            async with self._http.ws_connect(self._url, heartbeat=self._heartbeat) as ws:
                self._handle_open()
                async for msg in ws:
                    if msg.type in (aiohttp.WSMsgType.TEXT, aiohttp.WSMsgType.BINARY):
                        try:
                            self.handle_frame(msg.data)
                        except Exception:
                            _logger.warning("Failed to handle status frame", exc_info=True)
                    elif msg.type == aiohttp.WSMsgType.ERROR:
                        self._handle_error(ws.exception())
        except (aiohttp.ClientError, OSError, TimeoutError) as exc:
            self._handle_error(exc)
        finally:
            if not self._closing:
                self._handle_close()

    def _handle_open(self) -> None:
        self._state = ConnectionState.OPEN
        _logger.debug("Status channel open url=%s", self._url)
        self._log_sink.append(LogLevel.INFO, "Connected to server")

    def _handle_error(self, exc: BaseException | None) -> None:
        _logger.debug("Status channel error url=%s: %r", self._url, exc)
        message = "Connection error" if exc is None else f"Connection error ({type(exc).__name__})"
        self._log_sink.append(LogLevel.ERROR, message)

    def _handle_close(self) -> None:
        self._state = ConnectionState.CLOSED
        _logger.debug("Status channel closed; reconnecting in %.1fs", self._timer.delay)
        self._log_sink.append(LogLevel.WARNING, "Disconnected from server, reconnecting...")
        self._timer.schedule()

    def _reconnect(self) -> None:
        self.open()

    def handle_frame(self, data: str | bytes) -> None:
        """Decode and dispatch one frame. Undecodable frames are dropped."""
        payload = decode_frame(data)
        if payload is None:
            return
        self._reconciler.dispatch(payload)
