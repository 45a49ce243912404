"""Single-slot deferred callback used for channel reconnects."""

from __future__ import annotations

import asyncio
from collections.abc import Callable


class ReconnectTimer:
    """Run a callback once after a fixed delay, with at most one pending.

    :meth:`schedule` replaces a pending handle instead of stacking a
    second one, so repeated closes can never produce duplicate reconnects.
    """

    def __init__(
        self,
        delay: float,
        callback: Callable[[], None],
        *,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._delay = delay
        self._callback = callback
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self) -> None:
        self.cancel()
        loop = self._loop or asyncio.get_running_loop()
        self._handle = loop.call_later(self._delay, self._fire)

    def cancel(self) -> None:
        handle = self._handle
        self._handle = None
        if handle is not None:
            handle.cancel()

    def _fire(self) -> None:
        self._handle = None
        self._callback()
