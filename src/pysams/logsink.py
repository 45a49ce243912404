"""Append-only operator log.

Entries are ordered by receipt and stamped with the local receipt time,
never with a timestamp carried in the payload. The log is independent of
the canonical state: reconnects and status changes never touch it, only
an explicit :meth:`LogSink.clear` does.
"""

from __future__ import annotations

import html
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum

from pysams.view.surface import NullSurface, RenderSurface


def _utcnow() -> datetime:
    return datetime.now(UTC)


class LogLevel(StrEnum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"

    @classmethod
    def _missing_(cls, value: object) -> LogLevel:
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value == normalized:
                    return member
        return cls.INFO


@dataclass(frozen=True)
class LogEntry:
    timestamp: datetime
    level: LogLevel
    message: str


def render_log_entry(entry: LogEntry) -> str:
    """Render *entry* as markup.

    The message is untrusted remote text and is always escaped.
    """
    stamp = entry.timestamp.astimezone().strftime("%H:%M:%S")
    return (
        '<div class="log-entry">'
        f'<span class="log-time">{stamp}</span>'
        f'<span class="log-level {entry.level.value}">{entry.level.value.upper()}</span>'
        f'<span class="log-message">{html.escape(entry.message)}</span>'
        "</div>"
    )


class LogSink:
    """Ordered log of timestamped, leveled messages.

    With ``capacity=None`` (the default) the log grows until cleared.
    A positive capacity keeps only the most recent entries.
    """

    def __init__(
        self,
        *,
        surface: RenderSurface | None = None,
        capacity: int | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._surface: RenderSurface = surface if surface is not None else NullSurface()
        self._clock = clock
        self._capacity = capacity
        self._entries: deque[LogEntry] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int | None:
        return self._capacity

    @property
    def entries(self) -> tuple[LogEntry, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def append(self, level: LogLevel | str, message: str) -> LogEntry:
        entry = LogEntry(timestamp=self._clock(), level=LogLevel(level), message=str(message))
        self._entries.append(entry)
        self._surface.append_log(render_log_entry(entry))
        return entry

    def clear(self) -> None:
        """Discard every entry. Not recoverable."""
        self._entries.clear()
        self._surface.clear_log()
