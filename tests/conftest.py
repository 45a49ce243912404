from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

import pytest


class RecordingSurface:
    """Render surface that keeps everything it receives."""

    def __init__(self) -> None:
        self.commands: list[Any] = []
        self.log_lines: list[str] = []
        self.alerts: list[str] = []
        self.clears = 0

    def render(self, command: Any) -> None:
        self.commands.append(command)

    def append_log(self, markup: str) -> None:
        self.log_lines.append(markup)

    def clear_log(self) -> None:
        self.clears += 1
        self.log_lines.clear()

    def alert(self, message: str) -> None:
        self.alerts.append(message)


class StepClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self) -> None:
        self._now = datetime(2026, 1, 1, 9, 0, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        current = self._now
        self._now += timedelta(seconds=1)
        return current


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def clock() -> StepClock:
    return StepClock()
