from __future__ import annotations

import asyncio

import pytest

from pysams._scheduler import ReconnectTimer


@pytest.mark.asyncio
async def test_schedule_twice_fires_once() -> None:
    fired: list[int] = []
    timer = ReconnectTimer(0.01, lambda: fired.append(1))

    timer.schedule()
    timer.schedule()
    assert timer.pending is True

    await asyncio.sleep(0.05)

    assert fired == [1]
    assert timer.pending is False


@pytest.mark.asyncio
async def test_cancel_prevents_firing() -> None:
    fired: list[int] = []
    timer = ReconnectTimer(0.01, lambda: fired.append(1))

    timer.schedule()
    timer.cancel()
    await asyncio.sleep(0.05)

    assert fired == []
    assert timer.pending is False


@pytest.mark.asyncio
async def test_can_be_rescheduled_after_firing() -> None:
    fired: list[int] = []
    timer = ReconnectTimer(0.0, lambda: fired.append(1))

    timer.schedule()
    await asyncio.sleep(0.02)
    timer.schedule()
    await asyncio.sleep(0.02)

    assert fired == [1, 1]
