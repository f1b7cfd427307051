from __future__ import annotations

import asyncio

import pytest

from haas.app.timer_scheduler import TimerScheduler
from haas.tests.unit.app.helpers import FakeScheduler


def test_schedule_fires_once_and_drops_handle() -> None:
    clock = FakeScheduler()
    scheduler = clock.scheduler()
    fired = []

    scheduler.schedule("menu", 200, lambda: fired.append(clock.now))
    assert scheduler.handle_for("menu") is not None

    clock.advance(199)
    assert fired == []
    clock.advance(1)
    assert fired == [200]
    assert scheduler.handle_for("menu") is None


def test_reschedule_cancels_previous_timer() -> None:
    clock = FakeScheduler()
    scheduler = clock.scheduler()
    fired = []

    first = scheduler.schedule("menu", 200, lambda: fired.append("first"))
    scheduler.schedule("menu", 200, lambda: fired.append("second"))
    clock.advance(500)

    assert fired == ["second"]
    assert first.token in clock.cancelled


def test_cancel_reports_whether_timer_existed() -> None:
    clock = FakeScheduler()
    scheduler = clock.scheduler()
    scheduler.schedule("a", 10, lambda: None)

    assert scheduler.cancel("a") is True
    assert scheduler.cancel("a") is False


def test_cancel_all_clears_every_key() -> None:
    clock = FakeScheduler()
    scheduler = clock.scheduler()
    fired = []
    scheduler.schedule("a", 10, lambda: fired.append("a"))
    scheduler.schedule("b", 20, lambda: fired.append("b"))

    scheduler.cancel_all()
    clock.advance(100)

    assert fired == []
    assert clock.timers == {}


@pytest.mark.asyncio
async def test_for_loop_uses_call_later() -> None:
    scheduler = TimerScheduler.for_loop(asyncio.get_running_loop())
    fired = asyncio.Event()

    scheduler.schedule("tick", 5, fired.set)
    await asyncio.wait_for(fired.wait(), timeout=1.0)

    assert scheduler.handle_for("tick") is None
