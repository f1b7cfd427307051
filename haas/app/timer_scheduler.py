"""Keyed one-shot timers on top of a UI or event-loop scheduler.

Controllers pass ``schedule(delay_ms, callback)`` and ``cancel(token)``
callables into this class so timer state is tracked in one place and canceled
safely when the view closes. ``for_loop`` binds it to an asyncio loop.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

ScheduleFn = Callable[[int, Callable[[], None]], Any]
CancelFn = Callable[[Any], None]


@dataclass
class TimerHandle:
    """Pending timer associated with a single key.

    Attributes:
        key: Timer key (for example ``visibility-menu``).
        token: Token returned by the underlying scheduler.
    """
    key: str
    token: Any


class TimerScheduler:
    """Manage keyed one-shot timers using an injected scheduler."""

    def __init__(self, schedule: ScheduleFn, cancel: CancelFn) -> None:
        """Store schedule/cancel functions and initialize the handle registry.

        Args:
            schedule: Function compatible with ``after(delay_ms, callback)``.
            cancel: Function that cancels a token returned by ``schedule``.
        """
        self._schedule = schedule
        self._cancel = cancel
        self._handles: Dict[str, TimerHandle] = {}

    @classmethod
    def for_loop(cls, loop: Optional[asyncio.AbstractEventLoop] = None) -> "TimerScheduler":
        """Build a scheduler backed by ``loop.call_later``."""
        target = loop or asyncio.get_running_loop()

        def _schedule(delay_ms: int, callback: Callable[[], None]) -> asyncio.TimerHandle:
            return target.call_later(delay_ms / 1000.0, callback)

        def _cancel(token: Any) -> None:
            token.cancel()

        return cls(_schedule, _cancel)

    def schedule(self, key: str, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        """Schedule or reschedule the timer for ``key``.

        The handle is dropped from the registry right before ``callback`` runs.
        """
        delay = max(1, int(delay_ms))
        self.cancel(key)
        handle = TimerHandle(key=key, token=None)

        def _fire() -> None:
            if self._handles.get(key) is handle:
                del self._handles[key]
            callback()

        handle.token = self._schedule(delay, _fire)
        self._handles[key] = handle
        return handle

    def cancel(self, key: str) -> bool:
        """Cancel the pending timer for ``key``; return whether one existed."""
        handle = self._handles.pop(key, None)
        if handle is None:
            return False
        self._cancel(handle.token)
        return True

    def cancel_all(self) -> None:
        for key in list(self._handles.keys()):
            self.cancel(key)

    def handle_for(self, key: str) -> Optional[TimerHandle]:
        return self._handles.get(key)


__all__ = ["TimerHandle", "TimerScheduler"]
