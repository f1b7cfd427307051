from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Optional, Tuple

from haas.adapters.projects_mock import ProjectsMock
from haas.app.fetch_pipeline import FetchPipeline, run_inline
from haas.app.session_store import SessionStore
from haas.app.timer_scheduler import TimerScheduler
from haas.domain.entities import ProjectDraft


class ManualOffload:
    """Offload that parks every call until the test resolves it.

    Lets a test decide the order in which concurrent calls complete.
    """

    def __init__(self) -> None:
        self.pending: List[Tuple[Callable[..., Any], tuple, dict, asyncio.Future]] = []

    async def __call__(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        future: asyncio.Future = asyncio.get_running_loop().create_future()
        self.pending.append((fn, args, kwargs, future))
        return await future

    def resolve(self, index: int = 0) -> None:
        """Run the parked call at ``index`` and complete its future."""
        fn, args, kwargs, future = self.pending.pop(index)
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as exc:  # handed to the awaiting coroutine
            future.set_exception(exc)


async def settle() -> None:
    """Let every runnable task advance until it blocks again."""
    for _ in range(10):
        await asyncio.sleep(0)


class FakeScheduler:
    """``schedule``/``cancel`` pair with a manual clock."""

    def __init__(self) -> None:
        self.now = 0
        self._next = 0
        self.timers: Dict[int, Tuple[int, Callable[[], None]]] = {}
        self.cancelled: List[int] = []

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> int:
        self._next += 1
        self.timers[self._next] = (self.now + delay_ms, callback)
        return self._next

    def cancel(self, token: int) -> None:
        self.cancelled.append(token)
        self.timers.pop(token, None)

    def advance(self, ms: int) -> None:
        self.now += ms
        due = sorted(
            (at, token) for token, (at, _cb) in self.timers.items() if at <= self.now
        )
        for _at, token in due:
            entry = self.timers.pop(token, None)
            if entry is not None:
                entry[1]()

    def scheduler(self) -> TimerScheduler:
        return TimerScheduler(self.schedule, self.cancel)


def logged_in(user_id: Optional[str] = "alice") -> SessionStore:
    session = SessionStore()
    if user_id:
        session.login(user_id)
    return session


def inline_pipeline() -> FetchPipeline:
    return FetchPipeline(run_inline)


def seeded_mock() -> ProjectsMock:
    """alice owns private proj-1 (Robotics); bob and carol exist; pub-1 is public."""
    mock = ProjectsMock()
    for user in ("alice", "bob", "carol"):
        mock.add_user(user)
    mock.create_project(
        ProjectDraft(
            project_id="proj-1",
            name="Robotics",
            description="Line follower",
            created_by="alice",
            quotas={"hwset1": 15, "hwset2": 10},
        )
    )
    mock.create_project(
        ProjectDraft(
            project_id="pub-1",
            name="Open Lab",
            description="",
            created_by="carol",
            is_public=True,
            quotas={"hwset1": 15, "hwset2": 10},
        )
    )
    mock.calls.clear()
    return mock


__all__ = [
    "FakeScheduler",
    "ManualOffload",
    "inline_pipeline",
    "logged_in",
    "seeded_mock",
    "settle",
]
