"""Cancellable fetch pipeline shared by every controller of a view.

Each remote call runs in a named slot ("project", "resources", "members",
"action:<hwsetId>", ...). Issuing a call hands out a token carrying the slot's
next epoch. A token is stale once a newer call was issued for the same slot or
once the pipeline was torn down; results of stale tokens must never be written
into view state.

Port calls are synchronous (``requests``). The pipeline runs them through an
offload coroutine, ``asyncio.to_thread`` by default, so each call is one
suspension point on the event loop. Offloaded calls may overlap on worker
threads; ports must tolerate that (``RetryingSession`` keeps one session per
thread).
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Generic, Optional, TypeVar

from haas.domain.errors import UseCaseError

T = TypeVar("T")
Offload = Callable[..., Awaitable[Any]]

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchToken:
    """Cancellation token for one issued call."""

    slot: str
    epoch: int
    pipeline: "FetchPipeline" = field(compare=False, repr=False)

    @property
    def cancelled(self) -> bool:
        return self.pipeline.is_stale(self)


@dataclass
class FetchResult(Generic[T]):
    """Either a value or a failure, plus the token it was issued under."""

    token: FetchToken
    value: Optional[T] = None
    error: Optional[UseCaseError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def stale(self) -> bool:
        return self.token.cancelled


class FetchPipeline:
    """Issue epoch-guarded calls and discard their results once superseded."""

    def __init__(self, offload: Optional[Offload] = None) -> None:
        self._offload: Offload = offload or asyncio.to_thread
        self._epochs: Dict[str, int] = {}
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def issue(self, slot: str) -> FetchToken:
        """Hand out a fresh token; every earlier token of ``slot`` goes stale."""
        epoch = self._epochs.get(slot, 0) + 1
        self._epochs[slot] = epoch
        return FetchToken(slot=slot, epoch=epoch, pipeline=self)

    def invalidate(self, slot: str) -> None:
        """Mark in-flight calls of ``slot`` stale without issuing a new one."""
        self._epochs[slot] = self._epochs.get(slot, 0) + 1

    def is_stale(self, token: FetchToken) -> bool:
        return self._closed or self._epochs.get(token.slot) != token.epoch

    def teardown(self) -> None:
        """Cancel every slot for good; called when the view goes away."""
        if not self._closed:
            _log.debug("Fetch pipeline torn down (slots=%s)", sorted(self._epochs))
        self._closed = True

    async def run(
        self, slot: str, fn: Callable[..., T], *args: Any, **kwargs: Any
    ) -> FetchResult[T]:
        """Run ``fn`` for ``slot`` and wrap its outcome.

        ``UseCaseError`` is captured into the result; any other exception is a
        programming error and propagates. After teardown nothing is issued and a
        stale result is returned immediately.
        """
        token = self.issue(slot)
        if self._closed:
            return FetchResult(token=token)
        try:
            value = await self._offload(fn, *args, **kwargs)
        except UseCaseError as exc:
            result: FetchResult[T] = FetchResult(token=token, error=exc)
        else:
            result = FetchResult(token=token, value=value)
        if result.stale:
            _log.debug("Discarding stale result for slot %s (epoch %s)", slot, token.epoch)
        return result


async def run_inline(fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """Offload that calls ``fn`` on the loop thread; for in-memory ports."""
    return fn(*args, **kwargs)


__all__ = ["FetchPipeline", "FetchResult", "FetchToken", "Offload", "run_inline"]
