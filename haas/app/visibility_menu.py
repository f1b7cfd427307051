"""Hover-driven visibility menu of the project header.

States are ``CLOSED`` and ``OPEN``. Entering the badge opens the menu for the
project creator only. Leaving the badge or the menu schedules a close after a
short delay; re-entering either region before it fires cancels the close, so
the pointer can cross the gap between badge and menu without flicker.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Optional

from haas.domain.errors import UnauthenticatedError
from haas.usecases.set_visibility import SetVisibility
from haas.viewmodels.project_vm import ProjectHeaderVM

from .fetch_pipeline import FetchPipeline
from .session_store import SessionStore
from .timer_scheduler import TimerHandle, TimerScheduler

CLOSE_DELAY_MS = 200
TIMER_KEY = "visibility-menu"
SLOT = "visibility"


class MenuState(enum.Enum):
    CLOSED = "closed"
    OPEN = "open"


@dataclass
class VisibilityMenuState:
    state: MenuState = MenuState.CLOSED
    pending_close: Optional[TimerHandle] = None
    error: Optional[str] = None

    @property
    def open(self) -> bool:
        return self.state is MenuState.OPEN


class VisibilityMenuController:
    def __init__(
        self,
        *,
        project_id: str,
        header: ProjectHeaderVM,
        session: SessionStore,
        uc_set_visibility: SetVisibility,
        pipeline: FetchPipeline,
        scheduler: TimerScheduler,
        close_delay_ms: int = CLOSE_DELAY_MS,
    ) -> None:
        self._log = logging.getLogger(__name__)
        self.project_id = project_id
        self.header = header
        self.session = session
        self.uc_set_visibility = uc_set_visibility
        self.pipeline = pipeline
        self.scheduler = scheduler
        self.close_delay_ms = close_delay_ms
        self.menu = VisibilityMenuState()

    # ---- pointer events ----
    def badge_enter(self) -> None:
        if not self.header.is_owner(self.session.user_id):
            return
        self._cancel_close()
        self.menu.state = MenuState.OPEN

    def menu_enter(self) -> None:
        if not self.menu.open:
            return
        self._cancel_close()

    def badge_leave(self) -> None:
        self._schedule_close()

    def menu_leave(self) -> None:
        self._schedule_close()

    # ---- action ----
    @property
    def offered_label(self) -> Optional[str]:
        """Label of the single action on offer, or ``None`` while closed."""
        if not self.menu.open:
            return None
        return "Make Private" if self.header.is_public else "Make Public"

    async def select(self) -> None:
        """Request the opposite of the current visibility."""
        if not self.menu.open:
            return
        user_id = self.session.user_id
        if not user_id:
            self.menu.error = UnauthenticatedError().message
            return
        requested = not bool(self.header.is_public)
        self.menu.error = None
        result = await self.pipeline.run(
            SLOT, self.uc_set_visibility, self.project_id, user_id, requested
        )
        if result.stale:
            return
        if result.error is not None:
            self._log.info("Visibility change on %s failed: %s", self.project_id, result.error.message)
            self.menu.error = result.error.message
            return
        # Keep what the service confirmed; it may override the request.
        self.header.is_public = bool(result.value)

    def dispose(self) -> None:
        self._cancel_close()
        self.menu.state = MenuState.CLOSED

    # ------------------------------------------------------------------
    def _schedule_close(self) -> None:
        if not self.menu.open:
            return
        self.menu.pending_close = self.scheduler.schedule(
            TIMER_KEY, self.close_delay_ms, self._close
        )

    def _cancel_close(self) -> None:
        self.scheduler.cancel(TIMER_KEY)
        self.menu.pending_close = None

    def _close(self) -> None:
        self.menu.pending_close = None
        self.menu.state = MenuState.CLOSED


__all__ = ["CLOSE_DELAY_MS", "MenuState", "VisibilityMenuController", "VisibilityMenuState"]
