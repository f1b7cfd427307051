"""Join-then-fetch protocol for a project id the client has not seen.

A direct detail read of an unknown project is always rejected for a
non-member, even when the project is public and joinable, because only the
join endpoint makes the authorization decision. So the client joins first and
reads the details second.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from haas.domain.entities import ProjectSeed
from haas.domain.errors import NetworkFailure, RemoteError, UseCaseError
from haas.usecases._guards import require_text, require_user
from haas.usecases.join_project import JoinProject
from haas.usecases.load_project import LoadProject

from .fetch_pipeline import FetchPipeline
from .session_store import SessionStore

SLOT = "lookup"
NavigateFn = Callable[[str, ProjectSeed], None]


@dataclass
class JoinOutcome:
    project_id: str
    seed: Optional[ProjectSeed] = None
    error: Optional[UseCaseError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.seed is not None


class JoinLookupOrchestrator:
    def __init__(
        self,
        *,
        session: SessionStore,
        uc_join: JoinProject,
        uc_load: LoadProject,
        pipeline: FetchPipeline,
        navigate: NavigateFn,
    ) -> None:
        self._log = logging.getLogger(__name__)
        self.session = session
        self.uc_join = uc_join
        self.uc_load = uc_load
        self.pipeline = pipeline
        self.navigate = navigate

    async def join(self, project_id: str) -> Optional[JoinOutcome]:
        """Join ``project_id`` then read its details and navigate to it.

        Returns ``None`` when the outcome was superseded or the view went away;
        otherwise the outcome, whose ``error`` is set when a step failed.
        """
        try:
            user_id = require_user(self.session.user_id)
            pid = require_text(project_id, "Please enter a project ID")
        except UseCaseError as exc:
            return JoinOutcome(project_id=str(project_id or ""), error=exc)

        joined = await self.pipeline.run(SLOT, self.uc_join, pid, user_id)
        if joined.stale:
            return None
        if joined.error is not None:
            self._log.info("Join of %s refused: %s", pid, joined.error.message)
            return JoinOutcome(project_id=pid, error=joined.error)

        details = await self.pipeline.run(SLOT, self.uc_load, pid, user_id)
        if details.stale:
            return None
        if details.error is not None:
            error = details.error
            if not isinstance(error, (RemoteError, NetworkFailure)):
                error = RemoteError(error.message or "Failed to load project after joining")
            self._log.warning("Joined %s but could not load it: %s", pid, error.message)
            return JoinOutcome(project_id=pid, error=error)

        seed = ProjectSeed.from_project(details.value)
        self.navigate(pid, seed)
        return JoinOutcome(project_id=pid, seed=seed)


__all__ = ["JoinLookupOrchestrator", "JoinOutcome", "NavigateFn"]
