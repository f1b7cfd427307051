from __future__ import annotations

import logging
from typing import Optional

from haas.domain.entities import ProjectSeed
from haas.domain.errors import UnauthenticatedError
from haas.usecases.load_project import LoadProject
from haas.viewmodels.project_vm import ProjectHeaderVM

from .fetch_pipeline import FetchPipeline
from .session_store import SessionStore

SLOT = "project"


class ProjectDetailLoader:
    """Fill the header viewmodel with project metadata, once per view.

    Metadata handed forward by create or join skips the read entirely.
    """

    def __init__(
        self,
        *,
        header: ProjectHeaderVM,
        session: SessionStore,
        uc_load: LoadProject,
        pipeline: FetchPipeline,
    ) -> None:
        self._log = logging.getLogger(__name__)
        self.header = header
        self.session = session
        self.uc_load = uc_load
        self.pipeline = pipeline

    async def load(self, seed: Optional[ProjectSeed] = None) -> None:
        user_id = self.session.user_id
        if not user_id:
            self.header.report_error(UnauthenticatedError())
            return

        if seed is not None and seed.complete:
            self.header.apply_seed(seed)
            self.header.clear_error()
            return

        self.header.loading = True
        self.header.clear_error()
        result = await self.pipeline.run(SLOT, self.uc_load, self.header.project_id, user_id)
        if result.stale:
            return
        self.header.loading = False
        if result.error is not None:
            self._log.info("Project %s load failed: %s", self.header.project_id, result.error.message)
            self.header.report_error(result.error)
            return
        self.header.apply_project(result.value)


__all__ = ["ProjectDetailLoader"]
