from __future__ import annotations

import logging
from typing import Callable, Optional

from haas.domain.entities import ProjectSeed
from haas.usecases.create_project import CreateProject
from haas.usecases.join_project import JoinProject
from haas.usecases.list_projects import ListMyProjects, ListPublicProjects
from haas.viewmodels.dashboard_vm import DashboardVM

from .fetch_pipeline import FetchPipeline
from .join_orchestrator import JoinLookupOrchestrator, NavigateFn
from .session_store import SessionStore


class DashboardController:
    """Create, join and list projects for the signed-in user."""

    def __init__(
        self,
        *,
        vm: DashboardVM,
        session: SessionStore,
        uc_list_mine: ListMyProjects,
        uc_list_public: ListPublicProjects,
        uc_create: CreateProject,
        uc_join: JoinProject,
        orchestrator: JoinLookupOrchestrator,
        pipeline: FetchPipeline,
        navigate: NavigateFn,
        on_logout: Optional[Callable[[], None]] = None,
    ) -> None:
        self._log = logging.getLogger(__name__)
        self.vm = vm
        self.session = session
        self.uc_list_mine = uc_list_mine
        self.uc_list_public = uc_list_public
        self.uc_create = uc_create
        self.uc_join = uc_join
        self.orchestrator = orchestrator
        self.pipeline = pipeline
        self.navigate = navigate
        self.on_logout = on_logout

    async def open(self) -> None:
        if not self.session.user_id:
            return
        await self.load_projects()

    async def load_projects(self) -> None:
        user_id = self.session.user_id
        if not user_id:
            return
        self.vm.loading = True
        self.vm.clear_error()
        result = await self.pipeline.run("projects", self.uc_list_mine, user_id)
        if result.stale:
            return
        self.vm.loading = False
        if result.error is not None:
            self.vm.report_error(result.error)
            return
        self.vm.projects = list(result.value)

    async def create(self) -> None:
        self.vm.clear_error()
        self.vm.creating = True
        try:
            result = await self.pipeline.run(
                "create",
                self.uc_create,
                user_id=self.session.user_id,
                name=self.vm.new_name,
                description=self.vm.new_description,
                project_id=self.vm.new_project_id,
            )
            if result.stale:
                return
            if result.error is not None:
                self.vm.report_error(result.error)
                return
            created = result.value
            self._log.info(
                "Created project %s with %d resources",
                created.project.project_id,
                len(created.resources),
            )
            self.vm.clear_create_form()
            self.navigate(created.project.project_id, ProjectSeed.from_project(created.project))
        finally:
            self.vm.creating = False

    async def join_by_id(self) -> None:
        self.vm.clear_error()
        outcome = await self.orchestrator.join(self.vm.lookup_id)
        if outcome is not None and outcome.error is not None:
            self.vm.report_error(outcome.error)

    async def toggle_public(self) -> None:
        self.vm.show_public = not self.vm.show_public
        if self.vm.show_public and not self.vm.public_projects:
            await self.load_public()

    async def load_public(self) -> None:
        self.vm.public_loading = True
        result = await self.pipeline.run("public", self.uc_list_public)
        if result.stale:
            return
        self.vm.public_loading = False
        if result.error is not None:
            self._log.warning("Failed to fetch public projects: %s", result.error.message)
            return
        self.vm.public_projects = list(result.value)

    async def join_public(self, project_id: str) -> None:
        result = await self.pipeline.run(
            f"join:{project_id}", self.uc_join, project_id, self.session.user_id
        )
        if result.stale:
            return
        if result.error is not None:
            self.vm.report_error(result.error)
            return
        await self.load_projects()

    def logout(self) -> None:
        self.session.logout()
        self.close()
        if self.on_logout:
            self.on_logout()

    def close(self) -> None:
        self.pipeline.teardown()


__all__ = ["DashboardController"]
