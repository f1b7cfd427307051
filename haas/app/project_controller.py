"""Composition of the project detail view.

One instance per opened project. ``open`` starts the three independent reads
(detail, resources, members) concurrently; ``close`` tears the pipeline down
so results still in flight are discarded.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from haas.domain.entities import ProjectSeed
from haas.usecases.hardware_action import PerformHardwareAction
from haas.usecases.load_project import LoadProject
from haas.usecases.load_resources import LoadResources
from haas.usecases.members import InviteMember, ListMembers, RemoveMember
from haas.usecases.set_visibility import SetVisibility
from haas.viewmodels.members_vm import MembersVM
from haas.viewmodels.project_vm import ProjectHeaderVM
from haas.viewmodels.resources_vm import ResourcesVM

from .fetch_pipeline import FetchPipeline, Offload
from .inventory_manager import ResourceInventoryManager
from .membership_manager import ConfirmFn, MembershipManager
from .project_loader import ProjectDetailLoader
from .session_store import SessionStore
from .timer_scheduler import TimerScheduler
from .visibility_menu import CLOSE_DELAY_MS, VisibilityMenuController


@dataclass
class ProjectUseCases:
    """Use cases the project view depends on."""

    load_project: LoadProject
    load_resources: LoadResources
    hardware_action: PerformHardwareAction
    list_members: ListMembers
    invite_member: InviteMember
    remove_member: RemoveMember
    set_visibility: SetVisibility


class ProjectDetailController:
    def __init__(
        self,
        *,
        project_id: str,
        session: SessionStore,
        usecases: ProjectUseCases,
        scheduler: TimerScheduler,
        seed: Optional[ProjectSeed] = None,
        confirm: Optional[ConfirmFn] = None,
        offload: Optional[Offload] = None,
        close_delay_ms: int = CLOSE_DELAY_MS,
    ) -> None:
        self._log = logging.getLogger(__name__)
        self.project_id = project_id
        self.session = session
        self.seed = seed
        self.pipeline = FetchPipeline(offload)

        self.header = ProjectHeaderVM(project_id=project_id)
        self.resources = ResourcesVM()
        self.members = MembersVM()

        self.loader = ProjectDetailLoader(
            header=self.header,
            session=session,
            uc_load=usecases.load_project,
            pipeline=self.pipeline,
        )
        self.inventory = ResourceInventoryManager(
            project_id=project_id,
            vm=self.resources,
            session=session,
            uc_load=usecases.load_resources,
            uc_action=usecases.hardware_action,
            pipeline=self.pipeline,
        )
        self.membership = MembershipManager(
            project_id=project_id,
            vm=self.members,
            header=self.header,
            session=session,
            uc_list=usecases.list_members,
            uc_invite=usecases.invite_member,
            uc_remove=usecases.remove_member,
            pipeline=self.pipeline,
            confirm=confirm,
        )
        self.visibility = VisibilityMenuController(
            project_id=project_id,
            header=self.header,
            session=session,
            uc_set_visibility=usecases.set_visibility,
            pipeline=self.pipeline,
            scheduler=scheduler,
            close_delay_ms=close_delay_ms,
        )

    @property
    def closed(self) -> bool:
        return self.pipeline.closed

    async def open(self) -> None:
        """Run the detail, resources and members reads concurrently."""
        self._log.debug("Opening project view %s", self.project_id)
        await asyncio.gather(
            self.loader.load(self.seed),
            self.inventory.load(),
            self.membership.load(),
        )

    def close(self) -> None:
        self.pipeline.teardown()
        self.visibility.dispose()


__all__ = ["ProjectDetailController", "ProjectUseCases"]
