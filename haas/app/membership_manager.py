from __future__ import annotations

import logging
from typing import Callable, Optional

from haas.domain.errors import UnauthenticatedError
from haas.usecases.members import InviteMember, ListMembers, RemoveMember
from haas.viewmodels.members_vm import MembersVM
from haas.viewmodels.project_vm import ProjectHeaderVM

from .fetch_pipeline import FetchPipeline
from .session_store import SessionStore

SLOT = "members"
ConfirmFn = Callable[[str], bool]


def _deny(_: str) -> bool:
    return False


class MembershipManager:
    """Roster reads plus invite and remove.

    Roster reads are supplementary to the view: a failed read is logged and the
    roster is left as it was.
    """

    def __init__(
        self,
        *,
        project_id: str,
        vm: MembersVM,
        header: ProjectHeaderVM,
        session: SessionStore,
        uc_list: ListMembers,
        uc_invite: InviteMember,
        uc_remove: RemoveMember,
        pipeline: FetchPipeline,
        confirm: Optional[ConfirmFn] = None,
    ) -> None:
        self._log = logging.getLogger(__name__)
        self.project_id = project_id
        self.vm = vm
        self.header = header
        self.session = session
        self.uc_list = uc_list
        self.uc_invite = uc_invite
        self.uc_remove = uc_remove
        self.pipeline = pipeline
        self.confirm: ConfirmFn = confirm or _deny

    async def load(self) -> None:
        user_id = self.session.user_id
        if not user_id:
            return
        result = await self.pipeline.run(SLOT, self.uc_list, self.project_id, user_id)
        if result.stale:
            return
        if result.error is not None:
            self._log.warning(
                "Failed to fetch members of %s: %s", self.project_id, result.error.message
            )
            return
        self.vm.replace_members(result.value)

    async def invite(self, invitee: Optional[str] = None) -> None:
        target = (self.vm.invite_input if invitee is None else invitee).strip()
        if not target:
            return
        user_id = self.session.user_id
        if not user_id:
            self.vm.invite_message = UnauthenticatedError().message
            return

        result = await self.pipeline.run("invite", self.uc_invite, self.project_id, user_id, target)
        if result.stale:
            return
        if result.error is not None:
            self._log.info("Invite of %s to %s failed: %s", target, self.project_id, result.error.message)
            self.vm.invite_message = result.error.message
            return
        self.vm.invite_message = result.value
        self.vm.invite_input = ""
        await self.load()

    def can_remove(self, target: str) -> bool:
        return self.vm.can_remove(self.session.user_id, self.header.created_by, target)

    async def remove(self, target: str) -> None:
        """Remove ``target`` after the user confirms.

        Only the creator sees the affordance and the creator cannot be removed;
        this gate is cosmetic, the service re-checks ownership.
        """
        user_id = self.session.user_id
        if not user_id:
            self.vm.report_error(UnauthenticatedError())
            return
        if not self.can_remove(target):
            self._log.debug("Remove of %s blocked: %s is not the owner", target, user_id)
            return
        if not self.confirm(f"Are you sure you want to remove {target} from this project?"):
            return

        result = await self.pipeline.run(
            f"remove:{target}", self.uc_remove, self.project_id, user_id, target
        )
        if result.stale:
            return
        if result.error is not None:
            self._log.info("Removing %s from %s failed: %s", target, self.project_id, result.error.message)
            self.vm.report_error(result.error)
            return
        self.vm.clear_error()
        self.vm.remove_local(target)


__all__ = ["ConfirmFn", "MembershipManager"]
