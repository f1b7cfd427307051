from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from haas.domain.entities import UserId
from haas.domain.ports import ProjectPort

from ._guards import require_text, require_user
from .error_mapping import map_api_error


@dataclass
class ListMembers:
    project_port: ProjectPort

    def __call__(self, project_id: str, user_id: Optional[str]) -> List[UserId]:
        member = require_user(user_id)
        try:
            return list(self.project_port.list_members(project_id, member))
        except Exception as exc:
            raise map_api_error(exc, default_message="Failed to fetch members", classify=()) from exc


@dataclass
class InviteMember:
    """Invite another user; the service checks ownership and that the user exists."""

    project_port: ProjectPort

    def __call__(self, project_id: str, requesting_user: Optional[str], invitee: str) -> str:
        owner = require_user(requesting_user)
        target = require_text(invitee, "Please enter a user ID to invite")
        try:
            message = self.project_port.invite_member(project_id, owner, target)
        except Exception as exc:
            raise map_api_error(
                exc,
                default_message="Failed to invite user",
                classify=(),
                network_message="Network error during invite",
            ) from exc
        return message or f"Invited {target}"


@dataclass
class RemoveMember:
    """Remove a member; the service independently rejects non-owners."""

    project_port: ProjectPort

    def __call__(self, project_id: str, requesting_user: Optional[str], member_id: str) -> None:
        owner = require_user(requesting_user)
        target = require_text(member_id, "Member id is required")
        try:
            self.project_port.remove_member(project_id, target, owner)
        except Exception as exc:
            raise map_api_error(
                exc,
                default_message="Failed to remove member",
                classify=(),
                network_message="Network error while removing member",
            ) from exc


__all__ = ["InviteMember", "ListMembers", "RemoveMember"]
