from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Protocol

from .entities import (
    ActionReceipt,
    CreatedProject,
    HardwareSetView,
    HwSetId,
    Project,
    ProjectDraft,
    ProjectId,
    UserId,
)
from .errors import UseCaseError

HardwareAction = Literal["checkout", "checkin"]


# ---- Ports (Hexagonal boundaries) ----
class ProjectPort(Protocol):
    """Project, resource and membership operations against the HaaS service."""

    def create_project(self, draft: ProjectDraft) -> CreatedProject: ...
    def list_projects(self, user_id: UserId) -> List[Project]: ...
    def list_public_projects(self) -> List[Project]: ...
    def get_project(self, project_id: ProjectId, user_id: UserId) -> Project: ...
    def join_project(self, project_id: ProjectId, user_id: UserId) -> Dict[str, Any]: ...
    def set_visibility(
        self, project_id: ProjectId, user_id: UserId, is_public: bool
    ) -> bool: ...  # server-confirmed value
    def list_resources(
        self, project_id: ProjectId, user_id: UserId
    ) -> List[HardwareSetView]: ...
    def hardware_action(
        self,
        project_id: ProjectId,
        hwset_id: HwSetId,
        action: HardwareAction,
        quantity: int,
        user_id: UserId,
    ) -> ActionReceipt: ...
    def list_members(self, project_id: ProjectId, user_id: UserId) -> List[UserId]: ...
    def invite_member(
        self, project_id: ProjectId, requesting_user: UserId, invite_user: UserId
    ) -> str: ...  # confirmation message
    def remove_member(
        self, project_id: ProjectId, member_id: UserId, requesting_user: UserId
    ) -> None: ...


class AuthPort(Protocol):
    """Login and signup against the HaaS service."""

    def signup(self, user_id: UserId, password: str) -> str: ...
    def login(self, user_id: UserId, password: str) -> UserId: ...


class SessionPort(Protocol):
    """Persistence for the session user identifier only."""

    def save_session_user(self, user_id: Optional[UserId]) -> None: ...
    def load_session_user(self) -> Optional[UserId]: ...


__all__ = [
    "AuthPort",
    "HardwareAction",
    "ProjectPort",
    "SessionPort",
    "UseCaseError",
]
