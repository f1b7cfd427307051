from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from haas.domain.entities import (
    ActionReceipt,
    CreatedProject,
    HardwareSetView,
    HwSetId,
    Project,
    ProjectDraft,
    ProjectId,
    UserId,
)
from haas.domain.ports import AuthPort, HardwareAction, ProjectPort

from .api_errors import ApiClientError

HWSET_NAMES: Dict[HwSetId, str] = {
    "hwset1": "Arduino Kit",
    "hwset2": "Raspberry Pi Kit",
}


def _reject(status: int, message: str, ctx: str) -> ApiClientError:
    return ApiClientError(
        f"{ctx}: {message} (HTTP {status})",
        status=status,
        detail=message,
        payload={"error": message},
        context=ctx,
    )


@dataclass
class _HwSet:
    name: str
    total: int
    allocated: int = 0

    def view(self, hwset_id: HwSetId) -> HardwareSetView:
        return HardwareSetView(
            hwset_id=hwset_id,
            name=self.name,
            total=self.total,
            allocated_to_project=self.allocated,
            available=self.total - self.allocated,
        )


@dataclass
class _ProjectRecord:
    project: Project
    members: List[UserId] = field(default_factory=list)
    hwsets: Dict[HwSetId, _HwSet] = field(default_factory=dict)


@dataclass
class ProjectsMock(ProjectPort, AuthPort):
    """Offline substitute for the REST adapters with the service's rules.

    Rejections are raised as ``ApiClientError`` with the status the real
    service would answer, so use cases map them exactly as in production.
    """

    def __post_init__(self) -> None:
        self._users: Dict[UserId, str] = {}
        self._projects: Dict[ProjectId, _ProjectRecord] = {}
        self.calls: List[Dict[str, Any]] = []

    # ---------- AuthPort ----------

    def signup(self, user_id: UserId, password: str) -> str:
        self._record("signup", user_id=user_id)
        if not user_id or not password:
            raise _reject(400, "userId and password are required", "signup")
        if user_id in self._users:
            raise _reject(409, "User already exists", "signup")
        self._users[user_id] = password
        return "User created"

    def login(self, user_id: UserId, password: str) -> UserId:
        self._record("login", user_id=user_id)
        if self._users.get(user_id) != password:
            raise _reject(401, "Invalid credentials", "login")
        return user_id

    # ---------- ProjectPort ----------

    def create_project(self, draft: ProjectDraft) -> CreatedProject:
        self._record("create_project", project_id=draft.project_id)
        ctx = "create_project"
        if not draft.project_id.strip() or not draft.name.strip():
            raise _reject(400, "projectId and name are required", ctx)
        if draft.project_id in self._projects:
            raise _reject(409, "Project ID already exists", ctx)
        project = Project(
            project_id=draft.project_id,
            name=draft.name,
            description=draft.description,
            created_by=draft.created_by,
            is_public=draft.is_public,
        )
        record = _ProjectRecord(project=project, members=[draft.created_by])
        for hwset_id, total in sorted(draft.quotas.items()):
            record.hwsets[hwset_id] = _HwSet(
                name=HWSET_NAMES.get(hwset_id, hwset_id), total=max(0, int(total))
            )
        self._projects[project.project_id] = record
        return CreatedProject(
            project=project,
            resources=[hw.view(key) for key, hw in record.hwsets.items()],
        )

    def list_projects(self, user_id: UserId) -> List[Project]:
        self._record("list_projects", user_id=user_id)
        return [rec.project for rec in self._projects.values() if user_id in rec.members]

    def list_public_projects(self) -> List[Project]:
        self._record("list_public_projects")
        return [rec.project for rec in self._projects.values() if rec.project.is_public]

    def get_project(self, project_id: ProjectId, user_id: UserId) -> Project:
        self._record("get_project", project_id=project_id, user_id=user_id)
        return self._member_record(project_id, user_id, "get_project").project

    def join_project(self, project_id: ProjectId, user_id: UserId) -> Dict[str, Any]:
        self._record("join_project", project_id=project_id, user_id=user_id)
        record = self._existing(project_id, "join")
        if user_id in record.members:
            return {"message": "Already a member", "projectId": project_id}
        if not record.project.is_public:
            raise _reject(403, "Project is private", "join")
        record.members.append(user_id)
        return {"message": f"Joined project {project_id}", "projectId": project_id}

    def set_visibility(self, project_id: ProjectId, user_id: UserId, is_public: bool) -> bool:
        self._record("set_visibility", project_id=project_id, is_public=is_public)
        record = self._existing(project_id, "visibility")
        if record.project.created_by != user_id:
            raise _reject(403, "Only the project owner can change visibility", "visibility")
        record.project = Project(
            project_id=record.project.project_id,
            name=record.project.name,
            description=record.project.description,
            created_by=record.project.created_by,
            is_public=bool(is_public),
        )
        return record.project.is_public

    def list_resources(self, project_id: ProjectId, user_id: UserId) -> List[HardwareSetView]:
        self._record("list_resources", project_id=project_id, user_id=user_id)
        record = self._member_record(project_id, user_id, "resources")
        return [hw.view(key) for key, hw in record.hwsets.items()]

    def hardware_action(
        self,
        project_id: ProjectId,
        hwset_id: HwSetId,
        action: HardwareAction,
        quantity: int,
        user_id: UserId,
    ) -> ActionReceipt:
        self._record(
            "hardware_action",
            project_id=project_id,
            hwset_id=hwset_id,
            action=action,
            quantity=quantity,
        )
        ctx = action
        record = self._member_record(project_id, user_id, ctx)
        hwset = record.hwsets.get(hwset_id)
        if hwset is None:
            raise _reject(404, "Hardware set not found", ctx)
        if quantity <= 0:
            raise _reject(400, "Quantity must be greater than 0", ctx)
        if action == "checkout":
            available = hwset.total - hwset.allocated
            if quantity > available:
                raise _reject(400, f"Only {available} units available", ctx)
            hwset.allocated += quantity
            message = f"Checked out {quantity} units of {hwset.name}"
        else:
            if quantity > hwset.allocated:
                raise _reject(400, f"Only {hwset.allocated} units checked out", ctx)
            hwset.allocated -= quantity
            message = f"Checked in {quantity} units of {hwset.name}"
        return ActionReceipt(message=message, resource=hwset.view(hwset_id))

    def list_members(self, project_id: ProjectId, user_id: UserId) -> List[UserId]:
        self._record("list_members", project_id=project_id)
        return list(self._member_record(project_id, user_id, "members").members)

    def invite_member(
        self, project_id: ProjectId, requesting_user: UserId, invite_user: UserId
    ) -> str:
        self._record("invite_member", project_id=project_id, invite_user=invite_user)
        ctx = "invite"
        record = self._existing(project_id, ctx)
        if record.project.created_by != requesting_user:
            raise _reject(403, "Only the project owner can invite users", ctx)
        if invite_user not in self._users:
            raise _reject(404, "User not found", ctx)
        if invite_user in record.members:
            raise _reject(400, "User is already a member", ctx)
        record.members.append(invite_user)
        return f"Invited {invite_user} to project"

    def remove_member(
        self, project_id: ProjectId, member_id: UserId, requesting_user: UserId
    ) -> None:
        self._record("remove_member", project_id=project_id, member_id=member_id)
        ctx = "remove_member"
        record = self._existing(project_id, ctx)
        if record.project.created_by != requesting_user:
            raise _reject(403, "Only the project owner can remove members", ctx)
        if member_id == record.project.created_by:
            raise _reject(400, "Cannot remove the project owner", ctx)
        if member_id not in record.members:
            raise _reject(404, "User is not a member", ctx)
        record.members.remove(member_id)

    # ------------------------------------------------------------------
    def add_user(self, user_id: UserId, password: str = "secret") -> None:
        self._users[user_id] = password

    def _record(self, method: str, **kwargs: Any) -> None:
        self.calls.append({"method": method, **kwargs})

    def _existing(self, project_id: ProjectId, ctx: str) -> _ProjectRecord:
        record = self._projects.get(project_id)
        if record is None:
            raise _reject(404, "Project not found", ctx)
        return record

    def _member_record(self, project_id: ProjectId, user_id: UserId, ctx: str) -> _ProjectRecord:
        record = self._existing(project_id, ctx)
        if user_id not in record.members:
            raise _reject(403, "Access denied - you are not a member of this project", ctx)
        return record


__all__ = ["HWSET_NAMES", "ProjectsMock"]
