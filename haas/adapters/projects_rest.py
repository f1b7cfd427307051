from __future__ import annotations

from typing import Any, Dict, List
from urllib.parse import quote

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
from haas.domain.ports import HardwareAction, ProjectPort

from .api_errors import ApiError
from .http_client import HttpConfig, RetryingSession, ensure_ok, json_any

_ACTIONS = ("checkout", "checkin")


def _seg(value: str) -> str:
    return quote(str(value), safe="")


class ProjectsRestAdapter(ProjectPort):
    """REST adapter for project, resource and membership endpoints."""

    def __init__(
        self,
        base_url: str,
        *,
        request_timeout_s: int = 10,
        retries: int = 2,
    ) -> None:
        self.cfg = HttpConfig(request_timeout_s=request_timeout_s, retries=retries)
        self.http = RetryingSession(base_url, self.cfg)

    @property
    def base_url(self) -> str:
        return self.http.base_url

    # ---------- projects ----------

    def create_project(self, draft: ProjectDraft) -> CreatedProject:
        ctx = f"create_project[{draft.project_id}]"
        resp = self.http.post("/api/projects", json_body=draft.to_payload())
        ensure_ok(resp, ctx)
        data = self._json_object(resp, ctx)
        body = data.get("project") if isinstance(data.get("project"), dict) else data
        project_payload = dict(draft.to_payload())
        project_payload.update({k: v for k, v in body.items() if v is not None})
        resources = [
            HardwareSetView.from_payload(entry)
            for entry in data.get("resources") or []
            if isinstance(entry, dict)
        ]
        return CreatedProject(project=Project.from_payload(project_payload), resources=resources)

    def list_projects(self, user_id: UserId) -> List[Project]:
        ctx = f"projects[{user_id}]"
        resp = self.http.get("/api/projects", params={"userId": user_id})
        ensure_ok(resp, ctx)
        return self._projects(resp, ctx)

    def list_public_projects(self) -> List[Project]:
        ctx = "projects[public]"
        resp = self.http.get("/api/projects/public")
        ensure_ok(resp, ctx)
        return self._projects(resp, ctx)

    def get_project(self, project_id: ProjectId, user_id: UserId) -> Project:
        ctx = f"project[{project_id}]"
        resp = self.http.get(f"/api/projects/{_seg(project_id)}", params={"userId": user_id})
        ensure_ok(resp, ctx)
        data = dict(self._json_object(resp, ctx))
        data.setdefault("projectId", project_id)
        return Project.from_payload(data)

    def join_project(self, project_id: ProjectId, user_id: UserId) -> Dict[str, Any]:
        ctx = f"join[{project_id}]"
        resp = self.http.post(
            f"/api/projects/{_seg(project_id)}/join", json_body={"userId": user_id}
        )
        ensure_ok(resp, ctx)
        data = json_any(resp, ctx)
        return dict(data) if isinstance(data, dict) else {}

    def set_visibility(self, project_id: ProjectId, user_id: UserId, is_public: bool) -> bool:
        ctx = f"visibility[{project_id}]"
        resp = self.http.patch(
            f"/api/projects/{_seg(project_id)}/visibility",
            json_body={"userId": user_id, "isPublic": bool(is_public)},
        )
        ensure_ok(resp, ctx)
        data = self._json_object(resp, ctx)
        return bool(data.get("isPublic"))

    # ---------- resources ----------

    def list_resources(self, project_id: ProjectId, user_id: UserId) -> List[HardwareSetView]:
        ctx = f"resources[{project_id}]"
        resp = self.http.get(
            f"/api/projects/{_seg(project_id)}/resources", params={"userId": user_id}
        )
        ensure_ok(resp, ctx)
        data = json_any(resp, ctx)
        if not isinstance(data, list):
            raise ApiError(f"{ctx}: expected list response", status=resp.status_code, context=ctx)
        return [HardwareSetView.from_payload(entry) for entry in data if isinstance(entry, dict)]

    def hardware_action(
        self,
        project_id: ProjectId,
        hwset_id: HwSetId,
        action: HardwareAction,
        quantity: int,
        user_id: UserId,
    ) -> ActionReceipt:
        if action not in _ACTIONS:
            raise ValueError(f"Unsupported hardware action '{action}'")
        ctx = f"{action}[{project_id}:{hwset_id}]"
        resp = self.http.post(
            f"/api/projects/{_seg(project_id)}/resources/{_seg(hwset_id)}/{action}",
            json_body={"quantity": int(quantity), "userId": user_id},
        )
        ensure_ok(resp, ctx)
        data = self._json_object(resp, ctx)
        resource = data.get("resource")
        return ActionReceipt(
            message=str(data.get("message") or ""),
            resource=HardwareSetView.from_payload(resource) if isinstance(resource, dict) else None,
        )

    # ---------- members ----------

    def list_members(self, project_id: ProjectId, user_id: UserId) -> List[UserId]:
        ctx = f"members[{project_id}]"
        resp = self.http.get(
            f"/api/projects/{_seg(project_id)}/members", params={"userId": user_id}
        )
        ensure_ok(resp, ctx)
        data = self._json_object(resp, ctx)
        return [str(member) for member in data.get("members") or [] if member]

    def invite_member(
        self, project_id: ProjectId, requesting_user: UserId, invite_user: UserId
    ) -> str:
        ctx = f"invite[{project_id}:{invite_user}]"
        resp = self.http.post(
            f"/api/projects/{_seg(project_id)}/invite",
            json_body={"requestingUser": requesting_user, "inviteUser": invite_user},
        )
        ensure_ok(resp, ctx)
        data = self._json_object(resp, ctx)
        return str(data.get("message") or "")

    def remove_member(
        self, project_id: ProjectId, member_id: UserId, requesting_user: UserId
    ) -> None:
        ctx = f"remove_member[{project_id}:{member_id}]"
        resp = self.http.delete(
            f"/api/projects/{_seg(project_id)}/members/{_seg(member_id)}",
            json_body={"requestingUser": requesting_user},
        )
        ensure_ok(resp, ctx)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    # A 2xx body of the wrong shape keeps its status so it maps to RemoteError.
    @staticmethod
    def _json_object(resp: Any, ctx: str) -> Dict[str, Any]:
        data = json_any(resp, ctx)
        if not isinstance(data, dict):
            raise ApiError(f"{ctx}: expected object response", status=resp.status_code, context=ctx)
        return data

    @staticmethod
    def _projects(resp: Any, ctx: str) -> List[Project]:
        data = json_any(resp, ctx)
        if not isinstance(data, list):
            raise ApiError(f"{ctx}: expected list response", status=resp.status_code, context=ctx)
        projects: List[Project] = []
        for entry in data:
            if not isinstance(entry, dict) or not entry.get("projectId"):
                continue
            projects.append(Project.from_payload(entry))
        return projects


__all__ = ["ProjectsRestAdapter"]
