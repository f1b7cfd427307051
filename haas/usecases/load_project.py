from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from haas.domain.entities import Project
from haas.domain.ports import ProjectPort

from ._guards import require_text, require_user
from .error_mapping import map_api_error


@dataclass
class LoadProject:
    """Read project metadata for a member.

    ``404`` becomes ``NotFound``, ``403`` becomes ``AccessDenied``; every other
    non-success status is a ``RemoteError``.
    """

    project_port: ProjectPort

    def __call__(self, project_id: str, user_id: Optional[str]) -> Project:
        member = require_user(user_id)
        pid = require_text(project_id, "Please enter a project ID")
        try:
            return self.project_port.get_project(pid, member)
        except Exception as exc:
            raise map_api_error(
                exc,
                default_message="Failed to fetch project",
                not_found_message="Project not found",
                access_denied_message="Access denied - you are not a member of this project",
            ) from exc


__all__ = ["LoadProject"]
