from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from haas.domain.errors import AccessDeniedError
from haas.domain.ports import ProjectPort

from ._guards import require_text, require_user
from .error_mapping import map_api_error


@dataclass
class JoinProject:
    """Ask the service to add the user to a project.

    The join endpoint is the only one that makes the authorization decision for
    non-members: public projects accept anyone, private ones only existing
    members. "Already a member" is a success.
    """

    project_port: ProjectPort

    def __call__(self, project_id: str, user_id: Optional[str]) -> Dict[str, Any]:
        member = require_user(user_id)
        pid = require_text(project_id, "Please enter a project ID")
        try:
            return dict(self.project_port.join_project(pid, member) or {})
        except Exception as exc:
            error = map_api_error(
                exc,
                default_message="Failed to join project",
                not_found_message="Project not found",
            )
            if isinstance(error, AccessDeniedError) and not getattr(exc, "detail", None):
                error = AccessDeniedError("Access denied - cannot join this project")
            raise error from exc


__all__ = ["JoinProject"]
