from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from haas.domain.ports import ProjectPort

from ._guards import require_user
from .error_mapping import map_api_error


@dataclass
class SetVisibility:
    """Request a visibility change and return the server-confirmed value."""

    project_port: ProjectPort

    def __call__(self, project_id: str, user_id: Optional[str], is_public: bool) -> bool:
        owner = require_user(user_id)
        try:
            return bool(self.project_port.set_visibility(project_id, owner, bool(is_public)))
        except Exception as exc:
            raise map_api_error(
                exc,
                default_message="Failed to update visibility",
                classify=(403,),
                access_denied_message="Only the project owner can change visibility",
                network_message="Network error updating visibility",
            ) from exc


__all__ = ["SetVisibility"]
