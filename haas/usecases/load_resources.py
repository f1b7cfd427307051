from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from haas.domain.entities import HardwareSetView
from haas.domain.ports import ProjectPort

from ._guards import require_user
from .error_mapping import map_api_error


@dataclass
class LoadResources:
    """Read the per-project hardware views; ``403`` is ``AccessDenied``."""

    project_port: ProjectPort

    def __call__(self, project_id: str, user_id: Optional[str]) -> List[HardwareSetView]:
        member = require_user(user_id)
        try:
            return list(self.project_port.list_resources(project_id, member))
        except Exception as exc:
            raise map_api_error(
                exc,
                default_message="Failed to fetch resources",
                classify=(403,),
                access_denied_message="Access denied - you are not a member of this project",
            ) from exc


__all__ = ["LoadResources"]
