from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from haas.domain.entities import Project
from haas.domain.ports import ProjectPort

from ._guards import require_user
from .error_mapping import map_api_error


@dataclass
class ListMyProjects:
    """Projects the user created or was invited to."""

    project_port: ProjectPort

    def __call__(self, user_id: Optional[str]) -> List[Project]:
        owner = require_user(user_id)
        try:
            return list(self.project_port.list_projects(owner))
        except Exception as exc:
            raise map_api_error(exc, default_message="Failed to fetch projects", classify=()) from exc


@dataclass
class ListPublicProjects:
    project_port: ProjectPort

    def __call__(self) -> List[Project]:
        try:
            return list(self.project_port.list_public_projects())
        except Exception as exc:
            raise map_api_error(
                exc, default_message="Failed to fetch public projects", classify=()
            ) from exc


__all__ = ["ListMyProjects", "ListPublicProjects"]
