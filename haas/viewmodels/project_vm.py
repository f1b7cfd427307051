"""Header state for the project detail view."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from haas.domain.entities import Project, ProjectSeed
from haas.domain.errors import UseCaseError


@dataclass
class ProjectHeaderVM:
    """Project metadata plus the loading/error flags of its detail read."""

    project_id: str
    name: Optional[str] = None
    description: Optional[str] = None
    is_public: Optional[bool] = None
    created_by: Optional[str] = None
    loading: bool = False
    error: Optional[str] = None
    error_code: Optional[str] = None

    def report_error(self, err: UseCaseError) -> None:
        self.error = err.message
        self.error_code = err.code

    def clear_error(self) -> None:
        self.error = None
        self.error_code = None

    def apply_seed(self, seed: Optional[ProjectSeed]) -> None:
        if seed is None:
            return
        self.name = seed.name
        self.description = seed.description
        self.is_public = seed.is_public
        self.created_by = seed.created_by

    def apply_project(self, project: Project) -> None:
        self.name = project.name
        self.description = project.description
        self.is_public = bool(project.is_public)
        self.created_by = project.created_by

    def is_owner(self, user_id: Optional[str]) -> bool:
        return bool(user_id) and bool(self.created_by) and user_id == self.created_by

    # ---- display helpers ----
    @property
    def title(self) -> str:
        return self.name if self.name else f"Project {self.project_id}"

    @property
    def description_text(self) -> str:
        if self.loading:
            return "Loading..."
        return self.description or "No description provided."

    @property
    def visibility_label(self) -> str:
        return "Public" if self.is_public else "Private"

    def visibility_hint(self, user_id: Optional[str]) -> str:
        return "Hover to change visibility" if self.is_owner(user_id) else ""


__all__ = ["ProjectHeaderVM"]
