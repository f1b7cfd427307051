from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from haas.domain.entities import Project
from haas.domain.errors import UseCaseError


@dataclass
class DashboardVM:
    """Create/join form inputs plus the "my projects" and public listings."""

    new_name: str = ""
    new_description: str = ""
    new_project_id: str = ""
    lookup_id: str = ""

    projects: List[Project] = field(default_factory=list)
    public_projects: List[Project] = field(default_factory=list)
    loading: bool = False
    public_loading: bool = False
    creating: bool = False
    show_public: bool = False
    error: Optional[str] = None
    error_code: Optional[str] = None

    def report_error(self, err: UseCaseError) -> None:
        self.error = err.message
        self.error_code = err.code

    def clear_error(self) -> None:
        self.error = None
        self.error_code = None

    def joinable_public_projects(self) -> List[Project]:
        """Public projects the user is not already part of."""
        mine = {project.project_id for project in self.projects}
        return [p for p in self.public_projects if p.project_id not in mine]

    def clear_create_form(self) -> None:
        self.new_name = ""
        self.new_description = ""
        self.new_project_id = ""


__all__ = ["DashboardVM"]
