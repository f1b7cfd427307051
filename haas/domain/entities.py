from __future__ import annotations

"""Domain value objects shared across adapters, use-cases, and view models."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

ProjectId = str
UserId = str
HwSetId = str


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _count(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return 0


@dataclass(frozen=True)
class Project:
    """Collaboration unit holding a roster and hardware quotas."""

    project_id: ProjectId
    """Externally assigned or client-generated identifier, unique per service."""
    name: str = ""
    description: str = ""
    created_by: Optional[UserId] = None
    """Owner of the project; always an implicit member."""
    is_public: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.project_id, str) or not self.project_id.strip():
            raise ValueError("Project id must be a non-empty string.")

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Project":
        """Build a project from the service's camelCase JSON object."""
        created_by = payload.get("createdBy")
        return cls(
            project_id=_text(payload.get("projectId")),
            name=_text(payload.get("name")),
            description=_text(payload.get("description")),
            created_by=str(created_by) if created_by else None,
            is_public=bool(payload.get("isPublic")),
        )

    def to_payload(self) -> Dict[str, Any]:
        return {
            "projectId": self.project_id,
            "name": self.name,
            "description": self.description,
            "createdBy": self.created_by,
            "isPublic": self.is_public,
        }


@dataclass(frozen=True)
class HardwareSetView:
    """Per-project view of one hardware-kit type.

    The service owns the arithmetic; the client replaces its local copy with
    whatever the last successful read returned.
    """

    hwset_id: HwSetId
    name: str
    total: int
    allocated_to_project: int
    available: int
    notes: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "HardwareSetView":
        notes = payload.get("notes")
        return cls(
            hwset_id=_text(payload.get("hwsetId")),
            name=_text(payload.get("name")),
            total=_count(payload.get("total")),
            allocated_to_project=_count(payload.get("allocatedToProject")),
            available=_count(payload.get("available")),
            notes=str(notes) if notes else None,
        )

    @property
    def balanced(self) -> bool:
        return self.available + self.allocated_to_project == self.total


@dataclass(frozen=True)
class ProjectSeed:
    """Project metadata handed forward by create/join so the detail read is skipped."""

    name: Optional[str] = None
    description: Optional[str] = None
    is_public: Optional[bool] = None
    created_by: Optional[UserId] = None

    @property
    def complete(self) -> bool:
        """Return True when name, description and visibility are all known."""
        return (
            self.name is not None
            and self.description is not None
            and self.is_public is not None
        )

    @classmethod
    def from_project(cls, project: Project) -> "ProjectSeed":
        return cls(
            name=project.name,
            description=project.description,
            is_public=project.is_public,
            created_by=project.created_by,
        )


@dataclass(frozen=True)
class ProjectDraft:
    """Create-project request assembled by the dashboard."""

    project_id: ProjectId
    name: str
    description: str
    created_by: UserId
    is_public: bool = False
    quotas: Dict[HwSetId, int] = field(default_factory=dict)

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "projectId": self.project_id,
            "name": self.name,
            "description": self.description,
            "createdBy": self.created_by,
            "isPublic": self.is_public,
        }
        for hwset_id, total in sorted(self.quotas.items()):
            payload[f"default_{hwset_id}_total"] = int(total)
        return payload


@dataclass(frozen=True)
class CreatedProject:
    """Service answer to a create request: the project and its allocated resources."""

    project: Project
    resources: List[HardwareSetView] = field(default_factory=list)


@dataclass(frozen=True)
class ActionReceipt:
    """Confirmation returned by a checkout/check-in request."""

    message: str
    resource: Optional[HardwareSetView] = None


__all__ = [
    "ActionReceipt",
    "CreatedProject",
    "HardwareSetView",
    "HwSetId",
    "Project",
    "ProjectDraft",
    "ProjectId",
    "ProjectSeed",
    "UserId",
]
