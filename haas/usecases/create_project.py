"""Use case for creating a project with default hardware quotas.

The service allocates the initial hardware sets; the client only requests the
quotas and keeps the created metadata so the project view can skip its first
detail read.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Mapping, Optional

from haas.domain.entities import CreatedProject, HwSetId, ProjectDraft, ProjectId
from haas.domain.ports import ProjectPort

from ._guards import require_user
from .error_mapping import map_api_error

DEFAULT_QUOTAS: Dict[HwSetId, int] = {"hwset1": 15, "hwset2": 10}


def _epoch_ms() -> int:
    return int(time.time() * 1000)


def generate_project_id(clock: Callable[[], int] = _epoch_ms) -> ProjectId:
    """Return a client-generated id of the form ``proj-<epoch ms>``."""
    return f"proj-{clock()}"


@dataclass
class CreateProject:
    """Use-case callable for the create-project request.

    Attributes:
        project_port: Port receiving the create request.
        quotas: Initial quota per hardware-kit type.
        clock: Millisecond clock used for generated project ids.
    """
    project_port: ProjectPort
    quotas: Mapping[HwSetId, int] = field(default_factory=lambda: dict(DEFAULT_QUOTAS))
    clock: Callable[[], int] = _epoch_ms

    def __call__(
        self,
        *,
        user_id: Optional[str],
        name: str,
        description: str = "",
        project_id: str = "",
        is_public: bool = False,
    ) -> CreatedProject:
        """Create a project owned by ``user_id``.

        Args:
            user_id: Current session user; required.
            name: Display name.
            description: Free-text description.
            project_id: Optional explicit id; blank generates ``proj-<ms>``.
            is_public: Initial visibility, private unless requested.

        Returns:
            CreatedProject: Project metadata and allocated resources.

        Raises:
            UnauthenticatedError: Without a session user.
            UseCaseError: When the service rejects the request.
        """
        owner = require_user(user_id)
        draft = ProjectDraft(
            project_id=str(project_id or "").strip() or generate_project_id(self.clock),
            name=str(name or "").strip(),
            description=str(description or "").strip(),
            created_by=owner,
            is_public=bool(is_public),
            quotas={key: int(value) for key, value in self.quotas.items()},
        )
        try:
            return self.project_port.create_project(draft)
        except Exception as exc:
            status = getattr(exc, "status", None)
            raise map_api_error(
                exc,
                default_message=f"Failed to create project (status {status})",
                classify=(),
            ) from exc


__all__ = ["CreateProject", "DEFAULT_QUOTAS", "generate_project_id"]
