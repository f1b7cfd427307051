"""Domain package exports for value objects, ports and errors."""

from .entities import (
    ActionReceipt,
    CreatedProject,
    HardwareSetView,
    HwSetId,
    Project,
    ProjectDraft,
    ProjectId,
    ProjectSeed,
    UserId,
)
from .errors import (
    AccessDeniedError,
    InvalidInputError,
    InvalidQuantityError,
    NetworkFailure,
    NotFoundError,
    RemoteError,
    UnauthenticatedError,
    UseCaseError,
)

__all__ = [
    "AccessDeniedError",
    "ActionReceipt",
    "CreatedProject",
    "HardwareSetView",
    "HwSetId",
    "InvalidInputError",
    "InvalidQuantityError",
    "NetworkFailure",
    "NotFoundError",
    "Project",
    "ProjectDraft",
    "ProjectId",
    "ProjectSeed",
    "RemoteError",
    "UnauthenticatedError",
    "UseCaseError",
    "UserId",
]
