from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from haas.domain.errors import UseCaseError


@dataclass
class MembersVM:
    """Roster, invite form input and inline membership messages."""

    members: List[str] = field(default_factory=list)
    invite_input: str = ""
    invite_message: str = ""
    error: Optional[str] = None
    error_code: Optional[str] = None

    def report_error(self, err: UseCaseError) -> None:
        self.error = err.message
        self.error_code = err.code

    def clear_error(self) -> None:
        self.error = None
        self.error_code = None

    def replace_members(self, members: Iterable[str]) -> None:
        self.members = list(members)

    def remove_local(self, member_id: str) -> None:
        self.members = [member for member in self.members if member != member_id]

    @staticmethod
    def can_remove(
        requesting_user: Optional[str], created_by: Optional[str], target: str
    ) -> bool:
        """UI gate for the remove affordance; the service re-checks ownership."""
        if not requesting_user or not created_by:
            return False
        return requesting_user == created_by and target != created_by

    def removable(self, requesting_user: Optional[str], created_by: Optional[str]) -> List[str]:
        return [m for m in self.members if self.can_remove(requesting_user, created_by, m)]


__all__ = ["MembersVM"]
