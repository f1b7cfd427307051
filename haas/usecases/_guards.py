from __future__ import annotations

from typing import Optional

from haas.domain.entities import UserId
from haas.domain.errors import InvalidInputError, UnauthenticatedError


def require_user(user_id: Optional[UserId]) -> UserId:
    """Return the trimmed session user or raise ``UnauthenticatedError``."""
    cleaned = str(user_id or "").strip()
    if not cleaned:
        raise UnauthenticatedError()
    return cleaned


def require_text(value: Optional[str], message: str) -> str:
    cleaned = str(value or "").strip()
    if not cleaned:
        raise InvalidInputError(message)
    return cleaned
