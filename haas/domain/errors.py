"""Domain-level error types shared by use cases and controllers.

Every kind maps to one entry of the client's error taxonomy. Controllers catch
``UseCaseError`` and surface ``message`` inline next to the component that
issued the request.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    code = "USE_CASE_ERROR"

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        meta: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        if code:
            self.code = code
        self.message = message
        self.meta = dict(meta or {})


class UnauthenticatedError(UseCaseError):
    """No session user; detected before any request is issued."""

    code = "UNAUTHENTICATED"

    def __init__(self, message: str = "Please log in first") -> None:
        super().__init__(message)


class InvalidInputError(UseCaseError):
    """Empty identifiers and similar local validation failures."""

    code = "INVALID_INPUT"


class InvalidQuantityError(InvalidInputError):
    code = "INVALID_QUANTITY"

    def __init__(self, message: str = "Quantity must be greater than 0") -> None:
        super().__init__(message)


class NotFoundError(UseCaseError):
    code = "NOT_FOUND"


class AccessDeniedError(UseCaseError):
    code = "ACCESS_DENIED"


class RemoteError(UseCaseError):
    """Non-success status, with or without a server provided message."""

    code = "REMOTE_ERROR"

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        remote_message: Optional[str] = None,
    ) -> None:
        super().__init__(message, meta={"status": status} if status else None)
        self.status = status
        self.remote_message = remote_message


class NetworkFailure(UseCaseError):
    """The request itself could not be completed."""

    code = "NETWORK_FAILURE"


__all__ = [
    "AccessDeniedError",
    "InvalidInputError",
    "InvalidQuantityError",
    "NetworkFailure",
    "NotFoundError",
    "RemoteError",
    "UnauthenticatedError",
    "UseCaseError",
]
