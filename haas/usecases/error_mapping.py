"""Translate adapter errors into the client's error taxonomy."""

from __future__ import annotations

from typing import Collection, Optional

from haas.adapters.api_errors import ApiError, ApiTimeoutError
from haas.domain.errors import (
    AccessDeniedError,
    NetworkFailure,
    NotFoundError,
    RemoteError,
    UseCaseError,
)

DEFAULT_CLASSIFIED = (403, 404)


def map_api_error(
    exc: Exception,
    *,
    default_message: str,
    classify: Collection[int] = DEFAULT_CLASSIFIED,
    not_found_message: Optional[str] = None,
    access_denied_message: Optional[str] = None,
    network_message: Optional[str] = None,
) -> UseCaseError:
    """Map adapter exceptions to taxonomy errors.

    Args:
        exc: Exception raised by a port call.
        default_message: Message for ``RemoteError`` when the server sent none.
        classify: Statuses that get their own kind (``404`` -> ``NotFound``,
            ``403`` -> ``AccessDenied``). Anything else is a ``RemoteError``.
        not_found_message: Overrides the server text for ``NotFound``.
        access_denied_message: Overrides the server text for ``AccessDenied``.
        network_message: Message for transport failures.

    Returns:
        UseCaseError: The error to surface; never raised here.
    """
    if isinstance(exc, UseCaseError):
        return exc
    if isinstance(exc, ApiTimeoutError):
        return NetworkFailure(network_message or "Network error. Check connection.")
    if isinstance(exc, ApiError):
        status = exc.status
        if status is None:
            # Transport failure before any HTTP status was received.
            return NetworkFailure(network_message or str(exc))
        detail = (exc.detail or "").strip() or None
        if status == 404 and 404 in classify:
            return NotFoundError(not_found_message or detail or "Not found")
        if status == 403 and 403 in classify:
            return AccessDeniedError(access_denied_message or detail or "Access denied")
        return RemoteError(detail or default_message, status=status, remote_message=detail)
    return RemoteError(default_message or str(exc) or "Unexpected error.")


__all__ = ["DEFAULT_CLASSIFIED", "map_api_error"]
