"""Typed failures raised by the REST adapters.

The HaaS service answers errors as ``{"error": "<message>"}``. That text is kept
in ``detail`` so use cases can show it verbatim; ``str(exc)`` carries the
request context for logs.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

ERROR_KEYS = ("error", "detail", "message", "title")
_SNIPPET = 400


class ApiError(RuntimeError):
    """Failure talking to the service.

    ``status`` is ``None`` when no HTTP response was received at all.
    """

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        code: Optional[str] = None,
        hint: Optional[str] = None,
        detail: Optional[str] = None,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.code = code
        self.hint = hint
        self.detail = detail
        self.payload = payload
        self.context = context


class ApiClientError(ApiError):
    """4xx answer: the request was understood and refused."""


class ApiServerError(ApiError):
    """5xx answer."""


class ApiTimeoutError(ApiError):
    """Timeout or refused connection; no status."""

    def __init__(self, message: str, *, context: Optional[str] = None) -> None:
        super().__init__(message, context=context)


def parse_error_payload(resp: Any) -> Any:
    """JSON body of an error response, else a text snippet, else ``None``."""
    try:
        return resp.json()
    except ValueError:
        text = (getattr(resp, "text", "") or "").strip()
        return text[:_SNIPPET] or None


def first_string(payload: Any) -> Optional[str]:
    """First human-readable message in an error body.

    Looks at ``error`` first, then the FastAPI ``detail`` shape, recursing into
    nested lists and objects.
    """
    if isinstance(payload, str):
        return payload.strip() or None
    if isinstance(payload, Mapping):
        candidates = [payload.get(key) for key in ERROR_KEYS]
    elif isinstance(payload, list):
        candidates = payload
    else:
        return None
    for candidate in candidates:
        text = first_string(candidate)
        if text:
            return text
    return None


def build_error_message(ctx: str, status: int, payload: Any) -> str:
    detail = first_string(payload)
    suffix = f"{detail} (HTTP {status})" if detail else f"HTTP {status}"
    return f"{ctx}: {suffix}"


def extract_error_code(payload: Any) -> Optional[str]:
    if not isinstance(payload, Mapping):
        return None
    value = payload.get("code", payload.get("error_code"))
    return None if value is None else str(value)


def extract_error_hint(payload: Any) -> Optional[str]:
    if not isinstance(payload, Mapping):
        return None
    hint = payload.get("hint")
    if isinstance(hint, str) and hint.strip():
        return hint.strip()
    return None


__all__ = [
    "ApiClientError",
    "ApiError",
    "ApiServerError",
    "ApiTimeoutError",
    "build_error_message",
    "extract_error_code",
    "extract_error_hint",
    "first_string",
    "parse_error_payload",
]
