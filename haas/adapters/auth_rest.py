from __future__ import annotations

from haas.domain.entities import UserId
from haas.domain.ports import AuthPort

from .api_errors import ApiError
from .http_client import HttpConfig, RetryingSession, ensure_ok, json_any


class AuthRestAdapter(AuthPort):
    """REST adapter for the signup and login endpoints."""

    def __init__(self, base_url: str, *, request_timeout_s: int = 10) -> None:
        self.http = RetryingSession(base_url, HttpConfig(request_timeout_s=request_timeout_s))

    def signup(self, user_id: UserId, password: str) -> str:
        ctx = f"signup[{user_id}]"
        resp = self.http.post("/api/signup", json_body={"userId": user_id, "password": password})
        ensure_ok(resp, ctx)
        data = json_any(resp, ctx)
        return str(data.get("message") or "") if isinstance(data, dict) else ""

    def login(self, user_id: UserId, password: str) -> UserId:
        ctx = f"login[{user_id}]"
        resp = self.http.post("/api/login", json_body={"userId": user_id, "password": password})
        ensure_ok(resp, ctx)
        data = json_any(resp, ctx)
        confirmed = data.get("userId") if isinstance(data, dict) else None
        if not confirmed:
            raise ApiError(f"{ctx}: response missing userId", status=resp.status_code, context=ctx)
        return str(confirmed)


__all__ = ["AuthRestAdapter"]
