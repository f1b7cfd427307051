"""``requests`` transport shared by the REST adapters.

Reads are retried on timeouts and refused connections, up to
``HttpConfig.retries`` extra attempts. Mutations go out exactly once. Non-2xx
responses become ``ApiError`` subclasses through ``ensure_ok``.
"""

from __future__ import annotations

import json
import threading
from dataclasses import dataclass
from typing import Any, Dict, Optional, Type

import requests
from requests import exceptions as req_exc

from haas.adapters.api_errors import (
    ApiClientError,
    ApiError,
    ApiServerError,
    ApiTimeoutError,
    build_error_message,
    extract_error_code,
    extract_error_hint,
    first_string,
    parse_error_payload,
)

JsonBody = Optional[Dict[str, Any]]


@dataclass
class HttpConfig:
    request_timeout_s: int = 10
    retries: int = 2  # extra GET attempts after the first


class RetryingSession:
    """``requests`` transport bound to a service root.

    Controllers run port calls concurrently on worker threads and
    ``requests.Session`` is not thread-safe, so each thread gets its own
    session (and connection pool). Assigning ``session`` pins one session for
    every thread.
    """

    def __init__(self, base_url: str, cfg: HttpConfig) -> None:
        root = str(base_url or "").strip().rstrip("/")
        if not root:
            raise ValueError("RetryingSession requires a base URL")
        self.base_url = root
        self.cfg = cfg
        self._local = threading.local()
        self._pinned: Optional[requests.Session] = None

    @property
    def session(self) -> requests.Session:
        if self._pinned is not None:
            return self._pinned
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            self._local.session = session
        return session

    @session.setter
    def session(self, value: requests.Session) -> None:
        self._pinned = value

    def url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    @staticmethod
    def _headers(json_body: bool = False) -> Dict[str, str]:
        if json_body:
            return {"Accept": "application/json", "Content-Type": "application/json"}
        return {"Accept": "application/json"}

    def get(
        self,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        timeout: Optional[int] = None,
    ) -> requests.Response:
        """GET ``path``; raises ``ApiTimeoutError`` once every attempt timed out."""
        url = self.url(path)
        ctx = f"GET {url}"
        attempts = max(0, int(self.cfg.retries)) + 1
        for attempt in range(1, attempts + 1):
            try:
                return self.session.get(
                    url,
                    params=params,
                    headers=self._headers(),
                    timeout=timeout or self.cfg.request_timeout_s,
                )
            except (req_exc.Timeout, req_exc.ConnectionError) as exc:
                if attempt == attempts:
                    raise ApiTimeoutError(
                        f"No response from {url} after {attempts} attempt(s)", context=ctx
                    ) from exc
            except req_exc.RequestException as exc:
                raise ApiError(str(exc), context=ctx) from exc
        raise AssertionError("unreachable")

    def send(
        self,
        method: str,
        path: str,
        *,
        json_body: JsonBody = None,
        timeout: Optional[int] = None,
    ) -> requests.Response:
        """Send one mutating request; a repeated checkout would apply twice."""
        url = self.url(path)
        verb = method.upper()
        ctx = f"{verb} {url}"
        try:
            return self.session.request(
                verb,
                url,
                data=None if json_body is None else json.dumps(json_body),
                headers=self._headers(json_body=json_body is not None),
                timeout=timeout or self.cfg.request_timeout_s,
            )
        except (req_exc.Timeout, req_exc.ConnectionError) as exc:
            raise ApiTimeoutError(f"No response from {url}", context=ctx) from exc
        except req_exc.RequestException as exc:
            raise ApiError(str(exc), context=ctx) from exc

    def post(self, path: str, *, json_body: JsonBody = None) -> requests.Response:
        return self.send("POST", path, json_body=json_body)

    def patch(self, path: str, *, json_body: JsonBody = None) -> requests.Response:
        return self.send("PATCH", path, json_body=json_body)

    def delete(self, path: str, *, json_body: JsonBody = None) -> requests.Response:
        return self.send("DELETE", path, json_body=json_body)


def _error_class(status: int) -> Type[ApiError]:
    if 400 <= status < 500:
        return ApiClientError
    if 500 <= status < 600:
        return ApiServerError
    return ApiError


def ensure_ok(resp: requests.Response, ctx: str) -> None:
    """Raise the matching ``ApiError`` subclass for a non-2xx response."""
    status = resp.status_code
    if 200 <= status < 300:
        return
    body = parse_error_payload(resp)
    client_side = 400 <= status < 500
    raise _error_class(status)(
        build_error_message(ctx, status, body),
        status=status,
        code=extract_error_code(body) if client_side else None,
        hint=extract_error_hint(body) if client_side else None,
        detail=first_string(body),
        payload=body,
        context=ctx,
    )


def json_any(resp: requests.Response, ctx: str) -> Any:
    """Decoded JSON body; an undecodable body is an ``ApiError``."""
    try:
        return resp.json()
    except ValueError as exc:
        text = (getattr(resp, "text", "") or "")[:400]
        raise ApiError(f"{ctx}: invalid JSON response: {text}", status=resp.status_code, context=ctx) from exc


__all__ = ["HttpConfig", "RetryingSession", "ensure_ok", "json_any"]
