from __future__ import annotations

import threading

from haas.adapters.http_client import HttpConfig, RetryingSession


def _session_seen_by_thread(http: RetryingSession) -> object:
    seen = []
    worker = threading.Thread(target=lambda: seen.append(http.session))
    worker.start()
    worker.join()
    return seen[0]


def test_each_thread_gets_its_own_session() -> None:
    http = RetryingSession("http://haas.local", HttpConfig())

    mine = http.session
    other = _session_seen_by_thread(http)

    assert http.session is mine
    assert other is not mine


def test_assigned_session_is_shared_by_all_threads() -> None:
    http = RetryingSession("http://haas.local", HttpConfig())
    pinned = object()

    http.session = pinned  # type: ignore[assignment]

    assert http.session is pinned
    assert _session_seen_by_thread(http) is pinned


def test_base_url_is_normalised() -> None:
    http = RetryingSession(" http://haas.local/ ", HttpConfig())

    assert http.url("/api/login") == "http://haas.local/api/login"
