from __future__ import annotations

from haas.adapters.api_errors import ApiClientError, ApiError, ApiServerError, ApiTimeoutError
from haas.domain.errors import NotFoundError
from haas.usecases.error_mapping import map_api_error


def _client(status, detail=None):
    return ApiClientError("ctx", status=status, detail=detail)


def test_timeout_is_network_failure() -> None:
    err = map_api_error(ApiTimeoutError("t"), default_message="x", network_message="Network error during checkout")
    assert err.code == "NETWORK_FAILURE"
    assert err.message == "Network error during checkout"


def test_status_less_api_error_is_network_failure() -> None:
    assert map_api_error(ApiError("conn reset"), default_message="x").code == "NETWORK_FAILURE"


def test_classified_statuses() -> None:
    assert map_api_error(_client(404, "gone"), default_message="x").code == "NOT_FOUND"
    assert map_api_error(_client(403, "no"), default_message="x").code == "ACCESS_DENIED"


def test_override_messages_win_over_server_text() -> None:
    err = map_api_error(_client(404, "whatever"), default_message="x", not_found_message="Project not found")
    assert err.message == "Project not found"


def test_unclassified_status_is_remote_error_with_server_message() -> None:
    err = map_api_error(_client(403, "Only the project owner can invite users"), default_message="x", classify=())
    assert err.code == "REMOTE_ERROR"
    assert err.message == "Only the project owner can invite users"
    assert err.status == 403
    assert err.meta == {"status": 403}


def test_remote_error_without_server_message_uses_default() -> None:
    err = map_api_error(ApiServerError("ctx", status=500), default_message="checkout failed")
    assert err.message == "checkout failed"
    assert err.remote_message is None


def test_use_case_errors_pass_through() -> None:
    original = NotFoundError("Project not found")
    assert map_api_error(original, default_message="x") is original
