from __future__ import annotations

from haas.adapters.api_errors import (
    build_error_message,
    extract_error_code,
    first_string,
    parse_error_payload,
)


class _Resp:
    def __init__(self, payload=None, text="", raises=False):
        self._payload = payload
        self.text = text
        self._raises = raises

    def json(self):
        if self._raises:
            raise ValueError("not json")
        return self._payload


def test_first_string_prefers_error_key() -> None:
    assert first_string({"detail": "fastapi", "error": "Project not found"}) == "Project not found"


def test_first_string_falls_back_to_detail_lists() -> None:
    payload = {"detail": [{"message": "field required"}]}
    assert first_string(payload) == "field required"


def test_first_string_ignores_blank_values() -> None:
    assert first_string({"error": "  "}) is None
    assert first_string(None) is None


def test_parse_error_payload_uses_text_when_not_json() -> None:
    assert parse_error_payload(_Resp(text="Bad Gateway", raises=True)) == "Bad Gateway"
    assert parse_error_payload(_Resp(text="", raises=True)) is None


def test_build_error_message_includes_status() -> None:
    assert build_error_message("join[p]", 403, {"error": "Project is private"}) == (
        "join[p]: Project is private (HTTP 403)"
    )
    assert build_error_message("join[p]", 500, None) == "join[p]: HTTP 500"


def test_extract_error_code_stringifies() -> None:
    assert extract_error_code({"code": 42}) == "42"
    assert extract_error_code(["x"]) is None
