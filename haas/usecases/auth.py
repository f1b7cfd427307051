"""Signup and login use cases.

Both are plain request/response wrappers; the caller decides what to do with
the confirmed user id (normally ``SessionStore.login``).
"""

from __future__ import annotations

from dataclasses import dataclass

from haas.domain.entities import UserId
from haas.domain.ports import AuthPort

from ._guards import require_text
from .error_mapping import map_api_error


@dataclass
class SignupUser:
    auth_port: AuthPort

    def __call__(self, user_id: str, password: str) -> str:
        cleaned = require_text(user_id, "Please choose a user ID")
        require_text(password, "Please choose a password")
        try:
            self.auth_port.signup(cleaned, password)
        except Exception as exc:
            raise map_api_error(
                exc,
                default_message="Sign up failed",
                classify=(),
                network_message="Network error during sign up",
            ) from exc
        return "Sign up successful. You can now log in."


@dataclass
class LoginUser:
    auth_port: AuthPort

    def __call__(self, user_id: str, password: str) -> UserId:
        cleaned = require_text(user_id, "Please enter your user ID")
        try:
            return self.auth_port.login(cleaned, password)
        except Exception as exc:
            raise map_api_error(
                exc,
                default_message="Login failed",
                classify=(),
                network_message="Network error during login",
            ) from exc


__all__ = ["LoginUser", "SignupUser"]
