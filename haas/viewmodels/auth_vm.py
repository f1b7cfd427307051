from __future__ import annotations

from dataclasses import dataclass


@dataclass
class AuthVM:
    """Sign-in and sign-up form state."""

    login_user_id: str = ""
    login_password: str = ""
    signup_user_id: str = ""
    signup_password: str = ""
    message: str = ""
    error: str = ""
    busy: bool = False

    def clear_feedback(self) -> None:
        self.message = ""
        self.error = ""

    def clear_signup_form(self) -> None:
        self.signup_user_id = ""
        self.signup_password = ""


__all__ = ["AuthVM"]
