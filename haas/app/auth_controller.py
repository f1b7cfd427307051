from __future__ import annotations

import logging
from typing import Callable, Optional

from haas.usecases.auth import LoginUser, SignupUser
from haas.viewmodels.auth_vm import AuthVM

from .fetch_pipeline import FetchPipeline
from .session_store import SessionStore


class AuthController:
    """Sign-in / sign-up screen; a successful login starts the session."""

    def __init__(
        self,
        *,
        vm: AuthVM,
        session: SessionStore,
        uc_login: LoginUser,
        uc_signup: SignupUser,
        pipeline: FetchPipeline,
        on_logged_in: Optional[Callable[[str], None]] = None,
    ) -> None:
        self._log = logging.getLogger(__name__)
        self.vm = vm
        self.session = session
        self.uc_login = uc_login
        self.uc_signup = uc_signup
        self.pipeline = pipeline
        self.on_logged_in = on_logged_in

    def resume(self) -> bool:
        """Restore a persisted session; True when the user is already signed in."""
        user_id = self.session.restore()
        if user_id and self.on_logged_in:
            self.on_logged_in(user_id)
        return bool(user_id)

    async def signup(self) -> None:
        self.vm.clear_feedback()
        self.vm.busy = True
        try:
            result = await self.pipeline.run(
                "signup", self.uc_signup, self.vm.signup_user_id, self.vm.signup_password
            )
            if result.stale:
                return
            if result.error is not None:
                self.vm.error = result.error.message
                return
            self.vm.message = result.value
            self.vm.clear_signup_form()
        finally:
            self.vm.busy = False

    async def login(self) -> None:
        self.vm.clear_feedback()
        self.vm.busy = True
        try:
            result = await self.pipeline.run(
                "login", self.uc_login, self.vm.login_user_id, self.vm.login_password
            )
            if result.stale:
                return
            if result.error is not None:
                self.vm.error = result.error.message
                return
            self.session.login(result.value)
            self.vm.login_password = ""
            self._log.info("Signed in as %s", result.value)
            if self.on_logged_in:
                self.on_logged_in(result.value)
        finally:
            self.vm.busy = False


__all__ = ["AuthController"]
