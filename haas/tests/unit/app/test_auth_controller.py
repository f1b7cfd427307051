from __future__ import annotations

import pytest

from haas.adapters.projects_mock import ProjectsMock
from haas.adapters.storage_local import StorageLocal
from haas.app.controller import AppController
from haas.app.fetch_pipeline import run_inline
from haas.viewmodels.settings_vm import SettingsVM


def _auth(tmp_path, mock=None):
    mock = mock or ProjectsMock()
    app = AppController(
        SettingsVM(),
        storage=StorageLocal(root_dir=str(tmp_path)),
        project_port=mock,
        auth_port=mock,
        offload=run_inline,
    )
    signed_in = []
    return app.build_auth(on_logged_in=signed_in.append), signed_in


@pytest.mark.asyncio
async def test_signup_then_login_starts_session(tmp_path) -> None:
    auth, signed_in = _auth(tmp_path)
    auth.vm.signup_user_id = " dana "
    auth.vm.signup_password = "pw"

    await auth.signup()
    assert auth.vm.message == "Sign up successful. You can now log in."
    assert auth.vm.signup_user_id == ""

    auth.vm.login_user_id = "dana"
    auth.vm.login_password = "pw"
    await auth.login()

    assert auth.session.user_id == "dana"
    assert signed_in == ["dana"]
    assert auth.vm.login_password == ""
    assert auth.vm.busy is False


@pytest.mark.asyncio
async def test_bad_credentials_show_server_error(tmp_path) -> None:
    mock = ProjectsMock()
    mock.add_user("dana", "pw")
    auth, signed_in = _auth(tmp_path, mock)
    auth.vm.login_user_id = "dana"
    auth.vm.login_password = "wrong"

    await auth.login()

    assert auth.vm.error == "Invalid credentials"
    assert auth.session.user_id is None
    assert signed_in == []


@pytest.mark.asyncio
async def test_duplicate_signup_is_reported(tmp_path) -> None:
    mock = ProjectsMock()
    mock.add_user("dana")
    auth, _ = _auth(tmp_path, mock)
    auth.vm.signup_user_id = "dana"
    auth.vm.signup_password = "pw"

    await auth.signup()

    assert auth.vm.error == "User already exists"


def test_resume_restores_persisted_session(tmp_path) -> None:
    StorageLocal(root_dir=str(tmp_path)).save_session_user("dana")
    auth, signed_in = _auth(tmp_path)

    assert auth.resume() is True
    assert signed_in == ["dana"]
