from __future__ import annotations

import pytest

from haas.adapters.storage_local import StorageLocal
from haas.app.session_store import SessionStore
from haas.domain.errors import UnauthenticatedError


def test_login_persists_and_restore_reads_back(tmp_path) -> None:
    storage = StorageLocal(root_dir=str(tmp_path))
    SessionStore(storage).login("alice")

    restored = SessionStore(storage)
    assert restored.user_id is None
    assert restored.restore() == "alice"
    assert restored.authenticated


def test_logout_clears_persisted_copy(tmp_path) -> None:
    storage = StorageLocal(root_dir=str(tmp_path))
    session = SessionStore(storage)
    session.login("alice")

    session.logout()

    assert session.user_id is None
    assert not (tmp_path / "session.json").exists()
    assert SessionStore(storage).restore() is None


def test_require_raises_without_user() -> None:
    with pytest.raises(UnauthenticatedError) as err:
        SessionStore().require()
    assert err.value.code == "UNAUTHENTICATED"


def test_subscribers_see_changes_until_unsubscribed() -> None:
    session = SessionStore()
    seen = []
    unsubscribe = session.subscribe(seen.append)

    session.login("alice")
    session.login("alice")
    session.logout()
    unsubscribe()
    session.login("bob")

    assert seen == ["alice", None]


def test_login_rejects_blank_user() -> None:
    with pytest.raises(ValueError):
        SessionStore().login("  ")
