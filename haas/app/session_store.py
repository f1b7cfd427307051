"""Process-wide holder of the signed-in user id.

Other controllers read ``user_id`` and never write it; only login and logout
change it. The id is mirrored to a ``SessionPort`` so it survives reloads; no
password or token is ever kept.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from haas.domain.entities import UserId
from haas.domain.errors import UnauthenticatedError
from haas.domain.ports import SessionPort

SessionListener = Callable[[Optional[UserId]], None]


class SessionStore:
    def __init__(self, storage: Optional[SessionPort] = None) -> None:
        self._log = logging.getLogger(__name__)
        self._storage = storage
        self._user_id: Optional[UserId] = None
        self._listeners: List[SessionListener] = []

    @property
    def user_id(self) -> Optional[UserId]:
        return self._user_id

    @property
    def authenticated(self) -> bool:
        return bool(self._user_id)

    def require(self) -> UserId:
        if not self._user_id:
            raise UnauthenticatedError()
        return self._user_id

    def restore(self) -> Optional[UserId]:
        """Load a persisted user id, if any."""
        if self._storage is None:
            return self._user_id
        restored = self._storage.load_session_user()
        if restored:
            self._log.info("Restored session for %s", restored)
            self._set(restored)
        return self._user_id

    def login(self, user_id: UserId) -> None:
        cleaned = str(user_id or "").strip()
        if not cleaned:
            raise ValueError("login requires a user id")
        if self._storage is not None:
            self._storage.save_session_user(cleaned)
        self._set(cleaned)

    def logout(self) -> None:
        if self._storage is not None:
            self._storage.save_session_user(None)
        self._set(None)

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _set(self, user_id: Optional[UserId]) -> None:
        if user_id == self._user_id:
            return
        self._user_id = user_id
        for listener in list(self._listeners):
            listener(user_id)


__all__ = ["SessionStore"]
