from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

from haas.domain.entities import UserId
from haas.domain.ports import SessionPort

_log = logging.getLogger(__name__)


class StorageLocal(SessionPort):
    """Local filesystem storage for the session user and user settings (JSON)."""

    SESSION_FILE = "session.json"
    SETTINGS_FILE = "user_settings.json"

    def __init__(self, root_dir: str = ".") -> None:
        self.root = root_dir

    # ---- Session (userId only, never credentials) ----
    def save_session_user(self, user_id: Optional[UserId]) -> None:
        path = os.path.join(self.root, self.SESSION_FILE)
        if not user_id:
            if os.path.exists(path):
                os.remove(path)
            return
        self._write_json(path, {"userId": str(user_id)})

    def load_session_user(self) -> Optional[UserId]:
        path = os.path.join(self.root, self.SESSION_FILE)
        data = self._read_json(path)
        user_id = data.get("userId") if isinstance(data, dict) else None
        if isinstance(user_id, str) and user_id.strip():
            return user_id.strip()
        return None

    # ---- User settings ----
    def save_user_settings(self, settings: Dict[str, Any]) -> None:
        self._write_json(os.path.join(self.root, self.SETTINGS_FILE), dict(settings))

    def load_user_settings(self) -> Dict[str, Any]:
        data = self._read_json(os.path.join(self.root, self.SETTINGS_FILE))
        return dict(data) if isinstance(data, dict) else {}

    # ------------------------------------------------------------------
    def _write_json(self, path: str, payload: Dict[str, Any]) -> None:
        os.makedirs(self.root, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)

    @staticmethod
    def _read_json(path: str) -> Any:
        if not os.path.exists(path):
            return {}
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError:
            _log.warning("Ignoring unreadable JSON file %s", path)
            return {}
