"""Client settings: typed config plus the coercion rules for persisted values.

Values come from ``user_settings.json`` (via ``StorageLocal``) as loose JSON,
so every field has a coercer that either returns a clean value or raises
``ValueError`` naming the field.
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass, field, fields, replace
from typing import Any, Callable, Dict, Mapping, Optional

from ..utils.logging import env_requests_debug

API_URL_ENV = "HAAS_API_URL"
DEFAULT_API_URL = "http://127.0.0.1:5000"


def _default_quotas() -> Dict[str, int]:
    return {"hwset1": 15, "hwset2": 10}


@dataclass
class SettingsConfig:
    api_base_url: str = DEFAULT_API_URL
    request_timeout_s: int = 10
    retries: int = 2
    menu_close_delay_ms: int = 200
    default_quotas: Dict[str, int] = field(default_factory=_default_quotas)
    data_dir: str = "."


def _as_url(name: str, value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{name} must be a non-empty string.")
    return value.strip().rstrip("/")


def _as_count(name: str, value: Any) -> int:
    """Non-negative integer; bools are rejected even though they are ints."""
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValueError(f"{name} must be an integer.")
    try:
        number = int(value.strip()) if isinstance(value, str) else int(value)
    except (ValueError, OverflowError) as exc:
        raise ValueError(f"{name} must be an integer.") from exc
    if number < 0:
        raise ValueError(f"{name} must be non-negative.")
    return number


def _as_quotas(name: str, value: Any) -> Dict[str, int]:
    if not isinstance(value, Mapping):
        raise ValueError(f"{name} must map hardware set ids to totals.")
    quotas: Dict[str, int] = {}
    for raw_key, raw_total in value.items():
        key = str(raw_key).strip()
        if not key:
            raise ValueError(f"{name} has an empty hardware set id.")
        quotas[key] = _as_count(f"{name}[{key}]", raw_total)
    return quotas


def _as_dir(_name: str, value: Any) -> str:
    return str(value or "").strip() or "."


def _as_flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


_COERCERS: Dict[str, Callable[[str, Any], Any]] = {
    "api_base_url": _as_url,
    "request_timeout_s": _as_count,
    "retries": _as_count,
    "menu_close_delay_ms": _as_count,
    "default_quotas": _as_quotas,
    "data_dir": _as_dir,
}


class SettingsVM:
    """Holds settings state and validation; persistence is the caller's ``on_save``."""

    def __init__(
        self,
        *,
        config: Optional[SettingsConfig] = None,
        on_save: Optional[Callable[[dict], None]] = None,
    ) -> None:
        self.config = config or SettingsConfig()
        self.on_save = on_save
        self.debug_logging: bool = env_requests_debug()
        override = os.getenv(API_URL_ENV, "")
        if override.strip():
            self.api_base_url = override

    @property
    def api_base_url(self) -> str:
        return self.config.api_base_url

    @api_base_url.setter
    def api_base_url(self, value: str) -> None:
        self.config = replace(self.config, api_base_url=_as_url("api_base_url", value))

    @property
    def request_timeout_s(self) -> int:
        return self.config.request_timeout_s

    @request_timeout_s.setter
    def request_timeout_s(self, value: Any) -> None:
        self.config = replace(self.config, request_timeout_s=_as_count("request_timeout_s", value))

    @property
    def retries(self) -> int:
        return self.config.retries

    @property
    def menu_close_delay_ms(self) -> int:
        return self.config.menu_close_delay_ms

    @property
    def default_quotas(self) -> Dict[str, int]:
        return dict(self.config.default_quotas)

    @property
    def data_dir(self) -> str:
        return self.config.data_dir

    def is_valid(self) -> bool:
        return (
            self.api_base_url.startswith(("http://", "https://"))
            and self.request_timeout_s > 0
        )

    def apply_dict(self, payload: Mapping[str, Any]) -> None:
        """Apply a persisted snapshot; unknown keys are an error."""
        if not isinstance(payload, Mapping):
            raise ValueError("Settings payload must be a mapping.")
        known = {f.name for f in fields(SettingsConfig)} | {"debug_logging"}
        unknown = sorted(str(key) for key in payload if key not in known)
        if unknown:
            raise ValueError(f"Unsupported settings keys: {', '.join(unknown)}")

        updates = {
            key: _COERCERS[key](key, value)
            for key, value in payload.items()
            if key in _COERCERS
        }
        if updates:
            self.config = replace(self.config, **updates)
        if "debug_logging" in payload:
            self.debug_logging = _as_flag(payload["debug_logging"])

    def to_dict(self) -> dict:
        return {**asdict(self.config), "debug_logging": bool(self.debug_logging)}

    def cmd_save(self) -> None:
        if not self.is_valid():
            raise ValueError("Settings invalid")
        if self.on_save:
            self.on_save(self.to_dict())


def default_settings_payload() -> dict:
    """Snapshot of the default settings, ignoring environment overrides."""
    return {**asdict(SettingsConfig()), "debug_logging": False}


__all__ = ["API_URL_ENV", "SettingsConfig", "SettingsVM", "default_settings_payload"]
