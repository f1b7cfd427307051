from __future__ import annotations

import pytest

from haas.adapters.projects_mock import ProjectsMock
from haas.adapters.projects_rest import ProjectsRestAdapter
from haas.app.controller import AppController
from haas.viewmodels.settings_vm import SettingsVM


def test_ensure_ready_builds_rest_adapters_from_settings(monkeypatch) -> None:
    monkeypatch.delenv("HAAS_API_URL", raising=False)
    settings = SettingsVM()
    settings.api_base_url = "http://haas.local:8080/"
    controller = AppController(settings)

    assert controller.ensure_ready() is True
    adapter = controller.project_port
    assert isinstance(adapter, ProjectsRestAdapter)
    assert adapter.base_url == "http://haas.local:8080"
    assert controller.uc_create.quotas == {"hwset1": 15, "hwset2": 10}


def test_ensure_ready_rejects_invalid_url(monkeypatch) -> None:
    monkeypatch.delenv("HAAS_API_URL", raising=False)
    settings = SettingsVM()
    settings.api_base_url = "ftp://nope"
    controller = AppController(settings)

    assert controller.ensure_ready() is False
    with pytest.raises(RuntimeError):
        controller.build_auth()


def test_reset_keeps_injected_ports() -> None:
    mock = ProjectsMock()
    controller = AppController(SettingsVM(), project_port=mock, auth_port=mock)
    controller.ensure_ready()

    controller.reset()
    controller.ensure_ready()

    assert controller.project_port is mock
    assert controller.uc_load.project_port is mock


def test_project_view_uses_configured_close_delay() -> None:
    mock = ProjectsMock()
    settings = SettingsVM()
    settings.apply_dict({"menu_close_delay_ms": 350})
    controller = AppController(settings, project_port=mock, auth_port=mock)
    view = controller.build_project_view(
        "proj-1", scheduler=_NullScheduler()
    )

    assert view.visibility.close_delay_ms == 350


class _NullScheduler:
    def schedule(self, key, delay_ms, callback):
        return None

    def cancel(self, key):
        return False
