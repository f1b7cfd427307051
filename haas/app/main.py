"""Headless runtime entry point.

Loads persisted settings, restores the saved session and opens the dashboard
(or a single project view when a project id is given). Views subscribe to the
view-models; here the state is written to the log.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import List, Optional

from ..adapters.storage_local import StorageLocal
from ..domain.entities import ProjectSeed
from ..utils.logging import apply_debug_preference, configure_root
from ..viewmodels.settings_vm import SettingsVM, default_settings_payload
from .controller import AppController
from .timer_scheduler import TimerScheduler

log = logging.getLogger("haas.app")


def load_settings(storage: StorageLocal) -> SettingsVM:
    settings = SettingsVM(on_save=storage.save_user_settings)
    payload = storage.load_user_settings()
    if not payload:
        # first start: leave an editable settings file behind
        storage.save_user_settings(default_settings_payload())
    else:
        try:
            settings.apply_dict(payload)
        except ValueError as exc:
            log.warning("Ignoring invalid user settings: %s", exc)
    apply_debug_preference(settings.debug_logging)
    return settings


async def run(app: AppController, project_id: Optional[str] = None) -> int:
    if not app.session.restore():
        log.error("No saved session; log in first")
        return 1

    if project_id:
        view = app.build_project_view(
            project_id, scheduler=TimerScheduler.for_loop(asyncio.get_running_loop())
        )
        await view.open()
        try:
            if view.header.error:
                log.error("%s", view.header.error)
                return 1
            log.info("%s (%s)", view.header.title, view.header.visibility_label)
            for row in view.resources.rows:
                log.info("  %s: %d/%d available, %d held", row.name, row.available, row.total, row.allocated_to_project)
            log.info("  members: %s", ", ".join(view.members.members) or "-")
        finally:
            view.close()
        return 0

    def _navigate(pid: str, _seed: ProjectSeed) -> None:
        log.info("Navigate to %s", pid)

    dashboard = app.build_dashboard(navigate=_navigate)
    await dashboard.open()
    try:
        if dashboard.vm.error:
            log.error("%s", dashboard.vm.error)
            return 1
        for project in dashboard.vm.projects:
            log.info("%s  %s", project.project_id, project.name)
    finally:
        dashboard.close()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    configure_root()
    args = list(sys.argv[1:] if argv is None else argv)
    storage = StorageLocal()
    settings = load_settings(storage)
    storage = StorageLocal(settings.data_dir)
    app = AppController(settings, storage=storage)
    if not app.ensure_ready():
        log.error("Invalid client settings: api_base_url=%s", settings.api_base_url)
        return 2
    return asyncio.run(run(app, args[0] if args else None))


if __name__ == "__main__":
    sys.exit(main())
