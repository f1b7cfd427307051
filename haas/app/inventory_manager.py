"""Hardware inventory of one project: reads and checkout/check-in actions.

Updates are pessimistic. After every successful action the full inventory is
read again and replaces the local rows; counts are never computed locally.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from haas.domain.errors import InvalidQuantityError, UnauthenticatedError
from haas.domain.ports import HardwareAction
from haas.usecases.hardware_action import PerformHardwareAction, coerce_quantity
from haas.usecases.load_resources import LoadResources
from haas.viewmodels.resources_vm import ResourcesVM

from .fetch_pipeline import FetchPipeline
from .session_store import SessionStore

SLOT = "resources"


def action_slot(hwset_id: str) -> str:
    return f"action:{hwset_id}"


class ResourceInventoryManager:
    def __init__(
        self,
        *,
        project_id: str,
        vm: ResourcesVM,
        session: SessionStore,
        uc_load: LoadResources,
        uc_action: PerformHardwareAction,
        pipeline: FetchPipeline,
    ) -> None:
        self._log = logging.getLogger(__name__)
        self.project_id = project_id
        self.vm = vm
        self.session = session
        self.uc_load = uc_load
        self.uc_action = uc_action
        self.pipeline = pipeline

    async def load(self) -> None:
        """Read all hardware views and replace the local rows."""
        user_id = self.session.user_id
        if not user_id:
            self.vm.report_load_error(UnauthenticatedError())
            return

        self.vm.loading = True
        self.vm.clear_load_error()
        result = await self.pipeline.run(SLOT, self.uc_load, self.project_id, user_id)
        if result.stale:
            return
        self.vm.loading = False
        if result.error is not None:
            self._log.info("Resources for %s failed: %s", self.project_id, result.error.message)
            self.vm.report_load_error(result.error)
            return
        self.vm.replace_rows(result.value)

    async def refresh(self) -> None:
        await self.load()

    async def perform_action(
        self, hwset_id: str, action: HardwareAction, quantity: Optional[Any] = None
    ) -> None:
        """Check units out of, or back into, one hardware set.

        Args:
            hwset_id: Hardware set to act on.
            action: ``"checkout"`` or ``"checkin"``.
            quantity: Units to move; defaults to the row's quantity input.

        A call while the same hardware set already has an action in flight is
        a no-op. The pending flag is released on every exit path.
        """
        if self.vm.is_pending(hwset_id):
            self._log.debug("Ignoring %s on %s: action already in flight", action, hwset_id)
            return

        user_id = self.session.user_id
        if not user_id:
            self.vm.report_action_error(UnauthenticatedError())
            return

        raw = self.vm.quantity_for(hwset_id) if quantity is None else quantity
        amount = coerce_quantity(raw)
        if amount is None or amount <= 0:
            self.vm.report_action_error(InvalidQuantityError())
            return

        self.vm.set_pending(hwset_id, True)
        self.vm.clear_action_message()
        try:
            result = await self.pipeline.run(
                action_slot(hwset_id),
                self.uc_action,
                project_id=self.project_id,
                hwset_id=hwset_id,
                action=action,
                quantity=amount,
                user_id=user_id,
            )
            if result.stale:
                return
            if result.error is not None:
                self._log.info("%s of %s x%s failed: %s", action, hwset_id, amount, result.error.message)
                self.vm.report_action_error(result.error)
            else:
                self.vm.report_action_success(result.value.message or f"{action} succeeded")
                await self.load()
            self.vm.reset_quantity(hwset_id)
        finally:
            self.vm.set_pending(hwset_id, False)


__all__ = ["ResourceInventoryManager", "action_slot"]
