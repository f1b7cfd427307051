"""Use case for checking hardware out of, or back into, a project's pool.

Quantity validation is local and happens before any request; the service
still enforces availability and returns the authoritative counts.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional

from haas.domain.entities import ActionReceipt
from haas.domain.errors import InvalidInputError, InvalidQuantityError
from haas.domain.ports import HardwareAction, ProjectPort

from ._guards import require_user
from .error_mapping import map_api_error

HARDWARE_ACTIONS = ("checkout", "checkin")


def coerce_quantity(raw: Any) -> Optional[int]:
    """Return an int quantity or ``None`` when the input is not numeric."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if math.isfinite(raw) else None
    try:
        return int(str(raw).strip())
    except (TypeError, ValueError, OverflowError):
        return None


@dataclass
class PerformHardwareAction:
    """Use-case callable for checkout/check-in requests."""

    project_port: ProjectPort

    def __call__(
        self,
        *,
        project_id: str,
        hwset_id: str,
        action: HardwareAction,
        quantity: Any,
        user_id: Optional[str],
    ) -> ActionReceipt:
        """Submit one checkout or check-in.

        Raises:
            UnauthenticatedError: Without a session user.
            InvalidQuantityError: For non-positive or non-numeric quantities.
            InvalidInputError: For an unknown action.
            RemoteError: When the service rejects the request; carries the
                server message or ``"<action> failed"``.
            NetworkFailure: When the request could not be completed.
        """
        member = require_user(user_id)
        if action not in HARDWARE_ACTIONS:
            raise InvalidInputError(f"Unsupported action '{action}'")
        amount = coerce_quantity(quantity)
        if amount is None or amount <= 0:
            raise InvalidQuantityError()
        try:
            return self.project_port.hardware_action(project_id, hwset_id, action, amount, member)
        except Exception as exc:
            raise map_api_error(
                exc,
                default_message=f"{action} failed",
                classify=(),
                network_message=f"Network error during {action}",
            ) from exc


__all__ = ["HARDWARE_ACTIONS", "PerformHardwareAction", "coerce_quantity"]
