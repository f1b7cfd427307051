"""State for the hardware-set panel of the project view."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from haas.domain.entities import HardwareSetView
from haas.domain.errors import UseCaseError
from haas.usecases.hardware_action import coerce_quantity

DEFAULT_QUANTITY = 1


@dataclass
class ResourcesVM:
    """Hardware rows, per-row quantity inputs and the per-row pending flags.

    ``pending`` is the only mutual-exclusion primitive of the view: it is keyed
    by hardware set so unrelated rows stay independently actionable.
    """

    rows: List[HardwareSetView] = field(default_factory=list)
    loading: bool = False
    error: Optional[str] = None
    error_code: Optional[str] = None
    quantities: Dict[str, int] = field(default_factory=dict)
    pending: Dict[str, bool] = field(default_factory=dict)
    action_message: str = ""
    action_error: Optional[UseCaseError] = None

    def replace_rows(self, rows: Iterable[HardwareSetView]) -> None:
        # Full replace: hardware types missing from the new read are dropped.
        self.rows = list(rows)

    def report_load_error(self, err: UseCaseError) -> None:
        self.error = err.message
        self.error_code = err.code

    def clear_load_error(self) -> None:
        self.error = None
        self.error_code = None

    def row(self, hwset_id: str) -> Optional[HardwareSetView]:
        for entry in self.rows:
            if entry.hwset_id == hwset_id:
                return entry
        return None

    # ---- quantity inputs ----
    def quantity_for(self, hwset_id: str) -> int:
        return self.quantities.get(hwset_id, DEFAULT_QUANTITY)

    def set_quantity(self, hwset_id: str, raw: Any) -> int:
        """Store the typed quantity; unparsable or zero input falls back to 1."""
        value = coerce_quantity(raw)
        self.quantities[hwset_id] = value if value else DEFAULT_QUANTITY
        return self.quantities[hwset_id]

    def reset_quantity(self, hwset_id: str) -> None:
        self.quantities[hwset_id] = DEFAULT_QUANTITY

    @staticmethod
    def max_quantity(row: HardwareSetView) -> int:
        return max(row.available, row.allocated_to_project)

    # ---- pending flags ----
    def is_pending(self, hwset_id: str) -> bool:
        return bool(self.pending.get(hwset_id))

    def set_pending(self, hwset_id: str, value: bool) -> None:
        self.pending[hwset_id] = bool(value)

    # ---- inline message ----
    def report_action_success(self, message: str) -> None:
        self.action_message = message
        self.action_error = None

    def report_action_error(self, error: UseCaseError) -> None:
        self.action_message = error.message
        self.action_error = error

    def clear_action_message(self) -> None:
        self.action_message = ""
        self.action_error = None

    @property
    def action_is_error(self) -> bool:
        return self.action_error is not None


__all__ = ["DEFAULT_QUANTITY", "ResourcesVM"]
