"""Immutable interaction state for the detail-configuration view.

Two independent mode axes exist:

- ``EditMode``: column-editing workflows (location, fabric/color with its
  Light-Filter submodes, batch cycle). At most one is active.
- ``K4Mode``: accessory workflows (dual brackets, chain length). At most one
  is active, independently of ``EditMode``.

Invariants enforced on construction:

- A target cell exists only while location editing (K1) or chain editing is active
- Light-Filter row selections exist only inside a Light-Filter submode
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional, Tuple

from ...quote.models import OrderLine
from ..columns import DEFAULT_TAB_ID, QUICK_QUOTE_COLUMNS


class EditMode(str, Enum):
    NONE = "none"
    K1 = "K1"
    K2 = "K2"
    K2_LF_SELECT = "K2_LF_SELECT"
    K2_LF_DELETE_SELECT = "K2_LF_DELETE_SELECT"
    K3 = "K3"

    @property
    def is_lf_submode(self) -> bool:
        return self in (EditMode.K2_LF_SELECT, EditMode.K2_LF_DELETE_SELECT)


class K4Mode(str, Enum):
    NONE = "none"
    DUAL = "dual"
    CHAIN = "chain"


class View(str, Enum):
    QUICK_QUOTE = "QUICK_QUOTE"
    DETAIL_CONFIG = "DETAIL_CONFIG"


@dataclass(frozen=True)
class CellRef:
    """A (row, column) pair in the order line table."""
    row_index: int
    column: str


@dataclass(frozen=True)
class PanelInput:
    """One input of the fabric/color panel."""
    fabric_type: str
    field: str
    enabled: bool = False
    value: str = ""

    @property
    def key(self) -> Tuple[str, str]:
        return (self.fabric_type, self.field)


@dataclass(frozen=True)
class InteractionState:
    """Transient UI state. Replace, never mutate."""

    current_view: View = View.QUICK_QUOTE
    active_tab_id: str = DEFAULT_TAB_ID
    visible_columns: Tuple[str, ...] = QUICK_QUOTE_COLUMNS
    active_edit_mode: EditMode = EditMode.NONE
    k4_active_mode: K4Mode = K4Mode.NONE
    target_cell: Optional[CellRef] = None
    active_cell: Optional[CellRef] = None
    location_input_value: str = ""
    chain_input_value: str = ""
    lf_selected_row_indexes: FrozenSet[int] = frozenset()
    lf_modified_row_indexes: FrozenSet[int] = frozenset()
    multi_delete_selected_indexes: FrozenSet[int] = frozenset()
    k4_dual_price: Optional[float] = None
    panel_inputs: Tuple[PanelInput, ...] = ()
    focused_panel_input: Optional[Tuple[str, str]] = None

    def __post_init__(self):
        """Validate state invariants."""
        if self.target_cell is not None and not (
            self.active_edit_mode == EditMode.K1 or self.k4_active_mode == K4Mode.CHAIN
        ):
            raise ValueError(
                f"Target cell {self.target_cell} requires location editing or chain mode "
                f"(edit_mode={self.active_edit_mode.value}, k4_mode={self.k4_active_mode.value})"
            )
        if self.lf_selected_row_indexes and not self.active_edit_mode.is_lf_submode:
            raise ValueError(
                f"Light-Filter selection requires a Light-Filter submode "
                f"(edit_mode={self.active_edit_mode.value})"
            )

    @property
    def is_in_edit_mode(self) -> bool:
        """True while any column-editing or accessory workflow is open."""
        return self.active_edit_mode != EditMode.NONE or self.k4_active_mode != K4Mode.NONE

    def panel_input(self, fabric_type: str, field: str) -> Optional[PanelInput]:
        for panel_input in self.panel_inputs:
            if panel_input.key == (fabric_type, field):
                return panel_input
        return None

    def enabled_panel_keys(self) -> Tuple[Tuple[str, str], ...]:
        return tuple(p.key for p in self.panel_inputs if p.enabled)


@dataclass(frozen=True)
class DetailSnapshot:
    """Full state handed to the renderer on every publish."""
    interaction: InteractionState
    order_lines: Tuple[OrderLine, ...]


__all__ = [
    "EditMode",
    "K4Mode",
    "View",
    "CellRef",
    "PanelInput",
    "InteractionState",
    "DetailSnapshot",
]
