"""Controller for location editing (K1)."""
from __future__ import annotations
import logging

from ..columns import LOCATION_MODE_COLUMNS
from ..state import CellRef, EditMode
from .base import ModeController, ModeKind

logger = logging.getLogger(__name__)

LOCATION_FOCUS_TARGET = "location-input"


class LocationController(ModeController):
    """Walks a text buffer down the location column.

    Submitting writes the buffer into the targeted row and moves to the next
    row; the trailing row is the add-row slot, so submitting on the row
    before it ends the mode.
    """

    kind = ModeKind.LOCATION

    def is_active(self) -> bool:
        return self.ui.state.active_edit_mode == EditMode.K1

    def activate(self) -> bool:
        first = self.quotes.get_row(0)
        if first is None:
            logger.debug("Location mode not entered: no rows")
            return False
        self.ui.set_active_edit_mode(
            EditMode.K1,
            visible_columns=LOCATION_MODE_COLUMNS,
            target_cell=CellRef(0, "location"),
            location_input_value=first.location,
            chain_input_value="",
        )
        self.ctx.request_focus(LOCATION_FOCUS_TARGET)
        return True

    def deactivate(self) -> bool:
        self.ui.set_active_edit_mode(
            EditMode.NONE,
            target_cell=None,
            location_input_value="",
            visible_columns=self.ui.tab_columns(),
        )
        return True

    def cell_clicked(self, row_index: int, column: str = "location") -> bool:
        """Retarget the buffer to ``row_index``; the clicked column is irrelevant."""
        return self._target_row(row_index)

    def submit(self, value: str) -> bool:
        target = self.ui.state.target_cell
        if target is None:
            return False
        self.quotes.update_field(target.row_index, "location", value)

        next_index = target.row_index + 1
        if next_index < self.quotes.row_count - 1:
            return self._target_row(next_index)

        logger.info(f"Location entry finished at row {target.row_index + 1}")
        return self.deactivate()

    def _target_row(self, row_index: int) -> bool:
        row = self.quotes.get_row(row_index)
        if row is None:
            return False
        self.ui.update(
            target_cell=CellRef(row_index, "location"),
            location_input_value=row.location,
        )
        self.ctx.request_focus(LOCATION_FOCUS_TARGET)
        return True


__all__ = ["LocationController", "LOCATION_FOCUS_TARGET"]
