"""Controller for the batch-cycle columns (K3): over, oi, lr."""
from __future__ import annotations
import logging

from ...quote.models import K3_CYCLES, next_in_cycle
from ..scheduling import DeferredTask
from ..state import CellRef, EditMode
from .base import ModeController, ModeKind

logger = logging.getLogger(__name__)


class BatchCycleController(ModeController):
    """Cycles over/oi/lr values, either for one cell or for the whole column.

    A clicked cell is highlighted as the transient active cell and the
    highlight is cleared after ``settings.active_cell_clear_ms``, unless a
    newer interaction has replaced it by then.
    """

    kind = ModeKind.BATCH_CYCLE

    def is_active(self) -> bool:
        return self.ui.state.active_edit_mode == EditMode.K3

    def activate(self) -> bool:
        self.ui.set_active_edit_mode(EditMode.K3, active_cell=None)
        return True

    def deactivate(self) -> bool:
        self.ui.set_active_edit_mode(EditMode.NONE, active_cell=None)
        return True

    def toggle(self) -> bool:
        return self.deactivate() if self.is_active() else self.activate()

    def batch_cycle(self, column: str) -> bool:
        """Apply the value after row 0's current value to every row."""
        if column not in K3_CYCLES:
            logger.warning(f"Batch cycle requested for unsupported column '{column}'")
            return False
        first = self.quotes.get_row(0)
        if first is None:
            return False
        value = next_in_cycle(column, getattr(first, column))
        self.quotes.batch_update_column(column, value)
        logger.debug(f"Batch cycle {column} → {value!r}")
        return True

    def cell_clicked(self, row_index: int, column: str) -> bool:
        if column not in K3_CYCLES or self.quotes.get_row(row_index) is None:
            return False
        cell = CellRef(row_index, column)
        self.ui.update(active_cell=cell)
        self.quotes.cycle_field(row_index, column)
        self.ctx.defer(DeferredTask(
            name="clear-active-cell",
            delay_ms=self.ctx.settings.active_cell_clear_ms,
            expected=(EditMode.K3, cell),
            probe=lambda: (self.ui.state.active_edit_mode, self.ui.state.active_cell),
            action=self._clear_active_cell,
        ))
        return True

    def _clear_active_cell(self) -> bool:
        self.ui.update(active_cell=None)
        return True


__all__ = ["BatchCycleController"]
