"""Controller for accessory columns (K4): dual brackets and chain length."""
from __future__ import annotations
import logging

from ...quote.models import DUAL_MARKER
from ..decisions import Severity
from ..errors import ValidationError, parse_chain_value
from ..state import CellRef, EditMode, K4Mode
from .base import ModeController, ModeKind

logger = logging.getLogger(__name__)

CHAIN_FOCUS_TARGET = "chain-input"


class AccessoryController(ModeController):
    """Dual/chain workflows sharing the K4 mode slot.

    - dual: clicking a dual cell toggles its marker. Leaving the mode is only
      allowed with an even number of marked rows (brackets come in pairs),
      and stores the computed bracket price.
    - chain: clicking a chain cell binds it to the text buffer; submitting
      accepts blank (clears) or a positive integer.
    """

    kind = ModeKind.ACCESSORY

    def is_active(self) -> bool:
        return self.ui.state.k4_active_mode != K4Mode.NONE

    def activate(self, mode: K4Mode = K4Mode.DUAL) -> bool:
        self.ui.update(k4_active_mode=K4Mode(mode))
        return True

    def deactivate(self) -> bool:
        changes = {"k4_active_mode": K4Mode.NONE, "chain_input_value": ""}
        # A target owned by location editing stays with it
        if self.ui.state.active_edit_mode != EditMode.K1:
            changes["target_cell"] = None
        self.ui.update(**changes)
        return True

    def mode_changed(self, mode) -> bool:
        """Toggle ``mode`` on or off. Switching directly between modes is rejected."""
        mode = K4Mode(mode)
        if mode == K4Mode.NONE:
            return self.deactivate() if self.is_active() else False

        current = self.ui.state.k4_active_mode
        if current == K4Mode.NONE:
            return self.activate(mode)
        if current != mode:
            logger.debug(f"K4 mode change to {mode.value} rejected: {current.value} is active")
            return False

        if mode == K4Mode.DUAL:
            rows = self.quotes.get_rows()
            marked = sum(1 for row in rows if row.has_dual_marker)
            if marked % 2:
                self.ctx.notify(
                    f"Dual brackets must be set in pairs; {marked} items are marked.", Severity.ERROR
                )
                return False
            price = self.ctx.calculator.price_for_dual_brackets(rows)
            self.ui.update(k4_dual_price=price)
            logger.info(f"Dual bracket price: {price:.2f} ({marked} items)")
        return self.deactivate()

    def cell_clicked(self, row_index: int, column: str) -> bool:
        mode = self.ui.state.k4_active_mode
        row = self.quotes.get_row(row_index)
        if row is None or column != mode.value:
            return False

        if mode == K4Mode.DUAL:
            new_value = "" if row.dual == DUAL_MARKER else DUAL_MARKER
            self.quotes.update_field(row_index, "dual", new_value)
            return True

        self.ui.update(
            target_cell=CellRef(row_index, "chain"),
            chain_input_value="" if row.chain is None else str(row.chain),
        )
        self.ctx.request_focus(CHAIN_FOCUS_TARGET)
        return True

    def submit(self, value: str) -> bool:
        state = self.ui.state
        target = state.target_cell
        if state.k4_active_mode != K4Mode.CHAIN or target is None or target.column != "chain":
            return False
        try:
            chain = parse_chain_value(value)
        except ValidationError as e:
            self.ctx.notify(str(e), Severity.ERROR)
            return False
        self.quotes.update_field(target.row_index, "chain", chain)
        self.ui.update(target_cell=None, chain_input_value="")
        return True


__all__ = ["AccessoryController", "CHAIN_FOCUS_TARGET"]
