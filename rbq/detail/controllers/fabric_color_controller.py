"""Controller for fabric/color editing (K2) and its Light-Filter submodes.

Plain K2 edits fabric and color per fabric type through a panel of inputs,
one (fabric, color) pair per type. The Light-Filter (LF) submodes work on
individually selected BO1 rows instead:

- K2_LF_SELECT: pick BO1 rows by sequence number, then fill the LF inputs;
  once both are filled the override is applied and the rows are marked
  LF-modified.
- K2_LF_DELETE_SELECT: pick LF-modified rows; requesting delete again wipes
  their fabric/color and the LF marking.

Both submodes return to ``none`` when they complete, not to plain K2.
"""
from __future__ import annotations
from typing import FrozenSet, Optional, Sequence, Tuple
import logging

from ...quote.models import FABRIC_TYPES, LF_FABRIC_TYPE, LF_PANEL_TYPE, PANEL_FIELDS, OrderLine
from ..columns import FABRIC_MODE_COLUMNS
from ..decisions import Severity
from ..state import EditMode, InteractionState, PanelInput
from .base import ModeController, ModeKind

logger = logging.getLogger(__name__)

PANEL_TYPES: Tuple[str, ...] = FABRIC_TYPES + (LF_PANEL_TYPE,)

LF_SELECT_GUIDANCE = (
    "Select BO1 items by clicking their sequence number, "
    "then enter the Light-Filter fabric name and color."
)
LF_DELETE_GUIDANCE = "Select the items whose Light-Filter settings should be removed, then press LF-Del again."


def panel_focus_target(key: Tuple[str, str]) -> str:
    return f"panel:{key[0]}:{key[1]}"


def build_panel_inputs(rows: Sequence[OrderLine], state: InteractionState) -> Tuple[PanelInput, ...]:
    """Compute enabled flags and initial values for every panel input.

    A regular input is enabled in K2 when at least one row has its fabric
    type; its value comes from the first row of that type whose field was
    ever set (an explicit blank counts). LF inputs keep their typed buffer
    and are enabled only while BO1 rows are selected for an LF override.
    """
    inputs = []
    for fabric_type in FABRIC_TYPES:
        group = [row for row in rows if row.fabric_type == fabric_type]
        enabled = state.active_edit_mode == EditMode.K2 and bool(group)
        for field in PANEL_FIELDS:
            value = next((getattr(r, field) for r in group if getattr(r, field) is not None), "")
            inputs.append(PanelInput(fabric_type, field, enabled, value))

    lf_enabled = state.active_edit_mode == EditMode.K2_LF_SELECT and bool(state.lf_selected_row_indexes)
    for field in PANEL_FIELDS:
        previous = state.panel_input(LF_PANEL_TYPE, field)
        value = previous.value if previous and state.active_edit_mode == EditMode.K2_LF_SELECT else ""
        inputs.append(PanelInput(LF_PANEL_TYPE, field, lf_enabled, value))
    return tuple(inputs)


class FabricColorController(ModeController):
    """Fabric/color panel plus Light-Filter selection workflows."""

    kind = ModeKind.FABRIC_COLOR

    def is_active(self) -> bool:
        mode = self.ui.state.active_edit_mode
        return mode == EditMode.K2 or mode.is_lf_submode

    # Plain K2

    def conflicting_lf_rows(self) -> FrozenSet[int]:
        """BO1 rows already carrying an LF override that K2 would overwrite."""
        modified = self.ui.state.lf_modified_row_indexes
        return frozenset(
            i for i, row in enumerate(self.quotes.get_rows())
            if row.fabric_type == LF_FABRIC_TYPE and i in modified
        )

    def activate(self, overwrite: bool = False) -> bool:
        changes = {}
        if overwrite:
            changes["lf_modified_row_indexes"] = (
                self.ui.state.lf_modified_row_indexes - self.conflicting_lf_rows()
            )
        self.ui.set_active_edit_mode(
            EditMode.K2,
            visible_columns=FABRIC_MODE_COLUMNS,
            active_cell=None,
            **changes,
        )
        self.refresh_panel_inputs()
        enabled = self.ui.state.enabled_panel_keys()
        if enabled:
            self.ui.update(focused_panel_input=enabled[0])
            self.ctx.request_focus(panel_focus_target(enabled[0]))
        return True

    def deactivate(self) -> bool:
        self.ui.set_active_edit_mode(
            EditMode.NONE,
            focused_panel_input=None,
            visible_columns=self.ui.tab_columns(),
        )
        self.refresh_panel_inputs()
        return True

    def refresh_panel_inputs(self):
        state = self.ui.state
        self.ui.update(panel_inputs=build_panel_inputs(self.quotes.get_rows(), state))

    def panel_input_blurred(self, fabric_type: str, field: str, value: str) -> bool:
        if field not in PANEL_FIELDS:
            raise KeyError(f"Unknown panel field: {field}")
        if fabric_type == LF_PANEL_TYPE:
            return self._lf_input_blurred(field, value)

        panel_input = self.ui.state.panel_input(fabric_type, field)
        if self.ui.state.active_edit_mode != EditMode.K2 or panel_input is None or not panel_input.enabled:
            return False
        self.quotes.batch_update_by_type(fabric_type, field, value)
        self.refresh_panel_inputs()
        return True

    def panel_input_entered(self) -> bool:
        """Move focus to the next enabled input, or leave K2 after the last one."""
        state = self.ui.state
        if state.active_edit_mode != EditMode.K2:
            return False
        enabled = state.enabled_panel_keys()
        current = state.focused_panel_input

        next_key: Optional[Tuple[str, str]] = None
        if current in enabled:
            position = enabled.index(current)
            if position + 1 < len(enabled):
                next_key = enabled[position + 1]
        elif current is None and enabled:
            next_key = enabled[0]

        if next_key is None:
            logger.info("Fabric/color entry finished")
            return self.deactivate()

        self.ui.update(focused_panel_input=next_key)
        self.ctx.request_focus(panel_focus_target(next_key))
        return True

    # Light-Filter submodes

    def toggle_lf_select(self) -> bool:
        mode = self.ui.state.active_edit_mode
        if mode == EditMode.K2_LF_SELECT:
            return self._leave_lf_submode()
        if mode != EditMode.NONE:
            return False
        if not any(row.fabric_type == LF_FABRIC_TYPE for row in self.quotes.get_rows()):
            self.ctx.notify("There are no BO1 items to apply Light-Filter settings to.", Severity.ERROR)
            return False
        self.ui.set_active_edit_mode(EditMode.K2_LF_SELECT, visible_columns=FABRIC_MODE_COLUMNS, active_cell=None)
        self.refresh_panel_inputs()
        self.ctx.notify(LF_SELECT_GUIDANCE, Severity.INFO)
        return True

    def toggle_lf_delete(self) -> bool:
        state = self.ui.state
        if state.active_edit_mode == EditMode.K2_LF_DELETE_SELECT:
            selected = state.lf_selected_row_indexes
            if selected:
                self.quotes.clear_lf(selected)
                self.ui.update(lf_modified_row_indexes=state.lf_modified_row_indexes - selected)
                self.ctx.notify(
                    f"Light-Filter settings removed from {len(selected)} item(s).", Severity.INFO
                )
                logger.info(f"LF cleared on rows {sorted(selected)}")
            return self._leave_lf_submode()
        if state.active_edit_mode != EditMode.NONE:
            return False
        if not state.lf_modified_row_indexes:
            self.ctx.notify("No items have Light-Filter settings to remove.", Severity.ERROR)
            return False
        self.ui.set_active_edit_mode(
            EditMode.K2_LF_DELETE_SELECT, visible_columns=FABRIC_MODE_COLUMNS, active_cell=None
        )
        self.refresh_panel_inputs()
        self.ctx.notify(LF_DELETE_GUIDANCE, Severity.INFO)
        return True

    def sequence_cell_clicked(self, row_index: int) -> bool:
        state = self.ui.state
        row = self.quotes.get_row(row_index)
        if row is None or not state.active_edit_mode.is_lf_submode:
            return False

        if state.active_edit_mode == EditMode.K2_LF_SELECT and row.fabric_type != LF_FABRIC_TYPE:
            self.ctx.notify("Only BO1 items can receive Light-Filter settings.", Severity.ERROR)
            return False
        if (state.active_edit_mode == EditMode.K2_LF_DELETE_SELECT
                and row_index not in state.lf_modified_row_indexes):
            self.ctx.notify("This item has no Light-Filter settings.", Severity.ERROR)
            return False

        self.ui.update(lf_selected_row_indexes=state.lf_selected_row_indexes ^ {row_index})
        self.refresh_panel_inputs()
        return True

    def _lf_input_blurred(self, field: str, value: str) -> bool:
        state = self.ui.state
        if state.active_edit_mode != EditMode.K2_LF_SELECT:
            return False
        inputs = tuple(
            PanelInput(p.fabric_type, p.field, p.enabled, value) if p.key == (LF_PANEL_TYPE, field) else p
            for p in state.panel_inputs
        )
        state = self.ui.update(panel_inputs=inputs)

        fabric = state.panel_input(LF_PANEL_TYPE, "fabric")
        color = state.panel_input(LF_PANEL_TYPE, "color")
        selected = state.lf_selected_row_indexes
        if not (fabric and color and fabric.value.strip() and color.value.strip() and selected):
            return True

        self.quotes.batch_apply_lf(selected, fabric.value, color.value)
        self.ui.update(lf_modified_row_indexes=state.lf_modified_row_indexes | selected)
        self.ctx.notify(f"Light-Filter settings applied to {len(selected)} item(s).", Severity.INFO)
        logger.info(f"LF applied to rows {sorted(selected)}: {fabric.value} / {color.value}")
        return self._leave_lf_submode()

    def _leave_lf_submode(self) -> bool:
        self.ui.set_active_edit_mode(EditMode.NONE, visible_columns=self.ui.tab_columns())
        self.refresh_panel_inputs()
        return True


__all__ = ["FabricColorController", "build_panel_inputs", "panel_focus_target", "PANEL_TYPES"]
