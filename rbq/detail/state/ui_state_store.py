"""UiStateStore - single owner of the detail view's InteractionState.

Controllers describe a transition as a set of field changes; the store
applies them in one step so no intermediate state is ever observable:

    User command → controller → UiStateStore.update(...) → orchestrator publish

State Policy:
- Leaving a Light-Filter submode drops the Light-Filter row selection
- ``reset()`` rebuilds the state from defaults (view navigation, document load)
- The store never notifies anyone; publishing belongs to the orchestrator
"""

from __future__ import annotations
from dataclasses import replace
from typing import Any
import logging

from ..columns import columns_for_tab
from .interaction_state import EditMode, InteractionState

logger = logging.getLogger(__name__)


class UiStateStore:
    """Holds the current InteractionState and applies transitions."""

    def __init__(self, initial: InteractionState | None = None):
        self._state = initial or InteractionState()

    @property
    def state(self) -> InteractionState:
        """Get current interaction state (immutable)."""
        return self._state

    def update(self, **changes: Any) -> InteractionState:
        """Apply field changes atomically and return the new state.

        Raises:
            ValueError: If the resulting state breaks an invariant (state unchanged)
        """
        old = self._state
        new_mode = changes.get("active_edit_mode", old.active_edit_mode)
        if old.active_edit_mode.is_lf_submode and new_mode != old.active_edit_mode:
            changes.setdefault("lf_selected_row_indexes", frozenset())

        self._state = replace(old, **changes)

        if new_mode != old.active_edit_mode:
            logger.debug(f"Edit mode: {old.active_edit_mode.value} → {new_mode.value}")
        if self._state.k4_active_mode != old.k4_active_mode:
            logger.debug(f"K4 mode: {old.k4_active_mode.value} → {self._state.k4_active_mode.value}")
        return self._state

    def set_active_edit_mode(self, mode: EditMode, **changes: Any) -> InteractionState:
        return self.update(active_edit_mode=mode, **changes)

    def tab_columns(self):
        """Column set of the active tab, restored when a mode override ends."""
        return columns_for_tab(self._state.active_tab_id)

    def reset(self, **changes: Any) -> InteractionState:
        """Discard all interaction state, optionally seeding some fields."""
        self._state = InteractionState(**changes)
        logger.debug(f"Interaction state reset (view={self._state.current_view.value})")
        return self._state


__all__ = ["UiStateStore"]
