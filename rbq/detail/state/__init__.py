"""State containers for the detail-configuration view."""

from .interaction_state import (
    CellRef,
    DetailSnapshot,
    EditMode,
    InteractionState,
    K4Mode,
    PanelInput,
    View,
)
from .ui_state_store import UiStateStore

__all__ = [
    "CellRef",
    "DetailSnapshot",
    "EditMode",
    "InteractionState",
    "K4Mode",
    "PanelInput",
    "View",
    "UiStateStore",
]
