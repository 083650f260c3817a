"""Application-level controller: views, tabs and document lifecycle."""
from __future__ import annotations
from typing import Iterable, Optional
import logging

from ..detail.columns import DEFAULT_TAB_ID, QUICK_QUOTE_COLUMNS, TAB_COLUMN_MAP
from ..detail.controllers import ModeOrchestrator
from ..detail.decisions import Severity
from ..detail.state import View
from ..quote import OrderLine

logger = logging.getLogger(__name__)


class AppController:
    """Owns everything above the detail editors.

    Responsibilities:
    - Switch between the quick list and the detail configuration view
    - Apply a tab's column set (only while no edit mode is open)
    - Replace the order lines on document load/reset

    Interaction state is rebuilt from defaults on every view change and on
    every document load. Only the Light-Filter row marking survives a view
    change; a document load drops it too.
    """

    def __init__(self, orchestrator: ModeOrchestrator):
        self.orchestrator = orchestrator
        self.quotes = orchestrator.quotes
        self.ui = orchestrator.ui

    @property
    def current_view(self) -> View:
        return self.ui.state.current_view

    def navigate_to_detail_view(self) -> bool:
        """Enter detail configuration from the quick list, or go back if already there."""
        if self.current_view == View.DETAIL_CONFIG:
            return self.navigate_to_quick_quote()
        self.ui.reset(
            current_view=View.DETAIL_CONFIG,
            lf_modified_row_indexes=self.ui.state.lf_modified_row_indexes,
        )
        self.orchestrator.initialize_panel_state()
        logger.info("Entered detail configuration view")
        return self.switch_tab(DEFAULT_TAB_ID)

    def navigate_to_quick_quote(self) -> bool:
        self.ui.reset(
            current_view=View.QUICK_QUOTE,
            visible_columns=QUICK_QUOTE_COLUMNS,
            lf_modified_row_indexes=self.ui.state.lf_modified_row_indexes,
        )
        self.orchestrator.publish()
        return True

    def switch_tab(self, tab_id: str) -> bool:
        columns = TAB_COLUMN_MAP.get(tab_id)
        if columns is None:
            logger.warning(f"Unknown tab '{tab_id}'")
            return False
        if self.ui.state.is_in_edit_mode:
            logger.debug(f"Tab switch to {tab_id} rejected while an edit mode is active")
            return False
        self.ui.update(active_tab_id=tab_id, visible_columns=columns)
        self.orchestrator.publish()
        return True

    def has_data(self) -> bool:
        return self.quotes.has_data()

    def load_document(self, rows: Iterable[OrderLine], source: Optional[str] = None) -> bool:
        """Replace all order lines and reset the interaction state."""
        self.quotes.replace_rows(rows)
        self.ui.reset()
        self.orchestrator.publish()
        label = f" from {source}" if source else ""
        self.orchestrator.notify(f"Loaded {self.quotes.row_count} item(s){label}.", Severity.INFO)
        return True

    def reset_document(self) -> bool:
        self.quotes.replace_rows([])
        self.ui.reset()
        self.orchestrator.publish()
        return True


__all__ = ["AppController"]
