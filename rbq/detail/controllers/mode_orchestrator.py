"""Mode orchestrator coordinating the four detail-configuration controllers."""
from __future__ import annotations
from typing import Dict, Optional, Sequence
from PySide6.QtCore import QObject, Signal
import logging

from ...config_types import DetailConfig
from ...quote import CalculationService, QuoteStore
from ...quote.models import K3_CYCLES
from ..decisions import Choice, PendingDecision, Severity
from ..scheduling import DeferredTask, QtScheduler, Scheduler
from ..state import DetailSnapshot, EditMode, K4Mode, UiStateStore
from .accessory_controller import AccessoryController
from .base import ControllerContext, ModeController, ModeKind
from .batch_cycle_controller import BatchCycleController
from .fabric_color_controller import FabricColorController
from .location_controller import LocationController

logger = logging.getLogger(__name__)

LF_OVERWRITE_MESSAGE = (
    "Some BO1 items have Light-Filter settings. Continuing will overwrite this data. Proceed?"
)


class ModeOrchestrator(QObject):
    """Top-level dispatcher for detail-configuration commands.

    Each controller owns one column family:

    - LocationController (K1): location text entry, row by row
    - FabricColorController (K2): fabric/color panel and Light-Filter submodes
    - BatchCycleController (K3): over/oi/lr value cycling
    - AccessoryController (K4): dual brackets and chain length

    The orchestrator enforces mutual exclusion between edit modes, routes
    table clicks by precedence (K1 > K3 > K4), and publishes exactly one
    snapshot per accepted command. Rejected commands publish nothing.

    Signals:
        stateChanged(DetailSnapshot): full state after every accepted mutation
        notificationRaised(str, str): message and severity ('info' or 'error')
        confirmationRequested(PendingDecision): answer via resolve_decision()
        focusRequested(str): input to focus once the renderer has caught up
    """

    stateChanged = Signal(object)
    notificationRaised = Signal(str, str)
    confirmationRequested = Signal(object)
    focusRequested = Signal(str)

    def __init__(
        self,
        quotes: QuoteStore,
        ui: UiStateStore,
        calculator: Optional[CalculationService] = None,
        scheduler: Optional[Scheduler] = None,
        settings: Optional[DetailConfig] = None,
        parent: Optional[QObject] = None
    ):
        """Initialize orchestrator and all controllers.

        Args:
            quotes: Order line store (shared with the app controller)
            ui: Interaction state store (shared with the app controller)
            calculator: Pricing collaborator for dual brackets
            scheduler: Deferred-work scheduler (defaults to QTimer based)
            settings: Timing settings
            parent: Parent QObject
        """
        super().__init__(parent)
        self.quotes = quotes
        self.ui = ui
        self.scheduler = scheduler or QtScheduler()
        self.settings = settings or DetailConfig()
        self._pending_decision: Optional[PendingDecision] = None

        context = ControllerContext(
            quotes=quotes,
            ui=ui,
            calculator=calculator or CalculationService(),
            settings=self.settings,
            notify=self.notify,
            request_focus=self._request_focus,
            defer=self._defer,
        )
        self.location = LocationController(context)
        self.fabric_color = FabricColorController(context)
        self.batch_cycle = BatchCycleController(context)
        self.accessory = AccessoryController(context)

        self._controllers: Dict[ModeKind, ModeController] = {
            c.kind: c for c in (self.location, self.fabric_color, self.batch_cycle, self.accessory)
        }

    # Publishing

    def snapshot(self) -> DetailSnapshot:
        return DetailSnapshot(interaction=self.ui.state, order_lines=self.quotes.get_rows())

    def publish(self):
        self.stateChanged.emit(self.snapshot())

    def notify(self, message: str, severity: Severity = Severity.INFO):
        log = logger.warning if severity == Severity.ERROR else logger.info
        log(f"[{severity.value}] {message}")
        self.notificationRaised.emit(message, severity.value)

    def _finish(self, changed: bool) -> bool:
        if changed:
            self.publish()
        return changed

    @property
    def pending_decision(self) -> Optional[PendingDecision]:
        return self._pending_decision

    def controller(self, kind: ModeKind) -> ModeController:
        return self._controllers[kind]

    # Entry points

    def initialize_panel_state(self):
        """Compute panel inputs without publishing (used on detail-view entry)."""
        self.fabric_color.refresh_panel_inputs()

    def request_focus_mode(self, column: str) -> bool:
        """Toggle location (K1) or fabric/color (K2) editing."""
        mode = self.ui.state.active_edit_mode
        if column == "location":
            if mode == EditMode.K1:
                return self._finish(self.location.deactivate())
            if mode != EditMode.NONE:
                return self._reject(f"location mode while {mode.value} is active")
            return self._finish(self.location.activate())

        if column == "fabric":
            if mode == EditMode.K2:
                return self._finish(self.fabric_color.deactivate())
            if mode != EditMode.NONE:
                return self._reject(f"fabric mode while {mode.value} is active")
            if self.fabric_color.conflicting_lf_rows():
                self._request_confirmation(LF_OVERWRITE_MESSAGE, [
                    Choice("OK", self._confirm_fabric_overwrite),
                    Choice("Cancel"),
                ])
                return False
            return self._finish(self.fabric_color.activate(overwrite=False))

        logger.debug(f"No focus mode for column '{column}'")
        return False

    def cell_clicked(self, row_index: int, column: str) -> bool:
        kind = self._route_cell(column)
        if kind is None:
            return False
        return self._finish(self._controllers[kind].cell_clicked(row_index, column))

    def sequence_cell_clicked(self, row_index: int) -> bool:
        mode = self.ui.state.active_edit_mode
        if mode.is_lf_submode:
            return self._finish(self.fabric_color.sequence_cell_clicked(row_index))
        if mode == EditMode.K1:
            return self._finish(self.location.cell_clicked(row_index))
        return False

    def toggle_k3_edit_mode(self) -> bool:
        mode = self.ui.state.active_edit_mode
        if mode not in (EditMode.NONE, EditMode.K3):
            return self._reject(f"batch-cycle mode while {mode.value} is active")
        return self._finish(self.batch_cycle.toggle())

    def request_batch_cycle(self, column: str) -> bool:
        if not self.batch_cycle.is_active():
            return False
        return self._finish(self.batch_cycle.batch_cycle(column))

    def request_lf_edit(self) -> bool:
        mode = self.ui.state.active_edit_mode
        if mode not in (EditMode.NONE, EditMode.K2_LF_SELECT):
            return self._reject(f"LF edit while {mode.value} is active")
        return self._finish(self.fabric_color.toggle_lf_select())

    def request_lf_delete(self) -> bool:
        mode = self.ui.state.active_edit_mode
        if mode not in (EditMode.NONE, EditMode.K2_LF_DELETE_SELECT):
            return self._reject(f"LF delete while {mode.value} is active")
        return self._finish(self.fabric_color.toggle_lf_delete())

    def panel_input_blurred(self, fabric_type: str, field: str, value: str) -> bool:
        return self._finish(self.fabric_color.panel_input_blurred(fabric_type, field, value))

    def panel_input_entered(self) -> bool:
        return self._finish(self.fabric_color.panel_input_entered())

    def k4_mode_changed(self, mode) -> bool:
        return self._finish(self.accessory.mode_changed(mode))

    def k4_chain_submitted(self, value: str) -> bool:
        return self._finish(self.accessory.submit(value))

    def location_submitted(self, value: str) -> bool:
        if not self.location.is_active():
            return False
        return self._finish(self.location.submit(value))

    def resolve_decision(self, label: str) -> bool:
        """Answer the pending confirmation; runs the chosen continuation."""
        decision = self._pending_decision
        if decision is None:
            logger.warning(f"No pending decision to resolve with '{label}'")
            return False
        continuation = decision.resolve(label)
        self._pending_decision = None
        if continuation is None:
            return False
        return self._finish(continuation())

    # Routing

    def _route_cell(self, column: str) -> Optional[ModeKind]:
        state = self.ui.state
        if state.active_edit_mode == EditMode.K1:
            return ModeKind.LOCATION
        if state.active_edit_mode == EditMode.K3 and column in K3_CYCLES:
            return ModeKind.BATCH_CYCLE
        if state.k4_active_mode != K4Mode.NONE and column == state.k4_active_mode.value:
            return ModeKind.ACCESSORY
        return None

    def _reject(self, what: str) -> bool:
        logger.debug(f"Rejected: {what}")
        return False

    def _confirm_fabric_overwrite(self) -> bool:
        """Accept handler of the LF overwrite dialog; a no-op once another edit mode is open."""
        mode = self.ui.state.active_edit_mode
        if mode != EditMode.NONE:
            return self._reject(f"confirmed fabric mode while {mode.value} is active")
        return self.fabric_color.activate(overwrite=True)

    # Collaborator hooks

    def _request_focus(self, target: str):
        self.scheduler.call_later(self.settings.focus_delay_ms, lambda: self.focusRequested.emit(target))

    def _defer(self, task: DeferredTask):
        self.scheduler.call_later(task.delay_ms, lambda: self._run_deferred(task))

    def _run_deferred(self, task: DeferredTask):
        if not task.is_current():
            logger.debug(f"Skipping stale deferred task '{task.name}'")
            return
        self._finish(task.action())

    def _request_confirmation(self, message: str, choices: Sequence[Choice]) -> PendingDecision:
        if self._pending_decision is not None:
            logger.debug(f"Discarding unanswered decision {self._pending_decision.id}")
            self._pending_decision.discard()
        decision = PendingDecision(message, choices)
        self._pending_decision = decision
        self.confirmationRequested.emit(decision)
        return decision


__all__ = ["ModeOrchestrator", "LF_OVERWRITE_MESSAGE"]
