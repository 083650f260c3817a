"""Pytest fixtures shared by all test modules.

Global test safety measures:
 - RBQ__AUTOSAVE__ENABLED=false so nothing writes autosave files by accident
 - A single QCoreApplication for every QObject-based component
"""
import os
from typing import List, Tuple

import pytest
from PySide6.QtCore import QCoreApplication

from rbq.config_types import DetailConfig
from rbq.detail.columns import columns_for_tab
from rbq.detail.controllers import ModeOrchestrator
from rbq.detail.scheduling import ManualScheduler
from rbq.detail.state import DetailSnapshot, InteractionState, UiStateStore, View
from rbq.quote import CalculationService, OrderLine, QuoteStore


def pytest_sessionstart(session):  # type: ignore[no-untyped-def]
    os.environ.setdefault('RBQ__AUTOSAVE__ENABLED', 'false')


@pytest.fixture(scope='session')
def qapp():
    """Create QCoreApplication instance for QObject-based components."""
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app


class SignalRecorder:
    """Collects everything a ModeOrchestrator emits."""

    def __init__(self, orchestrator: ModeOrchestrator):
        self.snapshots: List[DetailSnapshot] = []
        self.notifications: List[Tuple[str, str]] = []
        self.decisions = []
        self.focus: List[str] = []
        orchestrator.stateChanged.connect(self.snapshots.append)
        orchestrator.notificationRaised.connect(lambda msg, sev: self.notifications.append((msg, sev)))
        orchestrator.confirmationRequested.connect(self.decisions.append)
        orchestrator.focusRequested.connect(self.focus.append)

    @property
    def publish_count(self) -> int:
        return len(self.snapshots)

    @property
    def errors(self) -> List[str]:
        return [msg for msg, sev in self.notifications if sev == 'error']

    @property
    def infos(self) -> List[str]:
        return [msg for msg, sev in self.notifications if sev == 'info']


@pytest.fixture
def order_lines() -> List[OrderLine]:
    """Four items of mixed fabric types plus the trailing placeholder."""
    return [
        OrderLine(1, width=1200, height=1500, fabric_type='BO', fabric='Classic', color='White', location='Kitchen'),
        OrderLine(2, width=900, height=1400, fabric_type='BO1', location='Bed 1'),
        OrderLine(3, width=1000, height=1600, fabric_type='SN', fabric='', color='Grey'),
        OrderLine(4, width=800, height=1000, fabric_type='BO1', fabric='Linen', location='Bath'),
        OrderLine.empty(5),
    ]


@pytest.fixture
def quote_store(order_lines) -> QuoteStore:
    return QuoteStore(order_lines)


@pytest.fixture
def ui_store() -> UiStateStore:
    """Interaction state as it is right after entering the detail view."""
    return UiStateStore(InteractionState(
        current_view=View.DETAIL_CONFIG,
        active_tab_id='k1-tab',
        visible_columns=columns_for_tab('k1-tab'),
    ))


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def orchestrator(qapp, quote_store, ui_store, scheduler) -> ModeOrchestrator:
    return ModeOrchestrator(
        quote_store,
        ui_store,
        calculator=CalculationService(dual_bracket_pair_price=10.0),
        scheduler=scheduler,
        settings=DetailConfig(active_cell_clear_ms=150, focus_delay_ms=50),
    )


@pytest.fixture
def recorder(orchestrator) -> SignalRecorder:
    return SignalRecorder(orchestrator)


@pytest.fixture
def signal_recorder():
    """Factory for recording orchestrators built inside a test."""
    return SignalRecorder
