"""Headless editing session driven by a text script.

Wires the stores, orchestrator and app controller on a virtual clock so a
sequence of abstract commands can be replayed without a UI. Each script
line is one command, e.g.::

    detail
    focus location
    location "Kitchen"
    click 2 over
    wait 150
"""
from __future__ import annotations
from typing import Callable, Dict, Iterable, List, Optional, Tuple
import logging
import shlex

from ..config_types import AppConfig
from ..detail.controllers import ModeOrchestrator
from ..detail.decisions import PendingDecision
from ..detail.errors import DecisionError, OrderBuilderError
from ..detail.scheduling import ManualScheduler
from ..detail.state import DetailSnapshot, UiStateStore
from ..quote import CalculationService, OrderLine, QuoteStore
from .app_controller import AppController

logger = logging.getLogger(__name__)


class ScriptError(OrderBuilderError):
    """A script line could not be parsed or executed."""


class HeadlessSession:
    """Detail-configuration core running on a ManualScheduler.

    Collects every notification, confirmation request and published
    snapshot so callers can inspect the outcome of a script.
    """

    def __init__(self, rows: Iterable[OrderLine] = (), config: Optional[AppConfig] = None):
        config = config or AppConfig()
        self.scheduler = ManualScheduler()
        self.quotes = QuoteStore(rows)
        self.ui = UiStateStore()
        self.orchestrator = ModeOrchestrator(
            self.quotes,
            self.ui,
            calculator=CalculationService(config.pricing.dual_bracket_pair_price),
            scheduler=self.scheduler,
            settings=config.detail,
        )
        self.app = AppController(self.orchestrator)

        self.notifications: List[Tuple[str, str]] = []
        self.snapshots: List[DetailSnapshot] = []
        self.focus_targets: List[str] = []
        self.decisions: List[PendingDecision] = []
        self.orchestrator.notificationRaised.connect(lambda msg, sev: self.notifications.append((msg, sev)))
        self.orchestrator.stateChanged.connect(self.snapshots.append)
        self.orchestrator.focusRequested.connect(self.focus_targets.append)
        self.orchestrator.confirmationRequested.connect(self.decisions.append)

        o, app = self.orchestrator, self.app
        self._commands: Dict[str, Tuple[int, Callable[..., bool]]] = {
            "detail": (0, app.navigate_to_detail_view),
            "quick": (0, app.navigate_to_quick_quote),
            "tab": (1, app.switch_tab),
            "focus": (1, o.request_focus_mode),
            "click": (2, lambda row, column: o.cell_clicked(_row(row), column)),
            "seq": (1, lambda row: o.sequence_cell_clicked(_row(row))),
            "k3": (0, o.toggle_k3_edit_mode),
            "cycle": (1, o.request_batch_cycle),
            "lf-edit": (0, o.request_lf_edit),
            "lf-delete": (0, o.request_lf_delete),
            "k4": (1, o.k4_mode_changed),
            "chain": (1, o.k4_chain_submitted),
            "location": (1, o.location_submitted),
            "panel-blur": (3, o.panel_input_blurred),
            "panel-enter": (0, o.panel_input_entered),
            "choose": (1, o.resolve_decision),
            "wait": (1, lambda ms: self.scheduler.advance(_int(ms, "wait")) > 0),
        }

    @property
    def commands(self) -> Tuple[str, ...]:
        return tuple(sorted(self._commands))

    def snapshot(self) -> DetailSnapshot:
        return self.orchestrator.snapshot()

    def execute(self, line: str) -> bool:
        """Run one script line. Blank lines and comments are ignored.

        Returns:
            True if the command was accepted and changed state

        Raises:
            ScriptError: Unknown command or wrong number of arguments
        """
        try:
            tokens = shlex.split(line, comments=True)
        except ValueError as e:
            raise ScriptError(f"Cannot parse '{line}': {e}") from e
        if not tokens:
            return False
        name, args = tokens[0].lower(), tokens[1:]
        if name not in self._commands:
            raise ScriptError(f"Unknown command '{name}'. Available: {', '.join(self.commands)}")
        arity, handler = self._commands[name]
        if len(args) != arity:
            raise ScriptError(f"'{name}' expects {arity} argument(s), got {len(args)}")
        logger.debug(f"> {line.strip()}")
        try:
            return bool(handler(*args))
        except (KeyError, ValueError, IndexError, DecisionError) as e:
            raise ScriptError(f"'{line.strip()}' failed: {e}") from e

    def run_script(self, lines: Iterable[str]) -> int:
        """Run every line, then drain pending deferred work.

        Returns:
            Number of accepted commands
        """
        accepted = 0
        for number, line in enumerate(lines, start=1):
            try:
                accepted += int(self.execute(line))
            except ScriptError as e:
                raise ScriptError(f"line {number}: {e}") from e
        self.scheduler.run_all()
        return accepted


def _int(value: str, what: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ScriptError(f"{what}: '{value}' is not a number") from None


def _row(value: str) -> int:
    """Script rows are 1-based like the sequence column."""
    return _int(value, "row") - 1


__all__ = ["HeadlessSession", "ScriptError"]
