"""Base class and shared context for the per-column mode controllers."""
from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from ...config_types import DetailConfig
from ...quote import CalculationService, QuoteStore
from ..decisions import Severity
from ..scheduling import DeferredTask
from ..state import UiStateStore


class ModeKind(str, Enum):
    LOCATION = "location"
    FABRIC_COLOR = "fabric_color"
    BATCH_CYCLE = "batch_cycle"
    ACCESSORY = "accessory"


@dataclass
class ControllerContext:
    """Collaborators handed to every controller by the orchestrator.

    Controllers never publish; they report whether state changed and the
    orchestrator publishes once per command.
    """
    quotes: QuoteStore
    ui: UiStateStore
    calculator: CalculationService
    settings: DetailConfig
    notify: Callable[[str, Severity], None]
    request_focus: Callable[[str], None]
    defer: Callable[[DeferredTask], None]


class ModeController(ABC):
    """Uniform interface of a column-family controller.

    Every command method returns True when it mutated state (the caller
    publishes) and False when it was rejected or had nothing to do.
    """

    kind: ModeKind

    def __init__(self, context: ControllerContext):
        self.ctx = context

    @property
    def quotes(self) -> QuoteStore:
        return self.ctx.quotes

    @property
    def ui(self) -> UiStateStore:
        return self.ctx.ui

    @abstractmethod
    def is_active(self) -> bool:
        """Whether this controller's mode is currently open."""

    @abstractmethod
    def activate(self) -> bool:
        """Open the mode."""

    @abstractmethod
    def deactivate(self) -> bool:
        """Close the mode and drop its buffers."""

    def cell_clicked(self, row_index: int, column: str) -> bool:
        return False

    def submit(self, value: str) -> bool:
        return False


__all__ = ["ModeKind", "ControllerContext", "ModeController"]
