"""Deferred work for the detail editors.

Two kinds of deferred work exist: focus signals that wait for the renderer,
and the K3 transient-cell clear. Neither is ever cancelled; a task that
mutates state carries the context it was scheduled in and is skipped when
the context has moved on.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Hashable, List, Tuple
import heapq
import itertools
import logging

from PySide6.QtCore import QTimer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeferredTask:
    """State-mutating work captured together with its scheduling context.

    Attributes:
        name: Label for logging
        delay_ms: Delay before firing
        expected: Context snapshot taken at schedule time
        probe: Returns the current context for comparison
        action: Applies the mutation; returns True if state changed
    """
    name: str
    delay_ms: int
    expected: Hashable
    probe: Callable[[], Hashable]
    action: Callable[[], bool]

    def is_current(self) -> bool:
        return self.probe() == self.expected


class Scheduler(ABC):
    """Runs a callback once after a delay on the event loop thread."""

    @abstractmethod
    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> None:
        """Schedule ``callback`` to run once after ``delay_ms``."""


class QtScheduler(Scheduler):
    """Scheduler backed by ``QTimer.singleShot`` (requires a running Qt event loop)."""

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> None:
        QTimer.singleShot(max(0, int(delay_ms)), callback)


class ManualScheduler(Scheduler):
    """Virtual-clock scheduler for headless sessions and tests.

    Nothing runs until ``advance()`` moves the clock past a callback's due
    time. Callbacks scheduled while advancing run in the same pass if due.
    """

    def __init__(self):
        self.now_ms = 0
        self._queue: List[Tuple[int, int, Callable[[], None]]] = []
        self._order = itertools.count()

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> None:
        due = self.now_ms + max(0, int(delay_ms))
        heapq.heappush(self._queue, (due, next(self._order), callback))

    @property
    def pending(self) -> int:
        return len(self._queue)

    def advance(self, delay_ms: int) -> int:
        """Move the clock forward, running everything that becomes due.

        Returns:
            Number of callbacks executed
        """
        target = self.now_ms + max(0, int(delay_ms))
        ran = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, callback = heapq.heappop(self._queue)
            self.now_ms = due
            callback()
            ran += 1
        self.now_ms = target
        return ran

    def run_all(self) -> int:
        """Run every pending callback regardless of due time."""
        if not self._queue:
            return 0
        return self.advance(max(due for due, _, _ in self._queue) - self.now_ms)


__all__ = ["DeferredTask", "Scheduler", "QtScheduler", "ManualScheduler"]
