"""Periodic autosave of the order lines.

Failures are logged and swallowed: autosave must never interrupt editing.
"""
from __future__ import annotations
from pathlib import Path
from typing import Optional
from PySide6.QtCore import QObject, QTimer
import logging

from ..quote import QuoteStore
from ..quote.persistence import save_rows

logger = logging.getLogger(__name__)


class AutosaveController(QObject):
    """Writes a snapshot of the order lines at a fixed interval.

    The snapshot is taken between commands (timer callbacks run on the
    event loop), so a partially edited row is never written.
    """

    def __init__(
        self,
        quotes: QuoteStore,
        path: Path,
        interval_ms: int = 60000,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        self.quotes = quotes
        self.path = Path(path)
        self.interval_ms = interval_ms
        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self.save_now)

    @property
    def is_running(self) -> bool:
        return self._timer.isActive()

    def start(self):
        self._timer.start()
        logger.debug(f"Autosave every {self.interval_ms} ms to {self.path}")

    def stop(self):
        self._timer.stop()

    def save_now(self) -> bool:
        """Save if the table has content. Returns True when a file was written."""
        if not self.quotes.has_data():
            return False
        rows = self.quotes.get_rows()
        try:
            save_rows(self.path, rows)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Auto-save failed: {e}")
            return False
        logger.debug(f"Auto-saved {len(rows)} rows")
        return True


__all__ = ["AutosaveController"]
