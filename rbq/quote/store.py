"""QuoteStore - single owner of the order line collection.

Rows are immutable ``OrderLine`` values; every mutation swaps in a replaced
row, so a tuple returned by ``get_rows()`` is a consistent snapshot that
later edits cannot touch (the autosave timer relies on this).
"""
from __future__ import annotations
from dataclasses import replace
from typing import Any, Iterable, List, Optional, Tuple
import logging

from .models import (
    EDITABLE_FIELDS,
    K3_CYCLES,
    OrderLine,
    next_in_cycle,
)

logger = logging.getLogger(__name__)


class QuoteStore:
    """Ordered, mutable collection of order lines.

    The trailing row may be an empty placeholder acting as the add-row slot.
    """

    def __init__(self, rows: Iterable[OrderLine] = ()):
        self._rows: List[OrderLine] = []
        self.replace_rows(rows)

    # Accessors

    def get_rows(self) -> Tuple[OrderLine, ...]:
        return tuple(self._rows)

    def get_row(self, row_index: int) -> Optional[OrderLine]:
        if 0 <= row_index < len(self._rows):
            return self._rows[row_index]
        return None

    @property
    def row_count(self) -> int:
        return len(self._rows)

    def has_data(self) -> bool:
        """True when the table holds more than the empty placeholder row."""
        return len(self._rows) > 1 or any(not row.is_empty for row in self._rows)

    # Mutators

    def replace_rows(self, rows: Iterable[OrderLine]):
        """Replace the whole collection (document load or reset).

        An empty collection becomes a single placeholder row.
        """
        self._rows = list(rows) or [OrderLine.empty(1)]
        logger.debug(f"Order lines replaced: {len(self._rows)} rows")

    def update_field(self, row_index: int, field: str, value: Any):
        self._check_field(field)
        row = self._require_row(row_index)
        self._rows[row_index] = replace(row, **{field: value})

    def batch_update_by_type(self, fabric_type: str, field: str, value: Any) -> int:
        """Set ``field`` on every row of ``fabric_type``; returns the row count touched."""
        self._check_field(field)
        count = 0
        for index, row in enumerate(self._rows):
            if row.fabric_type == fabric_type:
                self._rows[index] = replace(row, **{field: value})
                count += 1
        logger.debug(f"Batch update {fabric_type}.{field}={value!r} on {count} rows")
        return count

    def batch_update_column(self, column: str, value: Any):
        self._check_field(column)
        self._rows = [replace(row, **{column: value}) for row in self._rows]

    def batch_apply_lf(self, indexes: Iterable[int], fabric: str, color: str):
        for index in sorted(set(indexes)):
            row = self._require_row(index)
            self._rows[index] = replace(row, fabric=fabric, color=color)

    def clear_lf(self, indexes: Iterable[int]):
        for index in sorted(set(indexes)):
            row = self._require_row(index)
            self._rows[index] = replace(row, fabric="", color="")

    def cycle_field(self, row_index: int, column: str) -> str:
        """Advance one row's batch-cycle column by one step and return the new value."""
        if column not in K3_CYCLES:
            raise ValueError(f"Column '{column}' has no value cycle")
        row = self._require_row(row_index)
        value = next_in_cycle(column, getattr(row, column))
        self._rows[row_index] = replace(row, **{column: value})
        return value

    # Helpers

    def _require_row(self, row_index: int) -> OrderLine:
        row = self.get_row(row_index)
        if row is None:
            raise IndexError(f"Row {row_index} out of range (0..{len(self._rows) - 1})")
        return row

    @staticmethod
    def _check_field(field: str):
        if field not in EDITABLE_FIELDS:
            raise KeyError(f"Unknown order line field: {field}")


__all__ = ["QuoteStore"]
