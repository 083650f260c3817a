"""JSON helpers for reading and writing the order line collection."""
from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, Iterable, List
import json

from .models import OrderLine

ITEMS_KEY = "rollerBlindItems"


def rows_to_payload(rows: Iterable[OrderLine]) -> Dict[str, Any]:
    return {ITEMS_KEY: [row.to_dict() for row in rows]}


def rows_from_payload(payload: Any) -> List[OrderLine]:
    """Parse rows from a payload dict, or from a bare list of row mappings.

    Sequence numbers are reassigned from row order.

    Raises:
        ValueError: If the payload has no item list
    """
    items = payload.get(ITEMS_KEY) if isinstance(payload, dict) else payload
    if not isinstance(items, list):
        raise ValueError(f"Expected a list of items under '{ITEMS_KEY}'")
    return [OrderLine.from_dict(item, sequence=i) for i, item in enumerate(items, start=1)]


def save_rows(path: Path, rows: Iterable[OrderLine]):
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(rows_to_payload(rows), indent=2), encoding="utf-8")


def load_rows(path: Path) -> List[OrderLine]:
    return rows_from_payload(json.loads(Path(path).read_text(encoding="utf-8")))


__all__ = ["rows_to_payload", "rows_from_payload", "save_rows", "load_rows", "ITEMS_KEY"]
