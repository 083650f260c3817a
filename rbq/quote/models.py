"""Order line model and the fixed value sets used by the detail editors."""
from __future__ import annotations
from dataclasses import dataclass, fields, asdict
from typing import Any, Dict, Optional, Tuple

# Quick-quote fabric type cycle; also the regular rows of the fabric/color panel
FABRIC_TYPES: Tuple[str, ...] = ("BO", "BO1", "SN")

# Only this fabric type accepts a Light-Filter override
LF_FABRIC_TYPE = "BO1"

# Pseudo fabric type for the Light-Filter panel row
LF_PANEL_TYPE = "LF"

PANEL_FIELDS: Tuple[str, ...] = ("fabric", "color")

# Batch-cycle value rings, keyed by column
K3_CYCLES: Dict[str, Tuple[str, ...]] = {
    "over": ("O", ""),
    "oi": ("IN", "OUT"),
    "lr": ("L", "R"),
}

DUAL_MARKER = "D"

_SERIALIZED_NAMES = {"fabric_type": "fabricType"}


def next_in_cycle(column: str, current: Optional[str]) -> str:
    """Return the value following ``current`` in the column's cycle.

    Values outside the cycle (including None) count as index -1, so the
    first cycle entry comes next.
    """
    cycle = K3_CYCLES[column]
    try:
        index = cycle.index(current)  # type: ignore[arg-type]
    except ValueError:
        index = -1
    return cycle[(index + 1) % len(cycle)]


@dataclass(frozen=True)
class OrderLine:
    """One roller-blind line item.

    ``fabric`` and ``color`` distinguish "never set" (None) from an explicit
    blank string; the fabric panel relies on that distinction.
    """
    sequence: int
    width: Optional[int] = None
    height: Optional[int] = None
    fabric_type: Optional[str] = None
    fabric: Optional[str] = None
    color: Optional[str] = None
    location: str = ""
    over: str = ""
    oi: str = ""
    lr: str = ""
    dual: str = ""
    chain: Optional[int] = None

    @classmethod
    def empty(cls, sequence: int) -> OrderLine:
        """Create the trailing add-row placeholder."""
        return cls(sequence=sequence)

    @property
    def is_empty(self) -> bool:
        return not self.width and not self.height and not self.fabric_type

    @property
    def has_dual_marker(self) -> bool:
        return bool(self.dual)

    def to_dict(self) -> Dict[str, Any]:
        return {_SERIALIZED_NAMES.get(k, k): v for k, v in asdict(self).items()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any], sequence: Optional[int] = None) -> OrderLine:
        """Build a line from a serialized mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}
        for f in known:
            key = _SERIALIZED_NAMES.get(f, f)
            if key in data:
                values[f] = data[key]
            elif f in data:
                values[f] = data[f]
        if sequence is not None:
            values["sequence"] = sequence
        values.setdefault("sequence", 1)
        return cls(**values)


EDITABLE_FIELDS = frozenset(f.name for f in fields(OrderLine)) - {"sequence"}


__all__ = [
    "OrderLine",
    "FABRIC_TYPES",
    "LF_FABRIC_TYPE",
    "LF_PANEL_TYPE",
    "PANEL_FIELDS",
    "K3_CYCLES",
    "DUAL_MARKER",
    "EDITABLE_FIELDS",
    "next_in_cycle",
]
