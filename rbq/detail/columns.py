"""Visible column sets for tabs and for modes that override them."""
from __future__ import annotations
from typing import Dict, Tuple

QUICK_QUOTE_COLUMNS: Tuple[str, ...] = (
    "sequence", "width", "height", "TYPE", "Price",
)

TAB_COLUMN_MAP: Dict[str, Tuple[str, ...]] = {
    "k1-tab": ("sequence", "fabricTypeDisplay", "location"),
    "k2-tab": ("sequence", "fabricTypeDisplay", "fabric", "color"),
    "k3-tab": ("sequence", "fabricTypeDisplay", "location", "over", "oi", "lr"),
    "k4-tab": ("sequence", "fabricTypeDisplay", "location", "dual", "chain"),
    "k5-tab": ("sequence", "fabricTypeDisplay"),
}

DEFAULT_TAB_ID = "k1-tab"

LOCATION_MODE_COLUMNS: Tuple[str, ...] = ("sequence", "fabricTypeDisplay", "location")
FABRIC_MODE_COLUMNS: Tuple[str, ...] = ("sequence", "fabricTypeDisplay", "fabric", "color")


def columns_for_tab(tab_id: str) -> Tuple[str, ...]:
    """Column set for a tab; unknown tabs fall back to the default tab."""
    return TAB_COLUMN_MAP.get(tab_id, TAB_COLUMN_MAP[DEFAULT_TAB_ID])


__all__ = [
    "QUICK_QUOTE_COLUMNS",
    "TAB_COLUMN_MAP",
    "DEFAULT_TAB_ID",
    "LOCATION_MODE_COLUMNS",
    "FABRIC_MODE_COLUMNS",
    "columns_for_tab",
]
