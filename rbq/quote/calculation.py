"""Price calculations consumed by the detail editors."""
from __future__ import annotations
from typing import Iterable
import logging

from .models import OrderLine

logger = logging.getLogger(__name__)


class CalculationService:
    """Accessory pricing.

    Dual brackets are sold in pairs: every two marked rows share one pair.
    """

    def __init__(self, dual_bracket_pair_price: float = 10.0):
        self.dual_bracket_pair_price = dual_bracket_pair_price

    def price_for_dual_brackets(self, rows: Iterable[OrderLine]) -> float:
        marked = sum(1 for row in rows if row.has_dual_marker)
        price = (marked // 2) * self.dual_bracket_pair_price
        logger.debug(f"Dual bracket price: {marked} marked rows -> {price:.2f}")
        return price


__all__ = ["CalculationService"]
