"""Order line data: model, store, pricing and JSON persistence."""

from .models import OrderLine
from .store import QuoteStore
from .calculation import CalculationService

__all__ = ["OrderLine", "QuoteStore", "CalculationService"]
