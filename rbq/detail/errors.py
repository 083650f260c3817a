"""Error types raised inside the detail-configuration core."""
from __future__ import annotations
from typing import Optional


class OrderBuilderError(Exception):
    """Base class for order builder errors."""


class ValidationError(OrderBuilderError):
    """User input rejected; the message is shown to the user as-is."""


class DecisionError(OrderBuilderError):
    """A confirmation decision was resolved twice or with an unknown choice."""


def parse_chain_value(raw: str) -> Optional[int]:
    """Parse a chain length entry.

    Empty input clears the field (None); otherwise only positive integers
    are accepted.

    Raises:
        ValidationError: If the value is neither empty nor a positive integer
    """
    text = (raw or "").strip()
    if text == "":
        return None
    if not (text.isascii() and text.isdigit()) or int(text) <= 0:
        raise ValidationError("Only positive integers are allowed for chain length.")
    return int(text)


__all__ = ["OrderBuilderError", "ValidationError", "DecisionError", "parse_chain_value"]
