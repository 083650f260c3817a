"""Two-phase confirmation protocol.

A controller proposes a transition by creating a ``PendingDecision``; the
dialog (or a test) later resolves it by label, which hands back the stored
continuation. Exactly one choice can ever be taken.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from itertools import count
from typing import Callable, Optional, Sequence, Tuple
import logging

from .errors import DecisionError

logger = logging.getLogger(__name__)

_decision_ids = count(1)


class Severity(str, Enum):
    INFO = "info"
    ERROR = "error"


@dataclass(frozen=True)
class Choice:
    """One dialog button. ``on_chosen`` returns True when it mutated state."""
    label: str
    on_chosen: Optional[Callable[[], bool]] = None


class PendingDecision:
    """A confirmation request awaiting exactly one answer."""

    def __init__(self, message: str, choices: Sequence[Choice]):
        if not choices:
            raise ValueError("A decision needs at least one choice")
        self.id = next(_decision_ids)
        self.message = message
        self.choices: Tuple[Choice, ...] = tuple(choices)
        self._resolved = False

    @property
    def resolved(self) -> bool:
        return self._resolved

    @property
    def labels(self) -> Tuple[str, ...]:
        return tuple(choice.label for choice in self.choices)

    def resolve(self, label: str) -> Optional[Callable[[], bool]]:
        """Mark the decision answered and return the chosen continuation.

        Raises:
            DecisionError: If already resolved or the label is unknown
        """
        if self._resolved:
            raise DecisionError(f"Decision {self.id} was already resolved")
        for choice in self.choices:
            if choice.label == label:
                self._resolved = True
                logger.debug(f"Decision {self.id} resolved with '{label}'")
                return choice.on_chosen
        raise DecisionError(f"Unknown choice '{label}' (available: {', '.join(self.labels)})")

    def discard(self):
        """Drop the decision without running any continuation."""
        self._resolved = True

    def __repr__(self) -> str:
        return f"PendingDecision(id={self.id}, message={self.message!r}, labels={self.labels})"


__all__ = ["Severity", "Choice", "PendingDecision"]
