"""
Core value types shared by both schedulers.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass
from enum import Enum


class Outcome(str, Enum):
    """Learner self-assessment for a presented item."""

    KNOWN = "known"
    UNKNOWN = "unknown"

    @property
    def is_known(self) -> bool:
        return self is Outcome.KNOWN


class Direction(str, Enum):
    """Which side of a `LEFT<>RIGHT` line is shown first.

    FORWARD shows LEFT and reveals RIGHT; REVERSE shows RIGHT and reveals LEFT.
    """

    FORWARD = "forward"
    REVERSE = "reverse"


@dataclass(frozen=True)
class Item:
    """
    A single drill item.

    Attributes:
        id: Stable identity derived from the item's content.
        prompt: Text shown first.
        translation: Text revealed after the delay or on answer.
    """

    id: str
    prompt: str
    translation: str
