"""
Domain model for weighted recall statistics.

These are pure data structures with no I/O or external dependencies.
Transitions return new values; callers persist them.
"""

from dataclasses import dataclass, field, replace

from .constants import ITEM_KEY_SEPARATOR
from .models import Outcome


@dataclass(frozen=True)
class ItemStat:
    """
    Cumulative answer counters for one item.

    Attributes:
        seen_count: Total answers recorded (always known_count + unknown_count).
        known_count: Answers self-graded as known.
        unknown_count: Answers self-graded as unknown.
        last_answered_at: Epoch seconds of the latest answer, None if never answered.
    """

    seen_count: int = 0
    known_count: int = 0
    unknown_count: int = 0
    last_answered_at: float | None = None

    def with_outcome(self, outcome: Outcome, now: float) -> "ItemStat":
        known = self.known_count + (1 if outcome.is_known else 0)
        unknown = self.unknown_count + (0 if outcome.is_known else 1)
        return ItemStat(
            seen_count=known + unknown,
            known_count=known,
            unknown_count=unknown,
            last_answered_at=now,
        )


@dataclass(frozen=True)
class History:
    """All item stats of every deck, plus session bookkeeping."""

    stats: dict[str, ItemStat] = field(default_factory=dict)
    total_answers: int = 0
    last_session_at: float | None = None


@dataclass(frozen=True)
class RecallProgress:
    known: int
    unknown: int


def item_key(deck_id: str, item_id: str) -> str:
    """Namespace an item id by its deck so decks never share counters."""
    return f"{deck_id}{ITEM_KEY_SEPARATOR}{item_id}"


def in_deck(key: str, deck_id: str) -> bool:
    # Item ids never contain the separator, so the last one ends the deck id.
    return key.rpartition(ITEM_KEY_SEPARATOR)[0] == deck_id


def record_outcome(history: History, key: str, outcome: Outcome, now: float) -> History:
    """Return a new history with one more answer recorded for `key`."""
    stats = dict(history.stats)
    stats[key] = stats.get(key, ItemStat()).with_outcome(outcome, now)
    return replace(history, stats=stats, total_answers=history.total_answers + 1)


def project_progress(history: History, deck_id: str) -> RecallProgress:
    """Sum known/unknown counts over one deck's namespace."""
    known = unknown = 0
    for key, stat in history.stats.items():
        if in_deck(key, deck_id):
            known += stat.known_count
            unknown += stat.unknown_count
    return RecallProgress(known=known, unknown=unknown)


def forget_deck(history: History, deck_id: str) -> History:
    """Drop every stat in a deck's namespace. total_answers is a lifetime counter and is kept."""
    stats = {k: v for k, v in history.stats.items() if not in_deck(k, deck_id)}
    return replace(history, stats=stats)
