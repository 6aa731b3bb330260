"""
Domain model for the progressive (Koch-method) unlock.

A deck is drilled over a growing prefix. The prefix grows by one item once
the success ratio over the last `window_size` answers reaches the threshold.
Everything here is pure; persistence and randomness live in the application layer.
"""

from dataclasses import dataclass, field, replace

from .constants import KOCH_START_SIZE, KOCH_THRESHOLD, KOCH_WINDOW
from .models import Outcome


@dataclass(frozen=True)
class UnlockPolicy:
    """
    Tunables for the progressive unlock.

    Attributes:
        window_size: Number of recent outcomes considered (W).
        threshold: Success ratio over a full window required to unlock one more item.
        start_size: Items unlocked when a deck is first drilled or reset.
        reset_window_on_advance: Clear the window after each unlock.
    """

    window_size: int = KOCH_WINDOW
    threshold: float = KOCH_THRESHOLD
    start_size: int = KOCH_START_SIZE
    reset_window_on_advance: bool = False

    def __post_init__(self):
        if self.window_size < 1:
            raise ValueError(f"window_size must be >= 1, got {self.window_size}")
        if not 0 < self.threshold <= 1:
            raise ValueError(f"threshold must be in (0, 1], got {self.threshold}")
        if self.start_size < 1:
            raise ValueError(f"start_size must be >= 1, got {self.start_size}")

    def start_for(self, deck_size: int) -> int:
        """start_size clamped to the deck."""
        return min(self.start_size, deck_size)


@dataclass(frozen=True)
class RollingOutcomeWindow:
    """The last `size` outcomes, oldest first."""

    size: int = KOCH_WINDOW
    outcomes: tuple[bool, ...] = ()

    def append(self, known: bool) -> "RollingOutcomeWindow":
        kept = (*self.outcomes, known)[-self.size :]
        return replace(self, outcomes=kept)

    def clear(self) -> "RollingOutcomeWindow":
        return replace(self, outcomes=())

    @property
    def is_full(self) -> bool:
        return len(self.outcomes) >= self.size

    @property
    def success_ratio(self) -> float:
        """Correct answers divided by the window size (not by the entries present)."""
        return sum(1 for o in self.outcomes if o) / self.size

    def __len__(self) -> int:
        return len(self.outcomes)


@dataclass(frozen=True)
class UnlockState:
    """Per-deck unlock progress."""

    unlocked_count: int
    window: RollingOutcomeWindow = field(default_factory=RollingOutcomeWindow)


@dataclass(frozen=True)
class UnlockProgress:
    unlocked_count: int
    deck_size: int


def initial_state(policy: UnlockPolicy, deck_size: int) -> UnlockState:
    return UnlockState(
        unlocked_count=policy.start_for(deck_size),
        window=RollingOutcomeWindow(size=policy.window_size),
    )


def restore_state(
    policy: UnlockPolicy,
    deck_size: int,
    unlocked_count: int,
    outcomes: list[bool],
) -> UnlockState:
    """
    Rebuild a state from persisted values.

    The count is clamped into [start, deck_size] because the source may have
    been edited since it was saved; the window keeps only the newest entries.
    """
    start = policy.start_for(deck_size)
    count = max(start, min(unlocked_count, deck_size))
    kept = tuple(bool(o) for o in outcomes)[-policy.window_size :] if outcomes else ()
    return UnlockState(
        unlocked_count=count,
        window=RollingOutcomeWindow(size=policy.window_size, outcomes=kept),
    )


def should_advance(window: RollingOutcomeWindow, threshold: float) -> bool:
    """No decision is made until the window has filled once."""
    if not window.is_full:
        return False
    return window.success_ratio >= threshold


def apply_outcome(
    state: UnlockState,
    outcome: Outcome,
    deck_size: int,
    policy: UnlockPolicy,
) -> UnlockState:
    """
    Record one answer and unlock at most one more item.

    Once the whole deck is unlocked the window keeps sliding and nothing else changes.
    """
    window = state.window.append(outcome.is_known)
    count = state.unlocked_count

    if should_advance(window, policy.threshold) and count < deck_size:
        count += 1
        if policy.reset_window_on_advance:
            window = window.clear()

    return UnlockState(unlocked_count=count, window=window)
