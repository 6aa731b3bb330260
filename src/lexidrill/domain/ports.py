"""
Ports (interfaces) for lexidrill.

These define the contracts that infrastructure adapters and schedulers implement.
Application services depend on these abstractions, not concrete implementations.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable

from .models import Item, Outcome
from .recall import RecallProgress
from .unlock import UnlockProgress


class KeyValueStore(ABC):
    """
    Port for persisting opaque scheduler blobs.

    Implementations:
        - InMemoryStore: dict-backed, for tests and throwaway sessions.
        - JsonFileStore: one JSON file per key in a state directory.
    """

    @abstractmethod
    def load(self, key: str) -> str | None:
        """
        Return the blob stored under `key`, or None if there is none.
        """
        pass

    @abstractmethod
    def save(self, key: str, blob: str) -> None:
        """
        Store `blob` under `key`, replacing any previous value.
        """
        pass


class TimerHandle(ABC):
    """A pending one-shot callback."""

    @abstractmethod
    def cancel(self) -> None:
        """Prevent the callback from running. Cancelling twice is harmless."""
        pass


class TimerPort(ABC):
    """
    Port for deferred one-shot callbacks.

    Implementations:
        - ThreadingTimers: wall-clock timers on daemon threads.
    """

    @abstractmethod
    def schedule(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """
        Run `callback` once after `delay` seconds unless cancelled first.
        """
        pass


class Scheduler(ABC):
    """
    The item-selection contract shared by both strategies.

    A host loop drives either implementation through these four operations.
    """

    @property
    @abstractmethod
    def deck_id(self) -> str | None:
        pass

    @abstractmethod
    def load_deck(self, deck_id: str, source_text: str) -> list[Item]:
        """
        Parse `source_text` and make it the active deck.

        Raises:
            LoadError: The text does not contain enough usable items.
        """
        pass

    @abstractmethod
    def select_next(self) -> Item:
        """
        Pick the next item to present.

        Raises:
            EmptyDeckError: No deck is active.
        """
        pass

    @abstractmethod
    def record_answer(self, item: Item, outcome: Outcome) -> None:
        """
        Record the learner's self-assessment and persist the new state.
        """
        pass

    @abstractmethod
    def get_progress(self) -> UnlockProgress | RecallProgress:
        pass

    @abstractmethod
    def reset_deck(self) -> None:
        """
        Discard the active deck's learning state.
        """
        pass
