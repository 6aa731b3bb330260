"""
Deferred reveal of an item's translation.

Each presented item moves HIDDEN -> REVEALED exactly once, either when its
timer fires or when the learner answers first. Presenting a new item cancels
the previous timer, and every timer carries the generation it was armed for,
so a late callback can never reveal a newer item.
"""

import logging
import threading
from collections.abc import Callable
from enum import Enum

from lexidrill.domain.constants import REVEAL_DELAY
from lexidrill.domain.models import Item
from lexidrill.domain.ports import TimerHandle, TimerPort

logger = logging.getLogger(__name__)


class RevealState(str, Enum):
    HIDDEN = "hidden"
    REVEALED = "revealed"


class RevealController:
    def __init__(
        self,
        timers: TimerPort,
        delay: float = REVEAL_DELAY,
        on_reveal: Callable[[Item], None] | None = None,
    ):
        self._timers = timers
        self.delay = delay
        self._on_reveal = on_reveal
        self._lock = threading.RLock()
        self._generation = 0
        self._handle: TimerHandle | None = None
        self._item: Item | None = None
        self._state = RevealState.HIDDEN

    @property
    def item(self) -> Item | None:
        return self._item

    @property
    def state(self) -> RevealState:
        return self._state

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def present(self, item: Item) -> None:
        """Show a new item hidden and arm its reveal timer."""
        with self._lock:
            self.cancel()
            self._generation += 1
            self._item = item
            self._state = RevealState.HIDDEN
            token = self._generation
            self._handle = self._timers.schedule(self.delay, lambda: self._fire(token))

    def force_reveal(self) -> None:
        """Reveal now and drop the pending timer. No-op if already revealed."""
        with self._lock:
            self.cancel()
            if self._item is not None and self._state is RevealState.HIDDEN:
                self._reveal()

    def cancel(self) -> None:
        with self._lock:
            if self._handle is not None:
                self._handle.cancel()
                self._handle = None

    def _fire(self, token: int) -> None:
        with self._lock:
            if token != self._generation:
                logger.debug(f"Ignoring stale reveal timer (generation {token})")
                return
            self._handle = None
            if self._state is RevealState.HIDDEN:
                self._reveal()

    def _reveal(self) -> None:
        self._state = RevealState.REVEALED
        if self._on_reveal is not None and self._item is not None:
            self._on_reveal(self._item)
