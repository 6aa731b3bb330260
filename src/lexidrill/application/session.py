"""
Drill session: the host loop's view of a scheduler.

Answering is one atomic transition: cancel timers, reveal, record, select,
present, re-arm. A lock makes the transition safe when timer callbacks run on
other threads.
"""

import logging
import threading
from collections.abc import Callable

from lexidrill.domain.constants import REVEAL_DELAY
from lexidrill.domain.errors import EmptyDeckError
from lexidrill.domain.models import Item, Outcome
from lexidrill.domain.ports import Scheduler, TimerHandle, TimerPort
from lexidrill.domain.recall import RecallProgress
from lexidrill.domain.unlock import UnlockProgress

from .reveal import RevealController, RevealState

logger = logging.getLogger(__name__)


class DrillSession:
    """
    Drives a Scheduler with a reveal timer and an optional auto-advance timer.

    At most one reveal timer and one advance timer are pending at any time,
    both tied to the current item.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        timers: TimerPort,
        reveal_delay: float = REVEAL_DELAY,
        auto_advance: float | None = None,
        on_present: Callable[[Item], None] | None = None,
        on_reveal: Callable[[Item], None] | None = None,
    ):
        """
        Args:
            scheduler: Strategy that picks items and records answers.
            timers: Source of deferred callbacks.
            reveal_delay: Seconds before the translation is shown.
            auto_advance: Seconds before moving on without an answer; None disables it.
            on_present: Called with each new item before its timers are armed.
            on_reveal: Called when an item's translation becomes visible.
        """
        self.scheduler = scheduler
        self._timers = timers
        self.auto_advance = auto_advance
        self._on_present = on_present
        self.reveal = RevealController(timers, reveal_delay, on_reveal)
        self._lock = threading.RLock()
        self._advance_generation = 0
        self._advance_handle: TimerHandle | None = None
        self.answered = 0

    @property
    def current(self) -> Item | None:
        return self.reveal.item

    @property
    def revealed(self) -> bool:
        return self.reveal.state is RevealState.REVEALED

    def start(self) -> Item:
        with self._lock:
            return self._next()

    def answer(self, outcome: Outcome) -> Item:
        """Record the answer for the current item and present the next one."""
        with self._lock:
            item = self.current
            if item is None:
                raise EmptyDeckError("Session has not been started")
            self._cancel_advance()
            self.reveal.force_reveal()
            self.scheduler.record_answer(item, outcome)
            self.answered += 1
            return self._next()

    def progress(self) -> UnlockProgress | RecallProgress:
        return self.scheduler.get_progress()

    def close(self) -> None:
        with self._lock:
            self._cancel_advance()
            self.reveal.cancel()

    def _next(self) -> Item:
        self._cancel_advance()
        self.reveal.cancel()
        item = self.scheduler.select_next()
        if self._on_present is not None:
            self._on_present(item)
        self.reveal.present(item)
        self._arm_advance()
        return item

    def _arm_advance(self) -> None:
        if self.auto_advance is None:
            return
        self._advance_generation += 1
        token = self._advance_generation
        self._advance_handle = self._timers.schedule(
            self.auto_advance, lambda: self._on_advance(token)
        )

    def _cancel_advance(self) -> None:
        # A callback already blocked on the lock must see a newer generation.
        self._advance_generation += 1
        if self._advance_handle is not None:
            self._advance_handle.cancel()
            self._advance_handle = None

    def _on_advance(self, token: int) -> None:
        with self._lock:
            if token != self._advance_generation:
                return
            self._advance_handle = None
            logger.debug("Auto-advancing to the next item")
            self._next()
