"""
Weighted Recall Scheduler.

Samples from the whole deck with probability proportional to a weight that
grows with mistakes and with time since the last answer.
"""

import logging
import random
import time
from collections.abc import Callable
from dataclasses import replace

from lexidrill.application.item_source import SourceFormat
from lexidrill.domain.constants import RECALL_STATE_KEY
from lexidrill.domain.models import Item, Outcome
from lexidrill.domain.ports import KeyValueStore
from lexidrill.domain.recall import (
    History,
    RecallProgress,
    forget_deck,
    item_key,
    project_progress,
    record_outcome,
)

from .base import BaseScheduler
from .blobs import RecallBlob
from .weights import RecallWeightCalculator

logger = logging.getLogger(__name__)


class WeightedRecallScheduler(BaseScheduler):
    """
    Recency/error-weighted sampler over the full deck.

    The history is persisted after every answer, before the next selection.
    """

    state_key = RECALL_STATE_KEY

    def __init__(
        self,
        store: KeyValueStore,
        calculator: RecallWeightCalculator | None = None,
        source_format: SourceFormat | None = None,
        rng: random.Random | None = None,
        clock: Callable[[], float] | None = None,
    ):
        """
        Args:
            store: Where the recall history is read from and written to.
            calculator: Optional custom weight function; uses default if not provided.
            source_format: How source text is parsed in load_deck.
            rng: Random source for selection; seed it for reproducible drills.
            clock: Returns the current time in epoch seconds.
        """
        super().__init__(store, source_format, rng)
        self._calc = calculator or RecallWeightCalculator()
        self._clock = clock or time.time
        blob = self._read_blob(RecallBlob)
        self._history = blob.to_history() if blob else History()

    @property
    def history(self) -> History:
        return self._history

    def _activate(self, deck_id: str, items: list[Item]) -> None:
        super()._activate(deck_id, items)
        self._history = replace(self._history, last_session_at=self._clock())

    def weights(self) -> list[float]:
        """Current weight of every item in deck order."""
        now = self._clock()
        return [
            self._calc.weight(self._history.stats.get(item_key(self._deck_id, item.id)), now)
            for item in self._items
        ]

    def select_next(self) -> Item:
        self._require_deck()

        weights = self.weights()
        total = sum(weights)
        r = self._rng.random() * total

        acc = 0.0
        for item, w in zip(self._items, weights):
            acc += w
            if r < acc:
                return item
        # Float rounding can leave r == total
        return self._items[-1]

    def record_answer(self, item: Item, outcome: Outcome) -> None:
        self._require_deck()
        key = item_key(self._deck_id, item.id)
        self._history = record_outcome(self._history, key, outcome, self._clock())
        logger.debug(f"Recorded {outcome.value} for '{item.prompt}' ({key})")
        self._persist()

    def get_progress(self) -> RecallProgress:
        if self._deck_id is None:
            return RecallProgress(known=0, unknown=0)
        return project_progress(self._history, self._deck_id)

    def reset_deck(self) -> None:
        self._require_deck()
        self._history = forget_deck(self._history, self._deck_id)
        logger.info(f"Cleared recall history of deck '{self._deck_id}'")
        self._persist()

    def _persist(self) -> None:
        self._write_blob(RecallBlob.from_history(self._history))
