"""
Progressive Unlock Scheduler (Koch method).

Drills a uniformly random item from the unlocked prefix of the deck and
unlocks one more item whenever recent accuracy clears the threshold.
"""

import logging
import random

from lexidrill.application.item_source import SourceFormat
from lexidrill.domain.constants import UNLOCK_STATE_KEY
from lexidrill.domain.errors import EmptyDeckError
from lexidrill.domain.models import Item, Outcome
from lexidrill.domain.ports import KeyValueStore
from lexidrill.domain.unlock import (
    UnlockPolicy,
    UnlockProgress,
    UnlockState,
    apply_outcome,
    initial_state,
    restore_state,
)

from .base import BaseScheduler
from .blobs import UnlockBlob

logger = logging.getLogger(__name__)


class ProgressiveUnlockScheduler(BaseScheduler):
    """
    Koch-method scheduler with one UnlockState per deck.

    Every deck's state lives in a single blob keyed by deck id, so decks never
    affect each other.
    """

    state_key = UNLOCK_STATE_KEY

    def __init__(
        self,
        store: KeyValueStore,
        policy: UnlockPolicy | None = None,
        source_format: SourceFormat | None = None,
        rng: random.Random | None = None,
        reset_on_switch: bool = True,
    ):
        """
        Args:
            store: Where the unlock blob is read from and written to.
            policy: Window size, threshold, start size and window reset rule.
            source_format: How source text is parsed in load_deck.
            rng: Random source for selection; seed it for reproducible drills.
            reset_on_switch: Reset a deck to the start size when switching to it
                from another deck. The first deck of a process always resumes.
        """
        super().__init__(store, source_format, rng)
        self.policy = policy or UnlockPolicy()
        self.reset_on_switch = reset_on_switch
        self._blob = self._read_blob(UnlockBlob) or UnlockBlob()
        self._state: UnlockState | None = None

    @property
    def state(self) -> UnlockState | None:
        return self._state

    def _activate(self, deck_id: str, items: list[Item]) -> None:
        switching = self._deck_id is not None and deck_id != self._deck_id
        super()._activate(deck_id, items)

        if switching and self.reset_on_switch:
            self._state = initial_state(self.policy, len(items))
            logger.info(
                f"Switched to deck '{deck_id}', reset to {self._state.unlocked_count} items"
            )
            self._persist()
        else:
            self._state = self._restore(deck_id, len(items))

    def _restore(self, deck_id: str, deck_size: int) -> UnlockState:
        count = self._blob.unlocked_count_by_deck.get(deck_id)
        if count is None:
            return initial_state(self.policy, deck_size)
        outcomes = self._blob.recent_outcomes_by_deck.get(deck_id, [])
        return restore_state(self.policy, deck_size, count, outcomes)

    def select_next(self) -> Item:
        self._require_deck()
        if self._state is None or self._state.unlocked_count == 0:
            raise EmptyDeckError(f"Deck '{self._deck_id}' has no unlocked items")
        return self._items[self._rng.randrange(self._state.unlocked_count)]

    def record_answer(self, item: Item, outcome: Outcome) -> None:
        self._require_deck()
        assert self._state is not None

        before = self._state.unlocked_count
        self._state = apply_outcome(self._state, outcome, len(self._items), self.policy)

        if self._state.unlocked_count > before:
            unlocked = self._items[self._state.unlocked_count - 1]
            logger.info(
                f"Deck '{self._deck_id}': unlocked '{unlocked.prompt}' "
                f"({self._state.unlocked_count}/{len(self._items)})"
            )

        self._persist()

    def get_progress(self) -> UnlockProgress:
        if self._state is None:
            return UnlockProgress(unlocked_count=0, deck_size=0)
        return UnlockProgress(
            unlocked_count=self._state.unlocked_count,
            deck_size=len(self._items),
        )

    def reset_deck(self) -> None:
        self._require_deck()
        self._state = initial_state(self.policy, len(self._items))
        logger.info(f"Deck '{self._deck_id}' reset to {self._state.unlocked_count} items")
        self._persist()

    def _persist(self) -> None:
        assert self._deck_id is not None and self._state is not None
        self._blob.unlocked_count_by_deck[self._deck_id] = self._state.unlocked_count
        self._blob.recent_outcomes_by_deck[self._deck_id] = list(self._state.window.outcomes)
        self._write_blob(self._blob)
