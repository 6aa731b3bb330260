"""
Shared plumbing for both schedulers: deck parsing and blob persistence.
"""

import logging
import random
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from lexidrill.application.item_source import SourceFormat
from lexidrill.domain.errors import EmptyDeckError
from lexidrill.domain.models import Item
from lexidrill.domain.ports import KeyValueStore, Scheduler

logger = logging.getLogger(__name__)

B = TypeVar("B", bound=BaseModel)


class BaseScheduler(Scheduler):
    """
    Base for schedulers that persist one versioned blob through a KeyValueStore.

    Reads fall back to None on any problem so callers can substitute their
    empty state. Writes are best-effort: a failing store never interrupts a drill.
    """

    state_key: str = ""

    def __init__(
        self,
        store: KeyValueStore,
        source_format: SourceFormat | None = None,
        rng: random.Random | None = None,
    ):
        self._store = store
        self._format = source_format or SourceFormat()
        self._rng = rng or random.Random()
        self._deck_id: str | None = None
        self._items: list[Item] = []

    @property
    def deck_id(self) -> str | None:
        return self._deck_id

    def load_deck(self, deck_id: str, source_text: str) -> list[Item]:
        items = self._format.build(source_text)
        self._activate(deck_id, items)
        logger.info(f"Loaded deck '{deck_id}' with {len(items)} items")
        return list(items)

    def _activate(self, deck_id: str, items: list[Item]) -> None:
        self._deck_id = deck_id
        self._items = list(items)

    def _require_deck(self) -> None:
        if self._deck_id is None or not self._items:
            raise EmptyDeckError("No deck loaded")

    def _read_blob(self, model: type[B]) -> B | None:
        try:
            raw = self._store.load(self.state_key)
        except Exception as e:
            logger.warning(f"Could not read '{self.state_key}', starting empty: {e}")
            return None

        if raw is None:
            return None

        try:
            return model.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(
                f"Discarding unreadable state under '{self.state_key}' "
                f"({e.error_count()} error(s)), starting empty"
            )
            return None

    def _write_blob(self, blob: BaseModel) -> None:
        try:
            self._store.save(self.state_key, blob.model_dump_json(by_alias=True))
        except Exception as e:
            logger.warning(f"Could not persist '{self.state_key}': {e}")
