"""
Scheduler Factory
Centralizes the logic for building stores, schedulers and deck locations from config.
"""

import random
from pathlib import Path

from lexidrill.application.config import AppConfig
from lexidrill.application.item_source import SourceFormat, is_url
from lexidrill.application.schedulers import (
    BaseScheduler,
    ProgressiveUnlockScheduler,
    WeightedRecallScheduler,
)
from lexidrill.domain.errors import UnknownDeckError
from lexidrill.domain.ports import KeyValueStore
from lexidrill.infrastructure.adapters import JsonFileStore


def get_store(config: AppConfig) -> KeyValueStore:
    return JsonFileStore(config.state_dir)


def get_source_format(config: AppConfig) -> SourceFormat:
    return SourceFormat(
        separator=config.separator,
        comment_marker=config.comment_marker,
        direction=config.direction,
        min_items=config.min_items,
    )


def get_scheduler(config: AppConfig, store: KeyValueStore) -> BaseScheduler:
    """
    Returns the scheduler selected by `config.strategy`.
    """
    rng = random.Random(config.seed)
    source_format = get_source_format(config)

    if config.strategy == "weighted":
        return WeightedRecallScheduler(store, source_format=source_format, rng=rng)

    return ProgressiveUnlockScheduler(
        store,
        policy=config.unlock_policy(),
        source_format=source_format,
        rng=rng,
        reset_on_switch=config.reset_on_switch,
    )


def deck_id_for(config: AppConfig, name: str) -> str:
    """Deck identity: catalog name plus direction, so each direction progresses on its own."""
    return f"{name}:{config.direction.value}"


def resolve_deck_location(config: AppConfig, name: str) -> str:
    """
    Map a catalog name to a file path or URL.

    Absolute paths and URLs in the catalog are used as-is; relative entries
    are joined onto `deck_base`.
    """
    if name not in config.decks:
        raise UnknownDeckError(name, sorted(config.decks))

    entry = config.decks[name]
    if is_url(entry):
        return entry

    base = config.deck_base
    if is_url(base):
        return f"{base.rstrip('/')}/{entry.lstrip('/')}"

    path = Path(entry).expanduser()
    if not path.is_absolute():
        path = Path(base).expanduser() / path
    return str(path)
