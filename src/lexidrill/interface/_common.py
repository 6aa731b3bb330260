"""Helpers shared by CLI commands."""

import asyncio
import logging
from typing import Any

import typer
from pydantic import ValidationError

from lexidrill.application.config import AppConfig, resolve_config
from lexidrill.application.factory import (
    deck_id_for,
    get_scheduler,
    get_store,
    resolve_deck_location,
)
from lexidrill.application.item_source import fetch_source
from lexidrill.application.schedulers import BaseScheduler
from lexidrill.domain.errors import LoadError, UnknownDeckError
from lexidrill.domain.recall import RecallProgress
from lexidrill.domain.unlock import UnlockProgress

logger = logging.getLogger(__name__)


def _resolve_with_overrides(**overrides: Any) -> AppConfig:
    """Resolve config with CLI overrides; invalid values exit with code 2."""
    try:
        return resolve_config(overrides)
    except ValidationError as e:
        for err in e.errors():
            loc = ".".join(str(p) for p in err["loc"])
            typer.secho(f"Invalid setting '{loc}': {err['msg']}", fg="red", err=True)
        raise typer.Exit(2) from e


def _open_deck(config: AppConfig, name: str | None) -> tuple[BaseScheduler, str]:
    """Build the configured scheduler and load the named catalog deck into it."""
    name = name or config.default_deck
    scheduler = get_scheduler(config, get_store(config))

    try:
        location = resolve_deck_location(config, name)
        text = asyncio.run(fetch_source(location))
        scheduler.load_deck(deck_id_for(config, name), text)
    except UnknownDeckError as e:
        typer.secho(str(e), fg="red", err=True)
        raise typer.Exit(2) from e
    except LoadError as e:
        logger.error(f"Cannot start deck '{name}': {e}")
        typer.secho(f"Cannot start: {e}", fg="red", err=True)
        raise typer.Exit(1) from e

    return scheduler, name


def _format_progress(progress: UnlockProgress | RecallProgress) -> str:
    if isinstance(progress, UnlockProgress):
        return f"Level: {progress.unlocked_count} / {progress.deck_size}"
    return f"Known: {progress.known}  Unknown: {progress.unknown}"
