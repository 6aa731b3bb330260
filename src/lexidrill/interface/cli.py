"""lexidrill CLI: drill, deck inspection and configuration commands."""

import asyncio
import json
import logging
import sys
from dataclasses import asdict
from typing import Annotated

import typer

from lexidrill.application.config import config_file
from lexidrill.application.factory import get_source_format, resolve_deck_location
from lexidrill.application.item_source import fetch_source, parse_source
from lexidrill.application.session import DrillSession
from lexidrill.consts import VERSION
from lexidrill.domain.errors import LoadError
from lexidrill.domain.models import Item, Outcome
from lexidrill.infrastructure.adapters import ThreadingTimers
from lexidrill.interface._common import (
    _format_progress,
    _open_deck,
    _resolve_with_overrides,
)

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="lexidrill: adaptive flashcard drills with Koch-method unlocking.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(help="Manage lexidrill configuration.")
app.add_typer(config_app, name="config")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

ANSWER_KEYS = {
    "y": Outcome.KNOWN,
    "k": Outcome.KNOWN,
    "n": Outcome.UNKNOWN,
    "d": Outcome.UNKNOWN,
}


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 0,
    quiet: Annotated[bool, typer.Option("--quiet", "-q", help="Only show errors.")] = False,
):
    """Global settings for lexidrill."""
    ctx.ensure_object(dict)
    if quiet:
        level = logging.ERROR
    elif verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.getLogger().setLevel(level)
    ctx.obj["verbose"] = verbose


# ---------------------------------------------------------------------------
# Root commands
# ---------------------------------------------------------------------------


@app.command()
def drill(
    deck: Annotated[
        str | None, typer.Argument(help="Catalog deck name. Defaults to 'default_deck'.")
    ] = None,
    strategy: Annotated[
        str | None, typer.Option(help="Selection strategy: koch or weighted.")
    ] = None,
    direction: Annotated[
        str | None, typer.Option(help="forward (left first) or reverse (right first).")
    ] = None,
    reveal_delay: Annotated[
        float | None, typer.Option(help="Seconds before the translation is shown.")
    ] = None,
    auto_advance: Annotated[
        float | None, typer.Option(help="Seconds before moving on without an answer.")
    ] = None,
    seed: Annotated[int | None, typer.Option(help="Random seed for reproducible drills.")] = None,
):
    """[bold green]Drill[/bold green] a deck interactively."""
    config = _resolve_with_overrides(
        strategy=strategy,
        direction=direction,
        reveal_delay=reveal_delay,
        auto_advance=auto_advance,
        seed=seed,
    )
    scheduler, name = _open_deck(config, deck)

    def show_prompt(item: Item) -> None:
        typer.echo(f"\n{_format_progress(scheduler.get_progress())}")
        typer.secho(item.prompt, bold=True)

    def show_translation(item: Item) -> None:
        typer.secho(f"  = {item.translation}", fg="cyan")

    session = DrillSession(
        scheduler,
        ThreadingTimers(),
        reveal_delay=config.reveal_delay,
        auto_advance=config.auto_advance,
        on_present=show_prompt,
        on_reveal=show_translation,
    )

    typer.echo(f"Deck '{name}' ({config.strategy}). Answer y = know, n = don't know, q = quit.")
    session.start()
    try:
        while True:
            choice = typer.prompt("", default="", show_default=False, prompt_suffix="> ")
            choice = choice.strip().lower()
            if choice in ("q", "quit"):
                break
            outcome = ANSWER_KEYS.get(choice[:1])
            if outcome is None:
                typer.secho("Type y, n or q.", fg="yellow")
                continue
            session.answer(outcome)
    except typer.Abort:
        pass
    finally:
        session.close()

    typer.echo(f"\nAnswered {session.answered} item(s). {_format_progress(session.progress())}")


@app.command()
def check(
    path: Annotated[str, typer.Argument(help="Path or URL of a LEFT<>RIGHT source.")],
    json_output: Annotated[bool, typer.Option("--json", help="Output results as JSON.")] = False,
):
    """Parse a source and report whether it is usable as a deck."""
    config = _resolve_with_overrides()
    fmt = get_source_format(config)

    try:
        text = asyncio.run(fetch_source(path))
    except LoadError as e:
        typer.secho(str(e), fg="red", err=True)
        raise typer.Exit(1) from e

    report = parse_source(text, fmt.separator, fmt.comment_marker, fmt.direction)
    ok = len(report.items) >= fmt.min_items

    if json_output:
        typer.echo(
            json.dumps(
                {
                    "ok": ok,
                    "items": len(report.items),
                    "min_items": fmt.min_items,
                    "comments": report.comments,
                    "blank": report.blank,
                    "malformed_lines": report.malformed,
                    "duplicate_lines": report.duplicates,
                },
                indent=2,
            )
        )
    else:
        typer.echo(f"Items: {len(report.items)}  (minimum {fmt.min_items})")
        if report.malformed:
            typer.secho(f"Malformed lines: {report.malformed}", fg="yellow")
        if report.duplicates:
            typer.secho(f"Duplicate lines: {report.duplicates}", fg="yellow")
        if ok:
            typer.secho("OK", fg="green")
        else:
            typer.secho("Too few items to drill.", fg="red")

    if not ok:
        raise typer.Exit(1)


@app.command()
def progress(
    deck: Annotated[str | None, typer.Argument(help="Catalog deck name.")] = None,
    strategy: Annotated[
        str | None, typer.Option(help="Selection strategy: koch or weighted.")
    ] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """Show saved progress for a deck."""
    config = _resolve_with_overrides(strategy=strategy)
    scheduler, name = _open_deck(config, deck)
    current = scheduler.get_progress()

    if json_output:
        typer.echo(json.dumps({"deck": name, "strategy": config.strategy, **asdict(current)}))
    else:
        typer.echo(f"{name}: {_format_progress(current)}")


@app.command()
def reset(
    deck: Annotated[str | None, typer.Argument(help="Catalog deck name.")] = None,
    strategy: Annotated[
        str | None, typer.Option(help="Selection strategy: koch or weighted.")
    ] = None,
    force: Annotated[bool, typer.Option("--force", "-f", help="Skip confirmation.")] = False,
):
    """Forget a deck's saved progress."""
    config = _resolve_with_overrides(strategy=strategy)
    scheduler, name = _open_deck(config, deck)

    if not force:
        typer.confirm(f"Reset {config.strategy} progress of '{name}'?", abort=True)

    scheduler.reset_deck()
    typer.secho(f"Reset '{name}'. {_format_progress(scheduler.get_progress())}", fg="green")


@app.command()
def decks():
    """List the configured deck catalog."""
    config = _resolve_with_overrides()
    for name in sorted(config.decks):
        marker = "*" if name == config.default_deck else " "
        typer.echo(f"{marker} {name}\t{resolve_deck_location(config, name)}")


@app.command()
def version():
    """Print the lexidrill version."""
    typer.echo(VERSION)


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show():
    """Display final resolved configuration."""
    config = _resolve_with_overrides()
    d = config.model_dump(mode="json")
    typer.echo(json.dumps(d, indent=2))


@config_app.command("path")
def config_path():
    """Print the location of the config file."""
    typer.echo(str(config_file()))


def main():
    app()


if __name__ == "__main__":
    main()
