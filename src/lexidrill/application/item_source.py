"""Parsing and loading of line-oriented `LEFT<>RIGHT` item sources."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import httpx

from lexidrill.application.identity import content_id
from lexidrill.domain.constants import (
    COMMENT_MARKER,
    DEFAULT_MIN_ITEMS,
    REQUEST_TIMEOUT,
    SEPARATOR,
)
from lexidrill.domain.errors import DeckTooSmallError, SourceUnavailableError
from lexidrill.domain.models import Direction, Item

logger = logging.getLogger(__name__)


@dataclass
class ParseReport:
    """Result of parsing a source, with the lines that were skipped."""

    items: list[Item] = field(default_factory=list)
    comments: int = 0
    blank: int = 0
    malformed: list[int] = field(default_factory=list)  # 1-based line numbers
    duplicates: list[int] = field(default_factory=list)


def parse_source(
    text: str,
    separator: str = SEPARATOR,
    comment_marker: str = COMMENT_MARKER,
    direction: Direction = Direction.REVERSE,
) -> ParseReport:
    """
    Parse raw source text into items, preserving source order.

    Blank lines, comment lines and lines without a separator are dropped.
    Only the first separator splits a line; later ones stay in the right side.
    A line whose content repeats an earlier line is dropped.
    """
    report = ParseReport()
    seen: set[str] = set()

    # Handle potential BOM (Byte Order Mark)
    text = text.lstrip("\ufeff")

    # Only \n and \r\n end a line; other Unicode breaks belong to the text.
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()

    for lineno, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line:
            report.blank += 1
            continue
        if line.startswith(comment_marker):
            report.comments += 1
            continue

        left, sep, right = line.partition(separator)
        left, right = left.strip(), right.strip()
        if not sep:
            report.malformed.append(lineno)
            continue

        item_id = content_id(left, right)
        if item_id in seen:
            report.duplicates.append(lineno)
            continue
        seen.add(item_id)

        if direction is Direction.FORWARD:
            item = Item(id=item_id, prompt=left, translation=right)
        else:
            item = Item(id=item_id, prompt=right, translation=left)
        report.items.append(item)

    if report.malformed:
        logger.debug(f"Dropped malformed lines: {report.malformed}")
    if report.duplicates:
        logger.debug(f"Dropped duplicate lines: {report.duplicates}")

    return report


def parse_items(
    text: str,
    separator: str = SEPARATOR,
    comment_marker: str = COMMENT_MARKER,
    direction: Direction = Direction.REVERSE,
) -> list[Item]:
    """Parse source text into the ordered item list."""
    return parse_source(text, separator, comment_marker, direction).items


def build_deck(
    text: str,
    min_items: int = DEFAULT_MIN_ITEMS,
    separator: str = SEPARATOR,
    comment_marker: str = COMMENT_MARKER,
    direction: Direction = Direction.REVERSE,
) -> list[Item]:
    """
    Parse source text and enforce the minimum deck size.

    Raises:
        DeckTooSmallError: Fewer than `min_items` usable lines.
    """
    items = parse_items(text, separator, comment_marker, direction)
    required = max(1, min_items)
    if len(items) < required:
        raise DeckTooSmallError(found=len(items), required=required)
    return items


@dataclass(frozen=True)
class SourceFormat:
    """How a source is split into items and how large it must be."""

    separator: str = SEPARATOR
    comment_marker: str = COMMENT_MARKER
    direction: Direction = Direction.REVERSE
    min_items: int = DEFAULT_MIN_ITEMS

    def build(self, text: str) -> list[Item]:
        return build_deck(
            text,
            min_items=self.min_items,
            separator=self.separator,
            comment_marker=self.comment_marker,
            direction=self.direction,
        )


def is_url(location: str) -> bool:
    return location.startswith(("http://", "https://"))


async def fetch_source(
    location: str | Path,
    client: httpx.AsyncClient | None = None,
) -> str:
    """
    Read a source from a filesystem path or an http(s) URL.

    Args:
        location: Path or URL of the source.
        client: Optional client to reuse; a short-lived one is created otherwise.

    Raises:
        SourceUnavailableError: The file or URL could not be read.
    """
    location = str(location)

    if not is_url(location):
        try:
            return Path(location).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise SourceUnavailableError(location, str(e)) from e

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=REQUEST_TIMEOUT) as own_client:
                resp = await own_client.get(location)
        else:
            resp = await client.get(location)
        resp.raise_for_status()
    except httpx.HTTPError as e:
        raise SourceUnavailableError(location, str(e)) from e

    try:
        return resp.content.decode("utf-8")
    except UnicodeDecodeError as e:
        raise SourceUnavailableError(location, str(e)) from e
