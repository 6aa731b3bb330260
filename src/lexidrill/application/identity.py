"""Content-derived identities for drill items."""

import hashlib
import re
import unicodedata

from lexidrill.domain.constants import ITEM_ID_LENGTH

_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """NFC, case-folded, whitespace collapsed."""
    text = unicodedata.normalize("NFC", text)
    return _WHITESPACE.sub(" ", text).strip().casefold()


def content_id(left: str, right: str) -> str:
    """
    Stable item id from the two sides of a source line.

    The id depends only on the text, not on the line's position, so
    reordering or inserting lines in a source keeps existing stats attached
    to the right items. Sides are hashed in source order, so the same line
    keeps its id in either drill direction.
    """
    payload = f"{normalize_text(left)}\x1f{normalize_text(right)}"
    return hashlib.md5(payload.encode("utf-8")).hexdigest()[:ITEM_ID_LENGTH]
