"""lexidrill: adaptive flashcard drill trainer."""

from lexidrill.consts import VERSION

__version__ = VERSION
