"""Centralized constants for lexidrill.

All magic numbers and configuration defaults live here so every layer
imports from a single source of truth.
"""

# ---------- Item source ----------
SEPARATOR = "<>"
COMMENT_MARKER = "#"
DEFAULT_MIN_ITEMS = 2
ITEM_ID_LENGTH = 16

# ---------- Progressive unlock (Koch) ----------
KOCH_WINDOW = 20
KOCH_THRESHOLD = 0.85
KOCH_START_SIZE = 2

# ---------- Weighted recall ----------
BASE_WEIGHT = 3.0
UNKNOWN_WEIGHT = 3.0
KNOWN_WEIGHT = 1.5
MIN_WEIGHT = 0.2
MAX_WEIGHT = 20.0
HOURS_PER_TIME_BOOST = 24.0
MAX_TIME_BOOST = 2.0

# ---------- Reveal timing ----------
REVEAL_DELAY = 2.0  # seconds

# ---------- Persistence ----------
# Bump the suffix on any change to a blob's shape; there is no migration.
UNLOCK_STATE_KEY = "lexidrill:koch:v1"
RECALL_STATE_KEY = "lexidrill:recall:v1"
ITEM_KEY_SEPARATOR = "::"

# ---------- HTTP ----------
REQUEST_TIMEOUT = 30.0

# ---------- Catalog ----------
DEFAULT_DECKS = {
    "sv": "vocabulary-sw.txt",
    "sv2": "vocabulary-sw2.txt",
    "en": "vocabulary-en.txt",
}
DEFAULT_DECK = "sv"
