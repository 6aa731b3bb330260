"""Exception hierarchy for lexidrill."""


class DrillError(Exception):
    """Base class for every error raised by lexidrill."""


class LoadError(DrillError):
    """A deck could not be loaded; the host cannot start a drill."""


class SourceUnavailableError(LoadError):
    """The item source could not be read (missing file, HTTP failure)."""

    def __init__(self, location: str, reason: str):
        super().__init__(f"Cannot read item source '{location}': {reason}")
        self.location = location
        self.reason = reason


class DeckTooSmallError(LoadError):
    """The source parsed to fewer items than the configured minimum."""

    def __init__(self, found: int, required: int):
        super().__init__(f"Deck has {found} usable item(s), at least {required} required")
        self.found = found
        self.required = required


class EmptyDeckError(DrillError):
    """Selection was attempted with nothing to select from.

    This cannot happen after a successful load and indicates a logic error.
    """


class UnknownDeckError(DrillError):
    """A deck name is not present in the configured catalog."""

    def __init__(self, name: str, known: list[str]):
        super().__init__(f"Unknown deck '{name}'. Configured decks: {', '.join(known) or '-'}")
        self.name = name
        self.known = known
