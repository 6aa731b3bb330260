import random

import pytest

from lexidrill.domain.ports import TimerHandle, TimerPort
from lexidrill.infrastructure.adapters import InMemoryStore

SAMPLE_SOURCE = """\
# Swedish basics
hej<>hello
vad<>what
tack<>thanks
ja<>yes
nej<>no
"""


class ManualHandle(TimerHandle):
    def __init__(self, due: float, callback):
        self.due = due
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualTimers(TimerPort):
    """Virtual-time timers: nothing fires until advance() is called."""

    def __init__(self):
        self.now = 0.0
        self.handles: list[ManualHandle] = []

    def schedule(self, delay, callback):
        handle = ManualHandle(self.now + delay, callback)
        self.handles.append(handle)
        return handle

    @property
    def pending(self) -> list[ManualHandle]:
        return [h for h in self.handles if not h.cancelled and not h.fired]

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            due = sorted((h for h in self.pending if h.due <= target), key=lambda h: h.due)
            if not due:
                break
            handle = due[0]
            self.now = handle.due
            handle.fired = True
            handle.callback()
        self.now = target


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FailingStore(InMemoryStore):
    """Reads work, every write raises."""

    def save(self, key, blob):
        raise OSError("disk full")


@pytest.fixture
def memory_store():
    return InMemoryStore()


@pytest.fixture
def failing_store():
    return FailingStore()


@pytest.fixture
def timers():
    return ManualTimers()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def sample_source():
    return SAMPLE_SOURCE


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Mocking HOME to a temp directory to isolate config/state
    monkeypatch.setenv("HOME", str(home))
    for var in ("STATE_DIR", "DECK_BASE", "DECKS", "STRATEGY", "DIRECTION", "SEED"):
        monkeypatch.delenv(f"LEXIDRILL_{var}", raising=False)
    return home
