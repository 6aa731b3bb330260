"""Wall-clock TimerPort backed by threading.Timer."""

import threading
from collections.abc import Callable

from lexidrill.domain.ports import TimerHandle, TimerPort


class _ThreadingHandle(TimerHandle):
    def __init__(self, timer: threading.Timer):
        self._timer = timer

    def cancel(self) -> None:
        self._timer.cancel()


class ThreadingTimers(TimerPort):
    """Each scheduled callback runs once on its own daemon thread."""

    def schedule(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return _ThreadingHandle(timer)
