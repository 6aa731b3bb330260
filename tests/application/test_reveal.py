from unittest.mock import MagicMock

import pytest

from lexidrill.application.reveal import RevealController, RevealState
from lexidrill.domain.models import Item

FIRST = Item(id="1", prompt="hello", translation="hej")
SECOND = Item(id="2", prompt="what", translation="va")


@pytest.fixture
def on_reveal():
    return MagicMock()


@pytest.fixture
def controller(timers, on_reveal):
    return RevealController(timers, delay=2.0, on_reveal=on_reveal)


def test_reveals_after_delay(controller, timers, on_reveal):
    controller.present(FIRST)
    assert controller.state is RevealState.HIDDEN
    assert controller.pending

    timers.advance(1.9)
    on_reveal.assert_not_called()

    timers.advance(0.1)
    assert controller.state is RevealState.REVEALED
    assert not controller.pending
    on_reveal.assert_called_once_with(FIRST)


def test_force_reveal_is_synchronous_and_cancels_timer(controller, timers, on_reveal):
    controller.present(FIRST)
    controller.force_reveal()

    on_reveal.assert_called_once_with(FIRST)
    assert not timers.pending

    timers.advance(5)
    on_reveal.assert_called_once()


def test_force_reveal_twice_reveals_once(controller, timers, on_reveal):
    controller.present(FIRST)
    timers.advance(2)
    controller.force_reveal()
    on_reveal.assert_called_once_with(FIRST)


def test_presenting_cancels_previous_timer(controller, timers, on_reveal):
    controller.present(FIRST)
    timers.advance(1.5)
    controller.present(SECOND)

    assert len(timers.pending) == 1
    timers.advance(1.5)
    on_reveal.assert_not_called()

    timers.advance(0.5)
    on_reveal.assert_called_once_with(SECOND)


def test_stale_callback_cannot_reveal_next_item(controller, timers, on_reveal):
    controller.present(FIRST)
    stale_callback = timers.handles[0].callback
    controller.present(SECOND)

    # Simulate a timer thread that fired just before it was cancelled
    stale_callback()

    on_reveal.assert_not_called()
    assert controller.state is RevealState.HIDDEN
    assert controller.item == SECOND


def test_force_reveal_without_item_is_noop(controller, on_reveal):
    controller.force_reveal()
    on_reveal.assert_not_called()
