import pytest

from lexidrill.domain.models import Outcome
from lexidrill.domain.unlock import (
    RollingOutcomeWindow,
    UnlockPolicy,
    UnlockState,
    apply_outcome,
    initial_state,
    restore_state,
    should_advance,
)

KNOWN = Outcome.KNOWN
UNKNOWN = Outcome.UNKNOWN


def _feed(state, outcomes, deck_size, policy):
    for o in outcomes:
        state = apply_outcome(state, o, deck_size, policy)
    return state


# ---------- Window ----------


def test_window_evicts_oldest():
    window = RollingOutcomeWindow(size=3)
    for known in (False, True, True, True):
        window = window.append(known)
    assert window.outcomes == (True, True, True)
    assert window.is_full


def test_window_ratio_is_over_window_size():
    window = RollingOutcomeWindow(size=4).append(True).append(True)
    assert window.success_ratio == 0.5
    assert not window.is_full


def test_no_decision_before_window_fills():
    window = RollingOutcomeWindow(size=5)
    for _ in range(4):
        window = window.append(True)
    assert not should_advance(window, 0.5)


# ---------- Policy ----------


@pytest.mark.parametrize(
    "kwargs",
    [{"window_size": 0}, {"threshold": 0}, {"threshold": 1.5}, {"start_size": 0}],
)
def test_policy_rejects_invalid_values(kwargs):
    with pytest.raises(ValueError):
        UnlockPolicy(**kwargs)


def test_start_size_clamped_to_deck():
    policy = UnlockPolicy(start_size=5)
    assert initial_state(policy, 3).unlocked_count == 3


# ---------- Advancement ----------


def test_seventeen_of_twenty_advances():
    policy = UnlockPolicy()
    outcomes = [UNKNOWN] * 3 + [KNOWN] * 17
    state = _feed(initial_state(policy, 10), outcomes, 10, policy)
    assert state.unlocked_count == 3


def test_seventeen_of_twenty_advances_in_any_order():
    policy = UnlockPolicy()
    outcomes = [KNOWN] * 8 + [UNKNOWN] + [KNOWN] * 5 + [UNKNOWN, UNKNOWN] + [KNOWN] * 4
    assert len(outcomes) == 20
    state = _feed(initial_state(policy, 10), outcomes, 10, policy)
    assert state.unlocked_count == 3


def test_sixteen_of_twenty_does_not_advance():
    policy = UnlockPolicy()
    outcomes = [KNOWN] * 16 + [UNKNOWN] * 4
    state = _feed(initial_state(policy, 10), outcomes, 10, policy)
    assert state.unlocked_count == 2


def test_nineteen_correct_answers_never_advance():
    policy = UnlockPolicy()
    state = _feed(initial_state(policy, 10), [KNOWN] * 19, 10, policy)
    assert state.unlocked_count == 2


def test_window_keeps_sliding_after_advance():
    policy = UnlockPolicy()
    state = _feed(initial_state(policy, 10), [KNOWN] * 22, 10, policy)
    # Full window at answer 20, still full and perfect at 21 and 22
    assert state.unlocked_count == 5
    assert len(state.window) == 20


def test_reset_window_on_advance_requires_a_new_window():
    policy = UnlockPolicy(reset_window_on_advance=True)
    state = _feed(initial_state(policy, 10), [KNOWN] * 20, 10, policy)
    assert state.unlocked_count == 3
    assert len(state.window) == 0

    state = _feed(state, [KNOWN] * 19, 10, policy)
    assert state.unlocked_count == 3
    state = apply_outcome(state, KNOWN, 10, policy)
    assert state.unlocked_count == 4


@pytest.mark.parametrize("deck_size", [2, 3, 7])
def test_never_exceeds_deck_size(deck_size):
    policy = UnlockPolicy()
    state = _feed(initial_state(policy, deck_size), [KNOWN] * 100, deck_size, policy)
    assert state.unlocked_count == deck_size


def test_full_deck_keeps_window_sliding():
    policy = UnlockPolicy(window_size=3)
    state = UnlockState(unlocked_count=2, window=RollingOutcomeWindow(size=3))
    state = _feed(state, [KNOWN, KNOWN, UNKNOWN, KNOWN], 2, policy)
    assert state.unlocked_count == 2
    assert state.window.outcomes == (True, False, True)


# ---------- Restore ----------


def test_restore_clamps_count_to_deck():
    policy = UnlockPolicy()
    assert restore_state(policy, 4, 10, []).unlocked_count == 4
    assert restore_state(policy, 4, 0, []).unlocked_count == 2


def test_restore_truncates_window():
    policy = UnlockPolicy(window_size=3)
    state = restore_state(policy, 5, 3, [False, False, True, True, True])
    assert state.window.outcomes == (True, True, True)
    assert state.window.size == 3
