"""
Weight function for the weighted recall sampler.

This is a pure computation module with no I/O.
"""

from lexidrill.domain.constants import (
    BASE_WEIGHT,
    HOURS_PER_TIME_BOOST,
    KNOWN_WEIGHT,
    MAX_TIME_BOOST,
    MAX_WEIGHT,
    MIN_WEIGHT,
    UNKNOWN_WEIGHT,
)
from lexidrill.domain.recall import ItemStat


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class RecallWeightCalculator:
    """
    Computes selection weights from per-item statistics.

    w = clamp(1 + 3*unknown - 1.5*known + time_boost, 0.2, 20)
    time_boost = clamp(hours_since_last_answer / 24, 0, 2)

    Items never answered get the base weight (3). The lower bound keeps every
    item drawable; the upper bound stops one neglected item from dominating.

    Stateless and side-effect free.
    """

    def __init__(
        self,
        base_weight: float = BASE_WEIGHT,
        unknown_weight: float = UNKNOWN_WEIGHT,
        known_weight: float = KNOWN_WEIGHT,
        min_weight: float = MIN_WEIGHT,
        max_weight: float = MAX_WEIGHT,
    ):
        self.base_weight = base_weight
        self.unknown_weight = unknown_weight
        self.known_weight = known_weight
        self.min_weight = min_weight
        self.max_weight = max_weight

    def weight(self, stat: ItemStat | None, now: float) -> float:
        if stat is None:
            return self.base_weight

        raw = (
            1
            + self.unknown_weight * stat.unknown_count
            - self.known_weight * stat.known_count
            + self.time_boost(stat, now)
        )
        return clamp(raw, self.min_weight, self.max_weight)

    def time_boost(self, stat: ItemStat, now: float) -> float:
        """One point per day since the last answer, capped at two."""
        if stat.last_answered_at is None:
            return 0.0
        hours = (now - stat.last_answered_at) / 3600.0
        return clamp(hours / HOURS_PER_TIME_BOOST, 0.0, MAX_TIME_BOOST)
