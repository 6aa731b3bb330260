# Application Schedulers Package
from .base import BaseScheduler
from .progressive import ProgressiveUnlockScheduler
from .weighted import WeightedRecallScheduler
from .weights import RecallWeightCalculator

__all__ = [
    "BaseScheduler",
    "ProgressiveUnlockScheduler",
    "WeightedRecallScheduler",
    "RecallWeightCalculator",
]
