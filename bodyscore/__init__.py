"""
BodyScore — wellness score engine.
Normalizes raw biometric readings and blends them into a 0–100 body score
with a companion confidence score.
"""

from bodyscore.aggregation import BodyScoreCalculator, CategoryAggregator
from bodyscore.models import (
    BiologicalSex, HealthCategory, Metric, MetricReading, Profile, ScoreSnapshot,
)
from bodyscore.preferences import PRESETS, Preferences
from bodyscore.session import ScoringSession

__version__ = "1.0.0"

__all__ = [
    "BiologicalSex",
    "HealthCategory",
    "Profile",
    "MetricReading",
    "Metric",
    "ScoreSnapshot",
    "Preferences",
    "PRESETS",
    "CategoryAggregator",
    "BodyScoreCalculator",
    "ScoringSession",
]
