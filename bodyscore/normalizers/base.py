"""
BodyScore — Normalizer Base
Shared plumbing for the five category normalizers.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from bodyscore.models import HealthCategory, Profile

log = logging.getLogger(__name__)

# Upper age bounds of the brackets used by every age-adjusted curve:
# <30, <40, <50, <60, 60+
AGE_BRACKETS = (30, 40, 50, 60)


@dataclass(frozen=True)
class MetricDefinition:
    id: str
    name: str
    unit: str
    method: str                     # normalizer method that scores this metric
    needs_secondary: bool = False
    accepts_secondary: bool = False


def bounded(score: float) -> float:
    """Clamp a curve result into [0, 1]."""
    return max(0.0, min(1.0, score))


def age_adjustment(age: int, adjustments: Sequence[float]) -> float:
    """
    Pick the adjustment for the bracket `age` falls into.
    `adjustments` has one entry per bracket: <30, <40, <50, <60, 60+.
    """
    for upper, adjustment in zip(AGE_BRACKETS, adjustments):
        if age < upper:
            return adjustment
    return adjustments[-1]


def banded(value: float, bands: Sequence[tuple[float, float]], above: float) -> float:
    """
    Piecewise-constant lookup: first (threshold, score) with value < threshold wins.
    """
    for threshold, score in bands:
        if value < threshold:
            return score
    return above


class CategoryNormalizer:
    """
    One normalizer per health category. Subclasses declare their metrics in
    DEFINITIONS and implement one `normalize_<metric>` method per curve.
    """

    CATEGORY: HealthCategory
    DEFINITIONS: tuple[MetricDefinition, ...] = ()

    def __init__(self, profile: Profile):
        self.profile = profile
        self._definitions = {d.id: d for d in self.DEFINITIONS}

    def definition(self, metric_id: str) -> Optional[MetricDefinition]:
        return self._definitions.get(metric_id)

    def supports(self, metric_id: str) -> bool:
        return metric_id in self._definitions

    def score(
        self,
        metric_id: str,
        value: float,
        secondary_value: Optional[float] = None,
    ) -> Optional[float]:
        """
        Score one reading. Returns None when this category does not define
        `metric_id` or a required companion value is missing.
        """
        definition = self._definitions.get(metric_id)
        if definition is None:
            return None

        if definition.needs_secondary and secondary_value is None:
            return None

        fn = getattr(self, definition.method)
        if definition.needs_secondary or definition.accepts_secondary:
            return bounded(fn(value, secondary_value))
        return bounded(fn(value))
