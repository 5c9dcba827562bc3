"""
BodyScore — Aggregation Engine
Per-category averages → weighted whole-person score (0–100), plus a
confidence score (0–100) describing how complete the underlying data was.
"""

import logging
from collections import defaultdict
from datetime import datetime, timezone
from typing import Iterable, Optional

from bodyscore.models import HealthCategory, Metric, ScoreSnapshot
from bodyscore.preferences import Preferences

log = logging.getLogger(__name__)


# Number of metrics per category at which that category counts as fully measured.
IDEAL_METRIC_COUNTS = {
    HealthCategory.body_composition: 3,
    HealthCategory.fitness:          3,
    HealthCategory.heart_and_vitals: 4,
    HealthCategory.metabolic:        2,
    HealthCategory.lifestyle:        2,
}

COVERAGE_SHARE = 0.7
COMPLETENESS_SHARE = 0.3


def _group(metrics: Iterable[Metric]) -> dict[HealthCategory, list[Metric]]:
    grouped: dict[HealthCategory, list[Metric]] = defaultdict(list)
    for metric in metrics:
        grouped[metric.category].append(metric)
    return grouped


# ══════════════════════════════════════════════════════════════════════════════
# CATEGORY AGGREGATOR
# ══════════════════════════════════════════════════════════════════════════════

class CategoryAggregator:
    """
    CategoryScore = mean(normalized_score) × 100 × weight(category)

    The result is weight-scaled and may exceed 100 when weight > 1; it is an
    input to BodyScoreCalculator, not a display value. Categories without
    metrics are absent from the result rather than scored 0.
    """

    def raw_average(self, metrics: Iterable[Metric], category: HealthCategory) -> Optional[float]:
        scores = [m.normalized_score for m in metrics if m.category == category]
        if not scores:
            return None
        return sum(scores) / len(scores)

    def metric_counts(self, metrics: Iterable[Metric]) -> dict[HealthCategory, int]:
        return {category: len(items) for category, items in _group(metrics).items()}

    def category_scores(
        self,
        metrics: Iterable[Metric],
        preferences: Preferences,
    ) -> dict[HealthCategory, float]:
        grouped = _group(metrics)
        scores = {}
        for category in HealthCategory:
            items = grouped.get(category)
            if not items:
                continue
            average = sum(m.normalized_score for m in items) / len(items)
            scores[category] = average * 100.0 * preferences.weight(category)
        return scores


# ══════════════════════════════════════════════════════════════════════════════
# BODY SCORE CALCULATOR
# ══════════════════════════════════════════════════════════════════════════════

class BodyScoreCalculator:
    """
    BodyScore   = Σ CategoryScore(c) / Σ weight(c)          over available c
    Coverage    = Σ weight(available) / Σ weight(all) × 100
    Completeness= Σ min(count/ideal, 1) × weight(c) / Σ weight(all) × 100
    Confidence  = 0.7 × Coverage + 0.3 × Completeness

    Category scores already carry their weight, so dividing by the available
    weight yields the weighted mean of the 0–100 category averages.
    """

    def __init__(self, aggregator: Optional[CategoryAggregator] = None):
        self.aggregator = aggregator or CategoryAggregator()

    def confidence(
        self,
        counts: dict[HealthCategory, int],
        preferences: Preferences,
    ) -> float:
        total_weight = preferences.total_weight()
        if total_weight <= 0:
            return 0.0

        available_weight = 0.0
        weighted_density = 0.0
        for category, ideal in IDEAL_METRIC_COUNTS.items():
            count = counts.get(category, 0)
            if count <= 0:
                continue
            weight = preferences.weight(category)
            available_weight += weight
            weighted_density += min(count / ideal, 1.0) * weight

        coverage = available_weight / total_weight * 100.0
        completeness = weighted_density / total_weight * 100.0
        confidence = coverage * COVERAGE_SHARE + completeness * COMPLETENESS_SHARE
        return max(0.0, min(100.0, confidence))

    def compute(
        self,
        metrics: Iterable[Metric],
        preferences: Preferences,
        now: Optional[datetime] = None,
    ) -> ScoreSnapshot:
        metrics = list(metrics)
        timestamp = now or datetime.now(timezone.utc)

        category_scores = self.aggregator.category_scores(metrics, preferences)
        available_weight = sum(preferences.weight(c) for c in category_scores)

        if available_weight == 0:
            log.info("No health data available, body score is 0.")
            return ScoreSnapshot(
                body_score=0.0,
                confidence_score=0.0,
                category_scores={},
                timestamp=timestamp,
                preferences_version=preferences.version,
                metric_count=len(metrics),
            )

        body_score = sum(category_scores.values()) / available_weight
        counts = self.aggregator.metric_counts(metrics)
        confidence = self.confidence(counts, preferences)

        for category, score in category_scores.items():
            log.debug(
                f"{category.label}: score={score:.2f} weight={preferences.weight(category)} "
                f"metrics={counts.get(category, 0)}"
            )

        return ScoreSnapshot(
            body_score=body_score,
            confidence_score=confidence,
            category_scores=category_scores,
            timestamp=timestamp,
            preferences_version=preferences.version,
            metric_count=len(metrics),
        )


# Module-level singleton
body_score_calculator = BodyScoreCalculator()
