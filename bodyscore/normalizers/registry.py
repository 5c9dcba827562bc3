"""
BodyScore — Normalizer Registry
Category-keyed lookup from a raw reading to the normalizer that scores it.
"""

import logging
from typing import Iterable, Optional

from bodyscore.models import HealthCategory, Metric, MetricReading, Profile
from bodyscore.normalizers.base import CategoryNormalizer
from bodyscore.normalizers.body_composition import BodyCompositionNormalizer
from bodyscore.normalizers.fitness import FitnessNormalizer
from bodyscore.normalizers.lifestyle import LifestyleNormalizer
from bodyscore.normalizers.metabolic import MetabolicNormalizer
from bodyscore.normalizers.vitals import VitalsNormalizer

log = logging.getLogger(__name__)

NORMALIZERS: dict[HealthCategory, type[CategoryNormalizer]] = {
    HealthCategory.body_composition: BodyCompositionNormalizer,
    HealthCategory.fitness:          FitnessNormalizer,
    HealthCategory.heart_and_vitals: VitalsNormalizer,
    HealthCategory.metabolic:        MetabolicNormalizer,
    HealthCategory.lifestyle:        LifestyleNormalizer,
}


class NormalizerProvider:
    """
    Hands out one normalizer per category, all bound to the same Profile.
    Build a new provider whenever the profile is replaced.
    """

    def __init__(self, profile: Optional[Profile] = None):
        self.profile = profile or Profile.unknown()
        self._cache: dict[HealthCategory, CategoryNormalizer] = {}

    def for_category(self, category: HealthCategory) -> CategoryNormalizer:
        normalizer = self._cache.get(category)
        if normalizer is None:
            normalizer = NORMALIZERS[category](self.profile)
            self._cache[category] = normalizer
        return normalizer

    def normalize(self, reading: MetricReading) -> Optional[Metric]:
        """
        Score a raw reading. Readings the category does not define, or that
        lack a required companion value, are dropped (None).
        """
        normalizer = self.for_category(reading.category)
        definition = normalizer.definition(reading.id)
        if definition is None:
            log.warning(f"No {reading.category.value} curve for metric '{reading.id}', reading skipped.")
            return None

        score = normalizer.score(reading.id, reading.value, reading.secondary_value)
        if score is None:
            log.warning(f"Metric '{reading.id}' is missing its companion value, reading skipped.")
            return None

        log.debug(f"{reading.id}: value={reading.value} score={score:.3f}")
        return Metric(
            id=reading.id,
            name=definition.name,
            category=reading.category,
            value=reading.value,
            unit=reading.unit or definition.unit,
            normalized_score=score,
        )

    def normalize_all(self, readings: Iterable[MetricReading]) -> list[Metric]:
        metrics = []
        for reading in readings:
            metric = self.normalize(reading)
            if metric is not None:
                metrics.append(metric)
        return metrics
