"""
BodyScore — Lifestyle Normalizer
Sleep duration and hydration.
"""

import logging
from typing import Optional

from bodyscore.derivations import recommended_water_intake
from bodyscore.models import HealthCategory
from bodyscore.normalizers.base import CategoryNormalizer, MetricDefinition

log = logging.getLogger(__name__)


class LifestyleNormalizer(CategoryNormalizer):

    CATEGORY = HealthCategory.lifestyle
    DEFINITIONS = (
        MetricDefinition("sleep", "Sleep Duration", "hours", "normalize_sleep"),
        MetricDefinition(
            "hydration", "Hydration", "ml", "normalize_hydration",
            accepts_secondary=True,
        ),
    )

    def normalize_sleep(self, hours: float) -> float:
        # 7–9 hours recommended for adults
        if hours < 5:
            return 0.2
        if hours < 6:
            return 0.4
        if hours < 7:
            return 0.7
        if hours <= 9:
            return 1.0
        if hours <= 10:
            return 0.8
        return 0.6

    def normalize_hydration(self, intake_ml: float, recommended_ml: Optional[float] = None) -> float:
        """
        Scored as a share of the recommended daily intake. Without a positive
        recommendation, one is derived from the profile.
        """
        if recommended_ml is None or recommended_ml <= 0:
            recommended_ml = recommended_water_intake(self.profile)
            log.debug(f"Derived hydration target: {recommended_ml:.0f} ml")

        share = intake_ml / recommended_ml
        if share < 0.5:
            return 0.3
        if share < 0.7:
            return 0.5
        if share < 0.9:
            return 0.7
        if share <= 1.1:
            return 1.0
        if share <= 1.3:
            return 0.9
        return 0.8
