"""
BodyScore — Category Weight Preferences
Versioned weight vector passed explicitly to every aggregation.
"""

import logging
from dataclasses import dataclass, field
from typing import Mapping

from bodyscore.models import HealthCategory

log = logging.getLogger(__name__)

MIN_WEIGHT = 0.1
MAX_WEIGHT = 2.0
DEFAULT_WEIGHT = 1.0


def clamp_weight(weight: float) -> float:
    return max(MIN_WEIGHT, min(MAX_WEIGHT, float(weight)))


# ══════════════════════════════════════════════════════════════════════════════
# PRESETS
# ══════════════════════════════════════════════════════════════════════════════

PRESETS: dict[str, dict[HealthCategory, float]] = {
    "default": {
        HealthCategory.body_composition: 1.0,
        HealthCategory.fitness:          1.0,
        HealthCategory.heart_and_vitals: 1.0,
        HealthCategory.metabolic:        0.8,
        HealthCategory.lifestyle:        0.5,
    },
    "weight_loss": {
        HealthCategory.body_composition: 2.0,
        HealthCategory.fitness:          1.5,
        HealthCategory.heart_and_vitals: 0.8,
        HealthCategory.metabolic:        1.2,
        HealthCategory.lifestyle:        0.6,
    },
    "fitness_focus": {
        HealthCategory.body_composition: 0.8,
        HealthCategory.fitness:          2.0,
        HealthCategory.heart_and_vitals: 1.2,
        HealthCategory.metabolic:        0.8,
        HealthCategory.lifestyle:        0.8,
    },
    "heart_health_focus": {
        HealthCategory.body_composition: 0.8,
        HealthCategory.fitness:          1.0,
        HealthCategory.heart_and_vitals: 2.0,
        HealthCategory.metabolic:        1.0,
        HealthCategory.lifestyle:        1.0,
    },
}


# ══════════════════════════════════════════════════════════════════════════════
# PREFERENCES
# ══════════════════════════════════════════════════════════════════════════════

@dataclass
class Preferences:
    """
    Per-category weights. Categories missing from the mapping weigh 1.0.

    `version` increases on every mutation so a snapshot can be traced back
    to the exact weight vector that produced it.
    """
    category_weights: dict[HealthCategory, float] = field(default_factory=dict)
    version: int = 0

    @classmethod
    def from_preset(cls, name: str) -> "Preferences":
        try:
            weights = PRESETS[name]
        except KeyError:
            raise ValueError(
                f"Unknown preset '{name}'. Choose one of: {', '.join(sorted(PRESETS))}."
            )
        return cls(category_weights=dict(weights))

    @classmethod
    def default(cls) -> "Preferences":
        return cls.from_preset("default")

    @classmethod
    def from_weights(cls, weights: Mapping[HealthCategory, float]) -> "Preferences":
        return cls(category_weights={HealthCategory(c): clamp_weight(w) for c, w in weights.items()})

    def weight(self, category: HealthCategory) -> float:
        return self.category_weights.get(category, DEFAULT_WEIGHT)

    def total_weight(self) -> float:
        """Sum of weights over all five categories, present or not."""
        return sum(self.weight(c) for c in HealthCategory)

    def update_weight(self, category: HealthCategory, weight: float) -> float:
        """Store `weight` clamped into [0.1, 2.0]; returns the stored value."""
        stored = clamp_weight(weight)
        if stored != weight:
            log.debug(f"Weight for {category.value} clamped from {weight} to {stored}")
        self.category_weights[category] = stored
        self.version += 1
        return stored

    def apply_preset(self, name: str) -> None:
        self.category_weights = dict(Preferences.from_preset(name).category_weights)
        self.version += 1

    def copy(self) -> "Preferences":
        return Preferences(category_weights=dict(self.category_weights), version=self.version)
