"""
BodyScore — Core Value Types
Demographic profile, raw and normalized metrics, aggregation snapshot.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


# ══════════════════════════════════════════════════════════════════════════════
# ENUMS
# ══════════════════════════════════════════════════════════════════════════════

class BiologicalSex(str, Enum):
    male = "male"
    female = "female"
    other = "other"
    unknown = "unknown"

    @property
    def description(self) -> str:
        if self is BiologicalSex.unknown:
            return "Not Set"
        return self.value.title()


class HealthCategory(str, Enum):
    body_composition = "body_composition"
    fitness = "fitness"
    heart_and_vitals = "heart_and_vitals"
    metabolic = "metabolic"
    lifestyle = "lifestyle"

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self]


CATEGORY_LABELS = {
    HealthCategory.body_composition: "Body Composition",
    HealthCategory.fitness:          "Fitness & Activity",
    HealthCategory.heart_and_vitals: "Heart & Vitals",
    HealthCategory.metabolic:        "Metabolic Health",
    HealthCategory.lifestyle:        "Lifestyle",
}


# ══════════════════════════════════════════════════════════════════════════════
# PROFILE
# ══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Profile:
    """
    Demographic context for one scoring pass.
    Zero age / height and BiologicalSex.unknown mean "not available".
    """
    age: int = 0
    biological_sex: BiologicalSex = BiologicalSex.unknown
    height_m: float = 0.0

    @classmethod
    def unknown(cls) -> "Profile":
        return cls()

    @property
    def has_demographics(self) -> bool:
        """Sex and age are both known; curves use their demographic variant."""
        return self.biological_sex is not BiologicalSex.unknown and self.age > 0

    @property
    def formatted_height(self) -> str:
        if self.height_m <= 0:
            return "Not available"
        return f"{self.height_m * 100:.0f} cm"


# ══════════════════════════════════════════════════════════════════════════════
# METRICS
# ══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class MetricReading:
    """Raw reading as delivered by the acquisition layer, already in canonical units."""
    id: str
    category: HealthCategory
    value: float
    unit: str = ""
    secondary_value: Optional[float] = None   # diastolic mmHg / recommended ml


@dataclass(frozen=True)
class Metric:
    id: str
    name: str
    category: HealthCategory
    value: float
    unit: str
    normalized_score: float   # 0–1

    def __post_init__(self):
        if not 0.0 <= self.normalized_score <= 1.0:
            raise ValueError(
                f"normalized_score for '{self.id}' must be within [0, 1], got {self.normalized_score}"
            )


# ══════════════════════════════════════════════════════════════════════════════
# SNAPSHOT
# ══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ScoreSnapshot:
    body_score: float                                   # 0–100
    confidence_score: float                             # 0–100
    category_scores: Mapping[HealthCategory, float]     # weight-scaled, available categories only
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    preferences_version: int = 0
    metric_count: int = 0

    def __post_init__(self):
        object.__setattr__(self, "category_scores", MappingProxyType(dict(self.category_scores)))

    @property
    def formatted_body_score(self) -> str:
        return f"{self.body_score:.0f}"

    @property
    def formatted_confidence_score(self) -> str:
        return f"{self.confidence_score:.0f}%"
