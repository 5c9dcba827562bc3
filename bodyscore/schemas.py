"""
BodyScore — Pydantic Schemas
Validated models for the data exchanged with acquisition, persistence and
presentation collaborators.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, Dict
from datetime import datetime

from bodyscore.models import (
    BiologicalSex, HealthCategory, MetricReading, Profile, ScoreSnapshot,
)
from bodyscore.preferences import Preferences, clamp_weight


# ══════════════════════════════════════════════════════════════════════════════
# INPUTS
# ══════════════════════════════════════════════════════════════════════════════

class ProfileSchema(BaseModel):
    age: int = Field(0, ge=0, le=130, description="Age in years; 0 when unknown")
    biological_sex: BiologicalSex = BiologicalSex.unknown
    height_m: float = Field(0.0, ge=0, le=3.0, description="Height in metres; 0 when unknown")

    def to_profile(self) -> Profile:
        return Profile(age=self.age, biological_sex=self.biological_sex, height_m=self.height_m)


class MetricReadingSchema(BaseModel):
    """One raw reading, already converted to the metric's canonical unit."""
    id: str = Field(..., min_length=1, max_length=64)
    category: HealthCategory
    value: float
    unit: str = ""
    secondary_value: Optional[float] = Field(
        None, description="Diastolic pressure for blood_pressure, recommended ml for hydration"
    )

    def to_reading(self) -> MetricReading:
        return MetricReading(
            id=self.id,
            category=self.category,
            value=self.value,
            unit=self.unit,
            secondary_value=self.secondary_value,
        )


class PreferencesSchema(BaseModel):
    category_weights: Dict[HealthCategory, float] = {}

    @field_validator("category_weights")
    @classmethod
    def clamp_weights(cls, v: Dict[HealthCategory, float]) -> Dict[HealthCategory, float]:
        return {category: clamp_weight(weight) for category, weight in v.items()}

    def to_preferences(self) -> Preferences:
        return Preferences.from_weights(self.category_weights)


# ══════════════════════════════════════════════════════════════════════════════
# OUTPUT
# ══════════════════════════════════════════════════════════════════════════════

class ScoreSnapshotSchema(BaseModel):
    body_score: float = Field(..., ge=0.0)
    confidence_score: float = Field(..., ge=0.0, le=100.0)
    category_scores: Dict[HealthCategory, float]
    timestamp: datetime
    preferences_version: int = 0
    metric_count: int = 0

    class Config:
        from_attributes = True

    @classmethod
    def from_snapshot(cls, snapshot: ScoreSnapshot) -> "ScoreSnapshotSchema":
        return cls.model_validate(snapshot)
