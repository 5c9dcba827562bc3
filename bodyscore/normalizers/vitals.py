"""
BodyScore — Heart & Vitals Normalizer
Resting heart rate, HRV, blood oxygen and blood pressure. No demographic adjustment.
"""

from bodyscore.models import HealthCategory
from bodyscore.normalizers.base import CategoryNormalizer, MetricDefinition, banded


class VitalsNormalizer(CategoryNormalizer):

    CATEGORY = HealthCategory.heart_and_vitals
    DEFINITIONS = (
        MetricDefinition("resting_heart_rate", "Resting Heart Rate", "bpm", "normalize_resting_heart_rate"),
        MetricDefinition("heart_rate_variability", "Heart Rate Variability", "ms", "normalize_hrv"),
        MetricDefinition("blood_oxygen", "Blood Oxygen", "%", "normalize_blood_oxygen"),
        MetricDefinition(
            "blood_pressure", "Blood Pressure", "mmHg", "normalize_blood_pressure",
            needs_secondary=True,
        ),
    )

    def normalize_resting_heart_rate(self, bpm: float) -> float:
        """Lower is better down to 40 bpm; below that it is flagged as unusual."""
        if bpm < 40:
            return 0.7
        if bpm < 50:
            return 1.0
        if bpm < 60:
            return 0.9
        if bpm < 70:
            return 0.8
        if bpm < 80:
            return 0.6
        if bpm < 90:
            return 0.4
        return max(0.1, 0.4 - (bpm - 90) / 100)

    def normalize_hrv(self, ms: float) -> float:
        return banded(ms, [(20, 0.3), (40, 0.5), (60, 0.7), (80, 0.85), (100, 0.95)], 1.0)

    def normalize_blood_oxygen(self, percent: float) -> float:
        return banded(percent, [(90, 0.3), (95, 0.6), (98, 0.85)], 1.0)

    def normalize_blood_pressure(self, systolic: float, diastolic: float) -> float:
        """
        Standard clinical categories:
            low 0.4 / normal 1.0 / elevated 0.8 / stage 1 0.6 / stage 2 0.3 / crisis 0.1
        """
        if systolic < 90 or diastolic < 60:
            return 0.4
        if systolic < 120 and diastolic < 80:
            return 1.0
        if systolic < 130 and diastolic < 80:
            return 0.8
        if systolic < 140 or diastolic < 90:
            return 0.6
        if systolic < 180 or diastolic < 120:
            return 0.3
        return 0.1
