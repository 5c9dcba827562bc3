"""
BodyScore — Metabolic Normalizer
Basal metabolic rate and blood glucose.
"""

from bodyscore.models import BiologicalSex, HealthCategory
from bodyscore.normalizers.base import CategoryNormalizer, MetricDefinition, age_adjustment, banded


# BMR naturally falls with age (kcal/day per bracket).
BMR_AGE_ADJUSTMENT = (0.0, -100.0, -200.0, -300.0, -400.0)

BMR_FALLBACK_BANDS = [(1000, 0.5), (1400, 0.7), (1800, 0.9)]

BMR_THRESHOLDS = {
    BiologicalSex.male:   (1400.0, 1600.0, 1800.0, 2000.0),
    BiologicalSex.female: (1200.0, 1400.0, 1600.0, 1800.0),
    BiologicalSex.other:  (1300.0, 1500.0, 1700.0, 1900.0),
}
BMR_BAND_SCORES = (0.5, 0.7, 0.8, 0.9)


class MetabolicNormalizer(CategoryNormalizer):

    CATEGORY = HealthCategory.metabolic
    DEFINITIONS = (
        MetricDefinition("bmr", "Basal Metabolic Rate", "kcal/day", "normalize_bmr"),
        MetricDefinition("glucose", "Blood Glucose", "mg/dL", "normalize_glucose"),
    )

    def normalize_bmr(self, kcal: float) -> float:
        if not self.profile.has_demographics:
            return banded(kcal, BMR_FALLBACK_BANDS, 1.0)

        adjusted = kcal - age_adjustment(self.profile.age, BMR_AGE_ADJUSTMENT)
        thresholds = BMR_THRESHOLDS.get(
            self.profile.biological_sex, BMR_THRESHOLDS[BiologicalSex.other]
        )
        return banded(adjusted, list(zip(thresholds, BMR_BAND_SCORES)), 1.0)

    def normalize_glucose(self, mg_dl: float) -> float:
        # <70 hypoglycaemic, <100 ideal fasting, <125 prediabetic, <180 diabetic range
        return banded(mg_dl, [(70, 0.4), (100, 1.0), (125, 0.8), (180, 0.5)], 0.2)
