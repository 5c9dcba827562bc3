"""
BodyScore — Body Composition Normalizer
Body fat %, lean body mass (via FFMI) and BMI.
"""

from bodyscore.models import BiologicalSex, HealthCategory
from bodyscore.normalizers.base import (
    CategoryNormalizer, MetricDefinition, age_adjustment, banded,
)


# Percentage points of extra headroom granted to the "excellent" bands per age bracket.
BODY_FAT_AGE_HEADROOM = (0.0, 2.0, 3.5, 5.0, 6.5)

# (too-low floor, excellent, very good, good, acceptable, poor) upper bounds in %.
BODY_FAT_THRESHOLDS = {
    BiologicalSex.male:   (6.0, 10.0, 15.0, 20.0, 25.0, 30.0),
    BiologicalSex.female: (12.0, 18.0, 23.0, 28.0, 33.0, 38.0),
    BiologicalSex.other:  (10.0, 14.0, 20.0, 25.0, 30.0, 35.0),
}

# FFMI bands (upper bound, score) and the score above the last bound.
FFMI_BANDS = {
    BiologicalSex.female: ([(14, 0.3), (16, 0.6), (18, 0.8), (20, 1.0), (22, 0.9)], 0.8),
    BiologicalSex.male:   ([(17, 0.3), (19, 0.6), (21, 0.8), (23, 1.0), (25, 0.9)], 0.8),
}
FFMI_GENERIC_BANDS = ([(16, 0.3), (18, 0.6), (20, 0.8), (22, 1.0)], 0.9)


class BodyCompositionNormalizer(CategoryNormalizer):

    CATEGORY = HealthCategory.body_composition
    DEFINITIONS = (
        MetricDefinition("body_fat", "Body Fat Percentage", "%", "normalize_body_fat"),
        MetricDefinition("lean_body_mass", "Lean Body Mass", "kg", "normalize_lean_body_mass"),
        MetricDefinition("bmi", "BMI", "", "normalize_bmi"),
    )

    DEFAULT_LEAN_MASS_SCORE = 0.8

    def normalize_body_fat(self, percent: float) -> float:
        """
        Body fat in percentage points (18.5 means 18.5 %).
        Without sex and age, a general population scale is used.
        """
        if not self.profile.has_demographics:
            if percent < 10:
                return 0.4
            if percent < 20:
                return 0.9
            if percent < 30:
                return 0.7
            return max(0.2, 1.0 - (percent - 30) / 20)

        headroom = age_adjustment(self.profile.age, BODY_FAT_AGE_HEADROOM)
        floor, excellent, very_good, good, acceptable, poor = BODY_FAT_THRESHOLDS.get(
            self.profile.biological_sex, BODY_FAT_THRESHOLDS[BiologicalSex.other]
        )

        if percent < floor:
            return 0.3     # too lean
        if percent < excellent + headroom:
            return 1.0
        if percent < very_good + headroom:
            return 0.9
        if percent < good + headroom:
            return 0.8
        if percent < acceptable + headroom:
            return 0.6
        if percent < poor + headroom:
            return 0.4
        return max(0.1, 0.4 - (percent - (poor + headroom)) / 15)

    def normalize_lean_body_mass(self, lean_mass_kg: float) -> float:
        """Scored as fat-free mass index: FFMI = LBM(kg) / height(m)²."""
        height = self.profile.height_m
        if height <= 0 or self.profile.age <= 0:
            return self.DEFAULT_LEAN_MASS_SCORE

        ffmi = lean_mass_kg / (height * height)
        bands, above = FFMI_BANDS.get(self.profile.biological_sex, FFMI_GENERIC_BANDS)
        return banded(ffmi, bands, above)

    def normalize_bmi(self, bmi: float) -> float:
        # 18.5–24.9 is the normal range
        if bmi < 16:
            return 0.3
        if bmi < 18.5:
            return 0.7
        if bmi <= 24.9:
            return 1.0
        if bmi <= 29.9:
            return 0.7
        if bmi <= 34.9:
            return 0.5
        if bmi <= 39.9:
            return 0.3
        return 0.1
