"""
BodyScore — Fitness Normalizer
VO₂max, daily steps and active calories.
"""

from bodyscore.models import BiologicalSex, HealthCategory
from bodyscore.normalizers.base import CategoryNormalizer, MetricDefinition, age_adjustment


# Expected VO₂max drop per age bracket (ml/kg/min). Subtracting a negative
# adjustment lifts older readings onto the reference scale.
VO2_AGE_ADJUSTMENT = (0.0, -2.0, -5.0, -7.0, -10.0)

# (poor/fair, fair/good, good/excellent) boundaries
VO2_THRESHOLDS = {
    BiologicalSex.male:   (35.0, 42.0, 50.0),
    BiologicalSex.female: (30.0, 37.0, 45.0),
    BiologicalSex.other:  (33.0, 40.0, 48.0),
}

# Older users need fewer active calories for the same score.
CALORIE_AGE_FACTOR = (1.0, 0.9, 0.85, 0.8, 0.75)

# (bands, divisors): four boundaries, three slopes
ACTIVE_CALORIE_CURVES = {
    None:                 ((100.0, 300.0, 500.0, 800.0), (400.0, 500.0, 1500.0)),
    BiologicalSex.male:   ((150.0, 350.0, 600.0, 900.0), (400.0, 500.0, 1500.0)),
    BiologicalSex.female: ((100.0, 250.0, 450.0, 700.0), (300.0, 400.0, 1250.0)),
    BiologicalSex.other:  ((125.0, 300.0, 525.0, 800.0), (350.0, 450.0, 1375.0)),
}


def _tiered(value: float, bands: tuple, divisors: tuple) -> float:
    """0.1 → 0.3 → 0.6 → 0.8 → 1.0 with linear ramps inside each tier."""
    low, fair, good, top = bands
    if value < low:
        return 0.1
    if value < fair:
        return 0.3 + (value - low) / divisors[0]
    if value < good:
        return 0.6 + (value - fair) / divisors[1]
    if value < top:
        return 0.8 + (value - good) / divisors[2]
    return 1.0


class FitnessNormalizer(CategoryNormalizer):

    CATEGORY = HealthCategory.fitness
    DEFINITIONS = (
        MetricDefinition("vo2_max", "VO₂ Max", "ml/kg/min", "normalize_vo2_max"),
        MetricDefinition("step_count", "Daily Steps", "steps", "normalize_steps"),
        MetricDefinition("active_calories", "Active Calories", "kcal", "normalize_active_calories"),
    )

    def normalize_vo2_max(self, value: float) -> float:
        if not self.profile.has_demographics:
            if value < 30:
                return max(0.1, value / 30)
            if value < 40:
                return 0.6 + (value - 30) / 25
            if value < 50:
                return 0.8 + (value - 40) / 50
            return 1.0

        adjusted = value - age_adjustment(self.profile.age, VO2_AGE_ADJUSTMENT)
        poor, fair, good = VO2_THRESHOLDS.get(
            self.profile.biological_sex, VO2_THRESHOLDS[BiologicalSex.other]
        )

        if adjusted < poor:
            return max(0.1, adjusted / poor)
        if adjusted < fair:
            return 0.6 + (adjusted - poor) / 17.5
        if adjusted < good:
            return 0.8 + (adjusted - fair) / 40
        return 1.0

    def normalize_steps(self, steps: float) -> float:
        # 10,000 steps is the usual daily target
        if steps < 1000:
            return 0.1
        if steps < 5000:
            return 0.3 + (steps - 1000) / (4000 * 2)
        if steps < 10000:
            return min(1.0, 0.6 + (steps - 5000) / (5000 * 1.3))
        if steps < 15000:
            return min(1.0, 0.9 + (steps - 10000) / 5000)
        return 1.0

    def normalize_active_calories(self, kcal: float) -> float:
        if not self.profile.has_demographics:
            bands, divisors = ACTIVE_CALORIE_CURVES[None]
            return min(1.0, _tiered(kcal, bands, divisors))

        factor = age_adjustment(self.profile.age, CALORIE_AGE_FACTOR)
        bands, divisors = ACTIVE_CALORIE_CURVES.get(
            self.profile.biological_sex, ACTIVE_CALORIE_CURVES[BiologicalSex.other]
        )
        return min(1.0, _tiered(kcal / factor, bands, divisors))
