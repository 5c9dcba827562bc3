"""
BodyScore — Derived Readings
Values the acquisition layer computes when the health store has no direct
reading: BMI from weight/height, lean body mass → BMR (Katch-McArdle),
and a demographic daily water target.
"""

import logging
import math
from typing import Optional

from bodyscore.models import BiologicalSex, Profile

log = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════════
# BODY COMPOSITION
# ══════════════════════════════════════════════════════════════════════════════

def body_mass_index(weight_kg: float, height_m: float) -> Optional[float]:
    """BMI = weight / height². None when height is unknown."""
    if height_m <= 0:
        return None
    return weight_kg / (height_m * height_m)


def lean_body_mass(weight_kg: float, body_fat_pct: float) -> float:
    """LBM = weight × (1 − body_fat_fraction)"""
    return weight_kg * (1.0 - body_fat_pct / 100.0)


def katch_mcardle_bmr(lbm_kg: float) -> float:
    """Katch-McArdle formula: BMR = 370 + 21.6 × LBM(kg)"""
    return 370.0 + 21.6 * lbm_kg


# ══════════════════════════════════════════════════════════════════════════════
# HYDRATION
# ══════════════════════════════════════════════════════════════════════════════

# Adequate total daily water intake (ml)
WATER_BASELINE_ML = {
    BiologicalSex.female: 2700.0,
    BiologicalSex.male:   3700.0,
}
WATER_BASELINE_DEFAULT_ML = 3200.0

REFERENCE_HEIGHT_M = {
    BiologicalSex.female: 1.7,
}
REFERENCE_HEIGHT_DEFAULT_M = 1.8

WATER_ROUNDING_ML = 50.0


def recommended_water_intake(profile: Profile) -> float:
    """
    Daily water target in ml, scaled by age bracket and height, rounded to 50 ml.

    Younger adults (<30) get 10% more, older adults (>65) 10% less; taller
    people proportionally more relative to a sex-specific reference height.
    """
    baseline = WATER_BASELINE_ML.get(profile.biological_sex, WATER_BASELINE_DEFAULT_ML)

    age_factor = 1.0
    if 0 < profile.age < 30:
        age_factor = 1.1
    elif profile.age > 65:
        age_factor = 0.9

    height_factor = 1.0
    if profile.height_m > 0:
        reference = REFERENCE_HEIGHT_M.get(profile.biological_sex, REFERENCE_HEIGHT_DEFAULT_M)
        height_factor = profile.height_m / reference

    target = baseline * age_factor * height_factor
    # round half up, not banker's rounding
    rounded = math.floor(target / WATER_ROUNDING_ML + 0.5) * WATER_ROUNDING_ML
    if rounded <= 0:
        log.debug(f"Water target for height {profile.height_m} m rounds to 0, using {baseline:.0f} ml")
        return baseline
    return rounded
