# fittrack/services/body_metrics.py
"""
BMI, BMR, TDEE and daily calorie targets.

Pure functions of the input; no I/O and no shared state.
"""

import math
from types import MappingProxyType
from typing import Mapping

from fittrack.errors import ValidationError
from fittrack.models.body_metrics import BodyMetricsInput, BodyMetricsResult, CalorieRecommendations

ACTIVITY_MULTIPLIERS: Mapping[str, float] = MappingProxyType({
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "active": 1.725,
    "very-active": 1.9,
})

# (upper bound exclusive, label); anything at or above the last bound is obese
BMI_CATEGORIES = (
    (18.5, "Underweight"),
    (25.0, "Normal Weight"),
    (30.0, "Overweight"),
)
OBESE = "Obese"

WEIGHT_LOSS_DEFICIT = 500
WEIGHT_GAIN_SURPLUS = 300


def round_half_up(value: float, digits: int = 0) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def bmi_value(height_cm: float, weight_kg: float) -> float:
    """Unrounded BMI."""
    if height_cm <= 0 or weight_kg <= 0:
        raise ValidationError("Height and weight must be positive")
    height_m = height_cm / 100
    if height_m * height_m == 0:
        raise ValidationError("Height is out of range")
    return weight_kg / (height_m * height_m)


def bmi_category(bmi: float) -> str:
    for upper, label in BMI_CATEGORIES:
        if bmi < upper:
            return label
    return OBESE


def basal_metabolic_rate(weight_kg: float, height_cm: float, age_years: int, sex: str) -> float:
    # Revised Harris-Benedict coefficients
    if sex == "male":
        return 88.362 + (13.397 * weight_kg) + (4.799 * height_cm) - (5.677 * age_years)
    if sex == "female":
        return 447.593 + (9.247 * weight_kg) + (3.098 * height_cm) - (4.330 * age_years)
    raise ValidationError(f"Unknown sex: {sex}")


def activity_multiplier(activity_level: str) -> float:
    try:
        return ACTIVITY_MULTIPLIERS[activity_level]
    except KeyError:
        raise ValidationError(
            f"Unknown activity level '{activity_level}', expected one of: {', '.join(ACTIVITY_MULTIPLIERS)}"
        )


def compute(data: BodyMetricsInput) -> BodyMetricsResult:
    """Compute BMI, BMR, TDEE and calorie targets for one person."""
    if data.height_cm <= 0 or data.weight_kg <= 0 or data.age_years <= 0:
        raise ValidationError("Height, weight and age must be positive")

    multiplier = activity_multiplier(data.activity_level)
    bmi = bmi_value(data.height_cm, data.weight_kg)
    bmr = basal_metabolic_rate(data.weight_kg, data.height_cm, data.age_years, data.sex)
    tdee = bmr * multiplier
    # bmi is rounded to one decimal, so it is scaled by 10 before flooring
    if not all(math.isfinite(v) for v in (bmi * 10, bmr, tdee)):
        raise ValidationError("Height, weight and age are out of range")

    return BodyMetricsResult(
        bmi=round_half_up(bmi, 1),
        category=bmi_category(bmi),
        bmr=int(round_half_up(bmr)),
        tdee=int(round_half_up(tdee)),
        recommendations=CalorieRecommendations(
            weight_loss=int(round_half_up(tdee - WEIGHT_LOSS_DEFICIT)),
            maintenance=int(round_half_up(tdee)),
            weight_gain=int(round_half_up(tdee + WEIGHT_GAIN_SURPLUS)),
        ),
    )
