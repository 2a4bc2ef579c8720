"""
vitals/constants.py

Fixed clinical constants used by the vitals evaluators.
Values that are not part of the admin-editable VitalsRules live here;
magic numbers in evaluator logic are not allowed.
"""

# ── BMI critical bounds (kg/m²) ──────────────────────────────
# Fixed on purpose: evaluate_bmi only reads its warning band from
# VitalsRules. Making these configurable changes live clinical alerts.
BMI_CRITICAL_LOW: float = 18.5
BMI_CRITICAL_HIGH: float = 30.0  # inclusive

# ── Weight change thresholds (% of previous weight) ──────────
# Not part of VitalsRules for the same reason as the BMI bounds.
WEIGHT_CHANGE_WARNING_PCT: float = 5.0
WEIGHT_CHANGE_CRITICAL_PCT: float = 10.0

# ── Default critical offsets beyond the normal band ──────────
HEART_RATE_CRITICAL_OFFSET: float = 20.0  # bpm above heartRateNormal.max
TEMP_CRITICAL_OFFSET_F: float = 1.0  # °F below tempNormal.min
