"""
vitals/evaluators.py

Per-vital severity evaluators.

Every evaluator is a pure, total function: it never raises and never
mutates the rules it receives. Unparseable readings are fail-open and
come back as Severity.NORMAL; pass fail_open=False to get
Severity.UNKNOWN instead so missing data can be told apart from a
healthy reading.

Uses thresholds from vitals/rules.py and fixed values from
vitals/constants.py; no magic numbers allowed.
"""

import math
import re

from vitals.constants import (
    BMI_CRITICAL_HIGH,
    BMI_CRITICAL_LOW,
    WEIGHT_CHANGE_CRITICAL_PCT,
    WEIGHT_CHANGE_WARNING_PCT,
)
from vitals.rules import DEFAULT_VITALS_RULES, VitalsRules
from vitals.severity import Severity

_BP_PATTERN = re.compile(r"([0-9]+)/([0-9]+)")
_LEADING_INT_PATTERN = re.compile(r"^\s*([+-]?[0-9]+)")

Reading = str | int | float | None


def _to_number(value: Reading) -> float | None:
    """Coerce a loosely typed reading to a float; None if it is not a number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            # int beyond float range
            return math.inf if value > 0 else -math.inf
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return None if math.isnan(number) else number


def _unparsed(fail_open: bool) -> Severity:
    return Severity.NORMAL if fail_open else Severity.UNKNOWN


def _digits_to_number(digits: str) -> float:
    """Parse an ASCII digit run; runs past the float range give inf."""
    return float(digits)


def parse_bp(reading: Reading) -> tuple[float, float] | None:
    """Extract (systolic, diastolic) from a "<sys>/<dia>" string."""
    if not isinstance(reading, str):
        return None
    match = _BP_PATTERN.search(reading)
    if match is None:
        return None
    return _digits_to_number(match.group(1)), _digits_to_number(match.group(2))


def parse_spo2(reading: Reading) -> float | None:
    """Read a saturation like "98%" or 98; strings keep the leading integer only."""
    if isinstance(reading, str):
        match = _LEADING_INT_PATTERN.match(reading.replace("%", "", 1))
        return _digits_to_number(match.group(1)) if match else None
    return _to_number(reading)


def evaluate_bp(
    reading: Reading,
    rules: VitalsRules = DEFAULT_VITALS_RULES,
    *,
    fail_open: bool = True,
) -> Severity:
    """
    Evaluate a blood pressure string such as "120/80".

    CRITICAL when either value leaves [normal.min, warning.max],
    WARNING when either value sits in its warning band.
    """
    parsed = parse_bp(reading)
    if parsed is None:
        return _unparsed(fail_open)
    systolic, diastolic = parsed

    if (
        systolic < rules.bp_systolic_normal.min
        or systolic > rules.bp_systolic_warning.max
        or diastolic < rules.bp_diastolic_normal.min
        or diastolic > rules.bp_diastolic_warning.max
    ):
        return Severity.CRITICAL

    if rules.bp_systolic_warning.contains(systolic) or rules.bp_diastolic_warning.contains(
        diastolic
    ):
        return Severity.WARNING

    return Severity.NORMAL


def evaluate_spo2(
    reading: Reading,
    rules: VitalsRules = DEFAULT_VITALS_RULES,
    *,
    fail_open: bool = True,
) -> Severity:
    """
    Evaluate oxygen saturation ("98%" or 98).

    Only low saturation is a risk; there is no upper bound check.
    """
    value = parse_spo2(reading)
    if value is None:
        return _unparsed(fail_open)

    if value < rules.spo2_warning.min:
        return Severity.CRITICAL
    if value < rules.spo2_normal.min:
        return Severity.WARNING
    return Severity.NORMAL


def evaluate_heart_rate(
    reading: Reading,
    rules: VitalsRules = DEFAULT_VITALS_RULES,
    *,
    fail_open: bool = True,
) -> Severity:
    """Evaluate heart rate in bpm."""
    value = _to_number(reading)
    if value is None:
        return _unparsed(fail_open)

    upper_critical = rules.heart_rate_normal.max + rules.heart_rate_critical_offset
    if value < rules.heart_rate_warning.min or value > upper_critical:
        return Severity.CRITICAL
    if (
        rules.heart_rate_warning.min <= value < rules.heart_rate_normal.min
        or rules.heart_rate_normal.max < value <= upper_critical
    ):
        return Severity.WARNING
    return Severity.NORMAL


def evaluate_temp(
    reading: Reading,
    rules: VitalsRules = DEFAULT_VITALS_RULES,
    *,
    fail_open: bool = True,
) -> Severity:
    """Evaluate body temperature in °F."""
    value = _to_number(reading)
    if value is None:
        return _unparsed(fail_open)

    lower_critical = rules.temp_normal.min - rules.temp_critical_offset
    if value < lower_critical or value > rules.temp_warning.max:
        return Severity.CRITICAL
    if (
        lower_critical <= value < rules.temp_normal.min
        or rules.temp_normal.max < value <= rules.temp_warning.max
    ):
        return Severity.WARNING
    return Severity.NORMAL


def evaluate_weight_change(
    change_percent: Reading,
    *,
    fail_open: bool = True,
) -> Severity:
    """
    Evaluate a signed weight change in percent.

    Thresholds are fixed constants; VitalsRules has no weight bands.
    """
    value = _to_number(change_percent)
    if value is None:
        return _unparsed(fail_open)

    if abs(value) > WEIGHT_CHANGE_CRITICAL_PCT:
        return Severity.CRITICAL
    if abs(value) > WEIGHT_CHANGE_WARNING_PCT:
        return Severity.WARNING
    return Severity.NORMAL


def evaluate_bmi(
    reading: Reading,
    rules: VitalsRules = DEFAULT_VITALS_RULES,
    *,
    fail_open: bool = True,
) -> Severity:
    """
    Evaluate body mass index.

    Critical bounds come from vitals/constants.py, not from rules; only
    the warning decision reads the configured bands.
    """
    value = _to_number(reading)
    if value is None:
        return _unparsed(fail_open)

    if value < BMI_CRITICAL_LOW or value >= BMI_CRITICAL_HIGH:
        return Severity.CRITICAL
    if rules.bmi_warning.contains(value) or value < rules.bmi_normal.min:
        return Severity.WARNING
    return Severity.NORMAL


def evaluate_blood_sugar(
    reading: Reading,
    rules: VitalsRules = DEFAULT_VITALS_RULES,
    *,
    fail_open: bool = True,
) -> Severity:
    """Evaluate blood glucose in mg/dL."""
    value = _to_number(reading)
    if value is None:
        return _unparsed(fail_open)

    if value < rules.blood_sugar_normal.min or value > rules.blood_sugar_warning.max:
        return Severity.CRITICAL
    if rules.blood_sugar_warning.contains(value):
        return Severity.WARNING
    return Severity.NORMAL
