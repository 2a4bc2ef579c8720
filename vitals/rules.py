"""
vitals/rules.py

Admin-configurable threshold bands for every vital sign.
- Band: an inclusive {min, max} range
- VitalsRules: one normal and one warning band per vital, plus the
  critical offsets for heart rate and temperature

Both models are frozen: evaluators receive them read-only and an admin
edit always produces a new instance.
"""

from pydantic import BaseModel, ConfigDict, Field

from vitals.constants import HEART_RATE_CRITICAL_OFFSET, TEMP_CRITICAL_OFFSET_F


class Band(BaseModel):
    """Inclusive numeric range."""

    model_config = ConfigDict(frozen=True)

    min: float
    max: float

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max

    @property
    def inverted(self) -> bool:
        return self.min > self.max

    def overlaps(self, other: "Band") -> bool:
        return self.min <= other.max and other.min <= self.max


class VitalsRules(BaseModel):
    """Normal and warning bands per vital sign (camelCase on the wire)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    bp_systolic_normal: Band = Field(
        default=Band(min=90, max=120), alias="bpSystolicNormal"
    )
    bp_systolic_warning: Band = Field(
        default=Band(min=121, max=139), alias="bpSystolicWarning"
    )
    bp_diastolic_normal: Band = Field(
        default=Band(min=60, max=80), alias="bpDiastolicNormal"
    )
    bp_diastolic_warning: Band = Field(
        default=Band(min=81, max=89), alias="bpDiastolicWarning"
    )
    spo2_normal: Band = Field(default=Band(min=95, max=100), alias="spo2Normal")
    spo2_warning: Band = Field(default=Band(min=90, max=94), alias="spo2Warning")
    heart_rate_normal: Band = Field(
        default=Band(min=60, max=100), alias="heartRateNormal"
    )
    heart_rate_warning: Band = Field(
        default=Band(min=50, max=59), alias="heartRateWarning"
    )
    temp_normal: Band = Field(default=Band(min=97.0, max=99.0), alias="tempNormal")
    temp_warning: Band = Field(
        default=Band(min=99.1, max=100.4), alias="tempWarning"
    )
    bmi_normal: Band = Field(default=Band(min=18.5, max=24.9), alias="bmiNormal")
    bmi_warning: Band = Field(default=Band(min=25, max=29.9), alias="bmiWarning")
    blood_sugar_normal: Band = Field(
        default=Band(min=70, max=140), alias="bloodSugarNormal"
    )
    blood_sugar_warning: Band = Field(
        default=Band(min=141, max=180), alias="bloodSugarWarning"
    )

    # Upper critical cutoff = heartRateNormal.max + offset
    heart_rate_critical_offset: float = Field(
        default=HEART_RATE_CRITICAL_OFFSET, ge=0, alias="heartRateCriticalOffset"
    )
    # Lower critical cutoff = tempNormal.min - offset
    temp_critical_offset: float = Field(
        default=TEMP_CRITICAL_OFFSET_F, ge=0, alias="tempCriticalOffset"
    )

    def with_overrides(self, **changes: object) -> "VitalsRules":
        """Return an edited copy; keys may be snake_case or camelCase."""
        by_alias = {
            info.alias: name for name, info in VitalsRules.model_fields.items() if info.alias
        }
        data = self.model_dump()
        for key, value in changes.items():
            data[by_alias.get(key, key)] = value
        return VitalsRules.model_validate(data)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


DEFAULT_VITALS_RULES = VitalsRules()

# (vital label, normal field, warning field)
_BAND_PAIRS: tuple[tuple[str, str, str], ...] = (
    ("bpSystolic", "bp_systolic_normal", "bp_systolic_warning"),
    ("bpDiastolic", "bp_diastolic_normal", "bp_diastolic_warning"),
    ("spo2", "spo2_normal", "spo2_warning"),
    ("heartRate", "heart_rate_normal", "heart_rate_warning"),
    ("temp", "temp_normal", "temp_warning"),
    ("bmi", "bmi_normal", "bmi_warning"),
    ("bloodSugar", "blood_sugar_normal", "blood_sugar_warning"),
)


def default_vitals_rules() -> VitalsRules:
    """Return the built-in rules instance."""
    return DEFAULT_VITALS_RULES


def band_issues(rules: VitalsRules) -> list[str]:
    """
    List configuration problems without rejecting the rules.

    Inverted bands (min > max) and normal/warning overlaps are both legal
    for the evaluators; callers decide whether to accept them.
    """
    issues: list[str] = []
    for label, normal_field, warning_field in _BAND_PAIRS:
        normal: Band = getattr(rules, normal_field)
        warning: Band = getattr(rules, warning_field)
        if normal.inverted:
            issues.append(f"{label}Normal is inverted (min {normal.min} > max {normal.max})")
        if warning.inverted:
            issues.append(f"{label}Warning is inverted (min {warning.min} > max {warning.max})")
        if not normal.inverted and not warning.inverted and normal.overlaps(warning):
            issues.append(f"{label}Normal overlaps {label}Warning")
    return issues


def has_inverted_band(rules: VitalsRules) -> bool:
    return any(
        getattr(rules, field).inverted
        for _, normal_field, warning_field in _BAND_PAIRS
        for field in (normal_field, warning_field)
    )
