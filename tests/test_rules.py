"""
tests/test_rules.py

Unit tests for vitals/rules.py and vitals/severity.py.
"""

import pytest
from pydantic import ValidationError

from vitals.rules import (
    DEFAULT_VITALS_RULES,
    Band,
    VitalsRules,
    band_issues,
    default_vitals_rules,
    has_inverted_band,
)
from vitals.severity import (
    Severity,
    severity_to_classes,
    severity_to_token,
    worst,
)


def test_default_rules_match_admin_defaults() -> None:
    wire = default_vitals_rules().to_wire()

    assert wire["bpSystolicNormal"] == {"min": 90, "max": 120}
    assert wire["bpSystolicWarning"] == {"min": 121, "max": 139}
    assert wire["bpDiastolicNormal"] == {"min": 60, "max": 80}
    assert wire["bpDiastolicWarning"] == {"min": 81, "max": 89}
    assert wire["spo2Normal"] == {"min": 95, "max": 100}
    assert wire["spo2Warning"] == {"min": 90, "max": 94}
    assert wire["heartRateNormal"] == {"min": 60, "max": 100}
    assert wire["heartRateWarning"] == {"min": 50, "max": 59}
    assert wire["tempNormal"] == {"min": 97.0, "max": 99.0}
    assert wire["tempWarning"] == {"min": 99.1, "max": 100.4}
    assert wire["bmiNormal"] == {"min": 18.5, "max": 24.9}
    assert wire["bmiWarning"] == {"min": 25, "max": 29.9}
    assert wire["bloodSugarNormal"] == {"min": 70, "max": 140}
    assert wire["bloodSugarWarning"] == {"min": 141, "max": 180}
    assert wire["heartRateCriticalOffset"] == 20
    assert wire["tempCriticalOffset"] == 1.0


def test_rules_are_immutable() -> None:
    with pytest.raises(ValidationError):
        DEFAULT_VITALS_RULES.spo2_normal = Band(min=0, max=1)


def test_rules_accept_camel_case_json() -> None:
    rules = VitalsRules.model_validate_json(
        '{"spo2Normal": {"min": 96, "max": 100}, "spo2Warning": {"min": 92, "max": 95}}'
    )
    assert rules.spo2_normal.min == 96
    assert rules.spo2_warning.max == 95
    assert rules.heart_rate_normal == DEFAULT_VITALS_RULES.heart_rate_normal


def test_with_overrides_returns_new_instance() -> None:
    edited = DEFAULT_VITALS_RULES.with_overrides(temp_normal={"min": 97.5, "max": 99.5})

    assert edited.temp_normal == Band(min=97.5, max=99.5)
    assert DEFAULT_VITALS_RULES.temp_normal == Band(min=97.0, max=99.0)


def test_negative_offset_rejected() -> None:
    with pytest.raises(ValidationError):
        VitalsRules(heart_rate_critical_offset=-5)


def test_default_rules_have_no_issues() -> None:
    assert band_issues(DEFAULT_VITALS_RULES) == []
    assert not has_inverted_band(DEFAULT_VITALS_RULES)


def test_band_issues_reports_overlap_and_inversion() -> None:
    rules = VitalsRules(
        heart_rate_normal=Band(min=60, max=100),
        heart_rate_warning=Band(min=55, max=65),
        blood_sugar_normal=Band(min=140, max=70),
    )
    issues = band_issues(rules)

    assert "heartRateNormal overlaps heartRateWarning" in issues
    assert any(issue.startswith("bloodSugarNormal is inverted") for issue in issues)
    assert has_inverted_band(rules)


@pytest.mark.parametrize(
    ("severity", "token"),
    [
        (Severity.NORMAL, "success"),
        (Severity.WARNING, "alert"),
        (Severity.CRITICAL, "critical"),
        (Severity.UNKNOWN, "neutral"),
        ("warning", "alert"),
        ("bogus", "neutral"),
        (None, "neutral"),
        (3, "neutral"),
    ],
)
def test_severity_to_token(severity, token: str) -> None:
    assert severity_to_token(severity) == token


def test_severity_to_classes() -> None:
    assert severity_to_classes(Severity.CRITICAL) == "text-action-delete font-bold"
    assert severity_to_classes("nope") == "text-foreground"


def test_severity_ordering() -> None:
    assert Severity.UNKNOWN < Severity.NORMAL < Severity.WARNING < Severity.CRITICAL
    assert Severity.UNKNOWN.collapse() is Severity.NORMAL
    assert Severity.WARNING.collapse() is Severity.WARNING


def test_worst() -> None:
    assert worst([]) is Severity.NORMAL
    assert worst([Severity.NORMAL, Severity.CRITICAL, Severity.WARNING]) is Severity.CRITICAL
    assert worst([Severity.UNKNOWN, Severity.WARNING]) is Severity.WARNING
