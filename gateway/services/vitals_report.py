"""
gateway/services/vitals_report.py

Evaluates every reading in a VitalsPayload and aggregates the result.
Readings are formatted the way the doctor screens pass them to the
evaluators ("120/80", "98%"); absent readings are skipped.
"""

from typing import Callable

import structlog

from gateway.schemas import VitalFinding, VitalsAssessment, VitalsPayload
from vitals.evaluators import (
    evaluate_blood_sugar,
    evaluate_bmi,
    evaluate_bp,
    evaluate_heart_rate,
    evaluate_spo2,
    evaluate_temp,
    evaluate_weight_change,
)
from vitals.rules import DEFAULT_VITALS_RULES, VitalsRules
from vitals.severity import Severity, severity_to_token, worst

logger = structlog.get_logger(__name__)


def _fmt(value: float) -> str:
    """Render a number the way the UI interpolates it: no exponent, no rounding."""
    value = float(value)
    return str(int(value)) if value.is_integer() else repr(value)


def _finding(vital: str, reading: str, severity: Severity) -> VitalFinding:
    return VitalFinding(
        vital=vital,
        reading=reading,
        severity=severity,
        token=severity_to_token(severity),
    )


def assess_vitals(
    payload: VitalsPayload,
    rules: VitalsRules = DEFAULT_VITALS_RULES,
    *,
    fail_open: bool = True,
) -> VitalsAssessment:
    """Evaluate each present vital and compute the overall severity."""
    findings: list[VitalFinding] = []

    if payload.bp_systolic is not None and payload.bp_diastolic is not None:
        bp = f"{payload.bp_systolic}/{payload.bp_diastolic}"
        findings.append(
            _finding("bp", bp, evaluate_bp(bp, rules, fail_open=fail_open))
        )

    if payload.spo2 is not None:
        spo2 = f"{_fmt(payload.spo2)}%"
        findings.append(
            _finding("spo2", spo2, evaluate_spo2(spo2, rules, fail_open=fail_open))
        )

    numeric: list[tuple[str, float | None, Callable[..., Severity]]] = [
        ("heartRate", payload.heart_rate, evaluate_heart_rate),
        ("temperature", payload.temperature, evaluate_temp),
        ("bmi", payload.bmi, evaluate_bmi),
        ("bloodSugar", payload.blood_sugar, evaluate_blood_sugar),
    ]
    for vital, value, evaluator in numeric:
        if value is None:
            continue
        findings.append(
            _finding(vital, _fmt(value), evaluator(value, rules, fail_open=fail_open))
        )

    if payload.weight_change_percent is not None:
        findings.append(
            _finding(
                "weightChange",
                f"{payload.weight_change_percent:+g}%",
                evaluate_weight_change(
                    payload.weight_change_percent, fail_open=fail_open
                ),
            )
        )

    overall = worst(f.severity for f in findings)

    critical = [f.vital for f in findings if f.severity is Severity.CRITICAL]
    if critical:
        logger.info(
            "vitals_critical",
            patient_id=payload.patient_id,
            vitals=critical,
        )

    return VitalsAssessment(
        findings=findings,
        overall=overall,
        overall_token=severity_to_token(overall),
    )
