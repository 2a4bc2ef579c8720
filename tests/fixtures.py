"""
tests/fixtures.py

Shared test data and helper functions for constructing test payloads.
All tests must use these fixtures instead of hardcoding test values.
"""

from datetime import datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

from gateway.schemas import AnalyticsRequest, EncounterData, VitalsPayload
from vitals.rules import Band, VitalsRules


def build_vitals(
    patient_id: str | None = "patient_001",
    recorded_at: datetime | None = None,
    bp_systolic: int | None = 118,
    bp_diastolic: int | None = 76,
    spo2: float | None = 98,
    heart_rate: float | None = 75,
    temperature: float | None = 98.2,
    weight: float | None = 70.0,
    weight_change_percent: float | None = None,
    bmi: float | None = 22.0,
    blood_sugar: float | None = 100,
) -> VitalsPayload:
    """Build a VitalsPayload that is Normal on every vital by default."""
    return VitalsPayload(
        patient_id=patient_id,
        appointment_id="appt_001",
        recorded_at=recorded_at or datetime(2024, 6, 15, 9, 30, 0),
        bp_systolic=bp_systolic,
        bp_diastolic=bp_diastolic,
        spo2=spo2,
        heart_rate=heart_rate,
        temperature=temperature,
        weight=weight,
        weight_change_percent=weight_change_percent,
        bmi=bmi,
        blood_sugar=blood_sugar,
    )


def build_history(weights: list[float], heart_rates: list[float]) -> list[VitalsPayload]:
    """One entry per day starting 2024-06-01, oldest first."""
    start = datetime(2024, 6, 1, 9, 0, 0)
    return [
        build_vitals(
            recorded_at=start + timedelta(days=day),
            weight=weight,
            heart_rate=hr,
        )
        for day, (weight, hr) in enumerate(zip(weights, heart_rates))
    ]


def build_shifted_rules() -> VitalsRules:
    """Rules with a tighter heart rate band and a wider glucose band."""
    return VitalsRules(
        heart_rate_normal=Band(min=65, max=90),
        heart_rate_warning=Band(min=55, max=64),
        heart_rate_critical_offset=10,
        blood_sugar_normal=Band(min=80, max=160),
        blood_sugar_warning=Band(min=161, max=200),
    )


def build_encounter() -> EncounterData:
    return EncounterData.model_validate(
        {
            "chiefComplaint": "Persistent cough",
            "vitals": {"bloodPressure": "128/84", "heartRate": "88", "temperature": "99.6"},
            "hpi": "Cough for 5 days, worse at night",
            "physicalExam": "Mild wheeze on auscultation",
        }
    )


def build_analytics_request(**overrides) -> AnalyticsRequest:
    data = {
        "patient": {"id": "patient_001", "name": "Test Patient", "age": 46, "sex": "F"},
        "allergies": ["Penicillin"],
        "conditions": ["Hypertension"],
        "recentVitals": build_vitals(bp_systolic=135, bp_diastolic=85).model_dump(),
        "recentPrescriptions": [{"drug": "Lisinopril", "dose": "10mg"}],
    }
    data.update(overrides)
    return AnalyticsRequest.model_validate(data)


def mock_session_factory(scalar=None, scalars: list | None = None) -> MagicMock:
    """
    Build a patched AsyncSessionLocal whose session returns the given rows.

    scalar feeds scalar_one_or_none(); scalars feeds scalars().all().
    """
    session = AsyncMock()
    result = MagicMock()
    result.scalar_one_or_none.return_value = scalar
    result.scalars.return_value.all.return_value = scalars or []
    session.execute = AsyncMock(return_value=result)
    session.add = MagicMock()
    session.__aenter__ = AsyncMock(return_value=session)
    session.__aexit__ = AsyncMock(return_value=False)
    return MagicMock(return_value=session)
