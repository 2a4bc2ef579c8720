"""
gateway/schemas.py

Pydantic data models for the gateway layer.
- VitalsPayload: one set of readings taken at a visit
- VitalsAssessment: per-vital severities produced by the evaluators
- EncounterData / AnalyticsRequest: inputs of the AI text endpoints
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from vitals.rules import VitalsRules
from vitals.severity import Severity


class VitalsPayload(BaseModel):
    """Readings captured by the front desk for one appointment."""

    model_config = ConfigDict(populate_by_name=True)

    patient_id: Optional[str] = Field(default=None, alias="patientId")
    appointment_id: Optional[str] = Field(default=None, alias="appointmentId")
    recorded_at: Optional[datetime] = Field(default=None, alias="recordedAt")
    bp_systolic: Optional[int] = Field(default=None, alias="bpSystolic")
    bp_diastolic: Optional[int] = Field(default=None, alias="bpDiastolic")
    spo2: Optional[float] = None
    heart_rate: Optional[float] = Field(default=None, alias="heartRate")
    temperature: Optional[float] = None  # °F
    weight: Optional[float] = None  # kg
    weight_change_percent: Optional[float] = Field(
        default=None, alias="weightChangePercent"
    )
    bmi: Optional[float] = None
    blood_sugar: Optional[float] = Field(default=None, alias="bloodSugar")  # mg/dL
    allergies: Optional[str] = None
    conditions: Optional[str] = None


class VitalsEvaluationRequest(BaseModel):
    """Readings plus an optional one-off rules override."""

    vitals: VitalsPayload
    rules: Optional[VitalsRules] = None


class VitalFinding(BaseModel):
    """Severity of a single vital sign."""

    vital: str
    reading: str
    severity: Severity
    token: str


class VitalsAssessment(BaseModel):
    """Result of evaluating every reading present in a VitalsPayload."""

    findings: list[VitalFinding]
    overall: Severity
    overall_token: str


class VitalsHistoryEntry(BaseModel):
    """A stored reading set together with its assessment."""

    vitals: VitalsPayload
    assessment: VitalsAssessment


class RulesPreview(BaseModel):
    """Rules as the admin screen would save them, plus any band problems."""

    rules: dict
    issues: list[str]


class EncounterVitals(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    blood_pressure: Optional[str] = Field(default=None, alias="bloodPressure")
    heart_rate: Optional[str] = Field(default=None, alias="heartRate")
    temperature: Optional[str] = None


class EncounterData(BaseModel):
    """Consultation details used to draft a SOAP note."""

    model_config = ConfigDict(populate_by_name=True)

    chief_complaint: Optional[str] = Field(default=None, alias="chiefComplaint")
    vitals: Optional[EncounterVitals] = None
    hpi: Optional[str] = None
    physical_exam: Optional[str] = Field(default=None, alias="physicalExam")


class SummarizeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    encounter_data: EncounterData = Field(alias="encounterData")


class PatientSummary(BaseModel):
    id: Optional[str] = None
    name: Optional[str] = None
    age: Optional[int] = None
    sex: Optional[str] = None


class PrescriptionSummary(BaseModel):
    drug: str
    dose: Optional[str] = None


class AnalyticsRequest(BaseModel):
    """Patient context for the health analytics narrative."""

    model_config = ConfigDict(populate_by_name=True)

    patient: PatientSummary = Field(default_factory=PatientSummary)
    allergies: list[str] = Field(default_factory=list)
    conditions: list[str] = Field(default_factory=list)
    recent_vitals: Optional[VitalsPayload] = Field(default=None, alias="recentVitals")
    vitals_history: list[VitalsPayload] = Field(
        default_factory=list, alias="vitalsHistory"
    )
    recent_prescriptions: list[PrescriptionSummary] = Field(
        default_factory=list, alias="recentPrescriptions"
    )
