"""
gateway/routers/vitals.py

Vitals endpoints.
- POST /vitals/evaluate: severity of each reading, nothing stored
- POST /vitals: store a reading set and return its assessment
- GET /patients/{patient_id}/vitals: history with assessments
- GET/PUT /vitals/rules, POST /vitals/rules/preview: threshold configuration
"""

import structlog
from fastapi import APIRouter, HTTPException, Query

from config import settings
from gateway.schemas import (
    RulesPreview,
    VitalsAssessment,
    VitalsEvaluationRequest,
    VitalsHistoryEntry,
    VitalsPayload,
)
from gateway.services.persistence import (
    get_patient_vitals,
    load_vitals_rules,
    persist_vitals,
    save_vitals_rules,
)
from gateway.services.vitals_report import assess_vitals
from vitals.rules import VitalsRules, band_issues, has_inverted_band

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post("/vitals/evaluate", response_model=VitalsAssessment)
async def evaluate_vitals(request: VitalsEvaluationRequest) -> VitalsAssessment:
    """Evaluate readings against the supplied rules or the saved ones."""
    rules = request.rules or await load_vitals_rules()
    assessment = assess_vitals(request.vitals, rules)
    logger.info(
        "vitals_evaluated",
        patient_id=request.vitals.patient_id,
        overall=assessment.overall.value,
        rules_override=request.rules is not None,
    )
    return assessment


@router.post("/vitals", response_model=VitalsAssessment)
async def create_vitals(payload: VitalsPayload) -> VitalsAssessment:
    """
    Store a reading set captured at the front desk.

    Flow:
    1. Reject readings without a patient id
    2. Persist the record
    3. Return the assessment under the current rules
    """
    if not payload.patient_id:
        raise HTTPException(status_code=422, detail="patientId is required")

    try:
        await persist_vitals(payload)
    except Exception:
        raise HTTPException(status_code=500, detail="Failed to save vitals")

    rules = await load_vitals_rules()
    return assess_vitals(payload, rules)


@router.get(
    "/patients/{patient_id}/vitals", response_model=list[VitalsHistoryEntry]
)
async def patient_vitals(
    patient_id: str,
    limit: int = Query(default=settings.vitals_history_limit, gt=0, le=200),
) -> list[VitalsHistoryEntry]:
    """Return stored vitals for a patient, newest first."""
    history = await get_patient_vitals(patient_id, limit)
    rules = await load_vitals_rules()
    return [
        VitalsHistoryEntry(vitals=entry, assessment=assess_vitals(entry, rules))
        for entry in history
    ]


@router.get("/vitals/rules")
async def get_rules() -> dict:
    rules = await load_vitals_rules()
    return rules.to_wire()


@router.post("/vitals/rules/preview", response_model=RulesPreview)
async def preview_rules(rules: VitalsRules) -> RulesPreview:
    """Show how edited rules would be saved; nothing is persisted."""
    return RulesPreview(rules=rules.to_wire(), issues=band_issues(rules))


@router.put("/vitals/rules", response_model=RulesPreview)
async def put_rules(
    rules: VitalsRules,
    updated_by: str | None = Query(default=None, alias="updatedBy"),
) -> RulesPreview:
    """
    Save an admin rules override.

    Inverted bands are rejected; overlapping bands are saved and reported.
    """
    issues = band_issues(rules)
    if has_inverted_band(rules):
        logger.warning("vitals_rules_rejected", issues=issues)
        raise HTTPException(status_code=422, detail=issues)

    if issues:
        logger.warning("vitals_rules_overlap", issues=issues)

    try:
        await save_vitals_rules(rules, updated_by)
    except Exception:
        raise HTTPException(status_code=500, detail="Failed to save rules")

    return RulesPreview(rules=rules.to_wire(), issues=issues)
