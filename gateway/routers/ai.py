"""
gateway/routers/ai.py

AI text endpoints used by the doctor screens.
- POST /ai/summarize: SOAP note draft
- POST /ai/analytics: health analytics narrative
"""

import structlog
from fastapi import APIRouter, HTTPException

from gateway.schemas import AnalyticsRequest, SummarizeRequest
from gateway.services.persistence import load_vitals_rules
from gateway.services.text_generation import (
    TextGenerationError,
    generate_health_analysis,
    generate_soap_note,
)
from gateway.services.trends import summarize_trends
from gateway.services.vitals_report import assess_vitals

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/ai")


@router.post("/summarize")
async def summarize(request: SummarizeRequest) -> dict[str, str]:
    try:
        note = await generate_soap_note(request.encounter_data)
    except TextGenerationError:
        raise HTTPException(status_code=502, detail="Failed to generate summary")
    return {"soapNote": note}


@router.post("/analytics")
async def analytics(request: AnalyticsRequest) -> dict[str, str]:
    """
    Generate a narrative from patient context.

    Recent vitals are annotated with their severity under the saved rules,
    and the history (if any) is reduced to per-vital trends first.
    """
    assessment = None
    if request.recent_vitals is not None:
        rules = await load_vitals_rules()
        assessment = assess_vitals(request.recent_vitals, rules)

    trends = summarize_trends(request.vitals_history)

    logger.info(
        "analytics_requested",
        patient_id=request.patient.id,
        overall=assessment.overall.value if assessment else None,
        trend_count=len(trends),
    )

    try:
        analysis = await generate_health_analysis(request, assessment, trends)
    except TextGenerationError:
        raise HTTPException(status_code=502, detail="Failed to generate analysis")
    return {"analysis": analysis}
