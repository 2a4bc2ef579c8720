"""
gateway/services/text_generation.py

Thin wrapper around Gemini for the clinic's AI text endpoints.
- SOAP note drafting from consultation data
- Health analytics narrative from patient context, vitals severities and trends

The model is treated as an opaque prompt -> text collaborator.
"""

import structlog
from langchain_google_genai import ChatGoogleGenerativeAI

from config import settings
from gateway.schemas import AnalyticsRequest, EncounterData, VitalsAssessment

logger = structlog.get_logger(__name__)

SOAP_SYSTEM_PROMPT = """
You are a clinical documentation assistant. Generate a concise SOAP note
from the encounter data. Use the headings Subjective, Objective, Assessment
and Plan. Keep it concise and professional.
"""

ANALYTICS_SYSTEM_PROMPT = """
You are a clinical decision support assistant. Return a concise, clinically
helpful narrative covering: current condition overview, notable risks, trend
observations, and suggested next steps suitable for primary care
(family/peds/OB-GYN). Avoid PII beyond the provided name.
"""


class TextGenerationError(Exception):
    """Raised when the language model call fails or returns nothing."""


def build_soap_prompt(encounter: EncounterData) -> str:
    """Build the user prompt for SOAP note drafting."""
    vitals = encounter.vitals
    bp = (vitals.blood_pressure if vitals else None) or "N/A"
    hr = (vitals.heart_rate if vitals else None) or "N/A"
    temp = (vitals.temperature if vitals else None) or "N/A"
    parts = [
        f"Patient Chief Complaint: {encounter.chief_complaint or 'Not provided'}",
        f"Vital Signs: BP {bp}, HR {hr}, Temp {temp}",
        f"History of Present Illness: {encounter.hpi or 'Not provided'}",
        f"Physical Exam Findings: {encounter.physical_exam or 'Not provided'}",
    ]
    return "\n".join(parts)


def build_analytics_prompt(
    request: AnalyticsRequest,
    assessment: VitalsAssessment | None = None,
    trends: dict[str, float] | None = None,
) -> str:
    """Build the user prompt for the analytics narrative."""
    patient = request.patient
    parts = [
        "Patient:",
        f"- ID: {patient.id or 'N/A'}",
        f"- Name: {patient.name or 'N/A'}",
        f"- Age: {patient.age if patient.age is not None else 'N/A'}",
        f"- Sex: {patient.sex or 'N/A'}",
        "",
        f"Allergies: {', '.join(request.allergies) or 'None reported'}",
        f"Conditions: {', '.join(request.conditions) or 'None reported'}",
        "",
        "Recent Vitals:",
    ]

    if assessment and assessment.findings:
        parts.extend(
            f"- {f.vital}: {f.reading} ({f.severity.value})" for f in assessment.findings
        )
    else:
        parts.append("- None recorded")

    if trends:
        parts.append("")
        parts.append("Trends:")
        parts.extend(f"- {name}: {value}" for name, value in sorted(trends.items()))

    parts.append("")
    parts.append("Recent Prescriptions:")
    if request.recent_prescriptions:
        parts.extend(
            f"- {p.drug}" + (f" ({p.dose})" if p.dose else "")
            for p in request.recent_prescriptions
        )
    else:
        parts.append("- None")

    return "\n".join(parts)


async def generate_text(
    system_prompt: str,
    user_prompt: str,
    *,
    max_tokens: int,
    temperature: float | None = None,
) -> str:
    """Invoke Gemini and return the stripped response text."""
    try:
        llm = ChatGoogleGenerativeAI(
            model=settings.llm_model,
            google_api_key=settings.google_api_key,
            max_output_tokens=max_tokens,
            temperature=settings.llm_temperature if temperature is None else temperature,
        )

        messages = [
            ("system", system_prompt),
            ("human", user_prompt),
        ]

        response = await llm.ainvoke(messages)
        text = str(response.content).strip()
    except Exception as exc:
        logger.error(
            "llm_call_failed",
            model=settings.llm_model,
            error=str(exc),
        )
        raise TextGenerationError(str(exc)) from exc

    if not text:
        logger.error("llm_empty_response", model=settings.llm_model)
        raise TextGenerationError("empty response")

    logger.info(
        "llm_call_complete",
        model=settings.llm_model,
        response_length=len(text),
    )
    return text


async def generate_soap_note(encounter: EncounterData) -> str:
    return await generate_text(
        SOAP_SYSTEM_PROMPT,
        build_soap_prompt(encounter),
        max_tokens=settings.soap_note_max_tokens,
    )


async def generate_health_analysis(
    request: AnalyticsRequest,
    assessment: VitalsAssessment | None = None,
    trends: dict[str, float] | None = None,
) -> str:
    return await generate_text(
        ANALYTICS_SYSTEM_PROMPT,
        build_analytics_prompt(request, assessment, trends),
        max_tokens=settings.analytics_max_tokens,
    )
