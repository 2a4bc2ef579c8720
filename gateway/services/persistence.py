"""
gateway/services/persistence.py

Persists vitals readings and admin threshold overrides to the MySQL database.
Uses SQLAlchemy 2.0 async sessions.
"""

from datetime import datetime

import structlog
from pydantic import ValidationError
from sqlalchemy import select

from db.models import AsyncSessionLocal, VitalsRecord, VitalsRulesOverride
from gateway.schemas import VitalsPayload
from vitals.rules import DEFAULT_VITALS_RULES, VitalsRules

logger = structlog.get_logger(__name__)


def _to_float(value) -> float | None:
    return float(value) if value is not None else None


def record_to_payload(record: VitalsRecord) -> VitalsPayload:
    """Convert a stored row back into the gateway schema."""
    return VitalsPayload(
        patient_id=record.patient_id,
        appointment_id=record.appointment_id,
        recorded_at=record.recorded_at,
        bp_systolic=record.bp_systolic,
        bp_diastolic=record.bp_diastolic,
        spo2=_to_float(record.spo2),
        heart_rate=_to_float(record.heart_rate),
        temperature=_to_float(record.temperature),
        weight=_to_float(record.weight),
        bmi=_to_float(record.bmi),
        blood_sugar=_to_float(record.blood_sugar),
        allergies=record.allergies,
        conditions=record.conditions,
    )


async def persist_vitals(payload: VitalsPayload) -> None:
    """Insert a reading set into the vitals table."""
    try:
        async with AsyncSessionLocal() as session:
            record = VitalsRecord(
                patient_id=payload.patient_id,
                appointment_id=payload.appointment_id,
                recorded_at=payload.recorded_at or datetime.utcnow(),
                bp_systolic=payload.bp_systolic,
                bp_diastolic=payload.bp_diastolic,
                spo2=payload.spo2,
                heart_rate=payload.heart_rate,
                temperature=payload.temperature,
                weight=payload.weight,
                bmi=payload.bmi,
                blood_sugar=payload.blood_sugar,
                allergies=payload.allergies,
                conditions=payload.conditions,
            )
            session.add(record)
            await session.commit()
            logger.info(
                "vitals_persisted",
                patient_id=payload.patient_id,
                appointment_id=payload.appointment_id,
            )
    except Exception as exc:
        logger.error(
            "vitals_persist_failed",
            patient_id=payload.patient_id,
            error=str(exc),
        )
        raise


async def get_patient_vitals(patient_id: str, limit: int = 20) -> list[VitalsPayload]:
    """Return the newest reading sets for a patient, newest first."""
    try:
        async with AsyncSessionLocal() as session:
            result = await session.execute(
                select(VitalsRecord)
                .where(VitalsRecord.patient_id == patient_id)
                .order_by(VitalsRecord.recorded_at.desc())
                .limit(limit)
            )
            return [record_to_payload(row) for row in result.scalars().all()]
    except Exception as exc:
        logger.error(
            "vitals_query_failed",
            patient_id=patient_id,
            error=str(exc),
        )
        return []


async def load_vitals_rules() -> VitalsRules:
    """Return the latest saved rules override, or the built-in defaults."""
    try:
        async with AsyncSessionLocal() as session:
            result = await session.execute(
                select(VitalsRulesOverride.rules_json)
                .order_by(VitalsRulesOverride.id.desc())
                .limit(1)
            )
            rules_json = result.scalar_one_or_none()
    except Exception as exc:
        logger.warning(
            "vitals_rules_load_failed",
            error=str(exc),
            fallback="default_rules",
        )
        return DEFAULT_VITALS_RULES

    if rules_json is None:
        return DEFAULT_VITALS_RULES

    try:
        return VitalsRules.model_validate_json(rules_json)
    except ValidationError as exc:
        logger.warning(
            "vitals_rules_invalid",
            error=str(exc),
            fallback="default_rules",
        )
        return DEFAULT_VITALS_RULES


async def save_vitals_rules(rules: VitalsRules, updated_by: str | None = None) -> None:
    """Store a rules override; the newest row wins."""
    try:
        async with AsyncSessionLocal() as session:
            session.add(
                VitalsRulesOverride(
                    rules_json=rules.model_dump_json(by_alias=True),
                    updated_by=updated_by,
                )
            )
            await session.commit()
            logger.info("vitals_rules_saved", updated_by=updated_by)
    except Exception as exc:
        logger.error(
            "vitals_rules_save_failed",
            updated_by=updated_by,
            error=str(exc),
        )
        raise
