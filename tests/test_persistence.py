"""
tests/test_persistence.py

Unit tests for gateway/services/persistence.py.
All database sessions are mocked.
"""

from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock, patch

import pytest

from db.models import VitalsRecord
from tests.fixtures import build_shifted_rules, build_vitals, mock_session_factory
from vitals.rules import DEFAULT_VITALS_RULES


@pytest.mark.asyncio
async def test_persist_vitals_adds_and_commits() -> None:
    factory = mock_session_factory()
    with patch("gateway.services.persistence.AsyncSessionLocal", factory):
        from gateway.services.persistence import persist_vitals

        await persist_vitals(build_vitals())

    session = factory.return_value
    record = session.add.call_args.args[0]
    assert isinstance(record, VitalsRecord)
    assert record.patient_id == "patient_001"
    assert record.bp_systolic == 118
    session.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_persist_vitals_reraises_on_failure() -> None:
    factory = mock_session_factory()
    factory.return_value.commit = AsyncMock(side_effect=RuntimeError("db down"))
    with patch("gateway.services.persistence.AsyncSessionLocal", factory):
        from gateway.services.persistence import persist_vitals

        with pytest.raises(RuntimeError):
            await persist_vitals(build_vitals())


@pytest.mark.asyncio
async def test_get_patient_vitals_converts_rows() -> None:
    row = VitalsRecord(
        patient_id="patient_001",
        appointment_id="appt_001",
        recorded_at=datetime(2024, 6, 15, 9, 30),
        bp_systolic=130,
        bp_diastolic=85,
        spo2=Decimal("97.00"),
        heart_rate=Decimal("88.0"),
        blood_sugar=Decimal("150.0"),
    )
    factory = mock_session_factory(scalars=[row])
    with patch("gateway.services.persistence.AsyncSessionLocal", factory):
        from gateway.services.persistence import get_patient_vitals

        history = await get_patient_vitals("patient_001")

    assert len(history) == 1
    assert history[0].spo2 == 97.0
    assert history[0].blood_sugar == 150.0
    assert history[0].temperature is None


@pytest.mark.asyncio
async def test_get_patient_vitals_degrades_on_failure() -> None:
    factory = mock_session_factory()
    factory.return_value.execute = AsyncMock(side_effect=RuntimeError("db down"))
    with patch("gateway.services.persistence.AsyncSessionLocal", factory):
        from gateway.services.persistence import get_patient_vitals

        assert await get_patient_vitals("patient_001") == []


@pytest.mark.asyncio
async def test_load_vitals_rules_defaults_when_nothing_saved() -> None:
    with patch(
        "gateway.services.persistence.AsyncSessionLocal", mock_session_factory()
    ):
        from gateway.services.persistence import load_vitals_rules

        assert await load_vitals_rules() is DEFAULT_VITALS_RULES


@pytest.mark.asyncio
async def test_load_vitals_rules_returns_saved_override() -> None:
    saved = build_shifted_rules()
    factory = mock_session_factory(scalar=saved.model_dump_json(by_alias=True))
    with patch("gateway.services.persistence.AsyncSessionLocal", factory):
        from gateway.services.persistence import load_vitals_rules

        assert await load_vitals_rules() == saved


@pytest.mark.asyncio
async def test_load_vitals_rules_ignores_corrupt_row() -> None:
    factory = mock_session_factory(scalar='{"spo2Normal": "high"}')
    with patch("gateway.services.persistence.AsyncSessionLocal", factory):
        from gateway.services.persistence import load_vitals_rules

        assert await load_vitals_rules() is DEFAULT_VITALS_RULES


@pytest.mark.asyncio
async def test_save_vitals_rules_stores_camel_case_json() -> None:
    factory = mock_session_factory()
    with patch("gateway.services.persistence.AsyncSessionLocal", factory):
        from gateway.services.persistence import save_vitals_rules

        await save_vitals_rules(build_shifted_rules(), updated_by="admin")

    stored = factory.return_value.add.call_args.args[0]
    assert '"heartRateNormal"' in stored.rules_json
    assert stored.updated_by == "admin"
