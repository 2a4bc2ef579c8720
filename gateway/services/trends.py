"""
gateway/services/trends.py

Trend helpers over a patient's vitals history.
- weight_change_percent: signed change used by evaluate_weight_change
- vital_slope: least-squares slope per day for one vital
- summarize_trends: both of the above for the analytics narrative
"""

from datetime import datetime, timezone

import numpy as np

from gateway.schemas import VitalsPayload

# Minimum points before a slope is reported
MIN_TREND_POINTS: int = 3

_TREND_FIELDS: tuple[str, ...] = (
    "bp_systolic",
    "bp_diastolic",
    "spo2",
    "heart_rate",
    "temperature",
    "weight",
    "bmi",
    "blood_sugar",
)


def _as_utc(ts: datetime) -> datetime:
    """Naive timestamps are taken as UTC so they sort with offset-aware ones."""
    return ts if ts.tzinfo else ts.replace(tzinfo=timezone.utc)


def weight_change_percent(previous: float | None, current: float | None) -> float | None:
    """Signed % change from previous to current weight."""
    if previous is None or current is None or previous == 0:
        return None
    return (current - previous) / previous * 100.0


def vital_slope(points: list[tuple[datetime, float]]) -> float | None:
    """Slope in units per day, or None when the history is too short."""
    if len(points) < MIN_TREND_POINTS:
        return None
    ordered = sorted(((_as_utc(ts), value) for ts, value in points), key=lambda p: p[0])
    start = ordered[0][0]
    days = [(ts - start).total_seconds() / 86400.0 for ts, _ in ordered]
    if days[-1] <= 0:
        return None
    values = [value for _, value in ordered]
    return float(np.polyfit(days, values, 1)[0])


def summarize_trends(history: list[VitalsPayload]) -> dict[str, float]:
    """
    Compute per-vital slopes and the latest weight change.

    Entries without recorded_at are ignored for slopes.
    """
    dated = sorted(
        (entry for entry in history if entry.recorded_at is not None),
        key=lambda entry: _as_utc(entry.recorded_at),
    )
    trends: dict[str, float] = {}

    for field in _TREND_FIELDS:
        points = [
            (entry.recorded_at, float(getattr(entry, field)))
            for entry in dated
            if getattr(entry, field) is not None
        ]
        slope = vital_slope(points)
        if slope is not None:
            trends[f"{field}_per_day"] = round(slope, 3)

    weights = [entry.weight for entry in dated if entry.weight is not None]
    if len(weights) >= 2:
        change = weight_change_percent(weights[-2], weights[-1])
        if change is not None:
            trends["weight_change_percent"] = round(change, 2)

    return trends
