"""
vitals/severity.py

Severity scale produced by the evaluators and its presentation tokens.
"""

from enum import Enum
from typing import Iterable


class Severity(str, Enum):
    """Clinical urgency of a single reading."""

    UNKNOWN = "unknown"  # reading could not be parsed
    NORMAL = "normal"
    WARNING = "warning"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _RANK[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank >= other.rank

    def collapse(self) -> "Severity":
        """Fold UNKNOWN into NORMAL (fail-open view)."""
        return Severity.NORMAL if self is Severity.UNKNOWN else self


_RANK: dict[Severity, int] = {
    Severity.UNKNOWN: -1,
    Severity.NORMAL: 0,
    Severity.WARNING: 1,
    Severity.CRITICAL: 2,
}

_TOKENS: dict[Severity, str] = {
    Severity.NORMAL: "success",
    Severity.WARNING: "alert",
    Severity.CRITICAL: "critical",
}
NEUTRAL_TOKEN: str = "neutral"

_CLASSES: dict[Severity, str] = {
    Severity.NORMAL: "text-success font-semibold",
    Severity.WARNING: "text-alert font-semibold",
    Severity.CRITICAL: "text-action-delete font-bold",
}
NEUTRAL_CLASSES: str = "text-foreground"


def _coerce(severity: object) -> Severity | None:
    if isinstance(severity, Severity):
        return severity
    if isinstance(severity, str):
        try:
            return Severity(severity.lower())
        except ValueError:
            return None
    return None


def severity_to_token(severity: object) -> str:
    """Map a severity to its display token; unknown input maps to "neutral"."""
    return _TOKENS.get(_coerce(severity), NEUTRAL_TOKEN)


def severity_to_classes(severity: object) -> str:
    """CSS classes used by the clinic UI for a severity."""
    return _CLASSES.get(_coerce(severity), NEUTRAL_CLASSES)


def worst(severities: Iterable[Severity]) -> Severity:
    """Most urgent severity; NORMAL when nothing was evaluated."""
    return max(severities, default=Severity.NORMAL, key=lambda s: s.rank)
