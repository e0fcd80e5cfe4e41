"""
Severity classification of free-text interaction descriptions.

Trigger terms live in plain tuples so they can be extended without touching
the classification logic. Major triggers always win over moderate ones.
"""

from typing import Iterable, Optional, Sequence, Tuple

from .models import Severity

MAJOR_TRIGGERS: Tuple[str, ...] = (
    "contraindicated",
    "avoid",
    "severe",
    "fatal",
    "death",
    "warning",
    "dangerous",
    "life-threatening",
    "serious",
    "hemorrhage",
)

MODERATE_TRIGGERS: Tuple[str, ...] = (
    "caution",
    "monitor",
    "adjust",
    "may affect",
    "potential",
    "may increase",
    "may decrease",
    "bleeding",
)

# Checked in order; first tier with a matching trigger wins.
SEVERITY_TIERS: Sequence[Tuple[Severity, Tuple[str, ...]]] = (
    (Severity.MAJOR, MAJOR_TRIGGERS),
    (Severity.MODERATE, MODERATE_TRIGGERS),
)


def contains_any(text: str, terms: Iterable[str]) -> bool:
    """True when the lower-cased text contains any of the terms."""
    return any(term in text for term in terms)


def classify_severity(
    description: Optional[str],
    tiers: Sequence[Tuple[Severity, Tuple[str, ...]]] = SEVERITY_TIERS,
) -> Severity:
    """Map an interaction description to minor / moderate / major."""
    text = (description or "").lower()
    if not text.strip():
        return Severity.MINOR

    for severity, triggers in tiers:
        if contains_any(text, triggers):
            return severity
    return Severity.MINOR
