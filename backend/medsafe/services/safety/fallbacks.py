"""
Tracks where an analysis run substituted local data for a failed source.
"""

import logging
from typing import List

logger = logging.getLogger(__name__)


class FallbackTracker:
    """Collects fallback reasons for one analysis run; any entry makes the run partial."""

    def __init__(self):
        self.reasons: List[str] = []

    def record(self, reason: str) -> None:
        logger.warning(f"Falling back to local data: {reason}")
        if reason not in self.reasons:
            self.reasons.append(reason)

    @property
    def degraded(self) -> bool:
        return bool(self.reasons)
