"""
Interaction Checker - pairwise medication interaction lookup.

For every unordered pair of medications the openFDA strategy chain is run;
label text found for a pair is classified and summarised into an
InteractionRecord. Pairs with no label text produce no record.
"""

import logging
from typing import Iterator, List, Optional, Sequence

from medsafe.services.sources.openfda_client import OpenFDAClient
from medsafe.services.sources.search_strategies import DEFAULT_STRATEGIES, Strategy, first_success
from .models import InteractionCheckResult, InteractionRecord, MedicationPair
from .severity_classifier import classify_severity
from .text_extractor import extract_guidance

logger = logging.getLogger(__name__)

INCOMPLETE_CHECK_WARNING = (
    "Could not check all medication interactions. Some results may be missing; "
    "please verify with your pharmacist."
)


def medication_pairs(medications: Sequence[str]) -> Iterator[MedicationPair]:
    """Yield each unordered pair (i < j) once, skipping blank names."""
    names = [name.strip() if name else "" for name in medications]
    for i in range(len(names)):
        if not names[i]:
            continue
        for j in range(i + 1, len(names)):
            if not names[j]:
                continue
            yield MedicationPair(drug_a=names[i], drug_b=names[j])


def build_interaction_record(drug1: str, drug2: str, text: str, source: str) -> InteractionRecord:
    """Classify label text and extract patient guidance for one pair."""
    severity = classify_severity(text)
    guidance = extract_guidance(text, drug1, drug2, severity)
    return InteractionRecord(
        drug1=drug1,
        drug2=drug2,
        severity=severity,
        description=text,
        simplified_explanation=guidance.simplified_explanation,
        possible_effects=guidance.possible_effects,
        recommendations=guidance.recommendations,
        source=source,
    )


class InteractionChecker:
    """
    Checks every medication pair against openFDA drug labels.

    Results keep pair-generation order (i ascending, then j ascending).
    """

    def __init__(
        self,
        client: Optional[OpenFDAClient] = None,
        strategies: Sequence[Strategy] = DEFAULT_STRATEGIES,
    ):
        self.client = client or OpenFDAClient()
        self.strategies = strategies

    async def check(self, medications: Sequence[str]) -> InteractionCheckResult:
        interactions: List[InteractionRecord] = []
        pairs_checked = 0
        failed_pairs = 0

        for pair in medication_pairs(medications):
            pairs_checked += 1
            outcome = await first_success(self.strategies, self.client, pair.drug_a, pair.drug_b)
            if outcome.hit is None:
                if outcome.failed:
                    failed_pairs += 1
                    logger.warning(
                        f"No interaction data for {pair.drug_a}/{pair.drug_b}: all lookups failed",
                        extra={"errors": outcome.errors},
                    )
                continue
            interactions.append(
                build_interaction_record(pair.drug_a, pair.drug_b, outcome.hit.text, outcome.hit.source)
            )

        logger.info(
            "Interaction check complete",
            extra={"pairs_checked": pairs_checked, "interactions": len(interactions), "failed_pairs": failed_pairs},
        )
        return InteractionCheckResult(
            interactions=interactions,
            pairs_checked=pairs_checked,
            failed_pairs=failed_pairs,
            warning=INCOMPLETE_CHECK_WARNING if failed_pairs else None,
        )


async def check_medication_interactions(
    medications: Sequence[str],
    client: Optional[OpenFDAClient] = None,
) -> InteractionCheckResult:
    """Convenience wrapper around InteractionChecker.check."""
    return await InteractionChecker(client=client).check(medications)
