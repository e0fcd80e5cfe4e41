"""
Interaction lookup strategies for a pair of drugs.

Each strategy is one openFDA label query. They are tried in order by
``first_success``; the first strategy that returns label text wins and a
failing strategy never stops the chain.
"""

import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, List, Optional, Sequence

from .openfda_client import OpenFDAClient, label_field, openfda_names

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LabelHit:
    """Label text returned by a successful lookup strategy."""
    text: str
    source: str


Strategy = Callable[[OpenFDAClient, str, str], Awaitable[Optional[LabelHit]]]


def _term(name: str) -> str:
    return name.replace('"', "").strip()


def _provenance(strategy_name: str, label: dict) -> str:
    names = openfda_names(label, "brand_name") or openfda_names(label, "generic_name")
    suffix = f": {names[0]}" if names else ""
    return f"openFDA drug label ({strategy_name}){suffix}"


@dataclass(frozen=True)
class LabelQueryStrategy:
    """Query labels with a search expression and take the first one with interaction text."""
    name: str
    build_query: Callable[[str, str], str]
    limit: int = 1

    async def __call__(self, client: OpenFDAClient, drug1: str, drug2: str) -> Optional[LabelHit]:
        labels = await client.search_labels(self.build_query(drug1, drug2), limit=self.limit)
        for label in labels:
            text = " ".join(label_field(label, "drug_interactions")).strip()
            if text:
                return LabelHit(text=text, source=_provenance(self.name, label))
        return None


@dataclass(frozen=True)
class InteractionTextScanStrategy:
    """Fetch labels mentioning drug1 and scan their interaction text for drug2.

    ``limit`` defaults to the client's ``analysis.interaction_scan_limit``.
    """
    name: str = "interaction_text_scan"
    limit: Optional[int] = None

    async def __call__(self, client: OpenFDAClient, drug1: str, drug2: str) -> Optional[LabelHit]:
        limit = self.limit or client.config.analysis.interaction_scan_limit
        labels = await client.search_labels(f'drug_interactions:"{_term(drug1)}"', limit=limit)
        needle = _term(drug2).lower()
        for label in labels:
            text = " ".join(label_field(label, "drug_interactions")).strip()
            if text and needle in text.lower():
                return LabelHit(text=text, source=_provenance(self.name, label))
        return None


DEFAULT_STRATEGIES: Sequence[Strategy] = (
    LabelQueryStrategy(
        "brand_name",
        lambda d1, d2: f'drug_interactions:"{_term(d2)}" AND openfda.brand_name:"{_term(d1)}"',
    ),
    LabelQueryStrategy(
        "brand_name_reversed",
        lambda d1, d2: f'drug_interactions:"{_term(d1)}" AND openfda.brand_name:"{_term(d2)}"',
    ),
    LabelQueryStrategy(
        "generic_name",
        lambda d1, d2: f'drug_interactions:"{_term(d2)}" AND openfda.generic_name:"{_term(d1)}"',
    ),
    LabelQueryStrategy(
        "generic_name_reversed",
        lambda d1, d2: f'drug_interactions:"{_term(d1)}" AND openfda.generic_name:"{_term(d2)}"',
    ),
    InteractionTextScanStrategy(),
)


@dataclass
class LookupOutcome:
    """Result of running a strategy chain for one pair."""
    hit: Optional[LabelHit] = None
    errors: List[str] = field(default_factory=list)
    attempts: int = 0

    @property
    def failed(self) -> bool:
        """Nothing found and at least one strategy errored."""
        return self.hit is None and bool(self.errors)


async def first_success(
    strategies: Sequence[Strategy],
    client: OpenFDAClient,
    drug1: str,
    drug2: str,
) -> LookupOutcome:
    """Run strategies in order, stopping at the first that returns a hit."""
    outcome = LookupOutcome()
    for strategy in strategies:
        outcome.attempts += 1
        name = getattr(strategy, "name", None) or getattr(strategy, "__name__", repr(strategy))
        try:
            hit = await strategy(client, drug1, drug2)
        except Exception as e:
            logger.warning(
                f"Interaction lookup strategy {name} failed for {drug1}/{drug2}: {e}",
                extra={"strategy": name, "error_type": type(e).__name__},
            )
            outcome.errors.append(f"{name}: {type(e).__name__}")
            continue
        if hit is not None:
            logger.info("Interaction label found", extra={"strategy": name, "drug1": drug1, "drug2": drug2})
            outcome.hit = hit
            return outcome
    return outcome
