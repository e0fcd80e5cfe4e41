"""
Symptom safety analysis.

Per symptom the sources are tried in order: the topic-specific CDC endpoint,
openFDA adverse event reports (bundled sample reports when openFDA is down),
then the CDC symptom dataset. When a source failed the local symptom profile
is used, otherwise generic guidance. Every record is then enriched with
research data.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from pydantic import ValidationError

from medsafe.core.config import SafetyConfig, get_config
from medsafe.schemas.patient_schema import Symptom
from medsafe.services.sources.errors import SourceError
from medsafe.services.sources.health_data_client import HealthDataClient
from medsafe.services.sources.openfda_client import OpenFDAClient
from medsafe.services.sources.sample_data import sample_event_results
from .fallbacks import FallbackTracker
from .mock_profiles import (
    EVENT_DERIVED_SYMPTOM_DEFAULTS,
    GENERIC_SYMPTOM_ERRORS,
    GENERIC_SYMPTOM_MISDIAGNOSES,
    basic_symptom_profile,
    detailed_symptom_profile,
    generic_symptom_profile,
)
from .models import RiskLevel, SymptomSafetyRecord
from .research_data import enhance_symptom_record

logger = logging.getLogger(__name__)

SERIOUS_FLAGS = ("1", "yes")


def unique(items: Sequence[str]) -> List[str]:
    """Drop blanks and duplicates, keeping first-seen order."""
    seen = []
    for item in items:
        if item and item not in seen:
            seen.append(item)
    return seen


def _is_serious(event: Dict[str, Any]) -> bool:
    return str(event.get("serious", "")).strip().lower() in SERIOUS_FLAGS


def record_from_events(symptom_name: str, events: List[Dict[str, Any]]) -> Optional[SymptomSafetyRecord]:
    """Derive warnings and recommendations from adverse event reports mentioning the symptom."""
    needle = symptom_name.lower()
    warning_flags: List[str] = []
    recommendations: List[str] = []
    risk_level = RiskLevel.LOW

    for event in events:
        patient = event.get("patient") or {}
        for reaction in patient.get("reaction") or []:
            term = str(reaction.get("reactionmeddrapt", ""))
            if needle not in term.lower():
                continue
            if _is_serious(event):
                risk_level = RiskLevel.HIGH
                warning_flags.append("This symptom has been associated with serious adverse events")
            for drug in patient.get("drug") or []:
                indication = drug.get("drugindication")
                product = drug.get("medicinalproduct", "A medication")
                if not indication:
                    continue
                if needle in str(indication).lower():
                    recommendations.append(f"Follow medication instructions for {product}")
                else:
                    warning_flags.append(f"{product} may cause or worsen this symptom")
                    recommendations.append(f"Discuss {product} with your doctor")

    if not warning_flags and not recommendations:
        return None

    defaults = EVENT_DERIVED_SYMPTOM_DEFAULTS
    return SymptomSafetyRecord(
        symptom_name=symptom_name,
        common_errors=list(defaults["common_errors"]),
        potential_misdiagnoses=list(defaults["potential_misdiagnoses"]),
        warning_flags=unique(warning_flags) or list(defaults["warning_flags"]),
        recommendations=unique(recommendations) or list(defaults["recommendations"]),
        risk_level=risk_level,
    )


def record_from_cdc_rows(symptom_name: str, rows: List[Dict[str, Any]], limit: int) -> SymptomSafetyRecord:
    return SymptomSafetyRecord(
        symptom_name=symptom_name,
        common_errors=list(GENERIC_SYMPTOM_ERRORS),
        potential_misdiagnoses=list(GENERIC_SYMPTOM_MISDIAGNOSES),
        warning_flags=unique([str(row.get("warning_signs") or "") for row in rows])[:limit],
        recommendations=unique([str(row.get("recommendations") or "") for row in rows])[:limit],
        risk_level=RiskLevel.MEDIUM,
    )


class SymptomSafetyAnalyzer:
    """Builds one SymptomSafetyRecord per patient symptom."""

    def __init__(
        self,
        openfda: OpenFDAClient,
        health: HealthDataClient,
        tracker: Optional[FallbackTracker] = None,
        config: Optional[SafetyConfig] = None,
    ):
        self.openfda = openfda
        self.health = health
        self.tracker = tracker or FallbackTracker()
        self.config = config or get_config()

    async def _specific_profile(self, symptom_name: str) -> Optional[SymptomSafetyRecord]:
        try:
            profile = await self.health.fetch_symptom_profile(symptom_name)
        except SourceError:
            logger.info(f"No specific data available for {symptom_name}, falling back to general sources")
            return None
        if not profile:
            return None
        try:
            return SymptomSafetyRecord.model_validate({"symptomName": symptom_name, **profile})
        except ValidationError:
            logger.warning(f"Ignoring malformed CDC profile for {symptom_name}")
            return None

    async def _lookup(self, symptom_name: str) -> SymptomSafetyRecord:
        specific = await self._specific_profile(symptom_name)
        if specific is not None:
            return specific

        source_failed = False
        try:
            events = await self.openfda.search_events(
                f'patient.reaction.reactionmeddrapt:"{symptom_name}"', limit=10
            )
        except SourceError as e:
            logger.error(f"openFDA adverse event lookup failed for {symptom_name}: {e}")
            self.tracker.record(f"openFDA adverse events unavailable for symptom '{symptom_name}'")
            events = sample_event_results()
            source_failed = True

        derived = record_from_events(symptom_name, events)
        if derived is not None:
            return derived

        try:
            rows = await self.health.query_symptom_guidance(symptom_name)
            if rows:
                return record_from_cdc_rows(symptom_name, rows, self.config.analysis.max_source_items)
        except SourceError as e:
            logger.error(f"CDC symptom lookup failed for {symptom_name}: {e}")
            self.tracker.record(f"CDC symptom data unavailable for '{symptom_name}'")
            source_failed = True

        if source_failed:
            return basic_symptom_profile(symptom_name)
        return generic_symptom_profile(symptom_name)

    async def analyze_one(self, symptom_name: str) -> SymptomSafetyRecord:
        try:
            record = await self._lookup(symptom_name)
        except Exception as e:
            logger.exception(f"Unexpected error building symptom safety data for {symptom_name}: {e}")
            self.tracker.record(f"symptom lookup failed for '{symptom_name}'")
            record = detailed_symptom_profile(symptom_name)

        try:
            return enhance_symptom_record(record, self.config)
        except Exception as e:
            logger.error(f"Error enhancing symptom data for {symptom_name}: {e}")
            return record

    async def analyze(self, symptoms: Sequence[Symptom]) -> List[SymptomSafetyRecord]:
        records = []
        for symptom in symptoms:
            if not symptom.name or not symptom.name.strip():
                continue
            records.append(await self.analyze_one(symptom.name.strip()))
        return records


def fallback_symptom_records(symptoms: Sequence[Symptom]) -> List[SymptomSafetyRecord]:
    """Local-only records used when the whole sub-analysis fails."""
    return [basic_symptom_profile(s.name) for s in symptoms if s.name and s.name.strip()]
