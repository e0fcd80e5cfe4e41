"""
Diagnosis safety analysis.

Same source chain as the symptom analysis: topic-specific CDC endpoint,
openFDA drug labels indicated for the diagnosis (bundled sample labels when
openFDA is down), then the AHRQ patient safety dataset, then local profiles.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from pydantic import ValidationError

from medsafe.core.config import SafetyConfig, get_config
from medsafe.schemas.patient_schema import Diagnosis
from medsafe.services.sources.errors import SourceError
from medsafe.services.sources.health_data_client import HealthDataClient
from medsafe.services.sources.openfda_client import OpenFDAClient, label_field, openfda_names
from medsafe.services.sources.sample_data import sample_label_results
from .fallbacks import FallbackTracker
from .mock_profiles import (
    GENERIC_DIAGNOSIS_FOLLOWUP,
    GENERIC_DIAGNOSIS_MISMANAGEMENTS,
    GENERIC_DIAGNOSIS_RECOMMENDATIONS,
    GENERIC_DIAGNOSIS_WARNINGS,
    basic_diagnosis_profile,
    detailed_diagnosis_profile,
    generic_diagnosis_profile,
)
from .models import DiagnosisSafetyRecord, RiskLevel
from .research_data import enhance_diagnosis_record
from .symptom_safety import unique

logger = logging.getLogger(__name__)


def record_from_labels(diagnosis_name: str, labels: List[Dict[str, Any]]) -> Optional[DiagnosisSafetyRecord]:
    """Derive watch-outs and medication options from labels indicated for the diagnosis."""
    needle = diagnosis_name.lower()
    watch_warnings: List[str] = []
    mismanagements: List[str] = []
    brands: List[str] = []
    risk_level = RiskLevel.LOW

    for label in labels:
        indications = " ".join(label_field(label, "indications_and_usage")).lower()
        if needle in indications:
            brands.extend(openfda_names(label, "brand_name")[:1])
        for warning in label_field(label, "warnings"):
            watch_warnings.append(warning)
            risk_level = RiskLevel.MEDIUM
        for reaction in label_field(label, "adverse_reactions"):
            mismanagements.append(f"Failing to monitor for side effects like: {reaction}")

    recommendations = []
    if brands:
        recommendations.append(f"Medication options include {', '.join(unique(brands))}")

    if not (watch_warnings or mismanagements or recommendations):
        return None

    return DiagnosisSafetyRecord(
        diagnosis_name=diagnosis_name,
        common_mismanagements=unique(mismanagements) or list(GENERIC_DIAGNOSIS_MISMANAGEMENTS),
        critical_followup_items=list(GENERIC_DIAGNOSIS_FOLLOWUP),
        watch_warnings=unique(watch_warnings) or list(GENERIC_DIAGNOSIS_WARNINGS),
        recommendations=recommendations or list(GENERIC_DIAGNOSIS_RECOMMENDATIONS),
        error_risk_level=risk_level,
    )


def record_from_ahrq_rows(diagnosis_name: str, rows: List[Dict[str, Any]], limit: int) -> DiagnosisSafetyRecord:
    return DiagnosisSafetyRecord(
        diagnosis_name=diagnosis_name,
        common_mismanagements=list(GENERIC_DIAGNOSIS_MISMANAGEMENTS),
        critical_followup_items=list(GENERIC_DIAGNOSIS_FOLLOWUP),
        watch_warnings=unique([str(row.get("warning_indicators") or "") for row in rows])[:limit],
        recommendations=unique([str(row.get("patient_safety_recommendations") or "") for row in rows])[:limit],
        error_risk_level=RiskLevel.MEDIUM,
    )


class DiagnosisSafetyAnalyzer:
    """Builds one DiagnosisSafetyRecord per patient diagnosis."""

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

    async def _specific_profile(self, diagnosis_name: str) -> Optional[DiagnosisSafetyRecord]:
        try:
            profile = await self.health.fetch_diagnosis_profile(diagnosis_name)
        except SourceError:
            logger.info(f"No specific data available for {diagnosis_name}, falling back to general sources")
            return None
        if not profile:
            return None
        try:
            return DiagnosisSafetyRecord.model_validate({"diagnosisName": diagnosis_name, **profile})
        except ValidationError:
            logger.warning(f"Ignoring malformed CDC profile for {diagnosis_name}")
            return None

    async def _lookup(self, diagnosis_name: str) -> DiagnosisSafetyRecord:
        specific = await self._specific_profile(diagnosis_name)
        if specific is not None:
            return specific

        source_failed = False
        try:
            labels = await self.openfda.search_labels(f'indications_and_usage:"{diagnosis_name}"', limit=5)
        except SourceError as e:
            logger.error(f"openFDA label lookup failed for {diagnosis_name}: {e}")
            self.tracker.record(f"openFDA drug labels unavailable for diagnosis '{diagnosis_name}'")
            labels = sample_label_results()
            source_failed = True

        derived = record_from_labels(diagnosis_name, labels)
        if derived is not None:
            return derived

        try:
            rows = await self.health.query_diagnosis_guidance(diagnosis_name)
            if rows:
                return record_from_ahrq_rows(diagnosis_name, rows, self.config.analysis.max_source_items)
        except SourceError as e:
            logger.error(f"AHRQ diagnosis lookup failed for {diagnosis_name}: {e}")
            self.tracker.record(f"AHRQ diagnosis data unavailable for '{diagnosis_name}'")
            source_failed = True

        if source_failed:
            return basic_diagnosis_profile(diagnosis_name)
        return generic_diagnosis_profile(diagnosis_name)

    async def analyze_one(self, diagnosis_name: str) -> DiagnosisSafetyRecord:
        try:
            record = await self._lookup(diagnosis_name)
        except Exception as e:
            logger.exception(f"Unexpected error building diagnosis safety data for {diagnosis_name}: {e}")
            self.tracker.record(f"diagnosis lookup failed for '{diagnosis_name}'")
            record = detailed_diagnosis_profile(diagnosis_name)

        try:
            return enhance_diagnosis_record(record, self.config)
        except Exception as e:
            logger.error(f"Error enhancing diagnosis data for {diagnosis_name}: {e}")
            return record

    async def analyze(self, diagnoses: Sequence[Diagnosis]) -> List[DiagnosisSafetyRecord]:
        records = []
        for diagnosis in diagnoses:
            if not diagnosis.name or not diagnosis.name.strip():
                continue
            records.append(await self.analyze_one(diagnosis.name.strip()))
        return records


def fallback_diagnosis_records(diagnoses: Sequence[Diagnosis]) -> List[DiagnosisSafetyRecord]:
    return [basic_diagnosis_profile(d.name) for d in diagnoses if d.name and d.name.strip()]
