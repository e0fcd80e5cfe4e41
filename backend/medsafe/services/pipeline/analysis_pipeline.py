"""
Analysis Pipeline: orchestrates the six safety sub-analyses.

Each sub-analysis runs concurrently under its own timeout and falls back to
local data on failure, so a report always comes back. The outcome is tagged
success, partial (something fell back) or error (the orchestrator itself
broke and the report was built from local data only).
"""
import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, List, Optional, Sequence

from pydantic import Field

from medsafe.core.config import SafetyConfig, get_config
from medsafe.schemas.patient_schema import CamelModel, Diagnosis, Medication, Patient, Symptom
from medsafe.services.safety.diagnosis_safety import DiagnosisSafetyAnalyzer, fallback_diagnosis_records
from medsafe.services.safety.diagnostic_error import DiagnosticErrorAnalyzer, fallback_diagnostic_error_risk
from medsafe.services.safety.fallbacks import FallbackTracker
from medsafe.services.safety.hai_risk import analyze_hai_risks
from medsafe.services.safety.interaction_checker import InteractionChecker
from medsafe.services.safety.medication_effects import MedicationEffectsAnalyzer, rule_based_effects
from medsafe.services.safety.medication_errors import (
    analyze_medication_error_risks,
    fallback_medication_error_risks,
)
from medsafe.services.safety.models import (
    AnalysisOutcome,
    ErrorOutcome,
    InteractionCheckResult,
    PartialOutcome,
    SafetyAnalysisReport,
    SuccessOutcome,
)
from medsafe.services.safety.symptom_safety import SymptomSafetyAnalyzer, fallback_symptom_records
from medsafe.services.sources.health_data_client import HealthDataClient
from medsafe.services.sources.openfda_client import OpenFDAClient

logger = logging.getLogger(__name__)


def local_report(
    symptoms: Sequence[Symptom],
    diagnoses: Sequence[Diagnosis],
    medications: Sequence[Medication],
    recent_hospitalization: bool = False,
) -> SafetyAnalysisReport:
    """Report built only from local tables, used when the orchestrator fails."""
    return SafetyAnalysisReport(
        symptom_safety_data=fallback_symptom_records(symptoms),
        diagnosis_safety_data=fallback_diagnosis_records(diagnoses),
        diagnostic_error_risk=fallback_diagnostic_error_risk(failed=True),
        medication_effects=rule_based_effects(medications, symptoms, diagnoses),
        medication_error_risks=analyze_medication_error_risks(medications),
        hai_risks=analyze_hai_risks(symptoms, diagnoses, recent_hospitalization),
    )


class SafetyAnalyzer:
    """
    Runs every safety sub-analysis for one patient snapshot.

    ``analyze`` never raises; failures surface as the outcome's status.
    """

    def __init__(
        self,
        openfda: Optional[OpenFDAClient] = None,
        health: Optional[HealthDataClient] = None,
        config: Optional[SafetyConfig] = None,
    ):
        self.config = config or get_config()
        self.openfda = openfda or OpenFDAClient(config=self.config)
        self.health = health or HealthDataClient(config=self.config)

    async def _guarded(
        self,
        name: str,
        work: Callable[[], Awaitable[Any]],
        fallback: Callable[[bool], Any],
        tracker: FallbackTracker,
    ) -> Any:
        """Run one sub-analysis under the timeout; on failure record it and return the fallback."""
        try:
            return await asyncio.wait_for(work(), timeout=self.config.analysis.subanalysis_timeout)
        except asyncio.TimeoutError:
            logger.warning(f"{name} timed out, using local data")
            tracker.record(f"{name} timed out")
            return fallback(False)
        except Exception as e:
            logger.exception(f"{name} failed, using local data: {e}")
            tracker.record(f"{name} failed")
            return fallback(True)

    async def _run(
        self,
        symptoms: Sequence[Symptom],
        diagnoses: Sequence[Diagnosis],
        medications: Sequence[Medication],
        recent_hospitalization: bool,
        tracker: FallbackTracker,
    ) -> SafetyAnalysisReport:
        symptom_analyzer = SymptomSafetyAnalyzer(self.openfda, self.health, tracker, self.config)
        diagnosis_analyzer = DiagnosisSafetyAnalyzer(self.openfda, self.health, tracker, self.config)
        diagnostic_analyzer = DiagnosticErrorAnalyzer(self.openfda, tracker, self.config)
        effects_analyzer = MedicationEffectsAnalyzer(self.openfda, tracker)

        async def medication_errors():
            return analyze_medication_error_risks(medications)

        async def hai_risks():
            return analyze_hai_risks(symptoms, diagnoses, recent_hospitalization)

        results = await asyncio.gather(
            self._guarded(
                "symptom safety analysis",
                lambda: symptom_analyzer.analyze(symptoms),
                lambda failed: fallback_symptom_records(symptoms),
                tracker,
            ),
            self._guarded(
                "diagnosis safety analysis",
                lambda: diagnosis_analyzer.analyze(diagnoses),
                lambda failed: fallback_diagnosis_records(diagnoses),
                tracker,
            ),
            self._guarded(
                "diagnostic error analysis",
                lambda: diagnostic_analyzer.analyze(symptoms, diagnoses),
                fallback_diagnostic_error_risk,
                tracker,
            ),
            self._guarded(
                "medication effects analysis",
                lambda: effects_analyzer.analyze(medications, symptoms, diagnoses),
                lambda failed: rule_based_effects(medications, symptoms, diagnoses),
                tracker,
            ),
            self._guarded(
                "medication error analysis",
                medication_errors,
                lambda failed: fallback_medication_error_risks(medications),
                tracker,
            ),
            self._guarded(
                "HAI risk analysis",
                hai_risks,
                lambda failed: analyze_hai_risks([], [], False),
                tracker,
            ),
        )

        symptom_data, diagnosis_data, diagnostic_risk, effects, error_risks, hai = results
        return SafetyAnalysisReport(
            symptom_safety_data=symptom_data,
            diagnosis_safety_data=diagnosis_data,
            diagnostic_error_risk=diagnostic_risk,
            medication_effects=effects,
            medication_error_risks=error_risks,
            hai_risks=hai,
        )

    async def analyze(
        self,
        symptoms: Sequence[Symptom],
        diagnoses: Sequence[Diagnosis],
        medications: Sequence[Medication],
        recent_hospitalization: bool = False,
    ) -> AnalysisOutcome:
        logger.info(
            "Starting safety analysis",
            extra={"symptoms": len(symptoms), "diagnoses": len(diagnoses), "medications": len(medications)},
        )
        start_time = time.time()
        tracker = FallbackTracker()

        try:
            report = await self._run(symptoms, diagnoses, medications, recent_hospitalization, tracker)
        except Exception as e:
            logger.exception(f"Safety analysis failed: {e}")
            try:
                report = local_report(symptoms, diagnoses, medications, recent_hospitalization)
            except Exception as inner:
                logger.exception(f"Local report could not be built: {inner}")
                report = SafetyAnalysisReport()
            return ErrorOutcome(report=report, message=f"Safety analysis failed: {e}")

        elapsed = time.time() - start_time
        if tracker.degraded:
            logger.warning(
                f"Safety analysis completed with fallbacks in {elapsed:.2f}s",
                extra={"fallback_reasons": tracker.reasons},
            )
            return PartialOutcome(report=report, reasons=list(tracker.reasons))

        logger.info(f"Safety analysis completed in {elapsed:.2f}s")
        return SuccessOutcome(report=report)


class PatientAnalysis(CamelModel):
    """Interactions and safety report for the stored patient."""
    interactions: InteractionCheckResult = Field(default_factory=InteractionCheckResult)
    safety: SafetyAnalysisReport = Field(default_factory=SafetyAnalysisReport)


async def run_safety_analysis(
    symptoms: Sequence[Symptom],
    diagnoses: Sequence[Diagnosis],
    medications: Sequence[Medication],
    recent_hospitalization: bool = False,
    analyzer: Optional[SafetyAnalyzer] = None,
) -> SafetyAnalysisReport:
    """Consumer-facing report with the outcome's status folded in."""
    outcome = await (analyzer or SafetyAnalyzer()).analyze(
        symptoms, diagnoses, medications, recent_hospitalization
    )
    return outcome.as_report()


async def run_patient_analysis(
    patient: Patient,
    analyzer: Optional[SafetyAnalyzer] = None,
    checker: Optional[InteractionChecker] = None,
) -> PatientAnalysis:
    analyzer = analyzer or SafetyAnalyzer()
    checker = checker or InteractionChecker(client=analyzer.openfda)
    names: List[str] = [m.name for m in patient.medications]

    interactions, report = await asyncio.gather(
        checker.check(names),
        run_safety_analysis(patient.symptoms, patient.diagnoses, patient.medications, analyzer=analyzer),
    )
    return PatientAnalysis(interactions=interactions, safety=report)
