"""
Diagnostic error risk: flags severe symptoms that the current diagnoses
don't account for.
"""

import logging
from typing import List, Optional, Sequence

from medsafe.core.config import SafetyConfig, get_config
from medsafe.schemas.patient_schema import Diagnosis, Symptom
from medsafe.services.sources.errors import SourceError
from medsafe.services.sources.openfda_client import OpenFDAClient, label_field
from .fallbacks import FallbackTracker
from .models import DiagnosticErrorRisk, RiskLevel
from .symptom_safety import unique

logger = logging.getLogger(__name__)

NO_DIAGNOSIS_CONCERN = (
    "You have severe symptoms without documented diagnoses. "
    "This may indicate a need for further evaluation."
)
NO_DIAGNOSIS_RECOMMENDATION = "Discuss your severe symptoms with a healthcare provider"
TELL_YOUR_DOCTOR_RECOMMENDATION = "Always tell your doctor about all symptoms, even ones that seem unrelated"

GENERAL_RECOMMENDATIONS = [
    "Always mention all symptoms to your healthcare provider",
    "Ask what your diagnosis means and what to expect",
    "Follow up if symptoms don't improve as expected",
]

OFFLINE_CONCERN = "Unable to evaluate diagnostic error risk without connectivity"
FAILED_CONCERN = "Unable to evaluate diagnostic error risk due to an error"
OFFLINE_RECOMMENDATIONS = [
    "Keep track of all symptoms and when they began",
    "Share complete medical history with your healthcare provider",
]


def severe_symptoms(symptoms: Sequence[Symptom], threshold: int) -> List[Symptom]:
    return [s for s in symptoms if s.severity >= threshold]


def unaddressed_symptoms(severe: Sequence[Symptom], diagnoses: Sequence[Diagnosis]) -> List[Symptom]:
    """Severe symptoms whose name appears in no diagnosis's notes."""
    notes = [(d.notes or "").lower() for d in diagnoses]
    return [s for s in severe if not any(s.name.lower() in note for note in notes)]


def fallback_diagnostic_error_risk(failed: bool = False) -> DiagnosticErrorRisk:
    """Local result used when the analysis can't run."""
    return DiagnosticErrorRisk(
        risk_level=RiskLevel.LOW,
        potential_concerns=[FAILED_CONCERN if failed else OFFLINE_CONCERN],
        recommendations=list(OFFLINE_RECOMMENDATIONS),
    )


class DiagnosticErrorAnalyzer:

    def __init__(
        self,
        openfda: OpenFDAClient,
        tracker: Optional[FallbackTracker] = None,
        config: Optional[SafetyConfig] = None,
    ):
        self.openfda = openfda
        self.tracker = tracker or FallbackTracker()
        self.config = config or get_config()

    async def _misdiagnosis_concerns(self, symptoms: Sequence[Symptom]) -> List[str]:
        """Adverse event reactions tied to misdiagnosis that match a patient symptom."""
        try:
            events = await self.openfda.search_events("patient.reaction.reactionmeddrapt:misdiagnosis", limit=10)
        except SourceError as e:
            logger.warning(f"Misdiagnosis adverse event lookup failed: {e}")
            self.tracker.record("openFDA misdiagnosis reports unavailable")
            return []

        names = [s.name.lower() for s in symptoms if s.name]
        concerns = []
        for event in events:
            for reaction in (event.get("patient") or {}).get("reaction") or []:
                term = str(reaction.get("reactionmeddrapt", ""))
                if term and any(name in term.lower() for name in names):
                    concerns.append(f"{term} has been associated with diagnostic errors")
        return concerns

    async def _communication_advice(self) -> List[str]:
        try:
            labels = await self.openfda.search_labels("_exists_:patient_medication_information", limit=5)
        except SourceError as e:
            logger.warning(f"Patient medication information lookup failed: {e}")
            self.tracker.record("openFDA patient medication information unavailable")
            return []

        for label in labels:
            text = " ".join(label_field(label, "patient_medication_information")).lower()
            if "tell your doctor" in text:
                return [TELL_YOUR_DOCTOR_RECOMMENDATION]
        return []

    async def analyze(self, symptoms: Sequence[Symptom], diagnoses: Sequence[Diagnosis]) -> DiagnosticErrorRisk:
        threshold = self.config.analysis.severe_symptom_threshold
        severe = severe_symptoms(symptoms, threshold)
        risk_level = RiskLevel.LOW
        concerns: List[str] = []
        recommendations: List[str] = []

        if symptoms:
            event_concerns = await self._misdiagnosis_concerns(symptoms)
            if event_concerns:
                concerns.extend(event_concerns)
                risk_level = RiskLevel.highest(risk_level, RiskLevel.MEDIUM)

        if severe and not diagnoses:
            concerns.append(NO_DIAGNOSIS_CONCERN)
            recommendations.append(NO_DIAGNOSIS_RECOMMENDATION)
            risk_level = RiskLevel.HIGH

        # With no diagnoses every severe symptom is unaddressed
        for symptom in unaddressed_symptoms(severe, diagnoses):
            concerns.append(f"Your severe {symptom.name} symptom may not be fully addressed by current diagnoses")
            risk_level = RiskLevel.highest(risk_level, RiskLevel.MEDIUM)

        recommendations.extend(await self._communication_advice())
        recommendations.extend(GENERAL_RECOMMENDATIONS)

        logger.info(
            "Diagnostic error risk evaluated",
            extra={"severe_symptoms": len(severe), "risk_level": risk_level.value},
        )
        return DiagnosticErrorRisk(
            risk_level=risk_level,
            potential_concerns=unique(concerns),
            recommendations=unique(recommendations),
        )
