"""
Data models for the safety analysis service.
Every record serializes with camelCase keys, which is the shape the
presentation layer consumes.
"""

from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import ConfigDict, Field

from medsafe.schemas.patient_schema import CamelModel


class Severity(str, Enum):
    """Interaction severity tier."""
    MINOR = "minor"
    MODERATE = "moderate"
    MAJOR = "major"


class RiskLevel(str, Enum):
    """Risk tier for symptom/diagnosis/medication/HAI records."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _RISK_RANK[self]

    @classmethod
    def highest(cls, *levels: "RiskLevel") -> "RiskLevel":
        return max(levels, key=lambda level: level.rank)


_RISK_RANK = {RiskLevel.LOW: 0, RiskLevel.MEDIUM: 1, RiskLevel.HIGH: 2}


class EffectSeverity(str, Enum):
    """How a medication bears on a symptom or diagnosis."""
    BENEFICIAL = "beneficial"
    NEUTRAL = "neutral"
    CONCERNING = "concerning"


class AnalysisStatus(str, Enum):
    SUCCESS = "success"
    PARTIAL = "partial"
    ERROR = "error"


# ============================================================================
# Interactions
# ============================================================================

class MedicationPair(CamelModel):
    """Unordered pair of medication names, drawn with i < j."""
    model_config = ConfigDict(frozen=True)

    drug_a: str = Field(..., description="Medication at the lower list index")
    drug_b: str = Field(..., description="Medication at the higher list index")


class InteractionRecord(CamelModel):
    """Structured description of a potential interaction between two medications."""
    model_config = ConfigDict(frozen=True)

    drug1: str
    drug2: str
    severity: Severity
    description: str = Field(..., description="Raw label text")
    simplified_explanation: str
    possible_effects: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    source: str = Field(default="openFDA drug label", description="Provenance string")


class InteractionCheckResult(CamelModel):
    """Outcome of checking every medication pair."""
    interactions: List[InteractionRecord] = Field(default_factory=list)
    pairs_checked: int = 0
    failed_pairs: int = Field(default=0, description="Pairs where a lookup errored and nothing was found")
    warning: Optional[str] = None


# ============================================================================
# Symptom / diagnosis safety
# ============================================================================

class SymptomSafetyRecord(CamelModel):
    symptom_name: str
    common_errors: List[str] = Field(default_factory=list)
    potential_misdiagnoses: List[str] = Field(default_factory=list)
    warning_flags: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    risk_level: RiskLevel = RiskLevel.MEDIUM


class DiagnosisSafetyRecord(CamelModel):
    diagnosis_name: str
    common_mismanagements: List[str] = Field(default_factory=list)
    critical_followup_items: List[str] = Field(default_factory=list)
    watch_warnings: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    error_risk_level: RiskLevel = RiskLevel.MEDIUM


class DiagnosticErrorRisk(CamelModel):
    risk_level: RiskLevel = RiskLevel.LOW
    potential_concerns: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)


# ============================================================================
# Medication effects / errors
# ============================================================================

class MedicationSymptomEffect(CamelModel):
    medication_name: str
    symptom_name: str
    effect: str
    recommendation: str
    severity: EffectSeverity


class MedicationDiagnosisEffect(CamelModel):
    medication_name: str
    diagnosis_name: str
    effect: str
    recommendation: str
    severity: EffectSeverity


class MedicationEffects(CamelModel):
    medication_symptom_effects: List[MedicationSymptomEffect] = Field(default_factory=list)
    medication_diagnosis_effects: List[MedicationDiagnosisEffect] = Field(default_factory=list)


class MedicationErrorRisk(CamelModel):
    medication_name: str
    common_errors: List[str] = Field(default_factory=list)
    near_misses: List[str] = Field(default_factory=list)
    prevention_strategies: List[str] = Field(default_factory=list)
    high_alert_status: bool = False
    look_alike_sound_alike: List[str] = Field(default_factory=list)
    risk_level: RiskLevel = RiskLevel.LOW


# ============================================================================
# Healthcare-associated infections
# ============================================================================

class CdcInfo(CamelModel):
    """CDC reference data for one infection type."""
    name: str
    description: str
    prevalence: str
    mortality_rate: str
    prevention_strategies: List[str] = Field(default_factory=list)
    patient_safety_tips: List[str] = Field(default_factory=list)
    cdc_resource_url: str


class HAIRisk(CamelModel):
    hai_type: str
    risk_level: RiskLevel
    matched_symptoms: List[str] = Field(default_factory=list)
    matched_diagnoses: List[str] = Field(default_factory=list)
    cdc_info: Optional[CdcInfo] = None
    prevention_tips: List[str] = Field(default_factory=list)


# ============================================================================
# Report and tagged outcomes
# ============================================================================

class SafetyAnalysisReport(CamelModel):
    """Consumer-facing report. Every list field is always present."""
    symptom_safety_data: List[SymptomSafetyRecord] = Field(default_factory=list)
    diagnosis_safety_data: List[DiagnosisSafetyRecord] = Field(default_factory=list)
    diagnostic_error_risk: DiagnosticErrorRisk = Field(default_factory=DiagnosticErrorRisk)
    medication_effects: MedicationEffects = Field(default_factory=MedicationEffects)
    medication_error_risks: List[MedicationErrorRisk] = Field(default_factory=list)
    hai_risks: List[HAIRisk] = Field(default_factory=list)
    status: AnalysisStatus = AnalysisStatus.SUCCESS
    error: Optional[str] = None


class SuccessOutcome(CamelModel):
    status: Literal["success"] = "success"
    report: SafetyAnalysisReport

    def as_report(self) -> SafetyAnalysisReport:
        return self.report.model_copy(update={"status": AnalysisStatus.SUCCESS, "error": None})


class PartialOutcome(CamelModel):
    status: Literal["partial"] = "partial"
    report: SafetyAnalysisReport
    reasons: List[str] = Field(default_factory=list, description="Which sources fell back to local data")

    def as_report(self) -> SafetyAnalysisReport:
        return self.report.model_copy(update={"status": AnalysisStatus.PARTIAL, "error": None})


class ErrorOutcome(CamelModel):
    status: Literal["error"] = "error"
    report: SafetyAnalysisReport
    message: str

    def as_report(self) -> SafetyAnalysisReport:
        return self.report.model_copy(update={"status": AnalysisStatus.ERROR, "error": self.message})


AnalysisOutcome = Annotated[
    Union[SuccessOutcome, PartialOutcome, ErrorOutcome],
    Field(discriminator="status"),
]
