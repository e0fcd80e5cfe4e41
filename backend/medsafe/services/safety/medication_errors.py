"""
Medication error risk from local reference tables.

High-alert medications follow the ISMP list; look-alike/sound-alike (LASA)
pairs and the medication-specific guidance are matched by substring on the
lower-cased medication name.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from medsafe.schemas.patient_schema import Medication
from .models import MedicationErrorRisk, RiskLevel

logger = logging.getLogger(__name__)

HIGH_ALERT_MEDICATIONS: Tuple[str, ...] = (
    "insulin",
    "heparin",
    "warfarin",
    "fentanyl",
    "hydromorphone",
    "morphine",
    "digoxin",
    "epinephrine",
    "norepinephrine",
    "potassium",
    "methotrexate",
    "chemotherapy",
    "anesthetics",
    "paralytics",
    "propofol",
    "midazolam",
    "lorazepam",
    "diazepam",
)

LOOK_ALIKE_SOUND_ALIKE: Dict[str, List[str]] = {
    "hydroxyzine": ["hydralazine"],
    "hydralazine": ["hydroxyzine"],
    "metoprolol": ["metoclopramide"],
    "metoclopramide": ["metoprolol"],
    "clonidine": ["clonazepam", "klonopin"],
    "clonazepam": ["clonidine"],
    "klonopin": ["clonidine"],
    "alprazolam": ["lorazepam"],
    "lorazepam": ["alprazolam"],
    "atenolol": ["albuterol", "timolol"],
    "albuterol": ["atenolol"],
    "amiodarone": ["amantadine"],
    "amantadine": ["amiodarone"],
    "celebrex": ["celexa", "cerebyx"],
    "celexa": ["celebrex", "cerebyx"],
    "cerebyx": ["celebrex", "celexa"],
    "tramadol": ["trazodone"],
    "trazodone": ["tramadol"],
}


@dataclass(frozen=True)
class MedicationGuidance:
    keywords: Tuple[str, ...]
    common_errors: Tuple[str, ...]
    near_misses: Tuple[str, ...]
    prevention_strategies: Tuple[str, ...]


# First matching entry wins
MEDICATION_GUIDANCE: Sequence[MedicationGuidance] = (
    MedicationGuidance(
        keywords=("insulin",),
        common_errors=("Using the wrong insulin type (rapid vs. long-acting)", "Miscalculation of insulin doses"),
        near_misses=("Selection of incorrect insulin strength or concentration",),
        prevention_strategies=("Clearly differentiate between different insulin types",
                               "Use insulin-specific syringes"),
    ),
    MedicationGuidance(
        keywords=("warfarin", "coumadin"),
        common_errors=("Failure to adjust dose based on INR results",
                       "Drug interactions not considered when prescribing"),
        near_misses=("Confusion between daily and weekly dosing schedules",),
        prevention_strategies=("Regular INR monitoring",
                               "Medication reconciliation at every healthcare encounter"),
    ),
    MedicationGuidance(
        keywords=("digoxin",),
        common_errors=("Failure to adjust dose for renal function or age", "Not monitoring for toxicity signs"),
        near_misses=("Decimal point errors in dosing",),
        prevention_strategies=("Regular monitoring of digoxin levels", "Check renal function before dosing"),
    ),
    MedicationGuidance(
        keywords=("antibiotic", "penicillin", "cephalosporin", "azithromycin", "ciprofloxacin", "amoxicillin"),
        common_errors=("Incorrect duration of therapy", "Failure to adjust dose for renal function"),
        near_misses=("Missing allergy information",),
        prevention_strategies=("Verify allergy status before prescribing",
                               "Double-check duration and frequency of antibiotics"),
    ),
    MedicationGuidance(
        keywords=("lisinopril", "enalapril", "captopril", "ace inhibitor"),
        common_errors=("Failure to monitor potassium and renal function",),
        near_misses=("Confusion with angiotensin receptor blockers",),
        prevention_strategies=("Regular monitoring of electrolytes and kidney function",),
    ),
    MedicationGuidance(
        keywords=("metformin",),
        common_errors=("Use in patients with renal insufficiency",
                       "Failure to hold before procedures with contrast dye"),
        near_misses=("Sound-alike confusion with metronidazole",),
        prevention_strategies=("Check renal function before prescribing", "Hold medication before contrast studies"),
    ),
)

GENERIC_ERRORS = ["Wrong dose or frequency errors", "Failure to account for drug interactions"]
GENERIC_NEAR_MISSES = ["Look-alike packaging with other medications", "Sound-alike confusion during verbal orders"]
GENERIC_STRATEGIES = [
    "Double-check drug name, dose, route, and frequency",
    "Use electronic prescribing when available",
    "Confirm medication details with patient",
]


def general_medication_safety() -> MedicationErrorRisk:
    """Record returned when the patient lists no medications."""
    return MedicationErrorRisk(
        medication_name="General Medication Safety",
        common_errors=[
            "Wrong patient errors",
            "Wrong medication errors",
            "Wrong dose errors",
            "Wrong time errors",
            "Wrong route errors",
        ],
        near_misses=[
            "Look-alike/sound-alike medication confusion",
            "Decimal point errors in dosing",
            "Unit of measure errors (mg vs. mcg)",
            "Misinterpreting abbreviations",
        ],
        prevention_strategies=[
            "Use the 'five rights' of medication administration: "
            "right patient, right drug, right dose, right route, right time",
            "Avoid using dangerous abbreviations",
            "Report all medication errors and near misses for system improvement",
            "Implement barcode medication administration when available",
        ],
        high_alert_status=False,
        look_alike_sound_alike=[],
        risk_level=RiskLevel.MEDIUM,
    )


def uncertain_medication_risk(medication_name: str) -> MedicationErrorRisk:
    return MedicationErrorRisk(
        medication_name=medication_name,
        common_errors=["Error analyzing specific risks for this medication"],
        near_misses=["Cannot determine near miss risks for this medication"],
        prevention_strategies=[
            "Use standard medication safety practices",
            "Double-check all medication details before administration",
        ],
        risk_level=RiskLevel.MEDIUM,
    )


def is_high_alert(medication_name: str) -> bool:
    lowered = medication_name.lower()
    return any(med in lowered for med in HIGH_ALERT_MEDICATIONS)


def assess_medication(medication_name: str) -> MedicationErrorRisk:
    """Error risk for a single medication."""
    lowered = medication_name.lower()
    common_errors: List[str] = []
    near_misses: List[str] = []
    strategies: List[str] = []
    look_alikes: List[str] = []
    risk_level = RiskLevel.LOW

    high_alert = is_high_alert(medication_name)
    if high_alert:
        risk_level = RiskLevel.HIGH
        common_errors.append("Dosing errors can have severe or fatal consequences")
        strategies.append("Implement independent double-checks before administration")
        strategies.append("Use standardized order sets or protocols when available")

    for name, confusions in LOOK_ALIKE_SOUND_ALIKE.items():
        if name in lowered:
            look_alikes.extend(confusions)
            near_misses.append(f"Can be confused with {', '.join(confusions)}")
            strategies.append("Use both brand and generic names when communicating medication information")
            risk_level = RiskLevel.highest(risk_level, RiskLevel.MEDIUM)

    for guidance in MEDICATION_GUIDANCE:
        if any(keyword in lowered for keyword in guidance.keywords):
            common_errors.extend(guidance.common_errors)
            near_misses.extend(guidance.near_misses)
            strategies.extend(guidance.prevention_strategies)
            break

    common_errors = common_errors or list(GENERIC_ERRORS)
    near_misses = near_misses or list(GENERIC_NEAR_MISSES)
    strategies = strategies or list(GENERIC_STRATEGIES)

    if risk_level == RiskLevel.LOW and (len(common_errors) > 3 or look_alikes):
        risk_level = RiskLevel.MEDIUM

    return MedicationErrorRisk(
        medication_name=medication_name,
        common_errors=common_errors,
        near_misses=near_misses,
        prevention_strategies=strategies,
        high_alert_status=high_alert,
        look_alike_sound_alike=look_alikes,
        risk_level=risk_level,
    )


def analyze_medication_error_risks(medications: Sequence[Medication]) -> List[MedicationErrorRisk]:
    """One record per medication, or the general safety record when there are none."""
    risks = []
    for med in medications:
        if not med.name or not med.name.strip():
            continue
        try:
            risks.append(assess_medication(med.name))
        except Exception as e:
            logger.error(f"Error analyzing error risks for {med.name}: {e}")
            risks.append(uncertain_medication_risk(med.name))

    if not risks:
        risks.append(general_medication_safety())
    return risks


def fallback_medication_error_risks(medications: Sequence[Medication]) -> List[MedicationErrorRisk]:
    """Local result used when the analysis can't run; each listed medication stays visible."""
    risks = [uncertain_medication_risk(med.name) for med in medications if med.name and med.name.strip()]
    return risks or [general_medication_safety()]
