"""
Medication effects on the patient's symptoms and diagnoses.

Driven by each medication's openFDA label. When no label says anything about
the patient's conditions, a small local rule table covers the common cases.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from medsafe.schemas.patient_schema import Diagnosis, Medication, Symptom
from medsafe.services.sources.errors import SourceError
from medsafe.services.sources.openfda_client import OpenFDAClient, label_field
from medsafe.services.sources.sample_data import sample_label_results
from .fallbacks import FallbackTracker
from .models import EffectSeverity, MedicationDiagnosisEffect, MedicationEffects, MedicationSymptomEffect

logger = logging.getLogger(__name__)

# (label section, effect template, recommendation, severity); first match wins per diagnosis
DIAGNOSIS_LABEL_RULES: Sequence[Tuple[str, str, str, EffectSeverity]] = (
    ("indications_and_usage", "{med} is commonly used to treat {dx}",
     "Follow your doctor's guidance for this medication", EffectSeverity.BENEFICIAL),
    ("contraindications", "{med} may be contraindicated for {dx}",
     "Urgently discuss this medication with your doctor", EffectSeverity.CONCERNING),
    ("precautions", "{med} should be used with caution with {dx}",
     "Discuss potential risks with your healthcare provider", EffectSeverity.NEUTRAL),
)


@dataclass(frozen=True)
class EffectRule:
    """Local rule: medication keywords x condition keywords -> effect."""
    medication_terms: Tuple[str, ...]
    condition_terms: Tuple[str, ...]
    effect: str
    recommendation: str
    severity: EffectSeverity


SYMPTOM_RULES: Sequence[EffectRule] = (
    EffectRule(("ibuprofen", "aspirin", "naproxen"), ("pain", "headache", "fever"),
               "{med} may help relieve {name}", "Monitor your symptoms to see if they improve",
               EffectSeverity.BENEFICIAL),
    EffectRule(("antibiotic",), ("nausea", "diarrhea"),
               "{med} may cause or worsen {name}",
               "Take medication with food if appropriate (check with pharmacist)",
               EffectSeverity.CONCERNING),
)

DIAGNOSIS_RULES: Sequence[EffectRule] = (
    EffectRule(("statin",), ("cholesterol",),
               "{med} is commonly used to treat high cholesterol",
               "Regular blood tests are recommended to monitor effectiveness",
               EffectSeverity.BENEFICIAL),
    EffectRule(("nsaid",), ("ulcer", "bleeding"),
               "{med} may worsen {name}", "Discuss alternative pain relief options with your doctor",
               EffectSeverity.CONCERNING),
)


def _matches(rule: EffectRule, med: str, condition: str) -> bool:
    med, condition = med.lower(), condition.lower()
    return any(t in med for t in rule.medication_terms) and any(t in condition for t in rule.condition_terms)


def rule_based_effects(
    medications: Sequence[Medication],
    symptoms: Sequence[Symptom],
    diagnoses: Sequence[Diagnosis],
) -> MedicationEffects:
    """Local rule table used when label data yields nothing."""
    result = MedicationEffects()
    for med in medications:
        for symptom in symptoms:
            for rule in SYMPTOM_RULES:
                if _matches(rule, med.name, symptom.name):
                    result.medication_symptom_effects.append(MedicationSymptomEffect(
                        medication_name=med.name,
                        symptom_name=symptom.name,
                        effect=rule.effect.format(med=med.name, name=symptom.name),
                        recommendation=rule.recommendation,
                        severity=rule.severity,
                    ))
        for diagnosis in diagnoses:
            for rule in DIAGNOSIS_RULES:
                if _matches(rule, med.name, diagnosis.name):
                    result.medication_diagnosis_effects.append(MedicationDiagnosisEffect(
                        medication_name=med.name,
                        diagnosis_name=diagnosis.name,
                        effect=rule.effect.format(med=med.name, name=diagnosis.name),
                        recommendation=rule.recommendation,
                        severity=rule.severity,
                    ))
    return result


def _section_text(label: Dict, section: str) -> str:
    return " ".join(label_field(label, section)).lower()


def label_symptom_effects(med_name: str, label: Dict, symptoms: Sequence[Symptom]) -> List[MedicationSymptomEffect]:
    adverse = _section_text(label, "adverse_reactions")
    indications = _section_text(label, "indications_and_usage")
    effects = []
    for symptom in symptoms:
        needle = symptom.name.lower()
        if not needle:
            continue
        if needle in adverse:
            effects.append(MedicationSymptomEffect(
                medication_name=med_name,
                symptom_name=symptom.name,
                effect=f"{med_name} may cause or worsen {symptom.name}",
                recommendation="Discuss this potential side effect with your doctor",
                severity=EffectSeverity.CONCERNING,
            ))
        if needle in indications:
            effects.append(MedicationSymptomEffect(
                medication_name=med_name,
                symptom_name=symptom.name,
                effect=f"{med_name} may help with {symptom.name}",
                recommendation="Continue monitoring to see if this medication helps your symptoms",
                severity=EffectSeverity.BENEFICIAL,
            ))
    return effects


def label_diagnosis_effects(
    med_name: str, label: Dict, diagnoses: Sequence[Diagnosis]
) -> List[MedicationDiagnosisEffect]:
    sections = {section: _section_text(label, section) for section, _, _, _ in DIAGNOSIS_LABEL_RULES}
    effects = []
    for diagnosis in diagnoses:
        needle = diagnosis.name.lower()
        if not needle:
            continue
        for section, template, recommendation, severity in DIAGNOSIS_LABEL_RULES:
            if needle in sections[section]:
                effects.append(MedicationDiagnosisEffect(
                    medication_name=med_name,
                    diagnosis_name=diagnosis.name,
                    effect=template.format(med=med_name, dx=diagnosis.name),
                    recommendation=recommendation,
                    severity=severity,
                ))
                break
    return effects


class MedicationEffectsAnalyzer:

    def __init__(self, openfda: OpenFDAClient, tracker: Optional[FallbackTracker] = None):
        self.openfda = openfda
        self.tracker = tracker or FallbackTracker()

    async def _label_for(self, med_name: str) -> Optional[Dict]:
        try:
            labels = await self.openfda.search_labels(f'openfda.brand_name:"{med_name}"', limit=1)
        except SourceError as e:
            logger.error(f"openFDA label lookup failed for {med_name}: {e}")
            self.tracker.record(f"openFDA drug label unavailable for '{med_name}'")
            labels = sample_label_results()
        return labels[0] if labels else None

    async def analyze(
        self,
        medications: Sequence[Medication],
        symptoms: Sequence[Symptom],
        diagnoses: Sequence[Diagnosis],
    ) -> MedicationEffects:
        result = MedicationEffects()
        for med in medications:
            if not med.name or not med.name.strip():
                continue
            label = await self._label_for(med.name)
            if label is None:
                continue
            result.medication_symptom_effects.extend(label_symptom_effects(med.name, label, symptoms))
            result.medication_diagnosis_effects.extend(label_diagnosis_effects(med.name, label, diagnoses))

        if not result.medication_symptom_effects and not result.medication_diagnosis_effects and medications:
            logger.info("No label-derived medication effects, using local rules")
            return rule_based_effects(medications, symptoms, diagnoses)
        return result
