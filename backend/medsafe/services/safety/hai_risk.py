"""
Healthcare-associated infection risk from symptom/diagnosis keyword co-occurrence.
"""

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from medsafe.schemas.patient_schema import Diagnosis, Symptom
from .hai_data import GENERAL_PREVENTION_GUIDELINES, HAI_TYPES, PREVENTION_TIPS, general_hai_info, prevention_info
from .models import HAIRisk, RiskLevel

logger = logging.getLogger(__name__)

HAI_SYMPTOM_KEYWORDS: Tuple[str, ...] = (
    "fever", "chills", "fatigue", "pain", "cough", "sputum", "shortness of breath",
    "diarrhea", "nausea", "redness", "swelling", "drainage", "burning", "urgency",
    "blood in urine", "wound", "rash", "headache", "stiff neck",
)

HAI_DIAGNOSIS_KEYWORDS: Tuple[str, ...] = (
    "infection", "pneumonia", "sepsis", "uti", "urinary tract", "clostridium", "c. diff",
    "c.diff", "mrsa", "staph", "line infection", "catheter", "surgical site",
    "surgical wound", "post-operative", "postoperative", "wound infection",
)


@dataclass(frozen=True)
class HAIPattern:
    """
    One infection pattern.

    Every symptom keyword group must be matched by some symptom; a diagnosis
    keyword must match some diagnosis unless recent hospitalization is allowed
    to stand in for it. The display filters pick which matched names to report.
    """
    hai_type: str
    symptom_groups: Tuple[Tuple[str, ...], ...]
    diagnosis_terms: Tuple[str, ...]
    hospitalization_suffices: bool
    symptom_filter: Tuple[str, ...]
    diagnosis_filter: Tuple[str, ...]


HAI_PATTERNS: Sequence[HAIPattern] = (
    HAIPattern("CLABSI", (("fever",), ("chills",)), ("catheter", "central line"), False,
               ("fever", "chills", "fatigue", "pain"), ("catheter", "line", "bloodstream", "infection")),
    HAIPattern("CAUTI", (("urinary", "urine", "burning"),), ("catheter",), True,
               ("burn", "urgency", "frequency", "urinary", "urine", "pain"), ("urinary", "uti", "catheter")),
    HAIPattern("SSI", (("wound", "incision", "drainage"),), ("surgery", "surgical", "operation", "post-op"), False,
               ("wound", "drain", "redness", "swelling", "pain", "fever"),
               ("surgery", "surgical", "wound", "incision", "post")),
    HAIPattern("VAP", (("cough", "pneumonia", "breath"),), ("ventilator", "intubation"), False,
               ("cough", "sputum", "breath", "fever"), ("pneumonia", "ventilator", "respiratory", "intubation")),
    HAIPattern("C. diff", (("diarrhea",),), ("antibiotic",), True,
               ("diarrhea", "stool", "abdominal", "fever"),
               ("c. diff", "c.diff", "clostridium", "antibiotic", "colitis")),
    HAIPattern("MRSA", (("skin", "rash", "abscess"),), ("staph",), True,
               ("skin", "rash", "abscess", "boil", "redness", "swelling", "drainage"),
               ("staph", "mrsa", "skin infection")),
)


def _mentions(name: str, terms: Sequence[str]) -> bool:
    lowered = name.lower()
    return any(term in lowered for term in terms)


def pattern_matches(
    pattern: HAIPattern,
    symptoms: Sequence[Symptom],
    diagnoses: Sequence[Diagnosis],
    recent_hospitalization: bool,
) -> bool:
    if not all(any(_mentions(s.name, group) for s in symptoms) for group in pattern.symptom_groups):
        return False
    if any(_mentions(d.name, pattern.diagnosis_terms) for d in diagnoses):
        return True
    return pattern.hospitalization_suffices and recent_hospitalization


def analyze_hai_risks(
    symptoms: Sequence[Symptom],
    diagnoses: Sequence[Diagnosis],
    recent_hospitalization: bool = False,
) -> List[HAIRisk]:
    """HAI risks for the patient; always at least one record."""
    matched_symptoms = [s for s in symptoms if _mentions(s.name, HAI_SYMPTOM_KEYWORDS)]
    matched_diagnoses = [d for d in diagnoses if _mentions(d.name, HAI_DIAGNOSIS_KEYWORDS)]
    risks: List[HAIRisk] = []

    if matched_symptoms or matched_diagnoses or recent_hospitalization:
        risk_level = RiskLevel.HIGH if recent_hospitalization else RiskLevel.MEDIUM
        for pattern in HAI_PATTERNS:
            if not pattern_matches(pattern, symptoms, diagnoses, recent_hospitalization):
                continue
            info = HAI_TYPES[pattern.hai_type]
            risks.append(HAIRisk(
                hai_type=pattern.hai_type,
                risk_level=risk_level,
                matched_symptoms=[s.name for s in matched_symptoms if _mentions(s.name, pattern.symptom_filter)],
                matched_diagnoses=[d.name for d in matched_diagnoses if _mentions(d.name, pattern.diagnosis_filter)],
                cdc_info=info.model_copy(deep=True),
                prevention_tips=list(info.patient_safety_tips),
            ))

        if not risks:
            risks.append(HAIRisk(
                hai_type="General HAI Concern",
                risk_level=RiskLevel.MEDIUM if recent_hospitalization else RiskLevel.LOW,
                matched_symptoms=[s.name for s in matched_symptoms],
                matched_diagnoses=[d.name for d in matched_diagnoses],
                cdc_info=general_hai_info(),
                prevention_tips=list(GENERAL_PREVENTION_GUIDELINES),
            ))

    if not risks and not recent_hospitalization:
        risks.append(HAIRisk(
            hai_type="HAI Prevention",
            risk_level=RiskLevel.LOW,
            cdc_info=prevention_info(),
            prevention_tips=list(PREVENTION_TIPS),
        ))

    logger.info("HAI risk analysis complete", extra={"hai_risks": [r.hai_type for r in risks]})
    return risks
