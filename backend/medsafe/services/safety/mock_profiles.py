"""
Local symptom and diagnosis safety profiles.

Used whenever the external sources can't supply guidance. Two tiers exist:
the basic profiles back the normal fallback path, the detailed profiles are
used when a lookup chain breaks unexpectedly.
"""

from typing import Any, Dict, List, Sequence, Tuple

from .models import DiagnosisSafetyRecord, RiskLevel, SymptomSafetyRecord

ProfileTable = Sequence[Tuple[Tuple[str, ...], Dict[str, Any]]]


# ============================================================================
# Generic defaults
# ============================================================================

GENERIC_SYMPTOM_ERRORS = [
    "Failure to recognize serious underlying conditions",
    "Delayed diagnosis due to common symptom presentation",
    "Inadequate follow-up on persistent symptoms",
]

GENERIC_SYMPTOM_MISDIAGNOSES = [
    "Common conditions with similar presentations",
    "Failure to consider less common diagnosis options",
    "Cognitive bias in symptom assessment",
]

GENERIC_SYMPTOM_WARNINGS = [
    "Symptoms that persist beyond expected duration",
    "Symptoms that don't respond to initial treatment",
    "Symptoms accompanied by other concerning signs",
]

GENERIC_SYMPTOM_RECOMMENDATIONS = [
    "Keep detailed records of symptoms and timing",
    "Don't hesitate to seek a second opinion if concerned",
    "Follow up if symptoms worsen or don't improve",
]

GENERIC_DIAGNOSIS_MISMANAGEMENTS = [
    "Inadequate monitoring of condition progression",
    "Failure to adjust treatment based on response",
    "Overlooking potential medication interactions",
]

GENERIC_DIAGNOSIS_FOLLOWUP = [
    "Regular assessment of treatment effectiveness",
    "Monitoring for condition-specific complications",
    "Medication regimen adherence assessment",
]

GENERIC_DIAGNOSIS_WARNINGS = [
    "Symptoms that worsen despite treatment",
    "New symptoms that develop during treatment",
    "Side effects from prescribed medications",
]

GENERIC_DIAGNOSIS_RECOMMENDATIONS = [
    "Keep all follow-up appointments",
    "Take medications exactly as prescribed",
    "Report any new or worsening symptoms promptly",
]

# Fill-ins when adverse event data produced only part of a record
EVENT_DERIVED_SYMPTOM_DEFAULTS: Dict[str, List[str]] = {
    "common_errors": [
        "Attributing the symptom to minor causes without thorough evaluation",
        "Not monitoring symptom progression over time",
        "Failing to investigate related symptoms",
    ],
    "potential_misdiagnoses": [
        "Similar appearing conditions with different causes",
        "Missing underlying serious conditions",
        "Overlooking medication side effects as a cause",
    ],
    "warning_flags": [
        "Symptom persists despite initial treatment",
        "Symptom severity increases unexpectedly",
        "New related symptoms develop",
    ],
    "recommendations": [
        "Keep a symptom journal noting triggers and severity",
        "Follow up if symptom persists or worsens",
        "Discuss all your medications with your healthcare provider",
    ],
}


# ============================================================================
# Symptom profiles
# ============================================================================

BASIC_SYMPTOM_PROFILES: ProfileTable = (
    (("headache", "head pain"), {
        "common_errors": [
            "Failing to consider serious underlying causes like meningitis or stroke",
            "Not documenting the pattern and duration of headaches",
            "Inadequate follow-up on recurring severe headaches",
        ],
        "potential_misdiagnoses": [
            "Tension headache vs. migraine",
            "Secondary headache due to other conditions",
            "Medication overuse headache",
        ],
        "warning_flags": [
            "Sudden onset severe headache ('worst headache of life')",
            "Headache with fever and neck stiffness",
            "Headache with neurological changes",
        ],
        "recommendations": [
            "Keep a headache diary noting triggers and severity",
            "Mention any vision changes or other neurological symptoms",
            "Follow up if headaches worsen or change in character",
        ],
        "risk_level": RiskLevel.MEDIUM,
    }),
    (("fever", "temperature"), {
        "common_errors": [
            "Not investigating persistent fever adequately",
            "Overlooking serious bacterial infections",
            "Inadequate follow-up on fever of unknown origin",
        ],
        "potential_misdiagnoses": [
            "Viral vs. bacterial infection",
            "Non-infectious causes of fever",
            "Drug-induced fever",
        ],
        "warning_flags": [
            "Fever with rash",
            "Fever persisting more than 3 days",
            "Fever with altered mental status",
        ],
        "recommendations": [
            "Monitor temperature regularly and record readings",
            "Note any associated symptoms like cough or pain",
            "Seek care if fever is very high or persists despite medication",
        ],
        "risk_level": RiskLevel.MEDIUM,
    }),
    (("pain",), {
        "common_errors": [
            "Inadequate assessment of pain characteristics",
            "Failing to consider referred pain",
            "Not reassessing pain after treatment",
        ],
        "potential_misdiagnoses": [
            "Musculoskeletal vs. organ-related pain",
            "Neuropathic vs. nociceptive pain",
            "Psychogenic pain",
        ],
        "warning_flags": [
            "Pain that wakes from sleep",
            "Progressive worsening of pain",
            "Pain with other concerning symptoms",
        ],
        "recommendations": [
            "Describe pain in detail: location, intensity, triggers",
            "Track response to treatments",
            "Report any changes in character or severity of pain",
        ],
        "risk_level": RiskLevel.MEDIUM,
    }),
    (("fatigue", "tired", "exhaustion"), {
        "common_errors": [
            "Attributing fatigue to stress without adequate workup",
            "Missing underlying medical conditions",
            "Not considering medication side effects",
        ],
        "potential_misdiagnoses": [
            "Depression vs. physical causes",
            "Chronic fatigue syndrome vs. other conditions",
            "Sleep disorders",
        ],
        "warning_flags": [
            "Progressive worsening fatigue",
            "Fatigue with unexplained weight loss",
            "Fatigue with other new symptoms",
        ],
        "recommendations": [
            "Track energy levels throughout the day",
            "Note any activities that worsen or improve symptoms",
            "Discuss all medications with your provider",
        ],
        "risk_level": RiskLevel.LOW,
    }),
)

DETAILED_SYMPTOM_PROFILES: ProfileTable = (
    (("fever",), {
        "common_errors": [
            "Not differentiating between viral and bacterial causes",
            "Overlooking fever as a sign of serious infection",
            "Missing fever patterns that indicate specific conditions",
        ],
        "potential_misdiagnoses": [
            "Common cold vs. influenza",
            "Viral infection vs. bacterial infection requiring antibiotics",
            "Missing underlying conditions with fever as secondary symptom",
        ],
        "warning_flags": [
            "Fever over 103°F (39.4°C) in adults",
            "Fever with rash, stiff neck, or severe headache",
            "Fever lasting more than 3 days despite treatment",
            "Fever with recent travel to endemic disease areas",
        ],
        "recommendations": [
            "Monitor temperature regularly and record readings",
            "Stay hydrated and rest",
            "Use fever reducers as recommended by healthcare provider",
            "Seek immediate care for very high fever or concerning symptoms",
        ],
        "risk_level": RiskLevel.MEDIUM,
    }),
    (("cough",), {
        "common_errors": [
            "Assuming all coughs are related to upper respiratory infections",
            "Not distinguishing between productive and non-productive coughs",
            "Overlooking cough duration as a diagnostic factor",
        ],
        "potential_misdiagnoses": [
            "Bronchitis vs. pneumonia",
            "Asthma vs. COPD exacerbation",
            "GERD-related cough vs. infection",
            "Medication-induced cough (e.g., ACE inhibitors)",
        ],
        "warning_flags": [
            "Cough with blood (hemoptysis)",
            "Cough lasting >3 weeks (chronic cough)",
            "Cough with shortness of breath or chest pain",
            "Cough with fever >101°F for more than 3 days",
        ],
        "recommendations": [
            "Note whether cough is productive and color/consistency of any sputum",
            "Record time of day when cough is worse",
            "Notice triggers that worsen cough",
            "Use humidifier for dry cough if helpful",
        ],
        "risk_level": RiskLevel.MEDIUM,
    }),
    (("headache",), {
        "common_errors": [
            "Failing to consider serious underlying causes like meningitis or stroke",
            "Not classifying headache by type (tension, migraine, cluster, etc.)",
            "Missing medication overuse headache",
        ],
        "potential_misdiagnoses": [
            "Tension headache vs. migraine",
            "Sinus headache vs. migraine",
            "Primary headache vs. secondary to other conditions",
            "Missing temporal arteritis in older adults",
        ],
        "warning_flags": [
            "Sudden onset severe headache ('worst headache of life')",
            "Headache with fever and neck stiffness",
            "Headache with neurological changes (vision, speech, weakness)",
            "New headache after age 50",
            "Headache waking you from sleep",
        ],
        "recommendations": [
            "Keep a headache diary noting triggers, severity, and duration",
            "Note response to over-the-counter medications",
            "Identify and avoid personal headache triggers",
            "Seek immediate care for severe, sudden, or unusual headaches",
        ],
        "risk_level": RiskLevel.MEDIUM,
    }),
)


# ============================================================================
# Diagnosis profiles
# ============================================================================

BASIC_DIAGNOSIS_PROFILES: ProfileTable = (
    (("hypertension", "high blood pressure"), {
        "common_mismanagements": [
            "Inadequate blood pressure monitoring",
            "Not adjusting medications based on home readings",
            "Ignoring secondary causes of hypertension",
        ],
        "critical_followup_items": [
            "Regular blood pressure checks",
            "Kidney function monitoring",
            "Cardiovascular risk assessment",
        ],
        "watch_warnings": [
            "Very high readings (>180/120)",
            "Symptoms like headache, vision changes with high BP",
            "Medication side effects like dizziness or cough",
        ],
        "recommendations": [
            "Maintain a home blood pressure log",
            "Follow medication schedule exactly",
            "Report any concerning symptoms promptly",
        ],
        "error_risk_level": RiskLevel.MEDIUM,
    }),
    (("diabetes",), {
        "common_mismanagements": [
            "Inconsistent glucose monitoring",
            "Not adjusting insulin for activity or diet changes",
            "Missing early signs of complications",
        ],
        "critical_followup_items": [
            "Regular HbA1c testing",
            "Annual eye examination",
            "Foot examinations",
        ],
        "watch_warnings": [
            "Frequent hypoglycemia",
            "Persistent hyperglycemia despite treatment",
            "Symptoms of nerve damage or vision changes",
        ],
        "recommendations": [
            "Check blood glucose as recommended",
            "Never skip medication doses",
            "Inspect feet daily for injuries or sores",
        ],
        "error_risk_level": RiskLevel.HIGH,
    }),
)

DETAILED_DIAGNOSIS_PROFILES: ProfileTable = (
    (("diabet",), {
        "common_mismanagements": [
            "Inadequate blood glucose monitoring frequency",
            "Failing to adjust insulin for activity and diet changes",
            "Not recognizing or managing hypoglycemia promptly",
            "Missing early signs of diabetic complications",
        ],
        "critical_followup_items": [
            "Regular HbA1c testing (every 3-6 months)",
            "Annual comprehensive eye exam",
            "Annual comprehensive foot exam",
            "Regular kidney function monitoring",
            "Lipid profile monitoring",
        ],
        "watch_warnings": [
            "Frequent hypoglycemic episodes",
            "Persistent hyperglycemia despite treatment",
            "Symptoms of peripheral neuropathy",
            "Changes in vision",
            "Poor wound healing",
        ],
        "recommendations": [
            "Follow a consistent meal schedule and carbohydrate intake",
            "Monitor blood glucose as recommended by your provider",
            "Inspect feet daily for injuries, blisters, or sores",
            "Keep all scheduled follow-up appointments",
            "Know the symptoms of high and low blood sugar and how to respond",
        ],
        "error_risk_level": RiskLevel.HIGH,
    }),
    (("hypertens", "blood pressure"), {
        "common_mismanagements": [
            "Inconsistent blood pressure monitoring",
            "Not accounting for white coat hypertension",
            "Inadequate medication adherence",
            "Not addressing lifestyle modifications",
            "Failure to adjust medications when indicated",
        ],
        "critical_followup_items": [
            "Regular blood pressure checks",
            "Periodic kidney function testing",
            "Cardiovascular risk assessment",
            "Medication effectiveness review",
            "Adherence assessment",
        ],
        "watch_warnings": [
            "Blood pressure readings >180/120 mmHg (hypertensive crisis)",
            "Symptoms like severe headache, vision changes with high readings",
            "Consistently elevated readings despite multiple medications",
            "Orthostatic hypotension when standing",
            "Medication side effects affecting quality of life",
        ],
        "recommendations": [
            "Maintain a blood pressure log with consistent measurement technique",
            "Take medications at the same time daily",
            "Reduce sodium intake to <2000mg daily",
            "Engage in regular physical activity",
            "Monitor for medication side effects and report them",
        ],
        "error_risk_level": RiskLevel.HIGH,
    }),
    (("asthma",), {
        "common_mismanagements": [
            "Confusion between rescue and controller medications",
            "Overreliance on rescue inhalers",
            "Poor inhaler technique",
            "Not using spacers when indicated",
            "Not following asthma action plan during exacerbations",
        ],
        "critical_followup_items": [
            "Regular pulmonary function testing",
            "Inhaler technique check at each visit",
            "Review and update of asthma action plan",
            "Assessment of symptom control",
            "Evaluation of trigger avoidance",
        ],
        "watch_warnings": [
            "Using rescue inhaler more than twice weekly",
            "Nighttime awakenings due to asthma symptoms",
            "Decreasing peak flow readings",
            "Symptoms unresponsive to rescue medication",
            "Increasing need for oral corticosteroids",
        ],
        "recommendations": [
            "Take controller medications even when feeling well",
            "Have rescue inhaler available at all times",
            "Use spacer device with metered-dose inhalers when prescribed",
            "Follow asthma action plan during symptom changes",
            "Identify and avoid personal asthma triggers",
        ],
        "error_risk_level": RiskLevel.HIGH,
    }),
)


def _lookup(name: str, table: ProfileTable):
    lowered = (name or "").lower()
    for keywords, profile in table:
        if any(keyword in lowered for keyword in keywords):
            return profile
    return None


def generic_symptom_profile(symptom_name: str) -> SymptomSafetyRecord:
    return SymptomSafetyRecord(
        symptom_name=symptom_name,
        common_errors=list(GENERIC_SYMPTOM_ERRORS),
        potential_misdiagnoses=list(GENERIC_SYMPTOM_MISDIAGNOSES),
        warning_flags=list(GENERIC_SYMPTOM_WARNINGS),
        recommendations=list(GENERIC_SYMPTOM_RECOMMENDATIONS),
        risk_level=RiskLevel.MEDIUM,
    )


def basic_symptom_profile(symptom_name: str) -> SymptomSafetyRecord:
    """Local profile for a symptom; generic guidance when the symptom is unknown."""
    profile = _lookup(symptom_name, BASIC_SYMPTOM_PROFILES)
    if profile is None:
        return generic_symptom_profile(symptom_name)
    return SymptomSafetyRecord(symptom_name=symptom_name, **_copy(profile))


def detailed_symptom_profile(symptom_name: str) -> SymptomSafetyRecord:
    profile = _lookup(symptom_name, DETAILED_SYMPTOM_PROFILES)
    if profile is None:
        return basic_symptom_profile(symptom_name)
    return SymptomSafetyRecord(symptom_name=symptom_name, **_copy(profile))


def generic_diagnosis_profile(diagnosis_name: str) -> DiagnosisSafetyRecord:
    return DiagnosisSafetyRecord(
        diagnosis_name=diagnosis_name,
        common_mismanagements=list(GENERIC_DIAGNOSIS_MISMANAGEMENTS),
        critical_followup_items=list(GENERIC_DIAGNOSIS_FOLLOWUP),
        watch_warnings=list(GENERIC_DIAGNOSIS_WARNINGS),
        recommendations=list(GENERIC_DIAGNOSIS_RECOMMENDATIONS),
        error_risk_level=RiskLevel.MEDIUM,
    )


def basic_diagnosis_profile(diagnosis_name: str) -> DiagnosisSafetyRecord:
    """Local profile for a diagnosis; generic guidance when the diagnosis is unknown."""
    profile = _lookup(diagnosis_name, BASIC_DIAGNOSIS_PROFILES)
    if profile is None:
        return generic_diagnosis_profile(diagnosis_name)
    return DiagnosisSafetyRecord(diagnosis_name=diagnosis_name, **_copy(profile))


def detailed_diagnosis_profile(diagnosis_name: str) -> DiagnosisSafetyRecord:
    profile = _lookup(diagnosis_name, DETAILED_DIAGNOSIS_PROFILES)
    if profile is None:
        return basic_diagnosis_profile(diagnosis_name)
    return DiagnosisSafetyRecord(diagnosis_name=diagnosis_name, **_copy(profile))


def _copy(profile: Dict[str, Any]) -> Dict[str, Any]:
    return {key: list(value) if isinstance(value, list) else value for key, value in profile.items()}
