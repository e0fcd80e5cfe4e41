"""
Research enrichment from NIH clinical trials and CDC WONDER statistics.

Both sources are static tables keyed by condition keywords; the enrichment
functions append research-backed recommendations and warnings to symptom and
diagnosis safety records and may raise their risk level.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from medsafe.core.config import SafetyConfig, get_config
from .models import DiagnosisSafetyRecord, RiskLevel, SymptomSafetyRecord


@dataclass(frozen=True)
class ClinicalStudy:
    title: str
    condition: str
    interventions: List[str] = field(default_factory=list)
    eligibility_criteria: List[str] = field(default_factory=list)
    resource_url: str = "https://clinicaltrials.gov/"


@dataclass(frozen=True)
class ClinicalTrialsSummary:
    studies: List[ClinicalStudy]
    evidence_grade: str  # preliminary | moderate | strong


@dataclass(frozen=True)
class HealthStatistic:
    title: str
    statistic: str
    interpretation: str


@dataclass(frozen=True)
class CdcWonderSummary:
    statistics: List[HealthStatistic]
    recommendations: List[str]
    related_topics: List[str]
    resource_url: str


# ============================================================================
# NIH clinical trials
# ============================================================================

_NIH_TRIALS = (
    (("diabetes",), ClinicalTrialsSummary(
        studies=[
            ClinicalStudy(
                "Diabetes Prevention Program (DPP)", "Type 2 Diabetes",
                ["Lifestyle modification", "Metformin therapy"],
                ["Prediabetes", "BMI ≥ 24 kg/m²"],
                "https://www.niddk.nih.gov/about-niddk/research-areas/diabetes/diabetes-prevention-program-dpp",
            ),
            ClinicalStudy(
                "Diabetes Control and Complications Trial (DCCT)", "Type 1 Diabetes",
                ["Intensive insulin therapy", "Standard insulin therapy"],
                ["Type 1 diabetes", "Age 13-39 years"],
                "https://www.niddk.nih.gov/about-niddk/research-areas/diabetes/dcct-edic-diabetes-control-complications-trial-follow-up-study",
            ),
        ],
        evidence_grade="strong",
    )),
    (("hypertension", "high blood pressure"), ClinicalTrialsSummary(
        studies=[
            ClinicalStudy(
                "Systolic Blood Pressure Intervention Trial (SPRINT)", "Hypertension",
                ["Intensive blood pressure management", "Standard blood pressure management"],
                ["SBP ≥130 mmHg", "Increased cardiovascular risk"],
                "https://www.nhlbi.nih.gov/science/systolic-blood-pressure-intervention-trial-sprint",
            ),
            ClinicalStudy(
                "Antihypertensive and Lipid-Lowering Treatment to Prevent Heart Attack Trial (ALLHAT)",
                "Hypertension",
                ["Chlorthalidone", "Amlodipine", "Lisinopril", "Doxazosin"],
                ["Age ≥55 years", "Stage 1 or 2 hypertension"],
                "https://www.nhlbi.nih.gov/research/allhat",
            ),
        ],
        evidence_grade="strong",
    )),
    (("asthma",), ClinicalTrialsSummary(
        studies=[
            ClinicalStudy(
                "Asthma Clinical Research Network Trials", "Asthma",
                ["Inhaled corticosteroids", "Long-acting beta agonists"],
                ["Asthma diagnosis", "Age ≥12 years"],
                "https://www.nhlbi.nih.gov/science/asthma-clinical-research-network-acrn",
            ),
            ClinicalStudy(
                "Inner-City Asthma Study", "Asthma in Urban Settings",
                ["Environmental control measures", "Education"],
                ["Urban residence", "Age 5-11 years with asthma"],
                "https://www.niaid.nih.gov/clinical-trials/inner-city-asthma-study",
            ),
        ],
        evidence_grade="strong",
    )),
    (("pain",), ClinicalTrialsSummary(
        studies=[
            ClinicalStudy(
                "Strategies for Prescribing Analgesics Comparative Effectiveness (SPACE)", "Chronic Pain",
                ["Opioid therapy", "Non-opioid therapy"],
                ["Chronic back pain", "Age ≥18 years"],
                "https://clinicaltrials.gov/study/NCT01583985",
            ),
            ClinicalStudy(
                "Pain Management Collaboratory", "Chronic Pain Conditions",
                ["Acupuncture", "Mindfulness", "Physical therapy"],
                ["Chronic pain", "Various specific conditions"],
                "https://painmanagementcollaboratory.org/",
            ),
        ],
        evidence_grade="moderate",
    )),
)


def clinical_trials_for(term: str) -> ClinicalTrialsSummary:
    lowered = term.lower()
    for keywords, summary in _NIH_TRIALS:
        if any(keyword in lowered for keyword in keywords):
            return summary
    return ClinicalTrialsSummary(
        studies=[
            ClinicalStudy(
                f"Recent clinical trials related to {term}", term,
                ["Various pharmacological approaches", "Non-pharmacological interventions"],
                ["Diagnosis-specific criteria", "Age and health status requirements"],
            ),
        ],
        evidence_grade="moderate",
    )


# ============================================================================
# CDC WONDER statistics
# ============================================================================

_CDC_WONDER = (
    (("diabetes",), CdcWonderSummary(
        statistics=[
            HealthStatistic(
                "Diabetes Prevalence",
                "37.3 million Americans (11.3% of the population) have diabetes",
                "A significant health burden affecting over 1 in 10 Americans",
            ),
            HealthStatistic(
                "Diabetes-Related Deaths",
                "Diabetes was the seventh leading cause of death in the United States in 2020",
                "A major contributor to mortality in the U.S.",
            ),
            HealthStatistic(
                "Diabetes Complications",
                "Diabetes is the leading cause of kidney failure, lower-limb amputations, and adult blindness",
                "Prevention and management are critical to reduce serious complications",
            ),
        ],
        recommendations=[
            "Regular screening for diabetes if you have risk factors",
            "Maintain a healthy weight through diet and physical activity",
            "Monitor blood glucose levels as recommended by your healthcare provider",
            "Take medications as prescribed",
            "Get regular check-ups for early detection of complications",
        ],
        related_topics=["Obesity", "Cardiovascular Disease", "Kidney Disease", "Eye Health", "Neuropathy"],
        resource_url="https://www.cdc.gov/diabetes/index.html",
    )),
    (("heart", "cardiac", "cardiovascular"), CdcWonderSummary(
        statistics=[
            HealthStatistic(
                "Heart Disease Mortality",
                "Heart disease is the leading cause of death in the United States, "
                "causing approximately 697,000 deaths annually",
                "The most common cause of death in the U.S.",
            ),
            HealthStatistic(
                "Heart Disease Prevalence",
                "About 20.1 million adults aged 20 and older have coronary artery disease",
                "Affects approximately 7.2% of all adults in the U.S.",
            ),
            HealthStatistic(
                "Heart Attack Incidence",
                "Approximately 805,000 Americans have a heart attack each year",
                "Equivalent to one heart attack every 40 seconds in the U.S.",
            ),
        ],
        recommendations=[
            "Control blood pressure and cholesterol levels",
            "Adopt a heart-healthy diet low in saturated fats and sodium",
            "Engage in regular physical activity",
            "Maintain a healthy weight",
            "Avoid tobacco and limit alcohol consumption",
            "Manage stress effectively",
        ],
        related_topics=["Hypertension", "Cholesterol Management", "Diabetes", "Obesity", "Physical Activity"],
        resource_url="https://www.cdc.gov/heartdisease/index.htm",
    )),
    (("cancer",), CdcWonderSummary(
        statistics=[
            HealthStatistic(
                "Cancer Mortality",
                "Cancer is the second leading cause of death in the United States, "
                "with approximately 602,350 deaths annually",
                "A major public health concern and significant cause of mortality",
            ),
            HealthStatistic(
                "Cancer Incidence",
                "Approximately 1.9 million new cancer cases are diagnosed each year",
                "Affects a substantial portion of the population annually",
            ),
            HealthStatistic(
                "Cancer Survival",
                "The 5-year relative survival rate for all cancers combined has increased "
                "from 49% in the 1970s to 67% today",
                "Significant improvements in cancer treatment and early detection",
            ),
        ],
        recommendations=[
            "Get recommended cancer screening tests",
            "Avoid tobacco and limit alcohol consumption",
            "Maintain a healthy weight through diet and physical activity",
            "Protect skin from excessive sun exposure",
            "Get vaccinated against cancer-causing infections (HPV, Hepatitis B)",
            "Know your family history and discuss cancer risk with your healthcare provider",
        ],
        related_topics=["Tobacco Control", "Diet and Nutrition", "Physical Activity", "Cancer Screening", "Immunization"],
        resource_url="https://www.cdc.gov/cancer/index.htm",
    )),
)


def cdc_wonder_for(term: str) -> CdcWonderSummary:
    lowered = term.lower()
    for keywords, summary in _CDC_WONDER:
        if any(keyword in lowered for keyword in keywords):
            return summary
    return CdcWonderSummary(
        statistics=[
            HealthStatistic(
                f"Health statistics related to {term}",
                "Health statistics vary by specific condition and demographic factors",
                "Consult CDC sources for specific information about this health topic",
            ),
        ],
        recommendations=[
            "Consult with healthcare professionals for personalized advice",
            "Follow CDC and other public health guidelines",
            "Stay informed about latest research and recommendations",
        ],
        related_topics=["Prevention", "Risk Factors", "Treatment Options", "Public Health Resources"],
        resource_url="https://wonder.cdc.gov/",
    )


# ============================================================================
# Enrichment
# ============================================================================

def enhance_symptom_record(
    record: SymptomSafetyRecord,
    config: Optional[SafetyConfig] = None,
) -> SymptomSafetyRecord:
    """Append NIH/CDC guidance to a symptom record."""
    limits = (config or get_config()).analysis
    trials = clinical_trials_for(record.symptom_name)
    wonder = cdc_wonder_for(record.symptom_name)

    recommendations = list(record.recommendations)
    warnings = list(record.warning_flags)

    for study in trials.studies:
        if study.interventions:
            recommendations.append(f"NIH research suggests considering: {', '.join(study.interventions)}")

    for stat in wonder.statistics:
        if "concern" in stat.interpretation:
            warnings.append(f"CDC data indicates: {stat.statistic}")
    recommendations.extend(f"CDC recommends: {rec}" for rec in wonder.recommendations)

    risk_level = record.risk_level
    if trials.evidence_grade == "strong" and len(trials.studies) > 1 and len(warnings) > len(record.warning_flags):
        risk_level = RiskLevel.HIGH

    return record.model_copy(update={
        "recommendations": recommendations[:limits.max_recommendations],
        "warning_flags": warnings[:limits.max_warnings],
        "risk_level": risk_level,
    })


def enhance_diagnosis_record(
    record: DiagnosisSafetyRecord,
    config: Optional[SafetyConfig] = None,
) -> DiagnosisSafetyRecord:
    """Append NIH/CDC guidance to a diagnosis record."""
    limits = (config or get_config()).analysis
    trials = clinical_trials_for(record.diagnosis_name)
    wonder = cdc_wonder_for(record.diagnosis_name)

    recommendations = list(record.recommendations)
    warnings = list(record.watch_warnings)
    followups = list(record.critical_followup_items)

    for study in trials.studies:
        if study.interventions:
            recommendations.append(
                f"Research shows these approaches may be effective: {', '.join(study.interventions)}"
            )
        if study.eligibility_criteria:
            followups.append(
                f"Monitor these factors identified in clinical research: {', '.join(study.eligibility_criteria)}"
            )

    for stat in wonder.statistics:
        if "Mortality" in stat.title or "Complication" in stat.title:
            warnings.append(f"CDC reports: {stat.statistic}")
    recommendations.extend(f"CDC recommends: {rec}" for rec in wonder.recommendations)
    if wonder.related_topics:
        followups.append(
            f"CDC identifies these related health concerns to monitor: {', '.join(wonder.related_topics)}"
        )

    risk_level = record.error_risk_level
    if any(
        "Mortality" in stat.title and ("leading cause" in stat.statistic or "significant" in stat.statistic)
        for stat in wonder.statistics
    ):
        risk_level = RiskLevel.HIGH

    return record.model_copy(update={
        "recommendations": recommendations[:limits.max_recommendations],
        "watch_warnings": warnings[:limits.max_warnings],
        "critical_followup_items": followups[:limits.max_followup_items],
        "error_risk_level": risk_level,
    })
