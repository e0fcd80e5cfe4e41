"""
Tests for healthcare-associated infection risk patterns.
"""

from medsafe.schemas.patient_schema import Diagnosis, Symptom
from medsafe.services.safety.hai_data import GENERAL_PREVENTION_GUIDELINES, PREVENTION_TIPS
from medsafe.services.safety.hai_risk import analyze_hai_risks
from medsafe.services.safety.models import RiskLevel


def symptoms(*names):
    return [Symptom(name=name, severity=5) for name in names]


def diagnoses(*names):
    return [Diagnosis(name=name) for name in names]


class TestHAIPatterns:

    def test_clabsi(self):
        """Fever + chills + central line catheter -> CLABSI, medium when not hospitalized"""
        risks = analyze_hai_risks(symptoms("Fever", "Chills"), diagnoses("Central line catheter infection"))

        assert [r.hai_type for r in risks] == ["CLABSI"]
        risk = risks[0]
        assert risk.risk_level == RiskLevel.MEDIUM
        assert risk.matched_symptoms == ["Fever", "Chills"]
        assert risk.matched_diagnoses == ["Central line catheter infection"]
        assert risk.cdc_info.cdc_resource_url == "https://www.cdc.gov/hai/bsi/bsi.html"
        assert risk.prevention_tips == risk.cdc_info.patient_safety_tips

    def test_recent_hospitalization_enables_cdiff(self):
        """Diarrhea alone matches C. diff once recently hospitalized, at high risk"""
        risks = analyze_hai_risks(symptoms("Diarrhea"), [], recent_hospitalization=True)
        assert [r.hai_type for r in risks] == ["C. diff"]
        assert risks[0].risk_level == RiskLevel.HIGH

    def test_cdiff_needs_antibiotic_without_hospitalization(self):
        risks = analyze_hai_risks(symptoms("Diarrhea"), diagnoses("Antibiotic-associated colitis"))
        assert [r.hai_type for r in risks] == ["C. diff"]
        assert risks[0].matched_diagnoses == []

    def test_multiple_patterns(self):
        risks = analyze_hai_risks(
            symptoms("Wound drainage", "Skin rash"),
            diagnoses("Post-op surgical wound infection", "Staph infection"),
        )
        assert [r.hai_type for r in risks] == ["SSI", "MRSA"]


class TestHAIFallbacks:

    def test_general_concern(self):
        """HAI keywords with no specific pattern -> General HAI Concern"""
        risks = analyze_hai_risks(symptoms("Headache"), [])
        assert len(risks) == 1
        assert risks[0].hai_type == "General HAI Concern"
        assert risks[0].risk_level == RiskLevel.LOW
        assert risks[0].matched_symptoms == ["Headache"]
        assert risks[0].prevention_tips == GENERAL_PREVENTION_GUIDELINES
        assert "1 in 31" in risks[0].cdc_info.description

    def test_general_concern_when_hospitalized(self):
        risks = analyze_hai_risks([], [], recent_hospitalization=True)
        assert risks[0].hai_type == "General HAI Concern"
        assert risks[0].risk_level == RiskLevel.MEDIUM

    def test_prevention_when_nothing_matches(self):
        risks = analyze_hai_risks(symptoms("Itchy eyes"), diagnoses("Seasonal allergies"))
        assert len(risks) == 1
        assert risks[0].hai_type == "HAI Prevention"
        assert risks[0].risk_level == RiskLevel.LOW
        assert risks[0].prevention_tips == PREVENTION_TIPS
