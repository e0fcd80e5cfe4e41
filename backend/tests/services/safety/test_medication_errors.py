"""
Tests for medication error risk from the reference tables.
"""

from medsafe.schemas.patient_schema import Medication
from medsafe.services.safety.medication_errors import (
    GENERIC_ERRORS,
    GENERIC_STRATEGIES,
    analyze_medication_error_risks,
    assess_medication,
    fallback_medication_error_risks,
)
from medsafe.services.safety.models import RiskLevel


class TestAssessMedication:

    def test_insulin_glargine_high_alert(self):
        """Insulin Glargine -> high-alert, high risk, insulin guidance"""
        risk = assess_medication("Insulin Glargine")

        assert risk.high_alert_status is True
        assert risk.risk_level == RiskLevel.HIGH
        assert "Dosing errors can have severe or fatal consequences" in risk.common_errors
        assert "Use insulin-specific syringes" in risk.prevention_strategies

    def test_look_alike_raises_to_medium(self):
        """LASA match lifts risk from low to medium and lists the confusions"""
        risk = assess_medication("Hydroxyzine")

        assert risk.high_alert_status is False
        assert risk.look_alike_sound_alike == ["hydralazine"]
        assert "Can be confused with hydralazine" in risk.near_misses
        assert risk.risk_level == RiskLevel.MEDIUM

    def test_lasa_does_not_lower_high_alert(self):
        """Lorazepam is high-alert and LASA; stays high"""
        risk = assess_medication("Lorazepam")
        assert risk.high_alert_status is True
        assert risk.look_alike_sound_alike == ["alprazolam"]
        assert risk.risk_level == RiskLevel.HIGH

    def test_specific_guidance_without_alert(self):
        risk = assess_medication("Metformin 500mg")
        assert risk.risk_level == RiskLevel.LOW
        assert "Sound-alike confusion with metronidazole" in risk.near_misses
        assert "Check renal function before prescribing" in risk.prevention_strategies

    def test_unknown_medication_generic_guidance(self):
        """Unmatched medications still get non-empty guidance"""
        risk = assess_medication("Vitamin D")
        assert risk.common_errors == GENERIC_ERRORS
        assert risk.prevention_strategies == GENERIC_STRATEGIES
        assert risk.near_misses
        assert risk.risk_level == RiskLevel.LOW


class TestAnalyzeMedicationErrorRisks:

    def test_one_record_per_medication(self):
        meds = [Medication(name="Warfarin"), Medication(name="Celexa")]
        risks = analyze_medication_error_risks(meds)
        assert [r.medication_name for r in risks] == ["Warfarin", "Celexa"]
        assert risks[1].look_alike_sound_alike == ["celebrex", "cerebyx"]

    def test_no_medications_general_record(self):
        risks = analyze_medication_error_risks([])
        assert len(risks) == 1
        assert risks[0].medication_name == "General Medication Safety"
        assert risks[0].risk_level == RiskLevel.MEDIUM
        assert "Wrong patient errors" in risks[0].common_errors


class TestFallback:

    def test_each_medication_kept(self):
        risks = fallback_medication_error_risks([Medication(name="Warfarin"), Medication(name=" ")])
        assert [r.medication_name for r in risks] == ["Warfarin"]
        assert risks[0].common_errors == ["Error analyzing specific risks for this medication"]

    def test_no_medications_general_record(self):
        risks = fallback_medication_error_risks([])
        assert [r.medication_name for r in risks] == ["General Medication Safety"]
