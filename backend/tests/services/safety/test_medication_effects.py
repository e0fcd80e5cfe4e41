"""
Tests for medication effects on symptoms and diagnoses.
"""

import asyncio

import httpx

from medsafe.schemas.patient_schema import Diagnosis, Medication, Symptom
from medsafe.services.safety.fallbacks import FallbackTracker
from medsafe.services.safety.medication_effects import MedicationEffectsAnalyzer, rule_based_effects
from medsafe.services.safety.models import EffectSeverity
from medsafe.services.sources.openfda_client import OpenFDAClient

LISINOPRIL_LABEL = {
    "indications_and_usage": ["Lisinopril is indicated for the treatment of hypertension."],
    "adverse_reactions": ["The most common adverse reactions were headache, dizziness and cough."],
    "contraindications": ["Do not use in patients with a history of angioedema."],
    "precautions": ["Use with caution in patients with renal impairment."],
    "openfda": {"brand_name": ["Zestril"]},
}


def label_client(mock_http, label):
    return OpenFDAClient(http_client=mock_http(lambda request: httpx.Response(200, json={"results": [label]})))


class TestLabelEffects:

    def test_symptom_and_diagnosis_effects(self, mock_http):
        analyzer = MedicationEffectsAnalyzer(label_client(mock_http, LISINOPRIL_LABEL))

        effects = asyncio.run(analyzer.analyze(
            [Medication(name="Lisinopril")],
            [Symptom(name="Cough", severity=3)],
            [Diagnosis(name="Hypertension"), Diagnosis(name="Angioedema"), Diagnosis(name="Renal impairment")],
        ))

        assert len(effects.medication_symptom_effects) == 1
        symptom_effect = effects.medication_symptom_effects[0]
        assert symptom_effect.effect == "Lisinopril may cause or worsen Cough"
        assert symptom_effect.severity == EffectSeverity.CONCERNING

        by_diagnosis = {e.diagnosis_name: e for e in effects.medication_diagnosis_effects}
        assert by_diagnosis["Hypertension"].severity == EffectSeverity.BENEFICIAL
        assert by_diagnosis["Hypertension"].effect == "Lisinopril is commonly used to treat Hypertension"
        assert by_diagnosis["Angioedema"].severity == EffectSeverity.CONCERNING
        assert by_diagnosis["Renal impairment"].severity == EffectSeverity.NEUTRAL

    def test_label_fallback_to_sample_is_tracked(self, offline_sources):
        """openFDA down -> bundled sample label used, fallback recorded"""
        openfda, _ = offline_sources
        tracker = FallbackTracker()

        effects = asyncio.run(MedicationEffectsAnalyzer(openfda, tracker).analyze(
            [Medication(name="Advil")], [Symptom(name="nausea", severity=2)], []
        ))

        assert tracker.degraded
        assert effects.medication_symptom_effects[0].effect == "Advil may cause or worsen nausea"


class TestRuleTable:

    def test_rules_used_when_labels_say_nothing(self, empty_sources):
        openfda, _ = empty_sources
        effects = asyncio.run(MedicationEffectsAnalyzer(openfda).analyze(
            [Medication(name="Ibuprofen")], [Symptom(name="Headache", severity=4)], []
        ))

        assert effects.medication_symptom_effects[0].effect == "Ibuprofen may help relieve Headache"
        assert effects.medication_symptom_effects[0].severity == EffectSeverity.BENEFICIAL

    def test_diagnosis_rules(self):
        effects = rule_based_effects(
            [Medication(name="Atorvastatin"), Medication(name="NSAID blend")],
            [],
            [Diagnosis(name="High cholesterol"), Diagnosis(name="Peptic ulcer")],
        )
        effects_text = [e.effect for e in effects.medication_diagnosis_effects]
        assert effects_text == [
            "Atorvastatin is commonly used to treat high cholesterol",
            "NSAID blend may worsen Peptic ulcer",
        ]

    def test_no_medications_no_effects(self, empty_sources):
        openfda, _ = empty_sources
        effects = asyncio.run(MedicationEffectsAnalyzer(openfda).analyze([], [Symptom(name="Pain", severity=3)], []))
        assert effects.medication_symptom_effects == []
        assert effects.medication_diagnosis_effects == []
