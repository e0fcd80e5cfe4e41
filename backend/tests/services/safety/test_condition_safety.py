"""
Tests for the symptom and diagnosis safety source chains.
"""

import asyncio

import httpx
import pytest

from medsafe.schemas.patient_schema import Diagnosis, Symptom
from medsafe.services.safety.diagnosis_safety import DiagnosisSafetyAnalyzer
from medsafe.services.safety.fallbacks import FallbackTracker
from medsafe.services.safety.mock_profiles import GENERIC_DIAGNOSIS_MISMANAGEMENTS, GENERIC_SYMPTOM_ERRORS
from medsafe.services.safety.models import RiskLevel
from medsafe.services.safety.symptom_safety import SymptomSafetyAnalyzer, record_from_events
from medsafe.services.sources.health_data_client import HealthDataClient
from medsafe.services.sources.openfda_client import OpenFDAClient


def routed(mock_http, specific=None, events=None, labels=None, rows=None):
    """Client answering each endpoint family with the given payload, or 404 when None."""
    def handler(request):
        path = request.url.path
        if path.endswith("safety") and specific is not None:
            return httpx.Response(200, json=specific)
        if path.endswith("event.json") and events is not None:
            return httpx.Response(200, json={"results": events})
        if path.endswith("label.json") and labels is not None:
            return httpx.Response(200, json={"results": labels})
        if "/resource/" in path and rows is not None:
            return httpx.Response(200, json=rows)
        return httpx.Response(404, json={})
    http = mock_http(handler)
    return OpenFDAClient(http_client=http), HealthDataClient(http_client=http)


class TestSymptomSafety:

    def test_specific_profile_wins(self, mock_http):
        profile = {
            "commonErrors": ["Missing dehydration"],
            "potentialMisdiagnoses": ["Gastroenteritis"],
            "warningFlags": ["Blood in vomit"],
            "recommendations": ["Sip fluids"],
            "riskLevel": "high",
        }
        openfda, health = routed(mock_http, specific=profile)
        tracker = FallbackTracker()

        record = asyncio.run(SymptomSafetyAnalyzer(openfda, health, tracker).analyze_one("Nausea"))

        assert record.symptom_name == "Nausea"
        assert record.common_errors == ["Missing dehydration"]
        assert record.risk_level == RiskLevel.HIGH
        assert not tracker.degraded

    def test_serious_adverse_event_is_high(self, mock_http):
        events = [{
            "serious": "1",
            "patient": {
                "reaction": [{"reactionmeddrapt": "Dizziness"}],
                "drug": [{"medicinalproduct": "Lisinopril", "drugindication": "Hypertension"}],
            },
        }]
        openfda, health = routed(mock_http, events=events)

        record = asyncio.run(SymptomSafetyAnalyzer(openfda, health).analyze_one("dizziness"))

        assert record.risk_level == RiskLevel.HIGH
        assert "This symptom has been associated with serious adverse events" in record.warning_flags
        assert "Lisinopril may cause or worsen this symptom" in record.warning_flags
        assert "Discuss Lisinopril with your doctor" in record.recommendations

    def test_cdc_rows_used_when_no_events(self, mock_http):
        rows = [
            {"recommendations": "Rest the joint", "warning_signs": "Swelling with fever"},
            {"recommendations": "Rest the joint", "warning_signs": "Inability to bear weight"},
        ]
        openfda, health = routed(mock_http, rows=rows)

        record = asyncio.run(SymptomSafetyAnalyzer(openfda, health).analyze_one("Joint stiffness"))

        assert record.risk_level == RiskLevel.MEDIUM
        assert record.warning_flags[:2] == ["Swelling with fever", "Inability to bear weight"]
        assert record.recommendations[0] == "Rest the joint"
        assert record.common_errors == GENERIC_SYMPTOM_ERRORS

    def test_nothing_found_is_generic_without_fallback(self, empty_sources):
        openfda, health = empty_sources
        tracker = FallbackTracker()

        record = asyncio.run(SymptomSafetyAnalyzer(openfda, health, tracker).analyze_one("Dizziness"))

        assert record.common_errors == GENERIC_SYMPTOM_ERRORS
        assert not tracker.degraded

    def test_offline_uses_local_profile(self, offline_sources):
        """Sources down and no sample event match -> local symptom profile, tracked as fallback"""
        openfda, health = offline_sources
        tracker = FallbackTracker()

        record = asyncio.run(SymptomSafetyAnalyzer(openfda, health, tracker).analyze_one("Back pain"))

        assert record.common_errors[0] == "Inadequate assessment of pain characteristics"
        assert tracker.degraded

    def test_offline_sample_events_used(self, offline_sources):
        openfda, health = offline_sources
        record = asyncio.run(SymptomSafetyAnalyzer(openfda, health).analyze_one("Headache"))
        assert "Ibuprofen may cause or worsen this symptom" in record.warning_flags

    def test_enrichment_caps(self, empty_sources):
        openfda, health = empty_sources
        record = asyncio.run(SymptomSafetyAnalyzer(openfda, health).analyze_one("Fatigue"))

        assert len(record.recommendations) <= 8
        assert len(record.warning_flags) <= 6
        assert any(rec.startswith("CDC recommends: ") for rec in record.recommendations)

    def test_analyze_keeps_order_and_skips_blank(self, empty_sources):
        openfda, health = empty_sources
        records = asyncio.run(SymptomSafetyAnalyzer(openfda, health).analyze(
            [Symptom(name="Cough", severity=2), Symptom(name="Fever", severity=4)]
        ))
        assert [r.symptom_name for r in records] == ["Cough", "Fever"]

    def test_event_without_matching_reaction(self):
        events = [{"patient": {"reaction": [{"reactionmeddrapt": "Rash"}]}}]
        assert record_from_events("cough", events) is None


class TestDiagnosisSafety:

    def test_labels_drive_record(self, mock_http):
        labels = [{
            "indications_and_usage": ["Treatment of hypertension in adults"],
            "warnings": ["Fetal toxicity: discontinue when pregnancy is detected"],
            "adverse_reactions": ["Dizziness"],
            "openfda": {"brand_name": ["Zestril"]},
        }]
        openfda, health = routed(mock_http, labels=labels)

        record = asyncio.run(DiagnosisSafetyAnalyzer(openfda, health).analyze_one("Hypertension"))

        assert "Medication options include Zestril" in record.recommendations
        assert record.watch_warnings[0] == "Fetal toxicity: discontinue when pregnancy is detected"
        assert record.common_mismanagements == ["Failing to monitor for side effects like: Dizziness"]
        assert record.error_risk_level == RiskLevel.MEDIUM

    def test_ahrq_rows(self, mock_http):
        rows = [{"patient_safety_recommendations": "Check feet daily", "warning_indicators": "Numbness"}]
        openfda, health = routed(mock_http, rows=rows)

        record = asyncio.run(DiagnosisSafetyAnalyzer(openfda, health).analyze_one("Neuropathy"))

        assert record.recommendations[0] == "Check feet daily"
        assert record.watch_warnings[0] == "Numbness"
        assert record.common_mismanagements == GENERIC_DIAGNOSIS_MISMANAGEMENTS

    def test_mortality_statistic_raises_risk(self, empty_sources):
        """CDC WONDER 'leading cause' mortality statistic -> high risk"""
        openfda, health = empty_sources
        record = asyncio.run(DiagnosisSafetyAnalyzer(openfda, health).analyze_one("Heart failure"))

        assert record.error_risk_level == RiskLevel.HIGH
        assert any(w.startswith("CDC reports: Heart disease is the leading cause") for w in record.watch_warnings)
        assert len(record.critical_followup_items) <= 6

    def test_offline_tracked(self, offline_sources):
        openfda, health = offline_sources
        tracker = FallbackTracker()

        records = asyncio.run(DiagnosisSafetyAnalyzer(openfda, health, tracker).analyze([Diagnosis(name="Asthma")]))

        assert len(records) == 1
        assert tracker.degraded
        assert any("openFDA drug labels unavailable" in reason for reason in tracker.reasons)

    @pytest.mark.parametrize("name", ["Diabetes", "Hypertension", "Gout"])
    def test_always_complete_record(self, empty_sources, name):
        openfda, health = empty_sources
        record = asyncio.run(DiagnosisSafetyAnalyzer(openfda, health).analyze_one(name))
        assert record.diagnosis_name == name
        assert record.common_mismanagements
        assert record.critical_followup_items
        assert record.watch_warnings
        assert record.recommendations
