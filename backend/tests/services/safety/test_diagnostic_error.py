"""
Tests for diagnostic error risk.
"""

import asyncio

import httpx
import pytest

from medsafe.schemas.patient_schema import Diagnosis, Symptom
from medsafe.services.safety.diagnostic_error import (
    GENERAL_RECOMMENDATIONS,
    NO_DIAGNOSIS_CONCERN,
    OFFLINE_CONCERN,
    TELL_YOUR_DOCTOR_RECOMMENDATION,
    DiagnosticErrorAnalyzer,
    fallback_diagnostic_error_risk,
)
from medsafe.services.safety.fallbacks import FallbackTracker
from medsafe.services.safety.models import RiskLevel
from medsafe.services.sources.openfda_client import OpenFDAClient


class TestDiagnosticErrorAnalyzer:

    @pytest.fixture
    def analyzer(self, empty_sources):
        openfda, _ = empty_sources
        return DiagnosticErrorAnalyzer(openfda, FallbackTracker())

    def test_severe_symptom_without_diagnoses(self, analyzer):
        """Headache severity 9 and no diagnoses -> high risk with the evaluation concern"""
        risk = asyncio.run(analyzer.analyze([Symptom(name="headache", severity=9)], []))

        assert risk.risk_level == RiskLevel.HIGH
        assert risk.potential_concerns == [
            NO_DIAGNOSIS_CONCERN,
            "Your severe headache symptom may not be fully addressed by current diagnoses",
        ]
        assert "Discuss your severe symptoms with a healthcare provider" in risk.recommendations

    def test_unaddressed_severe_symptom(self, analyzer):
        """Severe symptom absent from every diagnosis note -> medium"""
        risk = asyncio.run(analyzer.analyze(
            [Symptom(name="Chest pain", severity=8)],
            [Diagnosis(name="Hypertension", notes="Blood pressure managed with lisinopril")],
        ))

        assert risk.risk_level == RiskLevel.MEDIUM
        assert risk.potential_concerns == [
            "Your severe Chest pain symptom may not be fully addressed by current diagnoses"
        ]

    def test_addressed_symptom_is_low(self, analyzer):
        risk = asyncio.run(analyzer.analyze(
            [Symptom(name="Chest pain", severity=8)],
            [Diagnosis(name="Angina", notes="Recurring chest pain on exertion")],
        ))
        assert risk.risk_level == RiskLevel.LOW
        assert risk.potential_concerns == []

    def test_mild_symptoms_ignored(self, analyzer):
        risk = asyncio.run(analyzer.analyze([Symptom(name="headache", severity=6)], []))
        assert risk.risk_level == RiskLevel.LOW

    def test_general_recommendations_always_present(self, analyzer):
        risk = asyncio.run(analyzer.analyze([], []))
        assert risk.recommendations == GENERAL_RECOMMENDATIONS

    def test_openfda_concerns_and_advice(self, mock_http):
        """Misdiagnosis reactions matching a symptom add a concern; label advice adds a recommendation"""
        events = {"results": [{"patient": {"reaction": [{"reactionmeddrapt": "Headache"}]}}]}
        labels = {"results": [{"patient_medication_information": ["Tell your doctor about all symptoms."]}]}

        def handler(request):
            if request.url.path.endswith("event.json"):
                return httpx.Response(200, json=events)
            return httpx.Response(200, json=labels)

        analyzer = DiagnosticErrorAnalyzer(OpenFDAClient(http_client=mock_http(handler)), FallbackTracker())
        risk = asyncio.run(analyzer.analyze([Symptom(name="headache", severity=3)], []))

        assert risk.risk_level == RiskLevel.MEDIUM
        assert risk.potential_concerns == ["Headache has been associated with diagnostic errors"]
        assert risk.recommendations[0] == TELL_YOUR_DOCTOR_RECOMMENDATION

    def test_source_failure_recorded(self, offline_sources):
        """Failed optional lookups are tracked but the analysis still completes"""
        openfda, _ = offline_sources
        tracker = FallbackTracker()
        risk = asyncio.run(DiagnosticErrorAnalyzer(openfda, tracker).analyze(
            [Symptom(name="headache", severity=9)], []
        ))

        assert risk.risk_level == RiskLevel.HIGH
        assert tracker.degraded
        assert len(tracker.reasons) == 2

    def test_no_duplicate_concerns(self, analyzer):
        risk = asyncio.run(analyzer.analyze(
            [Symptom(name="Dizziness", severity=9), Symptom(name="Dizziness", severity=8)],
            [Diagnosis(name="Anemia")],
        ))
        assert len(risk.potential_concerns) == 1


class TestFallback:

    def test_offline_fallback(self):
        risk = fallback_diagnostic_error_risk()
        assert risk.risk_level == RiskLevel.LOW
        assert risk.potential_concerns == [OFFLINE_CONCERN]
        assert len(risk.recommendations) == 2
