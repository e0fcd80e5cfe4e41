"""
API tests through FastAPI's TestClient, with external sources and storage
replaced via dependency overrides.
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from medsafe.api.dependencies import (
    get_interaction_checker,
    get_openfda_client,
    get_record_service,
    get_safety_analyzer,
)
from medsafe.main import app
from medsafe.services.pipeline.analysis_pipeline import SafetyAnalyzer
from medsafe.services.safety.interaction_checker import InteractionChecker
from medsafe.services.sources.openfda_client import OpenFDAClient
from medsafe.services.storage.kv_store import InMemoryStore
from medsafe.services.storage.patient_store import PatientStore
from medsafe.services.storage.record_service import PatientRecordService

WARFARIN_LABEL = {
    "drug_interactions": [
        "Coadministration of ibuprofen with warfarin may lead to an increased risk of bleeding. "
        "Patients should avoid concurrent use unless directed by a physician."
    ],
    "openfda": {"brand_name": ["Coumadin"], "generic_name": ["WARFARIN SODIUM"]},
}


@pytest.fixture
def records():
    return PatientRecordService(PatientStore(InMemoryStore()))


@pytest.fixture
def client(empty_sources, records):
    openfda, health = empty_sources
    app.dependency_overrides[get_openfda_client] = lambda: openfda
    app.dependency_overrides[get_safety_analyzer] = lambda: SafetyAnalyzer(openfda, health)
    app.dependency_overrides[get_interaction_checker] = lambda: InteractionChecker(client=openfda)
    app.dependency_overrides[get_record_service] = lambda: records
    yield TestClient(app)
    app.dependency_overrides.clear()


def use_openfda(handler, mock_http):
    openfda = OpenFDAClient(http_client=mock_http(handler))
    app.dependency_overrides[get_openfda_client] = lambda: openfda
    app.dependency_overrides[get_interaction_checker] = lambda: InteractionChecker(client=openfda)


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "service": "MedSafe"}


class TestAnalysisRoutes:

    def test_safety_report_camel_case(self, client):
        response = client.post("/api/v1/analysis/safety", json={
            "symptoms": [{"name": "Headache", "severity": 9}],
            "diagnoses": [],
            "medications": [{"name": "Insulin Glargine"}],
            "recentHospitalization": False,
        })

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "success"
        assert data["symptomSafetyData"][0]["symptomName"] == "Headache"
        assert data["diagnosticErrorRisk"]["riskLevel"] == "high"
        assert data["medicationErrorRisks"][0]["highAlertStatus"] is True
        assert "haiRisks" in data

    def test_invalid_severity_rejected(self, client):
        response = client.post("/api/v1/analysis/safety", json={"symptoms": [{"name": "Cough", "severity": 11}]})
        assert response.status_code == 422

    def test_patient_analysis_requires_patient(self, client):
        response = client.get("/api/v1/analysis/patient")
        assert response.status_code == 404

    def test_patient_analysis(self, client):
        client.post("/api/v1/patient", json={"name": "Ada"})
        client.post("/api/v1/patient/medications", json={"name": "Warfarin"})
        client.post("/api/v1/patient/medications", json={"name": "Aspirin"})

        response = client.get("/api/v1/analysis/patient")

        assert response.status_code == 200
        data = response.json()
        assert data["interactions"]["pairsChecked"] == 1
        assert data["safety"]["status"] == "success"


class TestInteractionRoutes:

    def test_check(self, client, mock_http):
        def handler(request):
            if "warfarin" in str(request.url).lower():
                return httpx.Response(200, json={"results": [WARFARIN_LABEL]})
            return httpx.Response(404, json={})

        use_openfda(handler, mock_http)
        response = client.post("/api/v1/interactions/check", json={"medications": ["Warfarin", "Ibuprofen"]})

        assert response.status_code == 200
        data = response.json()
        assert data["pairsChecked"] == 1
        assert data["interactions"][0]["drug1"] == "Warfarin"
        assert data["interactions"][0]["severity"] == "major"

    def test_single_medication(self, client):
        response = client.post("/api/v1/interactions/check", json={"medications": ["Warfarin"]})
        assert response.json()["interactions"] == []


class TestMedicationRoutes:

    def test_search(self, client, mock_http):
        use_openfda(lambda request: httpx.Response(200, json={"results": [WARFARIN_LABEL]}), mock_http)
        response = client.get("/api/v1/medications/search", params={"q": "Coumadin"})
        assert response.status_code == 200
        assert response.json()["results"][0]["openfda"]["brand_name"] == ["Coumadin"]

    def test_unknown_brand(self, client):
        response = client.get("/api/v1/medications/Nonexistium")
        assert response.status_code == 404

    @pytest.mark.parametrize("upstream_status,expected", [(429, 429), (503, 503), (403, 502)])
    def test_source_errors_mapped(self, client, mock_http, upstream_status, expected):
        use_openfda(lambda request: httpx.Response(upstream_status, json={}), mock_http)
        response = client.get("/api/v1/medications/Coumadin")
        assert response.status_code == expected
        assert "medication database" in response.json()["detail"]

    def test_network_failure(self, client, offline_http):
        openfda = OpenFDAClient(http_client=offline_http)
        app.dependency_overrides[get_openfda_client] = lambda: openfda
        response = client.get("/api/v1/medications/search", params={"q": "Coumadin"})
        assert response.status_code == 502


class TestPatientRoutes:

    def test_profile_lifecycle(self, client):
        assert client.get("/api/v1/patient").status_code == 404

        created = client.post("/api/v1/patient", json={"name": "Ada", "dateOfBirth": "1980-02-01"})
        assert created.status_code == 201
        assert created.json()["dateOfBirth"] == "1980-02-01"

        updated = client.patch("/api/v1/patient", json={"gender": "female"})
        assert updated.json()["name"] == "Ada"
        assert updated.json()["gender"] == "female"

    def test_entries_need_patient(self, client):
        response = client.post("/api/v1/patient/symptoms", json={"name": "Cough", "severity": 2})
        assert response.status_code == 404

    def test_symptom_crud(self, client):
        client.post("/api/v1/patient", json={"name": "Ada"})

        created = client.post("/api/v1/patient/symptoms", json={"name": "Cough", "severity": 2})
        assert created.status_code == 201
        symptom_id = created.json()["id"]

        updated = client.patch(f"/api/v1/patient/symptoms/{symptom_id}", json={"severity": 6, "dateRecorded": "2024-03-01"})
        assert updated.json()["severity"] == 6
        assert updated.json()["dateRecorded"] == "2024-03-01"

        assert client.delete(f"/api/v1/patient/symptoms/{symptom_id}").status_code == 204
        assert client.get("/api/v1/patient").json()["symptoms"] == []
        assert client.delete(f"/api/v1/patient/symptoms/{symptom_id}").status_code == 404

    def test_invalid_patch_rejected(self, client):
        """Out-of-range severity -> 422 and the stored symptom is unchanged"""
        client.post("/api/v1/patient", json={"name": "Ada"})
        symptom_id = client.post("/api/v1/patient/symptoms", json={"name": "Cough", "severity": 2}).json()["id"]

        response = client.patch(f"/api/v1/patient/symptoms/{symptom_id}", json={"severity": 42})

        assert response.status_code == 422
        assert response.json()["detail"][0]["loc"] == ["severity"]
        assert client.get("/api/v1/patient").json()["symptoms"][0]["severity"] == 2

    def test_history_and_diagnoses(self, client):
        client.post("/api/v1/patient", json={"name": "Ada"})
        client.post("/api/v1/patient/diagnoses", json={"name": "Asthma", "diagnosedBy": "Dr. Lee"})
        client.post("/api/v1/patient/history", json={"type": "surgery", "name": "Appendectomy"})

        patient = client.get("/api/v1/patient").json()
        assert patient["diagnoses"][0]["diagnosedBy"] == "Dr. Lee"
        assert patient["medicalHistory"][0]["type"] == "surgery"

    def test_allergies(self, client):
        client.post("/api/v1/patient", json={"name": "Ada"})
        client.post("/api/v1/patient/allergies", json={"allergy": "Penicillin"})
        response = client.post("/api/v1/patient/allergies", json={"allergy": "Penicillin"})
        assert response.json()["allergies"] == ["Penicillin"]

        response = client.delete("/api/v1/patient/allergies/Penicillin")
        assert response.json()["allergies"] == []
