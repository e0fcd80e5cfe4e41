"""
Tests for patient record persistence and mutations.
"""

import json

import pytest
from pydantic import ValidationError

from medsafe.schemas.patient_schema import (
    DiagnosisInput,
    MedicalHistoryInput,
    MedicationInput,
    Patient,
    PatientProfile,
    PatientProfileUpdate,
    Symptom,
    SymptomInput,
)
from medsafe.services.storage.kv_store import InMemoryStore, JsonFileStore
from medsafe.services.storage.patient_store import PatientStore
from medsafe.services.storage.record_service import (
    EntryNotFoundError,
    PatientNotFoundError,
    PatientRecordService,
    field_changes,
)


@pytest.fixture
def service():
    return PatientRecordService(PatientStore(InMemoryStore()))


@pytest.fixture
def initialized(service):
    service.initialize(PatientProfile(name="Ada Patient", date_of_birth="1980-02-01", gender="female"))
    return service


class TestStores:

    def test_in_memory_values_are_copies(self):
        store = InMemoryStore()
        value = {"allergies": ["Penicillin"]}
        store.set("patient", value)
        value["allergies"].append("Latex")
        assert store.get("patient") == {"allergies": ["Penicillin"]}
        assert store.get("missing") is None

    def test_json_file_store_persists(self, tmp_path):
        path = tmp_path / "nested" / "store.json"
        JsonFileStore(path).set("patient", {"name": "Ada"})

        assert JsonFileStore(path).get("patient") == {"name": "Ada"}
        assert json.loads(path.read_text()) == {"patient": {"name": "Ada"}}

    def test_corrupt_file_reads_as_empty(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("{not json")
        assert JsonFileStore(path).get("patient") is None

    def test_patient_saved_with_camel_keys(self):
        kv = InMemoryStore()
        PatientStore(kv).save(Patient(id="p1", date_of_birth="1990-01-01"))
        assert kv.get("patient")["dateOfBirth"] == "1990-01-01"

    def test_invalid_record_loads_as_none(self):
        kv = InMemoryStore({"patient": {"symptoms": [{"name": "Cough", "severity": 42}]}})
        assert PatientStore(kv).load() is None


class TestPatientRecordService:

    def test_uninitialized(self, service):
        assert service.get_patient() is None
        with pytest.raises(PatientNotFoundError):
            service.add_allergy("Penicillin")

    def test_initialize_assigns_id(self, initialized):
        patient = initialized.get_patient()
        assert patient.id
        assert patient.name == "Ada Patient"
        assert patient.medications == []

    def test_update_profile_keeps_unset_fields(self, initialized):
        patient = initialized.update_profile(PatientProfileUpdate(gender="other"))
        assert patient.gender == "other"
        assert patient.name == "Ada Patient"

    def test_medication_crud(self, initialized):
        med = initialized.add_medication(MedicationInput(name="Warfarin", dosage="5mg"))
        assert med.id

        updated = initialized.update_medication(med.id, {"dosage": "2.5mg", "prescribedBy": "Dr. Lee", "id": "x"})
        assert updated.id == med.id
        assert updated.dosage == "2.5mg"
        assert updated.prescribed_by == "Dr. Lee"
        assert initialized.get_patient().medications[0].dosage == "2.5mg"

        initialized.delete_medication(med.id)
        assert initialized.get_patient().medications == []

    def test_entries_get_distinct_ids(self, initialized):
        first = initialized.add_symptom(SymptomInput(name="Cough", severity=3))
        second = initialized.add_symptom(SymptomInput(name="Fever", severity=6))
        assert first.id != second.id
        assert [s.name for s in initialized.get_patient().symptoms] == ["Cough", "Fever"]

    def test_diagnosis_and_history(self, initialized):
        diagnosis = initialized.add_diagnosis(DiagnosisInput(name="Asthma", notes="Wheezing at night"))
        history = initialized.add_history(MedicalHistoryInput(type="surgery", name="Appendectomy"))

        patient = initialized.get_patient()
        assert patient.diagnoses[0].notes == "Wheezing at night"
        assert patient.medical_history[0].type == "surgery"

        initialized.delete_diagnosis(diagnosis.id)
        initialized.update_history(history.id, {"notes": "No complications"})
        patient = initialized.get_patient()
        assert patient.diagnoses == []
        assert patient.medical_history[0].notes == "No complications"

    def test_unknown_entry(self, initialized):
        with pytest.raises(EntryNotFoundError) as excinfo:
            initialized.update_symptom("nope", {"severity": 5})
        assert excinfo.value.collection == "symptoms"
        with pytest.raises(EntryNotFoundError):
            initialized.delete_history("nope")

    def test_invalid_update_leaves_record(self, initialized):
        symptom = initialized.add_symptom(SymptomInput(name="Cough", severity=2))

        with pytest.raises(ValidationError):
            initialized.update_symptom(symptom.id, {"severity": 42})

        assert initialized.get_patient().symptoms[0].severity == 2

    def test_allergies(self, initialized):
        initialized.add_allergy("Penicillin")
        patient = initialized.add_allergy("Penicillin")
        assert patient.allergies == ["Penicillin"]

        patient = initialized.delete_allergy("Penicillin")
        assert patient.allergies == []

    def test_initialize_replaces_record(self, initialized):
        initialized.add_allergy("Latex")
        initialized.initialize(PatientProfile(name="New"))
        assert initialized.get_patient().allergies == []


class TestFieldChanges:

    def test_aliases_and_unknown_keys(self):
        changes = field_changes(Symptom, {"dateRecorded": "2024-01-01", "severity": 4, "colour": "red", "id": "z"})
        assert changes == {"date_recorded": "2024-01-01", "severity": 4}
