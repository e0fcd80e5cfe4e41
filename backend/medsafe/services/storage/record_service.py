"""
Patient record mutations.

Every mutation loads the whole record, changes it and saves it back; the
last writer wins. Entry ids are generated here.
"""

import logging
import uuid
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel

from medsafe.schemas.patient_schema import (
    Diagnosis,
    DiagnosisInput,
    MedicalHistory,
    MedicalHistoryInput,
    Medication,
    MedicationInput,
    Patient,
    PatientProfile,
    PatientProfileUpdate,
    Symptom,
    SymptomInput,
)
from .patient_store import PatientStore

logger = logging.getLogger(__name__)


class PatientNotFoundError(Exception):
    """Raised when a mutation targets a patient that hasn't been initialized."""


class EntryNotFoundError(Exception):
    def __init__(self, collection: str, entry_id: str):
        super().__init__(f"No {collection} entry with id {entry_id}")
        self.collection = collection
        self.entry_id = entry_id


# collection attribute -> entry model
COLLECTIONS: Dict[str, Type[BaseModel]] = {
    "medications": Medication,
    "symptoms": Symptom,
    "diagnoses": Diagnosis,
    "medical_history": MedicalHistory,
}


def new_id() -> str:
    return str(uuid.uuid4())


def field_changes(model: Type[BaseModel], changes: Dict[str, Any]) -> Dict[str, Any]:
    """Key changes by field name, accepting camelCase aliases; unknown keys and ids are dropped."""
    by_alias = {(info.alias or name): name for name, info in model.model_fields.items()}
    normalized = {}
    for key, value in changes.items():
        name = key if key in model.model_fields else by_alias.get(key)
        if name and name != "id":
            normalized[name] = value
    return normalized


class PatientRecordService:

    def __init__(self, store: PatientStore):
        self.store = store

    def get_patient(self) -> Optional[Patient]:
        return self.store.load()

    def _require(self) -> Patient:
        patient = self.store.load()
        if patient is None:
            raise PatientNotFoundError("No patient record has been created")
        return patient

    def initialize(self, profile: PatientProfile) -> Patient:
        """Create a fresh patient record, replacing any existing one."""
        patient = Patient.model_validate({**profile.model_dump(), "id": new_id()})
        self.store.save(patient)
        logger.info("Initialized patient record", extra={"patient_id": patient.id})
        return patient

    def update_profile(self, changes: PatientProfileUpdate) -> Patient:
        patient = self._require()
        patient = patient.model_copy(update=changes.model_dump(exclude_none=True))
        self.store.save(patient)
        return patient

    # ========================================================================
    # Collection entries
    # ========================================================================

    def _add(self, collection: str, data: BaseModel) -> BaseModel:
        patient = self._require()
        entry = COLLECTIONS[collection].model_validate({**data.model_dump(), "id": new_id()})
        getattr(patient, collection).append(entry)
        self.store.save(patient)
        return entry

    def _update(self, collection: str, entry_id: str, changes: Dict[str, Any]) -> BaseModel:
        patient = self._require()
        entries: List[BaseModel] = getattr(patient, collection)
        model = COLLECTIONS[collection]
        for index, entry in enumerate(entries):
            if entry.id == entry_id:
                merged = {**entry.model_dump(), **field_changes(model, changes)}
                entries[index] = model.model_validate(merged)
                self.store.save(patient)
                return entries[index]
        raise EntryNotFoundError(collection, entry_id)

    def _delete(self, collection: str, entry_id: str) -> None:
        patient = self._require()
        entries: List[BaseModel] = getattr(patient, collection)
        remaining = [entry for entry in entries if entry.id != entry_id]
        if len(remaining) == len(entries):
            raise EntryNotFoundError(collection, entry_id)
        setattr(patient, collection, remaining)
        self.store.save(patient)

    def add_medication(self, data: MedicationInput) -> Medication:
        return self._add("medications", data)

    def update_medication(self, entry_id: str, changes: Dict[str, Any]) -> Medication:
        return self._update("medications", entry_id, changes)

    def delete_medication(self, entry_id: str) -> None:
        self._delete("medications", entry_id)

    def add_symptom(self, data: SymptomInput) -> Symptom:
        return self._add("symptoms", data)

    def update_symptom(self, entry_id: str, changes: Dict[str, Any]) -> Symptom:
        return self._update("symptoms", entry_id, changes)

    def delete_symptom(self, entry_id: str) -> None:
        self._delete("symptoms", entry_id)

    def add_diagnosis(self, data: DiagnosisInput) -> Diagnosis:
        return self._add("diagnoses", data)

    def update_diagnosis(self, entry_id: str, changes: Dict[str, Any]) -> Diagnosis:
        return self._update("diagnoses", entry_id, changes)

    def delete_diagnosis(self, entry_id: str) -> None:
        self._delete("diagnoses", entry_id)

    def add_history(self, data: MedicalHistoryInput) -> MedicalHistory:
        return self._add("medical_history", data)

    def update_history(self, entry_id: str, changes: Dict[str, Any]) -> MedicalHistory:
        return self._update("medical_history", entry_id, changes)

    def delete_history(self, entry_id: str) -> None:
        self._delete("medical_history", entry_id)

    # ========================================================================
    # Allergies
    # ========================================================================

    def add_allergy(self, allergy: str) -> Patient:
        """Duplicates are ignored."""
        patient = self._require()
        if allergy not in patient.allergies:
            patient.allergies.append(allergy)
            self.store.save(patient)
        return patient

    def delete_allergy(self, allergy: str) -> Patient:
        patient = self._require()
        patient.allergies = [a for a in patient.allergies if a != allergy]
        self.store.save(patient)
        return patient
