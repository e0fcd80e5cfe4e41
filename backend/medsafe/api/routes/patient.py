"""
Patient record API.

The service keeps a single patient record; entry ids are generated server-side.
"""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException, Response, status
from fastapi.encoders import jsonable_encoder
from pydantic import ValidationError
import logging

from medsafe.api.dependencies import get_record_service
from medsafe.schemas.patient_schema import (
    AllergyRequest,
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
from medsafe.services.storage.record_service import EntryNotFoundError, PatientNotFoundError, PatientRecordService

router = APIRouter()
logger = logging.getLogger(__name__)


def _not_found(e: Exception) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


def _invalid(e: ValidationError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail=jsonable_encoder(e.errors(include_url=False)),
    )


@router.get("", response_model=Patient)
async def get_patient(records: PatientRecordService = Depends(get_record_service)) -> Patient:
    patient = records.get_patient()
    if patient is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No patient record found")
    return patient


@router.post("", response_model=Patient, status_code=status.HTTP_201_CREATED)
async def create_patient(
    profile: PatientProfile,
    records: PatientRecordService = Depends(get_record_service),
) -> Patient:
    """Create the patient record, replacing any existing one."""
    return records.initialize(profile)


@router.patch("", response_model=Patient)
async def update_patient(
    changes: PatientProfileUpdate,
    records: PatientRecordService = Depends(get_record_service),
) -> Patient:
    try:
        return records.update_profile(changes)
    except PatientNotFoundError as e:
        raise _not_found(e)


# ============================================================================
# Medications
# ============================================================================

@router.post("/medications", response_model=Medication, status_code=status.HTTP_201_CREATED)
async def add_medication(data: MedicationInput, records: PatientRecordService = Depends(get_record_service)):
    try:
        return records.add_medication(data)
    except PatientNotFoundError as e:
        raise _not_found(e)


@router.patch("/medications/{entry_id}", response_model=Medication)
async def update_medication(
    entry_id: str,
    changes: Dict[str, Any] = Body(...),
    records: PatientRecordService = Depends(get_record_service),
):
    try:
        return records.update_medication(entry_id, changes)
    except (PatientNotFoundError, EntryNotFoundError) as e:
        raise _not_found(e)
    except ValidationError as e:
        logger.info(f"Rejected medication update for {entry_id}: {e.error_count()} invalid field(s)")
        raise _invalid(e)


@router.delete("/medications/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_medication(entry_id: str, records: PatientRecordService = Depends(get_record_service)):
    try:
        records.delete_medication(entry_id)
    except (PatientNotFoundError, EntryNotFoundError) as e:
        raise _not_found(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ============================================================================
# Symptoms
# ============================================================================

@router.post("/symptoms", response_model=Symptom, status_code=status.HTTP_201_CREATED)
async def add_symptom(data: SymptomInput, records: PatientRecordService = Depends(get_record_service)):
    try:
        return records.add_symptom(data)
    except PatientNotFoundError as e:
        raise _not_found(e)


@router.patch("/symptoms/{entry_id}", response_model=Symptom)
async def update_symptom(
    entry_id: str,
    changes: Dict[str, Any] = Body(...),
    records: PatientRecordService = Depends(get_record_service),
):
    try:
        return records.update_symptom(entry_id, changes)
    except (PatientNotFoundError, EntryNotFoundError) as e:
        raise _not_found(e)
    except ValidationError as e:
        logger.info(f"Rejected symptom update for {entry_id}: {e.error_count()} invalid field(s)")
        raise _invalid(e)


@router.delete("/symptoms/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_symptom(entry_id: str, records: PatientRecordService = Depends(get_record_service)):
    try:
        records.delete_symptom(entry_id)
    except (PatientNotFoundError, EntryNotFoundError) as e:
        raise _not_found(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ============================================================================
# Diagnoses
# ============================================================================

@router.post("/diagnoses", response_model=Diagnosis, status_code=status.HTTP_201_CREATED)
async def add_diagnosis(data: DiagnosisInput, records: PatientRecordService = Depends(get_record_service)):
    try:
        return records.add_diagnosis(data)
    except PatientNotFoundError as e:
        raise _not_found(e)


@router.patch("/diagnoses/{entry_id}", response_model=Diagnosis)
async def update_diagnosis(
    entry_id: str,
    changes: Dict[str, Any] = Body(...),
    records: PatientRecordService = Depends(get_record_service),
):
    try:
        return records.update_diagnosis(entry_id, changes)
    except (PatientNotFoundError, EntryNotFoundError) as e:
        raise _not_found(e)
    except ValidationError as e:
        logger.info(f"Rejected diagnosis update for {entry_id}: {e.error_count()} invalid field(s)")
        raise _invalid(e)


@router.delete("/diagnoses/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_diagnosis(entry_id: str, records: PatientRecordService = Depends(get_record_service)):
    try:
        records.delete_diagnosis(entry_id)
    except (PatientNotFoundError, EntryNotFoundError) as e:
        raise _not_found(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ============================================================================
# Medical history
# ============================================================================

@router.post("/history", response_model=MedicalHistory, status_code=status.HTTP_201_CREATED)
async def add_history(data: MedicalHistoryInput, records: PatientRecordService = Depends(get_record_service)):
    try:
        return records.add_history(data)
    except PatientNotFoundError as e:
        raise _not_found(e)


@router.patch("/history/{entry_id}", response_model=MedicalHistory)
async def update_history(
    entry_id: str,
    changes: Dict[str, Any] = Body(...),
    records: PatientRecordService = Depends(get_record_service),
):
    try:
        return records.update_history(entry_id, changes)
    except (PatientNotFoundError, EntryNotFoundError) as e:
        raise _not_found(e)
    except ValidationError as e:
        logger.info(f"Rejected history update for {entry_id}: {e.error_count()} invalid field(s)")
        raise _invalid(e)


@router.delete("/history/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_history(entry_id: str, records: PatientRecordService = Depends(get_record_service)):
    try:
        records.delete_history(entry_id)
    except (PatientNotFoundError, EntryNotFoundError) as e:
        raise _not_found(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ============================================================================
# Allergies
# ============================================================================

@router.post("/allergies", response_model=Patient)
async def add_allergy(request: AllergyRequest, records: PatientRecordService = Depends(get_record_service)):
    """Adding an allergy that's already listed is a no-op."""
    try:
        return records.add_allergy(request.allergy.strip())
    except PatientNotFoundError as e:
        raise _not_found(e)


@router.delete("/allergies/{allergy}", response_model=Patient)
async def delete_allergy(allergy: str, records: PatientRecordService = Depends(get_record_service)):
    try:
        return records.delete_allergy(allergy)
    except PatientNotFoundError as e:
        raise _not_found(e)
