from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """snake_case attributes, camelCase JSON."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# Patient record entries (inputs carry no id; the record service assigns one)
# ============================================================================

class MedicationInput(CamelModel):
    name: str = Field(..., min_length=1, description="Brand or generic medication name")
    dosage: str = ""
    frequency: str = ""
    start_date: str = ""
    end_date: Optional[str] = None
    prescribed_by: Optional[str] = None
    notes: Optional[str] = None


class Medication(MedicationInput):
    id: str = ""


class SymptomInput(CamelModel):
    name: str = Field(..., min_length=1)
    severity: int = Field(default=1, ge=1, le=10, description="Patient-reported severity, 1-10")
    date_recorded: str = ""
    notes: Optional[str] = None


class Symptom(SymptomInput):
    id: str = ""


class DiagnosisInput(CamelModel):
    name: str = Field(..., min_length=1)
    diagnosed_date: str = ""
    diagnosed_by: str = ""
    notes: Optional[str] = Field(default=None, description="Free text; searched for symptom mentions")


class Diagnosis(DiagnosisInput):
    id: str = ""


class MedicalHistoryInput(CamelModel):
    type: Literal["surgery", "illness", "injury", "other"] = "other"
    name: str = Field(..., min_length=1)
    date: str = ""
    notes: Optional[str] = None


class MedicalHistory(MedicalHistoryInput):
    id: str = ""


class PatientProfile(CamelModel):
    name: str = ""
    date_of_birth: str = ""
    gender: str = ""


class PatientProfileUpdate(CamelModel):
    name: Optional[str] = None
    date_of_birth: Optional[str] = None
    gender: Optional[str] = None


class Patient(PatientProfile):
    id: str = ""
    allergies: List[str] = Field(default_factory=list)
    medications: List[Medication] = Field(default_factory=list)
    symptoms: List[Symptom] = Field(default_factory=list)
    diagnoses: List[Diagnosis] = Field(default_factory=list)
    medical_history: List[MedicalHistory] = Field(default_factory=list)


# ============================================================================
# API request bodies
# ============================================================================

class SafetyAnalysisRequest(CamelModel):
    symptoms: List[Symptom] = Field(default_factory=list)
    diagnoses: List[Diagnosis] = Field(default_factory=list)
    medications: List[Medication] = Field(default_factory=list)
    recent_hospitalization: bool = False


class InteractionCheckRequest(CamelModel):
    medications: List[str] = Field(default_factory=list, description="Medication names to check pairwise")


class AllergyRequest(CamelModel):
    allergy: str = Field(..., min_length=1)
