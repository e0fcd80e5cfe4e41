from fastapi import APIRouter, Depends, HTTPException, status
import logging

from medsafe.api.dependencies import get_interaction_checker, get_record_service, get_safety_analyzer
from medsafe.schemas.patient_schema import SafetyAnalysisRequest
from medsafe.services.pipeline.analysis_pipeline import (
    PatientAnalysis,
    SafetyAnalyzer,
    run_patient_analysis,
    run_safety_analysis,
)
from medsafe.services.safety.interaction_checker import InteractionChecker
from medsafe.services.safety.models import SafetyAnalysisReport
from medsafe.services.storage.record_service import PatientRecordService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post(
    "/safety",
    response_model=SafetyAnalysisReport,
    status_code=status.HTTP_200_OK,
    summary="Analyze Patient Safety",
    description="Run the symptom, diagnosis, diagnostic-error, medication and infection safety analyses.",
)
async def analyze_safety(
    request: SafetyAnalysisRequest,
    analyzer: SafetyAnalyzer = Depends(get_safety_analyzer),
) -> SafetyAnalysisReport:
    """
    The report is always complete; check ``status`` to see whether any part
    fell back to local data (``partial``) or the analysis broke (``error``).
    """
    return await run_safety_analysis(
        request.symptoms,
        request.diagnoses,
        request.medications,
        request.recent_hospitalization,
        analyzer=analyzer,
    )


@router.get(
    "/patient",
    response_model=PatientAnalysis,
    summary="Analyze Stored Patient",
)
async def analyze_stored_patient(
    records: PatientRecordService = Depends(get_record_service),
    analyzer: SafetyAnalyzer = Depends(get_safety_analyzer),
    checker: InteractionChecker = Depends(get_interaction_checker),
) -> PatientAnalysis:
    """Interaction check plus safety report for the stored patient record."""
    patient = records.get_patient()
    if patient is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No patient record found. Create a patient profile first."
        )
    return await run_patient_analysis(patient, analyzer=analyzer, checker=checker)
