"""
FastAPI dependency providers. Tests swap these out via ``app.dependency_overrides``.
"""

from medsafe.core.config import get_config
from medsafe.services.pipeline.analysis_pipeline import SafetyAnalyzer
from medsafe.services.safety.interaction_checker import InteractionChecker
from medsafe.services.sources.openfda_client import OpenFDAClient
from medsafe.services.storage.kv_store import JsonFileStore
from medsafe.services.storage.patient_store import PatientStore
from medsafe.services.storage.record_service import PatientRecordService


def get_openfda_client() -> OpenFDAClient:
    return OpenFDAClient()


def get_safety_analyzer() -> SafetyAnalyzer:
    return SafetyAnalyzer()


def get_interaction_checker() -> InteractionChecker:
    return InteractionChecker()


def get_record_service() -> PatientRecordService:
    store_config = get_config().store
    return PatientRecordService(PatientStore(JsonFileStore(store_config.path), key=store_config.patient_key))
