"""
Persistence of the single patient record.
"""

import logging
from typing import Optional

from pydantic import ValidationError

from medsafe.schemas.patient_schema import Patient
from .kv_store import KeyValueStore

logger = logging.getLogger(__name__)


class PatientStore:
    """Loads and saves the whole patient record under one key."""

    def __init__(self, kv: KeyValueStore, key: str = "patient"):
        self.kv = kv
        self.key = key

    def load(self) -> Optional[Patient]:
        data = self.kv.get(self.key)
        if data is None:
            return None
        try:
            return Patient.model_validate(data)
        except ValidationError as e:
            logger.error(f"Stored patient record is invalid: {e}")
            return None

    def save(self, patient: Patient) -> None:
        self.kv.set(self.key, patient.model_dump(by_alias=True))
