"""
Client for CDC and AHRQ public health datasets.

Covers the topic-specific CDC safety endpoints (one per symptom or diagnosis
family) and the Socrata datasets used as secondary guidance sources.
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple

import httpx

from medsafe.core.config import SafetyConfig, get_config
from .http import fetch_json

# (keywords, topic) - first match wins
SYMPTOM_TOPICS: Sequence[Tuple[Tuple[str, ...], str]] = (
    (("fever",), "fever"),
    (("cough",), "respiratory"),
    (("headache",), "neurological"),
    (("nausea", "vomit"), "gastrointestinal"),
    (("pain",), "pain"),
    (("rash", "itch"), "dermatological"),
    (("fatigue", "tired"), "general_symptoms"),
    (("dizz", "vertigo"), "neurological"),
    (("breath", "respirat"), "respiratory"),
)

# Pain is split further by body site
PAIN_SITES: Sequence[Tuple[Tuple[str, ...], str]] = (
    (("chest",), "cardiopulmonary"),
    (("abdom",), "abdominal"),
    (("joint", "muscle"), "musculoskeletal"),
)

DIAGNOSIS_TOPICS: Sequence[Tuple[Tuple[str, ...], str]] = (
    (("diabet",), "diabetes"),
    (("hypertens", "blood pressure"), "cardiovascular"),
    (("asthma",), "respiratory"),
    (("depress", "anxiety"), "mental_health"),
    (("cancer",), "cancer"),
    (("heart", "cardiac"), "cardiovascular"),
    (("arthritis", "joint"), "musculoskeletal"),
    (("copd", "pulmonary"), "respiratory"),
    (("thyroid",), "endocrine"),
)


def _topic_for(name: str, topics: Sequence[Tuple[Tuple[str, ...], str]], default: str) -> str:
    lowered = name.lower()
    for keywords, topic in topics:
        if any(keyword in lowered for keyword in keywords):
            return topic
    return default


def symptom_topic(name: str) -> str:
    topic = _topic_for(name, SYMPTOM_TOPICS, "symptom")
    if topic == "pain":
        topic = _topic_for(name, PAIN_SITES, "pain")
    return topic


def diagnosis_topic(name: str) -> str:
    return _topic_for(name, DIAGNOSIS_TOPICS, "diagnosis")


class HealthDataClient:
    """Async client for CDC / AHRQ data endpoints."""

    def __init__(self, http_client: Optional[httpx.AsyncClient] = None, config: Optional[SafetyConfig] = None):
        self.http_client = http_client
        self.config = config or get_config()

    def _headers(self) -> Optional[Dict[str, str]]:
        token = self.config.sources.health_data_api_key
        return {"X-App-Token": token} if token else None

    def symptom_specific_url(self, symptom_name: str) -> str:
        base = self.config.sources.effective_cdc_url().rstrip("/")
        return f"{base}/{symptom_topic(symptom_name)}_data/v1/symptomsafety"

    def diagnosis_specific_url(self, diagnosis_name: str) -> str:
        base = self.config.sources.effective_cdc_url().rstrip("/")
        return f"{base}/{diagnosis_topic(diagnosis_name)}_data/v1/diagnosissafety"

    async def fetch_symptom_profile(self, symptom_name: str) -> Optional[Dict[str, Any]]:
        """Topic-specific CDC safety profile for a symptom, or None."""
        data = await fetch_json(
            self.symptom_specific_url(symptom_name),
            params={"name": symptom_name},
            source="CDC",
            client=self.http_client,
            headers=self._headers(),
        )
        return data if isinstance(data, dict) and data else None

    async def fetch_diagnosis_profile(self, diagnosis_name: str) -> Optional[Dict[str, Any]]:
        """Topic-specific CDC safety profile for a diagnosis, or None."""
        data = await fetch_json(
            self.diagnosis_specific_url(diagnosis_name),
            params={"name": diagnosis_name},
            source="CDC",
            client=self.http_client,
            headers=self._headers(),
        )
        return data if isinstance(data, dict) and data else None

    async def query_symptom_guidance(self, symptom_name: str) -> List[Dict[str, Any]]:
        """Rows of the CDC symptom dataset whose condition mentions the symptom."""
        sources = self.config.sources
        url = f"{sources.effective_cdc_url().rstrip('/')}/resource/{sources.cdc_symptom_resource}.json"
        term = symptom_name.replace("'", "")
        rows = await fetch_json(
            url,
            params={"$where": f"contains(condition_or_symptom, '{term}')"},
            source="CDC",
            client=self.http_client,
            not_found=[],
            headers=self._headers(),
        )
        return list(rows or [])

    async def query_diagnosis_guidance(self, diagnosis_name: str) -> List[Dict[str, Any]]:
        """Rows of the AHRQ dataset whose medical condition mentions the diagnosis."""
        sources = self.config.sources
        url = f"{sources.ahrq_base_url.rstrip('/')}/resource/{sources.ahrq_diagnosis_resource}.json"
        term = diagnosis_name.replace("'", "")
        rows = await fetch_json(
            url,
            params={"$where": f"contains(medical_condition, '{term}')"},
            source="AHRQ",
            client=self.http_client,
            not_found=[],
            headers=self._headers(),
        )
        return list(rows or [])
