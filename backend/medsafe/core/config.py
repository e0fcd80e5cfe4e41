"""
Configuration for MedSafe.
Centralizes source endpoints, timeouts, heuristic thresholds and storage.
"""

import json
import os

from dotenv import load_dotenv, find_dotenv
from pydantic import BaseModel, Field

# Load .env file (walks up directories to find it)
load_dotenv(find_dotenv())


class HttpConfig(BaseModel):
    """Outbound HTTP behaviour shared by every source client."""

    request_timeout: float = Field(
        default=8.0,
        gt=0.0,
        description="Per-call timeout in seconds for external source requests"
    )

    max_tries: int = Field(
        default=1,
        ge=1,
        description="Attempts per request (1 = no automatic retry)"
    )


class SourceConfig(BaseModel):
    """Base URLs and credentials for external data sources."""

    fda_base_url: str = Field(
        default="https://api.fda.gov",
        description="openFDA base URL"
    )

    fda_backup_url: str = Field(
        default_factory=lambda: os.environ.get("FDA_BACKUP_URL", ""),
        description="Replaces fda_base_url when set"
    )

    fda_api_key: str = Field(
        default_factory=lambda: os.environ.get("FDA_API_KEY", os.environ.get("API_KEY", "")),
        description="openFDA API key (optional, raises rate limits)"
    )

    cdc_base_url: str = Field(
        default="https://data.cdc.gov/api",
        description="CDC Socrata API base URL"
    )

    cdc_backup_url: str = Field(
        default_factory=lambda: os.environ.get("CDC_BACKUP_URL", ""),
        description="Replaces cdc_base_url when set"
    )

    ahrq_base_url: str = Field(
        default="https://data.ahrq.gov/api",
        description="AHRQ Socrata API base URL"
    )

    health_data_api_key: str = Field(
        default_factory=lambda: os.environ.get("HEALTH_DATA_API_KEY", os.environ.get("CDC_API_KEY", "")),
        description="App token sent to the CDC/AHRQ endpoints"
    )

    cdc_symptom_resource: str = Field(
        default="9j2v-jrme",
        description="CDC dataset queried for symptom guidance"
    )

    ahrq_diagnosis_resource: str = Field(
        default="9rsp-x749",
        description="AHRQ dataset queried for diagnosis guidance"
    )

    def effective_fda_url(self) -> str:
        return self.fda_backup_url or self.fda_base_url

    def effective_cdc_url(self) -> str:
        return self.cdc_backup_url or self.cdc_base_url


class AnalysisConfig(BaseModel):
    """Heuristic thresholds for the safety sub-analyses."""

    subanalysis_timeout: float = Field(
        default=8.0,
        gt=0.0,
        description="Seconds each sub-analysis may run before its local fallback is used"
    )

    severe_symptom_threshold: int = Field(
        default=7,
        ge=1,
        le=10,
        description="Symptom severity (1-10) at or above which a symptom counts as severe"
    )

    interaction_scan_limit: int = Field(
        default=5,
        ge=1,
        description="Labels fetched by the broad interaction-text scan"
    )

    max_recommendations: int = Field(default=8, description="Cap on enriched recommendations")
    max_warnings: int = Field(default=6, description="Cap on enriched warning flags")
    max_followup_items: int = Field(default=6, description="Cap on enriched diagnosis follow-up items")
    max_source_items: int = Field(default=5, description="Cap on CDC/AHRQ guidance items kept per record")


class StoreConfig(BaseModel):
    """Patient record persistence."""

    path: str = Field(
        default_factory=lambda: os.environ.get("MEDSAFE_STORE_PATH", "data/patient_store.json"),
        description="JSON file backing the key-value store"
    )

    patient_key: str = Field(
        default="patient",
        description="Key under which the patient record is stored"
    )


class SafetyConfig(BaseModel):
    """Complete configuration for the safety service."""

    http: HttpConfig = Field(default_factory=HttpConfig)
    sources: SourceConfig = Field(default_factory=SourceConfig)
    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)

    # Logging
    log_level: str = Field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO"),
        description="Root log level"
    )


# Global configuration instance
_config: SafetyConfig = SafetyConfig()


def get_config() -> SafetyConfig:
    """Get the global configuration instance."""
    return _config


def update_config(**kwargs) -> SafetyConfig:
    """Update configuration parameters.

    Nested values use dotted keys, e.g. ``update_config(**{"http.max_tries": 2})``.
    """
    global _config
    current_dict = _config.model_dump()

    for key, value in kwargs.items():
        if '.' in key:
            parts = key.split('.')
            current = current_dict
            for part in parts[:-1]:
                current = current[part]
            current[parts[-1]] = value
        else:
            current_dict[key] = value

    _config = SafetyConfig(**current_dict)
    return _config


def reset_config() -> SafetyConfig:
    """Restore defaults (re-reading the environment)."""
    global _config
    _config = SafetyConfig()
    return _config


def load_config_from_file(filepath: str) -> SafetyConfig:
    """Replace the global configuration with one read from a JSON file.

    Sections or fields the file leaves out keep their defaults.
    """
    global _config
    with open(filepath, 'r') as f:
        _config = SafetyConfig.model_validate(json.load(f))
    return _config

