"""
openFDA client for drug labels and adverse event reports.

Labels are returned as raw dicts; an absent field means "not reported".
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from medsafe.core.config import SafetyConfig, get_config
from .http import fetch_json

logger = logging.getLogger(__name__)

LABEL_PATH = "/drug/label.json"
EVENT_PATH = "/drug/event.json"


def label_field(label: Dict[str, Any], name: str) -> List[str]:
    """Text list for a label section, or [] when the label doesn't report it."""
    value = label.get(name)
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    return [str(item) for item in value]


def openfda_names(label: Dict[str, Any], name: str) -> List[str]:
    """Values of an ``openfda.<name>`` array such as brand_name or generic_name."""
    return label_field(label.get("openfda") or {}, name)


class OpenFDAClient:
    """
    Async client for the openFDA drug endpoints.

    The httpx client is injectable so tests can route requests through
    ``httpx.MockTransport``.
    """

    def __init__(self, http_client: Optional[httpx.AsyncClient] = None, config: Optional[SafetyConfig] = None):
        self.http_client = http_client
        self.config = config or get_config()

    @property
    def base_url(self) -> str:
        return self.config.sources.effective_fda_url().rstrip("/")

    def _params(self, search: str, limit: int) -> Dict[str, Any]:
        params: Dict[str, Any] = {"search": search, "limit": limit}
        if self.config.sources.fda_api_key:
            params["api_key"] = self.config.sources.fda_api_key
        return params

    async def _results(self, path: str, search: str, limit: int) -> List[Dict[str, Any]]:
        data = await fetch_json(
            f"{self.base_url}{path}",
            params=self._params(search, limit),
            source="openFDA",
            client=self.http_client,
            not_found={"results": []},
        )
        return list((data or {}).get("results") or [])

    async def search_labels(self, search: str, limit: int = 5) -> List[Dict[str, Any]]:
        """Search drug labels with an openFDA search expression."""
        logger.info("Searching openFDA labels", extra={"search": search, "limit": limit})
        return await self._results(LABEL_PATH, search, limit)

    async def search_events(self, search: str, limit: int = 10) -> List[Dict[str, Any]]:
        """Search adverse event reports."""
        logger.info("Searching openFDA adverse events", extra={"search": search, "limit": limit})
        return await self._results(EVENT_PATH, search, limit)

    async def get_label_by_brand(self, brand_name: str) -> Optional[Dict[str, Any]]:
        """First label whose brand name matches, or None."""
        labels = await self.search_labels(f'openfda.brand_name:"{brand_name}"', limit=1)
        return labels[0] if labels else None
