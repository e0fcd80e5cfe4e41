"""
Medication label lookups against openFDA.

Endpoints:
- GET /api/v1/medications/search?q= - Labels matching a brand or generic name
- GET /api/v1/medications/{brand_name} - First label for a brand name
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Query, status
import logging

from medsafe.api.dependencies import get_openfda_client
from medsafe.services.sources.errors import SourceError, user_safe_message
from medsafe.services.sources.openfda_client import OpenFDAClient

router = APIRouter()
logger = logging.getLogger(__name__)


def source_error_to_http(exc: SourceError) -> HTTPException:
    return HTTPException(status_code=exc.http_status, detail=user_safe_message(exc))


@router.get("/search")
async def search_medications(
    q: str = Query(..., min_length=2, description="Brand or generic name"),
    limit: int = Query(10, ge=1, le=100),
    client: OpenFDAClient = Depends(get_openfda_client),
) -> Dict[str, List[Dict[str, Any]]]:
    term = q.replace('"', "").strip()
    try:
        labels = await client.search_labels(
            f'openfda.brand_name:"{term}" OR openfda.generic_name:"{term}"', limit=limit
        )
    except SourceError as e:
        logger.error(f"Medication search failed for {term}: {e}")
        raise source_error_to_http(e)
    return {"results": labels}


@router.get("/{brand_name}")
async def get_medication(
    brand_name: str,
    client: OpenFDAClient = Depends(get_openfda_client),
) -> Dict[str, Any]:
    try:
        label = await client.get_label_by_brand(brand_name.replace('"', "").strip())
    except SourceError as e:
        logger.error(f"Medication lookup failed for {brand_name}: {e}")
        raise source_error_to_http(e)
    if label is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No drug label found for {brand_name}"
        )
    return label
