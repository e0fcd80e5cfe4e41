from fastapi import APIRouter, Depends
import logging

from medsafe.api.dependencies import get_interaction_checker
from medsafe.schemas.patient_schema import InteractionCheckRequest
from medsafe.services.safety.interaction_checker import InteractionChecker
from medsafe.services.safety.models import InteractionCheckResult

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post(
    "/check",
    response_model=InteractionCheckResult,
    summary="Check Medication Interactions",
    description="Look up every pair of the given medications in openFDA drug labels.",
)
async def check_interactions(
    request: InteractionCheckRequest,
    checker: InteractionChecker = Depends(get_interaction_checker),
) -> InteractionCheckResult:
    """
    Pairs whose lookups all failed are left out and counted in ``failedPairs``;
    ``warning`` is set when that happens.
    """
    return await checker.check(request.medications)
