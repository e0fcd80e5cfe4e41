from fastapi import APIRouter
from medsafe.api.routes import analysis, interactions, medications, patient

api_router = APIRouter()

api_router.include_router(analysis.router, prefix="/analysis", tags=["Analysis"])
api_router.include_router(interactions.router, prefix="/interactions", tags=["Interactions"])
api_router.include_router(medications.router, prefix="/medications", tags=["Medications"])
api_router.include_router(patient.router, prefix="/patient", tags=["Patient"])
