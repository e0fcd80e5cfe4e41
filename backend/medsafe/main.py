from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from medsafe.api.router import api_router
from medsafe.core import logging as _logging  # noqa: F401  Initialize logging

logger = logging.getLogger(__name__)

app = FastAPI(
    title="MedSafe API",
    description="Medication interaction and patient safety analysis backed by openFDA, CDC and AHRQ data",
    version="1.0.0"
)

# CORS Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API Routers
app.include_router(api_router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    return {"status": "ok", "service": "MedSafe"}
