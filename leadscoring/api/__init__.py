"""
Leads Dashboard API package initialization.

This package contains FastAPI router modules:
- leads: Leads dashboard (CSV ingestion, scoring, aggregation)
- scoring_config: Read and save the lead scoring configuration
"""

from fastapi import APIRouter

# Import router modules
from leadscoring.api.leads import router as leads_router
from leadscoring.api.scoring_config import router as scoring_config_router

# Create main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(leads_router, prefix="/leads", tags=["leads"])
api_router.include_router(scoring_config_router, prefix="/scoring-config", tags=["scoring-config"])

# Export all routers for selective imports
__all__ = [
    "api_router",
    "leads_router",
    "scoring_config_router",
]
