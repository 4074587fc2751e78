"""
FastAPI router module for the leads dashboard.

Implements POST /leads: fetches the leads CSV of the default export or of a
registered Google Sheets integration, filters it by date, scores surveyed
leads and returns KPIs, distributions, timeline, tier breakdowns and the lead
table in one payload.

Request body (all optional, an empty body is accepted):
    { "dateFrom": "YYYY-MM-DD", "dateTo": "YYYY-MM-DD", "integrationId": "<uuid>" }

Response shape:
    { kpis, distributions, timeline, scoreByMedium, scoreByContent, leads }

Errors:
- 404: integrationId does not match an active integration
- 422: malformed dates or dateFrom after dateTo
- 502: the CSV export could not be downloaded
- 500: anything else
"""

import logging
from typing import Optional

from fastapi import APIRouter, Body, HTTPException

from leadscoring.core.dependencies import SettingsDep
from leadscoring.models.schemas import LeadsDashboardResponse, LeadsRequest
from leadscoring.services.ingestion import CsvFetchError, IntegrationNotFoundError
from leadscoring.services.lead_analytics import build_leads_dashboard


# Configure logging
logger = logging.getLogger(__name__)


# Create router instance
router = APIRouter()


# =============================================================================
# Endpoint Implementations
# =============================================================================


@router.post("", response_model=LeadsDashboardResponse)
async def get_leads_dashboard(
    settings: SettingsDep,
    request: Optional[LeadsRequest] = Body(default=None),
) -> LeadsDashboardResponse:
    """
    Build the leads dashboard.

    Args:
        settings: Injected application settings
        request: Date range and optional integration id

    Returns:
        LeadsDashboardResponse
    """
    request = request or LeadsRequest()

    try:
        return await build_leads_dashboard(request, settings)

    except IntegrationNotFoundError as e:
        logger.warning(str(e))
        raise HTTPException(
            status_code=404,
            detail="Integration not found or inactive"
        )
    except CsvFetchError as e:
        logger.error(f"Error fetching leads: {e}")
        raise HTTPException(
            status_code=502,
            detail=str(e)
        )
    except Exception as e:
        logger.exception("Error fetching leads")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to build leads dashboard: {str(e)}"
        )


__all__ = ["router"]
