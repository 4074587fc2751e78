"""
FastAPI router module for the lead scoring configuration.

Implements GET /scoring-config (effective configuration, default included) and
PUT /scoring-config (validate and store a new configuration).

The stored configuration applies to the next POST /leads request; a batch that
is already being scored keeps the configuration it loaded.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Body, HTTPException, Query

from leadscoring.core.dependencies import SettingsDep
from leadscoring.models.schemas import LeadScoringConfig
from leadscoring.services.scoring_config import (
    ScoringConfigError,
    load_scoring_config,
    save_scoring_config,
)


# Configure logging
logger = logging.getLogger(__name__)


# Create router instance
router = APIRouter()


@router.get("", response_model=LeadScoringConfig)
async def read_scoring_config(settings: SettingsDep) -> LeadScoringConfig:
    """
    Return the configuration the next scoring batch would use.

    Falls back to the built-in default when nothing valid is stored.
    """
    return await load_scoring_config(settings)


@router.put("", response_model=LeadScoringConfig)
async def update_scoring_config(
    settings: SettingsDep,
    config: LeadScoringConfig = Body(...),
    updated_by: Optional[str] = Query(default=None, alias="updatedBy"),
) -> LeadScoringConfig:
    """
    Validate and store a scoring configuration.

    Args:
        settings: Injected application settings
        config: New configuration; weights must sum to 100 and thresholds descend
        updated_by: Optional id of the user saving the configuration

    Returns:
        The stored configuration

    Raises:
        HTTPException(400) if the configuration breaks the save rules
    """
    try:
        return await save_scoring_config(config, settings, updated_by=updated_by)

    except ScoringConfigError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Error saving scoring config")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to save scoring config: {str(e)}"
        )


__all__ = ["router"]
