"""
FastAPI dependency injection module for the Leads Dashboard backend.

Provides reusable FastAPI dependencies so endpoint handlers receive their
configuration explicitly, and tests can swap it through
``app.dependency_overrides``.

Key Dependencies Provided:
- get_settings_dependency: Returns the cached Settings singleton
- SettingsDep: Type alias for injecting Settings into endpoints

Usage Examples:
    @router.get("/scoring-config")
    async def read_scoring_config(settings: SettingsDep) -> LeadScoringConfig:
        return await load_scoring_config(settings)
"""

from typing import Annotated

from fastapi import Depends

from leadscoring.core.config import Settings, get_settings


# =============================================================================
# Settings Dependency
# =============================================================================

def get_settings_dependency() -> Settings:
    """
    Return the Settings singleton instance.

    This is a thin wrapper around get_settings() to enable FastAPI's
    dependency override mechanism for testing:

        app.dependency_overrides[get_settings_dependency] = lambda: test_settings
    """
    return get_settings()


# =============================================================================
# Type Aliases for Dependency Injection
# =============================================================================

# Usage: async def endpoint(settings: SettingsDep)
SettingsDep = Annotated[Settings, Depends(get_settings_dependency)]
