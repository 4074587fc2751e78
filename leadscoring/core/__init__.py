"""
Core infrastructure package for the Leads Dashboard backend.

Provides:
- Configuration management via pydantic-settings
- Async PostgreSQL database connectivity via asyncpg
- FastAPI dependency injection utilities

Re-exports allow simplified imports like:

    from leadscoring.core import get_settings, init_db, SettingsDep
"""

from leadscoring.core.config import Settings, get_settings
from leadscoring.core.database import init_db, close_db, get_db_pool
from leadscoring.core.dependencies import get_settings_dependency, SettingsDep


__all__ = [
    # Configuration management (from config.py)
    'Settings',
    'get_settings',
    # Database pool lifecycle (from database.py)
    'init_db',
    'close_db',
    'get_db_pool',
    # FastAPI dependency injection (from dependencies.py)
    'get_settings_dependency',
    'SettingsDep',
]
