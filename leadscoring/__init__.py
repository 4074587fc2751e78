"""
Leads Dashboard Backend Package.

FastAPI service layer for the marketing leads dashboard: ingests survey leads
from published Google Sheets, scores them into Hot/Warm/Lukewarm/Cold tiers and
aggregates the dashboard data.

Subpackages:
    - api: FastAPI route handlers
    - core: Configuration, database, and dependencies
    - models: Pydantic schemas and enums
    - services: Business logic services
"""

__version__ = "1.0.0"
