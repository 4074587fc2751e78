"""
Leads Dashboard Services Module

This module contains the business logic services of the leads dashboard.
Services are stateless; persistence goes through leadscoring.core.database.

Services:
- question_scoring: Per-question answer sub-scores (keyword rule tables)
- lead_scoring: Composite score, tier classification and batch aggregation
- scoring_config: Scoring configuration store (app_settings) with default fallback
- ingestion: Google Sheets CSV fetch, parsing and date filtering
- lead_analytics: Dashboard KPIs, distributions and timeline

All services are designed to be consumed by the API layer (leadscoring/api/).
"""

# =============================================================================
# Question Scoring Exports
# =============================================================================

from leadscoring.services.question_scoring import (
    QUESTION_RULES,
    normalize_field,
    score_question,
    calculate_question_scores,
)

# =============================================================================
# Lead Scoring Engine Exports
# =============================================================================

from leadscoring.services.lead_scoring import (
    calculate_composite_score,
    classify_score,
    is_surveyed,
    score_lead,
    score_leads,
    merge_tier_counts,
    build_score_distribution,
    build_score_breakdown,
)

# =============================================================================
# Scoring Configuration Exports
# =============================================================================

from leadscoring.services.scoring_config import (
    DEFAULT_SCORING_CONFIG,
    ScoringConfigError,
    parse_scoring_config,
    validate_scoring_config,
    load_scoring_config,
    save_scoring_config,
)

# =============================================================================
# Ingestion Exports
# =============================================================================

from leadscoring.services.ingestion import (
    COLUMN_MAPPING,
    CsvFetchError,
    IntegrationNotFoundError,
    get_csv_url,
    fetch_csv_text,
    parse_leads_csv,
    parse_lead_date,
    filter_by_date_range,
    ingest_leads,
)

# =============================================================================
# Dashboard Analytics Exports
# =============================================================================

from leadscoring.services.lead_analytics import (
    group_by,
    build_timeline,
    compute_kpis,
    build_distributions,
    build_leads_dashboard,
)


__all__ = [
    # Question scoring
    "QUESTION_RULES",
    "normalize_field",
    "score_question",
    "calculate_question_scores",
    # Lead scoring engine
    "calculate_composite_score",
    "classify_score",
    "is_surveyed",
    "score_lead",
    "score_leads",
    "merge_tier_counts",
    "build_score_distribution",
    "build_score_breakdown",
    # Scoring configuration
    "DEFAULT_SCORING_CONFIG",
    "ScoringConfigError",
    "parse_scoring_config",
    "validate_scoring_config",
    "load_scoring_config",
    "save_scoring_config",
    # Ingestion
    "COLUMN_MAPPING",
    "CsvFetchError",
    "IntegrationNotFoundError",
    "get_csv_url",
    "fetch_csv_text",
    "parse_leads_csv",
    "parse_lead_date",
    "filter_by_date_range",
    "ingest_leads",
    # Dashboard analytics
    "group_by",
    "build_timeline",
    "compute_kpis",
    "build_distributions",
    "build_leads_dashboard",
]
