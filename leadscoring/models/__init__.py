"""
Package initialization file for the Leads Dashboard models.

Exports all Pydantic schemas and enumerations from schemas.py and enums.py so other
modules can import them from leadscoring.models directly.

Usage:
    from leadscoring.models import (
        QuestionKey,
        ScoreTier,
        LeadScoringConfig,
        LeadsDashboardResponse,
    )
"""

# =============================================================================
# Enums
# =============================================================================

from leadscoring.models.enums import (
    QuestionKey,
    ScoreTier,
    TIER_DISTRIBUTION_LABELS,
    TIER_DISTRIBUTION_COLORS,
)


# =============================================================================
# Schemas
# =============================================================================

from leadscoring.models.schemas import (
    # Scoring configuration
    QuestionWeight,
    ScoringQuestions,
    ScoringThresholds,
    LeadScoringConfig,
    # Scoring outputs
    LeadScore,
    DistributionItem,
    ScoreBreakdownRow,
    LeadScoringBatch,
    # Dashboard
    LeadsRequest,
    LeadKPIs,
    LeadDistributions,
    TimelinePoint,
    LeadsDashboardResponse,
)


__all__ = [
    # Enums
    'QuestionKey',
    'ScoreTier',
    'TIER_DISTRIBUTION_LABELS',
    'TIER_DISTRIBUTION_COLORS',
    # Scoring configuration
    'QuestionWeight',
    'ScoringQuestions',
    'ScoringThresholds',
    'LeadScoringConfig',
    # Scoring outputs
    'LeadScore',
    'DistributionItem',
    'ScoreBreakdownRow',
    'LeadScoringBatch',
    # Dashboard
    'LeadsRequest',
    'LeadKPIs',
    'LeadDistributions',
    'TimelinePoint',
    'LeadsDashboardResponse',
]
