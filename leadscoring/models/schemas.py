"""
Pydantic request/response models for the Leads Dashboard backend.

This module provides type-safe data validation and serialization for the scoring
configuration, the scoring engine outputs and the leads dashboard API contract.

Groups:
- Scoring configuration: QuestionWeight, ScoringQuestions, ScoringThresholds,
  LeadScoringConfig (immutable; validated at the deserialization boundary)
- Scoring outputs: LeadScore, DistributionItem, ScoreBreakdownRow, LeadScoringBatch
- Dashboard: LeadsRequest, LeadKPIs, LeadDistributions, TimelinePoint,
  LeadsDashboardResponse

Field names are camelCase to match the JSON contract consumed by the frontend.
All models use Pydantic v2 syntax.
"""

import re
from datetime import date
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from leadscoring.models.enums import QuestionKey, ScoreTier


# =============================================================================
# Scoring Configuration
# =============================================================================


class QuestionWeight(BaseModel):
    """
    Weight entry for one survey question.

    The weight is interpreted as a percentage of the question's 0-100 sub-score.
    Weights are not required to sum to 100 when scoring.
    """
    model_config = ConfigDict(frozen=True)

    weight: float = Field(..., ge=0, description="Non-negative weight, arbitrary scale")
    label: str = Field(default="", description="Display name of the question")
    description: str = Field(default="", description="Free text shown in the admin screen")


class ScoringQuestions(BaseModel):
    """Weight entries for all eleven scored questions. Every entry is required."""
    model_config = ConfigDict(frozen=True)

    creditLimit: QuestionWeight
    income: QuestionWeight
    experience: QuestionWeight
    followTime: QuestionWeight
    socialNetwork: QuestionWeight
    age: QuestionWeight
    profession: QuestionWeight
    objection: QuestionWeight
    region: QuestionWeight
    maritalStatus: QuestionWeight
    gender: QuestionWeight

    def weight_for(self, question: QuestionKey) -> float:
        """Return the configured weight for a question."""
        return getattr(self, QuestionKey(question).value).weight

    def total_weight(self) -> float:
        """Sum of all eleven weights."""
        return sum(self.weight_for(question) for question in QuestionKey)


class ScoringThresholds(BaseModel):
    """
    Lower bounds (inclusive) of each tier on the 0-100 composite scale.

    Classification assumes hot >= warm >= lukewarm >= cold but does not enforce it.
    """
    model_config = ConfigDict(frozen=True)

    hot: float = Field(..., ge=0, le=100)
    warm: float = Field(..., ge=0, le=100)
    lukewarm: float = Field(..., ge=0, le=100)
    cold: float = Field(..., ge=0, le=100)


class LeadScoringConfig(BaseModel):
    """
    Complete scoring configuration: question weights plus tier thresholds.

    Stored as JSON in app_settings under the ``lead_scoring_config`` key.
    """
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "questions": {
                    "creditLimit": {"weight": 20, "label": "Limite de Crédito", "description": ""},
                    "income": {"weight": 15, "label": "Renda Mensal", "description": ""},
                },
                "thresholds": {"hot": 80, "warm": 60, "lukewarm": 40, "cold": 0},
            }
        }
    )

    questions: ScoringQuestions
    thresholds: ScoringThresholds


# =============================================================================
# Scoring Outputs
# =============================================================================


class LeadScore(BaseModel):
    """Score of a single lead."""
    score: int = Field(..., ge=0, description="Composite score (0-100 with weights summing to 100)")
    category: ScoreTier = Field(..., description="Tier derived from the composite score")
    questionScores: Dict[str, int] = Field(
        default_factory=dict,
        description="0-100 sub-score per question"
    )


class DistributionItem(BaseModel):
    """One slice of a categorical distribution chart."""
    name: str
    value: int = Field(..., ge=0)
    color: Optional[str] = Field(default=None, description="Chart color, passed through")


class ScoreBreakdownRow(BaseModel):
    """Tier counts for one value of an attribution field (utm_medium, utm_content)."""
    name: str
    total: int = Field(default=0, ge=0)
    alto: int = Field(default=0, ge=0, description="A - Hot Lead count")
    medio: int = Field(default=0, ge=0, description="B - Warm count")
    baixo: int = Field(default=0, ge=0, description="C - Lukewarm count")
    desqualificado: int = Field(default=0, ge=0, description="D - Cold count")


class LeadScoringBatch(BaseModel):
    """Result of scoring one batch of leads."""
    scoredLeads: List[Dict[str, Any]] = Field(
        default_factory=list,
        description="Surveyed leads with calculatedScore and scoreCategory attached"
    )
    tierCounts: Dict[str, int] = Field(
        default_factory=lambda: {"A": 0, "B": 0, "C": 0, "D": 0},
        description="Lead count per tier letter"
    )
    scoreDistribution: List[DistributionItem] = Field(default_factory=list)
    averageScore: int = Field(default=0, ge=0)
    hotLeadsCount: int = Field(default=0, ge=0)
    hotLeadsPercentage: int = Field(default=0, ge=0, le=100)
    scoreByMedium: List[ScoreBreakdownRow] = Field(default_factory=list)
    scoreByContent: List[ScoreBreakdownRow] = Field(default_factory=list)


# =============================================================================
# Leads Dashboard
# =============================================================================

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class LeadsRequest(BaseModel):
    """
    Request body of POST /leads.

    Both dates are optional; when both are given dateFrom must not be after dateTo.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "dateFrom": "2025-01-01",
                "dateTo": "2025-01-31",
                "integrationId": None,
            }
        }
    )

    dateFrom: Optional[str] = Field(default=None, description="Start date (YYYY-MM-DD)")
    dateTo: Optional[str] = Field(default=None, description="End date, inclusive (YYYY-MM-DD)")
    integrationId: Optional[UUID] = Field(
        default=None,
        description="google_sheets_integrations row; default CSV when omitted"
    )

    @field_validator("dateFrom", "dateTo")
    @classmethod
    def _check_date_format(cls, value: Optional[str]) -> Optional[str]:
        if value in (None, ""):
            return None
        if not _DATE_PATTERN.match(value):
            raise ValueError("Data deve estar no formato YYYY-MM-DD")
        date.fromisoformat(value)  # rejects 2025-02-30
        return value

    @model_validator(mode="after")
    def _check_date_order(self) -> "LeadsRequest":
        if self.dateFrom and self.dateTo and self.dateFrom > self.dateTo:
            raise ValueError("Data inicial não pode ser maior que a data final")
        return self


class LeadKPIs(BaseModel):
    """Headline numbers of the leads dashboard."""
    totalLeads: int = 0
    leadsToday: int = 0
    leadsThisWeek: int = 0
    organicLeads: int = 0
    paidLeads: int = 0
    surveyRate: float = Field(default=0.0, description="Percentage of leads with survey, 1 decimal")
    leadsWithSurvey: int = 0
    topSource: str = "N/A"
    averageScore: int = 0
    hotLeadsPercentage: int = 0
    hotLeadsCount: int = 0


class LeadDistributions(BaseModel):
    """Per-field distributions. Survey fields count surveyed leads only."""
    gender: List[DistributionItem] = Field(default_factory=list)
    age: List[DistributionItem] = Field(default_factory=list)
    income: List[DistributionItem] = Field(default_factory=list)
    maritalStatus: List[DistributionItem] = Field(default_factory=list)
    profession: List[DistributionItem] = Field(default_factory=list)
    region: List[DistributionItem] = Field(default_factory=list)
    experience: List[DistributionItem] = Field(default_factory=list)
    objection: List[DistributionItem] = Field(default_factory=list)
    followTime: List[DistributionItem] = Field(default_factory=list)
    socialNetwork: List[DistributionItem] = Field(default_factory=list)
    creditLimit: List[DistributionItem] = Field(default_factory=list)
    utmSource: List[DistributionItem] = Field(default_factory=list)
    utmMedium: List[DistributionItem] = Field(default_factory=list)
    utmContent: List[DistributionItem] = Field(default_factory=list)
    utmCampaign: List[DistributionItem] = Field(default_factory=list)
    scoreDistribution: List[DistributionItem] = Field(default_factory=list)


class TimelinePoint(BaseModel):
    """Lead count for one calendar day."""
    date: str = Field(..., description="YYYY-MM-DD")
    leads: int = Field(..., ge=0)


class LeadsDashboardResponse(BaseModel):
    """Response body of POST /leads."""
    kpis: LeadKPIs
    distributions: LeadDistributions
    timeline: List[TimelinePoint] = Field(default_factory=list)
    scoreByMedium: List[ScoreBreakdownRow] = Field(default_factory=list)
    scoreByContent: List[ScoreBreakdownRow] = Field(default_factory=list)
    leads: List[Dict[str, Any]] = Field(
        default_factory=list,
        description="Filtered leads with id, raw fields and score (None when not surveyed)"
    )
