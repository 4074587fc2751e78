"""
Enumeration definitions for the Leads Dashboard backend.

All enums inherit from both `str` and `Enum` to ensure JSON serialization compatibility
with Pydantic models, enabling automatic serialization/deserialization in API responses.

Contents:
- QuestionKey: the eleven survey questions that feed the lead score
- ScoreTier: the four qualitative tiers a composite score is classified into
"""

from enum import Enum


class QuestionKey(str, Enum):
    """
    Survey questions scored by the lead-scoring engine.

    Values are the lead record field names produced by CSV ingestion, and also
    the keys of the ``questions`` block of a scoring configuration.
    """
    CREDIT_LIMIT = "creditLimit"
    INCOME = "income"
    EXPERIENCE = "experience"
    FOLLOW_TIME = "followTime"
    SOCIAL_NETWORK = "socialNetwork"
    AGE = "age"
    PROFESSION = "profession"
    OBJECTION = "objection"
    REGION = "region"
    MARITAL_STATUS = "maritalStatus"
    GENDER = "gender"


class ScoreTier(str, Enum):
    """
    Qualitative lead tier, highest to lowest.

    - A - Hot Lead: score >= hot threshold
    - B - Warm: score >= warm threshold
    - C - Lukewarm: score >= lukewarm threshold
    - D - Cold: everything else
    """
    HOT = "A - Hot Lead"
    WARM = "B - Warm"
    LUKEWARM = "C - Lukewarm"
    COLD = "D - Cold"

    @property
    def letter(self) -> str:
        """Single-letter code used as the tier counter key (A, B, C, D)."""
        return self.value[0]


# Dashboard labels for the score distribution chart, keyed by tier
TIER_DISTRIBUTION_LABELS = {
    ScoreTier.HOT: "A - Alto",
    ScoreTier.WARM: "B - Médio",
    ScoreTier.LUKEWARM: "C - Baixo",
    ScoreTier.COLD: "D - Desqualificado",
}

# Chart colors are passed through to the frontend untouched
TIER_DISTRIBUTION_COLORS = {
    ScoreTier.HOT: "hsl(var(--success))",
    ScoreTier.WARM: "hsl(var(--chart-2))",
    ScoreTier.LUKEWARM: "hsl(var(--chart-3))",
    ScoreTier.COLD: "hsl(var(--destructive))",
}
