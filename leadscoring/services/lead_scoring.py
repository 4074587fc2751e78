"""
Lead Scoring Engine Service

Computes a weighted composite score for each surveyed lead and classifies it into
one of four tiers, then aggregates the tiers over a batch.

Pipeline per lead:
    normalize answers -> question sub-scores (0-100 each)
        -> composite = round(sum(sub_score * weight / 100))
        -> tier from thresholds (inclusive lower bounds)

Composite Score:
- Weights are percentages of each 0-100 sub-score; they are NOT normalized here.
  With the default table (sum 100) the composite is in [0, 100]; a stored table
  summing to something else shifts the scale accordingly.
- All weights zero -> composite 0.
- Rounding is half-up, so 46.5 -> 47.

Tiers (highest first):
- A - Hot Lead: score >= hot
- B - Warm: score >= warm
- C - Lukewarm: score >= lukewarm
- D - Cold: otherwise

Only surveyed leads (non-empty gender answer) are scored; the batch aggregates
never include unsurveyed leads. Scoring never raises on bad answer text or
missing fields.
"""

import math
from collections import Counter
from typing import Any, Dict, Iterable, List, Mapping, Sequence

from leadscoring.models.enums import (
    QuestionKey,
    ScoreTier,
    TIER_DISTRIBUTION_COLORS,
    TIER_DISTRIBUTION_LABELS,
)
from leadscoring.models.schemas import (
    DistributionItem,
    LeadScore,
    LeadScoringBatch,
    LeadScoringConfig,
    ScoreBreakdownRow,
    ScoringThresholds,
)
from leadscoring.services.question_scoring import (
    calculate_question_scores,
    normalize_field,
)


# Group name for leads without attribution in the breakdowns
UNATTRIBUTED_GROUP = "Direto"

# Breakdown row field per tier
_BREAKDOWN_FIELDS = {
    ScoreTier.HOT: "alto",
    ScoreTier.WARM: "medio",
    ScoreTier.LUKEWARM: "baixo",
    ScoreTier.COLD: "desqualificado",
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 going up (the dashboard's rounding)."""
    return int(math.floor(value + 0.5))


# =============================================================================
# Weight Aggregator
# =============================================================================

def calculate_composite_score(
    question_scores: Mapping[str, int],
    config: LeadScoringConfig
) -> int:
    """
    Combine question sub-scores into one weighted composite score.

    Args:
        question_scores: Sub-score per question key; missing keys count as 0
        config: Scoring configuration providing the weights

    Returns:
        Non-negative integer composite score
    """
    weighted_score = 0.0
    for question in QuestionKey:
        weight = config.questions.weight_for(question)
        weighted_score += question_scores.get(question.value, 0) * weight / 100

    return round_half_up(weighted_score)


# =============================================================================
# Tier Classifier
# =============================================================================

def classify_score(score: float, thresholds: ScoringThresholds) -> ScoreTier:
    """
    Map a composite score to its tier.

    A score equal to a threshold gets the higher tier.

    Args:
        score: Composite score
        thresholds: Tier lower bounds

    Returns:
        ScoreTier
    """
    if score >= thresholds.hot:
        return ScoreTier.HOT
    elif score >= thresholds.warm:
        return ScoreTier.WARM
    elif score >= thresholds.lukewarm:
        return ScoreTier.LUKEWARM
    else:
        return ScoreTier.COLD


# =============================================================================
# Single Lead
# =============================================================================

def is_surveyed(lead: Mapping[str, Any]) -> bool:
    """A lead answered the survey iff its gender answer is non-empty."""
    return normalize_field(lead, QuestionKey.GENDER.value) != ""


def score_lead(lead: Mapping[str, Any], config: LeadScoringConfig) -> LeadScore:
    """
    Score one lead.

    Args:
        lead: Raw lead record
        config: Scoring configuration for the batch

    Returns:
        LeadScore with composite score, tier and per-question sub-scores
    """
    question_scores = calculate_question_scores(lead)
    score = calculate_composite_score(question_scores, config)

    return LeadScore(
        score=score,
        category=classify_score(score, config.thresholds),
        questionScores=question_scores,
    )


# =============================================================================
# Aggregation
# =============================================================================

def empty_tier_counts() -> Dict[str, int]:
    return {tier.letter: 0 for tier in ScoreTier}


def merge_tier_counts(*counts: Mapping[str, int]) -> Dict[str, int]:
    """
    Sum tier counters (e.g. from independently scored partitions of a batch).

    Returns:
        Dict with A/B/C/D keys
    """
    merged = Counter(empty_tier_counts())
    for partial in counts:
        merged.update(partial)
    return dict(merged)


def build_score_distribution(tier_counts: Mapping[str, int]) -> List[DistributionItem]:
    """Build the four-slice score distribution chart data, A first."""
    return [
        DistributionItem(
            name=TIER_DISTRIBUTION_LABELS[tier],
            value=tier_counts.get(tier.letter, 0),
            color=TIER_DISTRIBUTION_COLORS[tier],
        )
        for tier in ScoreTier
    ]


def build_score_breakdown(
    scored_leads: Iterable[Mapping[str, Any]],
    field: str
) -> List[ScoreBreakdownRow]:
    """
    Count tiers per value of a categorical lead field.

    Args:
        scored_leads: Leads carrying ``scoreCategory``
        field: Grouping field (e.g. "utmMedium"); empty values group under "Direto"

    Returns:
        One row per group, sorted by total descending (ties keep first-seen order)
    """
    rows: Dict[str, ScoreBreakdownRow] = {}

    for lead in scored_leads:
        name = str(lead.get(field) or "").strip() or UNATTRIBUTED_GROUP
        row = rows.setdefault(name, ScoreBreakdownRow(name=name))
        row.total += 1

        try:
            tier = ScoreTier(lead.get("scoreCategory"))
        except ValueError:
            tier = ScoreTier.COLD
        breakdown_field = _BREAKDOWN_FIELDS[tier]
        setattr(row, breakdown_field, getattr(row, breakdown_field) + 1)

    return sorted(rows.values(), key=lambda row: row.total, reverse=True)


# =============================================================================
# Batch Scorer
# =============================================================================

def score_leads(
    leads: Sequence[Mapping[str, Any]],
    config: LeadScoringConfig
) -> LeadScoringBatch:
    """
    Score a batch of leads and aggregate the results.

    Steps:
    1. Keep surveyed leads only
    2. Score each one and attach ``calculatedScore`` / ``scoreCategory`` to a copy
    3. Aggregate tier counts, average score, hot-lead percentage and the
       utm_medium / utm_content breakdowns

    Args:
        leads: Lead records; not mutated
        config: Scoring configuration, loaded once for the batch

    Returns:
        LeadScoringBatch
    """
    scored_leads: List[Dict[str, Any]] = []
    tier_counts = empty_tier_counts()
    score_total = 0

    for lead in leads:
        if not is_surveyed(lead):
            continue

        result = score_lead(lead, config)
        scored_leads.append({
            **lead,
            "calculatedScore": result.score,
            "scoreCategory": result.category.value,
        })
        tier_counts[result.category.letter] += 1
        score_total += result.score

    surveyed_count = len(scored_leads)
    hot_count = tier_counts[ScoreTier.HOT.letter]

    average_score = round_half_up(score_total / surveyed_count) if surveyed_count else 0
    hot_percentage = round_half_up(hot_count / surveyed_count * 100) if surveyed_count else 0

    return LeadScoringBatch(
        scoredLeads=scored_leads,
        tierCounts=tier_counts,
        scoreDistribution=build_score_distribution(tier_counts),
        averageScore=average_score,
        hotLeadsCount=hot_count,
        hotLeadsPercentage=hot_percentage,
        scoreByMedium=build_score_breakdown(scored_leads, "utmMedium"),
        scoreByContent=build_score_breakdown(scored_leads, "utmContent"),
    )


__all__ = [
    "UNATTRIBUTED_GROUP",
    "round_half_up",
    "calculate_composite_score",
    "classify_score",
    "is_surveyed",
    "score_lead",
    "empty_tier_counts",
    "merge_tier_counts",
    "build_score_distribution",
    "build_score_breakdown",
    "score_leads",
]
