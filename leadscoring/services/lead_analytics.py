"""
Leads Dashboard Analytics Service

Builds the leads dashboard payload from one integration's CSV export.

Flow for a request:
1. Load the scoring configuration once (never fails, falls back to default)
2. Fetch and parse the CSV (ingestion service)
3. Filter by the inclusive date range
4. Score surveyed leads (lead scoring engine)
5. Aggregate KPIs, distributions, daily timeline and tier breakdowns

Population rules:
- KPIs, UTM distributions and the timeline use every lead in the date range
- Survey-answer distributions use surveyed leads only (non-empty gender answer)
- Score aggregates come from the scoring batch (surveyed leads only)

Distributions group empty values under "Não informado" and are ordered by count
descending; ties keep first-seen order.
"""

import logging
from collections import Counter
from datetime import date, timedelta
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from leadscoring.core.config import Settings, get_settings
from leadscoring.models.enums import QuestionKey
from leadscoring.models.schemas import (
    DistributionItem,
    LeadDistributions,
    LeadKPIs,
    LeadScoringBatch,
    LeadsDashboardResponse,
    LeadsRequest,
    TimelinePoint,
)
from leadscoring.services.ingestion import (
    LeadRecord,
    filter_by_date_range,
    ingest_leads,
    parse_lead_date,
)
from leadscoring.services.lead_scoring import is_surveyed, round_half_up, score_leads
from leadscoring.services.scoring_config import load_scoring_config


logger = logging.getLogger(__name__)

# Group name for empty values in distributions
NOT_INFORMED = "Não informado"

ORGANIC_SOURCE = "organic"

UTM_FIELDS = ("utmSource", "utmMedium", "utmContent", "utmCampaign")


# =============================================================================
# Grouping Helpers
# =============================================================================

def group_by(items: Iterable[Mapping[str, Any]], field: str) -> List[DistributionItem]:
    """
    Count items per value of ``field``.

    Args:
        items: Lead records
        field: Field to group on

    Returns:
        DistributionItem list sorted by count descending
    """
    counts: Counter = Counter()
    for item in items:
        value = str(item.get(field) or "").strip() or NOT_INFORMED
        counts[value] += 1

    return [DistributionItem(name=name, value=count) for name, count in counts.most_common()]


def build_timeline(leads: Iterable[Mapping[str, Any]]) -> List[TimelinePoint]:
    """Daily lead counts, ascending by date. Undated leads are skipped."""
    counts: Counter = Counter()
    for lead in leads:
        created = parse_lead_date(lead.get("createdAt"))
        if created is not None:
            counts[created.isoformat()] += 1

    return [TimelinePoint(date=day, leads=counts[day]) for day in sorted(counts)]


def is_organic(lead: Mapping[str, Any]) -> bool:
    """Organic = no utm_source, or utm_source "organic" (any case)."""
    source = str(lead.get("utmSource") or "").strip()
    return source == "" or source.lower() == ORGANIC_SOURCE


# =============================================================================
# KPIs and Distributions
# =============================================================================

def compute_kpis(
    leads: Sequence[Mapping[str, Any]],
    batch: LeadScoringBatch,
    today: Optional[date] = None
) -> LeadKPIs:
    """
    Compute the dashboard KPI block.

    Args:
        leads: Leads in the requested date range
        batch: Scoring batch of the same leads
        today: Reference day for leadsToday / leadsThisWeek (defaults to date.today())

    Returns:
        LeadKPIs
    """
    today = today or date.today()
    week_ago = today - timedelta(days=7)

    leads_today = 0
    leads_this_week = 0
    for lead in leads:
        created = parse_lead_date(lead.get("createdAt"))
        if created is None:
            continue
        if created >= today:
            leads_today += 1
        if created >= week_ago:
            leads_this_week += 1

    total = len(leads)
    organic = sum(1 for lead in leads if is_organic(lead))
    surveyed = len(batch.scoredLeads)
    survey_rate = round_half_up(surveyed * 1000 / total) / 10 if total else 0.0

    sources = group_by(leads, "utmSource")

    return LeadKPIs(
        totalLeads=total,
        leadsToday=leads_today,
        leadsThisWeek=leads_this_week,
        organicLeads=organic,
        paidLeads=total - organic,
        surveyRate=survey_rate,
        leadsWithSurvey=surveyed,
        topSource=sources[0].name if sources else "N/A",
        averageScore=batch.averageScore,
        hotLeadsPercentage=batch.hotLeadsPercentage,
        hotLeadsCount=batch.hotLeadsCount,
    )


def build_distributions(
    leads: Sequence[Mapping[str, Any]],
    batch: LeadScoringBatch
) -> LeadDistributions:
    """Survey distributions over surveyed leads, UTM distributions over all leads."""
    surveyed = [lead for lead in leads if is_surveyed(lead)]

    survey_distributions = {
        question.value: group_by(surveyed, question.value)
        for question in QuestionKey
    }
    utm_distributions = {field: group_by(leads, field) for field in UTM_FIELDS}

    return LeadDistributions(
        **survey_distributions,
        **utm_distributions,
        scoreDistribution=batch.scoreDistribution,
    )


def attach_scores(
    leads: Sequence[LeadRecord],
    batch: LeadScoringBatch
) -> List[Dict[str, Any]]:
    """
    Number leads from 1 and attach ``calculatedScore`` / ``scoreCategory``.

    Scores are matched by position (the batch keeps surveyed leads in input
    order); unsurveyed leads get None for both.
    """
    scored = iter(batch.scoredLeads)
    rows: List[Dict[str, Any]] = []

    for index, lead in enumerate(leads):
        score, category = None, None
        if is_surveyed(lead):
            scored_lead = next(scored)
            score = scored_lead["calculatedScore"]
            category = scored_lead["scoreCategory"]

        rows.append({
            "id": index + 1,
            **lead,
            "calculatedScore": score,
            "scoreCategory": category,
        })

    return rows


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================

async def build_leads_dashboard(
    request: LeadsRequest,
    settings: Optional[Settings] = None,
    today: Optional[date] = None
) -> LeadsDashboardResponse:
    """
    Build the full leads dashboard for a request.

    Args:
        request: Date range and optional integration id
        settings: Application settings
        today: Reference day for the KPI windows

    Returns:
        LeadsDashboardResponse

    Raises:
        IntegrationNotFoundError: Unknown or inactive integration
        CsvFetchError: CSV download failed
    """
    settings = settings or get_settings()

    logger.info(
        f"Fetching leads, dateFrom: {request.dateFrom}, dateTo: {request.dateTo}, "
        f"integrationId: {request.integrationId or 'default'}"
    )

    config = await load_scoring_config(settings)
    logger.info(
        f"Using scoring config with thresholds: hot={config.thresholds.hot:g}, "
        f"warm={config.thresholds.warm:g}"
    )

    all_leads = await ingest_leads(request.integrationId, settings)

    leads = filter_by_date_range(all_leads, request.dateFrom, request.dateTo)
    logger.info(f"Filtered to {len(leads)} leads in date range")

    batch = score_leads(leads, config)
    logger.info(
        f"Scored {len(batch.scoredLeads)} surveyed leads, average {batch.averageScore}, "
        f"{batch.hotLeadsCount} hot"
    )

    timeline = build_timeline(leads)

    response = LeadsDashboardResponse(
        kpis=compute_kpis(leads, batch, today=today),
        distributions=build_distributions(leads, batch),
        timeline=timeline,
        scoreByMedium=batch.scoreByMedium,
        scoreByContent=batch.scoreByContent,
        leads=attach_scores(leads, batch),
    )

    logger.info(f"Returning data: {len(leads)} leads, {len(timeline)} timeline points")
    return response


__all__ = [
    "NOT_INFORMED",
    "group_by",
    "build_timeline",
    "is_organic",
    "compute_kpis",
    "build_distributions",
    "attach_scores",
    "build_leads_dashboard",
]
