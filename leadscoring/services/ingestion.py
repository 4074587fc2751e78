"""
Lead CSV Ingestion Service

Loads lead records from a published Google Sheets CSV export.

Steps:
1. Resolve the CSV URL: the default export, or the csv_url of an active
   google_sheets_integrations row when an integration id is given
2. Download the CSV (httpx)
3. Parse it with pandas, every cell as a trimmed string
4. Rename spreadsheet headers (Portuguese survey questions) to lead field names;
   unknown headers are kept as-is

Lead records are plain ``Dict[str, str]``; missing cells become "".

Date handling: ``createdAt`` is "DD/MM/YYYY HH:MM" (spreadsheet locale) or ISO 8601.
Leads whose date cannot be parsed are dropped by date-range filters and ignored by
the timeline.
"""

import io
import logging
from datetime import date, datetime
from typing import Dict, List, Optional, Sequence, Union
from uuid import UUID

import httpx
import pandas as pd

from leadscoring.core.config import Settings, get_settings
from leadscoring.core.database import execute_query_one


logger = logging.getLogger(__name__)

# =============================================================================
# CONSTANTS - Spreadsheet Header -> Lead Field
# =============================================================================

COLUMN_MAPPING: Dict[str, str] = {
    "Nome": "name",
    "Email": "email",
    "Telefone Completo": "phone",
    "Tag": "tag",
    "utm_campaign": "utmCampaign",
    "utm_source": "utmSource",
    "utm_medium": "utmMedium",
    "utm_content": "utmContent",
    "Data de cadastro": "createdAt",
    "Qual seu gênero?": "gender",
    "Qual a sua idade?": "age",
    "Qual a sua renda mensal?": "income",
    "Qual o seu estado civil?": "maritalStatus",
    "Qual a sua profissão atual?": "profession",
    "Em que região você mora?": "region",
    "Você já investe em leilões de imóveis?": "experience",
    "Qual a sua maior objeção com leilão de imóvel?": "objection",
    "Há quanto tempo você me conhece?": "followTime",
    "Em qual rede social você mais me acompanha?": "socialNetwork",
    "Quanto você tem hoje de limite disponível no cartão de crédito?": "creditLimit",
    "Lead Scoring": "leadScoring",
}

LeadRecord = Dict[str, str]
DateLike = Union[str, date, None]


class IntegrationNotFoundError(LookupError):
    """Raised when an integration id does not match an active integration."""


class CsvFetchError(RuntimeError):
    """Raised when the CSV export cannot be downloaded."""


# =============================================================================
# SOURCE RESOLUTION AND DOWNLOAD
# =============================================================================

async def get_csv_url(
    integration_id: Optional[Union[str, UUID]] = None,
    settings: Optional[Settings] = None
) -> str:
    """
    Resolve the CSV export URL for a request.

    Args:
        integration_id: google_sheets_integrations id, or None for the default export
        settings: Settings providing the default URL

    Returns:
        CSV URL

    Raises:
        IntegrationNotFoundError: If the integration does not exist or is inactive
    """
    settings = settings or get_settings()

    if not integration_id:
        return settings.default_leads_csv_url

    row = await execute_query_one(
        """
        SELECT csv_url
        FROM google_sheets_integrations
        WHERE id = $1 AND is_active = true
        """,
        str(integration_id),
    )

    if row is None or not row["csv_url"]:
        raise IntegrationNotFoundError(f"Integration {integration_id} not found or inactive")

    return row["csv_url"]


async def fetch_csv_text(
    url: str,
    timeout: float = 30.0,
    client: Optional[httpx.AsyncClient] = None
) -> str:
    """
    Download a CSV export.

    Args:
        url: CSV URL (published sheets redirect, so redirects are followed)
        timeout: Request timeout in seconds
        client: Optional client to reuse; one is created and closed otherwise

    Returns:
        Response body as text

    Raises:
        CsvFetchError: On transport errors or non-2xx responses
    """
    try:
        if client is not None:
            response = await client.get(url, timeout=timeout, follow_redirects=True)
        else:
            async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as own_client:
                response = await own_client.get(url)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise CsvFetchError(
            f"Failed to fetch CSV: {e.response.status_code} {e.response.reason_phrase}"
        ) from e
    except httpx.HTTPError as e:
        raise CsvFetchError(f"Failed to fetch CSV: {e}") from e

    logger.info(f"Received CSV with {len(response.text)} characters")
    return response.text


# =============================================================================
# PARSING
# =============================================================================

def parse_leads_csv(csv_text: str) -> List[LeadRecord]:
    """
    Parse a leads CSV export into lead records.

    Rows with more cells than the header keep their leading cells; missing
    cells become "".

    Args:
        csv_text: CSV content, header row first

    Returns:
        List of lead records keyed by lead field name
    """
    if not csv_text or not csv_text.strip():
        return []

    try:
        n_columns = len(pd.read_csv(io.StringIO(csv_text), nrows=0).columns)
        df = pd.read_csv(
            io.StringIO(csv_text),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            index_col=False,
            engine="python",
            on_bad_lines=lambda cells: cells[:n_columns],
        )
    except pd.errors.EmptyDataError:
        return []

    logger.info(f"Found {len(df.columns)} columns in CSV")
    if df.empty:
        return []

    df.columns = [
        COLUMN_MAPPING.get(str(column).strip(), str(column).strip())
        for column in df.columns
    ]
    df = df.fillna("").apply(lambda column: column.astype(str).str.strip())

    leads = df.to_dict(orient="records")
    logger.info(f"Parsed {len(leads)} leads from CSV")
    return leads


def parse_lead_date(value: Optional[str]) -> Optional[date]:
    """
    Parse a lead ``createdAt`` value.

    Accepts "DD/MM/YYYY", "DD/MM/YYYY HH:MM" and ISO 8601.

    Returns:
        The calendar date, or None when the value cannot be parsed
    """
    if not value or not value.strip():
        return None

    value = value.strip()
    parts = value.split(" ")[0].split("/")
    if len(parts) == 3:
        try:
            day, month, year = (int(part) for part in parts)
            return date(year, month, day)
        except ValueError:
            return None

    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def _as_date(value: DateLike) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def filter_by_date_range(
    leads: Sequence[LeadRecord],
    date_from: DateLike = None,
    date_to: DateLike = None
) -> List[LeadRecord]:
    """
    Keep leads created within [date_from, date_to] (both inclusive).

    With no bounds every lead is kept, including undated ones. With any bound,
    leads without a parseable ``createdAt`` are dropped.

    Args:
        leads: Lead records
        date_from: Lower bound (date or YYYY-MM-DD)
        date_to: Upper bound (date or YYYY-MM-DD)

    Returns:
        Filtered list, input order preserved
    """
    start = _as_date(date_from)
    end = _as_date(date_to)

    if start is None and end is None:
        return list(leads)

    filtered: List[LeadRecord] = []
    for lead in leads:
        created = parse_lead_date(lead.get("createdAt"))
        if created is None:
            continue
        if start is not None and created < start:
            continue
        if end is not None and created > end:
            continue
        filtered.append(lead)

    return filtered


# =============================================================================
# MAIN INGESTION ENTRY POINT
# =============================================================================

async def ingest_leads(
    integration_id: Optional[Union[str, UUID]] = None,
    settings: Optional[Settings] = None,
    client: Optional[httpx.AsyncClient] = None
) -> List[LeadRecord]:
    """
    Fetch and parse the leads of one integration (or the default export).

    Raises:
        IntegrationNotFoundError: Unknown or inactive integration
        CsvFetchError: Download failed
    """
    settings = settings or get_settings()

    csv_url = await get_csv_url(integration_id, settings)
    logger.info(f"Using CSV URL: {csv_url[:50]}...")

    csv_text = await fetch_csv_text(
        csv_url,
        timeout=settings.csv_fetch_timeout_seconds,
        client=client,
    )
    return parse_leads_csv(csv_text)


__all__ = [
    "COLUMN_MAPPING",
    "IntegrationNotFoundError",
    "CsvFetchError",
    "get_csv_url",
    "fetch_csv_text",
    "parse_leads_csv",
    "parse_lead_date",
    "filter_by_date_range",
    "ingest_leads",
]
