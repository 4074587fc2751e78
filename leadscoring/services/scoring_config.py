"""
Scoring Configuration Store

Supplies the lead scoring configuration (question weights + tier thresholds) used
by one scoring batch.

The configuration lives in the app_settings table as a JSON value under a fixed
key (``lead_scoring_config`` by default). Reading is parse-or-default: a missing
row, a database error or a value that does not validate as LeadScoringConfig all
fall back to the built-in default. Lead data availability on the dashboard takes
precedence over scoring configurability, so load_scoring_config never raises.

Saving goes through validate_scoring_config first, which applies the rules the
admin screen enforces (weights summing to 100, descending thresholds). Scoring
itself stays lenient and accepts any stored weight table.
"""

import json
import logging
import math
from typing import Any, Optional

from pydantic import ValidationError

from leadscoring.core.config import Settings, get_settings
from leadscoring.core.database import execute_command, execute_query_one
from leadscoring.models.enums import QuestionKey
from leadscoring.models.schemas import (
    LeadScoringConfig,
    QuestionWeight,
    ScoringQuestions,
    ScoringThresholds,
)


logger = logging.getLogger(__name__)


# =============================================================================
# Default Configuration
# =============================================================================

# (weight, label) per question; weights sum to 100
_DEFAULT_QUESTION_WEIGHTS = {
    QuestionKey.CREDIT_LIMIT: (20, "Limite de Crédito"),
    QuestionKey.INCOME: (15, "Renda Mensal"),
    QuestionKey.EXPERIENCE: (15, "Experiência com Leilões"),
    QuestionKey.FOLLOW_TIME: (10, "Tempo de Acompanhamento"),
    QuestionKey.SOCIAL_NETWORK: (5, "Rede Social Principal"),
    QuestionKey.AGE: (10, "Idade"),
    QuestionKey.PROFESSION: (10, "Profissão"),
    QuestionKey.OBJECTION: (10, "Objeção"),
    QuestionKey.REGION: (3, "Região"),
    QuestionKey.MARITAL_STATUS: (2, "Estado Civil"),
    QuestionKey.GENDER: (0, "Gênero"),
}


def build_default_scoring_config() -> LeadScoringConfig:
    """
    Build the built-in scoring configuration.

    Returns:
        LeadScoringConfig with the default weights and thresholds
        hot=80, warm=60, lukewarm=40, cold=0
    """
    questions = ScoringQuestions(**{
        question.value: QuestionWeight(weight=weight, label=label, description="")
        for question, (weight, label) in _DEFAULT_QUESTION_WEIGHTS.items()
    })
    thresholds = ScoringThresholds(hot=80, warm=60, lukewarm=40, cold=0)
    return LeadScoringConfig(questions=questions, thresholds=thresholds)


# Frozen model; safe to share between requests
DEFAULT_SCORING_CONFIG: LeadScoringConfig = build_default_scoring_config()


class ScoringConfigError(ValueError):
    """Raised when a configuration submitted for saving breaks the admin rules."""


# =============================================================================
# Parsing and Validation
# =============================================================================

def parse_scoring_config(
    raw: Any,
    default: LeadScoringConfig = DEFAULT_SCORING_CONFIG
) -> LeadScoringConfig:
    """
    Parse a stored configuration value, falling back to ``default``.

    Args:
        raw: The app_settings value; a dict, a JSON string or None
        default: Configuration returned when ``raw`` is absent or malformed

    Returns:
        The parsed LeadScoringConfig, or ``default``
    """
    if raw is None:
        logger.info("No custom scoring config found, using default")
        return default

    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except ValueError as e:
            logger.warning(f"Stored scoring config is not valid JSON, using default: {e}")
            return default

    if not isinstance(raw, dict):
        logger.warning(f"Stored scoring config has unexpected type {type(raw).__name__}, using default")
        return default

    try:
        config = LeadScoringConfig.model_validate(raw)
    except ValidationError as e:
        logger.warning(
            f"Stored scoring config does not match the expected shape, using default: "
            f"{e.error_count()} validation error(s)"
        )
        return default

    logger.info("Using custom scoring config from database")
    return config


def validate_scoring_config(config: LeadScoringConfig) -> None:
    """
    Check a configuration against the rules applied before saving.

    - The eleven weights must sum to 100
    - Thresholds must be descending: hot >= warm >= lukewarm >= cold

    Raises:
        ScoringConfigError: On the first rule broken
    """
    total_weight = config.questions.total_weight()
    if not math.isclose(total_weight, 100):
        raise ScoringConfigError(
            f"A soma dos pesos deve ser igual a 100% (atual: {total_weight:g}%)"
        )

    thresholds = config.thresholds
    if not (thresholds.hot >= thresholds.warm >= thresholds.lukewarm >= thresholds.cold):
        raise ScoringConfigError(
            "Os limites devem ser decrescentes: hot >= warm >= lukewarm >= cold"
        )


# =============================================================================
# Persistence
# =============================================================================

async def load_scoring_config(settings: Optional[Settings] = None) -> LeadScoringConfig:
    """
    Load the scoring configuration for one batch.

    Performs a single read against app_settings. Never raises: every failure is
    logged and resolved to the default configuration.

    Args:
        settings: Settings providing the app_settings key (defaults to get_settings())

    Returns:
        The stored configuration, or DEFAULT_SCORING_CONFIG
    """
    try:
        settings = settings or get_settings()
        row = await execute_query_one(
            "SELECT value FROM app_settings WHERE key = $1",
            settings.lead_scoring_config_key,
        )
    except Exception as e:
        logger.warning(f"Error fetching scoring config, using default: {e}")
        return DEFAULT_SCORING_CONFIG

    return parse_scoring_config(row["value"] if row is not None else None)


async def save_scoring_config(
    config: LeadScoringConfig,
    settings: Optional[Settings] = None,
    updated_by: Optional[str] = None
) -> LeadScoringConfig:
    """
    Validate and upsert the scoring configuration into app_settings.

    Args:
        config: Configuration to store
        settings: Settings providing the app_settings key
        updated_by: Optional user id recorded on the row

    Returns:
        The stored configuration

    Raises:
        ScoringConfigError: If the configuration breaks the save rules
        asyncpg.PostgresError: If the upsert fails
    """
    validate_scoring_config(config)
    settings = settings or get_settings()

    await execute_command(
        """
        INSERT INTO app_settings (key, value, updated_at, updated_by)
        VALUES ($1, $2::jsonb, NOW(), $3)
        ON CONFLICT (key) DO UPDATE SET
            value = EXCLUDED.value,
            updated_at = NOW(),
            updated_by = EXCLUDED.updated_by
        """,
        settings.lead_scoring_config_key,
        json.dumps(config.model_dump()),
        updated_by,
    )

    logger.info(
        f"Saved scoring config: hot={config.thresholds.hot:g}, warm={config.thresholds.warm:g}, "
        f"lukewarm={config.thresholds.lukewarm:g}"
    )
    return config


__all__ = [
    "DEFAULT_SCORING_CONFIG",
    "ScoringConfigError",
    "build_default_scoring_config",
    "parse_scoring_config",
    "validate_scoring_config",
    "load_scoring_config",
    "save_scoring_config",
]
