"""
Question Scoring Service

Turns the free-text survey answers of a lead into one 0-100 sub-score per question.

Survey answers arrive as loosely structured, human-entered strings (spreadsheet
exports of a signup form), so each question is scored with an ordered list of
substring rules:

- The answer is trimmed and lower-cased.
- An empty answer scores 0.
- Rules are evaluated in order; the first rule with any keyword contained in the
  answer decides the score. Rules are listed highest-value first, so an answer
  carrying several signals gets the strongest one.
- A non-empty answer that matches no rule gets the question's fallback score.

The rule tables are plain data (QUESTION_RULES) and must stay in sync with the
descriptions shown in the admin scoring screen.
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Tuple

from leadscoring.models.enums import QuestionKey


# =============================================================================
# Rule Types
# =============================================================================

@dataclass(frozen=True)
class ScoringRule:
    """Scores ``score`` when any of ``keywords`` is a substring of the answer."""
    keywords: Tuple[str, ...]
    score: int

    def matches(self, answer: str) -> bool:
        return any(keyword in answer for keyword in self.keywords)


@dataclass(frozen=True)
class QuestionRuleSet:
    """Ordered rules for one question plus the score of unmatched answers."""
    rules: Tuple[ScoringRule, ...]
    fallback: int

    def evaluate(self, answer: str) -> int:
        if not answer:
            return 0
        for rule in self.rules:
            if rule.matches(answer):
                return rule.score
        return self.fallback


def _rule(score: int, *keywords: str) -> ScoringRule:
    return ScoringRule(keywords=tuple(keywords), score=score)


def _ages(start: int, end: int) -> Tuple[str, ...]:
    """Every age in [start, end] as a string, plus the bracket spellings."""
    return tuple(str(age) for age in range(start, end + 1)) + (
        f"{start} a {end}",
        f"{start}-{end}",
    )


# =============================================================================
# Rule Tables
# =============================================================================

QUESTION_RULES: Dict[QuestionKey, QuestionRuleSet] = {
    QuestionKey.CREDIT_LIMIT: QuestionRuleSet(
        rules=(
            _rule(100, "50.000", "50000", "acima de r$ 50", "acima de 50"),
            _rule(80, "30.000", "30000", "r$ 30.000", "30 mil"),
            _rule(60, "10.000", "10000", "r$ 10.000", "10 mil"),
            _rule(40, "5.000", "5000", "r$ 5.000", "5 mil"),
        ),
        fallback=20,
    ),
    QuestionKey.INCOME: QuestionRuleSet(
        rules=(
            _rule(100, "acima de r$ 20", "20.000", "20000", "acima de 20"),
            _rule(80, "r$ 10.000", "10.000", "10000", "10 mil"),
            _rule(60, "r$ 5.000", "5.000", "5000", "5 mil"),
            _rule(40, "r$ 3.000", "3.000", "3000", "3 mil"),
            _rule(20, "até r$ 3", "até 3"),
        ),
        fallback=20,
    ),
    # No catch-all: an unrecognized experience answer carries no signal
    QuestionKey.EXPERIENCE: QuestionRuleSet(
        rules=(
            _rule(100, "sim, já invisto", "sim, invisto", "já invisto"),
            _rule(80, "sim, já comprei", "já comprei"),
            _rule(55, "não, mas estou estudando", "estudando"),
            _rule(20, "não, nunca", "nunca"),
        ),
        fallback=0,
    ),
    QuestionKey.FOLLOW_TIME: QuestionRuleSet(
        rules=(
            _rule(100, "2 anos", "mais de 2", "> 2"),
            _rule(80, "1 ano", "1-2 anos", "1 a 2"),
            _rule(60, "6 meses", "6 meses - 1 ano", "6 meses a 1"),
            _rule(40, "3 meses", "3-6 meses", "3 a 6"),
            _rule(20, "menos de 3", "< 3"),
        ),
        fallback=20,
    ),
    QuestionKey.SOCIAL_NETWORK: QuestionRuleSet(
        rules=(
            _rule(100, "youtube"),
            _rule(75, "instagram"),
            _rule(75, "telegram"),
            _rule(60, "tiktok"),
            _rule(40, "facebook"),
        ),
        fallback=20,
    ),
    QuestionKey.AGE: QuestionRuleSet(
        rules=(
            _rule(100, *_ages(35, 44)),
            _rule(90, *_ages(45, 54)),
            _rule(80, *_ages(25, 34)),
            _rule(70, *_ages(55, 64)),
            _rule(50, "65", "acima de 65", "mais de 65"),
            _rule(40, *_ages(18, 24)),
        ),
        fallback=30,
    ),
    QuestionKey.PROFESSION: QuestionRuleSet(
        rules=(
            _rule(100, "empresário", "empresario", "autônomo", "autonomo", "empreendedor", "investidor"),
            _rule(90, "funcionário público", "funcionario publico", "servidor", "concursado"),
            _rule(90, "profissional liberal", "médico", "advogado", "engenheiro", "arquiteto", "dentista"),
            _rule(70, "clt", "assalariado", "empregado"),
            _rule(60, "aposentado", "pensionista"),
            _rule(40, "estudante"),
            _rule(20, "desempregado", "sem trabalho"),
        ),
        fallback=50,
    ),
    # Inverted scale: the weaker the objection, the higher the score
    QuestionKey.OBJECTION: QuestionRuleSet(
        rules=(
            _rule(100, "nenhuma", "não tenho", "sem objeção"),
            _rule(70, "tempo", "conhecimento", "não sei", "não entendo", "aprender"),
            _rule(50, "capital", "dinheiro", "grana", "recurso", "financeiro"),
            _rule(40, "medo", "receio", "insegurança"),
            _rule(20, "desconfiança", "golpe", "não confio", "fraude", "piramide"),
        ),
        fallback=50,
    ),
    QuestionKey.REGION: QuestionRuleSet(
        rules=(
            _rule(100, "são paulo", "sao paulo", "sp", "rio de janeiro", "rj"),
            _rule(
                65,
                "sul", "paraná", "parana", "santa catarina", "rio grande do sul",
                "centro-oeste", "goiás", "goias", "distrito federal", "brasília", "brasilia",
                "minas gerais", "mg",
            ),
        ),
        fallback=35,
    ),
    QuestionKey.MARITAL_STATUS: QuestionRuleSet(
        rules=(
            _rule(100, "casado", "união estável", "uniao estavel", "união", "uniao"),
            _rule(100, "divorciado", "separado", "viúvo", "viuvo"),
            _rule(50, "solteiro"),
        ),
        fallback=50,
    ),
    # Neutral: any answer scores 50, the default weight is 0
    QuestionKey.GENDER: QuestionRuleSet(rules=(), fallback=50),
}


# =============================================================================
# Field Normalizer
# =============================================================================

def normalize_field(lead: Mapping[str, Any], field: str) -> str:
    """
    Return a lead field trimmed and lower-cased.

    Missing, None and whitespace-only values all normalize to "".

    Args:
        lead: Raw lead record
        field: Field name (e.g. "creditLimit")

    Returns:
        Normalized answer text
    """
    value = lead.get(field)
    if value is None:
        return ""
    return str(value).strip().lower()


# =============================================================================
# Question Scorer
# =============================================================================

def score_question(question: QuestionKey, answer: str) -> int:
    """
    Score one normalized answer for one question.

    Args:
        question: The question being scored
        answer: Answer text, already normalized by normalize_field

    Returns:
        Integer sub-score between 0 and 100
    """
    return QUESTION_RULES[QuestionKey(question)].evaluate(answer)


def calculate_question_scores(lead: Mapping[str, Any]) -> Dict[str, int]:
    """
    Score every question of a lead.

    Args:
        lead: Raw lead record keyed by field name

    Returns:
        Dict with all eleven question keys mapped to their 0-100 sub-score
    """
    return {
        question.value: score_question(question, normalize_field(lead, question.value))
        for question in QuestionKey
    }


__all__ = [
    "ScoringRule",
    "QuestionRuleSet",
    "QUESTION_RULES",
    "normalize_field",
    "score_question",
    "calculate_question_scores",
]
