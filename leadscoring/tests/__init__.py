'''
Leads Dashboard Backend Test Suite

Test Modules:
-------------
- test_question_scoring.py: Per-question keyword rule tables
  - Normalization, empty answers, first-match order, fallbacks

- test_lead_scoring.py: Lead scoring engine
  - Composite score and half-up rounding
  - Tier thresholds (inclusive lower bounds)
  - Survey gating, batch aggregates, breakdowns

- test_scoring_config.py: Scoring configuration store
  - Default table, parse-or-default, save rules, app_settings upsert

- test_ingestion.py: Google Sheets CSV ingestion
  - Header mapping, date parsing, date-range filter, httpx download

- test_lead_analytics.py: Dashboard KPIs, distributions, timeline

- test_api.py: FastAPI contract tests (POST /leads, /scoring-config)

Running Tests:
--------------
    pip install -e ".[test]"
    pytest -v

Configuration:
--------------
See conftest.py for shared fixtures and test configuration.
'''

__all__ = []
