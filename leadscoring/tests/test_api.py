"""
API Contract Tests for the Leads Dashboard endpoints.

Exercises the FastAPI routers through TestClient with the services mocked:
- POST /leads: body validation, error mapping (404 / 502 / 500), response shape
- GET/PUT /scoring-config: read and save, 400 on invalid configurations
- /health and /

The lifespan (database pool) is not started: TestClient is used without a
context manager.
"""

from typing import Iterator
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from leadscoring.core.dependencies import get_settings_dependency
from leadscoring.main import app
from leadscoring.services.ingestion import CsvFetchError, IntegrationNotFoundError
from leadscoring.services.lead_analytics import build_leads_dashboard
from leadscoring.services.scoring_config import DEFAULT_SCORING_CONFIG


@pytest.fixture
def client(test_settings) -> Iterator[TestClient]:
    app.dependency_overrides[get_settings_dependency] = lambda: test_settings
    yield TestClient(app)
    app.dependency_overrides.clear()


# =============================================================================
# POST /leads
# =============================================================================

class TestLeadsEndpoint:

    def test_returns_dashboard(self, client, sample_leads):
        with patch('leadscoring.services.lead_analytics.ingest_leads', new=AsyncMock(return_value=sample_leads)), \
             patch('leadscoring.services.lead_analytics.load_scoring_config',
                   new=AsyncMock(return_value=DEFAULT_SCORING_CONFIG)):
            response = client.post('/leads', json={})

        assert response.status_code == 200
        body = response.json()
        assert set(body) == {'kpis', 'distributions', 'timeline', 'scoreByMedium', 'scoreByContent', 'leads'}
        assert body['kpis']['totalLeads'] == 3
        assert body['kpis']['leadsWithSurvey'] == 2
        assert body['leads'][0]['id'] == 1
        assert body['leads'][0]['scoreCategory'] == 'A - Hot Lead'
        assert body['leads'][2]['calculatedScore'] is None
        assert body['distributions']['scoreDistribution'][0] == {
            'name': 'A - Alto', 'value': 1, 'color': 'hsl(var(--success))',
        }

    def test_empty_body_accepted(self, client):
        mock_build = AsyncMock(wraps=build_leads_dashboard)
        with patch('leadscoring.api.leads.build_leads_dashboard', new=mock_build), \
             patch('leadscoring.services.lead_analytics.ingest_leads', new=AsyncMock(return_value=[])), \
             patch('leadscoring.services.lead_analytics.load_scoring_config',
                   new=AsyncMock(return_value=DEFAULT_SCORING_CONFIG)):
            response = client.post('/leads')

        assert response.status_code == 200
        request = mock_build.call_args.args[0]
        assert request.dateFrom is None and request.integrationId is None
        assert response.json()['kpis']['topSource'] == 'N/A'

    def test_request_forwarded(self, client, test_settings):
        mock_build = AsyncMock(side_effect=IntegrationNotFoundError('missing'))
        integration_id = '7f1c2a4e-0000-4000-8000-000000000001'

        with patch('leadscoring.api.leads.build_leads_dashboard', new=mock_build):
            client.post('/leads', json={
                'dateFrom': '2025-03-01',
                'dateTo': '2025-03-31',
                'integrationId': integration_id,
            })

        request, settings = mock_build.call_args.args
        assert request.dateFrom == '2025-03-01'
        assert str(request.integrationId) == integration_id
        assert settings is test_settings

    @pytest.mark.parametrize('body', [
        {'dateFrom': '01/03/2025'},
        {'dateTo': '2025-02-30'},
        {'dateFrom': '2025-03-31', 'dateTo': '2025-03-01'},
        {'integrationId': 'not-a-uuid'},
    ])
    def test_invalid_body(self, client, body):
        assert client.post('/leads', json=body).status_code == 422

    def test_unknown_integration_is_404(self, client):
        with patch('leadscoring.api.leads.build_leads_dashboard',
                   new=AsyncMock(side_effect=IntegrationNotFoundError('missing'))):
            response = client.post('/leads', json={'integrationId': '7f1c2a4e-0000-4000-8000-000000000001'})

        assert response.status_code == 404

    def test_csv_fetch_failure_is_502(self, client):
        with patch('leadscoring.api.leads.build_leads_dashboard',
                   new=AsyncMock(side_effect=CsvFetchError('Failed to fetch CSV: 503 Service Unavailable'))):
            response = client.post('/leads', json={})

        assert response.status_code == 502
        assert '503' in response.json()['detail']

    def test_unexpected_error_is_500(self, client):
        with patch('leadscoring.api.leads.build_leads_dashboard', new=AsyncMock(side_effect=RuntimeError('boom'))):
            response = client.post('/leads', json={})

        assert response.status_code == 500


# =============================================================================
# /scoring-config
# =============================================================================

class TestScoringConfigEndpoint:

    def test_get_returns_effective_config(self, client):
        with patch('leadscoring.api.scoring_config.load_scoring_config',
                   new=AsyncMock(return_value=DEFAULT_SCORING_CONFIG)):
            response = client.get('/scoring-config')

        assert response.status_code == 200
        body = response.json()
        assert body['thresholds'] == {'hot': 80, 'warm': 60, 'lukewarm': 40, 'cold': 0}
        assert body['questions']['creditLimit']['weight'] == 20

    def test_put_saves_config(self, client, test_settings):
        mock_command = AsyncMock(return_value='INSERT 0 1')
        payload = DEFAULT_SCORING_CONFIG.model_dump()

        with patch('leadscoring.services.scoring_config.execute_command', new=mock_command):
            response = client.put('/scoring-config', params={'updatedBy': 'user-1'}, json=payload)

        assert response.status_code == 200
        assert response.json() == payload
        assert mock_command.call_args.args[-1] == 'user-1'

    def test_put_rejects_bad_weight_sum(self, client):
        payload = DEFAULT_SCORING_CONFIG.model_dump()
        payload['questions']['gender']['weight'] = 10

        with patch('leadscoring.services.scoring_config.execute_command', new=AsyncMock()) as mock_command:
            response = client.put('/scoring-config', json=payload)

        assert response.status_code == 400
        assert '100%' in response.json()['detail']
        mock_command.assert_not_awaited()

    def test_put_rejects_incomplete_config(self, client):
        response = client.put('/scoring-config', json={'thresholds': {'hot': 80, 'warm': 60, 'lukewarm': 40, 'cold': 0}})
        assert response.status_code == 422


# =============================================================================
# Service Endpoints
# =============================================================================

class TestServiceEndpoints:

    def test_health(self, client):
        assert client.get('/health').json() == {'status': 'healthy'}

    def test_root(self, client):
        body = client.get('/').json()
        assert body['name'] == 'Leads Dashboard API'
        assert body['docs'] == '/docs'
