"""Tests for /health, /api/health and /api/health/<service>/reset."""


class TestHealth:

    def test_liveness(self, client):
        resp = client.get('/health')
        assert resp.status_code == 200
        assert resp.get_json() == {'status': 'healthy'}


class TestApiHealth:

    def test_lists_meta_breaker(self, client):
        data = client.get('/api/health').get_json()
        svc = data['services']['meta']
        assert svc['name'] == 'meta'
        assert svc['state'] == 'closed'
        assert svc['failure_count'] == 0
        assert svc['failure_threshold'] == 3
        assert 'total_success' in svc
        assert 'total_failure' in svc


class TestResetCircuit:

    def test_requires_admin(self, client, admin_token):
        assert client.post('/api/health/meta/reset').status_code == 401

    def test_reset_known_service(self, client, admin_token):
        resp = client.post('/api/health/meta/reset', headers={'X-Admin-Token': admin_token})
        assert resp.status_code == 200
        data = resp.get_json()
        assert data['ok'] is True
        assert data['state'] == 'closed'

    def test_reset_unknown_service_404(self, client, admin_token):
        resp = client.post('/api/health/nonexistent/reset', headers={'X-Admin-Token': admin_token})
        assert resp.status_code == 404
