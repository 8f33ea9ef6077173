"""Tests for creatorfit.services.meta: Graph API client."""
from unittest.mock import MagicMock, patch
from urllib.parse import parse_qs, urlparse

import pytest
import requests

from creatorfit.services.circuit_breaker import CircuitBreaker
from creatorfit.services.meta import MetaAPIError, build_auth_url, exchange_code_for_token, fetch_me


@pytest.fixture(autouse=True)
def meta_config(monkeypatch):
    monkeypatch.setattr('creatorfit.config.META_CLIENT_ID', 'app-123')
    monkeypatch.setattr('creatorfit.config.META_CLIENT_SECRET', 'shh')
    monkeypatch.setattr('creatorfit.config.META_REDIRECT_URI', 'https://example.com/api/oauth/meta/callback')
    monkeypatch.setattr('creatorfit.config.META_GRAPH_VERSION', 'v19.0')


@pytest.fixture
def breaker():
    """Pass-through breaker: a Redis mock that always reads as closed."""
    redis = MagicMock()
    redis.get.return_value = None
    redis.incr.return_value = 1
    cb = CircuitBreaker('meta', redis)
    with patch('creatorfit.services.meta.get_breaker', return_value=cb):
        yield cb


def _response(status=200, payload=None):
    resp = MagicMock()
    resp.status_code = status
    resp.ok = status < 400
    resp.json.return_value = payload if payload is not None else {}
    return resp


class TestBuildAuthUrl:

    def test_contains_client_and_state(self):
        url = build_auth_url('nonce-1', scopes=['public_profile', 'instagram_basic'])
        parsed = urlparse(url)
        params = parse_qs(parsed.query)
        assert parsed.netloc == 'www.facebook.com'
        assert parsed.path == '/v19.0/dialog/oauth'
        assert params['client_id'] == ['app-123']
        assert params['state'] == ['nonce-1']
        assert params['response_type'] == ['code']
        assert params['scope'] == ['public_profile,instagram_basic']

    def test_default_scopes_from_config(self, monkeypatch):
        monkeypatch.setattr('creatorfit.config.META_SCOPES', ['public_profile'])
        params = parse_qs(urlparse(build_auth_url('s')).query)
        assert params['scope'] == ['public_profile']


class TestExchangeCode:

    def test_success(self, breaker):
        payload = {'access_token': 'EAAG', 'token_type': 'bearer', 'expires_in': 5183944}
        with patch('creatorfit.services.meta.requests.get', return_value=_response(200, payload)) as get:
            data = exchange_code_for_token('code-1')
        assert data['access_token'] == 'EAAG'
        _, kwargs = get.call_args
        assert get.call_args[0][0] == 'https://graph.facebook.com/v19.0/oauth/access_token'
        assert kwargs['params']['code'] == 'code-1'
        assert kwargs['params']['client_secret'] == 'shh'
        assert 'timeout' in kwargs

    def test_graph_error(self, breaker):
        payload = {'error': {'message': 'Invalid verification code format.'}}
        with patch('creatorfit.services.meta.requests.get', return_value=_response(400, payload)):
            with pytest.raises(MetaAPIError) as exc_info:
                exchange_code_for_token('bad')
        assert exc_info.value.status_code == 400
        assert 'Invalid verification code' in str(exc_info.value)

    def test_missing_access_token(self, breaker):
        with patch('creatorfit.services.meta.requests.get', return_value=_response(200, {})):
            with pytest.raises(MetaAPIError):
                exchange_code_for_token('code-1')

    def test_unreadable_body(self, breaker):
        resp = _response(502)
        resp.json.side_effect = ValueError('no json')
        with patch('creatorfit.services.meta.requests.get', return_value=resp):
            with pytest.raises(MetaAPIError, match='HTTP 502'):
                exchange_code_for_token('code-1')


class TestFetchMe:

    def test_returns_profile(self, breaker):
        payload = {'id': '1784', 'name': 'Ana'}
        with patch('creatorfit.services.meta.requests.get', return_value=_response(200, payload)) as get:
            assert fetch_me('EAAG') == payload
        assert get.call_args[1]['params'] == {'fields': 'id,name', 'access_token': 'EAAG'}


class TestBreakerAccounting:

    def test_client_errors_do_not_open_circuit(self, breaker):
        payload = {'error': {'message': 'Invalid verification code format.'}}
        with patch('creatorfit.services.meta.requests.get', return_value=_response(400, payload)):
            for _ in range(breaker.failure_threshold + 1):
                with pytest.raises(MetaAPIError):
                    exchange_code_for_token('bad')
        breaker.redis.incr.assert_not_called()

    def test_server_error_counts_as_failure(self, breaker):
        with patch('creatorfit.services.meta.requests.get', return_value=_response(503, {})):
            with pytest.raises(MetaAPIError) as exc_info:
                fetch_me('EAAG')
        assert exc_info.value.status_code == 503
        breaker.redis.incr.assert_called_once_with('breaker:meta:failures')

    def test_transport_error_counts_as_failure(self, breaker):
        with patch('creatorfit.services.meta.requests.get',
                   side_effect=requests.ConnectionError('refused')):
            with pytest.raises(requests.ConnectionError):
                fetch_me('EAAG')
        breaker.redis.incr.assert_called_once_with('breaker:meta:failures')
