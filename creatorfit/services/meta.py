"""
Meta Graph API client: OAuth dialog URL, code → token exchange, basic profile.

Calls go through the 'meta' circuit breaker so a Graph outage fails fast
instead of hanging every OAuth callback. Only 5xx responses and transport
errors count as breaker failures; a 4xx is the caller's problem and is raised
as MetaAPIError without touching the circuit.
"""
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

import requests

from creatorfit import config
from creatorfit.services.circuit_breaker import get_breaker

logger = logging.getLogger('services.meta')

DIALOG_URL = 'https://www.facebook.com/{version}/dialog/oauth'
GRAPH_URL = 'https://graph.facebook.com/{version}'


class MetaAPIError(Exception):
    """Graph API returned an error or an unreadable response."""

    def __init__(self, message, status_code=None):
        self.status_code = status_code
        super().__init__(message)


def build_auth_url(state: str, scopes: Optional[List[str]] = None) -> str:
    """Login dialog URL the creator is redirected to."""
    params = {
        'client_id': config.META_CLIENT_ID or '',
        'redirect_uri': config.META_REDIRECT_URI or '',
        'state': state,
        'response_type': 'code',
        'scope': ','.join(scopes if scopes is not None else config.META_SCOPES),
    }
    return f"{DIALOG_URL.format(version=config.META_GRAPH_VERSION)}?{urlencode(params)}"


def _error_from(resp) -> MetaAPIError:
    try:
        data = resp.json()
    except ValueError:
        data = {}
    message = (data.get('error') or {}).get('message') or f'HTTP {resp.status_code}'
    return MetaAPIError(message, status_code=resp.status_code)


def _graph_request(url: str, params: Dict[str, Any]):
    # Only outages count against the breaker; 4xx responses are returned as-is
    resp = requests.get(url, params=params, timeout=config.META_TIMEOUT)
    if resp.status_code >= 500:
        raise _error_from(resp)
    return resp


def _graph_get(path: str, params: Dict[str, Any]) -> Dict[str, Any]:
    url = f"{GRAPH_URL.format(version=config.META_GRAPH_VERSION)}/{path}"
    resp = get_breaker('meta').call(_graph_request, url, params)
    if not resp.ok:
        raise _error_from(resp)
    try:
        return resp.json()
    except ValueError:
        raise MetaAPIError('Unreadable Graph API response', status_code=resp.status_code)


def exchange_code_for_token(code: str) -> Dict[str, Any]:
    """Returns {access_token, token_type, expires_in}."""
    params = {
        'client_id': config.META_CLIENT_ID or '',
        'client_secret': config.META_CLIENT_SECRET or '',
        'redirect_uri': config.META_REDIRECT_URI or '',
        'code': code,
    }
    data = _graph_get('oauth/access_token', params)
    if not data.get('access_token'):
        raise MetaAPIError('Token exchange returned no access_token')
    logger.info("Token exchange ok (expires_in=%s)", data.get('expires_in'))
    return data


def fetch_me(access_token: str) -> Dict[str, Any]:
    """Basic profile of the token owner: {id, name}."""
    return _graph_get('me', {'fields': 'id,name', 'access_token': access_token})
