"""
Instagram connection via Meta OAuth.

start:    remembers a one-time state nonce in Redis and redirects to the login dialog.
callback: exchanges the code, stores the encrypted token, marks the creator
          'connected' and runs qualification inline.
"""
import logging
import secrets
from datetime import datetime, timedelta, timezone
from urllib.parse import quote

from flask import Blueprint, request, redirect
from redis.exceptions import RedisError

from creatorfit import extensions
from creatorfit.config import OAUTH_STATE_TTL, META_SCOPES
from creatorfit.database import get_session
from creatorfit.models.account import ConnectedAccount
from creatorfit.models.creator import Creator
from creatorfit.pipeline.qualification import run_qualification
from creatorfit.services.audit import log_audit
from creatorfit.services.crypto import encrypt_token
from creatorfit.services.meta import build_auth_url, exchange_code_for_token, fetch_me

logger = logging.getLogger('routes.oauth')

bp = Blueprint('oauth', __name__)

STATE_KEY = 'oauth:state:{}'


def _remember_state(creator_id):
    nonce = secrets.token_urlsafe(24)
    extensions.redis_client.setex(STATE_KEY.format(nonce), OAUTH_STATE_TTL, creator_id)
    return nonce


def _consume_state(nonce):
    """creator_id for a state nonce, or None. Each nonce works once."""
    key = STATE_KEY.format(nonce)
    pipe = extensions.redis_client.pipeline()
    pipe.get(key)
    pipe.delete(key)
    creator_id, _ = pipe.execute()
    return creator_id


@bp.route('/api/oauth/meta/start')
def oauth_start():
    creator_id = request.args.get('creator_id', '').strip()
    if not creator_id:
        return 'missing creator_id', 400

    session = get_session()
    try:
        creator = session.get(Creator, creator_id)
        if creator is None:
            return 'creator not found', 404

        try:
            state = _remember_state(creator_id)
        except RedisError:
            logger.error("Could not store OAuth state", exc_info=True, extra={'creator_id': creator_id})
            return 'OAuth temporarily unavailable', 503

        log_audit(session, 'creator', creator_id, 'OAUTH_START', 'creator', creator_id)
        session.commit()
    finally:
        session.close()

    return redirect(build_auth_url(state=state, scopes=META_SCOPES))


@bp.route('/api/oauth/meta/callback')
def oauth_callback():
    error = request.args.get('error')
    if error:
        description = request.args.get('error_description', '')
        return f'OAuth error: {error} {description}'.strip(), 400

    code = request.args.get('code')
    state = request.args.get('state')
    if not code or not state:
        return 'Missing code/state', 400

    try:
        creator_id = _consume_state(state)
    except RedisError:
        logger.error("Could not read OAuth state", exc_info=True)
        return 'OAuth temporarily unavailable', 503
    if not creator_id:
        return 'Bad state', 400

    try:
        token = exchange_code_for_token(code)
        me = fetch_me(token['access_token'])
        account_id = _store_connection(creator_id, token, me)
        run_qualification(creator_id, account_id=account_id)
    except Exception:
        logger.error("OAuth callback failed", exc_info=True, extra={'creator_id': creator_id})
        return 'OAuth callback failed. Check server logs.', 500

    return redirect(f'/dashboard.html?creator_id={quote(creator_id)}')


def _store_connection(creator_id, token, me):
    """Insert the connected account and move the creator to 'connected'."""
    now = datetime.now(timezone.utc)
    expires_at = None
    if token.get('expires_in'):
        expires_at = now + timedelta(seconds=int(token['expires_in']))

    session = get_session()
    try:
        creator = session.get(Creator, creator_id)
        if creator is None:
            raise LookupError(f"Creator {creator_id} not found")

        account = ConnectedAccount(
            creator_id=creator_id,
            platform='instagram',
            platform_user_id=str(me['id']) if me.get('id') else None,
            account_type='unknown',
            scopes=','.join(META_SCOPES),
            access_token_enc=encrypt_token(token['access_token']),
            token_expires_at=expires_at,
            connected_at=now,
            status='active',
        )
        session.add(account)
        session.flush()
        account_id = account.id

        creator.status = 'connected'
        creator.updated_at = now

        log_audit(session, 'creator', creator_id, 'OAUTH_CONNECTED', 'account', account_id,
                  {'me': {'id': me.get('id'), 'name': me.get('name')}})
        session.commit()
        return account_id
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
