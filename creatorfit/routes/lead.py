"""
Lead intake routes: sign-up form + consent text.
"""
import logging
import re
from datetime import datetime, timezone
from urllib.parse import quote

from flask import Blueprint, request, jsonify
from sqlalchemy.exc import IntegrityError

from creatorfit.config import (
    CONSENT_VERSION, CONSENT_TEXT, CONSENT_HASH, CONSENT_TYPES, SUPPORTED_COUNTRIES,
)
from creatorfit.database import get_session
from creatorfit.models.creator import Creator, ConsentRecord
from creatorfit.services.audit import log_audit

logger = logging.getLogger('routes.lead')

bp = Blueprint('lead', __name__)

EMAIL_RE = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')


def _optional_text(data, key):
    value = data.get(key)
    if not isinstance(value, str):
        return None
    return value.strip() or None


def validate_lead(data):
    """Return (clean_dict, errors_dict). errors is empty when the payload is valid."""
    errors = {}

    full_name = data.get('full_name')
    if not isinstance(full_name, str) or len(full_name.strip()) < 2:
        errors['full_name'] = 'must be at least 2 characters'

    email = data.get('email')
    if not isinstance(email, str) or not EMAIL_RE.match(email.strip()):
        errors['email'] = 'invalid email'

    country = data.get('country')
    if country not in SUPPORTED_COUNTRIES:
        errors['country'] = f"must be one of {', '.join(SUPPORTED_COUNTRIES)}"

    for key in ('phone', 'city', 'declared_category'):
        value = data.get(key)
        if value is not None and not isinstance(value, str):
            errors[key] = 'must be a string'

    consents = data.get('consents')
    clean_consents = {}
    if not isinstance(consents, dict):
        errors['consents'] = 'required'
    else:
        for consent_type in CONSENT_TYPES:
            default = None if consent_type == 'metrics_check' else False
            value = consents.get(consent_type, default)
            if not isinstance(value, bool):
                errors[f'consents.{consent_type}'] = 'must be a boolean'
            else:
                clean_consents[consent_type] = value

    if errors:
        return None, errors

    return {
        'full_name': full_name.strip(),
        'email': email.strip().lower(),
        'phone': _optional_text(data, 'phone'),
        'country': country,
        'city': _optional_text(data, 'city'),
        'declared_category': _optional_text(data, 'declared_category'),
        'consents': clean_consents,
    }, {}


def _client_ip():
    forwarded = request.headers.get('X-Forwarded-For', '')
    if forwarded:
        return forwarded.split(',')[0].strip()
    return request.remote_addr or ''


@bp.route('/api/lead', methods=['POST'])
def create_lead():
    """Create a creator in 'lead' status plus one consent row per consent type."""
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({'error': 'JSON object required'}), 400
    lead, errors = validate_lead(data)
    if errors:
        return jsonify({'error': errors}), 400
    if not lead['consents']['metrics_check']:
        return jsonify({'error': 'metrics_check is required'}), 400

    now = datetime.now(timezone.utc)
    session = get_session()
    try:
        creator = Creator(
            full_name=lead['full_name'],
            email=lead['email'],
            phone=lead['phone'],
            country=lead['country'],
            city=lead['city'],
            declared_category=lead['declared_category'],
            status='lead',
            created_at=now,
            updated_at=now,
        )
        session.add(creator)
        session.flush()

        ip = _client_ip()
        user_agent = request.headers.get('User-Agent')
        for consent_type, granted in lead['consents'].items():
            session.add(ConsentRecord(
                creator_id=creator.id,
                consent_type=consent_type,
                granted=1 if granted else 0,
                text_version=CONSENT_VERSION,
                text_hash=CONSENT_HASH,
                ip_address=ip,
                user_agent=user_agent,
                granted_at=now,
            ))

        log_audit(session, 'system', 'api', 'LEAD_CREATED', 'creator', creator.id,
                  {'email': lead['email'], 'country': lead['country']})
        creator_id = creator.id
        session.commit()
    except IntegrityError:
        session.rollback()
        return jsonify({'error': 'email already exists'}), 409
    except Exception:
        session.rollback()
        logger.error("Lead creation failed", exc_info=True)
        return jsonify({'error': 'internal_error'}), 500
    finally:
        session.close()

    return jsonify({
        'creator_id': creator_id,
        'next': f'/connect.html?creator_id={quote(creator_id)}',
    })


@bp.route('/api/consent-text')
def consent_text():
    return jsonify({'version': CONSENT_VERSION, 'hash': CONSENT_HASH, 'text': CONSENT_TEXT})
