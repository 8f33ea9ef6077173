"""
Creator self-service routes: overview, share-enable, disconnect, deletion request.
"""
import logging
from datetime import datetime, timezone

from flask import Blueprint, jsonify

from creatorfit.database import get_session
from creatorfit.models.account import ConnectedAccount
from creatorfit.models.audit import DeletionRequest
from creatorfit.models.creator import Creator, ConsentRecord
from creatorfit.services.audit import log_audit
from creatorfit.services.db import QualificationStore

logger = logging.getLogger('routes.creator')

bp = Blueprint('creator', __name__)


@bp.route('/api/creator/<creator_id>/overview')
def overview(creator_id):
    """Creator row, current score + niche, brand targets and consents."""
    session = get_session()
    try:
        store = QualificationStore(session)
        creator = store.get_creator(creator_id)
        if creator is None:
            return jsonify({'error': 'not_found'}), 404

        score = store.get_latest_creator_score(creator_id)
        niche = store.get_latest_niche_classification(creator_id)
        brands = store.get_all_brand_targets(creator_id)
        consents = session.query(ConsentRecord).filter_by(creator_id=creator_id).all()

        return jsonify({
            'creator': creator.to_dict(),
            'score': score.to_dict() if score else None,
            'niche': niche.to_dict() if niche else None,
            'brands': [b.to_dict() for b in brands],
            'consents': [
                {
                    'consent_type': c.consent_type,
                    'granted': bool(c.granted),
                    'revoked_at': c.revoked_at.isoformat() if c.revoked_at else None,
                }
                for c in consents
            ],
        })
    finally:
        session.close()


def _change_status(creator_id, status, action, before_commit=None):
    """Shared body of the status-changing endpoints."""
    now = datetime.now(timezone.utc)
    session = get_session()
    try:
        if session.get(Creator, creator_id) is None:
            return jsonify({'error': 'not_found'}), 404
        if before_commit:
            before_commit(session, now)
        if status:
            QualificationStore(session).set_creator_status(creator_id, status, now)
        log_audit(session, 'creator', creator_id, action, 'creator', creator_id)
        session.commit()
        return jsonify({'ok': True})
    except Exception:
        session.rollback()
        logger.error("%s failed", action, exc_info=True, extra={'creator_id': creator_id})
        return jsonify({'error': 'internal_error'}), 500
    finally:
        session.close()


@bp.route('/api/creator/<creator_id>/share-enable', methods=['POST'])
def share_enable(creator_id):
    return _change_status(creator_id, 'share_enabled', 'SHARE_ENABLED')


@bp.route('/api/creator/<creator_id>/disconnect', methods=['POST'])
def disconnect(creator_id):
    def revoke_accounts(session, now):
        accounts = session.query(ConnectedAccount).filter_by(creator_id=creator_id, status='active').all()
        for account in accounts:
            account.status = 'revoked'
            account.disconnected_at = now

    return _change_status(creator_id, 'revoked', 'DISCONNECT', before_commit=revoke_accounts)


@bp.route('/api/creator/<creator_id>/delete', methods=['POST'])
def request_deletion(creator_id):
    def add_request(session, now):
        session.add(DeletionRequest(creator_id=creator_id, requested_at=now, status='requested'))

    return _change_status(creator_id, None, 'DELETE_REQUESTED', before_commit=add_request)
