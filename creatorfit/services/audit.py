"""
Audit trail. Entries are added to the caller's session so they commit (or roll
back) together with the change they describe.
"""
import logging

from creatorfit.models.audit import AuditLog

logger = logging.getLogger('services.audit')


def log_audit(session, actor_type, actor_id, action, target_type, target_id, metadata=None):
    entry = AuditLog(
        actor_type=actor_type,
        actor_id=actor_id,
        action=action,
        target_type=target_type,
        target_id=target_id,
        extra_data=metadata or None,
    )
    session.add(entry)
    logger.info("%s %s:%s -> %s:%s", action, actor_type, actor_id, target_type, target_id,
                extra={'action': action})
    return entry
