"""
Qualification pipeline, run inline once per successful account connection.

    signals → classify niche → score → brand targets → persist → status 'qualified'

Everything from classification to the status change happens in one session
and commits once. On any failure the session rolls back, the creator keeps its
previous status, and the error propagates to the caller. There is no retry
here; re-running is safe because each run appends new timestamped rows.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from creatorfit.database import get_session
from creatorfit.pipeline.base import (
    QualificationError, QualificationResult, SignalsProvider, validate_signals,
)
from creatorfit.pipeline.brands import build_brand_targets
from creatorfit.pipeline.niche import classify_niche
from creatorfit.pipeline.scoring import score_creator
from creatorfit.pipeline.signals import default_provider
from creatorfit.services.audit import log_audit
from creatorfit.services.db import QualificationStore

logger = logging.getLogger('pipeline.qualification')


def run_qualification(creator_id: str, account_id: Optional[str] = None,
                      provider: Optional[SignalsProvider] = None,
                      now: Optional[datetime] = None) -> QualificationResult:
    """
    Qualify one creator and persist the results atomically.

    Raises:
        InvalidSignalsError: signals failed boundary validation.
        QualificationError:  creator missing or the write failed.
    """
    provider = provider or default_provider()
    session = get_session()
    try:
        store = QualificationStore(session)
        creator = store.get_creator(creator_id)
        if creator is None:
            raise QualificationError(f"Creator {creator_id} not found")

        signals = validate_signals(provider.collect(session, creator, account_id))
        computed_at = now or datetime.now(timezone.utc)

        niche = classify_niche(bio=signals.bio or '', declared=creator.declared_category or '')
        score = score_creator(signals, niche.confidence)
        targets = build_brand_targets(niche.primary_niche)

        store.append_niche_classification(creator_id, niche, computed_at)
        store.append_creator_score(creator_id, score, computed_at)
        store.append_brand_targets(creator_id, targets, computed_at)
        store.set_creator_status(creator_id, 'qualified', computed_at)

        log_audit(session, 'system', 'pipeline', 'QUALIFIED', 'creator', creator_id, {
            'grade': score.grade,
            'score': score.total,
            'niche': niche.primary_niche,
            'reach_available': score.reach_available,
            'provider': provider.name,
        })

        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error("Persisting qualification failed", exc_info=True,
                     extra={'creator_id': creator_id, 'account_id': account_id})
        raise QualificationError(f"Could not persist qualification for {creator_id}") from e
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()

    logger.info(
        "Creator %s qualified: score=%d grade=%s niche=%s (confidence=%.2f)",
        creator_id, score.total, score.grade, niche.primary_niche, niche.confidence,
        extra={'creator_id': creator_id, 'account_id': account_id},
    )

    return QualificationResult(
        creator_id=creator_id,
        computed_at=computed_at,
        signals=signals,
        niche=niche,
        score=score,
        brand_targets=targets,
    )
