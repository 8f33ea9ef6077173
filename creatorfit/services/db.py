"""
Persistence helpers for qualification results and the admin views.

QualificationStore wraps one session and never commits: the pipeline owns the
transaction so a failed run leaves no partial rows behind.
"""
import logging
from datetime import datetime, timezone

from sqlalchemy import and_, func, select

from creatorfit.config import CREATOR_STATUSES
from creatorfit.models.creator import Creator
from creatorfit.models.qualification import NicheClassification, CreatorScore, BrandTarget

logger = logging.getLogger('services.db')

ADMIN_LIST_LIMIT = 500

EXPORT_COLUMNS = [
    'id', 'full_name', 'email', 'phone', 'country', 'city',
    'declared_category', 'status', 'score_total', 'grade',
]


class QualificationStore:
    """Append-only writes + latest-value reads for one creator at a time."""

    def __init__(self, session):
        self.session = session

    # ── Writes ────────────────────────────────────────────────────────

    def append_niche_classification(self, creator_id, result, computed_at):
        row = NicheClassification(
            creator_id=creator_id,
            primary_niche=result.primary_niche,
            secondary_niches=list(result.secondary_niches),
            confidence=result.confidence,
            evidence_keywords=list(result.evidence_keywords),
            model_version=result.model_version,
            computed_at=computed_at,
        )
        self.session.add(row)
        return row

    def append_creator_score(self, creator_id, result, computed_at):
        row = CreatorScore(
            creator_id=creator_id,
            score_total=result.total,
            grade=result.grade,
            er_score=result.er_score,
            reach_score=result.reach_score,
            consistency_score=result.consistency_score,
            niche_score=result.niche_score,
            fraud_penalty=result.fraud_penalty,
            scoring_version=result.scoring_version,
            computed_at=computed_at,
        )
        self.session.add(row)
        return row

    def append_brand_targets(self, creator_id, targets, computed_at):
        rows = [
            BrandTarget(
                creator_id=creator_id,
                target_type=target_type,
                segment=targets.segment,
                suggested_brands=list(brands),
                generated_at=computed_at,
            )
            for target_type, brands in targets.rows()
        ]
        self.session.add_all(rows)
        return rows

    def set_creator_status(self, creator_id, status, updated_at=None):
        if status not in CREATOR_STATUSES:
            raise ValueError(f"Unknown creator status: {status}")
        creator = self.session.get(Creator, creator_id)
        if creator is None:
            raise LookupError(f"Creator {creator_id} not found")
        logger.info("Creator %s status %s -> %s", creator_id, creator.status, status,
                    extra={'creator_id': creator_id})
        creator.status = status
        creator.updated_at = updated_at or datetime.now(timezone.utc)
        return creator

    # ── Reads ─────────────────────────────────────────────────────────

    def get_creator(self, creator_id):
        return self.session.get(Creator, creator_id)

    def get_latest_niche_classification(self, creator_id):
        return (
            self.session.query(NicheClassification)
            .filter_by(creator_id=creator_id)
            .order_by(NicheClassification.computed_at.desc(), NicheClassification.id.desc())
            .first()
        )

    def get_latest_creator_score(self, creator_id):
        return (
            self.session.query(CreatorScore)
            .filter_by(creator_id=creator_id)
            .order_by(CreatorScore.computed_at.desc(), CreatorScore.id.desc())
            .first()
        )

    def get_all_brand_targets(self, creator_id):
        """Every brand target row, newest run first (local before ecommerce)."""
        return (
            self.session.query(BrandTarget)
            .filter_by(creator_id=creator_id)
            .order_by(BrandTarget.generated_at.desc(), BrandTarget.id.asc())
            .all()
        )


# ── Admin queries ────────────────────────────────────────────────────────────

def _latest_per_creator(model, ts_column, *columns):
    """Subquery with one row per creator: the newest by (timestamp, id)."""
    rank = func.row_number().over(
        partition_by=model.creator_id,
        order_by=(ts_column.desc(), model.id.desc()),
    ).label('row_rank')
    return select(model.creator_id, *columns, rank).subquery()


def _creators_with_latest(grade=None, city=None):
    scores = _latest_per_creator(
        CreatorScore, CreatorScore.computed_at, CreatorScore.score_total, CreatorScore.grade,
    )
    niches = _latest_per_creator(
        NicheClassification, NicheClassification.computed_at, NicheClassification.primary_niche,
    )

    stmt = (
        select(Creator, scores.c.score_total, scores.c.grade, niches.c.primary_niche)
        .outerjoin(scores, and_(scores.c.creator_id == Creator.id, scores.c.row_rank == 1))
        .outerjoin(niches, and_(niches.c.creator_id == Creator.id, niches.c.row_rank == 1))
    )
    if city:
        stmt = stmt.where(Creator.city == city)
    if grade:
        stmt = stmt.where(scores.c.grade == grade)
    return stmt.order_by(Creator.created_at.desc(), Creator.id.desc())


def list_creators(session, grade=None, city=None, limit=ADMIN_LIST_LIMIT):
    """Creators joined with their current score/grade/niche, newest first."""
    stmt = _creators_with_latest(grade=grade, city=city).limit(limit)
    rows = []
    for creator, score_total, grade_value, primary_niche in session.execute(stmt):
        row = creator.to_dict()
        row.update({
            'score_total': score_total,
            'grade': grade_value,
            'primary_niche': primary_niche,
        })
        rows.append(row)
    return rows


def export_rows(session):
    """Rows for the CSV export, one list per creator in EXPORT_COLUMNS order."""
    rows = []
    for creator, score_total, grade_value, _ in session.execute(_creators_with_latest()):
        rows.append([
            creator.id, creator.full_name, creator.email, creator.phone, creator.country,
            creator.city, creator.declared_category, creator.status, score_total, grade_value,
        ])
    return rows
