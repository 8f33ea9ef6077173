"""Tests for creatorfit.pipeline.qualification.run_qualification."""
from datetime import datetime, timezone
from unittest.mock import patch

import pytest
from sqlalchemy.exc import SQLAlchemyError

from creatorfit.models.audit import AuditLog
from creatorfit.models.creator import Creator
from creatorfit.models.qualification import NicheClassification, CreatorScore, BrandTarget
from creatorfit.pipeline.base import CreatorSignals, InvalidSignalsError, QualificationError, SignalsProvider
from creatorfit.pipeline.qualification import run_qualification
from creatorfit.services.db import QualificationStore

NOW = datetime(2026, 2, 1, 12, 0, tzinfo=timezone.utc)


class StaticProvider(SignalsProvider):
    name = 'static'

    def __init__(self, **values):
        self.signals = CreatorSignals(**values)

    def collect(self, session, creator, account_id):
        return self.signals


def _demo_like(**overrides):
    values = dict(followers=1000, likes=50, comments=5, content_count_30d=8, bio='sushi lover')
    values.update(overrides)
    return StaticProvider(**values)


class TestRunQualification:

    def test_persists_all_outputs(self, db_session, make_creator):
        creator = make_creator()
        result = run_qualification(creator.id, provider=_demo_like(), now=NOW)

        assert result.score.total == 66
        assert result.score.grade == 'B'
        assert result.niche.primary_niche == 'food'
        assert result.computed_at == NOW

        assert db_session.query(NicheClassification).filter_by(creator_id=creator.id).count() == 1
        score = db_session.query(CreatorScore).filter_by(creator_id=creator.id).one()
        assert score.score_total == 66
        assert score.reach_score is None
        brands = db_session.query(BrandTarget).filter_by(creator_id=creator.id).all()
        assert sorted(b.target_type for b in brands) == ['ecommerce', 'local']
        assert all(b.segment == 'food' for b in brands)

    def test_marks_creator_qualified(self, db_session, make_creator):
        creator = make_creator(status='connected')
        run_qualification(creator.id, provider=_demo_like(), now=NOW)
        assert db_session.get(Creator, creator.id).status == 'qualified'

    def test_writes_audit_entry(self, db_session, make_creator):
        creator = make_creator()
        run_qualification(creator.id, provider=_demo_like(), now=NOW)
        entry = db_session.query(AuditLog).filter_by(action='QUALIFIED').one()
        assert entry.target_id == creator.id
        assert entry.extra_data['grade'] == 'B'
        assert entry.extra_data['provider'] == 'static'
        assert entry.extra_data['reach_available'] is False

    def test_uses_declared_category(self, db_session, make_creator):
        creator = make_creator(declared_category='treino e gym')
        result = run_qualification(creator.id, provider=_demo_like(bio=None), now=NOW)
        assert result.niche.primary_niche == 'fitness'

    def test_rerun_appends_and_latest_wins(self, db_session, make_creator):
        creator = make_creator()
        run_qualification(creator.id, provider=_demo_like(), now=NOW)
        # same timestamp, stronger engagement
        run_qualification(creator.id, provider=_demo_like(likes=80), now=NOW)

        assert db_session.query(CreatorScore).filter_by(creator_id=creator.id).count() == 2
        latest = QualificationStore(db_session).get_latest_creator_score(creator.id)
        assert latest.er_score == 100

    def test_missing_creator(self, db_session):
        with pytest.raises(QualificationError, match='not found'):
            run_qualification('nope', provider=_demo_like(), now=NOW)

    def test_invalid_signals_leave_status_untouched(self, db_session, make_creator):
        creator = make_creator(status='connected')
        with pytest.raises(InvalidSignalsError):
            run_qualification(creator.id, provider=_demo_like(followers=None), now=NOW)
        assert db_session.get(Creator, creator.id).status == 'connected'
        assert db_session.query(CreatorScore).count() == 0

    def test_write_failure_rolls_back_everything(self, db_session, make_creator):
        creator = make_creator(status='connected')
        with patch.object(QualificationStore, 'append_brand_targets',
                          side_effect=SQLAlchemyError('disk full')):
            with pytest.raises(QualificationError):
                run_qualification(creator.id, provider=_demo_like(), now=NOW)

        assert db_session.query(NicheClassification).count() == 0
        assert db_session.query(CreatorScore).count() == 0
        assert db_session.get(Creator, creator.id).status == 'connected'

    def test_default_provider_in_demo_mode(self, db_session, make_creator, monkeypatch):
        monkeypatch.setattr('creatorfit.config.QUALIFICATION_DEMO_MODE', True)
        creator = make_creator()
        result = run_qualification(creator.id, now=NOW)
        assert result.signals.followers == 1000
        assert result.niche.primary_niche == 'general'
        # 0.40*70 + 0.25*70 + 0.20*35 = 52.5 -> 53
        assert result.score.total == 53
        assert result.score.grade == 'C'
