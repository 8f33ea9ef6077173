"""Tests for creatorfit.pipeline.signals: snapshot reader + demo filling."""
from datetime import date

import pytest

from creatorfit.models.account import ProfileSnapshot, ContentMetricsDaily
from creatorfit.pipeline.base import CreatorSignals, SignalsProvider
from creatorfit.pipeline.signals import (
    DEMO_SIGNALS, DemoSignalsProvider, SnapshotSignalsProvider, default_provider,
)


class StaticProvider(SignalsProvider):
    name = 'static'

    def __init__(self, signals):
        self.signals = signals

    def collect(self, session, creator, account_id):
        return self.signals


@pytest.fixture
def account(make_creator, make_account):
    creator = make_creator()
    return make_account(creator.id)


def _add_day(session, account_id, day, **values):
    session.add(ContentMetricsDaily(account_id=account_id, day=day, **values))


class TestSnapshotSignalsProvider:

    def test_no_account_means_nothing_available(self, db_session):
        signals = SnapshotSignalsProvider().collect(db_session, None, None)
        assert signals == CreatorSignals()

    def test_empty_tables_mean_unavailable_not_zero(self, db_session, account):
        signals = SnapshotSignalsProvider(today=date(2026, 2, 1)).collect(db_session, None, account.id)
        assert signals.followers is None
        assert signals.likes is None
        assert signals.content_count_30d is None
        assert signals.reach_ratio is None

    def test_reads_latest_snapshot_and_window(self, db_session, account):
        db_session.add(ProfileSnapshot(account_id=account.id, snapshot_date=date(2026, 1, 1),
                                       followers_count=10, bio_text='old bio'))
        db_session.add(ProfileSnapshot(account_id=account.id, snapshot_date=date(2026, 1, 30),
                                       followers_count=2000, bio_text='sushi en Madrid'))
        _add_day(db_session, account.id, date(2026, 1, 20), posts_count=1, reels_count=1,
                 likes_total=100, comments_total=10, reach_total=1000)
        _add_day(db_session, account.id, date(2026, 1, 25), posts_count=2,
                 likes_total=60)
        # outside the 30-day window
        _add_day(db_session, account.id, date(2025, 12, 1), posts_count=5,
                 likes_total=999, comments_total=99, reach_total=50000)
        db_session.commit()

        signals = SnapshotSignalsProvider(today=date(2026, 2, 1)).collect(db_session, None, account.id)

        assert signals.followers == 2000
        assert signals.bio == 'sushi en Madrid'
        assert signals.likes == 160
        assert signals.comments == 10
        assert signals.content_count_30d == 4
        assert signals.reach_ratio == pytest.approx(0.5)

    def test_reach_needs_followers(self, db_session, account):
        _add_day(db_session, account.id, date(2026, 1, 20), reach_total=1000)
        db_session.commit()
        signals = SnapshotSignalsProvider(today=date(2026, 2, 1)).collect(db_session, None, account.id)
        assert signals.reach_ratio is None


class TestDemoSignalsProvider:

    def test_fills_everything_when_base_is_empty(self, db_session):
        signals = DemoSignalsProvider(base=StaticProvider(CreatorSignals())).collect(db_session, None, None)
        assert signals.followers == DEMO_SIGNALS.followers == 1000
        assert signals.likes == 50
        assert signals.comments == 5
        assert signals.content_count_30d == 8

    def test_keeps_real_values(self, db_session):
        base = StaticProvider(CreatorSignals(followers=5000, likes=0, bio='gym'))
        signals = DemoSignalsProvider(base=base).collect(db_session, None, None)
        assert signals.followers == 5000
        assert signals.likes == 0
        assert signals.comments == 5
        assert signals.bio == 'gym'

    def test_never_invents_reach(self, db_session):
        defaults = CreatorSignals(followers=1, likes=1, comments=1, content_count_30d=1, reach_ratio=2.0)
        signals = DemoSignalsProvider(defaults=defaults).collect(db_session, None, None)
        assert signals.reach_ratio is None

    def test_without_base(self, db_session):
        signals = DemoSignalsProvider().collect(db_session, None, None)
        assert signals.missing() == []


class TestDefaultProvider:

    def test_demo_mode_on(self, monkeypatch):
        monkeypatch.setattr('creatorfit.config.QUALIFICATION_DEMO_MODE', True)
        provider = default_provider()
        assert isinstance(provider, DemoSignalsProvider)
        assert isinstance(provider.base, SnapshotSignalsProvider)

    def test_demo_mode_off(self, monkeypatch):
        monkeypatch.setattr('creatorfit.config.QUALIFICATION_DEMO_MODE', False)
        assert isinstance(default_provider(), SnapshotSignalsProvider)
