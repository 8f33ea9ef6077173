"""
Signals providers.

SnapshotSignalsProvider reads what the collectors stored (profile snapshots,
daily content metrics). Until Instagram insights permissions are granted those
tables are mostly empty, so DemoSignalsProvider can fill the core signals with
fixed stand-in numbers. Demo filling is switched by QUALIFICATION_DEMO_MODE and
never touches reach or bio.
"""
import logging
from datetime import date, timedelta
from typing import Optional

from creatorfit import config
from creatorfit.models.account import ProfileSnapshot, ContentMetricsDaily
from creatorfit.pipeline.base import CreatorSignals, SignalsProvider

logger = logging.getLogger('pipeline.signals')

WINDOW_DAYS = 30

# Stand-in numbers used by the demo provider
DEMO_SIGNALS = CreatorSignals(
    followers=1000,
    likes=50,
    comments=5,
    content_count_30d=8,
)


def _sum_or_none(values):
    """Sum of the non-null values; None if every value is null."""
    present = [v for v in values if v is not None]
    return sum(present) if present else None


class SnapshotSignalsProvider(SignalsProvider):
    """Latest profile snapshot + last-30-days content metrics for the account."""

    name = 'snapshot'

    def __init__(self, today: Optional[date] = None):
        self.today = today

    def collect(self, session, creator, account_id):
        if not account_id:
            return CreatorSignals()

        snapshot = (
            session.query(ProfileSnapshot)
            .filter_by(account_id=account_id)
            .order_by(ProfileSnapshot.snapshot_date.desc(), ProfileSnapshot.id.desc())
            .first()
        )
        followers = snapshot.followers_count if snapshot else None
        bio = snapshot.bio_text if snapshot else None

        since = (self.today or date.today()) - timedelta(days=WINDOW_DAYS)
        days = (
            session.query(ContentMetricsDaily)
            .filter(ContentMetricsDaily.account_id == account_id)
            .filter(ContentMetricsDaily.day > since)
            .all()
        )

        likes = _sum_or_none(d.likes_total for d in days)
        comments = _sum_or_none(d.comments_total for d in days)
        content_count = _sum_or_none(
            _sum_or_none([d.posts_count, d.reels_count]) for d in days
        )

        reach_ratio = None
        reach_days = [d.reach_total for d in days if d.reach_total is not None]
        if reach_days and followers:
            reach_ratio = (sum(reach_days) / len(reach_days)) / followers

        return CreatorSignals(
            followers=followers,
            likes=likes,
            comments=comments,
            content_count_30d=content_count,
            reach_ratio=reach_ratio,
            bio=bio,
        )


class DemoSignalsProvider(SignalsProvider):
    """Wraps another provider and fills its unavailable core signals."""

    name = 'demo'

    def __init__(self, base: Optional[SignalsProvider] = None, defaults: CreatorSignals = DEMO_SIGNALS):
        self.base = base
        self.defaults = CreatorSignals(
            followers=defaults.followers,
            likes=defaults.likes,
            comments=defaults.comments,
            content_count_30d=defaults.content_count_30d,
        )

    def collect(self, session, creator, account_id):
        signals = self.base.collect(session, creator, account_id) if self.base else CreatorSignals()
        missing = signals.missing()
        if missing:
            logger.warning(
                "Demo mode: stand-in values for %s", ', '.join(missing),
                extra={'creator_id': getattr(creator, 'id', None), 'account_id': account_id},
            )
        return signals.fill_from(self.defaults)


def default_provider() -> SignalsProvider:
    """Snapshot provider, wrapped in demo filling when demo mode is on."""
    provider = SnapshotSignalsProvider()
    if config.QUALIFICATION_DEMO_MODE:
        return DemoSignalsProvider(base=provider)
    return provider
