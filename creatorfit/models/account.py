"""
Connected social accounts and the raw signal tables read by the signals provider.

Metric columns are nullable on purpose: NULL means "not collected", which is
not the same thing as a measured zero.
"""

from sqlalchemy import Column, Integer, Text, Date, DateTime, Boolean, ForeignKey, Index
from sqlalchemy.sql import func

from creatorfit.database import Base
from creatorfit.models.creator import new_id


class ConnectedAccount(Base):
    __tablename__ = 'connected_accounts'

    id = Column(Text, primary_key=True, default=new_id)
    creator_id = Column(Text, ForeignKey('creators.id'), nullable=False)
    platform = Column(Text, nullable=False, default='instagram')
    platform_user_id = Column(Text, nullable=True)
    username = Column(Text, nullable=True)
    account_type = Column(Text, nullable=False, default='unknown')
    scopes = Column(Text, nullable=True)
    access_token_enc = Column(Text, nullable=True)
    token_expires_at = Column(DateTime(timezone=True), nullable=True)
    connected_at = Column(DateTime(timezone=True), nullable=False)
    disconnected_at = Column(DateTime(timezone=True), nullable=True)
    status = Column(Text, nullable=False, default='active')   # active / revoked
    last_sync_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index('ix_connected_accounts_creator', 'creator_id', 'status'),
    )


class ProfileSnapshot(Base):
    __tablename__ = 'profile_snapshots'

    id = Column(Integer, primary_key=True, autoincrement=True)
    account_id = Column(Text, ForeignKey('connected_accounts.id'), nullable=False)
    snapshot_date = Column(Date, nullable=False)
    followers_count = Column(Integer, nullable=True)
    follows_count = Column(Integer, nullable=True)
    media_count = Column(Integer, nullable=True)
    bio_text = Column(Text, nullable=True)
    website = Column(Text, nullable=True)
    is_verified = Column(Boolean, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class ContentMetricsDaily(Base):
    __tablename__ = 'content_metrics_daily'

    id = Column(Integer, primary_key=True, autoincrement=True)
    account_id = Column(Text, ForeignKey('connected_accounts.id'), nullable=False)
    day = Column(Date, nullable=False)
    posts_count = Column(Integer, nullable=True)
    reels_count = Column(Integer, nullable=True)
    likes_total = Column(Integer, nullable=True)
    comments_total = Column(Integer, nullable=True)
    shares_total = Column(Integer, nullable=True)
    saves_total = Column(Integer, nullable=True)
    views_total = Column(Integer, nullable=True)
    reach_total = Column(Integer, nullable=True)
    impressions_total = Column(Integer, nullable=True)
    profile_visits_total = Column(Integer, nullable=True)
    website_clicks_total = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        Index('ix_content_metrics_account_day', 'account_id', 'day'),
    )
