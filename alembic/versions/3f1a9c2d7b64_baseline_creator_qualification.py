"""Baseline: creators, consents, accounts, signals, qualification outputs, audit

Revision ID: 3f1a9c2d7b64
Revises:
Create Date: 2026-02-01 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1a9c2d7b64'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table('creators',
        sa.Column('id', sa.Text(), nullable=False),
        sa.Column('full_name', sa.Text(), nullable=False),
        sa.Column('email', sa.Text(), nullable=False),
        sa.Column('phone', sa.Text(), nullable=True),
        sa.Column('country', sa.Text(), nullable=False),
        sa.Column('city', sa.Text(), nullable=True),
        sa.Column('declared_category', sa.Text(), nullable=True),
        sa.Column('status', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
    )
    op.create_index('ix_creators_status', 'creators', ['status'])

    op.create_table('consent_records',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('creator_id', sa.Text(), sa.ForeignKey('creators.id'), nullable=False),
        sa.Column('consent_type', sa.Text(), nullable=False),
        sa.Column('granted', sa.Integer(), nullable=False),
        sa.Column('text_version', sa.Text(), nullable=False),
        sa.Column('text_hash', sa.Text(), nullable=False),
        sa.Column('ip_address', sa.Text(), nullable=True),
        sa.Column('user_agent', sa.Text(), nullable=True),
        sa.Column('granted_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('revoked_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('revoke_reason', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table('connected_accounts',
        sa.Column('id', sa.Text(), nullable=False),
        sa.Column('creator_id', sa.Text(), sa.ForeignKey('creators.id'), nullable=False),
        sa.Column('platform', sa.Text(), nullable=False),
        sa.Column('platform_user_id', sa.Text(), nullable=True),
        sa.Column('username', sa.Text(), nullable=True),
        sa.Column('account_type', sa.Text(), nullable=False),
        sa.Column('scopes', sa.Text(), nullable=True),
        sa.Column('access_token_enc', sa.Text(), nullable=True),
        sa.Column('token_expires_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('connected_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('disconnected_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('status', sa.Text(), nullable=False),
        sa.Column('last_sync_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_connected_accounts_creator', 'connected_accounts', ['creator_id', 'status'])

    op.create_table('profile_snapshots',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('account_id', sa.Text(), sa.ForeignKey('connected_accounts.id'), nullable=False),
        sa.Column('snapshot_date', sa.Date(), nullable=False),
        sa.Column('followers_count', sa.Integer(), nullable=True),
        sa.Column('follows_count', sa.Integer(), nullable=True),
        sa.Column('media_count', sa.Integer(), nullable=True),
        sa.Column('bio_text', sa.Text(), nullable=True),
        sa.Column('website', sa.Text(), nullable=True),
        sa.Column('is_verified', sa.Boolean(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table('content_metrics_daily',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('account_id', sa.Text(), sa.ForeignKey('connected_accounts.id'), nullable=False),
        sa.Column('day', sa.Date(), nullable=False),
        sa.Column('posts_count', sa.Integer(), nullable=True),
        sa.Column('reels_count', sa.Integer(), nullable=True),
        sa.Column('likes_total', sa.Integer(), nullable=True),
        sa.Column('comments_total', sa.Integer(), nullable=True),
        sa.Column('shares_total', sa.Integer(), nullable=True),
        sa.Column('saves_total', sa.Integer(), nullable=True),
        sa.Column('views_total', sa.Integer(), nullable=True),
        sa.Column('reach_total', sa.Integer(), nullable=True),
        sa.Column('impressions_total', sa.Integer(), nullable=True),
        sa.Column('profile_visits_total', sa.Integer(), nullable=True),
        sa.Column('website_clicks_total', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_content_metrics_account_day', 'content_metrics_daily', ['account_id', 'day'])

    op.create_table('niche_classification',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('creator_id', sa.Text(), sa.ForeignKey('creators.id'), nullable=False),
        sa.Column('primary_niche', sa.Text(), nullable=False),
        sa.Column('secondary_niches', sa.JSON(), nullable=True),
        sa.Column('confidence', sa.Float(), nullable=False),
        sa.Column('evidence_keywords', sa.JSON(), nullable=True),
        sa.Column('model_version', sa.Text(), nullable=False),
        sa.Column('computed_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_niche_classification_creator', 'niche_classification', ['creator_id', 'computed_at'])

    op.create_table('creator_scores',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('creator_id', sa.Text(), sa.ForeignKey('creators.id'), nullable=False),
        sa.Column('score_total', sa.Integer(), nullable=False),
        sa.Column('grade', sa.Text(), nullable=False),
        sa.Column('er_score', sa.Integer(), nullable=False),
        sa.Column('reach_score', sa.Integer(), nullable=True),
        sa.Column('consistency_score', sa.Integer(), nullable=False),
        sa.Column('niche_score', sa.Integer(), nullable=False),
        sa.Column('fraud_penalty', sa.Integer(), nullable=False),
        sa.Column('scoring_version', sa.Text(), nullable=False),
        sa.Column('computed_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_creator_scores_creator', 'creator_scores', ['creator_id', 'computed_at'])

    op.create_table('brand_targets',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('creator_id', sa.Text(), sa.ForeignKey('creators.id'), nullable=False),
        sa.Column('target_type', sa.Text(), nullable=False),
        sa.Column('segment', sa.Text(), nullable=False),
        sa.Column('suggested_brands', sa.JSON(), nullable=False),
        sa.Column('generated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_brand_targets_creator', 'brand_targets', ['creator_id', 'generated_at'])

    op.create_table('audit_log',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('actor_type', sa.Text(), nullable=False),
        sa.Column('actor_id', sa.Text(), nullable=False),
        sa.Column('action', sa.Text(), nullable=False),
        sa.Column('target_type', sa.Text(), nullable=False),
        sa.Column('target_id', sa.Text(), nullable=False),
        sa.Column('metadata', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table('deletion_requests',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('creator_id', sa.Text(), sa.ForeignKey('creators.id'), nullable=False),
        sa.Column('requested_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('status', sa.Text(), nullable=False),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('deletion_requests')
    op.drop_table('audit_log')
    op.drop_index('ix_brand_targets_creator', 'brand_targets')
    op.drop_table('brand_targets')
    op.drop_index('ix_creator_scores_creator', 'creator_scores')
    op.drop_table('creator_scores')
    op.drop_index('ix_niche_classification_creator', 'niche_classification')
    op.drop_table('niche_classification')
    op.drop_index('ix_content_metrics_account_day', 'content_metrics_daily')
    op.drop_table('content_metrics_daily')
    op.drop_table('profile_snapshots')
    op.drop_index('ix_connected_accounts_creator', 'connected_accounts')
    op.drop_table('connected_accounts')
    op.drop_table('consent_records')
    op.drop_index('ix_creators_status', 'creators')
    op.drop_table('creators')
