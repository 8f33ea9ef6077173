"""
Qualification outputs: niche classification, creator score, brand targets.

All three tables are append-only. The current value for a creator is the row
with the newest computed_at; rows sharing a timestamp are ordered by id.
"""
from sqlalchemy import Column, Integer, Float, Text, DateTime, JSON, ForeignKey, Index

from creatorfit.database import Base


class NicheClassification(Base):
    __tablename__ = 'niche_classification'

    id = Column(Integer, primary_key=True, autoincrement=True)
    creator_id = Column(Text, ForeignKey('creators.id'), nullable=False)
    primary_niche = Column(Text, nullable=False)
    secondary_niches = Column(JSON, default=list)
    confidence = Column(Float, nullable=False)        # 0.0-1.0, 2 decimals
    evidence_keywords = Column(JSON, default=list)    # <= 8 keywords
    model_version = Column(Text, nullable=False)
    computed_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index('ix_niche_classification_creator', 'creator_id', 'computed_at'),
    )

    def to_dict(self):
        return {
            'primary_niche': self.primary_niche,
            'secondary_niches': list(self.secondary_niches or []),
            'confidence': self.confidence,
            'evidence_keywords': list(self.evidence_keywords or []),
            'model_version': self.model_version,
            'computed_at': self.computed_at.isoformat() if self.computed_at else None,
        }


class CreatorScore(Base):
    __tablename__ = 'creator_scores'

    id = Column(Integer, primary_key=True, autoincrement=True)
    creator_id = Column(Text, ForeignKey('creators.id'), nullable=False)
    score_total = Column(Integer, nullable=False)
    grade = Column(Text, nullable=False)              # A / B / C
    er_score = Column(Integer, nullable=False)
    reach_score = Column(Integer, nullable=True)      # NULL = reach unavailable
    consistency_score = Column(Integer, nullable=False)
    niche_score = Column(Integer, nullable=False)
    fraud_penalty = Column(Integer, nullable=False)   # 0-30
    scoring_version = Column(Text, nullable=False)
    computed_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index('ix_creator_scores_creator', 'creator_id', 'computed_at'),
    )

    def to_dict(self):
        return {
            'score_total': self.score_total,
            'grade': self.grade,
            'er_score': self.er_score,
            'reach_score': self.reach_score,
            'consistency_score': self.consistency_score,
            'niche_score': self.niche_score,
            'fraud_penalty': self.fraud_penalty,
            'scoring_version': self.scoring_version,
            'computed_at': self.computed_at.isoformat() if self.computed_at else None,
        }


class BrandTarget(Base):
    __tablename__ = 'brand_targets'

    id = Column(Integer, primary_key=True, autoincrement=True)
    creator_id = Column(Text, ForeignKey('creators.id'), nullable=False)
    target_type = Column(Text, nullable=False)        # local / ecommerce
    segment = Column(Text, nullable=False)            # niche tag
    suggested_brands = Column(JSON, nullable=False)
    generated_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index('ix_brand_targets_creator', 'creator_id', 'generated_at'),
    )

    def to_dict(self):
        return {
            'target_type': self.target_type,
            'segment': self.segment,
            'suggested_brands': list(self.suggested_brands or []),
            'generated_at': self.generated_at.isoformat() if self.generated_at else None,
        }
