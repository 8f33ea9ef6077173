"""
Creator model: one row per sign-up, deduplicated by email.

ConsentRecord keeps one row per consent type answered at sign-up.
"""
import uuid

from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, Index
from sqlalchemy.sql import func

from creatorfit.database import Base


def new_id():
    return uuid.uuid4().hex


class Creator(Base):
    __tablename__ = 'creators'

    id = Column(Text, primary_key=True, default=new_id)
    full_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False, unique=True)
    phone = Column(Text, nullable=True)
    country = Column(Text, nullable=False)           # ES / PT
    city = Column(Text, nullable=True)
    declared_category = Column(Text, nullable=True)  # free-text niche hint
    status = Column(Text, nullable=False, default='lead')
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        Index('ix_creators_status', 'status'),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'full_name': self.full_name,
            'email': self.email,
            'phone': self.phone,
            'country': self.country,
            'city': self.city,
            'declared_category': self.declared_category,
            'status': self.status,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }


class ConsentRecord(Base):
    __tablename__ = 'consent_records'

    id = Column(Integer, primary_key=True, autoincrement=True)
    creator_id = Column(Text, ForeignKey('creators.id'), nullable=False)
    consent_type = Column(Text, nullable=False)
    granted = Column(Integer, nullable=False)        # 0/1
    text_version = Column(Text, nullable=False)
    text_hash = Column(Text, nullable=False)
    ip_address = Column(Text, nullable=True)
    user_agent = Column(Text, nullable=True)
    granted_at = Column(DateTime(timezone=True), nullable=False)
    revoked_at = Column(DateTime(timezone=True), nullable=True)
    revoke_reason = Column(Text, nullable=True)
