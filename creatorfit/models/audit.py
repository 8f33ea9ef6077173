"""
Audit trail and creator deletion requests.
"""
from sqlalchemy import Column, Integer, Text, DateTime, JSON, ForeignKey
from sqlalchemy.sql import func

from creatorfit.database import Base


class AuditLog(Base):
    __tablename__ = 'audit_log'

    id = Column(Integer, primary_key=True, autoincrement=True)
    actor_type = Column(Text, nullable=False)   # system / creator / admin
    actor_id = Column(Text, nullable=False)
    action = Column(Text, nullable=False)
    target_type = Column(Text, nullable=False)
    target_id = Column(Text, nullable=False)
    extra_data = Column('metadata', JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class DeletionRequest(Base):
    __tablename__ = 'deletion_requests'

    id = Column(Integer, primary_key=True, autoincrement=True)
    creator_id = Column(Text, ForeignKey('creators.id'), nullable=False)
    requested_at = Column(DateTime(timezone=True), nullable=False)
    status = Column(Text, nullable=False, default='requested')
    completed_at = Column(DateTime(timezone=True), nullable=True)
    notes = Column(Text, nullable=True)
