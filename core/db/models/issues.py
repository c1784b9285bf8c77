import uuid
from sqlalchemy import Column, String, Text, DateTime, Uuid, ForeignKey, Index
from sqlalchemy.orm import relationship
from .base import Base, now_utc


class Issue(Base):
    __tablename__ = 'issues'
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    reporter_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String(50), nullable=False, default='other')
    location = Column(String(300), nullable=True)
    # 'open'|'in_progress'|'resolved'|'rejected'
    status = Column(String(20), nullable=False, default='open')
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    reporter = relationship("User")

    __table_args__ = (
        Index('idx_issues_reporter_created', 'reporter_id', 'created_at'),
        Index('idx_issues_status', 'status'),
    )
