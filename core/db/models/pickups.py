import uuid
from sqlalchemy import Column, String, Text, Date, DateTime, Uuid, ForeignKey, Index
from sqlalchemy.orm import relationship
from .base import Base, now_utc


class Pickup(Base):
    __tablename__ = 'pickups'
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    requester_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    waste_type = Column(String(50), nullable=False)
    address = Column(String(300), nullable=False)
    preferred_date = Column(Date, nullable=False)
    scheduled_date = Column(Date, nullable=True)
    notes = Column(Text, nullable=True)
    # 'pending'|'scheduled'|'completed'|'cancelled'
    status = Column(String(20), nullable=False, default='pending')
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    requester = relationship("User")

    __table_args__ = (
        Index('idx_pickups_requester_created', 'requester_id', 'created_at'),
        Index('idx_pickups_status', 'status'),
    )
