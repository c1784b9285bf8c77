import uuid
from sqlalchemy import Column, String, DateTime, Uuid
from .base import Base, now_utc


class User(Base):
    __tablename__ = 'users'
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(120), nullable=False)
    email = Column(String, nullable=False, unique=True, index=True)
    password_hash = Column(String, nullable=False)
    # 'citizen'|'staff'|'admin'
    role = Column(String(20), nullable=False, default='citizen')
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)
