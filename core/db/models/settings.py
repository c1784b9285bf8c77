from sqlalchemy import Column, Integer, String, DateTime, Boolean, Uuid, ForeignKey
from .base import Base, now_utc

SETTINGS_ROW_ID = 1
DEFAULT_MAINTENANCE_MESSAGE = "The system is under maintenance. Please try again later."


class SystemSettings(Base):
    """Singleton row holding process-wide switches such as maintenance mode."""

    __tablename__ = 'system_settings'
    id = Column(Integer, primary_key=True, default=SETTINGS_ROW_ID)
    maintenance_mode = Column(Boolean, nullable=False, default=False)
    maintenance_message = Column(String(500), nullable=False, default=DEFAULT_MAINTENANCE_MESSAGE)
    updated_by = Column(Uuid, ForeignKey('users.id', ondelete='SET NULL'), nullable=True)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)
