"""
Domain-split SQLAlchemy models.

Exposes `Base`, `now_utc`, and all ORM classes from a single import path.
"""

from .base import Base, now_utc  # re-export

# Domain models
from .users import User
from .settings import SystemSettings, SETTINGS_ROW_ID, DEFAULT_MAINTENANCE_MESSAGE
from .issues import Issue
from .pickups import Pickup

__all__ = [
    # base
    "Base",
    "now_utc",
    # users
    "User",
    # settings
    "SystemSettings",
    "SETTINGS_ROW_ID",
    "DEFAULT_MAINTENANCE_MESSAGE",
    # features
    "Issue",
    "Pickup",
]
