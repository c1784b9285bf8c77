"""
Pydantic request/response schemas, grouped by domain.
"""

from .users import RegisterRequest, LoginRequest, User, AuthResponse, RoleUpdate
from .settings import SystemSettings, SystemSettingsUpdate
from .issues import IssueStatus, IssueCategory, IssueCreate, IssueUpdate, Issue
from .pickups import PickupStatus, WasteType, PickupCreate, PickupAdminUpdate, Pickup

__all__ = [
    # users/auth
    "RegisterRequest",
    "LoginRequest",
    "User",
    "AuthResponse",
    "RoleUpdate",
    # settings
    "SystemSettings",
    "SystemSettingsUpdate",
    # issues
    "IssueStatus",
    "IssueCategory",
    "IssueCreate",
    "IssueUpdate",
    "Issue",
    # pickups
    "PickupStatus",
    "WasteType",
    "PickupCreate",
    "PickupAdminUpdate",
    "Pickup",
]
