"""
Account roles and the capabilities derived from them.

Central role constants so routers, gates and schemas agree on spelling.
"""

from typing import FrozenSet
from enum import Enum


ROLE_CITIZEN = "citizen"
ROLE_STAFF = "staff"
ROLE_ADMIN = "admin"

ALLOWED_ROLES: FrozenSet[str] = frozenset({ROLE_CITIZEN, ROLE_STAFF, ROLE_ADMIN})

# Derived role groups
# Roles that keep working while maintenance mode is on
MAINTENANCE_EXEMPT_ROLES: FrozenSet[str] = frozenset({ROLE_STAFF, ROLE_ADMIN})
# Roles that see and triage every citizen's records
OPERATOR_ROLES: FrozenSet[str] = frozenset({ROLE_STAFF, ROLE_ADMIN})


class RoleEnum(str, Enum):
    """Enum for account roles used in schemas and validation."""
    citizen = ROLE_CITIZEN
    staff = ROLE_STAFF
    admin = ROLE_ADMIN


def validate_role(role: str) -> None:
    """
    Validate that a role is allowed.

    Raises:
        ValueError: If role is not allowed
    """
    if role not in ALLOWED_ROLES:
        raise ValueError(f"Invalid role '{role}'. Allowed roles: {sorted(ALLOWED_ROLES)}")


def is_admin(role: str) -> bool:
    return role == ROLE_ADMIN


def is_operator(role: str) -> bool:
    """Return True if the role may view and triage all records."""
    return role in OPERATOR_ROLES


def blocked_by_maintenance(role: str) -> bool:
    """Return True if maintenance mode should block this role.

    Unknown roles are treated like citizens.
    """
    return role not in MAINTENANCE_EXEMPT_ROLES
