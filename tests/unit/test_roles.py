import pytest

from core.utils.roles import (
    ALLOWED_ROLES,
    ROLE_ADMIN,
    ROLE_CITIZEN,
    ROLE_STAFF,
    blocked_by_maintenance,
    is_operator,
    validate_role,
)


def test_only_citizens_blocked_by_maintenance():
    assert blocked_by_maintenance(ROLE_CITIZEN) is True
    assert blocked_by_maintenance(ROLE_STAFF) is False
    assert blocked_by_maintenance(ROLE_ADMIN) is False


def test_unknown_role_treated_as_citizen():
    assert blocked_by_maintenance("mystery") is True


def test_validate_role():
    for role in ALLOWED_ROLES:
        validate_role(role)
    with pytest.raises(ValueError):
        validate_role("superuser")


def test_operator_roles():
    assert is_operator(ROLE_STAFF) and is_operator(ROLE_ADMIN)
    assert not is_operator(ROLE_CITIZEN)
