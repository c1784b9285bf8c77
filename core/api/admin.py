"""
Admin console endpoints: account management and dashboard counts.

Mounted without gates so administrators keep access during maintenance;
every endpoint enforces the admin role itself.
"""
import logging
import uuid
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.api.deps import CurrentUser, require_admin
from core.api.errors import ConflictError, NotFoundError
from core.db import schemas
from core.db.database import get_db
from core.db.repositories import issues as issue_repo
from core.db.repositories import pickups as pickup_repo
from core.db.repositories import users as user_repo
from core.utils.roles import ROLE_ADMIN

logger = logging.getLogger(__name__)

router = APIRouter(tags=["admin"])


@router.get("/users", response_model=List[schemas.User])
def list_users(
    db: Session = Depends(get_db),
    _admin: CurrentUser = Depends(require_admin),
):
    return user_repo.list_users(db)


@router.patch("/users/{user_id}/role", response_model=schemas.User)
def update_user_role(
    user_id: uuid.UUID,
    payload: schemas.RoleUpdate,
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(require_admin),
):
    user = user_repo.get_by_id(db, user_id=user_id)
    if user is None:
        raise NotFoundError("User not found")
    new_role = payload.role.value
    if user.id == admin.id and new_role != ROLE_ADMIN:
        raise ConflictError("Admins cannot remove their own admin role")
    user = user_repo.set_role(db, user=user, role=new_role)
    logger.info("user_role_changed: user_id=%s role=%s by=%s", user.id, new_role, admin.id)
    return user


@router.get("/stats")
def get_stats(
    db: Session = Depends(get_db),
    _admin: CurrentUser = Depends(require_admin),
):
    """Return record counts grouped by role/status for the dashboard."""
    users_by_role = user_repo.count_by_role(db)
    issues_by_status = issue_repo.count_by_status(db)
    pickups_by_status = pickup_repo.count_by_status(db)
    return {
        "users": {"total": sum(users_by_role.values()), "by_role": users_by_role},
        "issues": {"total": sum(issues_by_status.values()), "by_status": issues_by_status},
        "pickups": {"total": sum(pickups_by_status.values()), "by_status": pickups_by_status},
    }
