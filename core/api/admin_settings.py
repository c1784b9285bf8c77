"""
Admin endpoints for system settings, including the maintenance switch.
"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.api.deps import CurrentUser, require_admin
from core.db import schemas
from core.db.database import get_db
from core.db.repositories import settings as settings_repo

logger = logging.getLogger(__name__)

router = APIRouter(tags=["admin-settings"])


@router.get("", response_model=schemas.SystemSettings)
def get_settings(
    db: Session = Depends(get_db),
    _admin: CurrentUser = Depends(require_admin),
):
    return settings_repo.get_settings(db)


@router.put("", response_model=schemas.SystemSettings)
def update_settings(
    payload: schemas.SystemSettingsUpdate,
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(require_admin),
):
    before = settings_repo.load_maintenance_status(db)
    row = settings_repo.update_settings(
        db,
        maintenance_mode=payload.maintenance_mode,
        maintenance_message=payload.maintenance_message,
        updated_by=admin.id,
    )
    if before.enabled != row.maintenance_mode:
        logger.warning(
            "maintenance_mode_changed: enabled=%s by=%s", row.maintenance_mode, admin.id
        )
    return row
