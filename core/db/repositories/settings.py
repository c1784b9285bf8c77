"""
Repository for the singleton system settings row.

`load_maintenance_status` returns an immutable snapshot so callers never hold
on to a live ORM object across requests.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.db import models


@dataclass(frozen=True)
class MaintenanceStatus:
    enabled: bool
    message: str


def get_settings(db: Session) -> models.SystemSettings:
    """Return the settings row, creating it with defaults on first access."""
    row = db.get(models.SystemSettings, models.SETTINGS_ROW_ID)
    if row is not None:
        return row
    row = models.SystemSettings(
        id=models.SETTINGS_ROW_ID,
        maintenance_mode=False,
        maintenance_message=models.DEFAULT_MAINTENANCE_MESSAGE,
    )
    db.add(row)
    try:
        db.commit()
    except IntegrityError:
        # Another request created it first
        db.rollback()
        return db.get(models.SystemSettings, models.SETTINGS_ROW_ID)
    db.refresh(row)
    return row


def load_maintenance_status(db: Session) -> MaintenanceStatus:
    row = db.get(models.SystemSettings, models.SETTINGS_ROW_ID)
    if row is None:
        return MaintenanceStatus(enabled=False, message=models.DEFAULT_MAINTENANCE_MESSAGE)
    return MaintenanceStatus(
        enabled=bool(row.maintenance_mode),
        message=row.maintenance_message or models.DEFAULT_MAINTENANCE_MESSAGE,
    )


def update_settings(
    db: Session,
    *,
    maintenance_mode: bool,
    maintenance_message: Optional[str],
    updated_by: Optional[uuid.UUID],
) -> models.SystemSettings:
    row = get_settings(db)
    row.maintenance_mode = maintenance_mode
    if maintenance_message is not None and maintenance_message.strip():
        row.maintenance_message = maintenance_message.strip()
    row.updated_by = updated_by
    db.commit()
    db.refresh(row)
    return row
