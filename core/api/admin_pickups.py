"""
Admin endpoints for triaging waste pickup requests.
"""
import logging
import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.api.deps import CurrentUser, require_admin
from core.api.errors import ApiError, NotFoundError
from core.db import schemas
from core.db.database import get_db
from core.db.repositories import pickups as pickup_repo

logger = logging.getLogger(__name__)

router = APIRouter(tags=["admin-pickups"])


@router.get("", response_model=List[schemas.Pickup])
def list_all_pickups(
    status: Optional[schemas.PickupStatus] = None,
    db: Session = Depends(get_db),
    _admin: CurrentUser = Depends(require_admin),
):
    return pickup_repo.list_pickups(db, status=status.value if status else None)


@router.patch("/{pickup_id}", response_model=schemas.Pickup)
def update_pickup(
    pickup_id: uuid.UUID,
    payload: schemas.PickupAdminUpdate,
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(require_admin),
):
    pickup = pickup_repo.get_pickup(db, pickup_id=pickup_id)
    if pickup is None:
        raise NotFoundError("Pickup not found")
    if payload.status == schemas.PickupStatus.scheduled and payload.scheduled_date is None and pickup.scheduled_date is None:
        raise ApiError("scheduled_date is required to schedule a pickup", status_code=422)
    pickup = pickup_repo.set_status(
        db,
        pickup=pickup,
        status=payload.status.value,
        scheduled_date=payload.scheduled_date,
    )
    logger.info("pickup_updated: pickup_id=%s status=%s by=%s", pickup.id, pickup.status, admin.id)
    return pickup
