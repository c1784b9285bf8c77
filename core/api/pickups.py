"""
Waste pickup scheduling endpoints for citizens.

Mounted behind the authenticate and maintenance gates.
"""
import logging
import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from core.api.deps import CurrentUser, form_or_json, get_current_user
from core.api.errors import ConflictError, NotFoundError
from core.db import models, schemas
from core.db.database import get_db
from core.db.repositories import pickups as pickup_repo
from core.utils.roles import is_operator

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pickups"])

_CANCELLABLE = {schemas.PickupStatus.pending.value, schemas.PickupStatus.scheduled.value}


def _load_visible_pickup(db: Session, pickup_id: uuid.UUID, user: CurrentUser) -> models.Pickup:
    pickup = pickup_repo.get_pickup(db, pickup_id=pickup_id)
    if pickup is None or (pickup.requester_id != user.id and not is_operator(user.role)):
        raise NotFoundError("Pickup not found")
    return pickup


@router.post("", response_model=schemas.Pickup, status_code=status.HTTP_201_CREATED)
def request_pickup(
    payload: schemas.PickupCreate = Depends(form_or_json(schemas.PickupCreate)),
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    pickup = pickup_repo.create_pickup(db, requester_id=user.id, payload=payload)
    logger.info("pickup_requested: pickup_id=%s requester_id=%s", pickup.id, user.id)
    return pickup


@router.get("", response_model=List[schemas.Pickup])
def list_pickups(
    status: Optional[schemas.PickupStatus] = None,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    requester_id = None if is_operator(user.role) else user.id
    return pickup_repo.list_pickups(db, requester_id=requester_id, status=status.value if status else None)


@router.get("/{pickup_id}", response_model=schemas.Pickup)
def get_pickup(
    pickup_id: uuid.UUID,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    return _load_visible_pickup(db, pickup_id, user)


@router.post("/{pickup_id}/cancel", response_model=schemas.Pickup)
def cancel_pickup(
    pickup_id: uuid.UUID,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    pickup = _load_visible_pickup(db, pickup_id, user)
    if pickup.requester_id != user.id:
        raise NotFoundError("Pickup not found")
    if pickup.status not in _CANCELLABLE:
        raise ConflictError(f"A {pickup.status} pickup cannot be cancelled")
    pickup = pickup_repo.set_status(db, pickup=pickup, status=schemas.PickupStatus.cancelled.value)
    logger.info("pickup_cancelled: pickup_id=%s", pickup.id)
    return pickup
