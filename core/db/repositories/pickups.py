"""
Repositories for waste pickup requests.
"""
from __future__ import annotations

import uuid
from datetime import date
from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from core.db import models, schemas


def create_pickup(db: Session, *, requester_id: uuid.UUID, payload: schemas.PickupCreate) -> models.Pickup:
    pickup = models.Pickup(
        requester_id=requester_id,
        waste_type=payload.waste_type.value,
        address=payload.address.strip(),
        preferred_date=payload.preferred_date,
        notes=payload.notes,
        status=schemas.PickupStatus.pending.value,
    )
    db.add(pickup)
    db.commit()
    db.refresh(pickup)
    return pickup


def get_pickup(db: Session, *, pickup_id: uuid.UUID) -> Optional[models.Pickup]:
    return db.get(models.Pickup, pickup_id)


def list_pickups(
    db: Session,
    *,
    requester_id: Optional[uuid.UUID] = None,
    status: Optional[str] = None,
) -> List[models.Pickup]:
    q = db.query(models.Pickup)
    if requester_id is not None:
        q = q.filter(models.Pickup.requester_id == requester_id)
    if status is not None:
        q = q.filter(models.Pickup.status == status)
    return q.order_by(models.Pickup.created_at.desc()).all()


def set_status(
    db: Session,
    *,
    pickup: models.Pickup,
    status: str,
    scheduled_date: Optional[date] = None,
) -> models.Pickup:
    pickup.status = status
    if scheduled_date is not None:
        pickup.scheduled_date = scheduled_date
    db.commit()
    db.refresh(pickup)
    return pickup


def count_by_status(db: Session) -> Dict[str, int]:
    rows = db.query(models.Pickup.status, func.count(models.Pickup.id)).group_by(models.Pickup.status).all()
    return {status: count for status, count in rows}
