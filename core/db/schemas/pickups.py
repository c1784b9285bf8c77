import uuid
from datetime import date, datetime
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class PickupStatus(str, Enum):
    pending = "pending"
    scheduled = "scheduled"
    completed = "completed"
    cancelled = "cancelled"


class WasteType(str, Enum):
    household = "household"
    recyclable = "recyclable"
    organic = "organic"
    bulky = "bulky"
    electronic = "electronic"
    hazardous = "hazardous"


class PickupCreate(BaseModel):
    waste_type: WasteType
    address: str = Field(min_length=3, max_length=300)
    preferred_date: date
    notes: str | None = Field(default=None, max_length=2000)


class PickupAdminUpdate(BaseModel):
    status: PickupStatus
    scheduled_date: date | None = None


class Pickup(BaseModel):
    id: uuid.UUID
    requester_id: uuid.UUID
    waste_type: WasteType
    address: str
    preferred_date: date
    scheduled_date: date | None = None
    notes: str | None = None
    status: PickupStatus
    created_at: datetime | None = None
    updated_at: datetime | None = None
    model_config = ConfigDict(from_attributes=True)
