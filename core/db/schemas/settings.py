import uuid
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class SystemSettings(BaseModel):
    maintenance_mode: bool
    maintenance_message: str
    updated_by: uuid.UUID | None = None
    updated_at: datetime | None = None
    model_config = ConfigDict(from_attributes=True)


class SystemSettingsUpdate(BaseModel):
    maintenance_mode: bool
    maintenance_message: str | None = Field(default=None, max_length=500)
