import uuid
from datetime import datetime
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class IssueStatus(str, Enum):
    open = "open"
    in_progress = "in_progress"
    resolved = "resolved"
    rejected = "rejected"


class IssueCategory(str, Enum):
    pothole = "pothole"
    streetlight = "streetlight"
    garbage = "garbage"
    water = "water"
    noise = "noise"
    other = "other"


class IssueCreate(BaseModel):
    title: str = Field(min_length=3, max_length=200)
    description: str = Field(min_length=1, max_length=5000)
    category: IssueCategory = IssueCategory.other
    location: str | None = Field(default=None, max_length=300)


class IssueUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=3, max_length=200)
    description: str | None = Field(default=None, min_length=1, max_length=5000)
    category: IssueCategory | None = None
    location: str | None = Field(default=None, max_length=300)
    status: IssueStatus | None = None


class Issue(BaseModel):
    id: uuid.UUID
    reporter_id: uuid.UUID
    title: str
    description: str
    category: IssueCategory
    location: str | None = None
    status: IssueStatus
    created_at: datetime | None = None
    updated_at: datetime | None = None
    model_config = ConfigDict(from_attributes=True)
