import uuid
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.utils.roles import RoleEnum


def _normalize_email(value: str) -> str:
    value = (value or "").strip().lower()
    local, _, domain = value.partition("@")
    if not local or "." not in domain or " " in value:
        raise ValueError("invalid email address")
    return value


class RegisterRequest(BaseModel):
    name: str = Field(min_length=1, max_length=120)
    email: str
    password: str = Field(min_length=8, max_length=256)

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        return _normalize_email(v)

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        return (v or "").strip().lower()


class User(BaseModel):
    id: uuid.UUID
    name: str
    email: str
    role: RoleEnum
    created_at: datetime | None = None
    model_config = ConfigDict(from_attributes=True)


class AuthResponse(BaseModel):
    user: User
    token: str


class RoleUpdate(BaseModel):
    role: RoleEnum
