"""
Password hashing and bearer token utilities.

Responsibilities:
- Hash passwords using Argon2id and verify them
- Issue signed access tokens (JWT, HS256) carrying the user id and role
- Decode and validate access tokens, returning None for anything unusable
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from argon2.low_level import Type

logger = logging.getLogger(__name__)

_argon2 = PasswordHasher(time_cost=2, memory_cost=102400, parallelism=8, hash_len=32, type=Type.ID)

JWT_ALGORITHM = "HS256"
TOKEN_TYPE_ACCESS = "access"


@dataclass(frozen=True)
class TokenClaims:
    user_id: uuid.UUID
    role: str
    expires_at: datetime


def hash_password(password: str) -> str:
    """Hash a password using Argon2id."""
    return _argon2.hash(password)


def verify_password(password: str, encoded_hash: str) -> bool:
    if not password or not encoded_hash:
        return False
    try:
        return _argon2.verify(encoded_hash, password)
    except (VerificationError, InvalidHashError):
        return False


def issue_access_token(user_id: uuid.UUID, role: str, *, secret: str, expires_minutes: int) -> str:
    """Return a signed access token for the given user."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "role": role,
        "type": TOKEN_TYPE_ACCESS,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=expires_minutes)).timestamp()),
    }
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str, *, secret: str) -> Optional[TokenClaims]:
    """Decode and verify an access token.

    Returns None if the token is malformed, expired, badly signed or not an
    access token.
    """
    if not token:
        return None
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[JWT_ALGORITHM],
            options={"require": ["sub", "exp", "iat"]},
        )
    except jwt.ExpiredSignatureError:
        logger.info("token_rejected: reason=expired")
        return None
    except jwt.InvalidTokenError as e:
        logger.info("token_rejected: reason=%s", e)
        return None

    if payload.get("type") != TOKEN_TYPE_ACCESS:
        return None
    try:
        user_id = uuid.UUID(str(payload["sub"]))
    except ValueError:
        return None
    return TokenClaims(
        user_id=user_id,
        role=str(payload.get("role") or ""),
        expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )


def parse_bearer(authorization: Optional[str]) -> Optional[str]:
    """Extract the token from an `Authorization: Bearer <token>` header value."""
    if not authorization:
        return None
    scheme, _, value = authorization.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    value = value.strip()
    return value or None
