"""
Repositories for user accounts.

Implements create/lookup/list and role changes. Passwords are hashed here so
raw secrets never reach the ORM layer.
"""
from __future__ import annotations

import uuid
from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from core.db import models
from core.utils import token_crypto
from core.utils.roles import ROLE_CITIZEN, validate_role


def get_by_id(db: Session, *, user_id: uuid.UUID) -> Optional[models.User]:
    return db.get(models.User, user_id)


def get_by_email(db: Session, *, email: str) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.email == email.strip().lower()).first()


def create_user(
    db: Session,
    *,
    name: str,
    email: str,
    password: str,
    role: str = ROLE_CITIZEN,
) -> models.User:
    validate_role(role)
    user = models.User(
        name=name,
        email=email.strip().lower(),
        password_hash=token_crypto.hash_password(password),
        role=role,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def authenticate(db: Session, *, email: str, password: str) -> Optional[models.User]:
    """Return the user when the credentials match, otherwise None."""
    user = get_by_email(db, email=email)
    if not user or not token_crypto.verify_password(password, user.password_hash):
        return None
    return user


def list_users(db: Session) -> List[models.User]:
    return db.query(models.User).order_by(models.User.created_at.desc()).all()


def set_role(db: Session, *, user: models.User, role: str) -> models.User:
    validate_role(role)
    if user.role != role:
        user.role = role
        db.commit()
        db.refresh(user)
    return user


def count_by_role(db: Session) -> Dict[str, int]:
    rows = db.query(models.User.role, func.count(models.User.id)).group_by(models.User.role).all()
    return {role: count for role, count in rows}
