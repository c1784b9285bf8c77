"""
Account registration, login and self-profile endpoints.

Mounted without gates: login must stay reachable during maintenance so
administrators can sign in and lift it.
"""
import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from core.api.deps import CurrentUser, form_or_json, get_config, get_current_user
from core.api.errors import AuthenticationError, ConflictError, NotFoundError
from core.config import AppConfig
from core.db import models, schemas
from core.db.database import get_db
from core.db.repositories import users as user_repo
from core.utils import token_crypto
from core.utils.roles import ROLE_CITIZEN

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


def _auth_response(user: models.User, config: AppConfig) -> schemas.AuthResponse:
    token = token_crypto.issue_access_token(
        user.id,
        user.role,
        secret=config.jwt_secret,
        expires_minutes=config.jwt_expires_minutes,
    )
    return schemas.AuthResponse(user=schemas.User.model_validate(user), token=token)


@router.post("/register", response_model=schemas.AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    payload: schemas.RegisterRequest = Depends(form_or_json(schemas.RegisterRequest)),
    db: Session = Depends(get_db),
    config: AppConfig = Depends(get_config),
):
    if user_repo.get_by_email(db, email=payload.email):
        raise ConflictError("User already exists")
    # Self-registration always yields a citizen; elevation happens in the admin console
    user = user_repo.create_user(
        db,
        name=payload.name,
        email=payload.email,
        password=payload.password,
        role=ROLE_CITIZEN,
    )
    logger.info("user_registered: user_id=%s", user.id)
    return _auth_response(user, config)


@router.post("/login", response_model=schemas.AuthResponse)
def login(
    payload: schemas.LoginRequest = Depends(form_or_json(schemas.LoginRequest)),
    db: Session = Depends(get_db),
    config: AppConfig = Depends(get_config),
):
    user = user_repo.authenticate(db, email=payload.email, password=payload.password)
    if user is None:
        raise AuthenticationError("Invalid email or password")
    return _auth_response(user, config)


@router.get("/me", response_model=schemas.User)
def me(
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    user = user_repo.get_by_id(db, user_id=current.id)
    if user is None:
        raise NotFoundError("User not found")
    return user
