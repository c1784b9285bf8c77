"""
API dependency helpers.

Provides the authenticated identity for routes, either as populated by the
authenticate gate or, on ungated prefixes, resolved from the bearer token
inside the handler.
"""
import json
import uuid
from dataclasses import dataclass
from typing import Callable, Optional, Type, TypeVar

from fastapi import Depends, Header, Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session

from core.api.errors import ApiError, AuthenticationError, ForbiddenError
from core.config import AppConfig
from core.db.database import get_db
from core.db.repositories import users as user_repo
from core.utils import token_crypto
from core.utils.roles import is_admin, is_operator

NO_TOKEN_MESSAGE = "Not authorized, no token"
BAD_TOKEN_MESSAGE = "Not authorized, token failed"

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True)
class CurrentUser:
    """Immutable snapshot of the authenticated account for one request."""

    id: uuid.UUID
    name: str
    email: str
    role: str


def get_config(request: Request) -> AppConfig:
    return request.app.state.config


def resolve_bearer_user(db: Session, authorization: Optional[str], *, secret: str) -> CurrentUser:
    """Resolve the account behind an `Authorization: Bearer` header.

    Raises:
        AuthenticationError: if the header is missing, the token does not
            verify, or the account no longer exists.
    """
    token = token_crypto.parse_bearer(authorization)
    if not token:
        raise AuthenticationError(NO_TOKEN_MESSAGE)
    claims = token_crypto.decode_access_token(token, secret=secret)
    if claims is None:
        raise AuthenticationError(BAD_TOKEN_MESSAGE)
    user = user_repo.get_by_id(db, user_id=claims.user_id)
    if user is None:
        raise AuthenticationError(BAD_TOKEN_MESSAGE)
    # Role comes from the database so role changes apply to existing tokens
    return CurrentUser(id=user.id, name=user.name, email=user.email, role=user.role)


# Contract:
# Returns the CurrentUser for this request.
# Raises 401 if identity cannot be resolved.
def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
    authorization: Optional[str] = Header(default=None),
) -> CurrentUser:
    user = getattr(request.state, "user", None)
    if isinstance(user, CurrentUser):
        return user
    user = resolve_bearer_user(db, authorization, secret=get_config(request).jwt_secret)
    request.state.user = user
    return user


def require_admin(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if not is_admin(user.role):
        raise ForbiddenError("Admin access required")
    return user


def require_operator(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if not is_operator(user.role):
        raise ForbiddenError("Staff or admin access required")
    return user


def form_or_json(model: Type[ModelT]) -> Callable:
    """Dependency parsing the request body into `model` from JSON or form fields.

    Form-encoded and multipart bodies are read field by field; anything else
    is parsed as JSON. Validation failures surface as 422 like any other body.
    """

    async def _parse(request: Request) -> ModelT:
        content_type = request.headers.get("content-type", "").lower()
        if content_type.startswith(FORM_CONTENT_TYPES):
            form = await request.form()
            data = {key: value for key, value in form.items() if isinstance(value, str)}
        else:
            try:
                data = await request.json()
            except (json.JSONDecodeError, UnicodeDecodeError):
                raise ApiError("Malformed JSON body", status_code=400)
        try:
            return model.model_validate(data)
        except ValidationError as e:
            errors = [{**err, "loc": ("body", *err["loc"])} for err in e.errors(include_url=False)]
            raise RequestValidationError(errors)

    return _parse
