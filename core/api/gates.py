"""
Request gates for citizen-facing routes.

`AuthenticateGate` verifies the bearer token and stores the caller's identity
on `request.state.user`. `MaintenanceGate` reads a fresh maintenance snapshot
per request and blocks citizens while maintenance is on. Both run database
work in the thread pool so the event loop is never blocked.
"""
from __future__ import annotations

import logging
from typing import Callable

from fastapi import status
from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import JSONResponse

from core.api.deps import CurrentUser, resolve_bearer_user
from core.api.errors import AuthenticationError
from core.api.pipeline import CONTINUE, GateResult, short_circuit
from core.db.database import session_scope
from core.db.repositories import settings as settings_repo
from core.db.repositories.settings import MaintenanceStatus
from core.utils.roles import blocked_by_maintenance

logger = logging.getLogger(__name__)

MaintenanceLoader = Callable[[], MaintenanceStatus]


def load_maintenance_status() -> MaintenanceStatus:
    """Read the current maintenance snapshot from the settings store."""
    with session_scope() as db:
        return settings_repo.load_maintenance_status(db)


def maintenance_blocks(snapshot: MaintenanceStatus, user: CurrentUser) -> bool:
    return snapshot.enabled and blocked_by_maintenance(user.role)


class AuthenticateGate:
    name = "authenticate"
    provides_identity = True
    requires_identity = False

    def __init__(self, jwt_secret: str):
        self._secret = jwt_secret

    def _resolve(self, authorization):
        with session_scope() as db:
            return resolve_bearer_user(db, authorization, secret=self._secret)

    async def __call__(self, request: Request) -> GateResult:
        try:
            user = await run_in_threadpool(self._resolve, request.headers.get("authorization"))
        except AuthenticationError as e:
            return short_circuit(
                JSONResponse(
                    {"message": e.message, "stack": None},
                    status_code=e.status_code,
                    headers={"WWW-Authenticate": "Bearer"},
                )
            )
        request.state.user = user
        return CONTINUE


class MaintenanceGate:
    name = "check_maintenance"
    provides_identity = False
    requires_identity = True

    def __init__(self, loader: MaintenanceLoader = load_maintenance_status):
        self._loader = loader

    async def __call__(self, request: Request) -> GateResult:
        user = getattr(request.state, "user", None)
        if not isinstance(user, CurrentUser):
            raise RuntimeError("Maintenance gate reached without an authenticated identity")
        snapshot = await run_in_threadpool(self._loader)
        if maintenance_blocks(snapshot, user):
            logger.info("maintenance_block: user_id=%s path=%s", user.id, request.url.path)
            return short_circuit(
                JSONResponse(
                    {"message": snapshot.message, "maintenance": True},
                    status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                )
            )
        return CONTINUE
