"""
FastAPI app assembly: middleware, route bindings and the error handler.

Binding order is significant. Prefixes are matched first-come in the order
they are mounted here, and each binding's gates run in the listed order.
"""
import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core import __version__
from core.api import admin, admin_pickups, admin_settings, auth, issues, pickups
from core.api.errors import install_error_handlers
from core.api.gates import AuthenticateGate, MaintenanceGate, MaintenanceLoader, load_maintenance_status
from core.api.pipeline import GatePipelineMiddleware, RouteTable
from core.config import AppConfig, load_config

logger = logging.getLogger(__name__)

CORS_ALLOWED_HEADERS = ["Content-Type", "Authorization"]
CORS_ALLOWED_METHODS = ["GET", "HEAD", "PUT", "PATCH", "POST", "DELETE"]


def configure_logging(config: AppConfig) -> None:
    level = getattr(logging, config.log_level, logging.INFO)
    logging.basicConfig(level=level)
    logging.getLogger("core").setLevel(level)
    logger.info("app_startup: log_level=%s", config.log_level)


def build_route_table(config: AppConfig, maintenance_loader: MaintenanceLoader = load_maintenance_status) -> RouteTable:
    authenticate = AuthenticateGate(config.jwt_secret)
    check_maintenance = MaintenanceGate(maintenance_loader)

    table = RouteTable()

    # Public: login must work during maintenance and before any identity exists
    table.mount("/api/auth", handler=auth.router)

    # Admin console: no maintenance gate so admins can always lift maintenance.
    # Role checks happen inside the handlers.
    table.mount("/api/admin", handler=admin.router)
    table.mount("/api/admin/pickups", handler=admin_pickups.router)
    table.mount("/api/admin/settings", handler=admin_settings.router)

    # Citizen features: authenticate first, then the maintenance check reads
    # the identity it populated.
    table.mount("/api/issues", authenticate, check_maintenance, handler=issues.router)
    table.mount("/api/pickups", authenticate, check_maintenance, handler=pickups.router)
    return table


def create_app(
    config: Optional[AppConfig] = None,
    *,
    maintenance_loader: MaintenanceLoader = load_maintenance_status,
) -> FastAPI:
    config = config or load_config()

    app = FastAPI(
        title="Citizen Services API",
        description="Issue reporting, waste pickup scheduling and the admin console.",
        version=__version__,
    )
    app.state.config = config

    # Avoid implicit trailing-slash redirects for predictable URLs
    app.router.redirect_slashes = False

    table = build_route_table(config, maintenance_loader)
    table.install(app)
    app.state.route_table = table

    # Added first so CORS wraps it and short-circuit responses still carry CORS headers
    app.add_middleware(GatePipelineMiddleware, table=table)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.cors_origins),
        allow_credentials=True,
        allow_methods=CORS_ALLOWED_METHODS,
        allow_headers=CORS_ALLOWED_HEADERS,
    )

    install_error_handlers(app)
    return app
