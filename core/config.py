"""
Process configuration.

Values are read once at startup (after loading an optional `.env` file) into
a frozen `AppConfig` that is passed explicitly to the parts that need it.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from dotenv import load_dotenv

DEFAULT_PORT = 5000
DEFAULT_HOST = "0.0.0.0"
DEFAULT_DATABASE_URL = "sqlite:///./citizen_services.db"
DEFAULT_CORS_ORIGINS: Tuple[str, ...] = ("http://localhost:3000", "http://127.0.0.1:3000")
PRODUCTION_ENV = "production"

# Only used outside production; production must supply JWT_SECRET.
_DEV_JWT_SECRET = "citizen-services-development-secret-key"


@dataclass(frozen=True)
class AppConfig:
    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST
    node_env: str = "development"
    database_url: str = DEFAULT_DATABASE_URL
    jwt_secret: str = _DEV_JWT_SECRET
    jwt_expires_minutes: int = 1440
    cors_origins: Tuple[str, ...] = DEFAULT_CORS_ORIGINS
    log_level: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.node_env == PRODUCTION_ENV


def _get(env: Mapping[str, str], name: str) -> Optional[str]:
    """Return a stripped env value, treating empty strings as unset."""
    value = env.get(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _parse_int(name: str, raw: Optional[str], default: int) -> int:
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _parse_port(raw: Optional[str]) -> int:
    port = _parse_int("PORT", raw, DEFAULT_PORT)
    if not 0 < port < 65536:
        raise ValueError(f"PORT must be between 1 and 65535, got {port}")
    return port


def _parse_origins(raw: Optional[str]) -> Tuple[str, ...]:
    if raw is None:
        return DEFAULT_CORS_ORIGINS
    origins = tuple(o.strip().rstrip("/") for o in raw.split(",") if o.strip())
    return origins or DEFAULT_CORS_ORIGINS


def config_from_env(env: Mapping[str, str]) -> AppConfig:
    """Build an `AppConfig` from an environment mapping.

    Raises:
        ValueError: if a numeric value is malformed or a production deployment
            does not configure `JWT_SECRET`.
    """
    node_env = _get(env, "NODE_ENV") or "development"
    jwt_secret = _get(env, "JWT_SECRET")
    if jwt_secret is None:
        if node_env == PRODUCTION_ENV:
            raise ValueError("JWT_SECRET must be set when NODE_ENV=production")
        jwt_secret = _DEV_JWT_SECRET

    return AppConfig(
        port=_parse_port(_get(env, "PORT")),
        host=_get(env, "HOST") or DEFAULT_HOST,
        node_env=node_env,
        database_url=_get(env, "DATABASE_URL") or DEFAULT_DATABASE_URL,
        jwt_secret=jwt_secret,
        jwt_expires_minutes=_parse_int("JWT_EXPIRES_MINUTES", _get(env, "JWT_EXPIRES_MINUTES"), 1440),
        cors_origins=_parse_origins(_get(env, "CORS_ORIGINS")),
        log_level=(_get(env, "LOG_LEVEL") or "INFO").upper(),
    )


def load_config(dotenv_path: Optional[str] = None) -> AppConfig:
    """Load `.env` (without overriding real env vars) and return the config."""
    load_dotenv(dotenv_path)
    return config_from_env(os.environ)


__all__ = ["AppConfig", "config_from_env", "load_config", "DEFAULT_PORT", "PRODUCTION_ENV"]
