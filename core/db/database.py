"""
Database engine and session management.

The engine is built from `AppConfig.database_url` at startup by
`connect_to_database`, which also verifies connectivity. Exposes the
`get_db` FastAPI dependency and a `session_scope` helper for code that
runs outside dependency injection (request gates).
"""
import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

engine: Optional[Engine] = None

# Bound to the engine by configure_database()
SessionLocal = sessionmaker(autocommit=False, autoflush=False)


class DatabaseConnectionError(RuntimeError):
    """Raised when the database cannot be reached at startup."""


def _engine_kwargs(url: str) -> dict:
    if not url.startswith("sqlite"):
        return {"pool_pre_ping": True}
    kwargs = {"connect_args": {"check_same_thread": False}}
    if ":memory:" in url or url.rstrip("/").endswith("sqlite:"):
        # In-memory SQLite with StaticPool so the schema persists across connections
        kwargs["poolclass"] = StaticPool
    return kwargs


def configure_database(url: str) -> Engine:
    """Create the engine for `url` and bind the session factory to it."""
    global engine
    if engine is not None:
        engine.dispose()
    engine = create_engine(url, **_engine_kwargs(url))
    SessionLocal.configure(bind=engine)
    return engine


def connect_to_database(url: str) -> Engine:
    """Configure the engine and ping the database.

    Raises:
        DatabaseConnectionError: if the connection check fails.
    """
    eng = configure_database(url)
    try:
        with eng.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        raise DatabaseConnectionError(f"Could not connect to database: {exc}") from exc
    logger.info("database_connected: dialect=%s", eng.dialect.name)
    return eng


def get_db() -> Iterator[Session]:
    """Dependency to get a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def session_scope() -> Iterator[Session]:
    """Yield a short-lived session that is always closed."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
