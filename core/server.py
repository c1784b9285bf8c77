"""
Process entry point.

Startup order: configuration, logging, database connectivity (fatal on
failure), app assembly, then uvicorn on the configured port.
"""
import logging
import sys

import uvicorn
from fastapi import FastAPI

from core.api.main import configure_logging, create_app
from core.config import AppConfig, load_config
from core.db.database import DatabaseConnectionError, connect_to_database

logger = logging.getLogger(__name__)


class ListeningServer(uvicorn.Server):
    """uvicorn server that reports the port once the listener is bound."""

    async def startup(self, sockets=None) -> None:
        await super().startup(sockets=sockets)
        if self.started:
            logger.info("Server started on port %s", self.config.port)


def serve(app: FastAPI, config: AppConfig) -> None:
    server = ListeningServer(
        uvicorn.Config(app, host=config.host, port=config.port, log_level=config.log_level.lower())
    )
    server.run()


def bootstrap(config: AppConfig) -> FastAPI:
    """Connect to the database and return the assembled app.

    Raises:
        DatabaseConnectionError: if the database is unreachable.
    """
    connect_to_database(config.database_url)
    return create_app(config)


def main() -> int:
    try:
        config = load_config()
    except ValueError as e:
        logging.basicConfig(level=logging.ERROR)
        logger.error("invalid_configuration: %s", e)
        return 2

    configure_logging(config)
    try:
        app = bootstrap(config)
    except DatabaseConnectionError as e:
        logger.critical("startup_failed: %s", e)
        return 1

    serve(app, config)
    return 0


if __name__ == "__main__":
    sys.exit(main())
