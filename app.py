"""
ASGI entry point for external servers (`uvicorn app:app`).

Performs the same startup sequence as `core.server.main` minus the listener:
configuration, logging, database connectivity, app assembly.
"""

from core.api.main import configure_logging
from core.config import load_config
from core.server import bootstrap

config = load_config()
configure_logging(config)
app = bootstrap(config)
