"""FastAPI application entry point — wires the store, dispatcher and router together.

Usage:
    python -m officine.main

Serves the command surface over HTTP on ``settings.server.host:port``.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI

from officine import __version__
from officine.config import settings
from officine.dispatcher import Dispatcher
from officine.errors import DomainError
from officine.store import Store
from officine.web import domain_error_handler, router

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Route stdlib and structlog output to stdout at ``settings.log_level``."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
        stream=sys.stdout,
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )


def create_app(store: Store | None = None) -> FastAPI:
    """Build the application around ``store`` (a fresh seeded one by default)."""
    store = store if store is not None else Store()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info("Starting Inspection Officine %s (env=%s)", __version__, settings.environment)
        store.seed()
        try:
            yield
        finally:
            logger.info("Shutting down, discarding store (%d inspection(s))", len(store.inspections))
            store.reset()

    app = FastAPI(
        title="Inspection Officine API",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.store = store
    app.state.dispatcher = Dispatcher(store)
    app.add_exception_handler(DomainError, domain_error_handler)
    app.include_router(router)
    return app


def main() -> None:
    configure_logging()
    uvicorn.run(create_app(), host=settings.server.host, port=settings.server.port)


if __name__ == "__main__":
    main()
