"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from studio_gallery.api.admin import router as admin_router
from studio_gallery.api.client import router as client_router
from studio_gallery.api.portals import router as portals_router
from studio_gallery.app_logging import configure_logging
from studio_gallery.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        pending = app.state.container.write_queue.pending()
        if pending:
            logger.info("Waiting for %d background writes", len(pending))
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(client_router)
    app.include_router(admin_router)
    app.include_router(portals_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
