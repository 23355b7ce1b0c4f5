"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from ironlog.api.estimates import router as estimates_router
from ironlog.api.logs import router as logs_router
from ironlog.api.profile import router as profile_router
from ironlog.api.scores import router as scores_router
from ironlog.app_logging import configure_logging
from ironlog.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="IronLog", lifespan=lifespan)
    app.state.container = container

    app.include_router(profile_router)
    app.include_router(logs_router)
    app.include_router(scores_router)
    app.include_router(estimates_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    logger.info(
        "IronLog API ready: environment=%s ai_default=%s",
        container.settings.environment,
        bool(container.settings.openai_api_key),
    )
    return app
