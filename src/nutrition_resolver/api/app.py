"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Query, Request

from nutrition_resolver.api.admin import router as admin_router
from nutrition_resolver.app_logging import configure_logging
from nutrition_resolver.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if not app.state.container.nutrition_service.api_key:
            logger.warning("FDC API key not configured; lookups will return no data")
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/nutrition")
    async def nutrition(
        request: Request,
        food: str = Query(min_length=1),
        grams: float = Query(ge=0),
    ) -> dict[str, object]:
        """Resolve nutrition for a food name and serving weight."""
        state_container: AppContainer = request.app.state.container
        info = await state_container.nutrition_service.get_nutrition_for_food(
            food, grams
        )
        if info is None:
            return {"found": False, "nutrition": None}
        return {"found": True, "nutrition": info.to_dict()}

    return app
