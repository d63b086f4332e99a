"""FastAPI application factory."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from health_lover.api.admin import router as admin_router
from health_lover.api.diets import router as diets_router
from health_lover.api.recommendations import router as recommendations_router
from health_lover.api.users import router as users_router
from health_lover.app_logging import configure_logging
from health_lover.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="HealthLover", lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)
    app.include_router(diets_router)
    app.include_router(recommendations_router)
    app.include_router(users_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
