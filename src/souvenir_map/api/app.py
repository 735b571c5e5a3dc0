"""FastAPI application factory."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from souvenir_map.api.accounts import router as accounts_router
from souvenir_map.api.errors import register_error_handlers
from souvenir_map.api.souvenirs import router as souvenirs_router
from souvenir_map.app_logging import configure_logging
from souvenir_map.config import parse_allowed_origins
from souvenir_map.containers import AppContainer

ALLOWED_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]
ALLOWED_METHODS = ["GET", "POST", "OPTIONS"]


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_allowed_origins(container.settings.cors_allow_origins),
        allow_methods=ALLOWED_METHODS,
        allow_headers=ALLOWED_HEADERS,
    )
    register_error_handlers(app)
    app.include_router(souvenirs_router)
    app.include_router(accounts_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
