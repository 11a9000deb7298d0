"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from coffee_note.api.routes import router as users_router
from coffee_note.app_logging import configure_logging
from coffee_note.containers import AppContainer
from coffee_note.errors import (
    CoffeeNoteError,
    NotFoundError,
    PreconditionError,
    PremiumRequiredError,
    ValidationError,
    VisitLimitReachedError,
)

_ERROR_STATUS: dict[type[CoffeeNoteError], int] = {
    ValidationError: 422,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    PremiumRequiredError: status.HTTP_403_FORBIDDEN,
    VisitLimitReachedError: status.HTTP_403_FORBIDDEN,
    PreconditionError: status.HTTP_400_BAD_REQUEST,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("Starting Coffee Note API (%s)", container.settings.environment)
        yield
        app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(users_router)

    @app.exception_handler(CoffeeNoteError)
    async def handle_domain_error(
        request: Request, exc: CoffeeNoteError
    ) -> JSONResponse:
        status_code = _status_for(exc)
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error("Unhandled error on %s", request.url.path, exc_info=exc)
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _status_for(exc: CoffeeNoteError) -> int:
    for error_type, status_code in _ERROR_STATUS.items():
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR
