"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from portfolio_cms.api.activity import router as activity_router
from portfolio_cms.api.content import router as content_router
from portfolio_cms.app_logging import configure_logging
from portfolio_cms.containers import AppContainer
from portfolio_cms.errors import (
    AuthenticationError,
    ConflictError,
    ContentStoreError,
    NotFoundError,
    ValidationError,
)

_STATUS_CODES: dict[type[ContentStoreError], int] = {
    ValidationError: 422,
    ConflictError: 409,
    NotFoundError: 404,
    AuthenticationError: 401,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Portfolio CMS")
    app.state.container = container

    app.include_router(content_router)
    app.include_router(activity_router)

    @app.exception_handler(ContentStoreError)
    async def handle_store_error(
        request: Request, exc: ContentStoreError
    ) -> JSONResponse:
        status_code = _STATUS_CODES.get(type(exc), status.HTTP_400_BAD_REQUEST)
        logger.info(
            "%s %s rejected: %s", request.method, request.url.path, exc.message
        )
        return JSONResponse(status_code=status_code, content={"detail": exc.message})

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
