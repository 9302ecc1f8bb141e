"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from session_scheduler.api.admin import router as admin_router
from session_scheduler.api.sessions import router as sessions_router
from session_scheduler.app_logging import configure_logging
from session_scheduler.containers import AppContainer
from session_scheduler.domain.errors import ErrorKind, SchedulingError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("Starting session scheduler (%s)", container.settings.environment)
        yield
        logger.info("Stopping session scheduler")

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(sessions_router)
    app.include_router(admin_router)

    @app.exception_handler(SchedulingError)
    async def scheduling_error_handler(
        request: Request, exc: SchedulingError
    ) -> JSONResponse:
        return JSONResponse(status_code=exc.http_status, content=exc.to_payload())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.warning("Invalid request to %s", request.url.path)
        return JSONResponse(
            status_code=400,
            content={
                "error": str(ErrorKind.BAD_REQUEST),
                "message": _format_validation_errors(exc),
            },
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _format_validation_errors(exc: RequestValidationError) -> str:
    """Flatten pydantic errors into a single message."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()) if item != "body")
        parts.append(f"{location}: {error.get('msg', 'invalid')}")
    return "; ".join(parts) or "Invalid request"
