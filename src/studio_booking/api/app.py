"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from studio_booking.api.admin import router as admin_router
from studio_booking.api.bookings import router as bookings_router
from studio_booking.api.categories import router as categories_router
from studio_booking.api.content import router as content_router
from studio_booking.app_logging import configure_logging
from studio_booking.containers import AppContainer
from studio_booking.errors import StudioError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Studio Booking")
    app.state.container = container

    app.include_router(bookings_router)
    app.include_router(content_router)
    app.include_router(categories_router)
    app.include_router(admin_router)

    @app.exception_handler(StudioError)
    async def studio_error_handler(request: Request, exc: StudioError) -> JSONResponse:
        if exc.status_code >= 500:  # noqa: PLR2004
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
        else:
            logger.info(
                "%s %s rejected with %s: %s",
                request.method,
                request.url.path,
                exc.status_code,
                exc.detail,
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "error": exc.detail},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
