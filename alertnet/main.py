"""
HaitiAlertNet - FastAPI Application Entry Point

Live incident engine for citizen disaster reports in Haiti: report
submission, operator verification, hazard zones and relief resources on
a live map.

DESIGN PRINCIPLES:
- AI assists the citizen filling the form, it never verifies anything
- Operators decide status; duplicates are marked by hand
- Alerts to administrators are simulated, nothing is actually sent
- State lives in memory for the lifetime of the process
"""

import logging
import sys
import traceback
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from alertnet.core.settings import Settings, settings
from alertnet.routes import admin, ai, display, health, map, news, notifications, reports, resources
from alertnet.services.app_state import AppState

logger = logging.getLogger(__name__)


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    app_settings = app_settings or settings

    app = FastAPI(
        title=app_settings.APP_NAME,
        version=app_settings.APP_VERSION,
        description="Live incident engine for citizen-reported disasters in Haiti",
        debug=app_settings.DEBUG
    )

    # Global exception handler to catch ALL exceptions
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Catch all unhandled exceptions and log them with full traceback."""
        sys.stderr.write("=" * 80 + "\n")
        sys.stderr.write("🔥 GLOBAL EXCEPTION HANDLER CAUGHT EXCEPTION\n")
        sys.stderr.write(f"Path: {request.url.path}\n")
        sys.stderr.write(f"Method: {request.method}\n")
        sys.stderr.write("=" * 80 + "\n")
        sys.stderr.write("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)))
        sys.stderr.write("=" * 80 + "\n")
        sys.stderr.flush()

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": f"Internal server error: {str(exc)}"}
        )

    # Pydantic validation error handler
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Catch Pydantic validation errors and log them."""
        logger.warning(f"Validation error on {request.method} {request.url.path}: {exc.errors()}")

        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=jsonable_encoder({"detail": exc.errors(), "body": exc.body})
        )

    # Only the configured frontend origins may call the API
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in app_settings.CORS_ORIGINS.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.on_event("startup")
    async def startup_event():
        """
        Build the in-memory state on application startup.
        Seeds the store, renders the initial map and starts the news refresh.
        """
        logger.info(f"Starting {app_settings.APP_NAME} v{app_settings.APP_VERSION}")
        state = AppState(app_settings)
        state.start()
        app.state.alert_state = state

    @app.on_event("shutdown")
    async def shutdown_event():
        """
        Cleanup on application shutdown: cancel timers and background tasks.
        """
        state = getattr(app.state, "alert_state", None)
        if state is not None:
            state.close()
        logger.info(f"Shutting down {app_settings.APP_NAME}")

    app.include_router(health.router)
    app.include_router(reports.router)
    app.include_router(admin.router)
    app.include_router(map.router)
    app.include_router(resources.router)
    app.include_router(ai.router)
    app.include_router(notifications.router)
    app.include_router(news.router)
    app.include_router(display.router)

    # Root endpoint
    @app.get("/")
    async def root():
        """
        Root endpoint - API information.
        """
        return {
            "service": app_settings.APP_NAME,
            "version": app_settings.APP_VERSION,
            "status": "running",
            "docs": "/docs",
            "health": "/health",
            "map": "/map/layers"
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run("alertnet.main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)
