"""
app.py: FastAPI application factory and startup lifecycle.

This is the ASGI application object imported by uvicorn.
It builds the room catalog and booking store, wires the services around
them, registers routers, and seeds sample data on startup.

Usage (via launcher):
    python main.py

Usage (direct uvicorn):
    uvicorn app:app --reload
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend.controllers.booking_controller import router as booking_router
from backend.controllers.room_controller import router as room_router
from backend.controllers.schemas import error_response
from backend.controllers.tool_controller import router as tool_router
from backend.repository.booking_repository import BookingStore
from backend.repository.room_repository import RoomCatalog
from backend.services.booking_service import BookingService
from backend.services.room_service import RoomService
from backend.services.tool_service import BookingToolService
from backend.utils.config import Settings, get_settings
from backend.utils.logger import get_logger


logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build and wire the FastAPI application.

    The catalog and store are created here and handed to the services;
    they live exactly as long as the app object. No module-level singletons.
    """
    settings = settings or get_settings()

    # --- In-memory state ---
    room_catalog = RoomCatalog()
    booking_store = BookingStore()

    # --- Services ---
    room_service = RoomService(room_catalog=room_catalog, settings=settings)
    booking_service = BookingService(
        booking_store=booking_store,
        room_catalog=room_catalog,
        settings=settings,
    )
    tool_service = BookingToolService(
        room_service=room_service,
        booking_service=booking_service,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Run startup initialization before accepting requests."""
        _startup(app)
        yield
        logger.info("Shutdown: releasing in-memory booking state")

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # --- Routers ---
    app.include_router(room_router)
    app.include_router(booking_router)
    app.include_router(tool_router)

    @app.get("/health", tags=["health"])
    async def health() -> dict[str, str]:
        return {
            "status": "OK",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "message": "Meeting Room Booking API is running",
        }

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        if exc.status_code == status.HTTP_404_NOT_FOUND and message == "Not Found":
            message = "Endpoint not found"
        return error_response(message, exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return error_response(
            "Malformed request",
            422,
            details=exc.errors(),
        )

    # --- Inject state and services into app.state for dependency resolution ---
    app.state.settings = settings
    app.state.room_catalog = room_catalog
    app.state.booking_store = booking_store
    app.state.room_service = room_service
    app.state.booking_service = booking_service
    app.state.tool_service = tool_service

    return app


def _startup(app: FastAPI) -> None:
    """
    Idempotent startup sequence.

    Rooms are seeded before bookings because sample bookings reference them.
    """
    room_service: RoomService = app.state.room_service
    booking_service: BookingService = app.state.booking_service

    logger.info("Startup: seeding sample rooms (skipped if catalog not empty)")
    room_service.seed_sample_rooms()

    logger.info("Startup: seeding sample bookings (skipped if store not empty)")
    booking_service.seed_sample_bookings()

    logger.info("Startup complete, system ready")


# Module-level app object for uvicorn
app = create_app()
