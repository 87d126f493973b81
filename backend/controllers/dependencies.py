"""Shared FastAPI dependency providers for controller layer."""

from __future__ import annotations

from fastapi import HTTPException, Request, status

from backend.services.booking_service import BookingService
from backend.services.room_service import RoomService
from backend.services.tool_service import BookingToolService


def get_room_service(request: Request) -> RoomService:
    service = getattr(request.app.state, "room_service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Room service is not initialized",
        )
    return service


def get_booking_service(request: Request) -> BookingService:
    service = getattr(request.app.state, "booking_service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Booking service is not initialized",
        )
    return service


def get_tool_service(request: Request) -> BookingToolService:
    service = getattr(request.app.state, "tool_service", None)
    if service is None:
        room_service = get_room_service(request)
        booking_service = get_booking_service(request)
        service = BookingToolService(room_service=room_service, booking_service=booking_service)
        request.app.state.tool_service = service
    return service
