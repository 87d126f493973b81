"""HTTP controller layer for bookings."""

from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from backend.controllers.dependencies import get_booking_service
from backend.controllers.schemas import (
    BookingCreatePayload,
    BookingResponse,
    FieldErrorResponse,
    ValidationResultResponse,
    error_response,
    success_response,
)
from backend.domain.errors import BookingConflictError, RoomNotFoundError, ValidationFailedError
from backend.services.booking_service import BookingService
from backend.utils.logger import get_logger


logger = get_logger(__name__)

router = APIRouter(prefix="/api/bookings", tags=["bookings"])


@router.get("")
async def list_bookings(
    room_id: Optional[str] = Query(default=None, alias="roomId"),
    on_date: Optional[date] = Query(default=None, alias="date"),
    booking_service: BookingService = Depends(get_booking_service),
) -> JSONResponse:
    bookings = booking_service.list_bookings(room_id=room_id, on_date=on_date)
    return success_response([BookingResponse.from_domain(booking) for booking in bookings])


@router.get("/available-slots")
async def available_slots(
    room_id: str = Query(alias="roomId", min_length=1),
    on_date: date = Query(alias="date"),
    booking_service: BookingService = Depends(get_booking_service),
) -> JSONResponse:
    try:
        slots = booking_service.get_available_time_slots(room_id, on_date)
    except RoomNotFoundError as exc:
        return error_response(str(exc), status.HTTP_404_NOT_FOUND)
    return success_response([slot.isoformat() for slot in slots])


@router.get("/room/{room_id}")
async def list_room_bookings(
    room_id: str,
    booking_service: BookingService = Depends(get_booking_service),
) -> JSONResponse:
    bookings = booking_service.list_bookings_by_room(room_id)
    return success_response([BookingResponse.from_domain(booking) for booking in bookings])


@router.get("/{booking_id}")
async def get_booking(
    booking_id: str,
    booking_service: BookingService = Depends(get_booking_service),
) -> JSONResponse:
    booking = booking_service.get_booking(booking_id)
    if booking is None:
        return error_response("Booking not found", status.HTTP_404_NOT_FOUND)
    return success_response(BookingResponse.from_domain(booking))


@router.post("/validate")
async def validate_booking(
    payload: BookingCreatePayload,
    booking_service: BookingService = Depends(get_booking_service),
) -> JSONResponse:
    result = booking_service.validate_request(payload.to_domain())
    return success_response(
        ValidationResultResponse(
            is_valid=result.is_valid,
            errors=[FieldErrorResponse.from_domain(error) for error in result.errors],
        )
    )


@router.post("")
async def create_booking(
    payload: BookingCreatePayload,
    booking_service: BookingService = Depends(get_booking_service),
) -> JSONResponse:
    try:
        booking = booking_service.create_booking(payload.to_domain())
    except ValidationFailedError as exc:
        return error_response(
            str(exc),
            status.HTTP_400_BAD_REQUEST,
            errors=[FieldErrorResponse.from_domain(error) for error in exc.errors],
        )
    except RoomNotFoundError as exc:
        return error_response(str(exc), status.HTTP_404_NOT_FOUND)
    except BookingConflictError as exc:
        return error_response(
            str(exc),
            status.HTTP_409_CONFLICT,
            conflictingBooking=BookingResponse.from_domain(exc.conflicting_booking),
        )
    except Exception:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected booking creation failure")
        return error_response("Failed to create booking", status.HTTP_500_INTERNAL_SERVER_ERROR)
    return success_response(BookingResponse.from_domain(booking), status.HTTP_201_CREATED)


@router.delete("/{booking_id}")
async def delete_booking(
    booking_id: str,
    booking_service: BookingService = Depends(get_booking_service),
) -> JSONResponse:
    if not booking_service.delete_booking(booking_id):
        return error_response("Booking not found", status.HTTP_404_NOT_FOUND)
    return success_response({"message": "Booking deleted successfully"})
