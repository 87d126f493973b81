"""Caller-facing error kinds raised by the booking core."""

from __future__ import annotations

from backend.domain.models import Booking, FieldError


class BookingDomainError(Exception):
    """Base class for recoverable booking and room failures."""


class ValidationFailedError(BookingDomainError):
    """Raised when one or more booking field rules are violated."""

    def __init__(self, errors: list[FieldError]) -> None:
        self.errors = list(errors)
        joined = ", ".join(error.message for error in self.errors)
        super().__init__(f"Validation failed: {joined}")


class RoomNotFoundError(BookingDomainError):
    """Raised when a room id does not resolve in the room catalog."""

    def __init__(self, room_id: str) -> None:
        self.room_id = room_id
        super().__init__(f"Room not found: {room_id}")


class BookingConflictError(BookingDomainError):
    """Raised when a proposed interval overlaps an admitted booking in the same room."""

    def __init__(self, conflicting_booking: Booking) -> None:
        self.conflicting_booking = conflicting_booking
        super().__init__(
            "Booking conflicts with an existing booking: "
            f"{conflicting_booking.user.name} - {conflicting_booking.start_time.isoformat()}"
        )


class InvalidRoomDefinitionError(BookingDomainError):
    """Raised when a room is created with an empty name or non-positive capacity/floor."""
