"""Domain records for rooms, bookings and booking validation."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class Room:
    id: str
    name: str
    capacity: int
    floor: int


@dataclass(frozen=True)
class User:
    name: str
    email: str


@dataclass(frozen=True)
class Booking:
    id: str
    room_id: str
    room_name: str
    user: User
    start_time: datetime
    end_time: datetime
    created_at: datetime


@dataclass(frozen=True)
class CreateBookingRequest:
    """Unvalidated booking input; timestamps stay raw until validation parses them."""

    room_id: str
    user: User
    start_time: str
    end_time: str


@dataclass(frozen=True)
class BookingCandidate:
    room_id: str
    start_time: datetime
    end_time: datetime


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


@dataclass(frozen=True)
class ValidationResult:
    errors: list[FieldError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors
