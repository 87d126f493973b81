"""In-memory booking store.

The store is the single point where booking state changes. ``create`` runs
the conflict check and the append under one lock so two admissions can never
both pass against a stale view.
"""

from __future__ import annotations

from datetime import datetime, timezone
from threading import RLock
from typing import Optional
from uuid import uuid4

from backend.domain.conflicts import find_conflict
from backend.domain.errors import BookingConflictError, ValidationFailedError
from backend.domain.models import Booking, BookingCandidate, CreateBookingRequest, FieldError
from backend.domain.validation import parse_instant
from backend.utils.logger import get_logger


logger = get_logger(__name__)


def _by_start_time(bookings: list[Booking]) -> list[Booking]:
    return sorted(bookings, key=lambda booking: booking.start_time)


def _as_utc(instant: datetime) -> datetime:
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant


def to_candidate(request: CreateBookingRequest) -> BookingCandidate:
    """Parse a request's interval; raises ValidationFailedError if it is not a proper interval."""
    start = parse_instant(request.start_time)
    end = parse_instant(request.end_time)
    errors: list[FieldError] = []
    if start is None:
        errors.append(FieldError("startTime", "Start time is invalid"))
    if end is None:
        errors.append(FieldError("endTime", "End time is invalid"))
    elif start is not None and end <= start:
        errors.append(FieldError("endTime", "End time must be after start time"))
    if errors:
        raise ValidationFailedError(errors)
    return BookingCandidate(room_id=request.room_id, start_time=start, end_time=end)


class BookingStore:
    """Mutable collection of admitted bookings, kept in insertion order."""

    def __init__(self) -> None:
        self._lock = RLock()
        self._bookings: list[Booking] = []
        # Every id ever handed out, deleted ones included, so no id is issued twice.
        self._issued_ids: set[str] = set()

    @staticmethod
    def _now_utc() -> datetime:
        return datetime.now(timezone.utc)

    def _next_id(self) -> str:
        booking_id = uuid4().hex
        while booking_id in self._issued_ids:
            booking_id = uuid4().hex
        self._issued_ids.add(booking_id)
        return booking_id

    def list(self) -> list[Booking]:
        with self._lock:
            return _by_start_time(self._bookings)

    def list_by_room(self, room_id: str) -> list[Booking]:
        with self._lock:
            return _by_start_time([b for b in self._bookings if b.room_id == room_id])

    def list_by_date_range(self, start: datetime, end: datetime) -> list[Booking]:
        """Bookings starting inside [start, end]; naive bounds are read as UTC."""
        start, end = _as_utc(start), _as_utc(end)
        with self._lock:
            return _by_start_time([b for b in self._bookings if start <= b.start_time <= end])

    def get(self, booking_id: str) -> Optional[Booking]:
        with self._lock:
            for booking in self._bookings:
                if booking.id == booking_id:
                    return booking
            return None

    def find_conflict(self, candidate: BookingCandidate) -> Optional[Booking]:
        with self._lock:
            return find_conflict(candidate, self._bookings)

    def create(self, request: CreateBookingRequest, *, room_name: str) -> Booking:
        """Admit a booking whose room the caller has already resolved."""
        candidate = to_candidate(request)
        with self._lock:
            conflict = find_conflict(candidate, self._bookings)
            if conflict is not None:
                raise BookingConflictError(conflict)

            booking = Booking(
                id=self._next_id(),
                room_id=candidate.room_id,
                room_name=room_name,
                user=request.user,
                start_time=candidate.start_time,
                end_time=candidate.end_time,
                created_at=self._now_utc(),
            )
            self._bookings.append(booking)
        logger.info(
            "Booking admitted id=%s room_id=%s start=%s end=%s",
            booking.id,
            booking.room_id,
            booking.start_time.isoformat(),
            booking.end_time.isoformat(),
        )
        return booking

    def delete(self, booking_id: str) -> bool:
        with self._lock:
            for index, booking in enumerate(self._bookings):
                if booking.id == booking_id:
                    del self._bookings[index]
                    logger.info("Booking deleted id=%s", booking_id)
                    return True
            return False

    def count(self) -> int:
        with self._lock:
            return len(self._bookings)
