"""Booking admission workflow: validate, resolve room, check conflicts, admit."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Callable, Optional

from backend.domain.conflicts import intervals_overlap
from backend.domain.constraints import BusinessHours
from backend.domain.errors import (
    BookingConflictError,
    BookingDomainError,
    RoomNotFoundError,
    ValidationFailedError,
)
from backend.domain.models import Booking, CreateBookingRequest, User, ValidationResult
from backend.domain.validation import validate_booking_request
from backend.repository.booking_repository import BookingStore, to_candidate
from backend.repository.room_repository import RoomCatalog
from backend.utils.config import Settings, get_settings
from backend.utils.logger import get_logger


logger = get_logger(__name__)


SAMPLE_BOOKINGS: tuple[tuple[str, str, int, int], ...] = (
    ("Alice Nguyen", "alice.nguyen@example.com", 9, 10),
    ("Bob Tran", "bob.tran@example.com", 11, 12),
)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def day_bounds(on_date: date) -> tuple[datetime, datetime]:
    """First and last representable instant of a UTC calendar day."""
    start = datetime.combine(on_date, time.min, tzinfo=timezone.utc)
    end = datetime.combine(on_date, time.max, tzinfo=timezone.utc)
    return start, end


class BookingService:
    """Coordinates the validation engine, room catalog and booking store.

    Conflicts are checked twice: once here for early reporting, and again by
    the store under its lock at admission. Both use the same detector.
    """

    def __init__(
        self,
        booking_store: Optional[BookingStore] = None,
        room_catalog: Optional[RoomCatalog] = None,
        settings: Optional[Settings] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._store = booking_store or BookingStore()
        self._catalog = room_catalog or RoomCatalog()
        self._business_hours = BusinessHours.from_settings(self._settings)
        self._clock = clock or _utc_now

    def list_bookings(
        self,
        *,
        room_id: Optional[str] = None,
        on_date: Optional[date] = None,
    ) -> list[Booking]:
        if on_date is not None:
            bookings = self._store.list_by_date_range(*day_bounds(on_date))
            if room_id:
                bookings = [booking for booking in bookings if booking.room_id == room_id]
            return bookings
        if room_id:
            return self._store.list_by_room(room_id)
        return self._store.list()

    def list_bookings_by_room(self, room_id: str) -> list[Booking]:
        return self._store.list_by_room(room_id)

    def get_booking(self, booking_id: str) -> Optional[Booking]:
        return self._store.get(booking_id)

    def validate_request(self, request: CreateBookingRequest) -> ValidationResult:
        return validate_booking_request(
            request,
            now=self._clock(),
            business_hours=self._business_hours,
        )

    def create_booking(self, request: CreateBookingRequest) -> Booking:
        validation = self.validate_request(request)
        if not validation.is_valid:
            logger.warning(
                "Booking rejected: %d validation error(s) fields=%s",
                len(validation.errors),
                [error.field for error in validation.errors],
            )
            raise ValidationFailedError(validation.errors)

        room = self._catalog.get(request.room_id)
        if room is None:
            logger.warning("Booking rejected: unknown room_id=%s", request.room_id)
            raise RoomNotFoundError(request.room_id)

        conflict = self._store.find_conflict(to_candidate(request))
        if conflict is not None:
            logger.warning(
                "Booking rejected: conflicts with booking id=%s room_id=%s",
                conflict.id,
                conflict.room_id,
            )
            raise BookingConflictError(conflict)

        return self._store.create(request, room_name=room.name)

    def delete_booking(self, booking_id: str) -> bool:
        deleted = self._store.delete(booking_id)
        if not deleted:
            logger.info("Delete ignored: booking id=%s not found", booking_id)
        return deleted

    def get_available_time_slots(self, room_id: str, on_date: date) -> list[datetime]:
        """Slot starts on a UTC day, inside business hours, not overlapping any booking in the room."""
        if self._catalog.get(room_id) is None:
            raise RoomNotFoundError(room_id)

        hours = self._business_hours
        step = timedelta(minutes=hours.availability_slot_minutes)
        day_start, _ = day_bounds(on_date)
        closing = day_start + timedelta(hours=hours.closing_hour)
        booked = self._store.list_by_room(room_id)

        slots: list[datetime] = []
        slot_start = day_start + timedelta(hours=hours.opening_hour)
        while slot_start < closing:
            slot_end = slot_start + step
            if not any(
                intervals_overlap(slot_start, slot_end, booking.start_time, booking.end_time)
                for booking in booked
            ):
                slots.append(slot_start)
            slot_start = slot_end
        return slots

    def seed_sample_bookings(self) -> list[Booking]:
        """Book the first sample rooms for tomorrow; skipped when bookings already exist."""
        if not self._settings.seed_sample_data or self._store.count():
            return []
        rooms = self._catalog.list()
        tomorrow = (self._clock() + timedelta(days=1)).date()
        created: list[Booking] = []
        for room, (name, email, start_hour, end_hour) in zip(rooms, SAMPLE_BOOKINGS):
            day_start, _ = day_bounds(tomorrow)
            request = CreateBookingRequest(
                room_id=room.id,
                user=User(name=name, email=email),
                start_time=(day_start + timedelta(hours=start_hour)).isoformat(),
                end_time=(day_start + timedelta(hours=end_hour)).isoformat(),
            )
            try:
                created.append(self.create_booking(request))
            except BookingDomainError as exc:
                logger.warning("Sample booking skipped for room_id=%s: %s", room.id, exc)
        if created:
            logger.info("Seeded %d sample bookings", len(created))
        return created
