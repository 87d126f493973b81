from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone

import pytest

from backend.domain.errors import BookingConflictError, ValidationFailedError
from backend.domain.models import CreateBookingRequest, User
from backend.repository.booking_repository import BookingStore


DAY = "2030-05-07"


def request_for(room_id: str, start: str, end: str, name: str = "Alice") -> CreateBookingRequest:
    return CreateBookingRequest(
        room_id=room_id,
        user=User(name=name, email=f"{name.lower()}@example.com"),
        start_time=f"{DAY}T{start}:00Z",
        end_time=f"{DAY}T{end}:00Z",
    )


def test_create_assigns_id_created_at_and_room_name() -> None:
    store = BookingStore()
    booking = store.create(request_for("r1", "09:00", "10:00"), room_name="Room 1")

    assert booking.id
    assert booking.room_name == "Room 1"
    assert booking.created_at.tzinfo is not None
    assert booking.start_time == datetime(2030, 5, 7, 9, tzinfo=timezone.utc)
    assert store.get(booking.id) == booking


def test_create_rejects_overlap_and_names_the_colliding_booking() -> None:
    store = BookingStore()
    first = store.create(request_for("r1", "09:00", "10:00"), room_name="Room 1")

    with pytest.raises(BookingConflictError) as excinfo:
        store.create(request_for("r1", "09:30", "10:30", name="Bob"), room_name="Room 1")

    assert excinfo.value.conflicting_booking == first
    assert "Alice" in str(excinfo.value)
    assert store.count() == 1


def test_back_to_back_and_other_room_bookings_are_admitted() -> None:
    store = BookingStore()
    store.create(request_for("r1", "09:00", "10:00"), room_name="Room 1")
    store.create(request_for("r1", "10:00", "11:00"), room_name="Room 1")
    store.create(request_for("r2", "09:00", "10:00"), room_name="Room 2")
    assert store.count() == 3


def test_create_rejects_inverted_interval() -> None:
    store = BookingStore()
    with pytest.raises(ValidationFailedError):
        store.create(request_for("r1", "10:00", "09:00"), room_name="Room 1")


def test_list_and_list_by_room_are_sorted_by_start_time() -> None:
    store = BookingStore()
    store.create(request_for("r1", "15:00", "16:00"), room_name="Room 1")
    store.create(request_for("r2", "08:00", "09:00"), room_name="Room 2")
    store.create(request_for("r1", "09:00", "10:00"), room_name="Room 1")
    store.create(request_for("r1", "12:00", "13:00"), room_name="Room 1")

    all_starts = [b.start_time.hour for b in store.list()]
    room_starts = [b.start_time.hour for b in store.list_by_room("r1")]

    assert all_starts == [8, 9, 12, 15]
    assert room_starts == [9, 12, 15]


def test_list_returns_defensive_copy() -> None:
    store = BookingStore()
    store.create(request_for("r1", "09:00", "10:00"), room_name="Room 1")
    store.list().clear()
    assert store.count() == 1


def test_list_by_date_range_is_inclusive() -> None:
    store = BookingStore()
    store.create(request_for("r1", "09:00", "10:00"), room_name="Room 1")
    store.create(request_for("r1", "11:00", "12:00"), room_name="Room 1")
    store.create(request_for("r1", "13:00", "14:00"), room_name="Room 1")

    start = datetime(2030, 5, 7, 9, tzinfo=timezone.utc)
    end = datetime(2030, 5, 7, 11, tzinfo=timezone.utc)
    hours = [b.start_time.hour for b in store.list_by_date_range(start, end)]

    assert hours == [9, 11]


def test_list_by_date_range_reads_naive_bounds_as_utc() -> None:
    store = BookingStore()
    store.create(request_for("r1", "09:00", "10:00"), room_name="Room 1")
    store.create(request_for("r1", "13:00", "14:00"), room_name="Room 1")

    on_day = store.list_by_date_range(datetime(2030, 5, 7), datetime(2030, 5, 8))
    next_day = store.list_by_date_range(datetime(2030, 5, 8), datetime(2030, 5, 9))

    assert [b.start_time.hour for b in on_day] == [9, 13]
    assert next_day == []


def test_delete_twice_reports_nothing_happened_second_time() -> None:
    store = BookingStore()
    booking = store.create(request_for("r1", "09:00", "10:00"), room_name="Room 1")

    assert store.delete(booking.id) is True
    assert store.delete(booking.id) is False
    assert store.get(booking.id) is None


def test_ids_are_not_reused_after_delete() -> None:
    store = BookingStore()
    seen: set[str] = set()
    for _ in range(20):
        booking = store.create(request_for("r1", "09:00", "10:00"), room_name="Room 1")
        assert booking.id not in seen
        seen.add(booking.id)
        store.delete(booking.id)


def test_concurrent_admissions_admit_exactly_one_overlapping_booking() -> None:
    store = BookingStore()

    def attempt(index: int) -> bool:
        try:
            store.create(request_for("r1", "09:00", "10:00", name=f"User{index}"), room_name="Room 1")
        except BookingConflictError:
            return False
        return True

    with ThreadPoolExecutor(max_workers=8) as executor:
        outcomes = list(executor.map(attempt, range(32)))

    assert outcomes.count(True) == 1
    assert store.count() == 1
