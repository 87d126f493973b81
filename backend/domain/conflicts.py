"""Half-open interval overlap detection shared by the service and the store."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from backend.domain.models import Booking, BookingCandidate


def intervals_overlap(
    a_start: datetime,
    a_end: datetime,
    b_start: datetime,
    b_end: datetime,
) -> bool:
    """True when [a_start, a_end) and [b_start, b_end) share at least one instant."""
    return a_start < b_end and b_start < a_end


def find_conflict(candidate: BookingCandidate, existing: Iterable[Booking]) -> Optional[Booking]:
    """Return the first booking, in iteration order, that overlaps the candidate's room and interval."""
    for booking in existing:
        if booking.room_id != candidate.room_id:
            continue
        if intervals_overlap(candidate.start_time, candidate.end_time, booking.start_time, booking.end_time):
            return booking
    return None
