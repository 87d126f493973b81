"""Field-level validation for booking requests.

Every rule is evaluated and every violation is reported in one pass. Range
rules on a timestamp are skipped only when that timestamp itself fails to
parse. ``endTime`` deliberately has no slot-granularity or duration rule.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Optional

from backend.domain.constraints import BusinessHours
from backend.domain.models import CreateBookingRequest, FieldError, ValidationResult


EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def parse_instant(value: object) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp; naive values are read as UTC. Returns None if unparseable."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def is_valid_email(email: str | None) -> bool:
    return bool(email) and EMAIL_PATTERN.match(email) is not None


def is_in_future(instant: datetime, now: datetime) -> bool:
    return instant > now


def is_within_business_hours(instant: datetime, business_hours: BusinessHours) -> bool:
    return business_hours.contains_hour(instant.hour)


def is_valid_time_slot(instant: datetime, business_hours: BusinessHours) -> bool:
    return instant.minute % business_hours.slot_granularity_minutes == 0


def validate_booking_request(
    request: CreateBookingRequest,
    *,
    now: Optional[datetime] = None,
    business_hours: Optional[BusinessHours] = None,
) -> ValidationResult:
    hours = business_hours or BusinessHours()
    reference_now = now or datetime.now(timezone.utc)
    errors: list[FieldError] = []

    user = request.user
    if user is None or not (user.name or "").strip():
        errors.append(FieldError("name", "Name must not be empty"))

    if user is None or not is_valid_email(user.email):
        errors.append(FieldError("email", "Email address is invalid"))

    if not (request.room_id or "").strip():
        errors.append(FieldError("roomId", "Room must not be empty"))

    start = parse_instant(request.start_time)
    if start is None:
        errors.append(FieldError("startTime", "Start time is invalid"))
    else:
        if not is_in_future(start, reference_now):
            errors.append(FieldError("startTime", "Start time must be in the future"))
        if not is_within_business_hours(start, hours):
            errors.append(
                FieldError("startTime", f"Start time must be within business hours ({hours.label()})")
            )
        if not is_valid_time_slot(start, hours):
            errors.append(
                FieldError(
                    "startTime",
                    f"Start time must fall on a {hours.slot_granularity_minutes}-minute boundary",
                )
            )

    end = parse_instant(request.end_time)
    if end is None:
        errors.append(FieldError("endTime", "End time is invalid"))
    else:
        if start is not None and end <= start:
            errors.append(FieldError("endTime", "End time must be after start time"))
        if not is_within_business_hours(end, hours):
            errors.append(
                FieldError("endTime", f"End time must be within business hours ({hours.label()})")
            )

    return ValidationResult(errors=errors)
