"""Tool discovery and invocation over the booking services.

Tool calls go through the same RoomService/BookingService methods as the HTTP
routes, so validation and conflict handling are identical for both callers.
Domain failures are returned as error results, never raised to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from backend.domain.errors import BookingDomainError
from backend.domain.models import Booking, CreateBookingRequest, User
from backend.services.booking_service import BookingService
from backend.services.room_service import RoomService
from backend.utils.logger import get_logger


logger = get_logger(__name__)


class ToolCallError(Exception):
    """Raised when a tool call cannot be completed."""


class UnknownToolError(ToolCallError):
    """Raised when a tool name is not registered."""


class ToolArgumentError(ToolCallError):
    """Raised when a well-typed tool argument cannot be interpreted."""


@dataclass(frozen=True)
class ToolDescriptor:
    name: str
    description: str
    input_schema: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "input_schema": self.input_schema,
        }


@dataclass(frozen=True)
class ToolResult:
    text: str
    is_error: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "content": [{"type": "text", "text": self.text}],
            "is_error": self.is_error,
        }


def _object_schema(properties: dict[str, dict[str, str]], required: list[str]) -> dict[str, Any]:
    return {"type": "object", "properties": properties, "required": required}


TOOLS: tuple[ToolDescriptor, ...] = (
    ToolDescriptor(
        name="get_rooms",
        description="Get all available meeting rooms",
        input_schema=_object_schema({}, []),
    ),
    ToolDescriptor(
        name="get_bookings",
        description="Get all bookings with optional filters by room ID and date",
        input_schema=_object_schema(
            {
                "roomId": {"type": "string", "description": "Optional room ID to filter bookings"},
                "date": {
                    "type": "string",
                    "description": "Optional date to filter bookings (YYYY-MM-DD format)",
                },
            },
            [],
        ),
    ),
    ToolDescriptor(
        name="create_booking",
        description="Create a new meeting room booking",
        input_schema=_object_schema(
            {
                "roomId": {"type": "string", "description": "ID of the room to book"},
                "userName": {"type": "string", "description": "Name of the person making the booking"},
                "userEmail": {"type": "string", "description": "Email of the person making the booking"},
                "startTime": {"type": "string", "description": "Start time of the booking (ISO 8601 format)"},
                "endTime": {"type": "string", "description": "End time of the booking (ISO 8601 format)"},
            },
            ["roomId", "userName", "userEmail", "startTime", "endTime"],
        ),
    ),
    ToolDescriptor(
        name="delete_booking",
        description="Delete a booking by ID",
        input_schema=_object_schema(
            {"bookingId": {"type": "string", "description": "ID of the booking to delete"}},
            ["bookingId"],
        ),
    ),
    ToolDescriptor(
        name="get_available_time_slots",
        description="Get available time slots for a room on a specific date",
        input_schema=_object_schema(
            {
                "roomId": {"type": "string", "description": "ID of the room"},
                "date": {"type": "string", "description": "Date to check availability (YYYY-MM-DD format)"},
            },
            ["roomId", "date"],
        ),
    ),
)


class ToolArguments(BaseModel):
    """Argument shape for one tool. Only types are checked here; field rules belong to the services."""

    model_config = ConfigDict(populate_by_name=True)


class GetRoomsArgs(ToolArguments):
    pass


class GetBookingsArgs(ToolArguments):
    room_id: Optional[str] = Field(default=None, alias="roomId")
    on_date: Optional[str] = Field(default=None, alias="date")


class CreateBookingArgs(ToolArguments):
    room_id: Optional[str] = Field(alias="roomId")
    user_name: Optional[str] = Field(alias="userName")
    user_email: Optional[str] = Field(alias="userEmail")
    start_time: Optional[str] = Field(alias="startTime")
    end_time: Optional[str] = Field(alias="endTime")

    def to_domain(self) -> CreateBookingRequest:
        return CreateBookingRequest(
            room_id=self.room_id or "",
            user=User(name=self.user_name or "", email=self.user_email or ""),
            start_time=self.start_time or "",
            end_time=self.end_time or "",
        )


class DeleteBookingArgs(ToolArguments):
    booking_id: str = Field(alias="bookingId")


class AvailableSlotsArgs(ToolArguments):
    room_id: str = Field(alias="roomId")
    on_date: str = Field(alias="date")


def _describe_booking(booking: Booking) -> str:
    return (
        f"- Booking ID: {booking.id}\n"
        f"  Room: {booking.room_name}\n"
        f"  User: {booking.user.name} ({booking.user.email})\n"
        f"  Time: {booking.start_time.isoformat()} to {booking.end_time.isoformat()}\n"
        f"  Created: {booking.created_at.isoformat()}"
    )


def _describe_argument_errors(exc: ValidationError) -> str:
    problems = [
        f"{'.'.join(str(part) for part in error['loc'])} ({error['msg']})"
        for error in exc.errors()
    ]
    return "Invalid argument(s): " + ", ".join(problems)


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise ToolArgumentError("date must follow YYYY-MM-DD format") from exc


class BookingToolService:
    """Exposes room and booking operations as named tools."""

    def __init__(
        self,
        room_service: RoomService,
        booking_service: BookingService,
    ) -> None:
        self._room_service = room_service
        self._booking_service = booking_service
        self._handlers: dict[str, tuple[type[ToolArguments], Callable[[Any], str]]] = {
            "get_rooms": (GetRoomsArgs, self._get_rooms),
            "get_bookings": (GetBookingsArgs, self._get_bookings),
            "create_booking": (CreateBookingArgs, self._create_booking),
            "delete_booking": (DeleteBookingArgs, self._delete_booking),
            "get_available_time_slots": (AvailableSlotsArgs, self._get_available_time_slots),
        }

    def list_tools(self) -> list[ToolDescriptor]:
        return list(TOOLS)

    def call_tool(self, name: str, arguments: Optional[dict[str, Any]] = None) -> ToolResult:
        try:
            entry = self._handlers.get(name)
            if entry is None:
                raise UnknownToolError(f"Unknown tool: {name}")
            args_model, handler = entry
            return ToolResult(text=handler(args_model.model_validate(arguments or {})))
        except ValidationError as exc:
            message = _describe_argument_errors(exc)
            logger.warning("Tool call %s rejected: %s", name, message)
            return ToolResult(text=f"Error: {message}", is_error=True)
        except (ToolCallError, BookingDomainError) as exc:
            logger.warning("Tool call %s failed: %s", name, exc)
            return ToolResult(text=f"Error: {exc}", is_error=True)

    def _get_rooms(self, args: GetRoomsArgs) -> str:
        rooms = self._room_service.list_rooms()
        lines = [
            f"- {room.name} (ID: {room.id}): Capacity {room.capacity} people, Floor {room.floor}"
            for room in rooms
        ]
        return "Available meeting rooms:\n" + "\n".join(lines)

    def _get_bookings(self, args: GetBookingsArgs) -> str:
        on_date = _parse_date(args.on_date) if args.on_date else None
        bookings = self._booking_service.list_bookings(
            room_id=args.room_id or None,
            on_date=on_date,
        )
        if not bookings:
            return "No bookings found."
        return "Current bookings:\n\n" + "\n\n".join(_describe_booking(b) for b in bookings)

    def _create_booking(self, args: CreateBookingArgs) -> str:
        booking = self._booking_service.create_booking(args.to_domain())
        return "Booking created successfully!\n\nDetails:\n" + _describe_booking(booking)

    def _delete_booking(self, args: DeleteBookingArgs) -> str:
        if not self._booking_service.delete_booking(args.booking_id):
            raise ToolCallError(f"Booking not found: {args.booking_id}")
        return f"Booking with ID {args.booking_id} has been deleted successfully."

    def _get_available_time_slots(self, args: AvailableSlotsArgs) -> str:
        on_date = _parse_date(args.on_date)
        slots = self._booking_service.get_available_time_slots(args.room_id, on_date)
        if not slots:
            return f"No available time slots found for room {args.room_id} on {on_date.isoformat()}."
        return f"Available time slots for room {args.room_id} on {on_date.isoformat()}:\n" + "\n".join(
            slot.isoformat() for slot in slots
        )
