from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone

from backend.repository.booking_repository import BookingStore
from backend.repository.room_repository import RoomCatalog
from backend.services.booking_service import BookingService
from backend.services.room_service import RoomService
from backend.services.tool_service import BookingToolService
from backend.utils.config import get_settings


NOW = datetime(2030, 5, 6, 12, 0, tzinfo=timezone.utc)


def _build_tool_service() -> tuple[BookingToolService, RoomService, BookingStore]:
    settings = replace(get_settings(), seed_sample_data=False)
    catalog = RoomCatalog()
    store = BookingStore()
    room_service = RoomService(room_catalog=catalog, settings=settings)
    booking_service = BookingService(
        booking_store=store,
        room_catalog=catalog,
        settings=settings,
        clock=lambda: NOW,
    )
    return BookingToolService(room_service, booking_service), room_service, store


def _create_args(room_id: str, start: str = "09:00", end: str = "10:00") -> dict[str, str]:
    return {
        "roomId": room_id,
        "userName": "Alice",
        "userEmail": "alice@example.com",
        "startTime": f"2030-05-07T{start}:00Z",
        "endTime": f"2030-05-07T{end}:00Z",
    }


def test_list_tools_describes_every_operation() -> None:
    tool_service, _, _ = _build_tool_service()
    names = [tool.name for tool in tool_service.list_tools()]

    assert names == [
        "get_rooms",
        "get_bookings",
        "create_booking",
        "delete_booking",
        "get_available_time_slots",
    ]
    create = next(tool for tool in tool_service.list_tools() if tool.name == "create_booking")
    assert create.to_dict()["input_schema"]["required"] == [
        "roomId",
        "userName",
        "userEmail",
        "startTime",
        "endTime",
    ]


def test_get_rooms_lists_catalog() -> None:
    tool_service, room_service, _ = _build_tool_service()
    room = room_service.create_room(name="Alpha", capacity=8, floor=1)

    result = tool_service.call_tool("get_rooms")

    assert not result.is_error
    assert f"Alpha (ID: {room.id}): Capacity 8 people, Floor 1" in result.text


def test_create_booking_goes_through_same_conflict_rules() -> None:
    tool_service, room_service, store = _build_tool_service()
    room = room_service.create_room(name="Alpha", capacity=8, floor=1)

    created = tool_service.call_tool("create_booking", _create_args(room.id))
    clash = tool_service.call_tool("create_booking", _create_args(room.id, "09:30", "10:30"))

    assert not created.is_error
    assert "Booking created successfully!" in created.text
    assert clash.is_error
    assert clash.text.startswith("Error: Booking conflicts with an existing booking")
    assert store.count() == 1


def test_create_booking_reports_all_validation_errors() -> None:
    tool_service, room_service, _ = _build_tool_service()
    room = room_service.create_room(name="Alpha", capacity=8, floor=1)
    args = _create_args(room.id, "09:15", "10:00")
    args["userEmail"] = "broken"

    result = tool_service.call_tool("create_booking", args)

    assert result.is_error
    assert "Validation failed" in result.text
    assert "Email address is invalid" in result.text
    assert "30-minute boundary" in result.text


def test_missing_required_arguments_are_reported() -> None:
    tool_service, _, _ = _build_tool_service()
    result = tool_service.call_tool("create_booking", {"roomId": "x"})

    assert result.is_error
    assert result.text.startswith("Error: Invalid argument(s): ")
    assert "userName" in result.text
    assert "endTime" in result.text
    assert "roomId" not in result.text


def test_unknown_tool_is_an_error_result() -> None:
    tool_service, _, _ = _build_tool_service()
    result = tool_service.call_tool("launch_rockets", {})

    assert result.is_error
    assert result.to_dict() == {
        "content": [{"type": "text", "text": "Error: Unknown tool: launch_rockets"}],
        "is_error": True,
    }


def test_get_bookings_with_filters_and_delete() -> None:
    tool_service, room_service, _ = _build_tool_service()
    room = room_service.create_room(name="Alpha", capacity=8, floor=1)
    tool_service.call_tool("create_booking", _create_args(room.id))

    listed = tool_service.call_tool("get_bookings", {"roomId": room.id, "date": "2030-05-07"})
    assert "Current bookings:" in listed.text
    booking_id = listed.text.split("Booking ID: ")[1].split("\n")[0]

    other_day = tool_service.call_tool("get_bookings", {"date": "2030-05-08"})
    assert other_day.text == "No bookings found."

    deleted = tool_service.call_tool("delete_booking", {"bookingId": booking_id})
    again = tool_service.call_tool("delete_booking", {"bookingId": booking_id})
    assert not deleted.is_error
    assert again.is_error
    assert "Booking not found" in again.text


def test_get_bookings_rejects_bad_date() -> None:
    tool_service, _, _ = _build_tool_service()
    result = tool_service.call_tool("get_bookings", {"date": "07/05/2030"})
    assert result.is_error
    assert "YYYY-MM-DD" in result.text


def test_available_time_slots_tool() -> None:
    tool_service, room_service, _ = _build_tool_service()
    room = room_service.create_room(name="Alpha", capacity=8, floor=1)
    tool_service.call_tool("create_booking", _create_args(room.id))

    result = tool_service.call_tool("get_available_time_slots", {"roomId": room.id, "date": "2030-05-07"})

    assert not result.is_error
    assert "2030-05-07T08:00:00+00:00" in result.text
    assert "2030-05-07T09:00:00+00:00" not in result.text

    missing = tool_service.call_tool("get_available_time_slots", {"roomId": "nope", "date": "2030-05-07"})
    assert missing.is_error
    assert "Room not found" in missing.text


def test_create_booking_accumulates_errors_like_the_http_path() -> None:
    tool_service, room_service, store = _build_tool_service()
    room = room_service.create_room(name="Alpha", capacity=8, floor=1)
    args = _create_args(room.id)
    args["userName"] = ""
    args["userEmail"] = "bad"

    result = tool_service.call_tool("create_booking", args)

    assert result.is_error
    assert result.text.startswith("Error: Validation failed: ")
    assert "Name must not be empty" in result.text
    assert "Email address is invalid" in result.text
    assert store.count() == 0


def test_null_arguments_reach_the_validation_engine() -> None:
    tool_service, room_service, _ = _build_tool_service()
    room = room_service.create_room(name="Alpha", capacity=8, floor=1)
    args: dict = _create_args(room.id)
    args["userName"] = None
    args["startTime"] = None

    result = tool_service.call_tool("create_booking", args)

    assert result.is_error
    assert "Name must not be empty" in result.text
    assert "Start time is invalid" in result.text


def test_wrongly_typed_argument_is_an_error_result() -> None:
    tool_service, _, _ = _build_tool_service()
    result = tool_service.call_tool("delete_booking", {"bookingId": ["not", "a", "string"]})

    assert result.is_error
    assert result.text.startswith("Error: Invalid argument(s): bookingId")
