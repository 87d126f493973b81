"""Request/response DTOs and the `{success, data, error}` envelope."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from backend.domain.models import Booking, CreateBookingRequest, FieldError, Room, User


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class RoomCreateRequest(CamelModel):
    name: str
    capacity: int
    floor: int


class RoomResponse(CamelModel):
    id: str
    name: str
    capacity: int
    floor: int

    @classmethod
    def from_domain(cls, room: Room) -> "RoomResponse":
        return cls(id=room.id, name=room.name, capacity=room.capacity, floor=room.floor)


class UserPayload(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None


class BookingCreatePayload(CamelModel):
    """Raw booking input; field rules are enforced by the validation engine, not here."""

    room_id: Optional[str] = Field(default=None, alias="roomId")
    user: Optional[UserPayload] = Field(default_factory=UserPayload)
    start_time: Optional[str] = Field(default=None, alias="startTime")
    end_time: Optional[str] = Field(default=None, alias="endTime")

    def to_domain(self) -> CreateBookingRequest:
        user = self.user or UserPayload()
        return CreateBookingRequest(
            room_id=self.room_id or "",
            user=User(name=user.name or "", email=user.email or ""),
            start_time=self.start_time or "",
            end_time=self.end_time or "",
        )


class BookingResponse(CamelModel):
    id: str
    room_id: str = Field(alias="roomId")
    room_name: str = Field(alias="roomName")
    user: UserPayload
    start_time: datetime = Field(alias="startTime")
    end_time: datetime = Field(alias="endTime")
    created_at: datetime = Field(alias="createdAt")

    @classmethod
    def from_domain(cls, booking: Booking) -> "BookingResponse":
        return cls(
            id=booking.id,
            room_id=booking.room_id,
            room_name=booking.room_name,
            user=UserPayload(name=booking.user.name, email=booking.user.email),
            start_time=booking.start_time,
            end_time=booking.end_time,
            created_at=booking.created_at,
        )


class FieldErrorResponse(CamelModel):
    field: str
    message: str

    @classmethod
    def from_domain(cls, error: FieldError) -> "FieldErrorResponse":
        return cls(field=error.field, message=error.message)


class ValidationResultResponse(CamelModel):
    is_valid: bool = Field(alias="isValid")
    errors: list[FieldErrorResponse]


class ToolCallRequest(CamelModel):
    name: str = Field(min_length=1)
    arguments: dict[str, Any] = Field(default_factory=dict)


def _dump(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, mode="json")
    if isinstance(value, list):
        return [_dump(item) for item in value]
    return jsonable_encoder(value)


def success_response(data: Any, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": True, "data": _dump(data)})


def error_response(message: str, status_code: int, **extra: Any) -> JSONResponse:
    content: dict[str, Any] = {"success": False, "error": message}
    content.update({key: _dump(value) for key, value in extra.items()})
    return JSONResponse(status_code=status_code, content=content)
