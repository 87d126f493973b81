"""HTTP controller layer for the room catalog."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from backend.controllers.dependencies import get_room_service
from backend.controllers.schemas import (
    RoomCreateRequest,
    RoomResponse,
    error_response,
    success_response,
)
from backend.domain.errors import InvalidRoomDefinitionError
from backend.services.room_service import RoomService
from backend.utils.logger import get_logger


logger = get_logger(__name__)

router = APIRouter(prefix="/api/rooms", tags=["rooms"])


@router.get("")
async def list_rooms(room_service: RoomService = Depends(get_room_service)) -> JSONResponse:
    rooms = room_service.list_rooms()
    return success_response([RoomResponse.from_domain(room) for room in rooms])


@router.get("/{room_id}")
async def get_room(
    room_id: str,
    room_service: RoomService = Depends(get_room_service),
) -> JSONResponse:
    room = room_service.get_room(room_id)
    if room is None:
        return error_response("Room not found", status.HTTP_404_NOT_FOUND)
    return success_response(RoomResponse.from_domain(room))


@router.post("")
async def create_room(
    payload: RoomCreateRequest,
    room_service: RoomService = Depends(get_room_service),
) -> JSONResponse:
    try:
        room = room_service.create_room(
            name=payload.name,
            capacity=payload.capacity,
            floor=payload.floor,
        )
    except InvalidRoomDefinitionError as exc:
        return error_response(str(exc), status.HTTP_400_BAD_REQUEST)
    except Exception:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected room creation failure")
        return error_response("Failed to create room", status.HTTP_500_INTERNAL_SERVER_ERROR)
    return success_response(RoomResponse.from_domain(room), status.HTTP_201_CREATED)
