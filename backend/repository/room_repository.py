"""In-memory room catalog."""

from __future__ import annotations

from threading import RLock
from typing import Optional
from uuid import uuid4

from backend.domain.errors import InvalidRoomDefinitionError
from backend.domain.models import Room
from backend.utils.logger import get_logger


logger = get_logger(__name__)


SAMPLE_ROOMS: tuple[tuple[str, int, int], ...] = (
    ("Meeting Room A - Floor 1", 8, 1),
    ("Meeting Room B - Floor 1", 12, 1),
    ("Meeting Room C - Floor 2", 6, 2),
    ("Meeting Room D - Floor 2", 15, 2),
    ("Meeting Room E - Floor 3", 20, 3),
)


def validate_room_definition(name: str, capacity: int, floor: int) -> None:
    if not name or not name.strip():
        raise InvalidRoomDefinitionError("Room name must not be empty")
    if capacity <= 0:
        raise InvalidRoomDefinitionError("Room capacity must be greater than 0")
    if floor <= 0:
        raise InvalidRoomDefinitionError("Room floor must be greater than 0")


class RoomCatalog:
    """Holds room records. Rooms are created once and never updated or deleted."""

    def __init__(self) -> None:
        self._lock = RLock()
        self._rooms: list[Room] = []
        self._by_id: dict[str, Room] = {}

    def create(self, name: str, capacity: int, floor: int) -> Room:
        validate_room_definition(name, capacity, floor)
        with self._lock:
            room_id = uuid4().hex
            while room_id in self._by_id:
                room_id = uuid4().hex
            room = Room(id=room_id, name=name.strip(), capacity=capacity, floor=floor)
            self._rooms.append(room)
            self._by_id[room.id] = room
        logger.info("Room created id=%s name=%s", room.id, room.name)
        return room

    def get(self, room_id: str) -> Optional[Room]:
        with self._lock:
            return self._by_id.get(room_id)

    def list(self) -> list[Room]:
        with self._lock:
            return list(self._rooms)

    def count(self) -> int:
        with self._lock:
            return len(self._rooms)

    def seed_sample_rooms(self) -> list[Room]:
        """Load the sample rooms once; skipped when the catalog already has rooms."""
        with self._lock:
            if self._rooms:
                return []
            return [self.create(name, capacity, floor) for name, capacity, floor in SAMPLE_ROOMS]
