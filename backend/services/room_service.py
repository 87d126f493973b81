"""Room catalog orchestration."""

from __future__ import annotations

from typing import Optional

from backend.domain.models import Room
from backend.repository.room_repository import RoomCatalog
from backend.utils.config import Settings, get_settings
from backend.utils.logger import get_logger


logger = get_logger(__name__)


class RoomService:
    """Lists, resolves and creates rooms."""

    def __init__(
        self,
        room_catalog: Optional[RoomCatalog] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._catalog = room_catalog or RoomCatalog()

    def list_rooms(self) -> list[Room]:
        return self._catalog.list()

    def get_room(self, room_id: str) -> Optional[Room]:
        return self._catalog.get(room_id)

    def create_room(self, *, name: str, capacity: int, floor: int) -> Room:
        return self._catalog.create(name=name, capacity=capacity, floor=floor)

    def seed_sample_rooms(self) -> list[Room]:
        if not self._settings.seed_sample_data:
            return []
        rooms = self._catalog.seed_sample_rooms()
        if rooms:
            logger.info("Seeded %d sample rooms", len(rooms))
        return rooms
