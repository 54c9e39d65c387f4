"""
Room repository: lookups, locking reads and availability mutation.
"""

from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from hotelms.models.base import RoomStatus, RoomType
from hotelms.models.room import Room
from hotelms.repositories.base.base_repository import BaseRepository


class RoomRepository(BaseRepository[Room]):
    """Data access for rooms."""

    resource_name = "Room"

    def __init__(self, db: Session):
        super().__init__(Room, db)

    def get_for_update(self, room_id: str) -> Optional[Room]:
        """
        Load a room and lock its row until the transaction ends.

        Concurrent writers for the same room queue behind this lock, which
        serialises the availability check and the booking insert. SQLite
        has no row locks; there the engine opens every transaction with
        BEGIN IMMEDIATE instead.
        """
        stmt = (
            select(Room)
            .where(Room.id == str(room_id))
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return self.db.scalars(stmt).first()

    def find_by_room_number(
        self,
        room_number: str,
        exclude_id: Optional[str] = None,
    ) -> Optional[Room]:
        stmt = select(Room).where(Room.room_number == room_number.strip())
        if exclude_id is not None:
            stmt = stmt.where(Room.id != str(exclude_id))
        return self.db.scalars(stmt).first()

    def list_rooms(
        self,
        room_type: Optional[RoomType] = None,
        status: Optional[RoomStatus] = None,
        is_available: Optional[bool] = None,
    ) -> List[Room]:
        stmt = select(Room)
        if room_type is not None:
            stmt = stmt.where(Room.room_type == room_type)
        if status is not None:
            stmt = stmt.where(Room.status == status)
        if is_available is not None:
            stmt = stmt.where(Room.is_available.is_(is_available))
        stmt = stmt.order_by(Room.room_number)
        return list(self.db.scalars(stmt))

    def set_availability(self, room: Room, is_available: bool) -> Room:
        room.is_available = is_available
        self.db.flush()
        return room

    def set_status(self, room: Room, status: RoomStatus) -> Room:
        room.status = status
        self.db.flush()
        return room

    def count_available(self) -> int:
        stmt = select(func.count()).select_from(Room).where(Room.is_available.is_(True))
        return self.db.scalar(stmt) or 0
