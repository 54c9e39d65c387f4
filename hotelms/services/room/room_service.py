"""
Room inventory management.
"""

from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from hotelms.core.logging import get_audit_logger
from hotelms.models.base import RoomStatus
from hotelms.models.room import Room
from hotelms.repositories.booking import BookingRepository
from hotelms.repositories.room import RoomRepository
from hotelms.schemas.room import RoomCreate, RoomFilters, RoomUpdate
from hotelms.services.base import BaseService
from hotelms.services.booking.availability_service import AvailabilityService
from hotelms.services.common.errors import ConflictError, NotFoundError
from hotelms.services.common.permissions import Action, Principal, require

audit = get_audit_logger()


class RoomService(BaseService[Room, RoomRepository]):
    """
    Room catalogue and administration.

    Reads are public; every mutation requires ``Action.ROOM_MANAGE``.
    """

    def __init__(self, db_session: Session):
        super().__init__(RoomRepository(db_session), db_session)
        self.bookings = BookingRepository(db_session)
        self.availability = AvailabilityService(self.bookings)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def list_available_rooms(self) -> List[Room]:
        return self.repository.list_rooms(is_available=True)

    def list_rooms(self, principal: Principal, filters: Optional[RoomFilters] = None) -> List[Room]:
        require(principal, Action.ROOM_MANAGE)
        filters = filters or RoomFilters()
        return self.repository.list_rooms(
            room_type=filters.room_type,
            status=filters.status,
            is_available=filters.is_available,
        )

    def get_room(self, room_id: str) -> Room:
        return self.repository.get_by_id(room_id)

    def check_availability(self, room_id: str, check_in: date, check_out: date) -> bool:
        """
        Whether the room has no active booking overlapping the stay.

        Raises:
            NotFoundError: Unknown room
            ValidationError: ``check_out`` not after ``check_in``
        """
        self.repository.get_by_id(room_id)
        return self.availability.is_room_available(room_id, check_in, check_out)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def _ensure_unique_number(self, room_number: str, exclude_id: Optional[str] = None) -> None:
        if self.repository.find_by_room_number(room_number, exclude_id=exclude_id) is not None:
            raise ConflictError(
                f"Room number '{room_number}' already exists",
                conflicting_field="room_number",
            )

    def create_room(self, principal: Principal, data: RoomCreate) -> Room:
        """
        Raises:
            PermissionDenied: Caller is not an admin
            ConflictError: Room number already taken
        """
        require(principal, Action.ROOM_MANAGE)

        with self.transaction():
            self._ensure_unique_number(data.room_number)
            room = self.repository.create(Room(**data.model_dump()))

        audit.info("room_created", room_id=room.id, room_number=room.room_number, created_by=principal.user_id)
        return room

    def update_room(self, principal: Principal, room_id: str, data: RoomUpdate) -> Room:
        """Apply the fields present in ``data``; a new room number is re-checked for uniqueness."""
        require(principal, Action.ROOM_MANAGE)
        changes = data.model_dump(exclude_unset=True)

        with self.transaction():
            room = self.repository.get_by_id(room_id)
            new_number = changes.get("room_number")
            if new_number is not None and new_number != room.room_number:
                self._ensure_unique_number(new_number, exclude_id=room.id)
            # NOT NULL columns cannot be cleared
            changes = {k: v for k, v in changes.items() if v is not None or k in ("floor", "description")}
            room = self.repository.update(room, changes)

        audit.info("room_updated", room_id=room.id, fields=sorted(changes), updated_by=principal.user_id)
        return room

    def delete_room(self, principal: Principal, room_id: str) -> None:
        """
        Delete a room together with its cancelled bookings.

        Raises:
            PermissionDenied: Caller is not an admin
            NotFoundError: Unknown room
            ConflictError: The room still has pending, confirmed or completed bookings
        """
        require(principal, Action.ROOM_MANAGE)

        with self.transaction():
            room = self.repository.get_for_update(room_id)
            if room is None:
                raise NotFoundError("Room", room_id)

            blocking = self.bookings.count_blocking_for_room(room.id)
            if blocking:
                raise ConflictError(
                    "Cannot delete room with existing bookings. Cancel all bookings first.",
                    conflicting_field="room_id",
                    details={"blocking_bookings": blocking},
                )
            removed = self.bookings.delete_cancelled_for_room(room.id)
            self.repository.delete(room)

        audit.info(
            "room_deleted",
            room_id=room_id,
            cancelled_bookings_removed=removed,
            deleted_by=principal.user_id,
        )

    def set_room_availability(self, principal: Principal, room_id: str, is_available: bool) -> Room:
        require(principal, Action.ROOM_MANAGE)
        with self.transaction():
            room = self.repository.set_availability(self.repository.get_by_id(room_id), is_available)

        audit.info("room_availability_changed", room_id=room.id, is_available=is_available, updated_by=principal.user_id)
        return room

    def set_room_status(self, principal: Principal, room_id: str, status: RoomStatus) -> Room:
        require(principal, Action.ROOM_MANAGE)
        with self.transaction():
            room = self.repository.set_status(self.repository.get_by_id(room_id), RoomStatus(status))

        audit.info("room_status_changed", room_id=room.id, status=room.status.value, updated_by=principal.user_id)
        return room
