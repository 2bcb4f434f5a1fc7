from dataclasses import replace
from datetime import date
from typing import Dict, List, Optional
from uuid import uuid4

from common.models.rooms import Room, RoomStatus, RoomType
from common.repository.booking_repo import BookingRepository
from common.repository.room_repo import RoomRepository
from common.schemas.rooms import RoomRequest, RoomTypeRequest, RoomTypeUpdate
from common.utils.custom_exceptions import InvalidDates, NotFoundException
from common.utils.date_ranges import overlaps


def room_number_key(room: Room):
    number = room.room_number
    return (0, int(number), number) if number.isdigit() else (1, 0, number)


class RoomService:
    def __init__(self, room_repo: RoomRepository, booking_repo: Optional[BookingRepository] = None):
        self.room_repo = room_repo
        self.booking_repo = booking_repo

    def create_room_type(self, req: RoomTypeRequest) -> RoomType:
        room_type = RoomType(room_type_id=str(uuid4()), **req.model_dump())
        self.room_repo.put_room_type(room_type)
        return room_type

    def get_room_type(self, room_type_id: str) -> RoomType:
        room_type = self.room_repo.get_room_type(room_type_id)
        if room_type is None:
            raise NotFoundException("room type", room_type_id, 404)
        return room_type

    def list_room_types(self) -> List[RoomType]:
        return sorted(self.room_repo.list_room_types(), key=lambda t: (t.price, t.name))

    def update_room_type(self, room_type_id: str, req: RoomTypeUpdate) -> RoomType:
        changes = req.model_dump(exclude_unset=True, exclude_none=True)
        room_type = replace(self.get_room_type(room_type_id), **changes)
        self.room_repo.put_room_type(room_type, must_exist=True)
        return room_type

    def delete_room_type(self, room_type_id: str):
        self.room_repo.delete_room_type(room_type_id)

    def add_room(self, req: RoomRequest) -> Room:
        room_type = self.get_room_type(req.room_type_id)
        room = Room(
            room_id=str(uuid4()),
            room_number=req.room_number,
            room_type_id=room_type.room_type_id,
            floor=req.floor,
        )
        self.room_repo.add_room(room=room)
        room.room_type = room_type
        return room

    def get_room(self, room_id: str) -> Room:
        room = self.room_repo.get_room_by_id(room_id)
        if room is None:
            raise NotFoundException("room", room_id, 404)
        room.room_type = self.room_repo.get_room_type(room.room_type_id)
        return room

    def list_rooms(self) -> List[Room]:
        types = self._room_types_by_id()
        rooms = sorted(self.room_repo.list_rooms(), key=room_number_key)
        for room in rooms:
            room.room_type = types.get(room.room_type_id)
        return rooms

    def update_room_status(self, room_id: str, status: RoomStatus) -> Room:
        self.room_repo.update_room_status(room_id, status)
        return self.get_room(room_id)

    def search_available_rooms(
        self,
        check_in: date,
        check_out: date,
        guests: Optional[int] = None,
        room_type_id: Optional[str] = None,
    ) -> List[Room]:
        """Rooms with no non-cancelled booking meeting [check_in, check_out).

        Rooms whose type is gone are never offered; capacity only filters
        when a guest count is given.
        """
        if check_out <= check_in:
            raise InvalidDates("checkOut must be after checkIn")

        booked = {
            b.room_id
            for b in self.booking_repo.find_overlapping(check_in, check_out)
            if overlaps(b.check_in_date, b.check_out_date, check_in, check_out)
        }
        types = self._room_types_by_id()

        available = []
        for room in sorted(self.room_repo.list_rooms(), key=room_number_key):
            room_type = types.get(room.room_type_id)
            if room.room_id in booked or room_type is None:
                continue
            if room_type_id and room.room_type_id != room_type_id:
                continue
            if guests is not None and room_type.capacity < guests:
                continue
            room.room_type = room_type
            available.append(room)
        return available

    def _room_types_by_id(self) -> Dict[str, RoomType]:
        return {t.room_type_id: t for t in self.room_repo.list_room_types()}
