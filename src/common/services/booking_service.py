import logging
from datetime import date
from typing import Dict, List, Optional
from uuid import uuid4

from common.models.bookings import Booking, BookingStatus
from common.models.charges import AdditionalCharge
from common.models.financial import FinancialRecord, RecordType
from common.models.rooms import Room, RoomStatus, RoomType
from common.repository.booking_repo import BookingRepository
from common.repository.charge_repo import ChargeRepository
from common.repository.room_repo import RoomRepository
from common.schemas.bookings import BookingRequest
from common.utils.constants import BOOKING_INCOME_CATEGORY, MAX_STAY
from common.utils.custom_exceptions import (
    BookingConflict,
    InvalidDates,
    InvalidRequest,
    InvalidTransition,
    NotFoundException,
)
from common.utils.date_ranges import count_nights, month_bounds
from common.utils.datetime_normaliser import today
from common.utils.pricing import build_charge_lines, calculate_total_price

logger = logging.getLogger(__name__)


def validate_stay(check_in: date, check_out: date):
    if check_out <= check_in:
        raise InvalidDates("Check-out date must be after check-in date")
    if check_in < today():
        raise InvalidDates("Check-in date cannot be in the past")
    if count_nights(check_in, check_out) > MAX_STAY:
        raise InvalidDates(f"Maximum stay is {MAX_STAY} nights")


class BookingService:
    def __init__(
        self,
        booking_repo: BookingRepository,
        room_repo: RoomRepository,
        charge_repo: ChargeRepository,
    ):
        self.booking_repo = booking_repo
        self.room_repo = room_repo
        self.charge_repo = charge_repo

    def create_booking(self, req: BookingRequest) -> Booking:
        check_in, check_out = req.check_in_date, req.check_out_date
        validate_stay(check_in, check_out)

        room = self.room_repo.get_room_by_id(req.room_id)
        if room is None:
            raise NotFoundException("room", req.room_id, 404)
        room_type = self.room_repo.get_room_type(room.room_type_id)
        if room_type is None:
            raise NotFoundException("room type", room.room_type_id, 404)

        if self.booking_repo.get_booked_nights(room.room_id, check_in, check_out):
            raise BookingConflict("Room is not available for the selected dates")

        booking = Booking(
            booking_id=str(uuid4()),
            guest_name=req.guest_name,
            guest_email=req.guest_email,
            guest_phone=req.guest_phone,
            room_id=room.room_id,
            check_in_date=check_in,
            check_out_date=check_out,
            adults=req.adults,
            children=req.children,
            special_requests=req.special_requests,
        )
        booking.charges = build_charge_lines(
            self._selected_charges(req.additional_charges),
            booking.nights,
            booking.guests,
        )
        booking.total_price = calculate_total_price(
            room_type.price, booking.nights, booking.charges
        )
        record = FinancialRecord(
            record_id=str(uuid4()),
            type=RecordType.INCOME,
            category=BOOKING_INCOME_CATEGORY,
            amount=booking.total_price,
            date=today(),
            description=f"Booking for {booking.guest_name} - Room {room.room_number}",
            reference_id=booking.booking_id,
        )

        # booking, night locks, ledger entry and room status commit together
        self.booking_repo.add_booking(booking, record)
        logger.info(
            f"Booking {booking.booking_id} created for room {room.room_number} "
            f"{check_in} - {check_out}, total {booking.total_price}"
        )

        room.status = RoomStatus.OCCUPIED
        room.room_type = room_type
        booking.room = room
        return booking

    def get_booking(self, booking_id: str) -> Booking:
        booking = self.booking_repo.get_booking_by_id(booking_id)
        if booking is None:
            raise NotFoundException("booking", booking_id, 404)
        room = self.room_repo.get_room_by_id(booking.room_id)
        if room is not None:
            room.room_type = self.room_repo.get_room_type(room.room_type_id)
        booking.room = room
        return booking

    def list_bookings(self) -> List[Booking]:
        bookings = self.booking_repo.list_bookings()
        bookings.sort(key=lambda b: b.created_at, reverse=True)
        return self._attach_rooms(bookings)

    def get_calendar(self, year: int, month: int) -> List[Booking]:
        start, end = month_bounds(year, month)
        bookings = self.booking_repo.find_overlapping(start, end)
        bookings.sort(key=lambda b: (b.check_in_date, b.created_at))
        return self._attach_rooms(bookings)

    def update_status(self, booking_id: str, status: BookingStatus) -> Booking:
        booking = self.get_booking(booking_id)
        if booking.status != BookingStatus.CONFIRMED or status == BookingStatus.CONFIRMED:
            raise InvalidTransition(
                f"Cannot change booking from {booking.status.value} "
                f"to {status.value}"
            )

        others = [
            b
            for b in self.booking_repo.list_bookings(
                room_id=booking.room_id, status=BookingStatus.CONFIRMED
            )
            if b.booking_id != booking.booking_id
        ]
        room_status = RoomStatus.OCCUPIED if others else RoomStatus.AVAILABLE

        self.booking_repo.update_booking_status(booking, status, room_status)
        logger.info(f"Booking {booking.booking_id} is now {status.value}")

        booking.status = status
        if booking.room is not None:
            booking.room.status = room_status
        return booking

    def _selected_charges(self, charge_ids: List[str]) -> List[AdditionalCharge]:
        charges = []
        for charge_id in dict.fromkeys(charge_ids):
            charge = self.charge_repo.get_charge(charge_id)
            if charge is None:
                raise NotFoundException("additional charge", charge_id, 404)
            if not charge.is_active:
                raise InvalidRequest(f"Additional charge '{charge.name}' is not active")
            charges.append(charge)
        return charges

    def _attach_rooms(self, bookings: List[Booking]) -> List[Booking]:
        if not bookings:
            return bookings
        rooms: Dict[str, Room] = {r.room_id: r for r in self.room_repo.list_rooms()}
        types: Dict[str, RoomType] = {
            t.room_type_id: t for t in self.room_repo.list_room_types()
        }
        for booking in bookings:
            room: Optional[Room] = rooms.get(booking.room_id)
            if room is not None:
                room.room_type = types.get(room.room_type_id)
            booking.room = room
        return bookings
