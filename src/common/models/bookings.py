from enum import Enum
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import List, Optional

from common.models.charges import ChargeType
from common.models.rooms import Room


class BookingStatus(str, Enum):
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


@dataclass
class BookingCharge:
    charge_id: str
    name: str
    charge_type: ChargeType
    unit_price: float
    quantity: int
    amount: float


@dataclass
class Booking:
    booking_id: str
    guest_name: str
    guest_email: str
    guest_phone: str
    room_id: str
    check_in_date: date
    check_out_date: date
    adults: int
    children: int = 0
    total_price: float = 0.0
    status: BookingStatus = BookingStatus.CONFIRMED
    special_requests: Optional[str] = None
    charges: List[BookingCharge] = field(default_factory=list)

    room: Optional[Room] = None

    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def nights(self) -> int:
        return (self.check_out_date - self.check_in_date).days

    @property
    def guests(self) -> int:
        return self.adults + self.children
