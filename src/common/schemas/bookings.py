from typing import Annotated, List, Optional

from pydantic import Field, StrictInt, model_validator

from common.models.bookings import BookingStatus
from common.schemas.base import DateField, LowerEnum, NonEmptyStr, RequestSchema


class BookingRequest(RequestSchema):
    guest_name: NonEmptyStr
    guest_email: NonEmptyStr
    guest_phone: NonEmptyStr
    room_id: NonEmptyStr
    check_in_date: DateField
    check_out_date: DateField
    adults: StrictInt = Field(ge=1)
    children: StrictInt = Field(default=0, ge=0)
    special_requests: Optional[str] = None
    additional_charges: List[NonEmptyStr] = Field(default_factory=list)

    @model_validator(mode="after")
    def drop_blank_requests(self):
        if self.special_requests == "":
            self.special_requests = None
        return self


class RoomSearchQuery(RequestSchema):
    check_in: DateField
    check_out: DateField
    adults: Optional[int] = Field(default=None, ge=0)
    children: Optional[int] = Field(default=None, ge=0)
    room_type_id: Optional[str] = None

    @model_validator(mode="after")
    def validate_range(self):
        if self.check_out <= self.check_in:
            raise ValueError("checkOut must be after checkIn")
        return self

    @property
    def guests(self) -> Optional[int]:
        if self.adults is None and self.children is None:
            return None
        return (self.adults or 0) + (self.children or 0)


class CalendarQuery(RequestSchema):
    month: int = Field(ge=1, le=12)
    year: int = Field(ge=1900, le=9999)


class BookingStatusUpdate(RequestSchema):
    status: Annotated[BookingStatus, LowerEnum]
