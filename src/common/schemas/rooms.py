from typing import Annotated, List, Optional

from pydantic import Field

from common.models.rooms import RoomStatus
from common.schemas.base import LowerEnum, NonEmptyStr, RequestSchema


class RoomTypeRequest(RequestSchema):
    name: NonEmptyStr
    description: Optional[str] = None
    price: float = Field(gt=0)
    capacity: int = Field(ge=1)
    amenities: List[str] = Field(default_factory=list)


class RoomTypeUpdate(RequestSchema):
    name: Optional[NonEmptyStr] = None
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, gt=0)
    capacity: Optional[int] = Field(default=None, ge=1)
    amenities: Optional[List[str]] = None


class RoomRequest(RequestSchema):
    room_number: NonEmptyStr
    room_type_id: NonEmptyStr
    floor: Optional[int] = None


class RoomStatusUpdate(RequestSchema):
    status: Annotated[RoomStatus, LowerEnum]
