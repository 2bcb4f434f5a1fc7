from enum import Enum
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional


@dataclass
class RoomType:
    room_type_id: str
    name: str
    price: float
    capacity: int
    description: Optional[str] = None
    amenities: List[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class RoomStatus(str, Enum):
    AVAILABLE = "available"
    OCCUPIED = "occupied"


@dataclass
class Room:
    room_id: str
    room_number: str
    room_type_id: str
    floor: Optional[int] = None
    status: RoomStatus = RoomStatus.AVAILABLE
    room_type: Optional[RoomType] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
