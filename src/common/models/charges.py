from enum import Enum
from dataclasses import dataclass
from typing import Optional


class ChargeType(str, Enum):
    PER_NIGHT = "per_night"
    PER_STAY = "per_stay"
    PER_PERSON = "per_person"


@dataclass
class AdditionalCharge:
    charge_id: str
    name: str
    price: float
    charge_type: ChargeType
    description: Optional[str] = None
    is_active: bool = True
