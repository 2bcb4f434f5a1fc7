from enum import Enum
from dataclasses import dataclass
from datetime import date
from typing import Optional


class StaffRole(Enum):
    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    STAFF = "STAFF"


@dataclass
class Staff:
    staff_id: str
    name: str
    email: str
    role: StaffRole
    phone: Optional[str] = None
    position: Optional[str] = None
    department: Optional[str] = None
    hire_date: Optional[date] = None
    password: Optional[str] = None
    is_active: bool = True
