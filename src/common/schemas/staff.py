import re
from typing import Annotated, Optional

from pydantic import EmailStr, Field, field_validator

from common.models.staff import StaffRole
from common.schemas.base import DateField, NonEmptyStr, RequestSchema, UpperEnum

PASSWORD_REGEX = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[^A-Za-z0-9]).{12,}$")


class StaffRequest(RequestSchema):
    name: NonEmptyStr
    email: EmailStr
    phone: Optional[str] = None
    position: Optional[str] = None
    department: Optional[str] = None
    hire_date: Optional[DateField] = None
    role: Annotated[StaffRole, UpperEnum] = StaffRole.STAFF
    password: str = Field(min_length=12, max_length=128)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str):
        if not PASSWORD_REGEX.fullmatch(v):
            raise ValueError(
                "Password must be at least 12 characters long and contain "
                "uppercase, lowercase, digit, and special character"
            )
        return v


class LoginRequest(RequestSchema):
    email: EmailStr
    password: str
