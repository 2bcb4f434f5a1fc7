import logging
import uuid
from typing import List

import bcrypt

from common.models.staff import Staff
from common.repository.staff_repo import StaffRepository
from common.schemas.staff import StaffRequest
from common.utils.custom_exceptions import (
    Forbidden,
    IncorrectCredentials,
    NotFoundException,
)
from common.utils.jwt_service import create_jwt

logger = logging.getLogger(__name__)


class StaffService:
    def __init__(self, staff_repo: StaffRepository):
        self.staff_repo = staff_repo

    def get_staff_by_id(self, staff_id: str) -> Staff:
        staff = self.staff_repo.get_by_id(staff_id=staff_id)
        if staff is None:
            raise NotFoundException(resource="staff", identifier=staff_id, status_code=404)
        return staff

    def list_staff(self) -> List[Staff]:
        return sorted(self.staff_repo.list_staff(), key=lambda s: s.name.lower())

    def add_staff(self, req: StaffRequest) -> Staff:
        staff = Staff(
            staff_id=str(uuid.uuid4()),
            name=req.name,
            email=req.email.lower(),
            phone=req.phone,
            position=req.position,
            department=req.department,
            hire_date=req.hire_date,
            role=req.role,
            password=self._hash_password(req.password),
        )
        self.staff_repo.add_staff(staff)
        logger.info(f"Staff member {staff.staff_id} added as {staff.role.value}")
        return staff

    def login(self, email: str, password: str) -> str:
        staff = self.staff_repo.get_by_mail(mail=email)
        if staff is None or not staff.password:
            raise IncorrectCredentials("Invalid email or password")

        if not bcrypt.checkpw(
            password.encode("utf-8"),
            staff.password.encode("utf-8"),
        ):
            raise IncorrectCredentials("Invalid email or password")
        if not staff.is_active:
            raise Forbidden("Staff account is disabled")

        return create_jwt(staff.staff_id, staff.email, staff.role.value)

    def _hash_password(self, password: str) -> str:
        return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()
