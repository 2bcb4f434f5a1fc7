from typing import Optional

from common.models.staff import StaffRole
from common.utils.custom_exceptions import Forbidden, Unauthorized

MANAGEMENT_ROLES = (StaffRole.ADMIN, StaffRole.MANAGER)


def get_caller(event: dict) -> dict:
    authorizer = (event.get("requestContext") or {}).get("authorizer") or {}
    if not authorizer.get("user_id"):
        raise Unauthorized("Unauthorized")
    return authorizer


def get_role(event: dict) -> Optional[StaffRole]:
    role_raw = get_caller(event).get("role")
    try:
        return StaffRole(role_raw.upper())
    except (ValueError, AttributeError):
        return None


def require_role(event: dict, *roles: StaffRole) -> StaffRole:
    role = get_role(event)
    if role not in roles:
        allowed = " or ".join(r.value.lower() for r in roles)
        raise Forbidden(f"Only {allowed} staff can perform this action")
    return role
