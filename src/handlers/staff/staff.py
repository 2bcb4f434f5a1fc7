import logging
import os
from boto3 import resource

from common.models.staff import Staff
from common.repository.staff_repo import StaffRepository
from common.services.staff_service import StaffService
from common.schemas.staff import StaffRequest
from common.utils.auth import MANAGEMENT_ROLES, get_caller, require_role
from common.utils.custom_response import send_custom_response
from common.utils.custom_exceptions import HotelError
from common.utils.request_parser import parse_body

TABLE_NAME = os.environ.get("TABLE_NAME")
AWS_REGION = os.environ.get("AWS_REGION", "ap-south-1")

logger = logging.getLogger()
logger.setLevel(os.environ.get("LOG_LEVEL", "INFO").upper())

dynamodb = resource("dynamodb", region_name=AWS_REGION)
table = dynamodb.Table(TABLE_NAME)

staff_service = StaffService(staff_repo=StaffRepository(table))


def staff_view(staff: Staff) -> dict:
    return {
        "id": staff.staff_id,
        "name": staff.name,
        "email": staff.email,
        "phone": staff.phone,
        "position": staff.position,
        "department": staff.department,
        "hire_date": staff.hire_date,
        "role": staff.role.value,
    }


def list_staff(event, context):
    try:
        get_caller(event)
        result = [staff_view(s) for s in staff_service.list_staff()]
        return send_custom_response(200, "successfully retrieved", result)
    except HotelError as err:
        return send_custom_response(err.status_code, str(err))
    except Exception:
        logger.exception("Unhandled error listing staff")
        return send_custom_response(500, "Internal server error")


def add_staff(event, context):
    try:
        require_role(event, *MANAGEMENT_ROLES)
        staff = staff_service.add_staff(parse_body(event, StaffRequest))
        return send_custom_response(201, "Staff member created", staff_view(staff))
    except HotelError as err:
        return send_custom_response(err.status_code, str(err))
    except Exception:
        logger.exception("Unhandled error creating staff member")
        return send_custom_response(500, "Internal server error")
