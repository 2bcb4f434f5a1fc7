import logging
import os
from boto3 import resource

from common.repository.maintenance_repo import MaintenanceRepository
from common.repository.room_repo import RoomRepository
from common.repository.staff_repo import StaffRepository
from common.services.maintenance_service import MaintenanceService
from common.schemas.tasks import MaintenanceCategoryRequest
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

maintenance_service = MaintenanceService(
    maintenance_repo=MaintenanceRepository(table),
    room_repo=RoomRepository(table),
    staff_repo=StaffRepository(table),
)


def list_categories(event, context):
    try:
        get_caller(event)
        categories = maintenance_service.list_categories()
        return send_custom_response(200, "successfully retrieved", categories)
    except HotelError as err:
        return send_custom_response(err.status_code, str(err))
    except Exception:
        logger.exception("Unhandled error listing maintenance categories")
        return send_custom_response(500, "Internal server error")


def create_category(event, context):
    try:
        require_role(event, *MANAGEMENT_ROLES)
        category = maintenance_service.create_category(
            parse_body(event, MaintenanceCategoryRequest)
        )
        return send_custom_response(201, "Maintenance category created", category)
    except HotelError as err:
        return send_custom_response(err.status_code, str(err))
    except Exception:
        logger.exception("Unhandled error creating maintenance category")
        return send_custom_response(500, "Internal server error")
