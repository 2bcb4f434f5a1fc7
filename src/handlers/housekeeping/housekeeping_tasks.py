import logging
import os
from boto3 import resource

from common.repository.housekeeping_repo import HousekeepingRepository
from common.repository.room_repo import RoomRepository
from common.repository.staff_repo import StaffRepository
from common.services.housekeeping_service import HousekeepingService
from common.schemas.tasks import HousekeepingTaskRequest
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

housekeeping_service = HousekeepingService(
    housekeeping_repo=HousekeepingRepository(table),
    room_repo=RoomRepository(table),
    staff_repo=StaffRepository(table),
)


def list_tasks(event, context):
    try:
        get_caller(event)
        return send_custom_response(200, "successfully retrieved", housekeeping_service.list_tasks())
    except HotelError as err:
        return send_custom_response(err.status_code, str(err))
    except Exception:
        logger.exception("Unhandled error listing housekeeping tasks")
        return send_custom_response(500, "Internal server error")


def create_task(event, context):
    try:
        require_role(event, *MANAGEMENT_ROLES)
        task = housekeeping_service.create_task(parse_body(event, HousekeepingTaskRequest))
        return send_custom_response(201, "Housekeeping task created", task)
    except HotelError as err:
        return send_custom_response(err.status_code, str(err))
    except Exception:
        logger.exception("Unhandled error creating housekeeping task")
        return send_custom_response(500, "Internal server error")
