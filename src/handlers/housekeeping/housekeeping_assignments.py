import logging
import os
from boto3 import resource

from common.repository.housekeeping_repo import HousekeepingRepository
from common.repository.room_repo import RoomRepository
from common.repository.staff_repo import StaffRepository
from common.services.housekeeping_service import HousekeepingService
from common.schemas.tasks import (
    HousekeepingAssignmentQuery,
    HousekeepingAssignmentRequest,
    HousekeepingAssignmentUpdate,
)
from common.utils.auth import get_caller
from common.utils.custom_response import send_custom_response
from common.utils.custom_exceptions import HotelError
from common.utils.request_parser import parse_body, parse_query, path_param

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


def list_assignments(event, context):
    try:
        get_caller(event)
        assignments = housekeeping_service.list_assignments(
            parse_query(event, HousekeepingAssignmentQuery)
        )
        return send_custom_response(200, "successfully retrieved", assignments)
    except HotelError as err:
        return send_custom_response(err.status_code, str(err))
    except Exception:
        logger.exception("Unhandled error listing housekeeping assignments")
        return send_custom_response(500, "Internal server error")


def create_assignment(event, context):
    try:
        get_caller(event)
        assignment = housekeeping_service.create_assignment(
            parse_body(event, HousekeepingAssignmentRequest)
        )
        return send_custom_response(201, "Housekeeping assignment created", assignment)
    except HotelError as err:
        return send_custom_response(err.status_code, str(err))
    except Exception:
        logger.exception("Unhandled error creating housekeeping assignment")
        return send_custom_response(500, "Internal server error")


def update_assignment(event, context):
    try:
        get_caller(event)
        assignment_id = path_param(event, "id")
        assignment = housekeeping_service.update_assignment(
            assignment_id, parse_body(event, HousekeepingAssignmentUpdate)
        )
        return send_custom_response(200, "Housekeeping assignment updated", assignment)
    except HotelError as err:
        return send_custom_response(err.status_code, str(err))
    except Exception:
        logger.exception("Unhandled error updating housekeeping assignment")
        return send_custom_response(500, "Internal server error")


def delete_assignment(event, context):
    try:
        get_caller(event)
        housekeeping_service.delete_assignment(path_param(event, "id"))
        return send_custom_response(200, "Housekeeping assignment deleted successfully")
    except HotelError as err:
        return send_custom_response(err.status_code, str(err))
    except Exception:
        logger.exception("Unhandled error deleting housekeeping assignment")
        return send_custom_response(500, "Internal server error")
