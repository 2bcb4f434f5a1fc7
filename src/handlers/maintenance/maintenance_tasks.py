import logging
import os
from boto3 import resource

from common.repository.maintenance_repo import MaintenanceRepository
from common.repository.room_repo import RoomRepository
from common.repository.staff_repo import StaffRepository
from common.services.maintenance_service import MaintenanceService
from common.schemas.tasks import (
    MaintenanceTaskQuery,
    MaintenanceTaskRequest,
    MaintenanceTaskUpdate,
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

maintenance_service = MaintenanceService(
    maintenance_repo=MaintenanceRepository(table),
    room_repo=RoomRepository(table),
    staff_repo=StaffRepository(table),
)


def list_tasks(event, context):
    try:
        get_caller(event)
        tasks = maintenance_service.list_tasks(parse_query(event, MaintenanceTaskQuery))
        return send_custom_response(200, "successfully retrieved", tasks)
    except HotelError as err:
        return send_custom_response(err.status_code, str(err))
    except Exception:
        logger.exception("Unhandled error listing maintenance tasks")
        return send_custom_response(500, "Internal server error")


def get_task(event, context):
    try:
        get_caller(event)
        task = maintenance_service.get_task(path_param(event, "id"))
        return send_custom_response(200, "successfully retrieved", task)
    except HotelError as err:
        return send_custom_response(err.status_code, str(err))
    except Exception:
        logger.exception("Unhandled error retrieving maintenance task")
        return send_custom_response(500, "Internal server error")


def create_task(event, context):
    try:
        get_caller(event)
        task = maintenance_service.create_task(parse_body(event, MaintenanceTaskRequest))
        return send_custom_response(201, "Maintenance task created", task)
    except HotelError as err:
        return send_custom_response(err.status_code, str(err))
    except Exception:
        logger.exception("Unhandled error creating maintenance task")
        return send_custom_response(500, "Internal server error")


def update_task(event, context):
    try:
        get_caller(event)
        task_id = path_param(event, "id")
        task = maintenance_service.update_task(task_id, parse_body(event, MaintenanceTaskUpdate))
        return send_custom_response(200, "Maintenance task updated", task)
    except HotelError as err:
        return send_custom_response(err.status_code, str(err))
    except Exception:
        logger.exception("Unhandled error updating maintenance task")
        return send_custom_response(500, "Internal server error")


def delete_task(event, context):
    try:
        get_caller(event)
        maintenance_service.delete_task(path_param(event, "id"))
        return send_custom_response(200, "Maintenance task deleted successfully")
    except HotelError as err:
        return send_custom_response(err.status_code, str(err))
    except Exception:
        logger.exception("Unhandled error deleting maintenance task")
        return send_custom_response(500, "Internal server error")
