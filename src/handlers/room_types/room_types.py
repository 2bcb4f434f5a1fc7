import logging
import os
from boto3 import resource

from common.repository.room_repo import RoomRepository
from common.services.room_service import RoomService
from common.schemas.rooms import RoomTypeRequest, RoomTypeUpdate
from common.utils.auth import MANAGEMENT_ROLES, get_caller, require_role
from common.utils.custom_response import send_custom_response
from common.utils.custom_exceptions import HotelError
from common.utils.request_parser import parse_body, path_param

TABLE_NAME = os.environ.get("TABLE_NAME")
AWS_REGION = os.environ.get("AWS_REGION", "ap-south-1")

logger = logging.getLogger()
logger.setLevel(os.environ.get("LOG_LEVEL", "INFO").upper())

dynamodb = resource("dynamodb", region_name=AWS_REGION)
table = dynamodb.Table(TABLE_NAME)

room_service = RoomService(room_repo=RoomRepository(table))


def list_room_types(event, context):
    try:
        get_caller(event)
        return send_custom_response(200, "successfully retrieved", room_service.list_room_types())
    except HotelError as err:
        return send_custom_response(err.status_code, str(err))
    except Exception:
        logger.exception("Unhandled error listing room types")
        return send_custom_response(500, "Internal server error")


def get_room_type(event, context):
    try:
        get_caller(event)
        room_type = room_service.get_room_type(path_param(event, "id"))
        return send_custom_response(200, "successfully retrieved", room_type)
    except HotelError as err:
        return send_custom_response(err.status_code, str(err))
    except Exception:
        logger.exception("Unhandled error retrieving room type")
        return send_custom_response(500, "Internal server error")


def create_room_type(event, context):
    try:
        require_role(event, *MANAGEMENT_ROLES)
        room_type = room_service.create_room_type(parse_body(event, RoomTypeRequest))
        return send_custom_response(201, "Room type created", room_type)
    except HotelError as err:
        return send_custom_response(err.status_code, str(err))
    except Exception:
        logger.exception("Unhandled error creating room type")
        return send_custom_response(500, "Internal server error")


def update_room_type(event, context):
    try:
        require_role(event, *MANAGEMENT_ROLES)
        room_type_id = path_param(event, "id")
        room_type = room_service.update_room_type(
            room_type_id, parse_body(event, RoomTypeUpdate)
        )
        return send_custom_response(200, "Room type updated", room_type)
    except HotelError as err:
        return send_custom_response(err.status_code, str(err))
    except Exception:
        logger.exception("Unhandled error updating room type")
        return send_custom_response(500, "Internal server error")


def delete_room_type(event, context):
    try:
        require_role(event, *MANAGEMENT_ROLES)
        room_service.delete_room_type(path_param(event, "id"))
        return send_custom_response(200, data={"success": True})
    except HotelError as err:
        return send_custom_response(err.status_code, str(err))
    except Exception:
        logger.exception("Unhandled error deleting room type")
        return send_custom_response(500, "Internal server error")
