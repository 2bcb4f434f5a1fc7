import logging
import os
from boto3 import resource

from common.repository.room_repo import RoomRepository
from common.services.room_service import RoomService
from common.schemas.rooms import RoomStatusUpdate
from common.utils.auth import get_caller
from common.utils.custom_response import send_custom_response
from common.utils.custom_exceptions import HotelError
from common.utils.request_parser import parse_body, path_param

TABLE_NAME = os.environ.get("TABLE_NAME")
AWS_REGION = os.environ.get("AWS_REGION", "ap-south-1")

logger = logging.getLogger()
logger.setLevel(os.environ.get("LOG_LEVEL", "INFO").upper())

dynamodb = resource("dynamodb", region_name=AWS_REGION)
table = dynamodb.Table(TABLE_NAME)

room_repo = RoomRepository(table)
room_service = RoomService(room_repo=room_repo)


def update_room(event, context):
    try:
        get_caller(event)
        room_id = path_param(event, "id")
        request_body = parse_body(event, RoomStatusUpdate)

        room = room_service.update_room_status(room_id=room_id, status=request_body.status)

        return send_custom_response(200, "Room status updated successfully", room)

    except HotelError as err:
        return send_custom_response(err.status_code, str(err))

    except Exception:
        logger.exception("Unhandled error updating room status")
        return send_custom_response(500, "Internal server error")
