import logging
import os
from boto3 import resource

from common.repository.room_repo import RoomRepository
from common.services.room_service import RoomService
from common.schemas.rooms import RoomRequest
from common.utils.auth import MANAGEMENT_ROLES, require_role
from common.utils.custom_response import send_custom_response
from common.utils.custom_exceptions import HotelError
from common.utils.request_parser import parse_body

TABLE_NAME = os.environ.get("TABLE_NAME")
AWS_REGION = os.environ.get("AWS_REGION", "ap-south-1")

logger = logging.getLogger()
logger.setLevel(os.environ.get("LOG_LEVEL", "INFO").upper())

dynamodb = resource("dynamodb", region_name=AWS_REGION)
table = dynamodb.Table(TABLE_NAME)

room_repo = RoomRepository(table)
room_service = RoomService(room_repo=room_repo)


def add_room(event, context):
    try:
        require_role(event, *MANAGEMENT_ROLES)
        request_body = parse_body(event, RoomRequest)

        room = room_service.add_room(request_body)

        return send_custom_response(201, f"Room {room.room_number} added successfully", room)

    except HotelError as err:
        return send_custom_response(err.status_code, str(err))

    except Exception:
        logger.exception("Unhandled error adding room")
        return send_custom_response(500, "Internal server error")
