import logging
import os
from boto3 import resource

from common.repository.booking_repo import BookingRepository
from common.repository.room_repo import RoomRepository
from common.services.room_service import RoomService
from common.schemas.bookings import RoomSearchQuery
from common.utils.auth import get_caller
from common.utils.custom_response import send_custom_response
from common.utils.custom_exceptions import HotelError
from common.utils.request_parser import parse_query

TABLE_NAME = os.environ.get("TABLE_NAME")
AWS_REGION = os.environ.get("AWS_REGION", "ap-south-1")

logger = logging.getLogger()
logger.setLevel(os.environ.get("LOG_LEVEL", "INFO").upper())

dynamodb = resource("dynamodb", region_name=AWS_REGION)
table = dynamodb.Table(TABLE_NAME)

room_service = RoomService(
    room_repo=RoomRepository(table),
    booking_repo=BookingRepository(table),
)


def search_rooms(event, context):
    try:
        get_caller(event)
        query = parse_query(event, RoomSearchQuery)

        rooms = room_service.search_available_rooms(
            check_in=query.check_in,
            check_out=query.check_out,
            guests=query.guests,
            room_type_id=query.room_type_id,
        )

        return send_custom_response(200, "successfully retrieved", rooms)

    except HotelError as err:
        return send_custom_response(err.status_code, str(err))

    except Exception:
        logger.exception("Unhandled error searching rooms")
        return send_custom_response(500, "Internal server error")
