import logging
import os
from boto3 import resource

from common.repository.booking_repo import BookingRepository
from common.repository.charge_repo import ChargeRepository
from common.repository.room_repo import RoomRepository
from common.services.booking_service import BookingService
from common.utils.auth import get_caller
from common.utils.custom_response import send_custom_response
from common.utils.custom_exceptions import HotelError
from common.utils.request_parser import path_param

TABLE_NAME = os.environ.get("TABLE_NAME")
AWS_REGION = os.environ.get("AWS_REGION", "ap-south-1")

logger = logging.getLogger()
logger.setLevel(os.environ.get("LOG_LEVEL", "INFO").upper())

dynamodb = resource("dynamodb", region_name=AWS_REGION)
table = dynamodb.Table(TABLE_NAME)

booking_service = BookingService(
    booking_repo=BookingRepository(table),
    room_repo=RoomRepository(table),
    charge_repo=ChargeRepository(table),
)


def get_bookings(event, context):
    try:
        get_caller(event)
        bookings = booking_service.list_bookings()
        return send_custom_response(200, "Bookings retrieved successfully", bookings)

    except HotelError as err:
        return send_custom_response(err.status_code, str(err))

    except Exception:
        logger.exception("Unhandled error listing bookings")
        return send_custom_response(500, "Internal server error")


def get_booking(event, context):
    try:
        get_caller(event)
        booking_id = path_param(event, "id")
        booking = booking_service.get_booking(booking_id)
        return send_custom_response(200, "Booking retrieved successfully", booking)

    except HotelError as err:
        return send_custom_response(err.status_code, str(err))

    except Exception:
        logger.exception("Unhandled error retrieving booking")
        return send_custom_response(500, "Internal server error")
