import logging
import os
from boto3 import resource

from common.repository.staff_repo import StaffRepository
from common.services.staff_service import StaffService
from common.schemas.staff import LoginRequest
from common.utils.custom_exceptions import HotelError
from common.utils.custom_response import send_custom_response
from common.utils.request_parser import parse_body

TABLE_NAME = os.environ.get("TABLE_NAME")
AWS_REGION = os.environ.get("AWS_REGION", "ap-south-1")

logger = logging.getLogger()
logger.setLevel(os.environ.get("LOG_LEVEL", "INFO").upper())

dynamodb = resource("dynamodb", region_name=AWS_REGION)
table = dynamodb.Table(TABLE_NAME)

repo = StaffRepository(table=table)
service = StaffService(staff_repo=repo)


def login_handler(event, context):
    try:
        request_body = parse_body(event, LoginRequest)
        token = service.login(request_body.email, request_body.password)
        return send_custom_response(
            status_code=200, message="login successful", data={"token": token}
        )
    except HotelError as e:
        return send_custom_response(status_code=e.status_code, message=str(e))
    except Exception:
        logger.exception("Unhandled error during login")
        return send_custom_response(status_code=500, message="Internal server error")
