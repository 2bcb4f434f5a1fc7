import logging
import os
from boto3 import resource

from common.repository.charge_repo import ChargeRepository
from common.services.charge_service import ChargeService
from common.schemas.charges import ChargeRequest, ChargeUpdate
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

charge_service = ChargeService(charge_repo=ChargeRepository(table))


def list_charges(event, context):
    try:
        get_caller(event)
        return send_custom_response(200, "successfully retrieved", charge_service.list_charges())
    except HotelError as err:
        return send_custom_response(err.status_code, str(err))
    except Exception:
        logger.exception("Unhandled error listing additional charges")
        return send_custom_response(500, "Internal server error")


def create_charge(event, context):
    try:
        require_role(event, *MANAGEMENT_ROLES)
        charge = charge_service.create_charge(parse_body(event, ChargeRequest))
        return send_custom_response(201, "Additional charge created", charge)
    except HotelError as err:
        return send_custom_response(err.status_code, str(err))
    except Exception:
        logger.exception("Unhandled error creating additional charge")
        return send_custom_response(500, "Internal server error")


def update_charge(event, context):
    try:
        require_role(event, *MANAGEMENT_ROLES)
        charge_id = path_param(event, "id")
        charge = charge_service.update_charge(charge_id, parse_body(event, ChargeUpdate))
        return send_custom_response(200, "Additional charge updated", charge)
    except HotelError as err:
        return send_custom_response(err.status_code, str(err))
    except Exception:
        logger.exception("Unhandled error updating additional charge")
        return send_custom_response(500, "Internal server error")


def delete_charge(event, context):
    try:
        require_role(event, *MANAGEMENT_ROLES)
        charge_service.delete_charge(path_param(event, "id"))
        return send_custom_response(200, data={"success": True})
    except HotelError as err:
        return send_custom_response(err.status_code, str(err))
    except Exception:
        logger.exception("Unhandled error deleting additional charge")
        return send_custom_response(500, "Internal server error")
