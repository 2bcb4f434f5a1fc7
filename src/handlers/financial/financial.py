import logging
import os
from boto3 import resource

from common.repository.financial_repo import FinancialRepository
from common.services.financial_service import FinancialService
from common.schemas.financial import FinancialQuery, FinancialRecordRequest
from common.utils.auth import MANAGEMENT_ROLES, get_caller, require_role
from common.utils.custom_response import send_custom_response
from common.utils.custom_exceptions import HotelError
from common.utils.request_parser import parse_body, parse_query

TABLE_NAME = os.environ.get("TABLE_NAME")
AWS_REGION = os.environ.get("AWS_REGION", "ap-south-1")

logger = logging.getLogger()
logger.setLevel(os.environ.get("LOG_LEVEL", "INFO").upper())

dynamodb = resource("dynamodb", region_name=AWS_REGION)
table = dynamodb.Table(TABLE_NAME)

financial_service = FinancialService(financial_repo=FinancialRepository(table))


def get_financial(event, context):
    try:
        get_caller(event)
        query = parse_query(event, FinancialQuery)

        records, summary = financial_service.get_report(query.start_date, query.end_date)

        return send_custom_response(
            200,
            "Financial records retrieved successfully",
            {"records": records, "summary": summary},
        )

    except HotelError as err:
        return send_custom_response(err.status_code, str(err))

    except Exception:
        logger.exception("Unhandled error reading financial records")
        return send_custom_response(500, "Internal server error")


def add_financial_record(event, context):
    try:
        require_role(event, *MANAGEMENT_ROLES)
        request_body = parse_body(event, FinancialRecordRequest)

        record = financial_service.add_record(request_body)

        return send_custom_response(201, "Financial record created", record)

    except HotelError as err:
        return send_custom_response(err.status_code, str(err))

    except Exception:
        logger.exception("Unhandled error appending financial record")
        return send_custom_response(500, "Internal server error")
