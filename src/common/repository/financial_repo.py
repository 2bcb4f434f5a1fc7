from botocore.exceptions import ClientError
import logging
from datetime import date
from typing import List, Optional
from boto3.dynamodb.conditions import Key
from common.models.financial import FinancialRecord, RecordType
from common.repository.dynamo_utils import (
    parse_date,
    parse_datetime,
    query_all,
    to_dynamo,
    to_float,
)

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from types_boto3_dynamodb.service_resource import Table
else:
    Table = object


logger = logging.getLogger(__name__)

FINANCIAL_PK = "FINANCIAL_RECORD"


def financial_record_item(record: FinancialRecord) -> dict:
    # the date leads the sort key so range reads are a single key condition
    return to_dynamo(
        {
            "pk": FINANCIAL_PK,
            "sk": f"RECORD#{record.date.isoformat()}#{record.record_id}",
            "record_type": record.type.value,
            "category": record.category,
            "description": record.description,
            "amount": record.amount,
            "record_date": record.date.isoformat(),
            "reference_id": record.reference_id,
            "created_at": record.created_at.isoformat(),
        }
    )


class FinancialRepository:
    def __init__(self, table: Table):
        self.table = table

    def add_record(self, record: FinancialRecord):
        try:
            self.table.put_item(
                Item=financial_record_item(record),
                ConditionExpression="attribute_not_exists(sk)",
            )
        except ClientError as err:
            logger.error(f"Error appending financial record {record.record_id}: {err}")
            raise

    def list_records(
        self, start: Optional[date] = None, end: Optional[date] = None
    ) -> List[FinancialRecord]:
        condition = Key("pk").eq(FINANCIAL_PK)
        if start and end:
            condition = condition & Key("sk").between(
                f"RECORD#{start.isoformat()}", f"RECORD#{end.isoformat()}#~"
            )
        elif start:
            condition = condition & Key("sk").gte(f"RECORD#{start.isoformat()}")
        elif end:
            condition = condition & Key("sk").lte(f"RECORD#{end.isoformat()}#~")
        else:
            condition = condition & Key("sk").begins_with("RECORD#")

        try:
            items = query_all(
                self.table,
                KeyConditionExpression=condition,
                ScanIndexForward=False,
            )
        except ClientError as err:
            logger.error(f"Error listing financial records {start} - {end}: {err}")
            raise
        return [self._to_record(item) for item in items]

    @staticmethod
    def _to_record(item: dict) -> FinancialRecord:
        return FinancialRecord(
            record_id=item["sk"].rsplit("#", 1)[1],
            type=RecordType(item["record_type"]),
            category=item["category"],
            description=item.get("description"),
            amount=to_float(item["amount"]),
            date=parse_date(item["record_date"]),
            reference_id=item.get("reference_id"),
            created_at=parse_datetime(item.get("created_at")),
        )
