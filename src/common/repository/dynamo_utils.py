from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from botocore.exceptions import ClientError

from common.utils.datetime_normaliser import from_iso_string


def to_dynamo(value):
    """Convert floats to Decimal recursively; DynamoDB rejects floats."""
    if isinstance(value, bool) or value is None:
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, dict):
        return {k: to_dynamo(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_dynamo(v) for v in value]
    return value


def to_float(value) -> Optional[float]:
    return None if value is None else float(value)


def to_int(value) -> Optional[int]:
    return None if value is None else int(value)


def iso_date(value: Optional[date]) -> Optional[str]:
    return None if value is None else value.isoformat()


def parse_date(value: Optional[str]) -> Optional[date]:
    return None if not value else date.fromisoformat(value)


def parse_datetime(value: Optional[str]) -> Optional[datetime]:
    return None if not value else from_iso_string(value)


def query_all(table, **kwargs) -> List[dict]:
    """Run a query and follow LastEvaluatedKey until every page is read."""
    resp = table.query(**kwargs)
    items = list(resp.get("Items", []))
    while "LastEvaluatedKey" in resp:
        resp = table.query(ExclusiveStartKey=resp["LastEvaluatedKey"], **kwargs)
        items.extend(resp.get("Items", []))
    return items


def error_code(err: ClientError) -> str:
    return err.response.get("Error", {}).get("Code", "")


def cancellation_codes(err: ClientError) -> List[str]:
    """Per-item reasons of a cancelled TransactWriteItems call, in request order."""
    reasons = err.response.get("CancellationReasons") or []
    return [reason.get("Code", "None") for reason in reasons]


def combine_filters(*conditions):
    """AND together the given boto3 conditions, skipping None."""
    combined = None
    for condition in conditions:
        if condition is None:
            continue
        combined = condition if combined is None else combined & condition
    return combined


def only_contended(codes: List[str]) -> bool:
    """True when a cancelled transaction lost a race and no condition failed."""
    return "TransactionConflict" in codes and all(
        code in ("None", "TransactionConflict") for code in codes
    )
