from dataclasses import asdict, is_dataclass
from typing import Any, Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from pydantic_core import to_json


class ErrorResponse(BaseModel):
    error: str


def to_payload(value: Any) -> Any:
    """Turn dataclasses and snake_case dicts into camelCase JSON-ready data."""
    if is_dataclass(value) and not isinstance(value, type):
        value = asdict(value)
    if isinstance(value, dict):
        return {
            to_camel(k) if isinstance(k, str) else k: to_payload(v)
            for k, v in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [to_payload(v) for v in value]
    return value


def send_custom_response(status_code: int, message: Optional[str] = None, data: Any = None):
    if status_code >= 400:
        body = ErrorResponse(error=message or "Request failed").model_dump_json()
    elif data is not None:
        body = to_json(to_payload(data)).decode()
    else:
        body = to_json({"message": message}).decode()
    return {
        "statusCode": status_code,
        "headers": {
            "Content-Type": "application/json",
        },
        "body": body,
    }
