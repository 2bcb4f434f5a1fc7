from typing import Type, TypeVar

from pydantic import BaseModel, ValidationError

from common.utils.custom_exceptions import InvalidRequest

T = TypeVar("T", bound=BaseModel)


def format_validation_error(err: ValidationError) -> str:
    parts = []
    for e in err.errors():
        loc = ".".join(str(p) for p in e.get("loc", ()) if p != "__root__")
        msg = e["msg"].removeprefix("Value error, ")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts) or "Invalid request"


def parse_body(event: dict, schema: Type[T]) -> T:
    body = event.get("body")
    if not body:
        raise InvalidRequest("Request body is required")
    try:
        return schema.model_validate_json(body)
    except ValidationError as err:
        raise InvalidRequest(format_validation_error(err))


def parse_query(event: dict, schema: Type[T]) -> T:
    params = event.get("queryStringParameters") or {}
    try:
        return schema.model_validate(params)
    except ValidationError as err:
        raise InvalidRequest(format_validation_error(err))


def path_param(event: dict, name: str) -> str:
    value = (event.get("pathParameters") or {}).get(name)
    if not value:
        raise InvalidRequest(f"{name} is required in the path")
    return value


