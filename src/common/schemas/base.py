from datetime import date
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

from common.utils.datetime_normaliser import to_date


def _lower(value):
    return value.strip().lower() if isinstance(value, str) else value


def _upper(value):
    return value.strip().upper() if isinstance(value, str) else value


DateField = Annotated[date, BeforeValidator(to_date)]
NonEmptyStr = Annotated[str, Field(min_length=1)]
LowerEnum = BeforeValidator(_lower)
UpperEnum = BeforeValidator(_upper)


class RequestSchema(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        str_strip_whitespace=True,
    )
