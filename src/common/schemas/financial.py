from typing import Annotated, Optional

from pydantic import Field, model_validator

from common.models.financial import RecordType
from common.schemas.base import DateField, LowerEnum, NonEmptyStr, RequestSchema


class FinancialRecordRequest(RequestSchema):
    type: Annotated[RecordType, LowerEnum]
    category: NonEmptyStr
    description: Optional[str] = None
    amount: float = Field(gt=0)
    date: DateField


class FinancialQuery(RequestSchema):
    start_date: Optional[DateField] = None
    end_date: Optional[DateField] = None

    @model_validator(mode="after")
    def validate_range(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("endDate must not be before startDate")
        return self
