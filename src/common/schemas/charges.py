from typing import Annotated, Optional

from pydantic import Field

from common.models.charges import ChargeType
from common.schemas.base import LowerEnum, NonEmptyStr, RequestSchema


class ChargeRequest(RequestSchema):
    name: NonEmptyStr
    description: Optional[str] = None
    price: float = Field(ge=0)
    charge_type: Annotated[ChargeType, LowerEnum]
    is_active: bool = True


class ChargeUpdate(RequestSchema):
    name: Optional[NonEmptyStr] = None
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    charge_type: Optional[Annotated[ChargeType, LowerEnum]] = None
    is_active: Optional[bool] = None
