from botocore.exceptions import ClientError
import logging
from typing import List, Optional
from boto3.dynamodb.conditions import Key
from common.models.charges import AdditionalCharge, ChargeType
from common.repository.dynamo_utils import error_code, query_all, to_dynamo, to_float
from common.utils.custom_exceptions import NotFoundException

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from types_boto3_dynamodb.service_resource import Table
else:
    Table = object


logger = logging.getLogger(__name__)

CHARGE_PK = "ADDITIONAL_CHARGE"


def charge_key(charge_id: str) -> dict:
    return {"pk": CHARGE_PK, "sk": f"CHARGE#{charge_id}"}


class ChargeRepository:
    def __init__(self, table: Table):
        self.table = table

    def put_charge(self, charge: AdditionalCharge, must_exist: bool = False):
        item = {
            **charge_key(charge.charge_id),
            "name": charge.name,
            "description": charge.description,
            "price": charge.price,
            "charge_type": charge.charge_type.value,
            "is_active": charge.is_active,
        }
        condition = "attribute_exists(pk)" if must_exist else "attribute_not_exists(pk)"
        try:
            self.table.put_item(Item=to_dynamo(item), ConditionExpression=condition)
        except ClientError as err:
            if must_exist and error_code(err) == "ConditionalCheckFailedException":
                raise NotFoundException("additional charge", charge.charge_id, 404)
            logger.error(f"Error saving additional charge {charge.charge_id}: {err}")
            raise

    def get_charge(self, charge_id: str) -> Optional[AdditionalCharge]:
        try:
            response = self.table.get_item(Key=charge_key(charge_id))
        except ClientError as err:
            logger.error(f"Error retrieving additional charge {charge_id}: {err}")
            raise

        item = response.get("Item")
        if not item:
            return None
        return self._to_charge(item)

    def list_charges(self) -> List[AdditionalCharge]:
        try:
            items = query_all(self.table, KeyConditionExpression=Key("pk").eq(CHARGE_PK))
        except ClientError as err:
            logger.error(f"Error listing additional charges: {err}")
            raise
        return [self._to_charge(item) for item in items]

    def delete_charge(self, charge_id: str):
        try:
            self.table.delete_item(
                Key=charge_key(charge_id),
                ConditionExpression="attribute_exists(pk)",
            )
        except ClientError as err:
            if error_code(err) == "ConditionalCheckFailedException":
                raise NotFoundException("additional charge", charge_id, 404)
            logger.error(f"Error deleting additional charge {charge_id}: {err}")
            raise

    @staticmethod
    def _to_charge(item: dict) -> AdditionalCharge:
        return AdditionalCharge(
            charge_id=item["sk"].split("#", 1)[1],
            name=item["name"],
            description=item.get("description"),
            price=to_float(item["price"]),
            charge_type=ChargeType(item["charge_type"]),
            is_active=bool(item.get("is_active", True)),
        )
