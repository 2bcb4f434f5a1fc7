from botocore.exceptions import ClientError
import logging
from typing import List, Optional
from boto3.dynamodb.conditions import Attr, Key
from common.models.staff import Staff, StaffRole
from common.repository.dynamo_utils import cancellation_codes, iso_date, parse_date, query_all
from common.utils.custom_exceptions import StaffAlreadyExists

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from types_boto3_dynamodb.service_resource import Table
    from types_boto3_dynamodb import DynamoDBClient
else:
    Table = object
    DynamoDBClient = object

logger = logging.getLogger(__name__)

STAFF_PK = "STAFF"
EMAIL_PK = "STAFF_EMAIL"


def staff_key(staff_id: str) -> dict:
    return {"pk": STAFF_PK, "sk": f"STAFF#{staff_id}"}


class StaffRepository:
    def __init__(self, table: Table, client: DynamoDBClient = None):
        self.table = table
        self.client = client if client else table.meta.client

    def add_staff(self, staff: Staff):
        email = staff.email.lower()
        try:
            self.client.transact_write_items(
                TransactItems=[
                    {
                        "Put": {
                            "TableName": self.table.name,
                            "Item": {
                                "pk": EMAIL_PK,
                                "sk": f"EMAIL#{email}",
                                "staff_id": staff.staff_id,
                            },
                            "ConditionExpression": "attribute_not_exists(pk)",
                        }
                    },
                    {
                        "Put": {
                            "TableName": self.table.name,
                            "Item": {
                                **staff_key(staff.staff_id),
                                "name": staff.name,
                                "email": email,
                                "phone": staff.phone,
                                "position": staff.position,
                                "department": staff.department,
                                "hire_date": iso_date(staff.hire_date),
                                "password": staff.password,
                                "role": staff.role.value,
                                "is_active": staff.is_active,
                            },
                            "ConditionExpression": "attribute_not_exists(pk)",
                        }
                    },
                ]
            )

        except ClientError as err:
            if "ConditionalCheckFailed" in cancellation_codes(err):
                raise StaffAlreadyExists("email is already in use")
            logger.error(
                "couldn't add staff %s. Error: %s",
                email,
                err.response["Error"]["Message"],
            )
            raise

    def get_by_mail(self, mail: str) -> Optional[Staff]:
        try:
            response = self.table.get_item(
                Key={"pk": EMAIL_PK, "sk": f"EMAIL#{mail.lower()}"}
            )
        except ClientError as err:
            logger.error(f"Error retrieving staff by mail {mail}: {err}")
            raise

        item = response.get("Item")
        if not item:
            return None
        return self.get_by_id(staff_id=item["staff_id"])

    def get_by_id(self, staff_id: str) -> Optional[Staff]:
        try:
            response = self.table.get_item(Key=staff_key(staff_id))
        except ClientError as err:
            logger.error(f"Error retrieving staff by id {staff_id}: {err}")
            raise

        item = response.get("Item")
        if not item:
            return None

        return self._to_domain(item=item)

    def list_staff(self, active_only: bool = True) -> List[Staff]:
        kwargs = {"KeyConditionExpression": Key("pk").eq(STAFF_PK)}
        if active_only:
            kwargs["FilterExpression"] = Attr("is_active").eq(True)
        try:
            items = query_all(self.table, **kwargs)
        except ClientError as err:
            logger.error(f"Error listing staff: {err}")
            raise
        return [self._to_domain(item) for item in items]

    @staticmethod
    def _to_domain(item: dict) -> Staff:
        return Staff(
            staff_id=item["sk"].split("#", 1)[1],
            name=item["name"],
            email=item["email"],
            phone=item.get("phone"),
            position=item.get("position"),
            department=item.get("department"),
            hire_date=parse_date(item.get("hire_date")),
            role=StaffRole(item["role"]),
            password=item.get("password"),
            is_active=bool(item.get("is_active", True)),
        )
