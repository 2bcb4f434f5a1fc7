from botocore.exceptions import ClientError
import logging
from typing import Optional, List
from boto3.dynamodb.conditions import Key
from common.models.rooms import Room, RoomType, RoomStatus
from common.repository.dynamo_utils import (
    cancellation_codes,
    error_code,
    parse_datetime,
    query_all,
    to_dynamo,
    to_float,
    to_int,
)
from common.utils.custom_exceptions import NotFoundException, RoomAlreadyExists

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from types_boto3_dynamodb.service_resource import Table
    from types_boto3_dynamodb import DynamoDBClient
else:
    Table = object
    DynamoDBClient = object


logger = logging.getLogger(__name__)

ROOM_TYPE_PK = "ROOM_TYPE"
ROOM_PK = "ROOM"
ROOM_NUMBER_PK = "ROOM_NUMBER"


def room_key(room_id: str) -> dict:
    return {"pk": ROOM_PK, "sk": f"ROOM#{room_id}"}


def room_type_key(room_type_id: str) -> dict:
    return {"pk": ROOM_TYPE_PK, "sk": f"ROOM_TYPE#{room_type_id}"}


class RoomRepository:
    def __init__(self, table: Table, client: DynamoDBClient = None):
        self.table = table
        self.client = client if client else table.meta.client

    # room types

    def put_room_type(self, room_type: RoomType, must_exist: bool = False):
        item = {
            **room_type_key(room_type.room_type_id),
            "name": room_type.name,
            "description": room_type.description,
            "price": room_type.price,
            "capacity": room_type.capacity,
            "amenities": list(room_type.amenities),
            "created_at": room_type.created_at.isoformat(),
        }
        condition = "attribute_exists(pk)" if must_exist else "attribute_not_exists(pk)"
        try:
            self.table.put_item(Item=to_dynamo(item), ConditionExpression=condition)
        except ClientError as err:
            if must_exist and error_code(err) == "ConditionalCheckFailedException":
                raise NotFoundException("room type", room_type.room_type_id, 404)
            logger.error(f"Error saving room type {room_type.room_type_id}: {err}")
            raise

    def get_room_type(self, room_type_id: str) -> Optional[RoomType]:
        try:
            response = self.table.get_item(Key=room_type_key(room_type_id))
        except ClientError as err:
            logger.error(f"Error retrieving room type {room_type_id}: {err}")
            raise

        item = response.get("Item")
        if not item:
            return None
        return self._to_room_type(item)

    def list_room_types(self) -> List[RoomType]:
        try:
            items = query_all(
                self.table,
                KeyConditionExpression=Key("pk").eq(ROOM_TYPE_PK),
            )
        except ClientError as err:
            logger.error(f"Error listing room types: {err}")
            raise
        return [self._to_room_type(item) for item in items]

    def delete_room_type(self, room_type_id: str):
        try:
            self.table.delete_item(
                Key=room_type_key(room_type_id),
                ConditionExpression="attribute_exists(pk)",
            )
        except ClientError as err:
            if error_code(err) == "ConditionalCheckFailedException":
                raise NotFoundException("room type", room_type_id, 404)
            logger.error(f"Error deleting room type {room_type_id}: {err}")
            raise

    # rooms

    def add_room(self, room: Room):
        room_item = {
            **room_key(room.room_id),
            "room_number": room.room_number,
            "floor": room.floor,
            "room_type_id": room.room_type_id,
            "room_status": room.status.value,
            "created_at": room.created_at.isoformat(),
        }
        number_item = {
            "pk": ROOM_NUMBER_PK,
            "sk": f"NUMBER#{room.room_number}",
            "room_id": room.room_id,
        }
        try:
            self.client.transact_write_items(
                TransactItems=[
                    {
                        "Put": {
                            "TableName": self.table.name,
                            "Item": room_item,
                            "ConditionExpression": "attribute_not_exists(pk)",
                        }
                    },
                    {
                        "Put": {
                            "TableName": self.table.name,
                            "Item": number_item,
                            "ConditionExpression": "attribute_not_exists(pk)",
                        }
                    },
                ]
            )
        except ClientError as err:
            if "ConditionalCheckFailed" in cancellation_codes(err):
                raise RoomAlreadyExists(f"Room number {room.room_number} already exists")
            logger.error(f"Error creating room {room.room_number}: {err}")
            raise

    def get_room_by_id(self, room_id: str) -> Optional[Room]:
        try:
            response = self.table.get_item(Key=room_key(room_id))
        except ClientError as err:
            logger.error(f"Error retrieving room by id {room_id}: {err}")
            raise

        item = response.get("Item")
        if not item:
            return None
        return self._to_room(item)

    def list_rooms(self) -> List[Room]:
        try:
            items = query_all(
                self.table,
                KeyConditionExpression=Key("pk").eq(ROOM_PK),
            )
        except ClientError as err:
            logger.error(f"Error listing rooms: {err}")
            raise
        return [self._to_room(item) for item in items]

    def update_room_status(self, room_id: str, status: RoomStatus):
        try:
            self.table.update_item(
                Key=room_key(room_id),
                UpdateExpression="SET #attribute=:value",
                ExpressionAttributeNames={"#attribute": "room_status"},
                ExpressionAttributeValues={
                    ":value": status.value,
                },
                ConditionExpression="attribute_exists(pk)",
            )
        except ClientError as err:
            if error_code(err) == "ConditionalCheckFailedException":
                raise NotFoundException("room", room_id, 404)
            logger.error(f"Error updating room {room_id} status: {err}")
            raise

    @staticmethod
    def _to_room_type(item: dict) -> RoomType:
        return RoomType(
            room_type_id=item["sk"].split("#", 1)[1],
            name=item["name"],
            description=item.get("description"),
            price=to_float(item["price"]),
            capacity=to_int(item["capacity"]),
            amenities=list(item.get("amenities") or []),
            created_at=parse_datetime(item.get("created_at")),
        )

    @staticmethod
    def _to_room(item: dict) -> Room:
        return Room(
            room_id=item["sk"].split("#", 1)[1],
            room_number=item["room_number"],
            room_type_id=item["room_type_id"],
            floor=to_int(item.get("floor")),
            status=RoomStatus(item["room_status"]),
            created_at=parse_datetime(item.get("created_at")),
        )
