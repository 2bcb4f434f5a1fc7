from botocore.exceptions import ClientError
import logging
import time
from datetime import date, timedelta
from typing import Callable, Optional, List, Set
from boto3.dynamodb.conditions import Attr, Key
from common.models.bookings import Booking, BookingCharge, BookingStatus
from common.models.charges import ChargeType
from common.models.financial import FinancialRecord
from common.models.rooms import RoomStatus
from common.repository.dynamo_utils import (
    cancellation_codes,
    combine_filters,
    only_contended,
    parse_date,
    parse_datetime,
    query_all,
    to_dynamo,
    to_float,
    to_int,
)
from common.repository.financial_repo import financial_record_item
from common.repository.room_repo import room_key
from common.utils.custom_exceptions import (
    BookingConflict,
    InvalidTransition,
    NotFoundException,
    TransactionContended,
)
from common.utils.constants import TRANSACTION_ATTEMPTS
from common.utils.date_ranges import iter_nights

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from types_boto3_dynamodb.service_resource import Table
    from types_boto3_dynamodb import DynamoDBClient
else:
    Table = object
    DynamoDBClient = object


logger = logging.getLogger(__name__)

BOOKING_PK = "BOOKING"
FAILED_CONDITIONS = ("ConditionalCheckFailed", "TransactionConflict")
RETRY_DELAY_SECONDS = 0.05


def booking_key(booking_id: str) -> dict:
    return {"pk": BOOKING_PK, "sk": f"BOOKING#{booking_id}"}


def night_key(room_id: str, night: date) -> dict:
    return {"pk": f"ROOM#{room_id}", "sk": f"NIGHT#{night.isoformat()}"}


class BookingRepository:
    """Bookings plus the per-night lock items that guard them.

    Every stayed night of a non-cancelled booking owns one lock item keyed
    by room and date. Locks are only written inside the booking transaction
    with attribute_not_exists, so overlapping bookings on a room cannot both
    commit no matter how the requests interleave.
    """

    def __init__(self, table: Table, client: DynamoDBClient = None):
        self.table = table
        self.client = client if client else table.meta.client

    def add_booking(self, booking: Booking, record: FinancialRecord):
        nights = list(iter_nights(booking.check_in_date, booking.check_out_date))

        transact_items = [
            {
                "Put": {
                    "TableName": self.table.name,
                    "Item": self._to_item(booking),
                    "ConditionExpression": "attribute_not_exists(pk)",
                }
            }
        ]
        for night in nights:
            transact_items.append(
                {
                    "Put": {
                        "TableName": self.table.name,
                        "Item": {
                            **night_key(booking.room_id, night),
                            "booking_id": booking.booking_id,
                        },
                        "ConditionExpression": "attribute_not_exists(pk)",
                    }
                }
            )
        transact_items.append(
            {
                "Put": {
                    "TableName": self.table.name,
                    "Item": financial_record_item(record),
                    "ConditionExpression": "attribute_not_exists(sk)",
                }
            }
        )
        transact_items.append(
            {
                "Update": {
                    "TableName": self.table.name,
                    "Key": room_key(booking.room_id),
                    "UpdateExpression": "SET #room_status = :status",
                    "ExpressionAttributeNames": {"#room_status": "room_status"},
                    "ExpressionAttributeValues": {":status": RoomStatus.OCCUPIED.value},
                    "ConditionExpression": "attribute_exists(pk)",
                }
            }
        )

        def explain(codes: List[str]):
            night_codes = codes[1 : 1 + len(nights)]
            if any(code in FAILED_CONDITIONS for code in night_codes):
                raise BookingConflict("Room is not available for the selected dates")
            if codes and codes[-1] == "ConditionalCheckFailed":
                raise NotFoundException("room", booking.room_id, 404)

        self._commit(transact_items, explain, f"creating booking {booking.booking_id}")

    def get_booking_by_id(self, booking_id: str) -> Optional[Booking]:
        try:
            response = self.table.get_item(Key=booking_key(booking_id))
        except ClientError as err:
            logger.error(f"Error retrieving booking {booking_id}: {err}")
            raise

        item = response.get("Item")
        if not item:
            return None
        return self._to_domain(item)

    def list_bookings(self, room_id: Optional[str] = None,
                      status: Optional[BookingStatus] = None) -> List[Booking]:
        kwargs = {"KeyConditionExpression": Key("pk").eq(BOOKING_PK)}
        filters = combine_filters(
            Attr("room_id").eq(room_id) if room_id else None,
            Attr("booking_status").eq(status.value) if status else None,
        )
        if filters is not None:
            kwargs["FilterExpression"] = filters

        try:
            items = query_all(self.table, **kwargs)
        except ClientError as err:
            logger.error(f"Error listing bookings: {err}")
            raise
        return [self._to_domain(item) for item in items]

    def find_overlapping(
        self, check_in: date, check_out: date, room_id: Optional[str] = None
    ) -> List[Booking]:
        """Non-cancelled bookings whose [check_in, check_out) meets the range."""
        filters = (
            Attr("check_in").lt(check_out.isoformat())
            & Attr("check_out").gt(check_in.isoformat())
            & Attr("booking_status").ne(BookingStatus.CANCELLED.value)
        )
        if room_id:
            filters = filters & Attr("room_id").eq(room_id)

        try:
            items = query_all(
                self.table,
                KeyConditionExpression=Key("pk").eq(BOOKING_PK),
                FilterExpression=filters,
            )
        except ClientError as err:
            logger.error(
                f"Error retrieving bookings between {check_in} and {check_out}: {err}"
            )
            raise
        return [self._to_domain(item) for item in items]

    def get_booked_nights(self, room_id: str, check_in: date, check_out: date) -> Set[str]:
        """Booking ids holding any night of the room within [check_in, check_out)."""
        last_night = check_out - timedelta(days=1)
        try:
            items = query_all(
                self.table,
                KeyConditionExpression=(
                    Key("pk").eq(f"ROOM#{room_id}")
                    & Key("sk").between(
                        f"NIGHT#{check_in.isoformat()}",
                        f"NIGHT#{last_night.isoformat()}",
                    )
                ),
            )
        except ClientError as err:
            logger.error(f"Error retrieving booked nights for room {room_id}: {err}")
            raise
        return {item["booking_id"] for item in items}

    def update_booking_status(
        self, booking: Booking, status: BookingStatus, room_status: RoomStatus
    ):
        transact_items = [
            {
                "Update": {
                    "TableName": self.table.name,
                    "Key": booking_key(booking.booking_id),
                    "UpdateExpression": "SET #booking_status = :new_value",
                    "ExpressionAttributeNames": {"#booking_status": "booking_status"},
                    "ExpressionAttributeValues": {
                        ":new_value": status.value,
                        ":current": BookingStatus.CONFIRMED.value,
                    },
                    "ConditionExpression": "#booking_status = :current",
                }
            }
        ]
        if status == BookingStatus.CANCELLED:
            for night in iter_nights(booking.check_in_date, booking.check_out_date):
                transact_items.append(
                    {
                        "Delete": {
                            "TableName": self.table.name,
                            "Key": night_key(booking.room_id, night),
                            "ConditionExpression": "booking_id = :booking_id",
                            "ExpressionAttributeValues": {
                                ":booking_id": booking.booking_id
                            },
                        }
                    }
                )
        transact_items.append(
            {
                "Update": {
                    "TableName": self.table.name,
                    "Key": room_key(booking.room_id),
                    "UpdateExpression": "SET #room_status = :status",
                    "ExpressionAttributeNames": {"#room_status": "room_status"},
                    "ExpressionAttributeValues": {":status": room_status.value},
                    "ConditionExpression": "attribute_exists(pk)",
                }
            }
        )

        def explain(codes: List[str]):
            if codes and codes[0] in FAILED_CONDITIONS:
                raise InvalidTransition(
                    f"booking {booking.booking_id} is no longer {BookingStatus.CONFIRMED.value}"
                )

        self._commit(transact_items, explain, f"updating booking {booking.booking_id} status")

    def _commit(self, transact_items: list, explain: Callable[[List[str]], None], action: str):
        """Write one transaction, retrying while it only lost a race on a shared item.

        `explain` turns cancellation reasons into domain errors. A booking and a
        status change on the same room both update the room item, so one of
        two unrelated requests can be cancelled with TransactionConflict alone.
        """
        for attempt in range(1, TRANSACTION_ATTEMPTS + 1):
            try:
                self.client.transact_write_items(TransactItems=transact_items)
                return
            except ClientError as err:
                codes = cancellation_codes(err)
                explain(codes)
                if not only_contended(codes):
                    logger.error(f"Error {action}: {err}")
                    raise
                logger.warning(f"Contended transaction {action}, attempt {attempt}: {codes}")
            if attempt < TRANSACTION_ATTEMPTS:
                time.sleep(RETRY_DELAY_SECONDS * attempt)
        raise TransactionContended("The room is being updated by another request, please retry")

    @staticmethod
    def _to_item(booking: Booking) -> dict:
        return to_dynamo(
            {
                **booking_key(booking.booking_id),
                "guest_name": booking.guest_name,
                "guest_email": booking.guest_email,
                "guest_phone": booking.guest_phone,
                "room_id": booking.room_id,
                "check_in": booking.check_in_date.isoformat(),
                "check_out": booking.check_out_date.isoformat(),
                "adults": booking.adults,
                "children": booking.children,
                "total_price": booking.total_price,
                "booking_status": booking.status.value,
                "special_requests": booking.special_requests,
                "charges": [
                    {
                        "charge_id": line.charge_id,
                        "name": line.name,
                        "charge_type": line.charge_type.value,
                        "unit_price": line.unit_price,
                        "quantity": line.quantity,
                        "amount": line.amount,
                    }
                    for line in booking.charges
                ],
                "created_at": booking.created_at.isoformat(),
            }
        )

    @staticmethod
    def _to_domain(item: dict) -> Booking:
        return Booking(
            booking_id=item["sk"].split("#", 1)[1],
            guest_name=item["guest_name"],
            guest_email=item["guest_email"],
            guest_phone=item["guest_phone"],
            room_id=item["room_id"],
            check_in_date=parse_date(item["check_in"]),
            check_out_date=parse_date(item["check_out"]),
            adults=to_int(item["adults"]),
            children=to_int(item.get("children", 0)),
            total_price=to_float(item["total_price"]),
            status=BookingStatus(item["booking_status"]),
            special_requests=item.get("special_requests"),
            charges=[
                BookingCharge(
                    charge_id=line["charge_id"],
                    name=line["name"],
                    charge_type=ChargeType(line["charge_type"]),
                    unit_price=to_float(line["unit_price"]),
                    quantity=to_int(line["quantity"]),
                    amount=to_float(line["amount"]),
                )
                for line in item.get("charges") or []
            ],
            created_at=parse_datetime(item.get("created_at")),
        )
