from botocore.exceptions import ClientError
import logging
from datetime import date
from typing import List, Optional
from boto3.dynamodb.conditions import Attr, Key
from common.models.tasks import HousekeepingAssignment, HousekeepingTask, Priority, TaskStatus
from common.repository.dynamo_utils import (
    combine_filters,
    error_code,
    parse_date,
    parse_datetime,
    query_all,
    to_int,
)
from common.utils.custom_exceptions import NotFoundException

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from types_boto3_dynamodb.service_resource import Table
else:
    Table = object


logger = logging.getLogger(__name__)

TASK_PK = "HOUSEKEEPING_TASK"
ASSIGNMENT_PK = "HOUSEKEEPING_ASSIGNMENT"


def task_key(task_id: str) -> dict:
    return {"pk": TASK_PK, "sk": f"TASK#{task_id}"}


def assignment_key(assignment_id: str) -> dict:
    return {"pk": ASSIGNMENT_PK, "sk": f"ASSIGNMENT#{assignment_id}"}


class HousekeepingRepository:
    def __init__(self, table: Table):
        self.table = table

    def add_task(self, task: HousekeepingTask):
        item = {
            **task_key(task.task_id),
            "name": task.name,
            "description": task.description,
            "category": task.category,
            "estimated_time": task.estimated_time,
            "is_active": task.is_active,
        }
        try:
            self.table.put_item(Item=item, ConditionExpression="attribute_not_exists(pk)")
        except ClientError as err:
            logger.error(f"Error creating housekeeping task {task.name}: {err}")
            raise

    def get_task(self, task_id: str) -> Optional[HousekeepingTask]:
        try:
            response = self.table.get_item(Key=task_key(task_id))
        except ClientError as err:
            logger.error(f"Error retrieving housekeeping task {task_id}: {err}")
            raise
        item = response.get("Item")
        if not item:
            return None
        return self._to_task(item)

    def list_tasks(self, active_only: bool = True) -> List[HousekeepingTask]:
        kwargs = {"KeyConditionExpression": Key("pk").eq(TASK_PK)}
        if active_only:
            kwargs["FilterExpression"] = Attr("is_active").eq(True)
        try:
            items = query_all(self.table, **kwargs)
        except ClientError as err:
            logger.error(f"Error listing housekeeping tasks: {err}")
            raise
        return [self._to_task(item) for item in items]

    def put_assignment(self, assignment: HousekeepingAssignment, must_exist: bool = False):
        item = {
            **assignment_key(assignment.assignment_id),
            "task_id": assignment.task_id,
            "assigned_to": assignment.assigned_to,
            "room_id": assignment.room_id,
            "scheduled_date": assignment.scheduled_date.isoformat(),
            "priority": assignment.priority.value,
            "notes": assignment.notes,
            "task_status": assignment.status.value,
            "completed_at": (
                assignment.completed_at.isoformat() if assignment.completed_at else None
            ),
            "created_at": assignment.created_at.isoformat(),
        }
        condition = "attribute_exists(pk)" if must_exist else "attribute_not_exists(pk)"
        try:
            self.table.put_item(Item=item, ConditionExpression=condition)
        except ClientError as err:
            if must_exist and error_code(err) == "ConditionalCheckFailedException":
                raise NotFoundException(
                    "housekeeping assignment", assignment.assignment_id, 404
                )
            logger.error(
                f"Error saving housekeeping assignment {assignment.assignment_id}: {err}"
            )
            raise

    def get_assignment(self, assignment_id: str) -> Optional[HousekeepingAssignment]:
        try:
            response = self.table.get_item(Key=assignment_key(assignment_id))
        except ClientError as err:
            logger.error(f"Error retrieving housekeeping assignment {assignment_id}: {err}")
            raise
        item = response.get("Item")
        if not item:
            return None
        return self._to_assignment(item)

    def list_assignments(
        self,
        scheduled_date: Optional[date] = None,
        assigned_to: Optional[str] = None,
        status: Optional[TaskStatus] = None,
    ) -> List[HousekeepingAssignment]:
        filters = combine_filters(
            Attr("scheduled_date").eq(scheduled_date.isoformat()) if scheduled_date else None,
            Attr("assigned_to").eq(assigned_to) if assigned_to else None,
            Attr("task_status").eq(status.value) if status else None,
        )
        kwargs = {"KeyConditionExpression": Key("pk").eq(ASSIGNMENT_PK)}
        if filters is not None:
            kwargs["FilterExpression"] = filters
        try:
            items = query_all(self.table, **kwargs)
        except ClientError as err:
            logger.error(f"Error listing housekeeping assignments: {err}")
            raise
        return [self._to_assignment(item) for item in items]

    def delete_assignment(self, assignment_id: str):
        try:
            self.table.delete_item(
                Key=assignment_key(assignment_id),
                ConditionExpression="attribute_exists(pk)",
            )
        except ClientError as err:
            if error_code(err) == "ConditionalCheckFailedException":
                raise NotFoundException("housekeeping assignment", assignment_id, 404)
            logger.error(f"Error deleting housekeeping assignment {assignment_id}: {err}")
            raise

    @staticmethod
    def _to_task(item: dict) -> HousekeepingTask:
        return HousekeepingTask(
            task_id=item["sk"].split("#", 1)[1],
            name=item["name"],
            description=item.get("description"),
            category=item["category"],
            estimated_time=to_int(item.get("estimated_time", 30)),
            is_active=bool(item.get("is_active", True)),
        )

    @staticmethod
    def _to_assignment(item: dict) -> HousekeepingAssignment:
        return HousekeepingAssignment(
            assignment_id=item["sk"].split("#", 1)[1],
            task_id=item["task_id"],
            assigned_to=item["assigned_to"],
            room_id=item.get("room_id"),
            scheduled_date=parse_date(item["scheduled_date"]),
            priority=Priority(item.get("priority", Priority.MEDIUM.value)),
            notes=item.get("notes"),
            status=TaskStatus(item["task_status"]),
            completed_at=parse_datetime(item.get("completed_at")),
            created_at=parse_datetime(item.get("created_at")),
        )
