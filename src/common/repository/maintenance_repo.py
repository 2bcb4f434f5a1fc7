from botocore.exceptions import ClientError
import logging
from datetime import date
from typing import List, Optional
from boto3.dynamodb.conditions import Attr, Key
from common.models.tasks import MaintenanceCategory, MaintenanceTask, Priority, TaskStatus
from common.repository.dynamo_utils import (
    combine_filters,
    error_code,
    iso_date,
    parse_date,
    parse_datetime,
    query_all,
    to_dynamo,
    to_float,
)
from common.utils.custom_exceptions import NotFoundException

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from types_boto3_dynamodb.service_resource import Table
else:
    Table = object


logger = logging.getLogger(__name__)

CATEGORY_PK = "MAINTENANCE_CATEGORY"
TASK_PK = "MAINTENANCE_TASK"


def task_key(task_id: str) -> dict:
    return {"pk": TASK_PK, "sk": f"TASK#{task_id}"}


def category_key(category_id: str) -> dict:
    return {"pk": CATEGORY_PK, "sk": f"CATEGORY#{category_id}"}


class MaintenanceRepository:
    def __init__(self, table: Table):
        self.table = table

    def add_category(self, category: MaintenanceCategory):
        item = {
            **category_key(category.category_id),
            "name": category.name,
            "description": category.description,
            "color": category.color,
            "is_active": category.is_active,
        }
        try:
            self.table.put_item(Item=item, ConditionExpression="attribute_not_exists(pk)")
        except ClientError as err:
            logger.error(f"Error creating maintenance category {category.name}: {err}")
            raise

    def get_category(self, category_id: str) -> Optional[MaintenanceCategory]:
        try:
            response = self.table.get_item(Key=category_key(category_id))
        except ClientError as err:
            logger.error(f"Error retrieving maintenance category {category_id}: {err}")
            raise
        item = response.get("Item")
        if not item:
            return None
        return self._to_category(item)

    def list_categories(self, active_only: bool = True) -> List[MaintenanceCategory]:
        kwargs = {"KeyConditionExpression": Key("pk").eq(CATEGORY_PK)}
        if active_only:
            kwargs["FilterExpression"] = Attr("is_active").eq(True)
        try:
            items = query_all(self.table, **kwargs)
        except ClientError as err:
            logger.error(f"Error listing maintenance categories: {err}")
            raise
        return [self._to_category(item) for item in items]

    def put_task(self, task: MaintenanceTask, must_exist: bool = False):
        item = {
            **task_key(task.task_id),
            "title": task.title,
            "description": task.description,
            "category_id": task.category_id,
            "priority": task.priority.value,
            "assigned_to": task.assigned_to,
            "room_id": task.room_id,
            "scheduled_date": iso_date(task.scheduled_date),
            "due_date": iso_date(task.due_date),
            "estimated_hours": task.estimated_hours,
            "actual_hours": task.actual_hours,
            "notes": task.notes,
            "task_status": task.status.value,
            "completed_at": task.completed_at.isoformat() if task.completed_at else None,
            "created_at": task.created_at.isoformat(),
        }
        condition = "attribute_exists(pk)" if must_exist else "attribute_not_exists(pk)"
        try:
            self.table.put_item(Item=to_dynamo(item), ConditionExpression=condition)
        except ClientError as err:
            if must_exist and error_code(err) == "ConditionalCheckFailedException":
                raise NotFoundException("maintenance task", task.task_id, 404)
            logger.error(f"Error saving maintenance task {task.task_id}: {err}")
            raise

    def get_task(self, task_id: str) -> Optional[MaintenanceTask]:
        try:
            response = self.table.get_item(Key=task_key(task_id))
        except ClientError as err:
            logger.error(f"Error retrieving maintenance task {task_id}: {err}")
            raise
        item = response.get("Item")
        if not item:
            return None
        return self._to_task(item)

    def list_tasks(
        self,
        status: Optional[TaskStatus] = None,
        assigned_to: Optional[str] = None,
        category_id: Optional[str] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> List[MaintenanceTask]:
        filters = combine_filters(
            Attr("task_status").eq(status.value) if status else None,
            Attr("assigned_to").eq(assigned_to) if assigned_to else None,
            Attr("category_id").eq(category_id) if category_id else None,
            Attr("scheduled_date").between(start.isoformat(), end.isoformat())
            if start and end
            else None,
        )
        kwargs = {"KeyConditionExpression": Key("pk").eq(TASK_PK)}
        if filters is not None:
            kwargs["FilterExpression"] = filters
        try:
            items = query_all(self.table, **kwargs)
        except ClientError as err:
            logger.error(f"Error listing maintenance tasks: {err}")
            raise
        return [self._to_task(item) for item in items]

    def delete_task(self, task_id: str):
        try:
            self.table.delete_item(
                Key=task_key(task_id),
                ConditionExpression="attribute_exists(pk)",
            )
        except ClientError as err:
            if error_code(err) == "ConditionalCheckFailedException":
                raise NotFoundException("maintenance task", task_id, 404)
            logger.error(f"Error deleting maintenance task {task_id}: {err}")
            raise

    @staticmethod
    def _to_category(item: dict) -> MaintenanceCategory:
        return MaintenanceCategory(
            category_id=item["sk"].split("#", 1)[1],
            name=item["name"],
            description=item.get("description"),
            color=item.get("color"),
            is_active=bool(item.get("is_active", True)),
        )

    @staticmethod
    def _to_task(item: dict) -> MaintenanceTask:
        return MaintenanceTask(
            task_id=item["sk"].split("#", 1)[1],
            title=item["title"],
            description=item.get("description"),
            category_id=item["category_id"],
            priority=Priority(item.get("priority", Priority.MEDIUM.value)),
            assigned_to=item.get("assigned_to"),
            room_id=item.get("room_id"),
            scheduled_date=parse_date(item["scheduled_date"]),
            due_date=parse_date(item.get("due_date")),
            estimated_hours=to_float(item.get("estimated_hours")),
            actual_hours=to_float(item.get("actual_hours")),
            notes=item.get("notes"),
            status=TaskStatus(item["task_status"]),
            completed_at=parse_datetime(item.get("completed_at")),
            created_at=parse_datetime(item.get("created_at")),
        )
