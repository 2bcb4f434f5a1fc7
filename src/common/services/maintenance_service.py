import logging
from dataclasses import replace
from typing import List, Optional
from uuid import uuid4

from common.models.tasks import (
    MAINTENANCE_STATUSES,
    MaintenanceCategory,
    MaintenanceTask,
    TaskStatus,
)
from common.repository.maintenance_repo import MaintenanceRepository
from common.repository.room_repo import RoomRepository
from common.repository.staff_repo import StaffRepository
from common.schemas.tasks import (
    MaintenanceCategoryRequest,
    MaintenanceTaskQuery,
    MaintenanceTaskRequest,
    MaintenanceTaskUpdate,
)
from common.utils.custom_exceptions import NotFoundException
from common.utils.task_status import next_completed_at, parse_status

logger = logging.getLogger(__name__)


def task_order(task: MaintenanceTask):
    return (
        MAINTENANCE_STATUSES.index(task.status),
        -task.priority.rank,
        task.scheduled_date,
    )


class MaintenanceService:
    def __init__(
        self,
        maintenance_repo: MaintenanceRepository,
        room_repo: RoomRepository,
        staff_repo: StaffRepository,
    ):
        self.maintenance_repo = maintenance_repo
        self.room_repo = room_repo
        self.staff_repo = staff_repo

    def list_categories(self) -> List[MaintenanceCategory]:
        return sorted(self.maintenance_repo.list_categories(), key=lambda c: c.name.lower())

    def create_category(self, req: MaintenanceCategoryRequest) -> MaintenanceCategory:
        category = MaintenanceCategory(category_id=str(uuid4()), **req.model_dump())
        self.maintenance_repo.add_category(category)
        return category

    def list_tasks(self, query: MaintenanceTaskQuery) -> List[MaintenanceTask]:
        status = parse_status(query.status, MAINTENANCE_STATUSES) if query.status else None
        tasks = self.maintenance_repo.list_tasks(
            status=status,
            assigned_to=query.assigned_to,
            category_id=query.category_id,
            start=query.start_date,
            end=query.end_date,
        )
        return sorted(tasks, key=task_order)

    def get_task(self, task_id: str) -> MaintenanceTask:
        task = self.maintenance_repo.get_task(task_id)
        if task is None:
            raise NotFoundException("maintenance task", task_id, 404)
        return task

    def create_task(self, req: MaintenanceTaskRequest) -> MaintenanceTask:
        self._check_references(req.category_id, req.room_id, req.assigned_to)
        task = MaintenanceTask(task_id=str(uuid4()), **req.model_dump())
        self.maintenance_repo.put_task(task)
        return task

    def update_task(self, task_id: str, req: MaintenanceTaskUpdate) -> MaintenanceTask:
        task = self.get_task(task_id)
        changes = req.model_dump(exclude_unset=True)
        for required in ("title", "category_id", "scheduled_date", "priority"):
            if changes.get(required) is None:
                changes.pop(required, None)

        self._check_references(
            changes.get("category_id"), changes.get("room_id"), changes.get("assigned_to")
        )

        new_status: Optional[TaskStatus] = None
        if changes.get("status") is not None:
            new_status = parse_status(changes.pop("status"), MAINTENANCE_STATUSES)
        else:
            changes.pop("status", None)

        if new_status is not None:
            changes["completed_at"] = next_completed_at(
                task.status, new_status, task.completed_at
            )
            changes["status"] = new_status

        updated = replace(task, **changes)
        self.maintenance_repo.put_task(updated, must_exist=True)
        if new_status is not None and new_status != task.status:
            logger.info(
                f"Maintenance task {task_id} moved {task.status.value} -> {new_status.value}"
            )
        return updated

    def delete_task(self, task_id: str):
        self.maintenance_repo.delete_task(task_id)

    def _check_references(self, category_id=None, room_id=None, assigned_to=None):
        if category_id and self.maintenance_repo.get_category(category_id) is None:
            raise NotFoundException("maintenance category", category_id, 404)
        if room_id and self.room_repo.get_room_by_id(room_id) is None:
            raise NotFoundException("room", room_id, 404)
        if assigned_to and self.staff_repo.get_by_id(assigned_to) is None:
            raise NotFoundException("staff", assigned_to, 404)
