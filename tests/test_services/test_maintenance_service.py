import unittest
from unittest.mock import MagicMock
from datetime import date, datetime, timezone

from common.services.maintenance_service import MaintenanceService
from common.models.tasks import MaintenanceCategory, MaintenanceTask, Priority, TaskStatus
from common.schemas.tasks import (
    MaintenanceCategoryRequest,
    MaintenanceTaskQuery,
    MaintenanceTaskRequest,
    MaintenanceTaskUpdate,
)
from common.utils.custom_exceptions import InvalidTransition, NotFoundException


class TestMaintenanceService(unittest.TestCase):

    def setUp(self):
        self.repo = MagicMock()
        self.room_repo = MagicMock()
        self.staff_repo = MagicMock()
        self.service = MaintenanceService(self.repo, self.room_repo, self.staff_repo)

        self.repo.get_category.return_value = MaintenanceCategory("c1", "Plumbing")

    def _task(self, status=TaskStatus.PENDING, completed_at=None, **kwargs):
        return MaintenanceTask(
            task_id=kwargs.pop("task_id", "m1"),
            title="Leaking tap",
            category_id="c1",
            scheduled_date=kwargs.pop("scheduled_date", date(2026, 4, 2)),
            status=status,
            completed_at=completed_at,
            **kwargs,
        )

    def test_create_category_defaults_color(self):
        category = self.service.create_category(MaintenanceCategoryRequest(name="Electrical"))
        self.assertEqual(category.color, "#3B82F6")
        self.repo.add_category.assert_called_once_with(category)

    def test_create_task_checks_category(self):
        self.repo.get_category.return_value = None
        with self.assertRaises(NotFoundException):
            self.service.create_task(
                MaintenanceTaskRequest(title="Fix", category_id="nope", scheduled_date="2026-04-02")
            )
        self.repo.put_task.assert_not_called()

    def test_create_task_checks_assignee(self):
        self.staff_repo.get_by_id.return_value = None
        with self.assertRaises(NotFoundException):
            self.service.create_task(
                MaintenanceTaskRequest(
                    title="Fix", category_id="c1", scheduled_date="2026-04-02", assigned_to="s9"
                )
            )

    def test_create_task_starts_pending(self):
        task = self.service.create_task(
            MaintenanceTaskRequest(title="Fix", category_id="c1", scheduled_date="2026-04-02")
        )
        self.assertEqual(task.status, TaskStatus.PENDING)
        self.assertEqual(task.priority, Priority.MEDIUM)
        self.assertIsNone(task.completed_at)

    def test_completing_sets_completed_at(self):
        self.repo.get_task.return_value = self._task(TaskStatus.IN_PROGRESS)
        task = self.service.update_task("m1", MaintenanceTaskUpdate(status="completed"))
        self.assertEqual(task.status, TaskStatus.COMPLETED)
        self.assertIsNotNone(task.completed_at)
        self.repo.put_task.assert_called_once_with(task, must_exist=True)

    def test_reopening_clears_completed_at(self):
        done = datetime(2026, 4, 2, 10, 0, tzinfo=timezone.utc)
        self.repo.get_task.return_value = self._task(TaskStatus.COMPLETED, done)
        task = self.service.update_task("m1", MaintenanceTaskUpdate(status="in_progress"))
        self.assertIsNone(task.completed_at)

    def test_resending_completed_keeps_timestamp(self):
        done = datetime(2026, 4, 2, 10, 0, tzinfo=timezone.utc)
        self.repo.get_task.return_value = self._task(TaskStatus.COMPLETED, done)
        task = self.service.update_task(
            "m1", MaintenanceTaskUpdate(status="completed", actual_hours=2)
        )
        self.assertEqual(task.completed_at, done)
        self.assertEqual(task.actual_hours, 2)

    def test_cancelled_task_is_final(self):
        self.repo.get_task.return_value = self._task(TaskStatus.CANCELLED)
        with self.assertRaises(InvalidTransition):
            self.service.update_task("m1", MaintenanceTaskUpdate(status="pending"))
        self.repo.put_task.assert_not_called()

    def test_update_without_status_keeps_status(self):
        self.repo.get_task.return_value = self._task(TaskStatus.IN_PROGRESS)
        task = self.service.update_task("m1", MaintenanceTaskUpdate(notes="parts ordered"))
        self.assertEqual(task.status, TaskStatus.IN_PROGRESS)
        self.assertEqual(task.notes, "parts ordered")

    def test_update_missing_task(self):
        self.repo.get_task.return_value = None
        with self.assertRaises(NotFoundException):
            self.service.update_task("m1", MaintenanceTaskUpdate(notes="x"))

    def test_list_tasks_orders_by_status_then_priority(self):
        self.repo.list_tasks.return_value = [
            self._task(TaskStatus.COMPLETED, task_id="a", priority=Priority.URGENT),
            self._task(TaskStatus.PENDING, task_id="b", priority=Priority.LOW),
            self._task(TaskStatus.PENDING, task_id="c", priority=Priority.HIGH),
        ]
        tasks = self.service.list_tasks(MaintenanceTaskQuery())
        self.assertEqual([t.task_id for t in tasks], ["c", "b", "a"])

    def test_list_tasks_passes_filters(self):
        self.repo.list_tasks.return_value = []
        self.service.list_tasks(
            MaintenanceTaskQuery.model_validate(
                {"status": "PENDING", "startDate": "2026-04-01", "endDate": "2026-04-30"}
            )
        )
        self.repo.list_tasks.assert_called_once_with(
            status=TaskStatus.PENDING,
            assigned_to=None,
            category_id=None,
            start=date(2026, 4, 1),
            end=date(2026, 4, 30),
        )


if __name__ == "__main__":
    unittest.main()
