import unittest
from unittest.mock import MagicMock
from datetime import date, datetime, timezone
from decimal import Decimal
from botocore.exceptions import ClientError

from common.repository.maintenance_repo import MaintenanceRepository
from common.models.tasks import MaintenanceTask, Priority, TaskStatus
from common.utils.custom_exceptions import NotFoundException


class TestMaintenanceRepository(unittest.TestCase):

    def setUp(self):
        self.table = MagicMock()
        self.repo = MaintenanceRepository(self.table)
        self.task = MaintenanceTask(
            task_id="m1",
            title="Fix AC",
            category_id="c1",
            scheduled_date=date(2026, 4, 2),
            priority=Priority.HIGH,
            estimated_hours=1.5,
            status=TaskStatus.COMPLETED,
            completed_at=datetime(2026, 4, 2, 15, 0, tzinfo=timezone.utc),
            created_at=datetime(2026, 4, 1, tzinfo=timezone.utc),
        )

    def test_put_task_item_shape(self):
        self.repo.put_task(self.task)

        _, kwargs = self.table.put_item.call_args
        item = kwargs["Item"]
        self.assertEqual(item["sk"], "TASK#m1")
        self.assertEqual(item["task_status"], "completed")
        self.assertEqual(item["priority"], "high")
        self.assertEqual(item["estimated_hours"], Decimal("1.5"))
        self.assertEqual(item["scheduled_date"], "2026-04-02")

    def test_task_round_trip(self):
        self.repo.put_task(self.task)
        _, kwargs = self.table.put_item.call_args
        self.table.get_item.return_value = {"Item": kwargs["Item"]}

        task = self.repo.get_task("m1")

        self.assertEqual(task.status, TaskStatus.COMPLETED)
        self.assertEqual(task.completed_at, self.task.completed_at)
        self.assertEqual(task.estimated_hours, 1.5)

    def test_list_tasks_applies_filters(self):
        self.table.query.return_value = {"Items": []}
        self.repo.list_tasks(status=TaskStatus.PENDING, start=date(2026, 4, 1), end=date(2026, 4, 30))
        _, kwargs = self.table.query.call_args
        self.assertIn("FilterExpression", kwargs)

    def test_list_tasks_without_filters(self):
        self.table.query.return_value = {"Items": []}
        self.assertEqual(self.repo.list_tasks(), [])
        _, kwargs = self.table.query.call_args
        self.assertNotIn("FilterExpression", kwargs)

    def test_update_missing_task(self):
        self.table.put_item.side_effect = ClientError(
            error_response={"Error": {"Code": "ConditionalCheckFailedException", "Message": "x"}},
            operation_name="PutItem",
        )
        with self.assertRaises(NotFoundException):
            self.repo.put_task(self.task, must_exist=True)


if __name__ == "__main__":
    unittest.main()
