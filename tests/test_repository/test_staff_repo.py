import unittest
from unittest.mock import MagicMock
from botocore.exceptions import ClientError

from common.repository.staff_repo import StaffRepository
from common.models.staff import Staff, StaffRole
from common.utils.custom_exceptions import StaffAlreadyExists


class TestStaffRepository(unittest.TestCase):

    def setUp(self):
        self.table = MagicMock()
        self.client = MagicMock()

        self.table.meta.client = self.client

        self.repo = StaffRepository(self.table, self.client)

        self.staff = Staff(
            staff_id="s1",
            name="Maria Garcia",
            email="Maria@Hotel.com",
            role=StaffRole.STAFF,
            department="housekeeping",
            password="hashed-password",
        )

    def test_add_staff_success(self):
        self.repo.add_staff(self.staff)

        self.client.transact_write_items.assert_called_once()
        _, kwargs = self.client.transact_write_items.call_args

        items = kwargs["TransactItems"]

        email_put = items[0]["Put"]
        self.assertEqual(email_put["TableName"], self.table.name)
        self.assertEqual(email_put["Item"]["pk"], "STAFF_EMAIL")
        self.assertEqual(email_put["Item"]["sk"], "EMAIL#maria@hotel.com")
        self.assertEqual(email_put["Item"]["staff_id"], "s1")

        staff_put = items[1]["Put"]
        self.assertEqual(staff_put["Item"]["sk"], "STAFF#s1")
        self.assertEqual(staff_put["Item"]["role"], "STAFF")

    def test_add_staff_duplicate_email(self):
        self.client.transact_write_items.side_effect = ClientError(
            error_response={
                "Error": {"Code": "TransactionCanceledException", "Message": "dup"},
                "CancellationReasons": [{"Code": "ConditionalCheckFailed"}, {"Code": "None"}],
            },
            operation_name="TransactWriteItems",
        )
        with self.assertRaises(StaffAlreadyExists):
            self.repo.add_staff(self.staff)

    def test_get_by_mail_follows_email_lock(self):
        self.table.get_item.side_effect = [
            {"Item": {"pk": "STAFF_EMAIL", "sk": "EMAIL#maria@hotel.com", "staff_id": "s1"}},
            {
                "Item": {
                    "pk": "STAFF",
                    "sk": "STAFF#s1",
                    "name": "Maria Garcia",
                    "email": "maria@hotel.com",
                    "role": "MANAGER",
                    "hire_date": "2023-01-15",
                }
            },
        ]

        staff = self.repo.get_by_mail("MARIA@hotel.com")

        self.assertEqual(staff.staff_id, "s1")
        self.assertEqual(staff.role, StaffRole.MANAGER)
        self.assertEqual(str(staff.hire_date), "2023-01-15")
        first_call = self.table.get_item.call_args_list[0]
        self.assertEqual(first_call.kwargs["Key"]["sk"], "EMAIL#maria@hotel.com")

    def test_get_by_mail_unknown(self):
        self.table.get_item.return_value = {}
        self.assertIsNone(self.repo.get_by_mail("nobody@hotel.com"))


if __name__ == "__main__":
    unittest.main()
