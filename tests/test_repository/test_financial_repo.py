import unittest
from unittest.mock import MagicMock
from datetime import date
from decimal import Decimal

from common.repository.financial_repo import FinancialRepository, financial_record_item
from common.models.financial import FinancialRecord, RecordType


class TestFinancialRepository(unittest.TestCase):

    def setUp(self):
        self.table = MagicMock()
        self.repo = FinancialRepository(self.table)
        self.record = FinancialRecord(
            record_id="f1",
            type=RecordType.EXPENSE,
            category="utilities",
            amount=500.25,
            date=date(2026, 3, 15),
        )

    def test_record_item_key_starts_with_date(self):
        item = financial_record_item(self.record)
        self.assertEqual(item["sk"], "RECORD#2026-03-15#f1")
        self.assertEqual(item["amount"], Decimal("500.25"))
        self.assertEqual(item["record_type"], "expense")

    def test_add_record_is_append_only(self):
        self.repo.add_record(self.record)
        _, kwargs = self.table.put_item.call_args
        self.assertEqual(kwargs["ConditionExpression"], "attribute_not_exists(sk)")

    def test_list_records_newest_first(self):
        self.table.query.return_value = {"Items": [financial_record_item(self.record)]}

        records = self.repo.list_records(date(2026, 3, 1), date(2026, 3, 31))

        _, kwargs = self.table.query.call_args
        self.assertFalse(kwargs["ScanIndexForward"])
        self.assertEqual(records[0].record_id, "f1")
        self.assertEqual(records[0].date, date(2026, 3, 15))
        self.assertEqual(records[0].amount, 500.25)


if __name__ == "__main__":
    unittest.main()
