import logging
from datetime import date
from typing import Dict, Iterable, List, Optional
from uuid import uuid4

from common.models.financial import (
    CategoryTotal,
    FinancialRecord,
    FinancialSummary,
    RecordType,
)
from common.repository.financial_repo import FinancialRepository
from common.schemas.financial import FinancialRecordRequest

logger = logging.getLogger(__name__)


def summarize(
    records: Iterable[FinancialRecord],
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> FinancialSummary:
    summary = FinancialSummary(start_date=start, end_date=end)
    by_category: Dict[str, CategoryTotal] = {}

    for record in records:
        totals = by_category.setdefault(record.category, CategoryTotal(record.category))
        if record.type == RecordType.INCOME:
            totals.income += record.amount
            summary.total_income += record.amount
        else:
            totals.expense += record.amount
            summary.total_expense += record.amount

    for totals in by_category.values():
        totals.net = totals.income - totals.expense
    summary.net = summary.total_income - summary.total_expense
    summary.categories = sorted(by_category.values(), key=lambda c: c.category)
    return summary


class FinancialService:
    def __init__(self, financial_repo: FinancialRepository):
        self.financial_repo = financial_repo

    def add_record(self, req: FinancialRecordRequest) -> FinancialRecord:
        record = FinancialRecord(record_id=str(uuid4()), **req.model_dump())
        self.financial_repo.add_record(record)
        logger.info(
            f"Recorded {record.type.value} of {record.amount} in {record.category}"
        )
        return record

    def list_records(
        self, start: Optional[date] = None, end: Optional[date] = None
    ) -> List[FinancialRecord]:
        return self.financial_repo.list_records(start, end)

    def get_report(self, start: Optional[date] = None, end: Optional[date] = None):
        records = self.list_records(start, end)
        return records, summarize(records, start, end)
