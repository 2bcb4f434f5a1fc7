from enum import Enum
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import List, Optional


class RecordType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


@dataclass
class FinancialRecord:
    record_id: str
    type: RecordType
    category: str
    amount: float
    date: date
    description: Optional[str] = None
    reference_id: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class CategoryTotal:
    category: str
    income: float = 0.0
    expense: float = 0.0
    net: float = 0.0


@dataclass
class FinancialSummary:
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    total_income: float = 0.0
    total_expense: float = 0.0
    net: float = 0.0
    categories: List[CategoryTotal] = field(default_factory=list)
