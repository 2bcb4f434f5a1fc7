from enum import Enum
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Optional


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    SKIPPED = "skipped"


MAINTENANCE_STATUSES = (
    TaskStatus.PENDING,
    TaskStatus.IN_PROGRESS,
    TaskStatus.COMPLETED,
    TaskStatus.CANCELLED,
)

HOUSEKEEPING_STATUSES = (
    TaskStatus.PENDING,
    TaskStatus.IN_PROGRESS,
    TaskStatus.COMPLETED,
    TaskStatus.SKIPPED,
)


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

    @property
    def rank(self) -> int:
        return list(Priority).index(self)


@dataclass
class MaintenanceCategory:
    category_id: str
    name: str
    description: Optional[str] = None
    color: str = "#3B82F6"
    is_active: bool = True


@dataclass
class MaintenanceTask:
    task_id: str
    title: str
    category_id: str
    scheduled_date: date
    description: Optional[str] = None
    priority: Priority = Priority.MEDIUM
    assigned_to: Optional[str] = None
    room_id: Optional[str] = None
    due_date: Optional[date] = None
    estimated_hours: Optional[float] = None
    actual_hours: Optional[float] = None
    notes: Optional[str] = None
    status: TaskStatus = TaskStatus.PENDING
    completed_at: Optional[datetime] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class HousekeepingTask:
    task_id: str
    name: str
    category: str
    description: Optional[str] = None
    estimated_time: int = 30
    is_active: bool = True


@dataclass
class HousekeepingAssignment:
    assignment_id: str
    task_id: str
    assigned_to: str
    scheduled_date: date
    room_id: Optional[str] = None
    priority: Priority = Priority.MEDIUM
    notes: Optional[str] = None
    status: TaskStatus = TaskStatus.PENDING
    completed_at: Optional[datetime] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
