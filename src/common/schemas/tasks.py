from typing import Annotated, Optional

from pydantic import Field, model_validator

from common.models.tasks import Priority, TaskStatus
from common.schemas.base import DateField, LowerEnum, NonEmptyStr, RequestSchema
from common.utils.constants import DEFAULT_CATEGORY_COLOR, DEFAULT_HOUSEKEEPING_MINUTES

PriorityField = Annotated[Priority, LowerEnum]
StatusField = Annotated[TaskStatus, LowerEnum]


class MaintenanceCategoryRequest(RequestSchema):
    name: NonEmptyStr
    description: Optional[str] = None
    color: str = Field(default=DEFAULT_CATEGORY_COLOR, pattern=r"^#[0-9A-Fa-f]{6}$")


class MaintenanceTaskRequest(RequestSchema):
    title: NonEmptyStr
    description: Optional[str] = None
    category_id: NonEmptyStr
    priority: PriorityField = Priority.MEDIUM
    assigned_to: Optional[str] = None
    room_id: Optional[str] = None
    scheduled_date: DateField
    due_date: Optional[DateField] = None
    estimated_hours: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = None


class MaintenanceTaskUpdate(RequestSchema):
    title: Optional[NonEmptyStr] = None
    description: Optional[str] = None
    category_id: Optional[NonEmptyStr] = None
    priority: Optional[PriorityField] = None
    assigned_to: Optional[str] = None
    room_id: Optional[str] = None
    scheduled_date: Optional[DateField] = None
    due_date: Optional[DateField] = None
    estimated_hours: Optional[float] = Field(default=None, ge=0)
    actual_hours: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = None
    status: Optional[StatusField] = None


class MaintenanceTaskQuery(RequestSchema):
    status: Optional[StatusField] = None
    assigned_to: Optional[str] = None
    category_id: Optional[str] = None
    start_date: Optional[DateField] = None
    end_date: Optional[DateField] = None

    @model_validator(mode="after")
    def validate_range(self):
        if (self.start_date is None) != (self.end_date is None):
            raise ValueError("startDate and endDate must be given together")
        if self.start_date and self.end_date < self.start_date:
            raise ValueError("endDate must not be before startDate")
        return self


class HousekeepingTaskRequest(RequestSchema):
    name: NonEmptyStr
    description: Optional[str] = None
    category: NonEmptyStr
    estimated_time: int = Field(default=DEFAULT_HOUSEKEEPING_MINUTES, ge=1)


class HousekeepingAssignmentRequest(RequestSchema):
    task_id: NonEmptyStr
    assigned_to: NonEmptyStr
    room_id: Optional[str] = None
    scheduled_date: DateField
    priority: PriorityField = Priority.MEDIUM
    notes: Optional[str] = None


class HousekeepingAssignmentUpdate(RequestSchema):
    status: Optional[StatusField] = None
    notes: Optional[str] = None


class HousekeepingAssignmentQuery(RequestSchema):
    date: Optional[DateField] = None
    assigned_to: Optional[str] = None
    status: Optional[StatusField] = None
