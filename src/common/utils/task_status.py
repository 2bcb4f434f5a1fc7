from datetime import datetime
from typing import Iterable, Optional

from common.models.tasks import TaskStatus
from common.utils.custom_exceptions import InvalidRequest, InvalidTransition
from common.utils.datetime_normaliser import utc_now

TERMINAL_STATUSES = (TaskStatus.CANCELLED, TaskStatus.SKIPPED)


def parse_status(value: str, allowed: Iterable[TaskStatus]) -> TaskStatus:
    allowed = tuple(allowed)
    try:
        status = TaskStatus(value.lower())
    except (ValueError, AttributeError):
        status = None
    if status not in allowed:
        raise InvalidRequest(
            f"Invalid status. Allowed: {', '.join(s.value for s in allowed)}"
        )
    return status


def next_completed_at(
    current: TaskStatus,
    new: TaskStatus,
    completed_at: Optional[datetime],
    now: Optional[datetime] = None,
) -> Optional[datetime]:
    """Validate a status change and return the completion timestamp to store.

    Entering completed stamps the time, staying completed keeps the original
    stamp and any other status clears it. Cancelled and skipped are final.
    """
    if current in TERMINAL_STATUSES and new != current:
        raise InvalidTransition(f"task is {current.value} and cannot move to {new.value}")
    if new != TaskStatus.COMPLETED:
        return None
    if current == TaskStatus.COMPLETED and completed_at is not None:
        return completed_at
    return now or utc_now()
