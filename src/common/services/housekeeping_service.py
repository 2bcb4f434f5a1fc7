import logging
from typing import List
from uuid import uuid4

from common.models.tasks import (
    HOUSEKEEPING_STATUSES,
    HousekeepingAssignment,
    HousekeepingTask,
)
from common.repository.housekeeping_repo import HousekeepingRepository
from common.repository.room_repo import RoomRepository
from common.repository.staff_repo import StaffRepository
from common.schemas.tasks import (
    HousekeepingAssignmentQuery,
    HousekeepingAssignmentRequest,
    HousekeepingAssignmentUpdate,
    HousekeepingTaskRequest,
)
from common.utils.custom_exceptions import NotFoundException
from common.utils.task_status import next_completed_at, parse_status

logger = logging.getLogger(__name__)


class HousekeepingService:
    def __init__(
        self,
        housekeeping_repo: HousekeepingRepository,
        room_repo: RoomRepository,
        staff_repo: StaffRepository,
    ):
        self.housekeeping_repo = housekeeping_repo
        self.room_repo = room_repo
        self.staff_repo = staff_repo

    def list_tasks(self) -> List[HousekeepingTask]:
        return sorted(
            self.housekeeping_repo.list_tasks(), key=lambda t: (t.category, t.name)
        )

    def create_task(self, req: HousekeepingTaskRequest) -> HousekeepingTask:
        task = HousekeepingTask(task_id=str(uuid4()), **req.model_dump())
        self.housekeeping_repo.add_task(task)
        return task

    def list_assignments(self, query: HousekeepingAssignmentQuery) -> List[HousekeepingAssignment]:
        status = parse_status(query.status, HOUSEKEEPING_STATUSES) if query.status else None
        assignments = self.housekeeping_repo.list_assignments(
            scheduled_date=query.date,
            assigned_to=query.assigned_to,
            status=status,
        )
        return sorted(
            assignments,
            key=lambda a: (
                HOUSEKEEPING_STATUSES.index(a.status),
                -a.priority.rank,
                a.scheduled_date,
            ),
        )

    def get_assignment(self, assignment_id: str) -> HousekeepingAssignment:
        assignment = self.housekeeping_repo.get_assignment(assignment_id)
        if assignment is None:
            raise NotFoundException("housekeeping assignment", assignment_id, 404)
        return assignment

    def create_assignment(self, req: HousekeepingAssignmentRequest) -> HousekeepingAssignment:
        if self.housekeeping_repo.get_task(req.task_id) is None:
            raise NotFoundException("housekeeping task", req.task_id, 404)
        if self.staff_repo.get_by_id(req.assigned_to) is None:
            raise NotFoundException("staff", req.assigned_to, 404)
        if req.room_id and self.room_repo.get_room_by_id(req.room_id) is None:
            raise NotFoundException("room", req.room_id, 404)

        assignment = HousekeepingAssignment(assignment_id=str(uuid4()), **req.model_dump())
        self.housekeeping_repo.put_assignment(assignment)
        return assignment

    def update_assignment(
        self, assignment_id: str, req: HousekeepingAssignmentUpdate
    ) -> HousekeepingAssignment:
        assignment = self.get_assignment(assignment_id)
        changes = req.model_dump(exclude_unset=True)

        if "notes" in changes:
            assignment.notes = changes["notes"]
        if changes.get("status") is not None:
            new_status = parse_status(changes["status"], HOUSEKEEPING_STATUSES)
            assignment.completed_at = next_completed_at(
                assignment.status, new_status, assignment.completed_at
            )
            if new_status != assignment.status:
                logger.info(
                    f"Housekeeping assignment {assignment_id} moved "
                    f"{assignment.status.value} -> {new_status.value}"
                )
            assignment.status = new_status

        self.housekeeping_repo.put_assignment(assignment, must_exist=True)
        return assignment

    def delete_assignment(self, assignment_id: str):
        self.housekeeping_repo.delete_assignment(assignment_id)
