"""Project allocation service: allocation writes and the transitions they trigger."""

from collections import defaultdict

import structlog
from sqlalchemy.orm import Session, sessionmaker

from agents.delivery.models import NotificationMessage
from agents.delivery.orchestrator import NotificationOrchestrator
from backend.core.exceptions import NotFoundError
from backend.models import Project, ProjectAllocation
from backend.repositories import (
    EmployeeProfileRepository,
    ProjectAllocationRepository,
    ProjectRepository,
    UserRepository,
)
from backend.schemas.staffing import AllocationCreate
from backend.services import messages


logger = structlog.get_logger(__name__)


class ProjectAllocationService:
    """
    Service for allocating employees to projects.

    New allocations notify the allocated employee. Employees dropped from
    a project by update_allocations are marked available for extra work
    again.
    """

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        orchestrator: NotificationOrchestrator,
    ):
        self.session_factory = session_factory
        self.orchestrator = orchestrator

    def _get_project(self, session: Session, project_id: int) -> Project:
        project = ProjectRepository(session).get_by_id(project_id)
        if project is None:
            raise NotFoundError("Project", str(project_id))
        return project

    def _create(
        self,
        session: Session,
        project: Project,
        item: AllocationCreate,
        outbox: list[NotificationMessage],
    ) -> ProjectAllocation:
        allocation = ProjectAllocationRepository(session).add(
            ProjectAllocation(
                project_id=project.id,
                employee_id=item.employee_id,
                allocation_type=item.allocation_type,
                start_date=item.start_date,
                end_date=item.end_date,
            )
        )
        user = UserRepository(session).get_by_id(item.employee_id)
        if user is not None:
            outbox.append(messages.allocation_assigned(project, user))
        else:
            logger.warning("allocation_user_missing", employee_id=item.employee_id)
        return allocation

    def _flush_outbox(self, outbox: list[NotificationMessage]) -> None:
        for message in outbox:
            self.orchestrator.dispatch(message)

    def create_allocations(self, project_id: int, items: list[AllocationCreate]) -> list[ProjectAllocation]:
        """
        Create allocations on a project.

        Raises:
            NotFoundError: No live project with that id.
        """
        outbox: list[NotificationMessage] = []
        with self.session_factory() as session:
            project = self._get_project(session, project_id)
            created = [self._create(session, project, item, outbox) for item in items]
            session.commit()

        logger.info("allocations_created", project_id=project_id, count=len(created))
        self._flush_outbox(outbox)
        return created

    def update_allocations(self, project_id: int, items: list[AllocationCreate]) -> list[ProjectAllocation]:
        """
        Replace a project's allocation list.

        Every existing allocation of an employee absent from items is soft
        deleted; items for employees with no existing allocation are created.

        Raises:
            NotFoundError: No live project with that id.
        """
        outbox: list[NotificationMessage] = []
        with self.session_factory() as session:
            project = self._get_project(session, project_id)
            allocations = ProjectAllocationRepository(session)
            profiles = EmployeeProfileRepository(session)

            existing: dict[int, list[ProjectAllocation]] = defaultdict(list)
            for allocation in allocations.get_by_project_id(project_id):
                existing[allocation.employee_id].append(allocation)
            wanted = {item.employee_id for item in items}

            removed = []
            for employee_id, employee_allocations in existing.items():
                if employee_id in wanted:
                    continue
                for allocation in employee_allocations:
                    allocations.soft_delete(allocation)
                profile = profiles.get_by_user_id(employee_id)
                if profile is not None:
                    profile.availability_flag = True
                removed.append(employee_id)

            result = []
            created = 0
            for item in items:
                current = existing.get(item.employee_id)
                if not current:
                    result.append(self._create(session, project, item, outbox))
                    created += 1
                else:
                    result.extend(current)

            session.commit()

        logger.info(
            "allocations_updated",
            project_id=project_id,
            removed=removed,
            created=created,
        )
        self._flush_outbox(outbox)
        return result
