"""Project service: project writes, summarization, embedding refresh and project-ending alerts."""

from datetime import date, datetime, timezone

import structlog
from sqlalchemy.orm import Session, sessionmaker

from agents.delivery.orchestrator import NotificationOrchestrator
from agents.matching.embedding_gateway import EmbeddingGateway
from backend.core.exceptions import NotFoundError, TalentFitError
from backend.models import Project
from backend.repositories import ProjectAllocationRepository, ProjectRepository, UserRepository
from backend.schemas.staffing import ProjectCreate, ProjectUpdate
from backend.services import messages
from backend.services.embedding_lifecycle import (
    EmbeddingLifecycle,
    ProjectEmbeddingInput,
    project_describing_fields_changed,
)


logger = structlog.get_logger(__name__)


class ProjectService:
    """
    Service for project writes.

    A project's summary is regenerated whenever its description or seats
    change, and the embedding follows the summary. Both steps are
    best-effort. Moving a project's end date notifies everyone currently
    allocated to it.
    """

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        gateway: EmbeddingGateway,
        lifecycle: EmbeddingLifecycle,
        orchestrator: NotificationOrchestrator,
    ):
        self.session_factory = session_factory
        self.gateway = gateway
        self.lifecycle = lifecycle
        self.orchestrator = orchestrator

    def _summarize(self, project: Project) -> None:
        if not project.description:
            return
        try:
            project.summary = self.gateway.summarize(project.description, dict(project.seats_by_type or {}))
        except TalentFitError as e:
            logger.warning("project_summary_failed", project_id=project.id, error=str(e))

    def _embed(self, project: Project) -> None:
        try:
            self.lifecycle.refresh_project_embedding(project, force=True)
        except TalentFitError as e:
            logger.warning("project_embedding_failed", project_id=project.id, error=str(e))

    def create_project(self, data: ProjectCreate) -> Project:
        project = Project(**data.model_dump(), required_seats=sum(data.seats_by_type.values()))

        self._summarize(project)
        self._embed(project)

        with self.session_factory() as session:
            ProjectRepository(session).add(project)
            session.commit()

        logger.info("project_created", project_id=project.id, embedded=project.embedding is not None)
        return project

    def update_project(self, project_id: int, data: ProjectUpdate) -> Project:
        """
        Apply a partial update.

        Raises:
            NotFoundError: No live project with that id.
        """
        with self.session_factory() as session:
            project = ProjectRepository(session).get_by_id(project_id)
            if project is None:
                raise NotFoundError("Project", str(project_id))

            before = ProjectEmbeddingInput.from_project(project)
            previous_end_date = project.end_date

            updates = data.model_dump(exclude_unset=True)
            for field, value in updates.items():
                setattr(project, field, value)
            if "seats_by_type" in updates and project.seats_by_type is not None:
                project.required_seats = sum(project.seats_by_type.values())
            project.updated_at = datetime.now(timezone.utc)

            changed = project_describing_fields_changed(before, ProjectEmbeddingInput.from_project(project))
            if changed:
                self._summarize(project)
                self._embed(project)
            elif project.embedding is None:
                self._embed(project)

            session.commit()

            ending = None
            if project.end_date is not None and project.end_date != previous_end_date:
                ending = self._project_ending_message(session, project)

        logger.info("project_updated", project_id=project_id, describing_fields_changed=changed)

        if ending is not None:
            self.orchestrator.dispatch(ending)

        return project

    def _project_ending_message(self, session: Session, project: Project):
        today = date.today()
        employee_ids = sorted(
            {
                a.employee_id
                for a in ProjectAllocationRepository(session).get_by_project_id(project.id)
                if a.end_date is None or a.end_date >= today
            }
        )
        if not employee_ids:
            logger.info("project_ending_no_allocations", project_id=project.id)
            return None

        users = UserRepository(session).get_by_ids(employee_ids)
        return messages.project_ending(project, users)

    def refresh_missing_embeddings(self, limit: int = 100) -> int:
        """Embed projects that have no embedding yet, in one provider call."""
        with self.session_factory() as session:
            projects = ProjectRepository(session).list_missing_embeddings(limit)
            updated = self.lifecycle.refresh_projects_batch(projects)
            session.commit()
        return updated
