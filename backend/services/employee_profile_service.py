"""Employee profile service: profile writes, embedding refresh and rolloff alerts."""

from datetime import date, datetime, timezone
from typing import Optional

import structlog
from sqlalchemy.orm import Session, sessionmaker

from agents.delivery.orchestrator import NotificationOrchestrator
from backend.core.exceptions import NotFoundError, TalentFitError
from backend.models import EmployeeProfile
from backend.repositories import EmployeeProfileRepository
from backend.schemas.staffing import EmployeeProfileCreate, EmployeeProfileUpdate
from backend.services import messages
from backend.services.embedding_lifecycle import (
    CandidateEmbeddingInput,
    EmbeddingLifecycle,
    candidate_describing_fields_changed,
)


logger = structlog.get_logger(__name__)


class EmployeeProfileService:
    """
    Service for employee profile writes.

    Embedding failures are logged and never fail the write. Setting an
    end date on a profile that had none dispatches a rolloff alert.
    """

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        lifecycle: EmbeddingLifecycle,
        orchestrator: NotificationOrchestrator,
        force_refresh: bool = False,
    ):
        """
        Initialize the profile service.

        Args:
            session_factory: Session factory.
            lifecycle: Embedding lifecycle helpers.
            orchestrator: Notification fan-out.
            force_refresh: Re-embed on every update, changed or not.
        """
        self.session_factory = session_factory
        self.lifecycle = lifecycle
        self.orchestrator = orchestrator
        self.force_refresh = force_refresh

    def create_profile(self, data: EmployeeProfileCreate) -> EmployeeProfile:
        profile = EmployeeProfile(**data.model_dump())

        try:
            self.lifecycle.refresh_candidate_embedding(profile, force=True)
        except TalentFitError as e:
            logger.warning("profile_embedding_failed", user_id=data.user_id, error=str(e))

        with self.session_factory() as session:
            EmployeeProfileRepository(session).add(profile)
            session.commit()

        logger.info("profile_created", user_id=data.user_id, embedded=profile.embedding is not None)
        return profile

    def update_profile(self, user_id: int, data: EmployeeProfileUpdate) -> EmployeeProfile:
        """
        Apply a partial update.

        Raises:
            NotFoundError: No live profile for user_id.
        """
        with self.session_factory() as session:
            profile = EmployeeProfileRepository(session).get_by_user_id(user_id)
            if profile is None:
                raise NotFoundError("Employee profile", str(user_id))

            before = CandidateEmbeddingInput.from_profile(profile)
            previous_end_date: Optional[date] = profile.end_date

            for field, value in data.model_dump(exclude_unset=True).items():
                setattr(profile, field, value)
            profile.updated_at = datetime.now(timezone.utc)

            after = CandidateEmbeddingInput.from_profile(profile)
            changed = candidate_describing_fields_changed(before, after)
            if self.force_refresh or changed or profile.embedding is None:
                try:
                    self.lifecycle.refresh_candidate_embedding(profile, force=True)
                except TalentFitError as e:
                    logger.warning("profile_embedding_failed", user_id=user_id, error=str(e))

            session.commit()

            full_name = profile.user.full_name if profile.user else str(user_id)

        logger.info("profile_updated", user_id=user_id, describing_fields_changed=changed)

        if previous_end_date is None and profile.end_date is not None:
            self.orchestrator.dispatch(messages.rolloff_alert(user_id, full_name, profile.end_date))

        return profile

    def refresh_missing_embeddings(self, limit: int = 100) -> int:
        """Embed profiles that have no embedding yet, in one provider call."""
        with self.session_factory() as session:
            profiles = EmployeeProfileRepository(session).list_missing_embeddings(limit)
            updated = self.lifecycle.refresh_candidates_batch(profiles)
            session.commit()
        return updated
