"""
TalentFit Composition Root
Builds every component from Settings and wires collaborators through constructors.
"""
from typing import Optional

from sqlalchemy.engine import Engine

from agents.delivery.channels import InAppChannel, SlackChannel
from agents.delivery.orchestrator import NotificationOrchestrator
from agents.matching.eligibility import EligibilityClassifier
from agents.matching.embedding_gateway import EmbeddingGateway
from agents.matching.matcher import MatchOrchestrator
from agents.matching.scoring import ScoringEngine
from agents.matching.vector_store import CandidateVectorStore
from backend.core.config import Settings
from backend.database import create_db_engine, create_session_factory
from backend.services.embedding_lifecycle import EmbeddingLifecycle
from backend.services.employee_profile_service import EmployeeProfileService
from backend.services.project_allocation_service import ProjectAllocationService
from backend.services.project_service import ProjectService


class Container:
    """Application-scoped component graph."""

    def __init__(self, settings: Settings, engine: Optional[Engine] = None):
        """
        Build the component graph.

        Args:
            settings: Application settings.
            engine: Optional pre-built engine; created from settings otherwise.
        """
        self.settings = settings
        self.engine = engine or create_db_engine(settings)
        self.session_factory = create_session_factory(self.engine)

        # Matching
        self.gateway = EmbeddingGateway(settings)
        self.classifier = EligibilityClassifier(settings.bench_rolloff_window_days)
        self.vector_store = CandidateVectorStore(self.engine, self.classifier)
        self.scoring_engine = ScoringEngine(self.gateway)
        self.matcher = MatchOrchestrator(
            self.engine,
            self.vector_store,
            self.scoring_engine,
            candidate_limit=settings.match_candidate_limit,
        )

        # Delivery
        self.slack_channel = SlackChannel(settings)
        self.notifications = NotificationOrchestrator(
            [InAppChannel(self.session_factory), self.slack_channel]
        )

        # Services
        self.lifecycle = EmbeddingLifecycle(self.gateway)
        self.profile_service = EmployeeProfileService(
            self.session_factory,
            self.lifecycle,
            self.notifications,
            force_refresh=settings.profile_embedding_force_refresh,
        )
        self.project_service = ProjectService(
            self.session_factory,
            self.gateway,
            self.lifecycle,
            self.notifications,
        )
        self.allocation_service = ProjectAllocationService(self.session_factory, self.notifications)

    def close(self) -> None:
        """Release HTTP clients and pooled connections."""
        self.slack_channel.close()
        self.engine.dispose()
