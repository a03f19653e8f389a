"""
Candidate Matching Engine
Matches employee profiles to projects using vector similarity and LLM re-ranking.
"""

from typing import Optional, Union

import structlog
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from backend.core.exceptions import InvalidProjectIDError, ProjectNotFoundError

from .models import MatchSuggestion, ProjectData, ScoringRules
from .scoring import ScoringEngine
from .vector_store import CandidateVectorStore

logger = structlog.get_logger().bind(agent="matcher")


class MatchOrchestrator:
    """
    Candidate matching engine.

    Implements two-phase matching:
    1. Ranking query over eligible candidates using pgvector (top 20)
    2. LLM re-ranking of those candidates against the project summary

    Suggestions keep the LLM's order; scores for candidates that were not
    retrieved are dropped.
    """

    CANDIDATE_LIMIT = 20

    def __init__(
        self,
        db_engine: Engine,
        vector_store: CandidateVectorStore,
        scoring_engine: ScoringEngine,
        candidate_limit: int = CANDIDATE_LIMIT,
    ):
        """
        Initialize matcher.

        Args:
            db_engine: SQLAlchemy engine for database operations.
            vector_store: Ranking query adapter.
            scoring_engine: LLM re-ranking.
            candidate_limit: Candidates fetched per request.
        """
        self.db_engine = db_engine
        self.vector_store = vector_store
        self.scoring_engine = scoring_engine
        self.candidate_limit = candidate_limit

    @staticmethod
    def parse_project_id(project_id: Union[str, int]) -> int:
        """Convert an external project id to its integer key."""
        if isinstance(project_id, bool):
            raise InvalidProjectIDError(project_id)
        try:
            return int(str(project_id).strip())
        except (TypeError, ValueError) as e:
            raise InvalidProjectIDError(project_id) from e

    def fetch_project_data(self, project_id: int, session: Session) -> Optional[ProjectData]:
        """
        Fetch project data from database.

        Args:
            project_id: Project identifier.
            session: Database session.

        Returns:
            ProjectData if found, None otherwise.
        """
        query = text("""
            SELECT
                id,
                name,
                description,
                seats_by_type,
                summary,
                start_date,
                end_date,
                embedding IS NOT NULL AS has_embedding
            FROM projects
            WHERE id = :project_id AND deleted_at IS NULL
        """)

        result = session.execute(query, {"project_id": project_id}).fetchone()

        if not result:
            logger.warning("project_not_found", project_id=project_id)
            return None

        return ProjectData(
            id=result.id,
            name=result.name,
            description=result.description,
            seats_by_type=result.seats_by_type or {},
            summary=result.summary,
            start_date=result.start_date,
            end_date=result.end_date,
            has_embedding=bool(result.has_embedding),
        )

    def generate_match_suggestions(
        self,
        project_id: Union[str, int],
        rules: Optional[ScoringRules] = None,
    ) -> list[MatchSuggestion]:
        """
        Produce scored candidate suggestions for a project.

        Args:
            project_id: Project identifier (string or int).
            rules: Scoring weights, defaults to ScoringRules().

        Returns:
            Suggestions in the order the LLM returned them.

        Raises:
            InvalidProjectIDError: project_id is not an integer.
            ProjectNotFoundError: No such project.
            ProjectNotEmbeddedError: Project has no embedding.
            VectorStoreError: Ranking query failed.
            ScoringError: LLM call failed.
            MalformedScoreResponseError: LLM response could not be parsed.
        """
        pid = self.parse_project_id(project_id)

        with Session(self.db_engine) as session:
            project = self.fetch_project_data(pid, session)

        if project is None:
            raise ProjectNotFoundError(pid)

        logger.info("match_started", project_id=pid)

        candidates = self.vector_store.find_similar_candidates_with_user(pid, self.candidate_limit)
        if not candidates:
            logger.info("no_candidates", project_id=pid)
            return []

        prompt = self.scoring_engine.build_prompt(
            project.summary or "",
            candidates,
            rules or ScoringRules(),
        )
        raw = self.scoring_engine.score(prompt)
        scores = self.scoring_engine.parse(raw)

        candidate_map = {match.candidate.user_id: match for match in candidates}
        suggestions = []
        for score in scores:
            match = candidate_map.get(score.candidate_id)
            if match is None:
                logger.debug("unknown_candidate_dropped", project_id=pid, candidate_id=score.candidate_id)
                continue
            suggestions.append(
                MatchSuggestion(
                    candidate_id=score.candidate_id,
                    score=score.score,
                    reason=score.reason,
                    similarity=match.similarity,
                    status=match.status,
                    profile=match.candidate,
                )
            )

        logger.info(
            "match_complete",
            project_id=pid,
            candidates=len(candidates),
            scores=len(scores),
            suggestions=len(suggestions),
        )
        return suggestions
