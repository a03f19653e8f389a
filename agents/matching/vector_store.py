"""
Candidate Vector Store
Ranks eligible employee profiles by cosine similarity to a project using pgvector.
"""

from typing import Any

import structlog
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.core.exceptions import ProjectNotEmbeddedError, VectorStoreError

from .eligibility import EligibilityClassifier
from .models import EligibilityStatus, EmployeeCandidate, SimilarityMatch

logger = structlog.get_logger().bind(agent="vector_store")


class CandidateVectorStore:
    """
    Similarity search over employee profile embeddings.

    The eligibility rules and status labelling run inside a single
    ranking query; results are ordered by ascending cosine distance.
    """

    DEFAULT_LIMIT = 10

    PROFILE_COLUMNS = """
            ep.user_id,
            ep.geo,
            ep.date_of_joining,
            ep.end_date,
            ep.notice_date,
            ep.type,
            ep.skills,
            ep.years_of_experience,
            ep.industry,
            ep.availability_flag"""

    USER_COLUMNS = """,
            u.first_name,
            u.last_name,
            u.email,
            u.role,
            u.slack_user_id"""

    def __init__(self, db_engine: Engine, classifier: EligibilityClassifier):
        """
        Initialize vector store.

        Args:
            db_engine: SQLAlchemy engine for database operations.
            classifier: Source of the eligibility SQL fragments.
        """
        self.db_engine = db_engine
        self.classifier = classifier

    def _ranking_query(self, with_user: bool) -> Any:
        user_columns = self.USER_COLUMNS if with_user else ""
        user_join = (
            "INNER JOIN users u ON ep.user_id = u.id AND u.deleted_at IS NULL"
            if with_user
            else ""
        )

        return text(f"""
            WITH proj AS (
                SELECT embedding AS e, start_date
                FROM projects
                WHERE id = :project_id
                    AND embedding IS NOT NULL
                    AND deleted_at IS NULL
            )
            SELECT {self.PROFILE_COLUMNS}{user_columns},
                1 - (ep.embedding <=> proj.e) AS similarity,
                {self.classifier.status_case_sql()} AS status
            FROM employee_profiles ep
            {user_join}
            CROSS JOIN proj
            WHERE ep.embedding IS NOT NULL
                AND ep.deleted_at IS NULL
                AND {self.classifier.where_sql()}
            ORDER BY ep.embedding <=> proj.e
            LIMIT :limit
        """)

    def _ensure_project_embedded(self, project_id: int, session: Session) -> None:
        query = text("""
            SELECT embedding IS NOT NULL AS has_embedding
            FROM projects
            WHERE id = :project_id AND deleted_at IS NULL
        """)
        result = session.execute(query, {"project_id": project_id}).fetchone()

        if not result or not result.has_embedding:
            logger.warning("project_not_embedded", project_id=project_id)
            raise ProjectNotEmbeddedError(project_id)

    def _row_to_match(self, row: Any, with_user: bool) -> SimilarityMatch:
        candidate = EmployeeCandidate(
            user_id=row.user_id,
            geo=row.geo,
            date_of_joining=row.date_of_joining,
            end_date=row.end_date,
            notice_date=row.notice_date,
            type=row.type or "",
            skills=row.skills or [],
            years_of_experience=row.years_of_experience or 0,
            industry=row.industry,
            availability_flag=bool(row.availability_flag),
        )
        if with_user:
            candidate.first_name = row.first_name or ""
            candidate.last_name = row.last_name or ""
            candidate.email = row.email or ""
            candidate.role = row.role or ""
            candidate.slack_user_id = row.slack_user_id

        return SimilarityMatch(
            candidate=candidate,
            similarity=float(row.similarity),
            status=EligibilityStatus(row.status) if row.status else None,
        )

    def _search(self, project_id: int, limit: int, with_user: bool) -> list[SimilarityMatch]:
        if limit <= 0:
            limit = self.DEFAULT_LIMIT

        params = {"project_id": project_id, "limit": limit, **self.classifier.bind_params()}

        try:
            with Session(self.db_engine) as session:
                self._ensure_project_embedded(project_id, session)
                rows = session.execute(self._ranking_query(with_user), params).fetchall()
        except SQLAlchemyError as e:
            logger.error("similarity_search_failed", project_id=project_id, error=str(e))
            raise VectorStoreError(f"failed to execute similarity search: {e}") from e

        matches = [self._row_to_match(row, with_user) for row in rows]

        logger.info(
            "similarity_search_complete",
            project_id=project_id,
            limit=limit,
            candidates=len(matches),
        )
        return matches

    def find_similar_candidates(self, project_id: int, limit: int = DEFAULT_LIMIT) -> list[SimilarityMatch]:
        """
        Rank eligible candidates for a project (profile columns only).

        Args:
            project_id: Target project.
            limit: Maximum rows; values <= 0 fall back to 10.

        Returns:
            Matches ordered by ascending cosine distance.

        Raises:
            ProjectNotEmbeddedError: Project is missing or has no embedding.
            VectorStoreError: The query failed.
        """
        return self._search(project_id, limit, with_user=False)

    def find_similar_candidates_with_user(
        self,
        project_id: int,
        limit: int = DEFAULT_LIMIT,
    ) -> list[SimilarityMatch]:
        """Same as find_similar_candidates, plus user display fields."""
        return self._search(project_id, limit, with_user=True)
