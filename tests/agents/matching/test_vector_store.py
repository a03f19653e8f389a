"""
Tests for the Candidate Vector Store.
"""
from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from agents.matching.eligibility import EligibilityClassifier
from agents.matching.models import EligibilityStatus
from agents.matching.vector_store import CandidateVectorStore
from backend.core.exceptions import ProjectNotEmbeddedError, VectorStoreError


def session_returning(check_row, rows):
    """Mock session: first execute is the embedding check, second the ranking query."""
    session = MagicMock()
    check_result = MagicMock()
    check_result.fetchone.return_value = check_row
    ranking_result = MagicMock()
    ranking_result.fetchall.return_value = rows
    session.execute.side_effect = [check_result, ranking_result]
    return session


@pytest.fixture
def store():
    return CandidateVectorStore(MagicMock(), EligibilityClassifier(7))


class TestFindSimilarCandidates:
    """Tests for the ranking query adapter."""

    @patch("agents.matching.vector_store.Session")
    def test_maps_rows_with_user_fields(self, mock_session_cls, store, mock_row, sample_candidate_row):
        session = session_returning(mock_row({"has_embedding": True}), [mock_row(sample_candidate_row)])
        mock_session_cls.return_value.__enter__.return_value = session

        matches = store.find_similar_candidates_with_user(42, 5)

        assert len(matches) == 1
        match = matches[0]
        assert match.candidate.user_id == 7
        assert match.candidate.full_name == "Asha Rao"
        assert match.candidate.slack_user_id == "U07ASHA"
        assert match.candidate.skills == ["Go", "PostgreSQL", "AWS"]
        assert match.similarity == pytest.approx(0.8734)
        assert match.status == EligibilityStatus.ON_BENCH

    @patch("agents.matching.vector_store.Session")
    def test_profile_only_query_has_no_user_join(self, mock_session_cls, store, mock_row, sample_candidate_row):
        session = session_returning(mock_row({"has_embedding": True}), [mock_row(sample_candidate_row)])
        mock_session_cls.return_value.__enter__.return_value = session

        matches = store.find_similar_candidates(42, 5)

        query = str(session.execute.call_args_list[1].args[0])
        assert "JOIN users" not in query
        assert matches[0].candidate.first_name == ""

    @patch("agents.matching.vector_store.Session")
    def test_query_orders_by_distance_and_filters_eligibility(self, mock_session_cls, store, mock_row):
        session = session_returning(mock_row({"has_embedding": True}), [])
        mock_session_cls.return_value.__enter__.return_value = session

        store.find_similar_candidates_with_user(42, 5)

        query = str(session.execute.call_args_list[1].args[0])
        params = session.execute.call_args_list[1].args[1]
        assert "1 - (ep.embedding <=> proj.e) AS similarity" in query
        assert "ORDER BY ep.embedding <=> proj.e" in query
        assert store.classifier.where_sql() in query
        assert "AS status" in query
        assert params == {"project_id": 42, "limit": 5, "rolloff_window_days": 7}

    @pytest.mark.parametrize("limit", [0, -3])
    @patch("agents.matching.vector_store.Session")
    def test_non_positive_limit_defaults_to_ten(self, mock_session_cls, limit, store, mock_row):
        for method in (store.find_similar_candidates, store.find_similar_candidates_with_user):
            session = session_returning(mock_row({"has_embedding": True}), [])
            mock_session_cls.return_value.__enter__.return_value = session

            method(42, limit)

            assert session.execute.call_args_list[1].args[1]["limit"] == 10

    @patch("agents.matching.vector_store.Session")
    def test_zero_candidates_is_empty_list(self, mock_session_cls, store, mock_row):
        session = session_returning(mock_row({"has_embedding": True}), [])
        mock_session_cls.return_value.__enter__.return_value = session

        assert store.find_similar_candidates(42, 10) == []

    @patch("agents.matching.vector_store.Session")
    def test_project_without_embedding(self, mock_session_cls, store, mock_row):
        session = session_returning(mock_row({"has_embedding": False}), [])
        mock_session_cls.return_value.__enter__.return_value = session

        with pytest.raises(ProjectNotEmbeddedError) as exc_info:
            store.find_similar_candidates(42, 10)

        assert exc_info.value.project_id == 42
        assert session.execute.call_count == 1

    @patch("agents.matching.vector_store.Session")
    def test_missing_project(self, mock_session_cls, store):
        session = session_returning(None, [])
        mock_session_cls.return_value.__enter__.return_value = session

        with pytest.raises(ProjectNotEmbeddedError):
            store.find_similar_candidates_with_user(99, 10)

    @patch("agents.matching.vector_store.Session")
    def test_database_error_wrapped(self, mock_session_cls, store):
        session = MagicMock()
        session.execute.side_effect = OperationalError("SELECT", {}, Exception("connection lost"))
        mock_session_cls.return_value.__enter__.return_value = session

        with pytest.raises(VectorStoreError) as exc_info:
            store.find_similar_candidates(42, 10)

        assert not isinstance(exc_info.value, ProjectNotEmbeddedError)
