"""
Tests for embedding text construction and refresh.
"""
import pytest

from backend.core.exceptions import EmptyInputError
from backend.models import EmployeeProfile, Project
from backend.services.embedding_lifecycle import (
    CandidateEmbeddingInput,
    ProjectEmbeddingInput,
    candidate_describing_fields_changed,
    project_describing_fields_changed,
)


class TestCandidateEmbeddingInput:
    def test_full_text(self, asha_profile):
        text = CandidateEmbeddingInput.from_profile(asha_profile).to_text()

        assert text == "Skills: Go, PostgreSQL. Role: Backend. Industry: Fintech. Location: India. Experience: 6 years"

    def test_omits_empty_parts(self):
        data = CandidateEmbeddingInput(skills=["  ", "React"], type="Frontend")

        assert data.to_text() == "Skills: React. Role: Frontend"

    def test_nothing_to_describe(self):
        assert CandidateEmbeddingInput().to_text() == ""

    def test_skill_order_ignored(self):
        old = CandidateEmbeddingInput(skills=["Go", "SQL"], type="Backend")
        new = CandidateEmbeddingInput(skills=["SQL", "Go"], type="Backend")

        assert candidate_describing_fields_changed(old, new) is False

    def test_geo_change_detected(self):
        old = CandidateEmbeddingInput(skills=["Go"], geo="India")
        new = CandidateEmbeddingInput(skills=["Go"], geo="Portugal")

        assert candidate_describing_fields_changed(old, new) is True


class TestProjectEmbeddingInput:
    def test_text_includes_requirements_and_summary(self, payments_project):
        text = ProjectEmbeddingInput.from_project(payments_project).to_text()

        assert text == (
            "Project: Payments Platform. Description: Greenfield payments backend. "
            "Requirements: Backend: 2. Project Requirements: Project requires: Skills: Go"
        )

    def test_zero_seat_roles_dropped(self):
        data = ProjectEmbeddingInput(name="X", seats_by_type={"QA": 0, "Frontend": 1})

        assert data.to_text() == "Project: X. Requirements: Frontend: 1"

    def test_name_change_is_not_describing(self):
        old = ProjectEmbeddingInput(name="A", description="d", seats_by_type={"Backend": 1})
        new = ProjectEmbeddingInput(name="B", description="d", seats_by_type={"Backend": 1})

        assert project_describing_fields_changed(old, new) is False

    def test_seat_change_is_describing(self):
        old = ProjectEmbeddingInput(description="d", seats_by_type={"Backend": 1})
        new = ProjectEmbeddingInput(description="d", seats_by_type={"Backend": 2})

        assert project_describing_fields_changed(old, new) is True


class TestEmbeddingLifecycle:
    def test_refresh_skipped_when_present(self, lifecycle, mock_gateway, asha_profile):
        assert lifecycle.refresh_candidate_embedding(asha_profile) is False
        mock_gateway.embed.assert_not_called()

    def test_forced_refresh(self, lifecycle, mock_gateway, asha_profile):
        assert lifecycle.refresh_candidate_embedding(asha_profile, force=True) is True
        mock_gateway.embed.assert_called_once_with(
            "Skills: Go, PostgreSQL. Role: Backend. Industry: Fintech. Location: India. Experience: 6 years"
        )

    def test_missing_embedding_refreshed(self, lifecycle, mock_gateway, payments_project):
        payments_project.embedding = None

        assert lifecycle.refresh_project_embedding(payments_project) is True
        assert payments_project.embedding is not None

    def test_empty_profile_raises(self, lifecycle, mock_gateway):
        with pytest.raises(EmptyInputError):
            lifecycle.refresh_candidate_embedding(EmployeeProfile(user_id=1), force=True)

        mock_gateway.embed.assert_not_called()

    def test_candidate_batch_skips_empty(self, lifecycle, mock_gateway, asha_profile):
        empty = EmployeeProfile(user_id=99)

        updated = lifecycle.refresh_candidates_batch([asha_profile, empty])

        assert updated == 1
        assert len(mock_gateway.embed_batch.call_args.args[0]) == 1
        assert empty.embedding is None

    def test_project_batch_nothing_to_do(self, lifecycle, mock_gateway):
        assert lifecycle.refresh_projects_batch([Project(id=1)]) == 0
        mock_gateway.embed_batch.assert_not_called()
