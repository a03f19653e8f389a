"""
Service test fixtures.
"""
from datetime import date
from unittest.mock import MagicMock

import pytest

from backend.models import EmployeeProfile, Project, User
from backend.services.embedding_lifecycle import EmbeddingLifecycle


FAKE_VECTOR = [0.01] * 1536


@pytest.fixture
def mock_gateway():
    gateway = MagicMock()
    gateway.embed.return_value = FAKE_VECTOR
    gateway.embed_batch.side_effect = lambda texts: [FAKE_VECTOR for _ in texts]
    gateway.summarize.return_value = "Project requires: Skills: Go, PostgreSQL"
    return gateway


@pytest.fixture
def lifecycle(mock_gateway):
    return EmbeddingLifecycle(mock_gateway)


@pytest.fixture
def mock_orchestrator():
    return MagicMock()


@pytest.fixture
def asha():
    return User(
        id=7,
        first_name="Asha",
        last_name="Rao",
        email="asha.rao@example.com",
        role="employee",
        slack_user_id="U07ASHA",
    )


@pytest.fixture
def marco():
    return User(id=12, first_name="Marco", last_name="Bianchi", email="marco.bianchi@example.com", role="employee")


@pytest.fixture
def asha_profile(asha):
    profile = EmployeeProfile(
        user_id=7,
        type="Backend",
        geo="India",
        skills=["Go", "PostgreSQL"],
        years_of_experience=6,
        industry="Fintech",
        availability_flag=False,
        embedding=FAKE_VECTOR,
    )
    profile.user = asha
    return profile


@pytest.fixture
def payments_project():
    return Project(
        id=42,
        name="Payments Platform",
        description="Greenfield payments backend",
        seats_by_type={"Backend": 2},
        required_seats=2,
        start_date=date(2025, 7, 1),
        end_date=date(2025, 12, 31),
        status="Open",
        summary="Project requires: Skills: Go",
        embedding=FAKE_VECTOR,
    )
