"""
Matching agent test fixtures.
Provides mock data and utilities for testing matching components.
"""

from datetime import date
from unittest.mock import MagicMock

import pytest

from agents.matching.models import EligibilityStatus, EmployeeCandidate, SimilarityMatch


@pytest.fixture
def sample_candidate_row():
    """Ranking query row for a bench candidate, with user columns."""
    return {
        "user_id": 7,
        "geo": "India",
        "date_of_joining": date(2021, 3, 1),
        "end_date": None,
        "notice_date": None,
        "type": "Backend",
        "skills": ["Go", "PostgreSQL", "AWS"],
        "years_of_experience": 6,
        "industry": "Fintech",
        "availability_flag": False,
        "first_name": "Asha",
        "last_name": "Rao",
        "email": "asha.rao@example.com",
        "role": "employee",
        "slack_user_id": "U07ASHA",
        "similarity": 0.8734,
        "status": "onBench",
    }


@pytest.fixture
def sample_matches():
    """Two candidates as returned by the vector store."""
    return [
        SimilarityMatch(
            candidate=EmployeeCandidate(
                user_id=7,
                first_name="Asha",
                last_name="Rao",
                email="asha.rao@example.com",
                type="Backend",
                geo="India",
                skills=["Go", "PostgreSQL"],
                years_of_experience=6,
                industry="Fintech",
                availability_flag=False,
            ),
            similarity=0.8734,
            status=EligibilityStatus.ON_BENCH,
        ),
        SimilarityMatch(
            candidate=EmployeeCandidate(
                user_id=12,
                first_name="Marco",
                last_name="Bianchi",
                email="marco.bianchi@example.com",
                type="Frontend",
                geo="Europe",
                skills=[],
                years_of_experience=3,
                industry=None,
                availability_flag=True,
            ),
            similarity=0.71,
            status=EligibilityStatus.ON_WORK,
        ),
    ]


@pytest.fixture
def mock_embedding_response():
    """Mock OpenAI embeddings response with one 1536-dim vector."""
    response = MagicMock()
    response.data = [MagicMock(embedding=[0.1] * 1536)]
    return response


@pytest.fixture
def mock_gateway():
    """Mock EmbeddingGateway."""
    gateway = MagicMock()
    gateway.embed.return_value = [0.1] * 1536
    return gateway
