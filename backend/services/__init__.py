"""
Backend services for staffing writes and the notifications they trigger.
"""

from backend.services.embedding_lifecycle import (
    CandidateEmbeddingInput,
    EmbeddingLifecycle,
    ProjectEmbeddingInput,
    candidate_describing_fields_changed,
    project_describing_fields_changed,
)
from backend.services.employee_profile_service import EmployeeProfileService
from backend.services.project_allocation_service import ProjectAllocationService
from backend.services.project_service import ProjectService

__all__ = [
    # Embedding lifecycle
    "CandidateEmbeddingInput",
    "EmbeddingLifecycle",
    "ProjectEmbeddingInput",
    "candidate_describing_fields_changed",
    "project_describing_fields_changed",
    # Services
    "EmployeeProfileService",
    "ProjectAllocationService",
    "ProjectService",
]
