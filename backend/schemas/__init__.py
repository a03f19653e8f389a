"""
TalentFit Pydantic Schemas
Request/Response models for services and API endpoints.
"""
from backend.schemas.matches import (
    CandidateProfileResponse,
    MatchSuggestionList,
    MatchSuggestionResponse,
    NotificationTestResponse,
)
from backend.schemas.staffing import (
    AllocationCreate,
    EmployeeProfileCreate,
    EmployeeProfileUpdate,
    ProjectCreate,
    ProjectUpdate,
)

__all__ = [
    # Matches
    "CandidateProfileResponse",
    "MatchSuggestionList",
    "MatchSuggestionResponse",
    "NotificationTestResponse",
    # Staffing
    "AllocationCreate",
    "EmployeeProfileCreate",
    "EmployeeProfileUpdate",
    "ProjectCreate",
    "ProjectUpdate",
]
