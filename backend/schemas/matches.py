"""
Match schemas for project-candidate match suggestions.
"""
from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


class CandidateProfileResponse(BaseModel):
    """Candidate profile embedded in a match suggestion."""

    user_id: int
    first_name: str
    last_name: str
    email: str
    type: str
    geo: Optional[str] = None
    skills: list[str] = Field(default_factory=list)
    years_of_experience: int = 0
    industry: Optional[str] = None
    availability_flag: bool = False
    end_date: Optional[date] = None

    class Config:
        from_attributes = True


class MatchSuggestionResponse(BaseModel):
    """Schema for one scored candidate."""

    candidate_id: int = Field(..., description="Candidate user id")
    score: float = Field(..., ge=0, le=100, description="LLM fit score (0-100)")
    reason: str = Field(..., description="LLM justification")
    similarity: float = Field(..., description="Cosine similarity to the project")
    status: Optional[str] = Field(None, description="onBench or onWork")
    profile: CandidateProfileResponse


class MatchSuggestionList(BaseModel):
    """Schema for the match suggestions endpoint."""

    project_id: int
    suggestions: list[MatchSuggestionResponse]
    total: int


class NotificationTestResponse(BaseModel):
    """Per-channel outcome of a test notification."""

    type: str
    results: dict[str, str]
