"""
Matching Agent Pydantic Models
Data models for the candidate matching engine.
"""
from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class EligibilityStatus(str, Enum):
    """Why a candidate is eligible for a project; derived at query time, never stored."""

    ON_BENCH = "onBench"
    ON_WORK = "onWork"


class EmployeeCandidate(BaseModel):
    """
    Employee profile as seen by the matching engine.

    User display fields are only populated by the ranking query that
    joins the users table.
    """

    user_id: int = Field(..., description="User identifier")
    first_name: str = Field(default="", description="First name")
    last_name: str = Field(default="", description="Last name")
    email: str = Field(default="", description="Work email")
    role: str = Field(default="", description="Application role")
    slack_user_id: Optional[str] = Field(default=None, description="Slack member id")
    geo: Optional[str] = Field(default=None, description="Country or region")
    type: str = Field(default="", description="Delivery role, e.g. Backend or Frontend")
    skills: list[str] = Field(default_factory=list, description="Technical skills")
    years_of_experience: int = Field(default=0, ge=0, description="Years of experience")
    industry: Optional[str] = Field(default=None, description="Industry background")
    availability_flag: bool = Field(
        default=False,
        description="Open to extra work alongside current allocations",
    )
    date_of_joining: Optional[date] = Field(default=None)
    end_date: Optional[date] = Field(default=None, description="Rolloff date")
    notice_date: Optional[date] = Field(default=None)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class ProjectData(BaseModel):
    """Project data needed for summarization, embedding and scoring."""

    id: int = Field(..., description="Project identifier")
    name: str = Field(..., description="Project name")
    description: Optional[str] = Field(default=None)
    seats_by_type: dict[str, int] = Field(
        default_factory=dict,
        description="Role name to number of seats",
    )
    summary: Optional[str] = Field(default=None, description="LLM requirements summary")
    start_date: Optional[date] = Field(default=None)
    end_date: Optional[date] = Field(default=None)
    has_embedding: bool = Field(default=False)


class SimilarityMatch(BaseModel):
    """
    A candidate returned by the ranking query.

    similarity is 1 - cosine distance to the project embedding.
    """

    candidate: EmployeeCandidate
    similarity: float = Field(..., description="Cosine similarity")
    status: Optional[EligibilityStatus] = Field(
        default=None,
        description="Eligibility branch the candidate matched",
    )


class CandidateScore(BaseModel):
    """A single score object from the LLM scoring response."""

    candidate_id: int = Field(..., description="Candidate user id")
    score: float = Field(..., ge=0.0, le=100.0, description="Fit score from 0-100")
    reason: str = Field(default="", description="Short justification")


class MatchSuggestion(BaseModel):
    """LLM score joined with the full candidate profile."""

    candidate_id: int
    score: float
    reason: str
    similarity: float
    status: Optional[EligibilityStatus] = None
    profile: EmployeeCandidate


class ScoringRules(BaseModel):
    """
    Weights surfaced verbatim in the scoring prompt.

    Advisory only: the LLM is asked to apply them, nothing enforces them.
    """

    skills_weight: int = Field(default=30, ge=0)
    geography_weight: int = Field(default=30, ge=0)
    experience_weight: int = Field(default=20, ge=0)
    status_weight: int = Field(default=20, ge=0)
