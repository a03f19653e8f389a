"""
Match Suggestions API Endpoint
Scored candidate suggestions for a project.
"""
from fastapi import APIRouter

from agents.matching.matcher import MatchOrchestrator
from backend.api.deps import Matcher
from backend.schemas.matches import (
    CandidateProfileResponse,
    MatchSuggestionList,
    MatchSuggestionResponse,
)

router = APIRouter(prefix="/api/projects", tags=["Matches"])


@router.get(
    "/{project_id}/match-suggestions",
    response_model=MatchSuggestionList,
    summary="Get match suggestions",
    description="Rank eligible candidates by similarity and re-score them with the LLM.",
)
def get_match_suggestions(project_id: str, matcher: Matcher) -> MatchSuggestionList:
    """
    Generate match suggestions for a project.

    Errors raised by the matcher are mapped to HTTP status codes by the
    application's TalentFitError handler.
    """
    pid = MatchOrchestrator.parse_project_id(project_id)
    suggestions = matcher.generate_match_suggestions(pid)

    return MatchSuggestionList(
        project_id=pid,
        suggestions=[
            MatchSuggestionResponse(
                candidate_id=s.candidate_id,
                score=s.score,
                reason=s.reason,
                similarity=s.similarity,
                status=s.status.value if s.status else None,
                profile=CandidateProfileResponse.model_validate(s.profile.model_dump()),
            )
            for s in suggestions
        ],
        total=len(suggestions),
    )
