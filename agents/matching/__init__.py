"""
Matching Agent Module
Project-to-candidate matching using vector similarity and LLM re-ranking.
"""
from .eligibility import AllocationRecord, EligibilityClassifier
from .embedding_gateway import EmbeddingGateway, build_summary_prompt, normalize_text
from .matcher import MatchOrchestrator
from .models import (
    CandidateScore,
    EligibilityStatus,
    EmployeeCandidate,
    MatchSuggestion,
    ProjectData,
    ScoringRules,
    SimilarityMatch,
)
from .scoring import ScoringEngine
from .vector_store import CandidateVectorStore

__all__ = [
    # Matcher
    "MatchOrchestrator",
    # Gateway
    "EmbeddingGateway",
    "build_summary_prompt",
    "normalize_text",
    # Ranking
    "AllocationRecord",
    "CandidateVectorStore",
    "EligibilityClassifier",
    "ScoringEngine",
    # Models
    "CandidateScore",
    "EligibilityStatus",
    "EmployeeCandidate",
    "MatchSuggestion",
    "ProjectData",
    "ScoringRules",
    "SimilarityMatch",
]
