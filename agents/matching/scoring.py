"""
Scoring Engine
Builds the LLM re-ranking prompt and parses the score array it returns.
"""

import json
from typing import Optional

import structlog
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from backend.core.exceptions import MalformedScoreResponseError, ProviderError, ScoringError

from .embedding_gateway import EmbeddingGateway
from .models import CandidateScore, ScoringRules, SimilarityMatch

logger = structlog.get_logger().bind(agent="scoring")

SCORING_SYSTEM_PROMPT = (
    "You are an expert technical recruiter scoring staffing candidates against "
    "project requirements. Respond only with a JSON array."
)

_SCORES_ADAPTER = TypeAdapter(list[CandidateScore])


class ScoringEngine:
    """
    LLM re-ranking of similarity matches.

    The prompt lists every candidate with skills, geo, experience,
    industry, availability, bench status and similarity, then asks for a
    strict JSON array of {candidate_id, score, reason}.
    """

    def __init__(self, gateway: EmbeddingGateway, model: Optional[str] = None):
        """
        Initialize scoring engine.

        Args:
            gateway: Gateway used for the chat completion.
            model: Model override, defaults to the gateway's chat model.
        """
        self.gateway = gateway
        self.model = model

    def _format_candidate(self, index: int, match: SimilarityMatch) -> str:
        candidate = match.candidate
        skills = ", ".join(candidate.skills) if candidate.skills else "None specified"
        status = match.status.value if match.status else "unknown"

        return (
            f"{index}. {candidate.full_name} (ID: {candidate.user_id})\n"
            f"   Skills: {skills}\n"
            f"   Location: {candidate.geo or 'Unspecified'}\n"
            f"   Experience: {candidate.years_of_experience} years\n"
            f"   Industry: {candidate.industry or 'Unspecified'}\n"
            f"   Available for extra work: {str(candidate.availability_flag).lower()}\n"
            f"   Status: {status}\n"
            f"   Similarity: {match.similarity * 100:.1f}%"
        )

    def build_prompt(
        self,
        project_summary: str,
        candidates: list[SimilarityMatch],
        rules: ScoringRules,
    ) -> str:
        """
        Build the scoring prompt.

        Args:
            project_summary: Project requirements summary.
            candidates: Candidates from the ranking query.
            rules: Scoring weights.

        Returns:
            Prompt text.
        """
        candidate_blocks = "\n\n".join(
            self._format_candidate(i, match) for i, match in enumerate(candidates, start=1)
        )

        return f"""Score each candidate for the project below on a scale of 0-100.

PROJECT REQUIREMENTS:
{project_summary or 'No summary available'}

CANDIDATES:
{candidate_blocks}

SCORING WEIGHTS:
- Skills match: {rules.skills_weight}%
- Geography match: {rules.geography_weight}%
- Experience match: {rules.experience_weight}%
- Bench status: {rules.status_weight}%

PREFERENCES:
- If the project does not specify a geography, lightly favor India-based candidates when skills are comparable (add 5-10 points).
- Favor candidates who are onBench, even with a somewhat weaker skill match (add 5-10 points).
- Mention the candidate's bench status explicitly in the reason.

Respond with ONLY a JSON array, no markdown and no other text:
[{{"candidate_id": <id>, "score": <0-100>, "reason": "<one or two sentences>"}}]"""

    def score(self, prompt: str) -> str:
        """
        Send the prompt to the chat model.

        Returns:
            Raw response text.

        Raises:
            ScoringError: The call failed or returned no choices.
        """
        try:
            content = self.gateway.complete(SCORING_SYSTEM_PROMPT, prompt, model=self.model)
        except ProviderError as e:
            raise ScoringError(f"failed to generate AI scores: {e}") from e

        if content is None:
            raise ScoringError("no scores returned")

        return content

    def parse(self, raw: str) -> list[CandidateScore]:
        """
        Parse the raw response into candidate scores.

        Raises:
            MalformedScoreResponseError: Not JSON, or not an array of score objects.
        """
        try:
            payload = json.loads(raw)
        except (json.JSONDecodeError, TypeError) as e:
            logger.warning("score_response_not_json", error=str(e))
            raise MalformedScoreResponseError(f"failed to parse AI scores: {e}", raw=raw) from e

        try:
            return _SCORES_ADAPTER.validate_python(payload)
        except PydanticValidationError as e:
            logger.warning("score_response_invalid", errors=e.error_count())
            raise MalformedScoreResponseError(f"invalid AI score payload: {e}", raw=raw) from e
