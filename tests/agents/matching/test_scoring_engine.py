"""
Tests for the Scoring Engine.
"""
import json

import pytest

from agents.matching.models import CandidateScore, ScoringRules
from agents.matching.scoring import ScoringEngine
from backend.core.exceptions import MalformedScoreResponseError, ProviderError, ScoringError


@pytest.fixture
def engine(mock_gateway):
    return ScoringEngine(mock_gateway)


class TestBuildPrompt:
    """Tests for scoring prompt construction."""

    def test_candidate_lines(self, engine, sample_matches):
        prompt = engine.build_prompt("Project requires: Go", sample_matches, ScoringRules())

        assert "1. Asha Rao (ID: 7)" in prompt
        assert "Skills: Go, PostgreSQL" in prompt
        assert "Location: India" in prompt
        assert "Experience: 6 years" in prompt
        assert "Industry: Fintech" in prompt
        assert "Available for extra work: false" in prompt
        assert "Status: onBench" in prompt
        assert "Similarity: 87.3%" in prompt

    def test_empty_skills_and_flags(self, engine, sample_matches):
        prompt = engine.build_prompt("summary", sample_matches, ScoringRules())

        assert "2. Marco Bianchi (ID: 12)" in prompt
        assert "Skills: None specified" in prompt
        assert "Available for extra work: true" in prompt
        assert "Status: onWork" in prompt
        assert "Similarity: 71.0%" in prompt

    def test_weights_and_preferences(self, engine, sample_matches):
        rules = ScoringRules(skills_weight=40, geography_weight=20, experience_weight=25, status_weight=15)

        prompt = engine.build_prompt("summary", sample_matches, rules)

        assert "Skills match: 40%" in prompt
        assert "Geography match: 20%" in prompt
        assert "Experience match: 25%" in prompt
        assert "Bench status: 15%" in prompt
        assert "India-based" in prompt
        assert "5-10 points" in prompt
        assert "bench status explicitly" in prompt
        assert '"candidate_id"' in prompt

    def test_default_rules(self):
        rules = ScoringRules()

        assert (rules.skills_weight, rules.geography_weight, rules.experience_weight, rules.status_weight) == (
            30,
            30,
            20,
            20,
        )


class TestScore:
    """Tests for the scoring LLM call."""

    def test_returns_raw_content(self, engine, mock_gateway):
        mock_gateway.complete.return_value = "[]"

        assert engine.score("prompt") == "[]"
        assert mock_gateway.complete.call_args.args[1] == "prompt"

    def test_no_choices(self, engine, mock_gateway):
        mock_gateway.complete.return_value = None

        with pytest.raises(ScoringError):
            engine.score("prompt")

    def test_provider_error(self, engine, mock_gateway):
        mock_gateway.complete.side_effect = ProviderError("timeout")

        with pytest.raises(ScoringError):
            engine.score("prompt")


class TestParse:
    """Tests for parsing the score array."""

    def test_valid_array(self, engine):
        raw = json.dumps(
            [
                {"candidate_id": 7, "score": 91, "reason": "onBench, strong Go"},
                {"candidate_id": 12, "score": 64.5, "reason": "onWork"},
            ]
        )

        scores = engine.parse(raw)

        assert scores == [
            CandidateScore(candidate_id=7, score=91, reason="onBench, strong Go"),
            CandidateScore(candidate_id=12, score=64.5, reason="onWork"),
        ]

    def test_deterministic(self, engine):
        raw = '[{"candidate_id": 7, "score": 80, "reason": "ok"}]'

        assert engine.parse(raw) == engine.parse(raw)

    def test_not_json(self, engine):
        with pytest.raises(MalformedScoreResponseError) as exc_info:
            engine.parse("Here are the scores: [")

        assert exc_info.value.raw == "Here are the scores: ["

    def test_markdown_fence_not_repaired(self, engine):
        with pytest.raises(MalformedScoreResponseError):
            engine.parse('```json\n[{"candidate_id": 7, "score": 80, "reason": "ok"}]\n```')

    def test_object_instead_of_array(self, engine):
        with pytest.raises(MalformedScoreResponseError):
            engine.parse('{"candidate_id": 7, "score": 80, "reason": "ok"}')

    def test_score_out_of_range(self, engine):
        with pytest.raises(MalformedScoreResponseError):
            engine.parse('[{"candidate_id": 7, "score": 180, "reason": "ok"}]')
