"""
Embedding lifecycle helpers.

Builds the text that describes a candidate or project, decides when an
embedding must be recomputed, and writes fresh vectors onto ORM rows.
"""

from typing import Optional, Sequence

import structlog
from pydantic import BaseModel, Field

from agents.matching.embedding_gateway import EmbeddingGateway
from backend.core.exceptions import EmptyInputError
from backend.models import EmployeeProfile, Project


logger = structlog.get_logger(__name__)


class CandidateEmbeddingInput(BaseModel):
    """Fields that describe a candidate for embedding purposes."""

    skills: list[str] = Field(default_factory=list)
    type: Optional[str] = None
    industry: Optional[str] = None
    geo: Optional[str] = None
    years_of_experience: int = 0

    @classmethod
    def from_profile(cls, profile: EmployeeProfile) -> "CandidateEmbeddingInput":
        return cls(
            skills=list(profile.skills or []),
            type=profile.type,
            industry=profile.industry,
            geo=profile.geo,
            years_of_experience=profile.years_of_experience or 0,
        )

    def to_text(self) -> str:
        parts = []
        skills = [s.strip() for s in self.skills if s and s.strip()]
        if skills:
            parts.append(f"Skills: {', '.join(skills)}")
        if self.type:
            parts.append(f"Role: {self.type}")
        if self.industry:
            parts.append(f"Industry: {self.industry}")
        if self.geo:
            parts.append(f"Location: {self.geo}")
        if self.years_of_experience > 0:
            parts.append(f"Experience: {self.years_of_experience} years")
        return ". ".join(parts)


class ProjectEmbeddingInput(BaseModel):
    """Fields that describe a project for embedding purposes."""

    name: Optional[str] = None
    description: Optional[str] = None
    seats_by_type: dict[str, int] = Field(default_factory=dict)
    summary: Optional[str] = None

    @classmethod
    def from_project(cls, project: Project) -> "ProjectEmbeddingInput":
        return cls(
            name=project.name,
            description=project.description,
            seats_by_type=dict(project.seats_by_type or {}),
            summary=project.summary,
        )

    def to_text(self) -> str:
        parts = []
        if self.name:
            parts.append(f"Project: {self.name}")
        if self.description:
            parts.append(f"Description: {self.description}")
        requirements = [f"{role}: {count}" for role, count in self.seats_by_type.items() if count > 0]
        if requirements:
            parts.append(f"Requirements: {', '.join(requirements)}")
        if self.summary:
            parts.append(f"Project Requirements: {self.summary}")
        return ". ".join(parts)


def candidate_describing_fields_changed(
    old: CandidateEmbeddingInput,
    new: CandidateEmbeddingInput,
) -> bool:
    """True if any field feeding the candidate embedding changed; skill order is ignored."""
    return (
        sorted(old.skills) != sorted(new.skills)
        or (old.type or "") != (new.type or "")
        or (old.industry or "") != (new.industry or "")
        or (old.geo or "") != (new.geo or "")
        or old.years_of_experience != new.years_of_experience
    )


def project_describing_fields_changed(
    old: ProjectEmbeddingInput,
    new: ProjectEmbeddingInput,
) -> bool:
    """True if the description or the seats-by-role map changed."""
    return (old.description or "") != (new.description or "") or old.seats_by_type != new.seats_by_type


class EmbeddingLifecycle:
    """
    Computes and refreshes embeddings on profile and project rows.

    Failures propagate; the services decide whether to log and continue.
    """

    def __init__(self, gateway: EmbeddingGateway):
        self.gateway = gateway

    def compute_candidate_embedding(self, data: CandidateEmbeddingInput) -> list[float]:
        text = data.to_text()
        if not text:
            raise EmptyInputError("no valid profile data to generate embedding")
        return self.gateway.embed(text)

    def compute_project_embedding(self, data: ProjectEmbeddingInput) -> list[float]:
        text = data.to_text()
        if not text:
            raise EmptyInputError("no valid project data to generate embedding")
        return self.gateway.embed(text)

    def refresh_candidate_embedding(self, profile: EmployeeProfile, force: bool = False) -> bool:
        """
        Recompute a profile's embedding when forced or missing.

        Returns:
            True if a new embedding was written.
        """
        if not force and profile.embedding is not None:
            return False
        profile.embedding = self.compute_candidate_embedding(CandidateEmbeddingInput.from_profile(profile))
        logger.debug("candidate_embedding_refreshed", user_id=profile.user_id)
        return True

    def refresh_project_embedding(self, project: Project, force: bool = False) -> bool:
        """
        Recompute a project's embedding when forced or missing.

        Returns:
            True if a new embedding was written.
        """
        if not force and project.embedding is not None:
            return False
        project.embedding = self.compute_project_embedding(ProjectEmbeddingInput.from_project(project))
        logger.debug("project_embedding_refreshed", project_id=project.id)
        return True

    def refresh_candidates_batch(self, profiles: Sequence[EmployeeProfile]) -> int:
        """
        Embed several profiles with one provider call.

        Profiles with nothing to describe are skipped.

        Returns:
            Number of profiles updated.
        """
        pending = []
        texts = []
        for profile in profiles:
            text = CandidateEmbeddingInput.from_profile(profile).to_text()
            if text.strip():
                pending.append(profile)
                texts.append(text)

        if not texts:
            return 0

        for profile, embedding in zip(pending, self.gateway.embed_batch(texts)):
            profile.embedding = embedding

        logger.info("candidate_embeddings_batch_refreshed", count=len(pending))
        return len(pending)

    def refresh_projects_batch(self, projects: Sequence[Project]) -> int:
        """
        Embed several projects with one provider call.

        Returns:
            Number of projects updated.
        """
        pending = []
        texts = []
        for project in projects:
            text = ProjectEmbeddingInput.from_project(project).to_text()
            if text.strip():
                pending.append(project)
                texts.append(text)

        if not texts:
            return 0

        for project, embedding in zip(pending, self.gateway.embed_batch(texts)):
            project.embedding = embedding

        logger.info("project_embeddings_batch_refreshed", count=len(pending))
        return len(pending)
