"""
TalentFit Repositories
Thin SQLAlchemy persistence helpers used by the services; soft-deleted rows are never returned.
"""
from datetime import datetime, timezone
from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from backend.models import EmployeeProfile, Project, ProjectAllocation, User


class UserRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, user_id: int) -> Optional[User]:
        result = self.session.execute(
            select(User).where(User.id == user_id, User.deleted_at.is_(None))
        )
        return result.scalar_one_or_none()

    def get_by_ids(self, user_ids: Sequence[int]) -> list[User]:
        if not user_ids:
            return []
        result = self.session.execute(
            select(User).where(User.id.in_(user_ids), User.deleted_at.is_(None))
        )
        return list(result.scalars().all())


class EmployeeProfileRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_by_user_id(self, user_id: int) -> Optional[EmployeeProfile]:
        result = self.session.execute(
            select(EmployeeProfile)
            .options(selectinload(EmployeeProfile.user))
            .where(EmployeeProfile.user_id == user_id, EmployeeProfile.deleted_at.is_(None))
        )
        return result.scalar_one_or_none()

    def list_missing_embeddings(self, limit: int = 100) -> list[EmployeeProfile]:
        result = self.session.execute(
            select(EmployeeProfile)
            .where(EmployeeProfile.embedding.is_(None), EmployeeProfile.deleted_at.is_(None))
            .limit(limit)
        )
        return list(result.scalars().all())

    def add(self, profile: EmployeeProfile) -> EmployeeProfile:
        self.session.add(profile)
        self.session.flush()
        return profile


class ProjectRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, project_id: int) -> Optional[Project]:
        result = self.session.execute(
            select(Project).where(Project.id == project_id, Project.deleted_at.is_(None))
        )
        return result.scalar_one_or_none()

    def list_missing_embeddings(self, limit: int = 100) -> list[Project]:
        result = self.session.execute(
            select(Project)
            .where(Project.embedding.is_(None), Project.deleted_at.is_(None))
            .limit(limit)
        )
        return list(result.scalars().all())

    def add(self, project: Project) -> Project:
        self.session.add(project)
        self.session.flush()
        return project


class ProjectAllocationRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_by_project_id(self, project_id: int) -> list[ProjectAllocation]:
        result = self.session.execute(
            select(ProjectAllocation).where(
                ProjectAllocation.project_id == project_id,
                ProjectAllocation.deleted_at.is_(None),
            )
        )
        return list(result.scalars().all())

    def add(self, allocation: ProjectAllocation) -> ProjectAllocation:
        self.session.add(allocation)
        self.session.flush()
        return allocation

    def soft_delete(self, allocation: ProjectAllocation) -> None:
        allocation.deleted_at = datetime.now(timezone.utc)
