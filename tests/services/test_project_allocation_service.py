"""
Tests for ProjectAllocationService.
"""
from datetime import date
from unittest.mock import patch

import pytest

from agents.delivery.models import NotificationType
from backend.core.exceptions import NotFoundError
from backend.models import EmployeeProfile, ProjectAllocation
from backend.schemas.staffing import AllocationCreate
from backend.services.project_allocation_service import ProjectAllocationService


MODULE = "backend.services.project_allocation_service"


@pytest.fixture
def service(mock_session_factory, mock_orchestrator):
    return ProjectAllocationService(mock_session_factory, mock_orchestrator)


@pytest.fixture
def repos(payments_project, asha, marco):
    with patch(f"{MODULE}.ProjectRepository") as project_cls, patch(
        f"{MODULE}.ProjectAllocationRepository"
    ) as alloc_cls, patch(f"{MODULE}.UserRepository") as user_cls, patch(
        f"{MODULE}.EmployeeProfileRepository"
    ) as profile_cls:
        project_cls.return_value.get_by_id.return_value = payments_project
        alloc_cls.return_value.add.side_effect = lambda a: a
        alloc_cls.return_value.get_by_project_id.return_value = []
        users = {7: asha, 12: marco}
        user_cls.return_value.get_by_id.side_effect = users.get
        yield {
            "project": project_cls.return_value,
            "allocations": alloc_cls.return_value,
            "users": user_cls.return_value,
            "profiles": profile_cls.return_value,
        }


def item(employee_id: int) -> AllocationCreate:
    return AllocationCreate(employee_id=employee_id, start_date=date(2025, 7, 1))


class TestCreateAllocations:
    def test_missing_project(self, service, repos, mock_orchestrator):
        repos["project"].get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            service.create_allocations(42, [item(7)])

        mock_orchestrator.dispatch.assert_not_called()

    def test_notifies_each_allocated_employee(self, service, repos, mock_orchestrator, mock_session):
        created = service.create_allocations(42, [item(7), item(12)])

        assert [a.employee_id for a in created] == [7, 12]
        assert all(a.allocation_type == "Billable" for a in created)
        mock_session.commit.assert_called_once()
        assert mock_orchestrator.dispatch.call_count == 2
        first = mock_orchestrator.dispatch.call_args_list[0].args[0]
        assert first.type == NotificationType.ALLOCATION_ASSIGNED
        assert first.body == "You have been allocated to project Payments Platform"
        assert first.recipients[0].slack_id == "U07ASHA"

    def test_unknown_user_not_notified(self, service, repos, mock_orchestrator):
        created = service.create_allocations(42, [item(404)])

        assert len(created) == 1
        mock_orchestrator.dispatch.assert_not_called()


class TestUpdateAllocations:
    def test_removed_employee_soft_deleted_and_freed(self, service, repos, mock_orchestrator):
        kept = ProjectAllocation(project_id=42, employee_id=7, allocation_type="Billable", start_date=date(2025, 7, 1))
        dropped = ProjectAllocation(
            project_id=42, employee_id=12, allocation_type="Billable", start_date=date(2025, 7, 1)
        )
        repos["allocations"].get_by_project_id.return_value = [kept, dropped]
        profile = EmployeeProfile(user_id=12, type="Frontend", availability_flag=False)
        repos["profiles"].get_by_user_id.return_value = profile

        result = service.update_allocations(42, [item(7)])

        assert result == [kept]
        repos["allocations"].soft_delete.assert_called_once_with(dropped)
        repos["profiles"].get_by_user_id.assert_called_once_with(12)
        assert profile.availability_flag is True
        repos["allocations"].add.assert_not_called()
        mock_orchestrator.dispatch.assert_not_called()

    def test_new_employee_created_and_notified(self, service, repos, mock_orchestrator):
        existing = ProjectAllocation(
            project_id=42, employee_id=7, allocation_type="Billable", start_date=date(2025, 7, 1)
        )
        repos["allocations"].get_by_project_id.return_value = [existing]

        result = service.update_allocations(42, [item(7), item(12)])

        assert result[0] is existing
        assert result[1].employee_id == 12
        repos["allocations"].add.assert_called_once()
        repos["allocations"].soft_delete.assert_not_called()
        mock_orchestrator.dispatch.assert_called_once()

    def test_every_allocation_of_dropped_employee_removed(self, service, repos):
        billable = ProjectAllocation(
            project_id=42, employee_id=12, allocation_type="Billable", start_date=date(2025, 7, 1)
        )
        shadow = ProjectAllocation(
            project_id=42, employee_id=12, allocation_type="Shadow", start_date=date(2025, 8, 1)
        )
        repos["allocations"].get_by_project_id.return_value = [billable, shadow]
        repos["profiles"].get_by_user_id.return_value = None

        result = service.update_allocations(42, [])

        assert result == []
        soft_deleted = [c.args[0] for c in repos["allocations"].soft_delete.call_args_list]
        assert soft_deleted == [billable, shadow]
        repos["profiles"].get_by_user_id.assert_called_once_with(12)

    def test_kept_employee_returns_all_existing_allocations(self, service, repos, mock_orchestrator):
        first = ProjectAllocation(project_id=42, employee_id=7, allocation_type="Billable", start_date=date(2025, 7, 1))
        second = ProjectAllocation(project_id=42, employee_id=7, allocation_type="Shadow", start_date=date(2025, 8, 1))
        repos["allocations"].get_by_project_id.return_value = [first, second]

        result = service.update_allocations(42, [item(7)])

        assert result == [first, second]
        repos["allocations"].soft_delete.assert_not_called()
        repos["allocations"].add.assert_not_called()
        mock_orchestrator.dispatch.assert_not_called()
