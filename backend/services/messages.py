"""Builders for the notification messages raised by state transitions."""

from datetime import date, datetime, time, timezone
from typing import Iterable

from agents.delivery.models import NotificationMessage, NotificationType, Recipient
from backend.models import Project, User


def format_rfc3339(day: date) -> str:
    """Midnight UTC of the given day, e.g. 2025-06-30T00:00:00Z."""
    return datetime.combine(day, time.min, tzinfo=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def recipient_for(user: User) -> Recipient:
    return Recipient(
        user_id=user.id,
        email=user.email or "",
        slack_id=user.slack_user_id or "",
        role=user.role or "",
    )


def rolloff_alert(user_id: int, full_name: str, end_date: date) -> NotificationMessage:
    """Rolloff alert for the default destination (single empty recipient)."""
    return NotificationMessage(
        type=NotificationType.ROLLOFF_ALERT,
        subject="Employee rolling off",
        body=f"Employee {full_name} is rolling off on {end_date.isoformat()}",
        metadata={
            "employeeId": str(user_id),
            "endDate": format_rfc3339(end_date),
        },
        recipients=[Recipient()],
    )


def allocation_assigned(project: Project, user: User) -> NotificationMessage:
    return NotificationMessage(
        type=NotificationType.ALLOCATION_ASSIGNED,
        subject="New project allocation",
        body=f"You have been allocated to project {project.name}",
        metadata={
            "projectId": str(project.id),
            "employeeId": str(user.id),
        },
        recipients=[recipient_for(user)],
    )


def project_ending(project: Project, users: Iterable[User]) -> NotificationMessage:
    return NotificationMessage(
        type=NotificationType.PROJECT_ENDING,
        subject="Project ending",
        body=f"Project {project.name} is ending on {project.end_date.isoformat()}",
        metadata={
            "projectId": str(project.id),
            "endDate": format_rfc3339(project.end_date),
        },
        recipients=[recipient_for(u) for u in users],
    )


def dev_test_message() -> NotificationMessage:
    """Canned message posted by the dev trigger endpoint."""
    return NotificationMessage(
        type=NotificationType.ALLOCATION_ASSIGNED,
        subject="TalentFit Test",
        body="This is a test notification from TalentFit",
        metadata={"source": "dev-endpoint"},
        recipients=[Recipient()],
    )
