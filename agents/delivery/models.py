"""
TalentFit Notification Delivery Models
Pydantic models for notification payloads and delivery tracking.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class NotificationType(str, Enum):
    """State transitions that produce notifications."""

    ROLLOFF_ALERT = "rolloff-alert"
    PROJECT_ENDING = "project-ending"
    ALLOCATION_ASSIGNED = "allocation-assigned"
    PROJECT_GAP = "project-gap"
    ALLOCATION_SUGGESTION = "allocation-suggestion"


class DeliveryChannel(str, Enum):
    """Available delivery channels."""

    IN_APP = "in_app"
    SLACK = "slack"


class Recipient(BaseModel):
    """
    Notification recipient.

    user_id 0 means no concrete user; channels that support it fall
    back to a default destination.
    """

    user_id: int = 0
    email: str = ""
    slack_id: str = ""
    role: str = ""


class NotificationMessage(BaseModel):
    """Channel-agnostic notification handed to the orchestrator."""

    type: NotificationType
    subject: str
    body: str
    metadata: dict[str, str] = Field(default_factory=dict)
    recipients: list[Recipient] = Field(default_factory=list)

    @property
    def text(self) -> str:
        """Plain-text rendering used by chat-ops channels."""
        return f"{self.subject}\n{self.body}"


class DeliveryStatus(BaseModel):
    """Outcome of one channel's delivery attempt."""

    channel: DeliveryChannel
    status: str = "pending"  # pending, sent, skipped, failed
    sent_at: Optional[datetime] = None
    error_message: Optional[str] = None
