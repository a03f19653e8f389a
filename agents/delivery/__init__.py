"""
TalentFit Notification Delivery Agent
Handles multi-channel delivery of staffing notifications.
"""
from agents.delivery.channels import (
    BaseChannel,
    InAppChannel,
    SlackChannel,
)
from agents.delivery.models import (
    DeliveryChannel,
    DeliveryStatus,
    NotificationMessage,
    NotificationType,
    Recipient,
)
from agents.delivery.orchestrator import NotificationOrchestrator

__all__ = [
    # Orchestrator
    "NotificationOrchestrator",
    # Channels
    "BaseChannel",
    "InAppChannel",
    "SlackChannel",
    # Models
    "DeliveryChannel",
    "DeliveryStatus",
    "NotificationMessage",
    "NotificationType",
    "Recipient",
]
