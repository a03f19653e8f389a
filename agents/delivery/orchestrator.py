"""
Notification Orchestrator
Fans a notification out to every registered delivery channel.
"""

from datetime import datetime, timezone
from typing import Sequence

import structlog

from agents.delivery.channels import BaseChannel
from agents.delivery.models import DeliveryStatus, NotificationMessage
from backend.core.sentry import capture_exception

logger = structlog.get_logger().bind(agent="notification_orchestrator")


class NotificationOrchestrator:
    """
    Sequential fan-out dispatch.

    Each channel is attempted independently and in registration order.
    A failing channel never stops the others and dispatch() never raises;
    the caller only gets the per-channel outcome.
    """

    def __init__(self, channels: Sequence[BaseChannel]):
        """
        Initialize orchestrator.

        Args:
            channels: Delivery channels, in dispatch order.
        """
        self.channels = list(channels)

    def dispatch(self, message: NotificationMessage) -> list[DeliveryStatus]:
        """
        Deliver a message through every channel.

        Args:
            message: Notification to deliver.

        Returns:
            One DeliveryStatus per channel.
        """
        results: list[DeliveryStatus] = []

        for channel in self.channels:
            status = DeliveryStatus(channel=channel.channel)

            if not channel.is_configured():
                status.status = "skipped"
                results.append(status)
                continue

            try:
                channel.send(message)
            except Exception as e:
                status.status = "failed"
                status.error_message = str(e)
                logger.error(
                    "notification_delivery_failed",
                    channel=channel.channel.value,
                    type=message.type.value,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                capture_exception(e, extra={"channel": channel.channel.value, "type": message.type.value})
            else:
                status.status = "sent"
                status.sent_at = datetime.now(timezone.utc)

            results.append(status)

        logger.info(
            "notification_dispatched",
            type=message.type.value,
            recipients=len(message.recipients),
            results={r.channel.value: r.status for r in results},
        )
        return results
