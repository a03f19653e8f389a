"""
TalentFit Notification Delivery Channels
Channel implementations for in-app notifications and Slack chat-ops.
"""
from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx
import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from agents.delivery.models import DeliveryChannel, NotificationMessage, Recipient
from backend.core.config import Settings
from backend.core.exceptions import NoDestinationError, ProviderError
from backend.models import Notification


logger = structlog.get_logger(__name__)


class BaseChannel(ABC):
    """Abstract base class for delivery channels."""

    channel: DeliveryChannel

    @abstractmethod
    def send(self, message: NotificationMessage) -> None:
        """Deliver the message; raise on failure."""
        pass

    @abstractmethod
    def is_configured(self) -> bool:
        """Check if this channel is properly configured."""
        pass


class InAppChannel(BaseChannel):
    """
    In-app notification channel.

    Persists one notifications row per recipient with a concrete user id;
    recipients without one are skipped. Each row is committed on its own
    and a failed write is logged without affecting the other recipients.
    """

    channel = DeliveryChannel.IN_APP

    def __init__(self, session_factory: sessionmaker[Session]):
        self.session_factory = session_factory
        self.logger = structlog.get_logger().bind(channel="in_app")

    def is_configured(self) -> bool:
        return True

    def send(self, message: NotificationMessage) -> None:
        rows = [
            Notification(type=message.type.value, message=message.body, user_id=r.user_id)
            for r in message.recipients
            if r.user_id
        ]
        if not rows:
            self.logger.debug("in_app_no_recipients", type=message.type.value)
            return

        created = 0
        with self.session_factory() as session:
            for row in rows:
                try:
                    session.add(row)
                    session.commit()
                except SQLAlchemyError as e:
                    session.rollback()
                    self.logger.error(
                        "in_app_notification_failed",
                        type=message.type.value,
                        user_id=row.user_id,
                        error=str(e),
                    )
                    continue
                created += 1

        self.logger.info(
            "in_app_notifications_created",
            type=message.type.value,
            count=created,
            failed=len(rows) - created,
        )


class SlackChannel(BaseChannel):
    """
    Slack chat-ops delivery channel over the Slack Web API.

    Features:
    - Direct message to each recipient's Slack member id (conversations.open)
    - Fallback to the default channel when no DM can be opened
    - Inert without a bot token: send() returns without any network call
    """

    channel = DeliveryChannel.SLACK

    def __init__(self, settings: Settings, http_client: Optional[httpx.Client] = None):
        self.bot_token = settings.slack_bot_token
        self.default_channel_id = settings.slack_default_channel_id
        self.api_base_url = settings.slack_api_base_url.rstrip("/")
        self.timeout = settings.http_timeout_seconds
        self.logger = structlog.get_logger().bind(channel="slack")
        self._http_client = http_client

    @property
    def http_client(self) -> httpx.Client:
        """Lazy-loaded HTTP client for the Slack Web API."""
        if self._http_client is None:
            self._http_client = httpx.Client(
                timeout=httpx.Timeout(self.timeout, connect=10.0),
                limits=httpx.Limits(max_keepalive_connections=5, max_connections=10),
            )
        return self._http_client

    def is_configured(self) -> bool:
        """Check if a bot token is configured."""
        return bool(self.bot_token)

    def _api_call(self, method: str, payload: dict[str, Any]) -> dict[str, Any]:
        """
        Call a Slack Web API method.

        Raises:
            ProviderError: Transport failure, non-2xx status or ok=false.
        """
        try:
            response = self.http_client.post(
                f"{self.api_base_url}/{method}",
                json=payload,
                headers={
                    "Authorization": f"Bearer {self.bot_token}",
                    "Content-Type": "application/json; charset=utf-8",
                },
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise ProviderError(f"slack {method} request failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError(f"slack {method} returned invalid JSON: {e}") from e

        if not data.get("ok"):
            raise ProviderError(f"slack {method} error: {data.get('error', 'unknown_error')}")
        return data

    def open_direct_message(self, slack_user_id: str) -> str:
        """Open (or reuse) a DM with the user and return its channel id."""
        data = self._api_call("conversations.open", {"users": slack_user_id})
        return data["channel"]["id"]

    def post_message(self, channel_id: str, text: str) -> None:
        self._api_call("chat.postMessage", {"channel": channel_id, "text": text})

    def _resolve_destination(self, recipient: Recipient) -> str:
        if recipient.slack_id:
            try:
                return self.open_direct_message(recipient.slack_id)
            except ProviderError as e:
                self.logger.warning(
                    "slack_dm_open_failed",
                    slack_id=recipient.slack_id,
                    error=str(e),
                )

        if self.default_channel_id:
            return self.default_channel_id

        raise NoDestinationError(
            f"no Slack destination for recipient {recipient.user_id or '<default>'}"
        )

    def send(self, message: NotificationMessage) -> None:
        """
        Send the message to every recipient.

        Raises:
            NoDestinationError: A recipient has no DM and there is no default channel.
        """
        if not self.is_configured():
            self.logger.debug("slack_not_configured", type=message.type.value)
            return

        text = message.text
        for recipient in message.recipients:
            channel_id = self._resolve_destination(recipient)
            try:
                self.post_message(channel_id, text)
            except ProviderError as e:
                self.logger.error(
                    "slack_send_failed",
                    channel_id=channel_id,
                    user_id=recipient.user_id,
                    error=str(e),
                )
                continue

            self.logger.info(
                "slack_message_sent",
                channel_id=channel_id,
                user_id=recipient.user_id,
                type=message.type.value,
            )

    def close(self) -> None:
        """Close the HTTP client."""
        if self._http_client is not None:
            self._http_client.close()
            self._http_client = None
