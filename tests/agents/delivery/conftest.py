"""
Delivery agent test fixtures.
"""
from unittest.mock import MagicMock

import httpx
import pytest

from agents.delivery.models import NotificationMessage, NotificationType, Recipient


def slack_response(payload: dict, status_code: int = 200) -> httpx.Response:
    """Build a Slack Web API response."""
    return httpx.Response(
        status_code,
        json=payload,
        request=httpx.Request("POST", "https://slack.com/api/test"),
    )


@pytest.fixture
def assigned_message():
    """allocation-assigned message for two concrete users."""
    return NotificationMessage(
        type=NotificationType.ALLOCATION_ASSIGNED,
        subject="New project allocation",
        body="You have been allocated to project Payments Platform",
        metadata={"projectId": "42"},
        recipients=[
            Recipient(user_id=7, email="asha.rao@example.com", slack_id="U07ASHA", role="employee"),
            Recipient(user_id=12, email="marco.bianchi@example.com", role="employee"),
        ],
    )


@pytest.fixture
def broadcast_message():
    """Message with a single empty recipient."""
    return NotificationMessage(
        type=NotificationType.ROLLOFF_ALERT,
        subject="Employee rolling off",
        body="Employee Asha Rao is rolling off on 2025-06-30",
        recipients=[Recipient()],
    )


@pytest.fixture
def slack_settings(test_settings):
    return test_settings.model_copy(
        update={"slack_bot_token": "xoxb-test", "slack_default_channel_id": "C0STAFFING"}
    )


@pytest.fixture
def mock_http_client():
    return MagicMock(spec=httpx.Client)
