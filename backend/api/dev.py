"""
Developer API Endpoints
Manual triggers for exercising the notification pipeline outside production.
"""
import structlog
from fastapi import APIRouter

from backend.api.deps import AppSettings, Notifications
from backend.core.exceptions import AuthorizationError
from backend.schemas.matches import NotificationTestResponse
from backend.services.messages import dev_test_message

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/dev", tags=["Dev"])


@router.post(
    "/notifications/test",
    response_model=NotificationTestResponse,
    summary="Send a test notification",
)
def send_test_notification(settings: AppSettings, notifications: Notifications) -> NotificationTestResponse:
    """Dispatch a canned allocation-assigned message to every channel."""
    if settings.is_production:
        raise AuthorizationError("Dev endpoints are disabled in production")

    message = dev_test_message()
    results = notifications.dispatch(message)
    logger.info("dev_notification_sent", results=len(results))

    return NotificationTestResponse(
        type=message.type.value,
        results={r.channel.value: r.status for r in results},
    )
