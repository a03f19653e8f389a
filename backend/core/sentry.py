"""
Sentry Error Tracking Configuration
Centralized Sentry SDK initialization for the TalentFit backend.
"""

import logging
from typing import Any

import sentry_sdk
import structlog
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

from backend.core.config import Settings

logger = structlog.get_logger(__name__)


def before_send(event: dict[str, Any], hint: dict[str, Any]) -> dict[str, Any] | None:
    """
    Process events before sending to Sentry.

    Strips credentials from request headers.
    """
    if "request" in event and "headers" in event["request"]:
        sensitive_headers = ["authorization", "cookie", "x-api-key"]
        for header in sensitive_headers:
            if header in event["request"]["headers"]:
                event["request"]["headers"][header] = "[REDACTED]"

    return event


def init_sentry(settings: Settings) -> bool:
    """
    Initialize Sentry SDK with FastAPI integration.

    Returns:
        bool: True if Sentry was initialized successfully, False otherwise.
    """
    if not settings.sentry_dsn:
        logger.info("sentry_disabled")
        return False

    try:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.sentry_environment or settings.environment,
            release=f"talentfit-backend@{settings.app_version}",
            traces_sample_rate=settings.sentry_traces_sample_rate,
            integrations=[
                FastApiIntegration(transaction_style="endpoint"),
                LoggingIntegration(
                    level=logging.INFO,
                    event_level=logging.ERROR,
                ),
                SqlalchemyIntegration(),
            ],
            before_send=before_send,
            send_default_pii=False,
            attach_stacktrace=True,
            max_breadcrumbs=50,
        )
        sentry_sdk.set_tag("service", "backend")
        sentry_sdk.set_tag("app_name", settings.app_name)

        logger.info(
            "sentry_initialized",
            environment=settings.sentry_environment or settings.environment,
            traces_sample_rate=settings.sentry_traces_sample_rate,
        )
        return True

    except Exception as e:
        logger.error("sentry_init_failed", error=str(e))
        return False


def capture_exception(
    error: Exception,
    extra: dict[str, Any] | None = None,
) -> str | None:
    """
    Capture an exception and send to Sentry.

    A no-op when the SDK was never initialized.

    Args:
        error: The exception to capture
        extra: Optional extra data to attach

    Returns:
        Event ID if captured, None otherwise
    """
    with sentry_sdk.new_scope() as scope:
        if extra:
            for key, value in extra.items():
                scope.set_extra(key, value)

        return sentry_sdk.capture_exception(error)
